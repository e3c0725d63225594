"""Tests for the /whobad command handler."""

from __future__ import annotations

import asyncio
from unittest import mock

from helpers import FakeRiotClient, make_config, make_match, match_payload
from whobad_bot.commands import (
    PLACEHOLDER_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    build_game_comment,
    respond_with_comment,
    split_message,
)
from whobad_bot.formatting import format_compact, format_verbose
from whobad_bot.gemini_client import CommentaryError
from whobad_bot.match_service import MatchService, RetrievalError
from whobad_bot.riot_client import RiotApiError


class StubService:
    def __init__(self, match=None, error=None):
        self.match = match
        self.error = error

    def get_most_recent_match(self):
        if self.error is not None:
            raise self.error
        return self.match


class StubCommentary:
    def __init__(self, answer="Bob was the worst.", error=None):
        self.answer = answer
        self.error = error
        self.prompts = []

    def ask_commentary(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


class TestBuildGameComment:
    def test_success_joins_compact_rendering_and_commentary(self):
        match = make_match()
        commentary = StubCommentary()

        reply = build_game_comment(StubService(match), commentary)

        assert reply == f"{format_compact(match)}\nBob was the worst."
        assert len(commentary.prompts) == 1
        assert format_verbose(match) in commentary.prompts[0]

    def test_no_match_skips_commentary(self):
        commentary = StubCommentary()

        assert build_game_comment(StubService(None), commentary) == "No recent match found."
        assert commentary.prompts == []

    def test_retrieval_failure(self):
        reply = build_game_comment(StubService(error=RetrievalError("all failed")), StubCommentary())

        assert reply == "Failed to get most recent match: all failed"

    def test_commentary_failure(self):
        reply = build_game_comment(
            StubService(make_match()), StubCommentary(error=CommentaryError("no candidates"))
        )

        assert reply == "AI failed to analyze the result: no candidates"


class TestEndToEnd:
    def test_shared_match_survives_one_failed_lookup(self):
        client = FakeRiotClient(
            {"Alice": ["NA1_9"], "Bob": RiotApiError("not found"), "Carol": ["NA1_9"]},
            {"NA1_9": match_payload(["Alice", "Stranger", "Carol"])},
        )
        service = MatchService(client=client, config=make_config("Alice", "Bob", "Carol"))
        match = service.get_most_recent_match()

        reply = build_game_comment(service, StubCommentary("Carol, obviously."))

        assert match is not None
        assert [p.summoner_name for p in match.participants] == ["Alice", "Carol"]
        assert reply == f"{format_compact(match)}\nCarol, obviously."

    def test_no_matches_in_window(self):
        client = FakeRiotClient({"Alice": [], "Bob": [], "Carol": []})
        service = MatchService(client=client, config=make_config("Alice", "Bob", "Carol"))
        commentary = StubCommentary()

        assert build_game_comment(service, commentary) == "No recent match found."
        assert commentary.prompts == []


def make_interaction():
    interaction = mock.Mock()
    interaction.response.send_message = mock.AsyncMock()
    interaction.followup.send = mock.AsyncMock()
    return interaction


class TestRespondWithComment:
    def test_acknowledges_then_replies_once(self):
        interaction = make_interaction()

        asyncio.run(respond_with_comment(interaction, StubService(None), StubCommentary()))

        interaction.response.send_message.assert_awaited_once_with(PLACEHOLDER_MESSAGE)
        interaction.followup.send.assert_awaited_once_with("No recent match found.")

    def test_unexpected_error_still_replies(self):
        interaction = make_interaction()

        asyncio.run(
            respond_with_comment(interaction, StubService(error=KeyError("boom")), StubCommentary())
        )

        interaction.followup.send.assert_awaited_once_with(UNEXPECTED_ERROR_MESSAGE)

    def test_long_reply_is_split(self):
        interaction = make_interaction()
        commentary = StubCommentary("x" * 2500)

        asyncio.run(respond_with_comment(interaction, StubService(make_match()), commentary))

        sent = [call.args[0] for call in interaction.followup.send.await_args_list]
        assert len(sent) > 1
        assert all(len(chunk) <= 2000 for chunk in sent)
        assert "".join(sent) == f"{format_compact(make_match())}\n{'x' * 2500}"


class TestSplitMessage:
    def test_short_text_is_untouched(self):
        assert split_message("hello\nworld") == ["hello\nworld"]

    def test_keeps_lines_whole(self):
        text = "a" * 6 + "\n" + "b" * 6 + "\n" + "c" * 3

        assert split_message(text, limit=10) == ["aaaaaa\n", "bbbbbb\nccc"]

    def test_breaks_overlong_line(self):
        assert split_message("z" * 25, limit=10) == ["z" * 10, "z" * 10, "z" * 5]
