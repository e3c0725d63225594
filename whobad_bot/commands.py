"""Discord side of the bot: the ``/whobad`` slash command."""

from __future__ import annotations

import asyncio
import logging
from typing import List, Protocol

import discord
from discord import app_commands

from .config import BotConfig
from .formatting import format_match
from .gemini_client import CommentaryError
from .match_service import RetrievalError
from .models import Match
from .prompts import build_prompt

logger = logging.getLogger(__name__)

DISCORD_MESSAGE_LIMIT = 2000
PLACEHOLDER_MESSAGE = "fetching..."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong while judging the last match."


class MatchSource(Protocol):
    def get_most_recent_match(self) -> Match | None: ...


class CommentarySource(Protocol):
    def ask_commentary(self, prompt: str) -> str: ...


def build_game_comment(service: MatchSource, commentary: CommentarySource) -> str:
    """Get the most recent match at least two friends played and ask Gemini who was the worst."""

    try:
        match = service.get_most_recent_match()
    except RetrievalError as exc:
        return f"Failed to get most recent match: {exc}"
    if match is None:
        return "No recent match found."

    try:
        judgment = commentary.ask_commentary(build_prompt(format_match(match, verbose=True)))
    except CommentaryError as exc:
        return f"AI failed to analyze the result: {exc}"

    return f"{format_match(match, verbose=False)}\n{judgment}"


def split_message(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> List[str]:
    """Split ``text`` into chunks of at most ``limit`` characters.

    Lines are kept whole unless a single line exceeds the limit.
    """

    chunks: List[str] = []
    current = ""
    for line in text.splitlines(keepends=True):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]
        if len(current) + len(line) > limit:
            chunks.append(current)
            current = ""
        current += line
    if current:
        chunks.append(current)
    return chunks


async def respond_with_comment(
    interaction: discord.Interaction, service: MatchSource, commentary: CommentarySource
) -> None:
    # Discord requires a response within 3 seconds, so acknowledge first.
    await interaction.response.send_message(PLACEHOLDER_MESSAGE)
    try:
        reply = await asyncio.to_thread(build_game_comment, service, commentary)
    except Exception:
        logger.exception("Unexpected failure while building the game comment")
        reply = UNEXPECTED_ERROR_MESSAGE
    for chunk in split_message(reply):
        await interaction.followup.send(chunk)


class WhobadBot(discord.Client):
    """Discord client that serves the ``/whobad`` command to configured guilds."""

    def __init__(
        self, config: BotConfig, service: MatchSource, commentary: CommentarySource
    ) -> None:
        super().__init__(intents=discord.Intents.default())
        self.config = config
        self.service = service
        self.commentary = commentary
        self.tree = app_commands.CommandTree(self)
        self.tree.add_command(self._build_command())

    def _build_command(self) -> app_commands.Command:
        @app_commands.command(
            name="whobad",
            description="Let a perfectly accurate AI find who lost the last game for you",
        )
        async def whobad(interaction: discord.Interaction) -> None:
            logger.info("/whobad invoked by %s", interaction.user)
            await respond_with_comment(interaction, self.service, self.commentary)

        return whobad

    async def setup_hook(self) -> None:
        for guild_id in self.config.discord.guild_ids:
            guild = discord.Object(id=guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info("Registered %d command(s) in guild %s", len(synced), guild_id)

    async def on_ready(self) -> None:
        logger.info("Logged in as %s", self.user)
