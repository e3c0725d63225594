"""Text renderings of a :class:`Match`.

The verbose rendering is handed to the language model, the compact one is
shown in discord.
"""

from __future__ import annotations

from typing import List

from .models import GameMode, Match, Participant

TIME_FORMAT = "%Y/%m/%d %H:%M"


def _result(match: Match) -> str:
    return "Victory" if match.is_victory else "Defeat"


def _verbose_participant(participant: Participant, game_mode: GameMode) -> str:
    aram = game_mode == GameMode.ARAM
    lines = [
        f"{participant.summoner_name}:",
        f"  Champion: {participant.champion_name}",
    ]
    if not aram:
        lines.append(f"  Position: {participant.team_position}")
    lines += [
        f"  Kills: {participant.kills}",
        f"  Deaths: {participant.deaths}",
        f"  Assists: {participant.assists}",
        f"  Gold: {participant.gold_earned}",
        f"  CS: {participant.total_minions_killed}",
        f"  Damage to Champions: {participant.total_damage_dealt_to_champions}",
    ]
    if not aram:
        lines.append(f"  Vision Score: {participant.vision_score}")
    return "\n".join(lines) + "\n"


def _compact_participant(participant: Participant, game_mode: GameMode) -> str:
    aram = game_mode == GameMode.ARAM
    first = f"  Champion: {participant.champion_name}"
    if not aram:
        first += f", Position: {participant.team_position}"
    first += f", KDA: {participant.kills}/{participant.deaths}/{participant.assists}"

    second = (
        f"  Gold: {participant.gold_earned}, CS: {participant.total_minions_killed}"
        f", Damage to Champions: {participant.total_damage_dealt_to_champions}"
    )
    if not aram:
        second += f", Vision Score: {participant.vision_score}"
    return f"{participant.summoner_name}:\n{first}\n{second}"


def format_verbose(match: Match) -> str:
    lines: List[str] = [
        f"Game Mode: {match.game_mode.value}\n",
        f"Game Result: {_result(match)}\n",
        "\n".join(_verbose_participant(p, match.game_mode) for p in match.participants),
    ]
    return "\n".join(lines) + "\n"


def format_compact(match: Match) -> str:
    header = (
        f"Game Mode: {match.game_mode.value}, Time: {match.start_time.strftime(TIME_FORMAT)}"
        f", Result: {_result(match)}"
    )
    body = "\n".join(_compact_participant(p, match.game_mode) for p in match.participants)
    return f"{header}\n{body}\n"


def format_match(match: Match, verbose: bool) -> str:
    """Render ``match`` for the language model (``verbose``) or for display."""

    return format_verbose(match) if verbose else format_compact(match)
