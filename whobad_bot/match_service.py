"""Business logic for finding the most recent match friends played together."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set, Tuple, TypeVar

from .config import BotConfig
from .models import GameMode, Match, Participant
from .riot_client import RiotApiError, RiotClient

logger = logging.getLogger(__name__)

SECONDS_IN_DAY = 60 * 60 * 24
LOOKBACK_BUFFER_SECONDS = 60 * 60
MIN_TRACKED_PARTICIPANTS = 2

T = TypeVar("T")
R = TypeVar("R")


class RetrievalError(RuntimeError):
    """Raised when no candidate match could be fetched at all."""


class MatchDataError(ValueError):
    """Raised when a match payload cannot be turned into a :class:`Match`."""


def _fan_out(
    func: Callable[[T], R], items: Iterable[T], errors: Tuple[type, ...]
) -> List[Tuple[T, Optional[R], Optional[BaseException]]]:
    """Run ``func`` over ``items`` concurrently and collect every outcome.

    Exceptions listed in ``errors`` are captured per item instead of raised.
    """

    items = list(items)
    if not items:
        return []

    def call(item: T) -> Tuple[T, Optional[R], Optional[BaseException]]:
        try:
            return item, func(item), None
        except errors as exc:
            return item, None, exc

    with ThreadPoolExecutor(max_workers=len(items)) as executor:
        return list(executor.map(call, items))


def _roster_names(participant: Mapping[str, Any]) -> List[str]:
    """Names a roster entry may be tracked under, most specific first."""

    names = [participant.get("summonerName") or ""]
    game_name = participant.get("riotIdGameName")
    if game_name:
        tag_line = participant.get("riotIdTagline")
        if tag_line:
            names.append(f"{game_name}#{tag_line}")
        names.append(game_name)
    return [name for name in names if name]


def _to_local_time(timestamp_ms: Any) -> datetime:
    try:
        return datetime.fromtimestamp(int(timestamp_ms) / 1000).astimezone()
    except (TypeError, ValueError, OverflowError, OSError) as exc:
        raise MatchDataError(f"Failed to parse timestamp {timestamp_ms!r}") from exc


def build_match(
    match_id: str, payload: Mapping[str, Any], tracked: Mapping[str, str]
) -> Optional[Match]:
    """Turn a match-v5 payload into a :class:`Match`.

    Returns ``None`` if the match does not satisfy the requirements:

    - The game mode must be ``CLASSIC`` or ``ARAM``.
    - At least two tracked players must have participated.

    Args:
        match_id: Identifier the payload was fetched with.
        payload: Decoded match-v5 response.
        tracked: Tracked summoner names mapped to discord display names.

    Raises:
        MatchDataError: If the payload is malformed or its start time is
            not a valid local time.
    """

    try:
        info = payload["info"]
        raw_mode = info["gameMode"]
        roster = info["participants"]
        teams = info.get("teams", [])
    except (AttributeError, KeyError, TypeError) as exc:
        raise MatchDataError(f"Match {match_id} is missing field {exc}") from exc

    if not isinstance(raw_mode, str):
        raise MatchDataError(f"Match {match_id} has invalid game mode {raw_mode!r}")
    try:
        game_mode = GameMode(raw_mode)
    except ValueError:
        return None

    participants: List[Participant] = []
    team_id = None
    try:
        for entry in roster:
            name = next((n for n in _roster_names(entry) if n in tracked), None)
            if name is None:
                continue
            team_id = entry.get("teamId")
            participants.append(Participant.from_api(entry, name, tracked[name]))
    except (AttributeError, TypeError, ValueError) as exc:
        raise MatchDataError(f"Match {match_id} has a malformed participant: {exc}") from exc

    if len(participants) < MIN_TRACKED_PARTICIPANTS:
        return None

    # Falls back to a defeat when no team entry matches the tracked players' team.
    try:
        is_victory = next(
            (bool(team.get("win")) for team in teams if team.get("teamId") == team_id),
            False,
        )
    except (AttributeError, TypeError) as exc:
        raise MatchDataError(f"Match {match_id} has malformed teams: {exc}") from exc

    return Match(
        id=match_id,
        start_time=_to_local_time(info.get("gameStartTimestamp")),
        game_mode=game_mode,
        is_victory=is_victory,
        participants=tuple(participants),
    )


@dataclass
class MatchService:
    """High-level operations for retrieving tracked players' matches."""

    client: RiotClient
    config: BotConfig
    clock: Callable[[], float] = time.time

    def lookback_start(self) -> int:
        """Epoch seconds of the oldest match start considered."""

        return int(self.clock()) - SECONDS_IN_DAY - LOOKBACK_BUFFER_SECONDS

    def get_match_ids_of_player(self, summoner_name: str) -> List[str]:
        logger.info("Getting matches for %s", summoner_name)
        puuid = self.client.get_puuid(summoner_name)
        return self.client.get_match_ids(
            puuid, start_time=self.lookback_start(), count=self.config.riot.match_count
        )

    def get_relevant_match_ids(self) -> Set[str]:
        """Union of recent match ids over every tracked player.

        A player whose lookup fails contributes nothing.
        """

        names = [player.summoner_name for player in self.config.players]
        match_ids: Set[str] = set()
        for name, ids, error in _fan_out(self.get_match_ids_of_player, names, (RiotApiError,)):
            if error is not None:
                logger.warning("Failed to get match ids for %s: %s", name, error)
                continue
            match_ids.update(ids)
        return match_ids

    def process_match(self, match_id: str) -> Optional[Match]:
        logger.info("Processing match %s", match_id)
        payload = self.client.get_match(match_id)
        return build_match(match_id, payload, self.config.discord_names())

    def get_most_recent_match(self) -> Optional[Match]:
        """Return the most recent match at least two tracked players played.

        See :func:`build_match` for the requirements.

        Raises:
            RetrievalError: If candidate matches existed but none of them
                could be fetched.
        """

        match_ids = self.get_relevant_match_ids()
        logger.info("Found %d relevant matches", len(match_ids))

        outcomes = _fan_out(self.process_match, sorted(match_ids), (RiotApiError, MatchDataError))
        matches: List[Match] = []
        failures: Dict[str, BaseException] = {}
        for match_id, match, error in outcomes:
            if error is not None:
                logger.warning("Failed to process match %s: %s", match_id, error)
                failures[match_id] = error
            elif match is not None:
                matches.append(match)

        if outcomes and len(failures) == len(outcomes):
            raise RetrievalError(
                f"all {len(failures)} candidate matches failed to load"
            )

        return max(matches, key=lambda m: m.start_time, default=None)
