"""Match data shared between the retriever and the formatters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Tuple


class GameMode(str, Enum):
    """Game modes eligible for judging, as reported by match-v5 ``info.gameMode``."""

    CLASSIC = "CLASSIC"
    ARAM = "ARAM"


@dataclass(frozen=True)
class Participant:
    """One tracked player's statistics for a single match."""

    summoner_name: str
    discord_name: str
    champion_name: str
    team_position: str
    kills: int
    deaths: int
    assists: int
    gold_earned: int
    total_minions_killed: int
    total_damage_dealt_to_champions: int
    vision_score: int

    @classmethod
    def from_api(cls, payload: Mapping[str, Any], summoner_name: str, discord_name: str) -> "Participant":
        return cls(
            summoner_name=summoner_name,
            discord_name=discord_name,
            champion_name=payload.get("championName", ""),
            team_position=payload.get("teamPosition", ""),
            kills=int(payload.get("kills", 0)),
            deaths=int(payload.get("deaths", 0)),
            assists=int(payload.get("assists", 0)),
            gold_earned=int(payload.get("goldEarned", 0)),
            total_minions_killed=int(payload.get("totalMinionsKilled", 0)),
            total_damage_dealt_to_champions=int(payload.get("totalDamageDealtToChampions", 0)),
            vision_score=int(payload.get("visionScore", 0)),
        )


@dataclass(frozen=True)
class Match:
    """A match that at least two tracked players took part in."""

    id: str
    start_time: datetime
    game_mode: GameMode
    is_victory: bool
    participants: Tuple[Participant, ...]
