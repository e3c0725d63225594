"""Payload builders and fakes shared by the whobad bot tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from whobad_bot.config import BotConfig, DiscordConfig, GeminiConfig, RiotConfig, TrackedPlayer
from whobad_bot.models import GameMode, Match, Participant
from whobad_bot.riot_client import RiotApiError


def make_config(*names: str) -> BotConfig:
    return BotConfig(
        riot=RiotConfig(api_key="riot-key"),
        gemini=GeminiConfig(api_key="gemini-key"),
        discord=DiscordConfig(token="discord-token", guild_ids=(1,)),
        players=tuple(TrackedPlayer(name, f"discord_{name}") for name in names),
    )


def participant_payload(name: str, team_id: int = 100, **stats: Any) -> Dict[str, Any]:
    payload = {
        "summonerName": name,
        "teamId": team_id,
        "championName": f"{name}Champ",
        "teamPosition": "MIDDLE",
        "kills": 1,
        "deaths": 2,
        "assists": 3,
        "goldEarned": 9000,
        "totalMinionsKilled": 150,
        "totalDamageDealtToChampions": 20000,
        "visionScore": 25,
    }
    payload.update(stats)
    return payload


def match_payload(
    names: List[str],
    *,
    game_mode: str = "CLASSIC",
    start_ms: int = 1_700_000_000_000,
    winner: Optional[int] = 100,
    team_id: int = 100,
) -> Dict[str, Any]:
    roster = [participant_payload(name, team_id=team_id) for name in names]
    teams = [
        {"teamId": 100, "win": winner == 100},
        {"teamId": 200, "win": winner == 200},
    ]
    return {
        "metadata": {"matchId": "NA1_1"},
        "info": {
            "gameMode": game_mode,
            "gameStartTimestamp": start_ms,
            "participants": roster,
            "teams": teams,
        },
    }


def make_match(game_mode: str = "CLASSIC", is_victory: bool = True) -> Match:
    participants = tuple(
        Participant(
            summoner_name=name,
            discord_name=f"discord_{name}",
            champion_name=champion,
            team_position=position,
            kills=kills,
            deaths=deaths,
            assists=assists,
            gold_earned=gold,
            total_minions_killed=cs,
            total_damage_dealt_to_champions=damage,
            vision_score=vision,
        )
        for name, champion, position, kills, deaths, assists, gold, cs, damage, vision in [
            ("Alice", "Ahri", "MIDDLE", 10, 2, 7, 12000, 210, 30000, 18),
            ("Bob", "Garen", "TOP", 1, 9, 3, 7000, 140, 9000, 4),
        ]
    )
    return Match(
        id="NA1_42",
        start_time=datetime(2024, 3, 5, 21, 7, tzinfo=timezone.utc),
        game_mode=GameMode(game_mode),
        is_victory=is_victory,
        participants=participants,
    )


class FakeRiotClient:
    """In-memory stand-in for :class:`RiotClient`."""

    def __init__(
        self,
        match_ids: Dict[str, Any],
        matches: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.match_ids = match_ids
        self.matches = matches or {}
        self.requested_matches: List[str] = []
        self.id_requests: List[Dict[str, Any]] = []

    def get_puuid(self, player_name: str) -> str:
        result = self.match_ids.get(player_name)
        if isinstance(result, Exception):
            raise result
        if result is None:
            raise RiotApiError(f"Player {player_name!r} not found")
        return f"puuid-{player_name}"

    def get_match_ids(self, puuid: str, *, start_time=None, count=None) -> List[str]:
        self.id_requests.append({"puuid": puuid, "start_time": start_time, "count": count})
        return list(self.match_ids[puuid.removeprefix("puuid-")])

    def get_match(self, match_id: str) -> Dict[str, Any]:
        self.requested_matches.append(match_id)
        result = self.matches[match_id]
        if isinstance(result, Exception):
            raise result
        return result
