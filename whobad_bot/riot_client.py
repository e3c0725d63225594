"""HTTP client utilities for communicating with the Riot Games API."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, MutableMapping, Optional
from urllib.parse import quote

import requests

from .config import RiotConfig

logger = logging.getLogger(__name__)


class RiotApiError(RuntimeError):
    """Raised when the Riot API returns an error response."""


@dataclass
class RiotClient:
    """Lightweight Riot API client."""

    config: RiotConfig
    timeout: float = 30

    def _build_headers(self) -> Dict[str, str]:
        return {"Accept": "application/json", "X-Riot-Token": self.config.api_key}

    def get(
        self, host: str, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Perform a GET request against the Riot API.

        Args:
            host: Base URL, either the platform or the regional route.
            path: API path, e.g. "/lol/match/v5/matches/{match_id}".
            params: Optional query parameters to include in the request.

        Returns:
            Parsed JSON response.

        Raises:
            RiotApiError: If the request fails or returns an error status.
        """

        url = f"{host.rstrip('/')}/{path.lstrip('/')}"
        with requests.Session() as session:
            session.trust_env = False
            try:
                response = session.get(
                    url, headers=self._build_headers(), params=params, timeout=self.timeout
                )
            except requests.RequestException as exc:
                logger.debug("GET %s failed: %s", url, exc)
                raise RiotApiError(f"Riot API request failed: {exc}") from exc
        if response.status_code >= 400:
            logger.debug("GET %s returned %s", url, response.status_code)
            raise RiotApiError(
                f"Riot API request failed with status {response.status_code}: {response.text}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise RiotApiError(f"Riot API returned invalid JSON: {exc}") from exc

    def get_puuid(self, player_name: str) -> str:
        """Resolve a player name to its PUUID.

        A ``GameName#TAG`` Riot ID goes through account-v1, a bare summoner
        name through summoner-v4.
        """

        if "#" in player_name:
            game_name, _, tag_line = player_name.partition("#")
            account = self.get(
                self.config.regional_url,
                "riot/account/v1/accounts/by-riot-id/"
                f"{quote(game_name, safe='')}/{quote(tag_line, safe='')}",
            )
        else:
            account = self.get(
                self.config.platform_url,
                f"lol/summoner/v4/summoners/by-name/{quote(player_name, safe='')}",
            )
        puuid = account.get("puuid") if isinstance(account, dict) else None
        if not puuid:
            raise RiotApiError(f"Player {player_name!r} not found")
        return puuid

    def get_match_ids(
        self, puuid: str, *, start_time: Optional[int] = None, count: Optional[int] = None
    ) -> List[str]:
        """Fetch recent match ids for a player.

        Args:
            puuid: Target player identifier.
            start_time: Optional lower bound, epoch seconds.
            count: Optional maximum number of ids to return.
        """

        params: Dict[str, Any] = {}
        if start_time is not None:
            params["startTime"] = start_time
        if count is not None:
            params["count"] = count
        return list(
            self.get(
                self.config.regional_url,
                f"lol/match/v5/matches/by-puuid/{puuid}/ids",
                params=params,
            )
        )

    def get_match(self, match_id: str) -> MutableMapping[str, Any]:
        """Fetch full details for a match."""

        return self.get(self.config.regional_url, f"lol/match/v5/matches/{match_id}")
