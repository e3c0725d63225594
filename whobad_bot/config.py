"""Configuration objects and helpers for the whobad bot project."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple, Union

DEFAULT_CONFIG_PATH = "config.toml"


class ConfigError(ValueError):
    """Raised when the config file is missing, malformed or incomplete."""


@dataclass(frozen=True)
class RiotConfig:
    """Configuration for accessing the Riot Games API."""

    api_key: str
    platform_route: str = "na1"
    regional_route: str = "americas"
    match_count: int = 5

    @property
    def platform_url(self) -> str:
        return f"https://{self.platform_route}.api.riotgames.com"

    @property
    def regional_url(self) -> str:
        return f"https://{self.regional_route}.api.riotgames.com"


@dataclass(frozen=True)
class GeminiConfig:
    """Configuration for accessing the Gemini generative language API."""

    api_key: str
    model: str = "gemini-2.0-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"


@dataclass(frozen=True)
class DiscordConfig:
    """Discord credentials and the guilds the command is registered to."""

    token: str
    guild_ids: Tuple[int, ...] = ()


@dataclass(frozen=True)
class TrackedPlayer:
    """A friend whose matches are tracked.

    ``summoner_name`` is the in-game name without the region tag, or a Riot ID
    in ``GameName#TAG`` form.
    """

    summoner_name: str
    discord_name: str


@dataclass(frozen=True)
class BotConfig:
    """Aggregate configuration for the bot."""

    riot: RiotConfig
    gemini: GeminiConfig
    discord: DiscordConfig
    players: Tuple[TrackedPlayer, ...] = field(default_factory=tuple)

    def discord_names(self) -> Dict[str, str]:
        """Map each tracked summoner name to its discord display name."""

        return {player.summoner_name: player.discord_name for player in self.players}


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        raise ConfigError(f"Missing required config key: {key!r}")
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Config key {key!r} must be a non-empty string")
    return value


def _optional_str(data: Mapping[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Config key {key!r} must be a non-empty string")
    return value


def _parse_players(raw: Any) -> Tuple[TrackedPlayer, ...]:
    if raw is None:
        raise ConfigError("Missing required config key: 'players'")
    if not isinstance(raw, list):
        raise ConfigError("Config key 'players' must be an array of tables")

    players: List[TrackedPlayer] = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"players[{index}] must be a table")
        try:
            players.append(
                TrackedPlayer(
                    summoner_name=_require_str(entry, "summoner_name"),
                    discord_name=_require_str(entry, "discord_name"),
                )
            )
        except ConfigError as exc:
            raise ConfigError(f"players[{index}]: {exc}") from exc
    return tuple(players)


def _parse_guild_ids(raw: Any) -> Tuple[int, ...]:
    if raw is None:
        raise ConfigError("Missing required config key: 'guild_ids'")
    if not isinstance(raw, list):
        raise ConfigError("Config key 'guild_ids' must be an array of integers")
    # bool is an int subclass; reject it explicitly.
    if any(isinstance(guild_id, bool) or not isinstance(guild_id, int) for guild_id in raw):
        raise ConfigError("Config key 'guild_ids' must only contain integers")
    return tuple(raw)


def parse_config(data: Mapping[str, Any]) -> BotConfig:
    """Build a :class:`BotConfig` from an already decoded TOML document.

    Raises:
        ConfigError: If a required key is missing or has the wrong type.
    """

    match_count = data.get("match_count", 5)
    if isinstance(match_count, bool) or not isinstance(match_count, int) or match_count < 1:
        raise ConfigError("Config key 'match_count' must be a positive integer")

    return BotConfig(
        riot=RiotConfig(
            api_key=_require_str(data, "riot_apikey"),
            platform_route=_optional_str(data, "riot_platform", "na1"),
            regional_route=_optional_str(data, "riot_region", "americas"),
            match_count=match_count,
        ),
        gemini=GeminiConfig(
            api_key=_require_str(data, "gemini_apikey"),
            model=_optional_str(data, "gemini_model", "gemini-2.0-flash"),
        ),
        discord=DiscordConfig(
            token=_require_str(data, "discord_token"),
            guild_ids=_parse_guild_ids(data.get("guild_ids")),
        ),
        players=_parse_players(data.get("players")),
    )


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> BotConfig:
    """Read and parse the TOML config file at ``path``.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """

    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    return parse_config(data)
