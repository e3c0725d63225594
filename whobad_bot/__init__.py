"""Whobad discord bot package."""

from .config import BotConfig, ConfigError, DiscordConfig, GeminiConfig, RiotConfig, TrackedPlayer, load_config
from .gemini_client import CommentaryError, GeminiClient
from .match_service import MatchDataError, MatchService, RetrievalError
from .models import GameMode, Match, Participant
from .riot_client import RiotApiError, RiotClient

__all__ = [
    "BotConfig",
    "CommentaryError",
    "ConfigError",
    "DiscordConfig",
    "GameMode",
    "GeminiClient",
    "GeminiConfig",
    "Match",
    "MatchDataError",
    "MatchService",
    "Participant",
    "RetrievalError",
    "RiotApiError",
    "RiotClient",
    "RiotConfig",
    "TrackedPlayer",
    "load_config",
]
