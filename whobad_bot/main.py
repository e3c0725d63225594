"""Entry point for running the whobad discord bot."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

import discord

from .commands import WhobadBot
from .config import DEFAULT_CONFIG_PATH, BotConfig, ConfigError, load_config
from .gemini_client import GeminiClient
from .match_service import MatchService
from .riot_client import RiotClient

logger = logging.getLogger(__name__)


def create_bot(config: BotConfig) -> WhobadBot:
    """Wire the API clients and the match service into a discord client."""

    service = MatchService(client=RiotClient(config.riot), config=config)
    return WhobadBot(config, service=service, commentary=GeminiClient(config.gemini))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Discord bot that finds who lost the last game.")
    parser.add_argument(
        "--config",
        default=os.environ.get("WHOBAD_CONFIG", DEFAULT_CONFIG_PATH),
        help="Path to the TOML config file (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        logger.error("Failed to parse config: %s", exc)
        return 1

    bot = create_bot(config)
    try:
        bot.run(config.discord.token, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Discord login failed: %s", exc)
        return 1
    except discord.DiscordException:
        logger.exception("Client error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
