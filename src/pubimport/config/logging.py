"""Logging setup for the pubimport command line."""

from __future__ import annotations

import logging
from typing import Final

from .env import env_choice

LOG_LEVEL_ENV: Final[str] = "PUBIMPORT_LOG_LEVEL"
LOG_LEVELS: Final[dict[str, int]] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# loggers that report every request at INFO
_CHATTY_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore", "hishel")


def resolve_log_level(level: int | None = None) -> int:
    """Return ``level`` or the level named by ``PUBIMPORT_LOG_LEVEL`` (default INFO)."""

    if level is not None:
        return level
    return LOG_LEVELS[env_choice(LOG_LEVEL_ENV, LOG_LEVELS, "info")]


def configure_logging(*, level: int | None = None, force: bool = False) -> int:
    """Configure the root logger for CLI output and return the level in effect.

    Transport loggers stay at WARNING unless pubimport itself runs at DEBUG, so a
    normal import only shows per-site progress and the summary.
    """

    resolved = resolve_log_level(level)
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved, logging.WARNING))
    return resolved
