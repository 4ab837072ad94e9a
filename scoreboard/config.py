"""Settings loaded from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


def _parse_emails(raw: str | None) -> frozenset[str]:
    """Parse comma/space/newline separated e-mails, lower-cased."""
    if not raw:
        return frozenset()
    return frozenset(
        part.strip().strip("'\"").lower()
        for part in re.split(r"[,\s]+", raw)
        if part.strip().strip("'\"")
    )


def _parse_log_level(raw: str | None) -> int:
    name = (raw or "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise RuntimeError(f"Invalid log level for SCOREBOARD_LOG_LEVEL: {raw!r}")
    return level


@dataclass(frozen=True)
class Settings:
    """Runtime configuration.

    Attributes:
        data_file: JSON file holding players and scores; None keeps
            everything in memory.
        allowed_users: E-mails allowed to submit times and edit the roster.
        admin_token: Secret required to grant write access at runtime;
            None disables granting.
        log_level: Level applied to the ``scoreboard`` logger.
    """

    data_file: Path | None = None
    allowed_users: frozenset[str] = field(default_factory=frozenset)
    admin_token: str | None = None
    log_level: int = logging.INFO


def load_settings(env: dict[str, str] | None = None) -> Settings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    data_file = (env.get("SCOREBOARD_DATA_FILE") or "").strip()
    admin_token = (env.get("SCOREBOARD_ADMIN_TOKEN") or "").strip()
    return Settings(
        data_file=Path(data_file) if data_file else None,
        allowed_users=_parse_emails(env.get("SCOREBOARD_ALLOWED_USERS")),
        admin_token=admin_token or None,
        log_level=_parse_log_level(env.get("SCOREBOARD_LOG_LEVEL")),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    return load_settings()
