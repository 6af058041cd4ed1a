# -*- coding: utf-8 -*-

"""Settings loaded from TIMETRACK_* environment variables."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TIMETRACK"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_level(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip().upper()
    if not raw:
        return default
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_dir: Path
    log_level: int
    refresh_ms: int


def load_settings() -> Settings:
    refresh_ms = _env_int(_k("REFRESH_MS"), 1000)
    return Settings(
        db_path=_env_path(_k("DB_PATH"), Path("timetrack.db")),
        log_dir=_env_path(_k("LOG_DIR"), Path(".local/timetrack")),
        log_level=_env_level(_k("LOG_LEVEL"), logging.INFO),
        refresh_ms=refresh_ms if refresh_ms > 0 else 1000,
    )
