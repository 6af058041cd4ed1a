# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from config import load_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DB_PATH", "LOG_DIR", "LOG_LEVEL", "REFRESH_MS"):
        monkeypatch.delenv(f"TIMETRACK_{name}", raising=False)

    s = load_settings()
    assert s.db_path == Path("timetrack.db")
    assert s.log_dir == Path(".local/timetrack")
    assert s.log_level == logging.INFO
    assert s.refresh_ms == 1000


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TIMETRACK_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("TIMETRACK_LOG_LEVEL", "debug")
    monkeypatch.setenv("TIMETRACK_REFRESH_MS", "250")

    s = load_settings()
    assert s.db_path == tmp_path / "x.db"
    assert s.log_level == logging.DEBUG
    assert s.refresh_ms == 250


def test_bad_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMETRACK_LOG_LEVEL", "chatty")
    monkeypatch.setenv("TIMETRACK_REFRESH_MS", "-5")

    s = load_settings()
    assert s.log_level == logging.INFO
    assert s.refresh_ms == 1000
