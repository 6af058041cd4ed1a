# -*- coding: utf-8 -*-

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional


def to_iso(ts: dt.datetime) -> str:
    """UTC, millisecond precision, trailing Z."""
    utc = ts.astimezone(dt.timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def from_iso(raw: str) -> dt.datetime:
    if not isinstance(raw, str):
        raise TypeError(f"Expected ISO-8601 string, got {raw!r}")
    text = raw.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    ts = dt.datetime.fromisoformat(text)
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return ts


def truncate_ms(ts: dt.datetime) -> dt.datetime:
    """Drop sub-millisecond digits so the value survives to_iso/from_iso."""
    return ts.replace(microsecond=ts.microsecond // 1000 * 1000)


_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def from_epoch_ms(ms: int) -> dt.datetime:
    return _EPOCH + dt.timedelta(milliseconds=ms)


def _str(d: Dict[str, Any], key: str) -> str:
    v = d[key]
    if not isinstance(v, str):
        raise TypeError(f"{key} must be a string, got {v!r}")
    return v


def _number(d: Dict[str, Any], key: str) -> float:
    v = d[key]
    # bool is an int subclass
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise TypeError(f"{key} must be a number, got {v!r}")
    return float(v)


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    created_at: dt.datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": to_iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Task":
        return cls(
            id=_str(d, "id"),
            name=_str(d, "name"),
            created_at=from_iso(d["createdAt"]),
        )


@dataclass(frozen=True)
class Record:
    id: Optional[str]  # None until the record store assigns one
    task_id: str
    task_name: str
    start_time: dt.datetime
    end_time: dt.datetime
    duration: float  # seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "taskId": self.task_id,
            "taskName": self.task_name,
            "startTime": to_iso(self.start_time),
            "endTime": to_iso(self.end_time),
            "duration": self.duration,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Record":
        return cls(
            id=_str(d, "id"),
            task_id=_str(d, "taskId"),
            task_name=_str(d, "taskName"),
            start_time=from_iso(d["startTime"]),
            end_time=from_iso(d["endTime"]),
            duration=_number(d, "duration"),
        )
