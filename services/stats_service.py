# -*- coding: utf-8 -*-

import datetime as dt
from typing import Dict, Iterable, List, Optional, Set

from domain.models import Record
from services.record_service import RecordService


def local_day(ts: dt.datetime, tz: Optional[dt.tzinfo] = None) -> dt.date:
    """Calendar date of ts in tz (None = system local time)."""
    return ts.astimezone(tz).date()


def _as_day(day, tz: Optional[dt.tzinfo]) -> dt.date:
    # datetime is a date subclass, so check it first
    if isinstance(day, dt.datetime):
        return local_day(day, tz) if day.tzinfo is not None else day.date()
    return day


def group_by_calendar_day(
    records: Iterable[Record], tz: Optional[dt.tzinfo] = None
) -> Dict[dt.date, List[Record]]:
    """
    Bucket records by the local date of start_time.
    A record running past midnight stays on its start day.
    """
    groups: Dict[dt.date, List[Record]] = {}
    for r in records:
        groups.setdefault(local_day(r.start_time, tz), []).append(r)
    return groups


def records_on_day(
    records: Iterable[Record], day, tz: Optional[dt.tzinfo] = None
) -> List[Record]:
    target = _as_day(day, tz)
    return [r for r in records if local_day(r.start_time, tz) == target]


def total_duration_seconds(records: Iterable[Record]) -> float:
    return sum(r.duration for r in records)


def days_with_records(
    records: Iterable[Record], year: int, month: int, tz: Optional[dt.tzinfo] = None
) -> Set[int]:
    """Days of the month (1..31) that have at least one record."""
    out: Set[int] = set()
    for r in records:
        d = local_day(r.start_time, tz)
        if d.year == year and d.month == month:
            out.add(d.day)
    return out


def sort_latest_first(records: Iterable[Record]) -> List[Record]:
    return sorted(records, key=lambda r: r.start_time, reverse=True)


class StatsService:
    def __init__(self, record_service: RecordService, tz: Optional[dt.tzinfo] = None):
        self.record_service = record_service
        self.tz = tz

    def day_records(self, day) -> List[Record]:
        return sort_latest_first(
            records_on_day(self.record_service.all(), day, self.tz)
        )

    def day_total_seconds(self, day) -> float:
        return total_duration_seconds(
            records_on_day(self.record_service.all(), day, self.tz)
        )

    def marked_days(self, year: int, month: int) -> Set[int]:
        return days_with_records(self.record_service.all(), year, month, self.tz)
