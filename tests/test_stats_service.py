# tests/test_stats_service.py

from __future__ import annotations

import datetime as dt

from domain.models import Record
from services.record_service import RecordService
from services.stats_service import (
    StatsService,
    days_with_records,
    group_by_calendar_day,
    records_on_day,
    sort_latest_first,
    total_duration_seconds,
)

# a fixed zone keeps local-day tests independent of the machine's TZ
PLUS8 = dt.timezone(dt.timedelta(hours=8))


def _rec(rid: str, start: dt.datetime, seconds: float) -> Record:
    return Record(
        id=rid,
        task_id="t",
        task_name="Task",
        start_time=start,
        end_time=start + dt.timedelta(seconds=seconds),
        duration=seconds,
    )


def _local(*args) -> dt.datetime:
    return dt.datetime(*args, tzinfo=PLUS8)


def test_group_by_calendar_day_uses_local_start_date() -> None:
    r1 = _rec("r1", _local(2026, 10, 19, 9, 0), 60)
    r2 = _rec("r2", _local(2026, 10, 19, 18, 0), 30)
    r3 = _rec("r3", _local(2026, 10, 20, 7, 0), 90)
    # 2026-10-19 02:00 UTC is 10:00 on the 19th in +08:00
    r4 = _rec("r4", dt.datetime(2026, 10, 19, 2, 0, tzinfo=dt.timezone.utc), 10)

    groups = group_by_calendar_day([r1, r2, r3, r4], tz=PLUS8)

    assert groups == {
        dt.date(2026, 10, 19): [r1, r2, r4],
        dt.date(2026, 10, 20): [r3],
    }


def test_record_crossing_midnight_stays_on_start_day() -> None:
    late = _rec("late", _local(2026, 10, 19, 23, 50), 20 * 60)
    assert late.end_time.astimezone(PLUS8).date() == dt.date(2026, 10, 20)

    groups = group_by_calendar_day([late], tz=PLUS8)
    assert list(groups) == [dt.date(2026, 10, 19)]
    assert records_on_day([late], dt.date(2026, 10, 20), tz=PLUS8) == []
    assert records_on_day([late], dt.date(2026, 10, 19), tz=PLUS8) == [late]


def test_records_on_day_accepts_datetime() -> None:
    r1 = _rec("r1", _local(2026, 10, 19, 9, 0), 60)
    r2 = _rec("r2", _local(2026, 10, 18, 9, 0), 60)

    assert records_on_day([r1, r2], _local(2026, 10, 19, 23, 0), tz=PLUS8) == [r1]
    assert records_on_day([r1, r2], dt.datetime(2026, 10, 18, 12, 0), tz=PLUS8) == [r2]


def test_total_duration_seconds() -> None:
    rs = [
        _rec("a", _local(2026, 10, 19, 9, 0), 1.5),
        _rec("b", _local(2026, 10, 19, 10, 0), 3600),
    ]
    assert total_duration_seconds(rs) == 3601.5
    assert total_duration_seconds([]) == 0


def test_days_with_records_for_month() -> None:
    rs = [
        _rec("a", _local(2026, 10, 1, 9, 0), 5),
        _rec("b", _local(2026, 10, 19, 9, 0), 5),
        _rec("c", _local(2026, 10, 19, 12, 0), 5),
        _rec("d", _local(2026, 11, 2, 9, 0), 5),
    ]
    assert days_with_records(rs, 2026, 10, tz=PLUS8) == {1, 19}
    assert days_with_records(rs, 2026, 12, tz=PLUS8) == set()


def test_sort_latest_first() -> None:
    early = _rec("e", _local(2026, 10, 19, 8, 0), 5)
    late = _rec("l", _local(2026, 10, 19, 17, 0), 5)
    assert sort_latest_first([early, late]) == [late, early]


def test_stats_service_day_queries(record_service: RecordService) -> None:
    record_service.append(
        Record(
            id=None,
            task_id="t",
            task_name="Morning",
            start_time=_local(2026, 10, 19, 8, 0),
            end_time=_local(2026, 10, 19, 8, 30),
            duration=1800.0,
        )
    )
    record_service.append(
        Record(
            id=None,
            task_id="t",
            task_name="Evening",
            start_time=_local(2026, 10, 19, 20, 0),
            end_time=_local(2026, 10, 19, 20, 10),
            duration=600.0,
        )
    )
    stats = StatsService(record_service, tz=PLUS8)
    day = dt.date(2026, 10, 19)

    assert [r.task_name for r in stats.day_records(day)] == ["Evening", "Morning"]
    assert stats.day_total_seconds(day) == 2400.0
    assert stats.day_total_seconds(dt.date(2026, 10, 18)) == 0
    assert stats.marked_days(2026, 10) == {19}
