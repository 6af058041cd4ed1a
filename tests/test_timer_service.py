# tests/test_timer_service.py

from __future__ import annotations

import pytest

from domain.errors import NotFoundError
from domain.models import from_epoch_ms
from services.record_service import RecordService
from services.task_service import TaskService
from services.timer_service import TimerService

from .fakes import FakeClock


def test_stop_after_five_seconds_records_exact_span(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    task = task_service.create_task("Writing")
    timer_service.start(task.id)
    clock.advance(5000)

    record = timer_service.stop()

    assert record is not None
    assert record_service.all() == [record]
    assert record.id == "rec-1"
    assert record.task_id == task.id
    assert record.task_name == "Writing"
    assert record.duration == 5.0
    assert (record.end_time - record.start_time).total_seconds() == record.duration
    assert record.end_time == from_epoch_ms(clock.now_ms())
    assert timer_service.get_snapshot().is_idle


def test_short_session_is_dropped(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    task = task_service.create_task("Oops")
    timer_service.start(task.id)
    clock.advance(900)

    assert timer_service.stop() is None
    assert record_service.all() == []
    assert timer_service.get_snapshot().is_idle


def test_exactly_one_second_is_dropped(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    task = task_service.create_task("Edge")
    timer_service.start(task.id)
    clock.advance(1000)

    assert timer_service.stop() is None
    assert record_service.all() == []


def test_paused_time_is_excluded_from_span(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
) -> None:
    task = task_service.create_task("Reading")
    t0 = clock.now_ms()
    timer_service.start(task.id)
    clock.advance(3000)
    timer_service.pause()
    clock.advance(2000)
    timer_service.resume()
    clock.advance(2000)

    record = timer_service.stop()

    assert record.duration == 5.0
    assert record.end_time == from_epoch_ms(t0 + 7000)
    # computed backward from the end, not the click time of start()
    assert record.start_time == from_epoch_ms(t0 + 2000)


def test_stop_while_paused_uses_banked_time(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
) -> None:
    task = task_service.create_task("Calls")
    timer_service.start(task.id)
    clock.advance(4000)
    timer_service.pause()
    clock.advance(60_000)

    record = timer_service.stop()
    assert record.duration == 4.0


def test_start_unknown_task_raises_and_keeps_state(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    task = task_service.create_task("Real")
    timer_service.start(task.id)
    clock.advance(3000)

    with pytest.raises(NotFoundError):
        timer_service.start("missing")

    snap = timer_service.get_snapshot()
    assert snap.is_running
    assert snap.active_task_id == task.id
    assert snap.elapsed_ms == 3000
    assert record_service.all() == []


def test_switching_tasks_records_the_previous_one(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    a = task_service.create_task("A")
    b = task_service.create_task("B")
    timer_service.start(a.id)
    clock.advance(2500)

    emitted = timer_service.start(b.id)

    assert emitted is not None
    assert emitted.task_id == a.id
    assert emitted.duration == 2.5
    assert timer_service.active_task_id == b.id
    assert timer_service.elapsed_seconds() == 0
    assert len(record_service.all()) == 1


def test_task_name_is_read_at_stop_time(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
) -> None:
    task = task_service.create_task("Draft")
    timer_service.start(task.id)
    clock.advance(3000)
    task_service.rename_task(task.id, "Final")

    record = timer_service.stop()
    assert record.task_name == "Final"


def test_deleting_active_task_stops_and_keeps_time(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    task = task_service.create_task("Gone soon")
    timer_service.start(task.id)
    clock.advance(6000)

    task_service.delete_task(task.id)

    assert timer_service.get_snapshot().is_idle
    assert task_service.get_task(task.id) is None
    records = record_service.all()
    assert len(records) == 1
    assert records[0].task_name == "Gone soon"
    assert records[0].duration == 6.0


def test_deleting_other_task_leaves_timer_running(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
) -> None:
    a = task_service.create_task("A")
    b = task_service.create_task("B")
    timer_service.start(a.id)
    clock.advance(2000)

    task_service.delete_task(b.id)

    snap = timer_service.get_snapshot()
    assert snap.is_running
    assert snap.active_task_id == a.id


def test_shutdown_stops_active_timer(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    assert timer_service.shutdown() is None

    task = task_service.create_task("Late work")
    timer_service.start(task.id)
    clock.advance(3000)
    timer_service.pause()

    record = timer_service.shutdown()
    assert record is not None
    assert record.duration == 3.0
    assert timer_service.get_snapshot().is_idle
    assert record_service.all() == [record]


def test_callbacks_fire_on_transitions_and_records(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
) -> None:
    states = []
    records = []
    timer_service.set_on_state_change(lambda snap: states.append(snap.state.value))
    timer_service.set_on_record(records.append)

    task = task_service.create_task("Observed")
    timer_service.start(task.id)
    clock.advance(2000)
    timer_service.pause()
    timer_service.pause()  # no-op, no callback
    timer_service.resume()
    clock.advance(1000)
    timer_service.stop()
    timer_service.stop()  # idle, no callback

    assert states == ["running", "paused", "running", "idle"]
    assert len(records) == 1
    assert records[0].duration == 3.0


def test_wall_clock_step_back_does_not_shorten_session(
    clock: FakeClock,
    task_service: TaskService,
    timer_service: TimerService,
    record_service: RecordService,
) -> None:
    task = task_service.create_task("Synced")
    timer_service.start(task.id)
    clock.advance(5000)
    clock.step_wall(-60_000)  # e.g. NTP correction mid-session

    record = timer_service.stop()

    assert record is not None
    assert record.duration == 5.0
    assert record.end_time == from_epoch_ms(clock.now_ms())
    assert (record.end_time - record.start_time).total_seconds() == 5.0
