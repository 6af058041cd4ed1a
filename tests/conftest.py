# tests/conftest.py

from __future__ import annotations

import pytest

from services.record_service import RecordService
from services.stats_service import StatsService
from services.task_service import TaskService
from services.timer_service import TimerService
from storage.db import Database
from storage.repos import RecordRepo, TaskRepo

from .fakes import UTC, FakeClock, SequentialIds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def db():
    database = Database(":memory:")
    database.init_schema()
    yield database
    database.close()


@pytest.fixture()
def record_service(db: Database) -> RecordService:
    return RecordService(RecordRepo(db), id_factory=SequentialIds("rec"))


@pytest.fixture()
def task_service(db: Database, record_service: RecordService, clock: FakeClock) -> TaskService:
    return TaskService(
        TaskRepo(db), record_service, clock=clock, id_factory=SequentialIds("task")
    )


@pytest.fixture()
def timer_service(task_service: TaskService, record_service: RecordService) -> TimerService:
    return TimerService(task_service, record_service)


@pytest.fixture()
def stats_service(record_service: RecordService) -> StatsService:
    return StatsService(record_service, tz=UTC)
