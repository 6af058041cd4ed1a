# -*- coding: utf-8 -*-

import logging
from typing import Callable, Optional

from core.timer_engine import EngineSnapshot, StoppedSession, TimerEngine
from domain.errors import NotFoundError
from domain.models import Record, from_epoch_ms
from services.record_service import MIN_RECORD_SECONDS, RecordService
from services.task_service import TaskService

logger = logging.getLogger(__name__)


class TimerService:
    """
    Orchestrates:
    - TimerEngine state (one active task at most)
    - turning stopped sessions into Records
    - stopping the timer before its task is deleted
    - callbacks for UI
    """

    def __init__(
        self,
        task_service: TaskService,
        record_service: RecordService,
        engine: Optional[TimerEngine] = None,
    ):
        self.task_service = task_service
        self.record_service = record_service
        self.engine = engine or TimerEngine(clock=task_service.clock)

        self._on_state_change: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_record: Optional[Callable[[Record], None]] = None

        task_service.set_on_before_delete(self._on_task_deleting)

    # ----- Callbacks -----
    def set_on_state_change(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_state_change = fn

    def set_on_record(self, fn: Callable[[Record], None]) -> None:
        self._on_record = fn

    def _emit_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.engine.snapshot())

    # ----- Queries -----
    def get_snapshot(self) -> EngineSnapshot:
        return self.engine.snapshot()

    @property
    def active_task_id(self) -> Optional[str]:
        return self.engine.active_task_id

    def elapsed_seconds(self) -> float:
        return self.engine.elapsed_seconds()

    # ----- Transitions -----
    def start(self, task_id: str) -> Optional[Record]:
        """
        Start/stop toggle for one task row.
        Returns the Record emitted by an implicit stop, if any.
        """
        if self.task_service.get_task(task_id) is None:
            raise NotFoundError("Selected task not found.")

        stopped = self.engine.start(task_id)
        record = self._record(stopped)
        logger.debug("start(%s) -> %s", task_id, self.engine.state.value)
        self._emit_state_change()
        return record

    def pause(self) -> None:
        if not self.engine.snapshot().is_running:
            return
        self.engine.pause()
        logger.debug("Paused task %s", self.engine.active_task_id)
        self._emit_state_change()

    def resume(self) -> None:
        if not self.engine.snapshot().is_paused:
            return
        self.engine.resume()
        logger.debug("Resumed task %s", self.engine.active_task_id)
        self._emit_state_change()

    def stop(self) -> Optional[Record]:
        if self.engine.snapshot().is_idle:
            return None
        record = self._record(self.engine.stop())
        self._emit_state_change()
        return record

    def shutdown(self) -> Optional[Record]:
        """Teardown hook: keep in-progress time when the app closes."""
        if self.engine.active_task_id is None:
            return None
        logger.info("Stopping active timer on shutdown")
        return self.stop()

    # ----- Internals -----
    def _on_task_deleting(self, task_id: str) -> None:
        if self.engine.active_task_id == task_id:
            self.stop()

    def _record(self, session: Optional[StoppedSession]) -> Optional[Record]:
        if session is None:
            return None

        seconds = session.elapsed_seconds
        if seconds <= MIN_RECORD_SECONDS:
            logger.debug(
                "Dropped %.3fs session for task %s (too short)", seconds, session.task_id
            )
            return None

        task = self.task_service.get_task(session.task_id)
        # deletion stops the timer first, so the task is normally still here
        task_name = task.name if task is not None else session.task_id

        # span is computed backward so paused time is excluded from it
        draft = Record(
            id=None,
            task_id=session.task_id,
            task_name=task_name,
            start_time=from_epoch_ms(session.ended_at_ms - session.elapsed_ms),
            end_time=from_epoch_ms(session.ended_at_ms),
            duration=seconds,
        )
        record = self.record_service.append(draft)
        if self._on_record:
            self._on_record(record)
        return record
