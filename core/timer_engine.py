# -*- coding: utf-8 -*-

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from core.clock import SystemClock


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass(frozen=True)
class EngineSnapshot:
    state: TimerState
    active_task_id: Optional[str]
    elapsed_ms: int

    @property
    def is_idle(self) -> bool:
        return self.state is TimerState.IDLE

    @property
    def is_running(self) -> bool:
        return self.state is TimerState.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.state is TimerState.PAUSED


@dataclass(frozen=True)
class StoppedSession:
    task_id: str
    elapsed_ms: int
    ended_at_ms: int

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed_ms / 1000


class TimerEngine:
    """
    Pure stopwatch state machine (no Tkinter, no storage).
    Holds at most one active task. The UI polls elapsed_ms() for display;
    the engine never schedules anything itself.
    """

    def __init__(self, clock=None):
        self.clock = clock or SystemClock()

        self.active_task_id: Optional[str] = None
        self.started_at_ms: Optional[int] = None
        self.accumulated_ms = 0
        self.paused = False

    @property
    def state(self) -> TimerState:
        if self.active_task_id is None:
            return TimerState.IDLE
        return TimerState.PAUSED if self.paused else TimerState.RUNNING

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            state=self.state,
            active_task_id=self.active_task_id,
            elapsed_ms=self.elapsed_ms(),
        )

    def elapsed_ms(self) -> int:
        if self.active_task_id is None:
            return 0
        if self.paused:
            return self.accumulated_ms
        return self.accumulated_ms + (self.clock.monotonic_ms() - self.started_at_ms)

    def elapsed_seconds(self) -> float:
        return self.elapsed_ms() / 1000

    def start(self, task_id: str) -> Optional[StoppedSession]:
        """
        Start timing task_id.
        Same task as the active one -> behaves like stop().
        Different task -> the active session is stopped first, then task_id
        starts fresh. Returns the stopped session, if any.
        """
        if self.active_task_id == task_id:
            return self.stop()

        stopped = self.stop() if self.active_task_id is not None else None

        self.active_task_id = task_id
        self.started_at_ms = self.clock.monotonic_ms()
        self.accumulated_ms = 0
        self.paused = False
        return stopped

    def pause(self) -> None:
        if self.active_task_id is None or self.paused:
            return
        self.accumulated_ms += self.clock.monotonic_ms() - self.started_at_ms
        self.paused = True

    def resume(self) -> None:
        if self.active_task_id is None or not self.paused:
            return
        self.started_at_ms = self.clock.monotonic_ms()
        self.paused = False

    def stop(self) -> Optional[StoppedSession]:
        if self.active_task_id is None:
            return None

        if self.paused:
            elapsed = self.accumulated_ms
        else:
            elapsed = self.accumulated_ms + (self.clock.monotonic_ms() - self.started_at_ms)

        # elapsed is monotonic; only the end stamp comes from the wall clock
        session = StoppedSession(
            task_id=self.active_task_id,
            elapsed_ms=elapsed,
            ended_at_ms=self.clock.now_ms(),
        )
        self._clear()
        return session

    def _clear(self) -> None:
        self.active_task_id = None
        self.started_at_ms = None
        self.accumulated_ms = 0
        self.paused = False
