# services/task_service.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, List, Optional

from core.clock import SystemClock, new_id
from domain.errors import NotFoundError, ValidationError
from domain.models import Task, from_epoch_ms
from services.record_service import RecordService
from storage.repos import TaskRepo

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(
        self,
        repo: TaskRepo,
        records: RecordService,
        clock=None,
        id_factory: Callable[[], str] = new_id,
    ):
        self.repo = repo
        self.records = records
        self.clock = clock or SystemClock()
        self.id_factory = id_factory
        self._tasks: List[Task] = repo.load_all()

        # set by TimerService so a running session is closed before its task goes away
        self._on_before_delete: Optional[Callable[[str], None]] = None

    def set_on_before_delete(self, fn: Callable[[str], None]) -> None:
        self._on_before_delete = fn

    # ---- queries ----
    def list_tasks(self) -> List[Task]:
        return list(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def _require(self, task_id: str) -> Task:
        t = self.get_task(task_id)
        if t is None:
            raise NotFoundError("Task not found.")
        return t

    # ---- mutations ----
    def create_task(self, name: str) -> Task:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Task name cannot be empty.")

        task = Task(
            id=self.id_factory(),
            name=name,
            created_at=from_epoch_ms(self.clock.now_ms()),
        )
        self.repo.save_all(self._tasks + [task])
        self._tasks.append(task)
        logger.info("Created task %s (%s)", task.id, task.name)
        return task

    def rename_task(self, task_id: str, new_name: str) -> Task:
        current = self._require(task_id)
        new_name = (new_name or "").strip()
        if not new_name:
            raise ValidationError("Name cannot be empty.")
        if new_name == current.name:
            return current

        renamed = replace(current, name=new_name)
        tasks = [renamed if t.id == task_id else t for t in self._tasks]
        self.repo.save_all(tasks)
        self._tasks = tasks

        self.records.on_task_renamed(task_id, new_name)
        logger.info("Renamed task %s: %r -> %r", task_id, current.name, new_name)
        return renamed

    def delete_task(self, task_id: str) -> None:
        self._require(task_id)

        if self._on_before_delete is not None:
            self._on_before_delete(task_id)

        tasks = [t for t in self._tasks if t.id != task_id]
        self.repo.save_all(tasks)
        self._tasks = tasks
        # records keep their task_id and last task_name
        logger.info("Deleted task %s", task_id)
