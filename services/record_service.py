# -*- coding: utf-8 -*-

import logging
from dataclasses import replace
from typing import Callable, List

from core.clock import new_id
from domain.errors import ValidationError
from domain.models import Record, truncate_ms
from storage.repos import RecordRepo

logger = logging.getLogger(__name__)

# sessions this short are accidental clicks, not work
MIN_RECORD_SECONDS = 1
# duration is clock-sampled; span is rebuilt from millisecond timestamps
DURATION_TOLERANCE_SECONDS = 0.01


class RecordService:
    """
    Append-only store of completed time records.
    The only in-place change is the task-name mirror on rename.
    """

    def __init__(self, repo: RecordRepo, id_factory: Callable[[], str] = new_id):
        self.repo = repo
        self.id_factory = id_factory
        self._records: List[Record] = repo.load_all()

    def append(self, record: Record) -> Record:
        if not record.duration > MIN_RECORD_SECONDS:
            raise ValidationError(
                f"Invalid duration {record.duration:.3f}s; must exceed {MIN_RECORD_SECONDS}s."
            )
        start = truncate_ms(record.start_time)
        end = truncate_ms(record.end_time)
        if end <= start:
            raise ValidationError("Record must end after it starts.")
        span = (end - start).total_seconds()
        if abs(span - record.duration) > DURATION_TOLERANCE_SECONDS:
            raise ValidationError(
                f"Duration {record.duration:.3f}s does not match span {span:.3f}s."
            )

        # stored values must equal what a reload yields
        stored = replace(record, id=self.id_factory(), start_time=start, end_time=end)
        self.repo.save_all(self._records + [stored])
        self._records.append(stored)

        logger.info(
            "Recorded %.3fs for task %s (%s)",
            stored.duration,
            stored.task_id,
            stored.task_name,
        )
        return stored

    def all(self) -> List[Record]:
        return list(self._records)

    def find_by_task(self, task_id: str) -> List[Record]:
        return [r for r in self._records if r.task_id == task_id]

    def on_task_renamed(self, task_id: str, new_name: str) -> int:
        touched = 0
        updated: List[Record] = []
        for r in self._records:
            if r.task_id == task_id and r.task_name != new_name:
                r = replace(r, task_name=new_name)
                touched += 1
            updated.append(r)

        if touched:
            self.repo.save_all(updated)
            self._records = updated
            logger.debug("Renamed %d record(s) of task %s", touched, task_id)
        return touched
