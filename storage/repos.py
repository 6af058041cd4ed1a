# storage/repos.py
#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json
from typing import Any, Callable, List, Optional, TypeVar

from domain.errors import StorageError
from domain.models import Record, Task
from storage.db import Database

TASKS_KEY = "time_tracker_tasks"
RECORDS_KEY = "time_tracker_records"

T = TypeVar("T")


class AppStateRepo:
    def __init__(self, db: Database):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        row = self.db.conn.execute(
            "SELECT value FROM app_state WHERE key=?",
            (key,),
        ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        self.db.conn.execute(
            """
            INSERT INTO app_state(key, value) VALUES(?, ?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value
            """,
            (key, value),
        )
        self.db.conn.commit()


class _CollectionRepo:
    """
    One JSON array under one app_state key.
    load_all/save_all always move the whole collection.
    """

    key = ""

    def __init__(self, db: Database):
        self.state = AppStateRepo(db)

    def _load(self, decode: Callable[[Any], T]) -> List[T]:
        raw = self.state.get(self.key)
        if raw is None or raw == "":
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageError(f"{self.key} is not valid JSON: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"{self.key} is not a list.")

        out: List[T] = []
        for item in data:
            try:
                out.append(decode(item))
            except (KeyError, TypeError, ValueError) as e:
                raise StorageError(f"Bad entry in {self.key}: {item!r}") from e
        return out

    def _save(self, items: List[Any]) -> None:
        payload = json.dumps([i.to_dict() for i in items], ensure_ascii=False)
        self.state.set(self.key, payload)


class TaskRepo(_CollectionRepo):
    key = TASKS_KEY

    def load_all(self) -> List[Task]:
        return self._load(Task.from_dict)

    def save_all(self, tasks: List[Task]) -> None:
        self._save(tasks)


class RecordRepo(_CollectionRepo):
    key = RECORDS_KEY

    def load_all(self) -> List[Record]:
        return self._load(Record.from_dict)

    def save_all(self, records: List[Record]) -> None:
        self._save(records)
