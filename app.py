#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import logging

from config import load_settings
from logging_setup import setup_logging
from services.record_service import RecordService
from services.stats_service import StatsService
from services.task_service import TaskService
from services.timer_service import TimerService
from storage.db import Database
from storage.repos import RecordRepo, TaskRepo
from ui.day_report import DayReport
from ui.tracker_window import TrackerWindow

logger = logging.getLogger(__name__)


def main():
    settings = load_settings()
    setup_logging(log_dir=settings.log_dir, console_level=settings.log_level)

    db = Database(db_path=str(settings.db_path))
    db.init_schema()
    logger.info("Using database %s", settings.db_path)

    record_service = RecordService(RecordRepo(db))
    task_service = TaskService(TaskRepo(db), record_service)
    timer_service = TimerService(task_service, record_service)
    stats_service = StatsService(record_service)

    app = TrackerWindow(
        task_service,
        timer_service,
        stats_service,
        DayReport(),
        refresh_ms=settings.refresh_ms,
    )
    try:
        app.run()
    finally:
        db.close()


if __name__ == "__main__":
    main()
