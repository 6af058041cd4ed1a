# -*- coding: utf-8 -*-

import datetime as dt
from typing import List, Optional

from domain.models import Record
from ui.markdown_renderer import MarkdownRenderer


def format_hms(seconds: float) -> str:
    sec = max(0, int(seconds))
    h = sec // 3600
    m = (sec % 3600) // 60
    s = sec % 60
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_clock(ts: dt.datetime, tz: Optional[dt.tzinfo] = None) -> str:
    return ts.astimezone(tz).strftime("%H:%M")


def day_title(day: dt.date, today: dt.date) -> str:
    if day == today:
        return "Today"
    if day == today - dt.timedelta(days=1):
        return "Yesterday"
    return f"{day.strftime('%b')} {day.day}"


def _escape_cell(text: str) -> str:
    # keep task names from breaking the table
    return (
        text.replace("\\", "\\\\")
        .replace("|", "\\|")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def build_day_markdown(
    day: dt.date,
    records: List[Record],
    total_seconds: float,
    today: dt.date,
    tz: Optional[dt.tzinfo] = None,
) -> str:
    """records are expected latest first (StatsService.day_records)."""
    lines = [f"## {day_title(day, today)}", ""]

    if not records:
        lines.append("*No time records for this day.*")
        lines.append("")
        lines.append(f"Total: **{format_hms(0)}**")
        return "\n".join(lines)

    lines.append(f"Total: **{format_hms(total_seconds)}**")
    lines.append("")
    lines.append("| Task | Duration | Period |")
    lines.append("|---|---|---|")
    for r in records:
        period = f"{format_clock(r.start_time, tz)} - {format_clock(r.end_time, tz)}"
        lines.append(
            f"| {_escape_cell(r.task_name)} | {format_hms(r.duration)} | {period} |"
        )
    return "\n".join(lines)


class DayReport:
    def __init__(self, renderer: Optional[MarkdownRenderer] = None, tz=None):
        self.renderer = renderer or MarkdownRenderer()
        self.tz = tz

    def to_html(
        self,
        day: dt.date,
        records: List[Record],
        total_seconds: float,
        today: Optional[dt.date] = None,
    ) -> str:
        md = build_day_markdown(
            day,
            records,
            total_seconds,
            today or dt.date.today(),
            tz=self.tz,
        )
        return self.renderer.to_html(md)
