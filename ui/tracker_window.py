#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import calendar
import datetime as dt
import logging
import sqlite3
import tkinter as tk
from tkinter import messagebox, simpledialog
from typing import Dict

from tkinterweb import HtmlFrame

from core.timer_engine import EngineSnapshot
from domain.errors import TrackerError
from domain.models import Record
from services.stats_service import StatsService
from services.task_service import TaskService
from services.timer_service import TimerService
from ui.day_report import DayReport, format_hms

logger = logging.getLogger(__name__)


class TrackerWindow:
    def __init__(
        self,
        task_service: TaskService,
        timer_service: TimerService,
        stats_service: StatsService,
        day_report: DayReport,
        refresh_ms: int = 1000,
    ):
        self.task_service = task_service
        self.timer_service = timer_service
        self.stats_service = stats_service
        self.day_report = day_report
        self.refresh_ms = refresh_ms

        self.root = tk.Tk()
        self.root.title("Time Tracker")
        self.root.geometry("1080x680")

        self.bg = "#F4F6FA"
        self.panel = "#FFFFFF"
        self.border = "#E6EAF2"
        self.text = "#111827"
        self.muted = "#6B7280"
        self.accent = "#111827"
        self.green = "#10B981"
        self.blue = "#3B82F6"
        self.graybtn = "#EEF2F7"
        self.danger = "#EF4444"
        self.root.configure(bg=self.bg)

        today = dt.date.today()
        self.cal_year = today.year
        self.cal_month = today.month
        self.selected_day = today

        self._timer_labels: Dict[str, tk.Label] = {}
        self._tick_job = None

        self._build_ui()

        # wire callbacks from service -> window
        self.timer_service.set_on_state_change(self._on_state_change)
        self.timer_service.set_on_record(self._on_record)

        self._refresh_all()
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    # ---------- widgets ----------
    def _button(self, parent, text, command, bg, fg="white"):
        return tk.Button(
            parent,
            text=text,
            command=command,
            bg=bg,
            fg=fg,
            relief="flat",
            bd=0,
            activebackground=bg,
            activeforeground=fg,
            font=("Montserrat", 9, "bold"),
            padx=10,
            pady=4,
        )

    def _build_ui(self):
        header = tk.Frame(self.root, bg=self.bg)
        header.pack(fill="x", padx=18, pady=(14, 8))
        tk.Label(
            header,
            text="Time Tracker",
            bg=self.bg,
            fg=self.text,
            font=("Montserrat", 16, "bold"),
        ).pack(side="left")

        addrow = tk.Frame(self.root, bg=self.bg)
        addrow.pack(fill="x", padx=18, pady=(0, 6))

        self.task_entry = tk.Entry(
            addrow,
            font=("Montserrat", 11),
            fg=self.text,
            bg=self.panel,
            relief="flat",
            bd=0,
            highlightthickness=1,
            highlightbackground=self.border,
            highlightcolor=self.border,
            insertbackground=self.text,
        )
        self.task_entry.pack(side="left", fill="x", expand=True, ipady=8)
        self.task_entry.bind("<Return>", lambda e: self._add_task())

        self._button(addrow, "Add", self._add_task, self.blue).pack(
            side="left", padx=(10, 0), ipady=4
        )

        self.err = tk.Label(
            self.root, text="", bg=self.bg, fg=self.danger, font=("Montserrat", 9)
        )
        self.err.pack(anchor="w", padx=18)

        body = tk.Frame(self.root, bg=self.bg)
        body.pack(fill="both", expand=True, padx=18, pady=(4, 14))

        self.task_panel = tk.Frame(
            body, bg=self.panel, highlightthickness=1, highlightbackground=self.border
        )
        self.task_panel.pack(side="left", fill="both", expand=True, padx=(0, 14))

        side = tk.Frame(body, bg=self.bg, width=460)
        side.pack(side="right", fill="y")
        side.pack_propagate(False)

        self._build_calendar(side)

        day_card = tk.Frame(
            side, bg=self.panel, highlightthickness=1, highlightbackground=self.border
        )
        day_card.pack(fill="both", expand=True, pady=(10, 0))
        self.day_view = HtmlFrame(day_card, horizontal_scrollbar="auto")
        self.day_view.pack(fill="both", expand=True)

    def _build_calendar(self, parent):
        card = tk.Frame(
            parent, bg=self.panel, highlightthickness=1, highlightbackground=self.border
        )
        card.pack(fill="x")

        head = tk.Frame(card, bg=self.panel)
        head.pack(fill="x", padx=10, pady=(10, 6))

        self.month_label = tk.Label(
            head, text="", bg=self.panel, fg=self.text, font=("Montserrat", 12, "bold")
        )
        self.month_label.pack(side="left")

        nav = tk.Frame(head, bg=self.panel)
        nav.pack(side="right")
        self._button(nav, "◀", self._prev_month, self.graybtn, self.text).pack(
            side="left", padx=(0, 6)
        )
        self._button(nav, "▶", self._next_month, self.graybtn, self.text).pack(
            side="left"
        )

        self.cal_grid = tk.Frame(card, bg=self.panel)
        self.cal_grid.pack(fill="x", padx=10, pady=(0, 10))

    # ---------- actions ----------
    def _add_task(self):
        try:
            self.task_service.create_task(self.task_entry.get())
        except TrackerError as e:
            self.err.config(text=str(e))
            return
        self.err.config(text="")
        self.task_entry.delete(0, tk.END)
        self.task_entry.focus_set()
        self._refresh_tasks()

    def _toggle(self, task_id: str):
        try:
            self.timer_service.start(task_id)
            self.err.config(text="")
        except TrackerError as e:
            self.err.config(text=str(e))
            self._refresh_tasks()

    def _edit(self, task_id: str):
        task = self.task_service.get_task(task_id)
        if task is None:
            return
        new_name = simpledialog.askstring(
            "Rename task", "Task name:", initialvalue=task.name, parent=self.root
        )
        if new_name is None:
            return
        try:
            self.task_service.rename_task(task_id, new_name)
            self.err.config(text="")
        except TrackerError as e:
            self.err.config(text=str(e))
        self._refresh_all()

    def _delete(self, task_id: str):
        task = self.task_service.get_task(task_id)
        if task is None:
            return
        ok = messagebox.askyesno(
            "Delete task?",
            f"Delete '{task.name}'?\n\nIts time records will be kept.",
        )
        if not ok:
            return
        try:
            self.task_service.delete_task(task_id)
            self.err.config(text="")
        except TrackerError as e:
            self.err.config(text=str(e))
        self._refresh_all()

    def _prev_month(self):
        self.cal_month -= 1
        if self.cal_month <= 0:
            self.cal_month = 12
            self.cal_year -= 1
        self._refresh_calendar()

    def _next_month(self):
        self.cal_month += 1
        if self.cal_month > 12:
            self.cal_month = 1
            self.cal_year += 1
        self._refresh_calendar()

    def _select_day(self, day: dt.date):
        self.selected_day = day
        self._refresh_calendar()

    # ---------- service callbacks ----------
    def _on_state_change(self, snap: EngineSnapshot):
        self._refresh_tasks()
        if snap.is_running:
            self._ensure_tick_loop()
        else:
            self._stop_tick_loop()

    def _on_record(self, record: Record):
        self._refresh_calendar()

    # ---- Tick loop (UI-driven) ----
    def _ensure_tick_loop(self):
        if self._tick_job is None:
            self._tick_job = self.root.after(self.refresh_ms, self._tick_once)

    def _stop_tick_loop(self):
        if self._tick_job is not None:
            self.root.after_cancel(self._tick_job)
            self._tick_job = None

    def _tick_once(self):
        self._tick_job = None
        snap = self.timer_service.get_snapshot()
        if not snap.is_running:
            return
        label = self._timer_labels.get(snap.active_task_id)
        if label is not None:
            label.config(text=format_hms(snap.elapsed_ms / 1000))
        self._tick_job = self.root.after(self.refresh_ms, self._tick_once)

    # ---------- refresh ----------
    def _refresh_all(self):
        self._refresh_tasks()
        self._refresh_calendar()

    def _refresh_tasks(self):
        for w in self.task_panel.winfo_children():
            w.destroy()
        self._timer_labels.clear()

        tasks = self.task_service.list_tasks()
        if not tasks:
            tk.Label(
                self.task_panel,
                text="No tasks yet. Add one above.",
                bg=self.panel,
                fg=self.muted,
                font=("Montserrat", 10),
            ).pack(pady=20)
            return

        snap = self.timer_service.get_snapshot()
        for t in tasks:
            self._task_row(t.id, t.name, snap)

    def _task_row(self, task_id: str, name: str, snap: EngineSnapshot):
        active = snap.active_task_id == task_id
        row = tk.Frame(
            self.task_panel,
            bg=self.graybtn if active else self.panel,
            highlightthickness=1,
            highlightbackground=self.border,
        )
        row.pack(fill="x", padx=10, pady=(8, 0))
        rbg = row.cget("bg")

        tk.Label(
            row, text=name, bg=rbg, fg=self.text, font=("Montserrat", 11, "bold")
        ).pack(side="left", padx=10, pady=8)

        shown = snap.elapsed_ms / 1000 if active else 0
        timer = tk.Label(
            row,
            text=format_hms(shown),
            bg=rbg,
            fg=self.green if active else self.muted,
            font=("Menlo", 11),
        )
        timer.pack(side="left", padx=10)
        self._timer_labels[task_id] = timer

        controls = tk.Frame(row, bg=rbg)
        controls.pack(side="right", padx=8)

        if active:
            self._button(controls, "Stop", self.timer_service.stop, self.accent).pack(
                side="left", padx=2
            )
            if snap.is_paused:
                self._button(
                    controls, "Resume", self.timer_service.resume, self.green
                ).pack(side="left", padx=2)
            else:
                self._button(
                    controls, "Pause", self.timer_service.pause, self.blue
                ).pack(side="left", padx=2)
        else:
            self._button(
                controls, "Start", lambda: self._toggle(task_id), self.green
            ).pack(side="left", padx=2)

        self._button(
            controls, "Edit", lambda: self._edit(task_id), self.graybtn, self.text
        ).pack(side="left", padx=2)
        self._button(
            controls, "Delete", lambda: self._delete(task_id), self.danger
        ).pack(side="left", padx=2)

    def _refresh_calendar(self):
        y, m = self.cal_year, self.cal_month
        self.month_label.config(text=f"{calendar.month_name[m]} {y}")
        for w in self.cal_grid.winfo_children():
            w.destroy()

        days = ["Su", "Mo", "Tu", "We", "Th", "Fr", "Sa"]
        row = tk.Frame(self.cal_grid, bg=self.panel)
        row.pack(fill="x")
        for dname in days:
            tk.Label(row, text=dname, bg=self.panel, fg=self.muted, width=5).pack(
                side="left"
            )

        marked = self.stats_service.marked_days(y, m)
        today = dt.date.today()
        cal = calendar.Calendar(firstweekday=6)

        for wk in cal.monthdayscalendar(y, m):
            r = tk.Frame(self.cal_grid, bg=self.panel)
            r.pack(fill="x", pady=2)
            for d in wk:
                if d == 0:
                    tk.Label(r, text=" ", bg=self.panel, width=5).pack(side="left")
                    continue

                dd = dt.date(y, m, d)
                bg, fg = self.graybtn, self.text
                if dd == self.selected_day:
                    bg, fg = self.accent, "white"
                elif dd == today:
                    bg, fg = self.blue, "white"

                text = f"{d}•" if d in marked else str(d)
                tk.Button(
                    r,
                    text=text,
                    command=lambda day=dd: self._select_day(day),
                    bg=bg,
                    fg=fg,
                    relief="flat",
                    bd=0,
                    width=4,
                    padx=2,
                    pady=4,
                ).pack(side="left", padx=1)

        self._render_day()

    def _render_day(self):
        day = self.selected_day
        html = self.day_report.to_html(
            day,
            self.stats_service.day_records(day),
            self.stats_service.day_total_seconds(day),
        )
        self.day_view.load_html(html)

    def _on_close(self):
        self._stop_tick_loop()
        try:
            self.timer_service.shutdown()
        except sqlite3.Error as e:
            logger.exception("Could not save the running session on exit")
            messagebox.showerror("Save failed", f"Could not save the running session:\n{e}")
        self.root.destroy()

    def run(self):
        self.root.mainloop()
