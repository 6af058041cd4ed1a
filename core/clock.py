# -*- coding: utf-8 -*-

import time
import uuid


class SystemClock:
    """
    now_ms: wall clock (epoch ms) for timestamps.
    monotonic_ms: for measuring elapsed time; immune to clock steps.
    """

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def monotonic_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


def new_id() -> str:
    return str(uuid.uuid4())
