"""Event-loop backed one-shot timers."""

from __future__ import annotations

import asyncio
import time
from typing import Callable

from interfaces import TimerHandle


class AsyncioScheduler:
    """Schedules callbacks on the running asyncio loop."""

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> TimerHandle:
        return asyncio.get_running_loop().call_later(delay_s, callback)


def now_ms() -> int:
    return int(time.monotonic() * 1000)
