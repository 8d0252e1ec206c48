"""Gateway: asyncio-backed Scheduler."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class AsyncioScheduler:
    """Schedules callbacks on the running event loop (the Textual app's loop)."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)
