"""Port: deferred callbacks on the controller's event loop."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class ScheduledCall(Protocol):
    def cancel(self) -> None:
        """Prevent the callback from running. No-op once it has run."""
        ...


class Scheduler(Protocol):
    """Runs callbacks later on the same execution context as the caller."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall: ...
