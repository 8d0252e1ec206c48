"""Port: platform speech-recognition engine."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from bolo.l1_entities.recognition import EngineOptions, RecognitionResultEvent

ResultHandler = Callable[[RecognitionResultEvent], None]
ErrorHandler = Callable[[str, str], None]  # (error code, message)
EndHandler = Callable[[], None]


class RecognitionEngine(Protocol):
    """One recognition session. Handlers are plain attributes, read at delivery time.

    All handlers are invoked on the event loop that called ``start()``.
    Setting a handler to None discards any notification not yet delivered.
    """

    on_result: ResultHandler | None
    on_error: ErrorHandler | None
    on_end: EndHandler | None

    def start(self) -> None:
        """Begin capturing and recognising. Raises EngineStartError when refused."""
        ...

    def stop(self) -> None:
        """Ask the engine to halt; ``on_end`` fires once the session terminates."""
        ...


class EngineFactory(Protocol):
    """Creates fresh engine instances. Raises EngineConstructionError on failure."""

    def create(self, options: EngineOptions) -> RecognitionEngine: ...
