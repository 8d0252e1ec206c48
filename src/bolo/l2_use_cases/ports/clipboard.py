"""Port: system clipboard."""

from __future__ import annotations

from typing import Protocol


class Clipboard(Protocol):
    def copy(self, text: str) -> bool:
        """Best-effort write. Returns False when the clipboard is unavailable."""
        ...
