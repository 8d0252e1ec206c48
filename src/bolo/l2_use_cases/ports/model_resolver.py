"""Port: whisper model resolution."""

from __future__ import annotations

from typing import Protocol


class ModelResolver(Protocol):
    """Maps a model name to a local file path, fetching it when needed."""

    def resolve(self, model_name: str) -> str:
        """Resolve a model name to a usable local path. Raises ModelResolutionError on failure."""
        ...
