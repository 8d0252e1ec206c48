"""Port: configuration loader."""

from __future__ import annotations

from typing import Protocol


class ConfigLoader(Protocol):
    """Reads raw user configuration; validation happens in build_app_config."""

    def load_raw(self, config_path: str | None = None) -> dict:
        """Return user configuration as a raw dict, before validation."""
        ...
