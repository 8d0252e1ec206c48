"""Port: microphone capture stream."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class AudioSource(Protocol):
    """Mono float32 sample source feeding a recognition engine."""

    def open(self, sample_rate: int, channels: int) -> None:
        """Start capturing. Raises PermissionError when the OS refuses the device."""
        ...

    def read(self, timeout: float) -> np.ndarray | None:
        """Next captured block, or None when nothing arrived within *timeout*."""
        ...

    def close(self) -> None:
        """Stop capturing and release the device."""
        ...
