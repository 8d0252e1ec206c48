"""Port: offline speech-to-text model."""

from __future__ import annotations

from typing import Protocol

import numpy as np


class Transcriber(Protocol):
    """Turns one utterance of 16 kHz mono audio into text. Zero framework types leak through."""

    def load_model(self, model_path: str) -> None:
        """Load the transcription model from the given path."""
        ...

    def transcribe(self, audio: np.ndarray, language: str) -> str:
        """Transcribe *audio*; returns stripped text, possibly empty."""
        ...

    def close(self) -> None:
        """Release underlying resources."""
        ...
