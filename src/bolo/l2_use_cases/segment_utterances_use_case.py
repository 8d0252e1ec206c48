"""Use case: split a continuous audio stream into utterances — VAD, interim snapshots, no-speech timeout."""

from __future__ import annotations

import numpy as np

from bolo.l1_entities.audio_constants import SAMPLE_RATE


def _rms(data: np.ndarray) -> float:
    if len(data) == 0:
        return 0.0
    return float(np.sqrt(np.mean(data**2)))


class SegmentUtterancesUseCase:
    """Energy-based utterance segmentation for continuous dictation.

    Does NO I/O — audio is fed in via ``feed_audio()``; the caller asks whether
    an utterance is complete (``should_finalize``), whether a provisional
    snapshot is due (``should_emit_interim``), and whether the stream has been
    silent long enough to end the session (``no_speech_timed_out``).
    """

    def __init__(
        self,
        silence_threshold: float = 0.01,
        pause_duration: float = 0.8,
        max_utterance: float = 15.0,
        interim_interval: float = 1.0,
        no_speech_timeout: float = 8.0,
        min_speech: float = 0.3,
        pre_roll: float = 0.3,
    ) -> None:
        self._silence_threshold = silence_threshold
        self._pause_samples = int(SAMPLE_RATE * pause_duration)
        self._max_samples = int(SAMPLE_RATE * max_utterance)
        self._interim_samples = int(SAMPLE_RATE * interim_interval)
        self._no_speech_samples = int(SAMPLE_RATE * no_speech_timeout)
        self._min_speech_samples = int(SAMPLE_RATE * min_speech)
        self._pre_roll_samples = int(SAMPLE_RATE * pre_roll)

        self._buffer = np.array([], dtype=np.float32)
        self._voiced_samples = 0
        self._since_voice = 0  # samples since the last voiced block (or since start)
        self._since_interim = 0

    @property
    def in_utterance(self) -> bool:
        return self._voiced_samples > 0

    def feed_audio(self, data: np.ndarray) -> None:
        """Append one captured block and update voice-activity counters."""
        block = data.flatten().astype(np.float32, copy=False)
        self._buffer = np.concatenate([self._buffer, block])

        if _rms(block) >= self._silence_threshold:
            self._voiced_samples += len(block)
            self._since_voice = 0
        else:
            self._since_voice += len(block)

        if self.in_utterance:
            self._since_interim += len(block)
            # A click or cough too short to be speech: drop it once the pause confirms it.
            if self._since_voice >= self._pause_samples and self._voiced_samples < self._min_speech_samples:
                self._reset_utterance(keep_tail=True)
        elif len(self._buffer) > self._pre_roll_samples:
            self._buffer = self._buffer[-self._pre_roll_samples :] if self._pre_roll_samples > 0 else self._buffer[:0]

    def should_finalize(self) -> bool:
        """True when the current utterance ended in a pause or hit the length cap."""
        if self._voiced_samples < self._min_speech_samples:
            return False
        return self._since_voice >= self._pause_samples or len(self._buffer) >= self._max_samples

    def should_emit_interim(self) -> bool:
        return self.in_utterance and self._since_interim >= self._interim_samples and not self.should_finalize()

    def interim_snapshot(self) -> np.ndarray:
        """Copy of the utterance so far; restarts the interim interval."""
        self._since_interim = 0
        return self._buffer.copy()

    def take_utterance(self) -> np.ndarray:
        """Hand over the finished utterance and start listening for the next one."""
        utterance = self._buffer
        self._reset_utterance(keep_tail=False)
        return utterance

    def no_speech_timed_out(self) -> bool:
        """True once nothing voiced has been heard for the no-speech timeout."""
        return not self.in_utterance and self._since_voice >= self._no_speech_samples

    def flush(self) -> np.ndarray | None:
        """Remaining utterance on shutdown, or None when it holds no real speech."""
        if self._voiced_samples < self._min_speech_samples:
            return None
        return self.take_utterance()

    def _reset_utterance(self, *, keep_tail: bool) -> None:
        if keep_tail and self._pre_roll_samples > 0:
            self._buffer = self._buffer[-self._pre_roll_samples :]
        else:
            self._buffer = np.array([], dtype=np.float32)
        self._voiced_samples = 0
        self._since_interim = 0
