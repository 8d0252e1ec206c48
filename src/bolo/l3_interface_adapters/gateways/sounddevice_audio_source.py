"""Gateway: sounddevice microphone source — implements AudioSource port."""

from __future__ import annotations

import queue

import numpy as np
import sounddevice as sd

from bolo.l1_entities.audio_constants import SAMPLE_RATE


class SounddeviceAudioSource:
    """Wraps sounddevice.InputStream; blocks arrive on a queue from the PortAudio thread."""

    def __init__(self, block_duration: float = 0.1) -> None:
        self._block_duration = block_duration
        self._stream: sd.InputStream | None = None
        self._queue: queue.Queue[np.ndarray] = queue.Queue()

    def open(self, sample_rate: int = SAMPLE_RATE, channels: int = 1) -> None:
        def _callback(indata, frames, time_info, status):
            self._queue.put(indata.copy())

        try:
            self._stream = sd.InputStream(
                samplerate=sample_rate,
                channels=channels,
                dtype='float32',
                blocksize=int(sample_rate * self._block_duration),
                callback=_callback,
            )
            self._stream.start()
        except sd.PortAudioError as e:
            self._stream = None
            if 'permission' in str(e).lower() or 'not authorized' in str(e).lower():
                raise PermissionError(str(e)) from e
            raise

    def read(self, timeout: float = 0.1) -> np.ndarray | None:
        try:
            return self._queue.get(timeout=timeout).flatten()
        except queue.Empty:
            return None

    def close(self) -> None:
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        while not self._queue.empty():
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break


def has_input_device() -> bool:
    """True when PortAudio reports at least one capture device."""
    try:
        devices = sd.query_devices()
    except sd.PortAudioError:
        return False
    return any(d['max_input_channels'] > 0 for d in devices)
