"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest

from bolo.l1_entities.config import AppConfig
from bolo.l1_entities.errors import EngineConstructionError, EngineStartError
from bolo.l1_entities.recognition import EngineOptions, RecognitionResult, RecognitionResultEvent
from bolo.l4_frameworks_and_drivers.infra_config import build_app_config

# --- Protocol-conforming Fakes ---


class FakeRecognitionEngine:
    """Fake engine — records lifecycle calls; tests fire events through the emit_* helpers.

    Emitters read the handler attributes at call time, the way a real engine
    delivers events, so a detached handler silently drops the event.
    """

    def __init__(self, options: EngineOptions, fail_start: bool = False) -> None:
        self.options = options
        self.on_result: Callable[[RecognitionResultEvent], None] | None = None
        self.on_error: Callable[[str, str], None] | None = None
        self.on_end: Callable[[], None] | None = None
        self.start_calls = 0
        self.stop_calls = 0
        self._fail_start = fail_start

    @property
    def started(self) -> bool:
        return self.start_calls > 0

    @property
    def stopped(self) -> bool:
        return self.stop_calls > 0

    def start(self) -> None:
        self.start_calls += 1
        if self._fail_start:
            raise RuntimeError('engine refused to start')

    def stop(self) -> None:
        self.stop_calls += 1

    # --- Test helpers ---

    def emit_results(self, *results: tuple[str, bool], result_index: int = 0) -> None:
        if self.on_result is None:
            return
        event = RecognitionResultEvent(
            results=[RecognitionResult(alternatives=[text], is_final=is_final) for text, is_final in results],
            result_index=result_index,
        )
        self.on_result(event)

    def emit_final(self, text: str) -> None:
        self.emit_results((text, True))

    def emit_interim(self, text: str) -> None:
        self.emit_results((text, False))

    def emit_error(self, code: str, message: str = '') -> None:
        if self.on_error is not None:
            self.on_error(code, message)

    def emit_end(self) -> None:
        if self.on_end is not None:
            self.on_end()


class FakeEngineFactory:
    """Fake engine factory — keeps every engine it built, newest last."""

    def __init__(self) -> None:
        self.engines: list[FakeRecognitionEngine] = []
        self.fail_create = False
        self.fail_start = False

    @property
    def last(self) -> FakeRecognitionEngine:
        return self.engines[-1]

    @property
    def live(self) -> list[FakeRecognitionEngine]:
        """Engines that were started and never asked to stop."""
        return [e for e in self.engines if e.started and not e.stopped]

    def create(self, options: EngineOptions) -> FakeRecognitionEngine:
        if self.fail_create:
            raise EngineConstructionError(f'no engine for {options.language_code}')
        engine = FakeRecognitionEngine(options, fail_start=self.fail_start)
        self.engines.append(engine)
        return engine


class StartRefusingEngine(FakeRecognitionEngine):
    def start(self) -> None:
        self.start_calls += 1
        raise EngineStartError('already started')


class FakeScheduledCall:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.ran = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual clock scheduler — nothing runs until ``advance()``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.calls: list[FakeScheduledCall] = []

    @property
    def pending(self) -> list[FakeScheduledCall]:
        return [c for c in self.calls if not c.cancelled and not c.ran]

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeScheduledCall:
        call = FakeScheduledCall(self.now + delay, callback)
        self.calls.append(call)
        return call

    def advance(self, seconds: float) -> None:
        self.now += seconds
        for call in sorted(self.pending, key=lambda c: c.due):
            if call.due <= self.now and not call.cancelled:
                call.ran = True
                call.callback()

    def run_pending(self) -> None:
        for call in list(self.pending):
            call.ran = True
            call.callback()


class FakeClock:
    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeClipboard:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.copied: list[str] = []

    def copy(self, text: str) -> bool:
        if not self.ok:
            return False
        self.copied.append(text)
        return True


class FakeTranscriber:
    """Fake transcriber — returns queued texts in order, then the fallback."""

    def __init__(self, texts: list[str] | None = None, fallback: str = '') -> None:
        self._texts = list(texts or [])
        self._fallback = fallback
        self.load_model_calls: list[str] = []
        self.transcribe_calls: list[tuple[np.ndarray, str]] = []
        self.close_calls = 0

    def load_model(self, model_path: str) -> None:
        self.load_model_calls.append(model_path)

    def transcribe(self, audio: np.ndarray, language: str) -> str:
        self.transcribe_calls.append((audio, language))
        if self._texts:
            return self._texts.pop(0)
        return self._fallback

    def close(self) -> None:
        self.close_calls += 1


class FakeModelResolver:
    def __init__(self, error: Exception | None = None) -> None:
        self.resolve_calls: list[str] = []
        self._error = error

    def resolve(self, model_name: str) -> str:
        self.resolve_calls.append(model_name)
        if self._error is not None:
            raise self._error
        return f'/models/{model_name}.bin'


class FakeAudioSource:
    """Fake audio source — serves queued blocks, then None until closed."""

    def __init__(self, chunks: list[np.ndarray] | None = None, open_error: Exception | None = None) -> None:
        self._chunks = list(chunks or [])
        self._open_error = open_error
        self.open_calls: list[tuple[int, int]] = []
        self.close_calls: int = 0
        self._idx = 0

    @property
    def exhausted(self) -> bool:
        return self._idx >= len(self._chunks)

    def open(self, sample_rate: int, channels: int) -> None:
        self.open_calls.append((sample_rate, channels))
        if self._open_error is not None:
            raise self._open_error

    def read(self, timeout: float = 0.1) -> np.ndarray | None:
        if self._idx >= len(self._chunks):
            return None
        chunk = self._chunks[self._idx]
        self._idx += 1
        return chunk

    def close(self) -> None:
        self.close_calls += 1


def speech_block(seconds: float, amplitude: float = 0.2) -> np.ndarray:
    return np.full(round(16000 * seconds), amplitude, dtype=np.float32)


def silence_block(seconds: float) -> np.ndarray:
    return np.zeros(round(16000 * seconds), dtype=np.float32)


# --- Standard Fixtures ---


@pytest.fixture
def default_config() -> AppConfig:
    return build_app_config({})


@pytest.fixture
def engine_factory() -> FakeEngineFactory:
    return FakeEngineFactory()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
session:
  default_language: "ta-IN"
  settle_delay: 0.5
recognition:
  model: "small"
  models:
    hi: "large-v3-turbo-q5_0"
  pause_duration: 1.2
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
