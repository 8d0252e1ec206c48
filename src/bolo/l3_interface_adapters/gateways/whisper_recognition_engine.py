"""Gateway: local whisper.cpp recognition engine — implements RecognitionEngine and EngineFactory ports.

Emulates a platform speech engine on top of microphone capture and offline
whisper inference: continuous sessions, interim hypotheses while the speaker
is mid-utterance, a no-speech timeout that ends the session, and every event
delivered on the event loop that started the session.
"""

from __future__ import annotations

import asyncio
import importlib.util
import logging
import threading
from collections.abc import Callable

import numpy as np

from bolo.l1_entities.audio_constants import SAMPLE_RATE
from bolo.l1_entities.config import RecognitionConfig
from bolo.l1_entities.errors import EngineConstructionError, EngineStartError, ModelResolutionError
from bolo.l1_entities.recognition import (
    ERROR_AUDIO_CAPTURE,
    ERROR_LANGUAGE_NOT_SUPPORTED,
    ERROR_NO_SPEECH,
    ERROR_NOT_ALLOWED,
    EngineOptions,
    RecognitionResult,
    RecognitionResultEvent,
)
from bolo.l2_use_cases.ports.audio_source import AudioSource
from bolo.l2_use_cases.ports.model_resolver import ModelResolver
from bolo.l2_use_cases.ports.transcriber import Transcriber
from bolo.l2_use_cases.segment_utterances_use_case import SegmentUtterancesUseCase

log = logging.getLogger('bolo.engine')

ERROR_ENGINE_FAILURE = 'engine-failure'


def _default_transcriber() -> Transcriber:  # pragma: no cover -- default wiring; transcriber always injected in tests
    from bolo.l3_interface_adapters.gateways.whisper_transcriber import (  # noqa: PLC0415 -- deferred: pywhispercpp loaded only when a session starts
        WhisperTranscriber,
    )

    return WhisperTranscriber()


def _default_resolver() -> ModelResolver:  # pragma: no cover -- default wiring; resolver always injected in tests
    from bolo.l3_interface_adapters.gateways.hf_model_resolver import (  # noqa: PLC0415 -- deferred: huggingface_hub loaded only when a session starts
        HfModelResolver,
    )

    return HfModelResolver()


def _default_audio_source() -> AudioSource:  # pragma: no cover -- default wiring; audio source always injected in tests
    from bolo.l3_interface_adapters.gateways.sounddevice_audio_source import (  # noqa: PLC0415 -- deferred: PortAudio opened only when a session starts
        SounddeviceAudioSource,
    )

    return SounddeviceAudioSource()


def whisper_language(locale: str) -> str:
    """whisper.cpp takes the primary language subtag: ``hi-IN`` → ``hi``."""
    return locale.split('-')[0].lower()


def recognition_supported() -> bool:
    """Capability probe run once at startup: whisper binding importable and a mic present."""
    if importlib.util.find_spec('pywhispercpp') is None:
        return False
    from bolo.l3_interface_adapters.gateways.sounddevice_audio_source import (  # noqa: PLC0415 -- deferred: PortAudio probed only at startup
        has_input_device,
    )

    return has_input_device()


class SharedWhisperModel:
    """One loaded whisper model per process, shared by successive engine instances.

    Loading is lazy (first use, on a worker thread) and every call holds a
    lock, so an engine still winding down never runs inference concurrently
    with its replacement.
    """

    def __init__(
        self,
        config: RecognitionConfig,
        resolver: ModelResolver | None = None,
        transcriber_factory: Callable[[], Transcriber] | None = None,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._transcriber_factory = transcriber_factory or _default_transcriber
        self._lock = threading.Lock()
        self._transcriber: Transcriber | None = None
        self._model_name: str | None = None

    @property
    def model_name(self) -> str | None:
        return self._model_name

    def warm_up(self, locale: str) -> None:
        with self._lock:
            self._ensure_loaded(locale)

    def transcribe(self, audio: np.ndarray, locale: str) -> str:
        with self._lock:
            transcriber = self._ensure_loaded(locale)
            return transcriber.transcribe(audio, whisper_language(locale))

    def close(self) -> None:
        with self._lock:
            if self._transcriber is not None:
                self._transcriber.close()
            self._transcriber = None
            self._model_name = None

    def _ensure_loaded(self, locale: str) -> Transcriber:
        wanted = self._config.model_for_locale(locale)
        if self._transcriber is not None and self._model_name == wanted:
            return self._transcriber

        if self._transcriber is not None:
            self._transcriber.close()
            self._transcriber = None
            self._model_name = None

        if self._resolver is None:
            self._resolver = _default_resolver()
        model_path = self._resolver.resolve(wanted)
        log.info('Loading whisper model %s (%s)', wanted, model_path)
        transcriber = self._transcriber_factory()
        transcriber.load_model(model_path)
        self._transcriber = transcriber
        self._model_name = wanted
        return transcriber


class WhisperRecognitionEngine:
    """One recognition session: a capture/inference thread plus loop-side event delivery.

    Handlers are looked up when an event is delivered on the loop, so a
    handler set to None before delivery silently drops the event.
    """

    def __init__(
        self,
        options: EngineOptions,
        model: SharedWhisperModel,
        config: RecognitionConfig,
        audio_source_factory: Callable[[], AudioSource] | None = None,
    ) -> None:
        self.options = options
        self.on_result: Callable[[RecognitionResultEvent], None] | None = None
        self.on_error: Callable[[str, str], None] | None = None
        self.on_end: Callable[[], None] | None = None

        self._model = model
        self._config = config
        self._audio_source_factory = audio_source_factory or _default_audio_source
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._halt = threading.Event()
        self._final_count = 0  # worker thread only

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self._thread is not None:
            raise EngineStartError('Recognition session already started')
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise EngineStartError('Recognition must be started from a running event loop') from e
        self._thread = threading.Thread(
            target=self._run,
            name=f'bolo-engine-{self.options.language_code}',
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        self._halt.set()

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    # --- Worker thread ---

    def _run(self) -> None:
        try:
            self._recognise()
        except Exception as e:
            log.error('Recognition worker failed: %s', e, exc_info=True)
            self._emit('on_error', ERROR_ENGINE_FAILURE, str(e))
        finally:
            self._emit('on_end')

    def _recognise(self) -> None:
        locale = self.options.language_code
        try:
            self._model.warm_up(locale)
        except ModelResolutionError as e:
            log.error('Whisper model unavailable for %s: %s', locale, e)
            self._emit('on_error', ERROR_LANGUAGE_NOT_SUPPORTED, str(e))
            return

        source = self._audio_source_factory()
        try:
            source.open(SAMPLE_RATE, 1)
        except PermissionError as e:
            self._emit('on_error', ERROR_NOT_ALLOWED, str(e))
            return
        except Exception as e:
            log.error('Audio capture failed: %s', e, exc_info=True)
            self._emit('on_error', ERROR_AUDIO_CAPTURE, str(e))
            return

        try:
            self._capture_loop(source, locale)
        finally:
            source.close()

    def _capture_loop(self, source: AudioSource, locale: str) -> None:
        rc = self._config
        segmenter = SegmentUtterancesUseCase(
            silence_threshold=rc.silence_threshold,
            pause_duration=rc.pause_duration,
            max_utterance=rc.max_utterance,
            interim_interval=rc.interim_interval,
            no_speech_timeout=rc.no_speech_timeout,
        )

        while not self._halt.is_set():
            data = source.read(timeout=0.1)
            if data is None:
                continue
            segmenter.feed_audio(data)

            if segmenter.should_finalize():
                self._recognise_final(segmenter.take_utterance(), locale)
                if not self.options.continuous:
                    return
            elif self.options.interim_results and segmenter.should_emit_interim():
                self._recognise_interim(segmenter.interim_snapshot(), locale)
            elif segmenter.no_speech_timed_out():
                if not self._final_count:
                    self._emit('on_error', ERROR_NO_SPEECH, 'No speech was detected')
                log.debug('Silence timeout; ending session (%s)', locale)
                return

        # stop(): finish what was already heard, like a platform engine does.
        remaining = segmenter.flush()
        if remaining is not None:
            self._recognise_final(remaining, locale)

    def _recognise_final(self, audio: np.ndarray, locale: str) -> None:
        text = self._model.transcribe(audio, locale)
        if not text:
            # Nothing recognisable: clear whatever interim text is showing.
            self._emit_results(RecognitionResult(alternatives=[''], is_final=False))
            return
        self._emit_results(RecognitionResult(alternatives=[text], is_final=True))
        self._final_count += 1

    def _recognise_interim(self, audio: np.ndarray, locale: str) -> None:
        text = self._model.transcribe(audio, locale)
        self._emit_results(RecognitionResult(alternatives=[text], is_final=False))

    def _emit_results(self, current: RecognitionResult) -> None:
        # Earlier finals were already delivered; each event carries only the newest result.
        event = RecognitionResultEvent(results=[current], result_index=0)
        self._emit('on_result', event)

    def _emit(self, handler_name: str, *args) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        try:
            loop.call_soon_threadsafe(self._deliver, handler_name, args)
        except RuntimeError:
            log.debug('Event loop closed; dropped %s', handler_name)

    # --- Event loop ---

    def _deliver(self, handler_name: str, args: tuple) -> None:
        handler = getattr(self, handler_name)
        if handler is None:
            return
        handler(*args)


class WhisperEngineFactory:
    """Builds a fresh WhisperRecognitionEngine per activation, sharing one loaded model."""

    def __init__(
        self,
        config: RecognitionConfig,
        model: SharedWhisperModel | None = None,
        audio_source_factory: Callable[[], AudioSource] | None = None,
    ) -> None:
        self._config = config
        self._model = model or SharedWhisperModel(config)
        self._audio_source_factory = audio_source_factory

    def create(self, options: EngineOptions) -> WhisperRecognitionEngine:
        language = whisper_language(options.language_code)
        if not language.isalpha() or len(language) not in (2, 3):
            raise EngineConstructionError(f'Unsupported locale for whisper: {options.language_code!r}')
        if options.max_alternatives != 1:
            raise EngineConstructionError('whisper.cpp produces a single alternative per result')
        return WhisperRecognitionEngine(
            options,
            self._model,
            self._config,
            audio_source_factory=self._audio_source_factory,
        )

    def close(self) -> None:
        self._model.close()
