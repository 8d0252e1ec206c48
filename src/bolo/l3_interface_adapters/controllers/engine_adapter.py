"""RecognitionEngineAdapter — one engine instance, translated into controller events."""

from __future__ import annotations

import logging
from collections.abc import Callable

from bolo.l1_entities.errors import EngineConstructionError, EngineStartError
from bolo.l1_entities.recognition import (
    EngineOptions,
    RecognitionError,
    RecognitionResultEvent,
    classify_error,
)
from bolo.l2_use_cases.ports.recognition_engine import EngineFactory, RecognitionEngine

log = logging.getLogger('bolo.engine')

HypothesisHandler = Callable[[str, str], None]  # (final_chunk, interim_chunk)
RecognitionErrorHandler = Callable[[RecognitionError], None]
SessionEndedHandler = Callable[[], None]


class RecognitionEngineAdapter:
    """Owns exactly one engine instance for one activation.

    The engine is configured once at construction (continuous, interim results,
    single alternative, fixed language) and is never restarted: a fresh adapter
    is built for every activation.
    """

    def __init__(
        self,
        factory: EngineFactory,
        language_code: str,
        on_hypothesis: HypothesisHandler,
        on_error: RecognitionErrorHandler,
        on_session_ended: SessionEndedHandler,
    ) -> None:
        self.language_code = language_code
        self._on_hypothesis = on_hypothesis
        self._on_error = on_error
        self._on_session_ended: SessionEndedHandler | None = on_session_ended
        self._attached = True
        self._activated = False

        options = EngineOptions(language_code=language_code)
        try:
            self._engine: RecognitionEngine = factory.create(options)
        except EngineConstructionError:
            raise
        except Exception as e:
            raise EngineConstructionError(f'Could not create recognition engine for {language_code}: {e}') from e

        self._engine.on_result = self._handle_result
        self._engine.on_error = self._handle_error
        self._engine.on_end = self._handle_end

    @property
    def is_attached(self) -> bool:
        return self._attached

    def activate(self) -> None:
        if self._activated:
            raise EngineStartError('Adapter already activated; build a new one')
        self._activated = True
        try:
            self._engine.start()
        except EngineStartError:
            self._detach()
            raise
        except Exception as e:
            self._detach()
            raise EngineStartError(f'Recognition engine refused to start: {e}') from e
        log.debug('Engine activated (%s)', self.language_code)

    def detach_session_end(self) -> None:
        """Stop listening for session-end before a controller-requested halt."""
        self._on_session_ended = None
        self._engine.on_end = None

    def deactivate(self) -> None:
        """Detach every handler, then halt the engine."""
        if not self._attached:
            return
        self._detach()
        try:
            self._engine.stop()
        except Exception as e:  # noqa: BLE001 -- engine already detached; a failed halt has no listener left
            log.debug('Engine stop raised after detach: %s', e)
        log.debug('Engine deactivated (%s)', self.language_code)

    def _detach(self) -> None:
        self.detach_session_end()
        self._attached = False
        self._engine.on_result = None
        self._engine.on_error = None

    # --- Engine callbacks ---

    def _handle_result(self, event: RecognitionResultEvent) -> None:
        if not self._attached:
            return
        final_chunk = ''
        interim_chunk = ''
        for result in event.results[event.result_index :]:
            if result.is_final:
                final_chunk += result.transcript
            else:
                interim_chunk += result.transcript
        self._on_hypothesis(final_chunk, interim_chunk)

    def _handle_error(self, code: str, message: str = '') -> None:
        if not self._attached:
            return
        self._on_error(classify_error(code, message))

    def _handle_end(self) -> None:
        handler = self._on_session_ended
        if handler is None:
            return
        handler()
