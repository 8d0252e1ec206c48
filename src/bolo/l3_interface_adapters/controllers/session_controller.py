"""SessionController — owns the listening state machine and publishes snapshots."""

from __future__ import annotations

import logging
import time
from collections import deque
from collections.abc import Callable

from bolo.l1_entities.errors import EngineConstructionError, EngineStartError
from bolo.l1_entities.language import Language
from bolo.l1_entities.recognition import RecognitionError, RecognitionErrorKind
from bolo.l1_entities.segment import Segment
from bolo.l1_entities.segment_store import SegmentStore
from bolo.l1_entities.session_state import SessionNotice, SessionSnapshot, SessionState, Severity
from bolo.l2_use_cases.ports.recognition_engine import EngineFactory
from bolo.l2_use_cases.ports.scheduler import ScheduledCall, Scheduler
from bolo.l2_use_cases.utils.text_classifier import classify
from bolo.l3_interface_adapters.controllers.engine_adapter import RecognitionEngineAdapter

log = logging.getLogger('bolo.controller')

SnapshotListener = Callable[[SessionSnapshot], None]
NoticeListener = Callable[[SessionNotice], None]

PERMISSION_DENIED_NOTICE = 'Microphone access denied. Allow microphone access for this terminal and start again.'


class SessionController:
    """Central state machine between the TUI and the recognition engine.

    The controller is the single source of truth for listening intent; the
    TUI only renders published ``SessionSnapshot`` objects. At most one
    engine adapter is live at any time: every path that replaces or ends an
    engine detaches the old adapter before halting it.
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        scheduler: Scheduler,
        *,
        language: Language = Language.HINGLISH_AUTO,
        settle_delay: float = 0.25,
        restart_burst_limit: int = 5,
        restart_burst_window: float = 2.0,
        store: SegmentStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = engine_factory
        self._scheduler = scheduler
        self._settle_delay = settle_delay
        self._restart_burst_limit = restart_burst_limit
        self._restart_burst_window = restart_burst_window
        self._clock = clock

        self.store = store if store is not None else SegmentStore()
        self._state = SessionState(current_language=language)
        self._adapter: RecognitionEngineAdapter | None = None
        self._pending_start: ScheduledCall | None = None
        self._restart_times: deque[float] = deque(maxlen=restart_burst_limit + 1)

        self._listeners: list[SnapshotListener] = []
        self._notice_listeners: list[NoticeListener] = []

    # --- Read side ---

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def listening(self) -> bool:
        return self._state.listening

    @property
    def current_language(self) -> Language:
        return self._state.current_language

    @property
    def has_live_engine(self) -> bool:
        return self._adapter is not None

    @property
    def switch_pending(self) -> bool:
        return self._pending_start is not None

    def snapshot(self) -> SessionSnapshot:
        full_text = self.store.full_text()
        return SessionSnapshot(
            state=self._state,
            segments=self.store.segments,
            interim_text=self.store.interim_text,
            full_text=full_text,
            word_count=len(full_text.split()),
            char_count=len(full_text),
        )

    def clipboard_text(self) -> str:
        return self.store.clipboard_text()

    def subscribe(self, listener: SnapshotListener) -> Callable[[], None]:
        """Register for snapshots; the listener gets the current one immediately."""
        self._listeners.append(listener)
        listener(self.snapshot())

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def subscribe_notices(self, listener: NoticeListener) -> Callable[[], None]:
        self._notice_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._notice_listeners:
                self._notice_listeners.remove(listener)

        return unsubscribe

    # --- Commands ---

    def start(self, language_override: Language | None = None) -> bool:
        """Begin listening, replacing any live engine. Returns False if the engine could not start."""
        self._cancel_pending_start()
        if self._adapter is not None:
            self._teardown_adapter()

        language = language_override or self._state.current_language
        self._restart_times.clear()
        try:
            self._activate_adapter(language.recognition_locale)
        except (EngineConstructionError, EngineStartError) as e:
            log.error('Could not start recognition: %s', e)
            self._state = SessionState(current_language=language)
            self.store.clear_interim()
            self._publish()
            self._notify(f'Could not start recognition: {e}', severity='error')
            return False

        self._state = SessionState(listening=True, current_language=language)
        log.info('Listening (%s → %s)', language.value, language.recognition_locale)
        self._publish()
        return True

    def stop(self) -> None:
        """Stop listening. A halt requested here is never treated as an unexpected end."""
        self._cancel_pending_start()
        was_listening = self._state.listening
        self._teardown_adapter()
        self.store.clear_interim()
        self._state = SessionState(current_language=self._state.current_language)
        if was_listening:
            log.info('Stopped listening')
        self._publish()

    def toggle(self) -> bool:
        if self._state.listening:
            self.stop()
            return True
        return self.start()

    def switch_language(self, language: Language) -> None:
        """Select *language*; a live session restarts on it after the settle delay."""
        self._cancel_pending_start()
        self._state = self._state.model_copy(update={'current_language': language, 'last_classification': None})
        if self._state.listening:
            self._teardown_adapter()
            self.store.clear_interim()
            self._pending_start = self._scheduler.call_later(self._settle_delay, lambda: self._deferred_start(language))
            log.info('Switching to %s in %.2fs', language.value, self._settle_delay)
        self._publish()

    def clear(self) -> None:
        """Stop listening and discard the whole transcript."""
        self.stop()
        self.store.clear_all()
        self._publish()

    # --- Engine events ---

    def _on_hypothesis(self, adapter: RecognitionEngineAdapter, final_chunk: str, interim_chunk: str) -> None:
        if adapter is not self._adapter:
            return
        if final_chunk.strip():
            detected = classify(final_chunk, hint=self._state.current_language)
            self.store.append(Segment(text=final_chunk.strip(), classification=detected))
            self.store.clear_interim()
            self._state = self._state.model_copy(update={'last_classification': detected})
        else:
            self.store.set_interim(interim_chunk)
        self._publish()

    def _on_error(self, adapter: RecognitionEngineAdapter, error: RecognitionError) -> None:
        if adapter is not self._adapter:
            return
        if error.kind is RecognitionErrorKind.PERMISSION_DENIED:
            log.warning('Recognition permission denied: %s', error.detail)
            self.stop()
            self._notify(PERMISSION_DENIED_NOTICE, severity='error')
        elif error.is_benign:
            log.debug('Benign recognition error: %s', error.kind.value)
        else:
            log.warning('Speech recognition error: %s', error.detail)

    def _on_session_ended(self, adapter: RecognitionEngineAdapter) -> None:
        if adapter is not self._adapter:
            return
        # Intent is read now, not when the session started.
        if not self._state.listening:
            self._teardown_adapter()
            return

        self._teardown_adapter()
        if self._restart_storm():
            log.error(
                'Recognition ended %d times within %.1fs; giving up',
                len(self._restart_times),
                self._restart_burst_window,
            )
            self.stop()
            self._notify('Recognition keeps ending immediately; stopped listening.', severity='error')
            return

        try:
            self._activate_adapter(self._state.current_language.recognition_locale)
        except (EngineConstructionError, EngineStartError) as e:
            log.error('Auto-restart failed: %s', e)
            self.stop()
            self._notify(f'Could not restart recognition: {e}', severity='error')
            return
        log.debug('Auto-restarted recognition session')

    # --- Internals ---

    def _activate_adapter(self, locale: str) -> None:
        adapter: RecognitionEngineAdapter | None = None

        def on_hypothesis(final_chunk: str, interim_chunk: str) -> None:
            self._on_hypothesis(adapter, final_chunk, interim_chunk)  # type: ignore[arg-type]

        def on_error(error: RecognitionError) -> None:
            self._on_error(adapter, error)  # type: ignore[arg-type]

        def on_session_ended() -> None:
            self._on_session_ended(adapter)  # type: ignore[arg-type]

        adapter = RecognitionEngineAdapter(
            self._factory,
            locale,
            on_hypothesis=on_hypothesis,
            on_error=on_error,
            on_session_ended=on_session_ended,
        )
        self._adapter = adapter
        try:
            adapter.activate()
        except EngineStartError:
            self._adapter = None
            raise

    def _teardown_adapter(self) -> None:
        adapter = self._adapter
        if adapter is None:
            return
        self._adapter = None
        adapter.detach_session_end()
        adapter.deactivate()

    def _deferred_start(self, language: Language) -> None:
        self._pending_start = None
        if not self._state.listening:
            return
        self.start(language)

    def _cancel_pending_start(self) -> None:
        if self._pending_start is not None:
            self._pending_start.cancel()
            self._pending_start = None

    def _restart_storm(self) -> bool:
        now = self._clock()
        self._restart_times.append(now)
        recent = [t for t in self._restart_times if now - t <= self._restart_burst_window]
        return len(recent) > self._restart_burst_limit

    def _publish(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def _notify(self, message: str, *, severity: Severity = 'information') -> None:
        notice = SessionNotice(message=message, severity=severity)
        for listener in list(self._notice_listeners):
            listener(notice)
