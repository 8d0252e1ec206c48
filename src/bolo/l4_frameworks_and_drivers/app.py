"""DictationApp — Textual shell around the SessionController."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from textual.app import App as TextualApp
from textual.app import ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from bolo.l1_entities.config import AppConfig
from bolo.l1_entities.language import SELECTABLE_LANGUAGES
from bolo.l1_entities.session_state import SessionNotice, SessionSnapshot
from bolo.l2_use_cases.ports.clipboard import Clipboard
from bolo.l3_interface_adapters.controllers.session_controller import SessionController
from bolo.l3_interface_adapters.gateways.paths import LOG_DIR
from bolo.l4_frameworks_and_drivers.logging_setup import setup_file_logging
from bolo.l4_frameworks_and_drivers.messages import SessionNoticeRaised, SessionUpdated
from bolo.l4_frameworks_and_drivers.widgets.help_modal import HelpModal
from bolo.l4_frameworks_and_drivers.widgets.language_bar import LanguageBar
from bolo.l4_frameworks_and_drivers.widgets.status_bar import StatusBar
from bolo.l4_frameworks_and_drivers.widgets.transcript_panel import TranscriptPanel

log = logging.getLogger('bolo.app')

UNSUPPORTED_NOTICE = 'Speech recognition is not available: install pywhispercpp and connect a microphone.'


class DictationApp(TextualApp):
    """Live multilingual dictation: one transcript, five languages, a toggle and a copy key."""

    CSS_PATH = 'app.tcss'

    BINDINGS = [
        Binding('space', 'toggle_listening', 'Start/Stop', priority=True),
        Binding('c', 'copy_transcript', 'Copy', priority=True),
        Binding('x', 'clear_transcript', 'Clear', priority=True),
        Binding('h', 'show_help', 'Help', priority=True),
        Binding('q', 'quit_app', 'Quit', priority=True),
        *(
            Binding(str(i + 1), f'switch_language({i})', lang.label, show=False)
            for i, lang in enumerate(SELECTABLE_LANGUAGES)
        ),
    ]

    def __init__(
        self,
        config: AppConfig,
        controller: SessionController,
        clipboard: Clipboard,
        supported: bool = True,
        log_dir: Path | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self._config = config
        self._controller = controller
        self._clipboard = clipboard
        self._supported = supported
        self._unsubscribers: list[Callable[[], None]] = []

        setup_file_logging(log_dir or LOG_DIR)

    def compose(self) -> ComposeResult:
        yield Static('  bolo | dictate in English, Hindi, Hinglish, Tamil or Marathi', id='header')
        yield LanguageBar(id='language-bar')
        yield TranscriptPanel(id='transcript-panel')
        yield StatusBar(id='status-bar')

    def on_mount(self) -> None:
        bar = self.query_one('#status-bar', StatusBar)
        bar.supported = self._supported
        self._unsubscribers.append(self._controller.subscribe(self._post_snapshot))
        self._unsubscribers.append(self._controller.subscribe_notices(self._post_notice))
        if not self._supported:
            self.notify(UNSUPPORTED_NOTICE, severity='warning', timeout=10)

    def on_unmount(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def _post_snapshot(self, snapshot: SessionSnapshot) -> None:
        self.post_message(SessionUpdated(snapshot))

    def _post_notice(self, notice: SessionNotice) -> None:
        self.post_message(SessionNoticeRaised(notice))

    def _hints_for_state(self, listening: bool) -> str:
        if listening:
            return r'\[Space] stop  \[1-5] language  \[c] copy  \[x] clear  \[h] help'
        return r'\[Space] start  \[1-5] language  \[c] copy  \[x] clear  \[h] help  \[q] quit'

    # --- Message Handlers ---

    def on_session_updated(self, message: SessionUpdated) -> None:
        snap = message.snapshot
        self.query_one('#transcript-panel', TranscriptPanel).show(snap, supported=self._supported)

        lang_bar = self.query_one('#language-bar', LanguageBar)
        lang_bar.current = snap.state.current_language
        lang_bar.listening = snap.listening

        bar = self.query_one('#status-bar', StatusBar)
        bar.listening = snap.listening
        bar.detected = snap.state.last_classification
        bar.keybinding_hints = self._hints_for_state(snap.listening)

    def on_session_notice_raised(self, message: SessionNoticeRaised) -> None:
        notice = message.notice
        timeout = 10 if notice.severity == 'error' else 5
        self.notify(notice.message, severity=notice.severity, timeout=timeout)

    # --- Actions ---

    def action_toggle_listening(self) -> None:
        if not self._supported:
            self.notify(UNSUPPORTED_NOTICE, severity='warning', timeout=5)
            return
        self._controller.toggle()

    def action_switch_language(self, index: int) -> None:
        if not 0 <= index < len(SELECTABLE_LANGUAGES):
            return
        language = SELECTABLE_LANGUAGES[index]
        if language is self._controller.current_language:
            return
        self._controller.switch_language(language)
        if not self._controller.listening:
            self.notify(f'Language: {language.info.flag} {language.label}', timeout=2)

    def action_copy_transcript(self) -> None:
        text = self._controller.clipboard_text()
        if not text:
            self.notify('Nothing to copy yet', timeout=3)
            return
        if self._clipboard.copy(text):
            self.notify(f'Copied {len(text.split())} words to clipboard', timeout=3)
        else:
            self.notify('Clipboard unavailable', severity='error', timeout=5)

    def action_clear_transcript(self) -> None:
        self._controller.clear()
        self.notify('Transcript cleared', timeout=2)

    def action_show_help(self) -> None:
        if isinstance(self.screen, HelpModal):
            self.screen.dismiss()
            return

        self.push_screen(HelpModal(model_name=self._config.recognition.model))

    def action_quit_app(self) -> None:
        self._controller.stop()
        self.exit()
