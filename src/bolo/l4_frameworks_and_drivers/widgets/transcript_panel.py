"""Transcript panel — finalized segments coloured by detected script, interim text in italics."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widgets import Static

from bolo.l1_entities.session_state import SessionSnapshot

INTERIM_STYLE = 'italic #818cf8'


def render_transcript(snapshot: SessionSnapshot, supported: bool = True) -> Text:
    """Build the rich text shown in the panel for *snapshot*."""
    if not supported:
        return Text.assemble(
            ('⚠ Speech recognition not supported.\n', 'bold red'),
            ('No microphone was found, or the whisper backend (pywhispercpp) is not installed.', 'dim'),
        )
    if snapshot.is_empty:
        hint = 'Listening… speak now' if snapshot.listening else 'Press space to start dictating'
        return Text(hint, style='dim')

    text = Text()
    for seg in snapshot.segments:
        text.append(seg.text, style=f'underline {seg.classification.color_token}')
        text.append(' ')
    if snapshot.interim_text:
        text.append(snapshot.interim_text, style=INTERIM_STYLE)
    return text


class TranscriptPanel(VerticalScroll):
    """Auto-scrolling transcript view; re-rendered from each published snapshot."""

    DEFAULT_CSS = """
    TranscriptPanel {
        border: solid $primary;
        scrollbar-size: 1 1;
        padding: 0 1;
    }
    TranscriptPanel:focus {
        border: solid $accent;
    }
    TranscriptPanel > #transcript-body {
        height: auto;
    }
    """

    def __init__(self, title: str = 'Transcript', **kwargs) -> None:
        super().__init__(**kwargs)
        self.border_title = title
        self._plain = ''

    @property
    def plain_text(self) -> str:
        return self._plain

    def compose(self) -> ComposeResult:
        yield Static(id='transcript-body')

    def show(self, snapshot: SessionSnapshot, supported: bool = True) -> None:
        rendered = render_transcript(snapshot, supported)
        self._plain = rendered.plain
        self.query_one('#transcript-body', Static).update(rendered)
        if snapshot.segments:
            self.border_subtitle = f'{snapshot.word_count} words · {snapshot.char_count} chars'
        else:
            self.border_subtitle = ''
        self.scroll_end(animate=False)
