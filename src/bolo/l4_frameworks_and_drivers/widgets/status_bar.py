"""Status bar — listening state, detected script, legend and keybinding hints."""

from __future__ import annotations

from rich.cells import cell_len
from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from bolo.l1_entities.classification import LEGEND, ClassificationResult


class StatusBar(Static):
    DEFAULT_CSS = """
    StatusBar {
        dock: bottom;
        height: auto;
        background: $surface;
        color: $text;
        padding: 0 1;
        overflow: hidden hidden;
    }
    """

    listening: reactive[bool] = reactive(False)
    supported: reactive[bool] = reactive(True)
    detected: reactive[ClassificationResult | None] = reactive(None)
    keybinding_hints: reactive[str] = reactive('')

    def status_label(self) -> str:
        if not self.supported:
            return 'Speech recognition unavailable'
        if not self.listening:
            return 'Press space to start'
        if self.detected is not None:
            return f'Detected: {self.detected.emoji} {self.detected.label}'
        return 'Listening… speak now'

    def render(self) -> Text:
        line = Text()
        if self.listening:
            line.append('● Listening', style='bold #f472b6')
        else:
            line.append('○ Idle', style='dim')
        line.append(' │ ')
        label_style = self.detected.color_token if self.listening and self.detected is not None else '#94a3b8'
        line.append(self.status_label(), style=label_style)
        line.append(' │ ')
        for item in LEGEND:
            line.append('■ ', style=item.color_token)
            line.append(f'{item.label} ', style='dim')

        if self.keybinding_hints:
            hints = Text.from_markup(self.keybinding_hints, style='dim')
            content_width = (self.size.width or 80) - 2
            gap = content_width - cell_len(line.plain) - cell_len(hints.plain)
            if gap >= 2:
                line.append(' ' * gap)
                line.append_text(hints)
        return line
