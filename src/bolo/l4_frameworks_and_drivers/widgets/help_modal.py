"""Help modal — language keys, the detected-script legend and the keybindings."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Markdown, Static

from bolo.l1_entities.classification import LEGEND
from bolo.l1_entities.language import SELECTABLE_LANGUAGES

KEYBINDINGS = (
    ('Space', 'Start / stop listening'),
    ('1-5', 'Switch language'),
    ('c', 'Copy transcript'),
    ('x', 'Clear transcript'),
    ('h', 'Toggle this help'),
    ('q', 'Quit'),
)


def languages_markdown() -> str:
    lines = ['| Key | Language | Recognised as |', '|-----|----------|---------------|']
    for i, lang in enumerate(SELECTABLE_LANGUAGES):
        info = lang.info
        lines.append(f'| `{i + 1}` | {info.flag} {info.label} | {info.sublabel} (`{lang.recognition_locale}`) |')
    return '\n'.join(lines)


def legend_text() -> Text:
    """One swatch per detected script, drawn in the colour the transcript uses."""
    text = Text()
    for item in LEGEND:
        text.append('██ ', style=item.color_token)
        text.append(f'{item.emoji} {item.label}\n')
    text.rstrip()
    return text


def keybindings_text() -> Text:
    text = Text()
    for key, action in KEYBINDINGS:
        text.append(f'{key:>7}', style='bold')
        text.append(f'  {action}\n')
    text.rstrip()
    return text


class HelpModal(ModalScreen[None]):
    DEFAULT_CSS = """
    HelpModal {
        align: center middle;
    }
    HelpModal > #help-card {
        width: 72;
        height: auto;
        max-height: 90%;
        background: $surface;
        border: round $accent;
        padding: 1 2;
    }
    HelpModal .help-heading {
        text-style: bold;
        color: $accent;
        margin-top: 1;
    }
    HelpModal #help-languages {
        height: auto;
        margin: 0;
    }
    HelpModal #help-footer {
        color: $text-muted;
        margin-top: 1;
    }
    """

    BINDINGS = [
        ('escape', 'dismiss', 'Close'),
        ('h', 'dismiss', 'Close'),
    ]

    def __init__(self, model_name: str, **kwargs) -> None:
        super().__init__(**kwargs)
        self.model_name = model_name

    def compose(self) -> ComposeResult:
        with Vertical(id='help-card'):
            yield Static('Languages', classes='help-heading')
            yield Markdown(languages_markdown(), id='help-languages')
            yield Static('Detected script', classes='help-heading')
            yield Static(legend_text(), id='help-legend')
            yield Static('Keys', classes='help-heading')
            yield Static(keybindings_text(), id='help-keys')
            yield Static(f'Model: {self.model_name}  ·  Escape or h to close', id='help-footer')
