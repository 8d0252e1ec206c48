"""Language bar — selectable languages with the active one highlighted."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from bolo.l1_entities.language import SELECTABLE_LANGUAGES, Language


class LanguageBar(Static):
    DEFAULT_CSS = """
    LanguageBar {
        height: 1;
        padding: 0 1;
        background: $boost;
    }
    """

    current: reactive[Language] = reactive(Language.HINGLISH_AUTO)
    listening: reactive[bool] = reactive(False)

    def render(self) -> Text:
        line = Text()
        for i, lang in enumerate(SELECTABLE_LANGUAGES):
            info = lang.info
            label = f' {i + 1} {info.flag} {info.label} '
            if lang is self.current:
                line.append(label, style='bold reverse')
            else:
                line.append(label, style='dim')
            line.append(' ')
        if self.listening:
            line.append(f'● Live · {self.current.info.sublabel}', style='bold #f472b6')
        return line
