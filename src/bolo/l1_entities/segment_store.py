"""Segment store — append-only transcript log plus one interim slot."""

from __future__ import annotations

from bolo.l1_entities.segment import Segment

SEPARATOR = ' '


class SegmentStore:
    """Ordered log of finalized segments and the live interim hypothesis.

    Insertion order reconstructs the transcript. Derived values (full text,
    counts) are recomputed from the log on every call.
    """

    def __init__(self) -> None:
        self._segments: list[Segment] = []
        self._interim: str = ''

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    @property
    def interim_text(self) -> str:
        return self._interim

    @property
    def is_empty(self) -> bool:
        return not self._segments and not self._interim

    def append(self, segment: Segment) -> None:
        self._segments.append(segment)

    def set_interim(self, text: str) -> None:
        self._interim = text

    def clear_interim(self) -> None:
        self._interim = ''

    def clear_all(self) -> None:
        self._segments.clear()
        self._interim = ''

    def full_text(self) -> str:
        return SEPARATOR.join(seg.text for seg in self._segments)

    def word_count(self) -> int:
        return len(self.full_text().split())

    def char_count(self) -> int:
        return len(self.full_text())

    def clipboard_text(self) -> str:
        """Finalized text plus any interim speech, as handed to the clipboard."""
        return f'{self.full_text()} {self._interim}'.strip()
