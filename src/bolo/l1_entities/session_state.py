"""Session state entities published by the controller."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from bolo.l1_entities.classification import ClassificationResult
from bolo.l1_entities.language import Language
from bolo.l1_entities.segment import Segment


class SessionState(BaseModel):
    """Listening intent, selected language and the last detected script.

    ``last_classification`` is only set while listening and after at least
    one segment finalized since the last start or language switch.
    """

    model_config = {'frozen': True}

    listening: bool = False
    current_language: Language = Language.HINGLISH_AUTO
    last_classification: ClassificationResult | None = None


class SessionSnapshot(BaseModel):
    """Read-only view of the controller handed to the presentation layer."""

    model_config = {'frozen': True}

    state: SessionState
    segments: tuple[Segment, ...] = ()
    interim_text: str = ''
    full_text: str = ''
    word_count: int = 0
    char_count: int = 0

    @property
    def listening(self) -> bool:
        return self.state.listening

    @property
    def is_empty(self) -> bool:
        return not self.segments and not self.interim_text


Severity = Literal['information', 'warning', 'error']


class SessionNotice(BaseModel):
    """User-facing message raised by the controller."""

    model_config = {'frozen': True}

    message: str
    severity: Severity = 'information'
