"""Classification result entity — derived from text, never stored on its own."""

from __future__ import annotations

import enum

from pydantic import BaseModel


class DetectedScript(enum.Enum):
    ENGLISH = 'english'
    HINDI = 'hindi'
    HINGLISH = 'hinglish'
    TAMIL = 'tamil'
    MARATHI = 'marathi'


class ClassificationResult(BaseModel):
    """Label, colour and glyph for one finalized chunk."""

    model_config = {'frozen': True}

    kind: DetectedScript
    label: str
    color_token: str
    emoji: str


ENGLISH = ClassificationResult(kind=DetectedScript.ENGLISH, label='English', color_token='#34d399', emoji='🇬🇧')
HINDI = ClassificationResult(kind=DetectedScript.HINDI, label='हिन्दी', color_token='#f472b6', emoji='🇮🇳')
HINGLISH = ClassificationResult(kind=DetectedScript.HINGLISH, label='Hinglish', color_token='#f59e0b', emoji='🤝')
TAMIL = ClassificationResult(kind=DetectedScript.TAMIL, label='Tamil', color_token='#60a5fa', emoji='ௐ')
MARATHI = ClassificationResult(kind=DetectedScript.MARATHI, label='Marathi', color_token='#c084fc', emoji='♛')

LEGEND: tuple[ClassificationResult, ...] = (ENGLISH, HINDI, HINGLISH, TAMIL, MARATHI)
