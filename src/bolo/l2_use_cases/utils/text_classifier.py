"""Script-presence heuristic that labels each finalized chunk."""

from __future__ import annotations

import re

from bolo.l1_entities import classification
from bolo.l1_entities.classification import ClassificationResult
from bolo.l1_entities.language import Language

_DEVANAGARI = re.compile('[\u0900-\u097F]')
_TAMIL = re.compile('[\u0B80-\u0BFF]')
_LATIN = re.compile('[a-zA-Z]')


def has_devanagari(text: str) -> bool:
    return _DEVANAGARI.search(text) is not None


def has_tamil(text: str) -> bool:
    return _TAMIL.search(text) is not None


def has_latin(text: str) -> bool:
    return _LATIN.search(text) is not None


def classify(text: str, hint: Language | None = None) -> ClassificationResult:
    """Label *text* by which scripts it contains.

    Devanagari with Latin is Hinglish, Devanagari alone is Hindi, anything else
    falls back to English. Tamil-block text without Devanagari is Tamil.
    Marathi shares Devanagari with Hindi, so Devanagari-only text is Marathi
    only when *hint* says the speaker selected Marathi.
    """
    devanagari = has_devanagari(text)
    if devanagari and has_latin(text):
        return classification.HINGLISH
    if devanagari:
        return classification.MARATHI if hint is Language.MARATHI else classification.HINDI
    if has_tamil(text):
        return classification.TAMIL
    return classification.ENGLISH
