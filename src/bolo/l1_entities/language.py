"""L1 entity: selectable dictation languages."""

from __future__ import annotations

import enum

from pydantic import BaseModel


class LanguageInfo(BaseModel):
    """Display and engine metadata for one selectable language."""

    model_config = {'frozen': True}

    label: str
    sublabel: str
    flag: str
    locale: str  # engine locale; opaque to the controller


class Language(enum.Enum):
    ENGLISH = 'en-IN'
    HINDI = 'hi-IN'
    TAMIL = 'ta-IN'
    MARATHI = 'mr-IN'
    HINGLISH_AUTO = 'hinglish'

    @property
    def info(self) -> LanguageInfo:
        return _LANGUAGE_INFO[self]

    @property
    def label(self) -> str:
        return self.info.label

    @property
    def recognition_locale(self) -> str:
        """Locale handed to the recognition engine.

        Hinglish rides on the Hindi model, which is trained on Indian speech
        that code-switches with English.
        """
        return self.info.locale

    @classmethod
    def from_code(cls, code: str) -> Language:
        """Parse a machine code (``hi-IN``, ``hinglish``, ``auto`` …), case-insensitive."""
        key = code.strip().lower()
        if key == 'auto':
            return cls.HINGLISH_AUTO
        for lang in cls:
            if lang.value.lower() == key:
                return lang
        raise ValueError(f'Unknown language code: {code!r}')


_LANGUAGE_INFO: dict[Language, LanguageInfo] = {
    Language.ENGLISH: LanguageInfo(label='English', sublabel='English (India)', flag='🇬🇧', locale='en-IN'),
    Language.HINDI: LanguageInfo(label='हिन्दी', sublabel='Hindi (Devanagari)', flag='🇮🇳', locale='hi-IN'),
    Language.TAMIL: LanguageInfo(label='Tamil', sublabel='Tamil (India)', flag='ௐ', locale='ta-IN'),
    Language.MARATHI: LanguageInfo(label='Marathi', sublabel='Marathi (Devanagari)', flag='♛', locale='mr-IN'),
    Language.HINGLISH_AUTO: LanguageInfo(label='Hinglish', sublabel='Hindi + English mixed', flag='🤝', locale='hi-IN'),
}

# Order shown in the language bar; keys 1-5 follow it.
SELECTABLE_LANGUAGES: tuple[Language, ...] = (
    Language.HINGLISH_AUTO,
    Language.ENGLISH,
    Language.HINDI,
    Language.TAMIL,
    Language.MARATHI,
)
