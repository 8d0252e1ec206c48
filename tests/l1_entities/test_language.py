"""Tests for the Language entity."""

from __future__ import annotations

import pytest

from bolo.l1_entities.language import SELECTABLE_LANGUAGES, Language


class TestLanguage:
    def test_every_language_has_info(self):
        for lang in Language:
            info = lang.info
            assert info.label
            assert info.flag
            assert info.locale

    def test_hinglish_uses_hindi_locale(self):
        assert Language.HINGLISH_AUTO.recognition_locale == 'hi-IN'

    @pytest.mark.parametrize(
        ('lang', 'locale'),
        [
            (Language.ENGLISH, 'en-IN'),
            (Language.HINDI, 'hi-IN'),
            (Language.TAMIL, 'ta-IN'),
            (Language.MARATHI, 'mr-IN'),
        ],
    )
    def test_recognition_locales(self, lang, locale):
        assert lang.recognition_locale == locale

    def test_selectable_order_starts_with_hinglish(self):
        assert SELECTABLE_LANGUAGES[0] is Language.HINGLISH_AUTO
        assert set(SELECTABLE_LANGUAGES) == set(Language)


class TestFromCode:
    @pytest.mark.parametrize(
        ('code', 'expected'),
        [
            ('hi-IN', Language.HINDI),
            ('HI-in', Language.HINDI),
            (' ta-IN ', Language.TAMIL),
            ('hinglish', Language.HINGLISH_AUTO),
            ('auto', Language.HINGLISH_AUTO),
        ],
    )
    def test_parses(self, code, expected):
        assert Language.from_code(code) is expected

    def test_unknown_code(self):
        with pytest.raises(ValueError, match='Unknown language'):
            Language.from_code('fr-FR')
