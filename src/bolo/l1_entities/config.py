"""Configuration Pydantic models — pure schema, no infrastructure defaults."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from bolo.l1_entities.language import Language


class SessionConfig(BaseModel):
    default_language: Language
    settle_delay: float = Field(ge=0.0)
    restart_burst_limit: int = Field(ge=1)
    restart_burst_window: float = Field(gt=0.0)

    @field_validator('default_language', mode='before')
    @classmethod
    def _parse_language(cls, value: object) -> object:
        if isinstance(value, str):
            return Language.from_code(value)
        return value


class RecognitionConfig(BaseModel):
    model: str
    models: dict[str, str] = Field(default_factory=dict)
    silence_threshold: float
    pause_duration: float
    max_utterance: float
    interim_interval: float
    no_speech_timeout: float

    def model_for_locale(self, locale: str) -> str:
        """Resolve model name for a locale. Checks full key, then primary subtag, then default."""
        key = locale.lower()
        if key in self.models:
            return self.models[key]
        prefix = key.split('-')[0]
        if prefix in self.models:
            return self.models[prefix]
        return self.model


class AppConfig(BaseModel):
    session: SessionConfig
    recognition: RecognitionConfig
