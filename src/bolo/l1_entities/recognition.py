"""Recognition engine vocabulary: options, raw result events, classified errors."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass(frozen=True)
class EngineOptions:
    """Fixed configuration of one engine instance."""

    language_code: str
    continuous: bool = True
    interim_results: bool = True
    max_alternatives: int = 1


@dataclass(frozen=True)
class RecognitionResult:
    """One result slot of an engine notification; alternatives ranked best-first."""

    alternatives: list[str]
    is_final: bool = False

    @property
    def transcript(self) -> str:
        return self.alternatives[0] if self.alternatives else ''


@dataclass(frozen=True)
class RecognitionResultEvent:
    """Engine notification: results from ``result_index`` onward are new or changed."""

    results: list[RecognitionResult] = field(default_factory=list)
    result_index: int = 0


class RecognitionErrorKind(enum.Enum):
    PERMISSION_DENIED = 'permission_denied'
    NO_SPEECH_TIMEOUT = 'no_speech_timeout'
    ABORTED = 'aborted'
    OTHER = 'other'


@dataclass(frozen=True)
class RecognitionError:
    kind: RecognitionErrorKind
    detail: str = ''

    @property
    def is_benign(self) -> bool:
        return self.kind in (RecognitionErrorKind.NO_SPEECH_TIMEOUT, RecognitionErrorKind.ABORTED)


# Raw engine error codes (Web Speech naming, reused by every engine gateway).
ERROR_NOT_ALLOWED = 'not-allowed'
ERROR_SERVICE_NOT_ALLOWED = 'service-not-allowed'
ERROR_NO_SPEECH = 'no-speech'
ERROR_ABORTED = 'aborted'
ERROR_AUDIO_CAPTURE = 'audio-capture'
ERROR_LANGUAGE_NOT_SUPPORTED = 'language-not-supported'

_KIND_BY_CODE: dict[str, RecognitionErrorKind] = {
    ERROR_NOT_ALLOWED: RecognitionErrorKind.PERMISSION_DENIED,
    ERROR_SERVICE_NOT_ALLOWED: RecognitionErrorKind.PERMISSION_DENIED,
    ERROR_NO_SPEECH: RecognitionErrorKind.NO_SPEECH_TIMEOUT,
    ERROR_ABORTED: RecognitionErrorKind.ABORTED,
}


def classify_error(code: str, message: str = '') -> RecognitionError:
    """Map a raw engine error code onto the controller's error taxonomy."""
    kind = _KIND_BY_CODE.get(code, RecognitionErrorKind.OTHER)
    if kind is RecognitionErrorKind.OTHER:
        detail = f'{code}: {message}' if message else code
        return RecognitionError(kind=kind, detail=detail)
    return RecognitionError(kind=kind, detail=message)
