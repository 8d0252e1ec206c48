"""Domain error types."""


class EngineConstructionError(Exception):
    """Raised when a recognition engine instance cannot be created."""


class EngineStartError(Exception):
    """Raised when a recognition engine refuses to start."""


class ModelResolutionError(Exception):
    """Raised when a whisper model cannot be resolved to a local path."""
