"""bolo — terminal dictation with live, script-aware transcripts."""

__version__ = '0.1.0'
