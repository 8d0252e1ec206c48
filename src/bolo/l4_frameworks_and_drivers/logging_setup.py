"""File-based debug logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FILENAME = 'bolo_debug.log'


def setup_file_logging(log_dir: Path) -> Path:
    """Route the ``bolo`` logger tree into a debug file; Textual owns the terminal."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME
    root = logging.getLogger('bolo')
    if any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path for h in root.handlers):
        return log_path
    handler = logging.FileHandler(log_path, encoding='utf-8')
    handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logging.getLogger('bolo.app').info('Debug logging started → %s', log_path)
    return log_path
