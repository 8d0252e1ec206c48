"""Gateway: pyperclip clipboard — implements Clipboard port."""

from __future__ import annotations

import logging

import pyperclip

log = logging.getLogger('bolo.app')


class PyperclipClipboard:
    def copy(self, text: str) -> bool:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            log.warning('Clipboard unavailable: %s', e)
            return False
        return True
