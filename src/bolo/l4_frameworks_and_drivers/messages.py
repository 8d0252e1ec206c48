"""Textual Message subclasses — contracts between the controller and the App."""

from __future__ import annotations

from textual.message import Message

from bolo.l1_entities.session_state import SessionNotice, SessionSnapshot


class SessionUpdated(Message):
    """Posted whenever the controller publishes a new snapshot."""

    def __init__(self, snapshot: SessionSnapshot) -> None:
        super().__init__()
        self.snapshot = snapshot


class SessionNoticeRaised(Message):
    """Posted when the controller raises a user-facing notice."""

    def __init__(self, notice: SessionNotice) -> None:
        super().__init__()
        self.notice = notice
