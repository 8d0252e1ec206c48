"""Transcript segment entity."""

from __future__ import annotations

from pydantic import BaseModel

from bolo.l1_entities.classification import ClassificationResult


class Segment(BaseModel):
    """A finalized chunk of transcript; immutable once created."""

    model_config = {'frozen': True}

    text: str
    classification: ClassificationResult
