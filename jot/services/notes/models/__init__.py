"""Public exports for Notes service data models."""

from __future__ import annotations

from .dto import Note
from .pipeline import PipelineRequest, PipelineResponse, Statement, WireValue

__all__ = [
    "Note",
    "PipelineRequest",
    "PipelineResponse",
    "Statement",
    "WireValue",
]
