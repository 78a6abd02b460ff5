"""Public API for the Notes service."""

from .client import PipelineClient
from .models import Note, Statement
from .service import NotesService

__all__ = [
    "NotesService",
    "Note",
    "PipelineClient",
    "Statement",
]
