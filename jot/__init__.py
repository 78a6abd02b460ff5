"""jot: quick sticky notes stored in a remote libSQL database."""

from jot.config import JotConfig, load_config
from jot.services.notes import Note, NotesService

__version__ = "0.1.0"

__all__ = ["JotConfig", "Note", "NotesService", "load_config"]
