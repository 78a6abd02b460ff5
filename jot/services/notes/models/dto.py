"""High-level Notes data transfer objects."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Note:
    """A note as stored remotely; ``created_at`` stays in the store's text form."""

    id: int
    body: str
    created_at: str
