"""
High-level Notes service.

Public API:
  - NotesService.init_schema() -> None
  - NotesService.add(body) -> int
  - NotesService.list() -> List[Note]
  - NotesService.get(note_id) -> Note
  - NotesService.latest() -> Note
  - NotesService.delete(note_id) -> None
  - NotesService.raw -> PipelineClient (escape hatch)

Every call issues exactly one pipeline request holding one statement.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import requests

from jot.config import JotConfig
from jot.exceptions import NotFoundError, UsageError

from .client import PipelineClient
from .models import Note
from .models.pipeline import PipelineResponse, Statement, integer_value, text_value
from .projection import affected_rows, last_insert_id, notes_from_response

LOGGER = logging.getLogger(__name__)

CREATE_TABLE_SQL = """CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    body TEXT NOT NULL,
    created_at TEXT NOT NULL DEFAULT (datetime('now'))
)"""
INSERT_SQL = "INSERT INTO notes (body) VALUES (?)"
SELECT_ALL_SQL = "SELECT id, body, created_at FROM notes ORDER BY id DESC"
SELECT_BY_ID_SQL = "SELECT id, body, created_at FROM notes WHERE id = ?"
SELECT_LATEST_SQL = "SELECT id, body, created_at FROM notes ORDER BY id DESC LIMIT 1"
DELETE_SQL = "DELETE FROM notes WHERE id = ?"


class NotesService:
    """
    Note-oriented operations over the pipeline client.
    """

    def __init__(self, config: JotConfig, *, session: Optional[requests.Session] = None):
        self._raw = PipelineClient(
            config.url,
            config.token,
            session=session,
            timeout=config.timeout,
        )

    @property
    def raw(self) -> PipelineClient:
        return self._raw

    def _run(self, sql: str, *args) -> PipelineResponse:
        return self._raw.execute([Statement(sql=sql, args=list(args))])

    def init_schema(self) -> None:
        LOGGER.debug("Ensuring notes table exists")
        self._run(CREATE_TABLE_SQL)

    def add(self, body: str) -> int:
        if not body:
            raise UsageError("note body is empty")
        resp = self._run(INSERT_SQL, text_value(body))
        note_id = last_insert_id(resp)
        LOGGER.info("Added note #%d", note_id)
        return note_id

    def list(self) -> List[Note]:
        notes = notes_from_response(self._run(SELECT_ALL_SQL))
        LOGGER.info("Listed %d note(s)", len(notes))
        return notes

    def get(self, note_id: int) -> Note:
        notes = notes_from_response(self._run(SELECT_BY_ID_SQL, integer_value(note_id)))
        if not notes:
            raise NotFoundError(f"note #{note_id} not found")
        return notes[0]

    def latest(self) -> Note:
        notes = notes_from_response(self._run(SELECT_LATEST_SQL))
        if not notes:
            raise NotFoundError("no notes yet")
        return notes[0]

    def delete(self, note_id: int) -> None:
        resp = self._run(DELETE_SQL, integer_value(note_id))
        if affected_rows(resp) == 0:
            raise NotFoundError(f"note #{note_id} not found")
        LOGGER.info("Deleted note #%d", note_id)
