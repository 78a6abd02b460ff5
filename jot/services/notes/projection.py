"""
Projection of decoded pipeline results into ``Note`` records.

Tolerant by intent: short rows are skipped, and ids that do not parse become 0
(logged as a warning) instead of failing the whole listing.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .models.dto import Note
from .models.pipeline import ExecuteResult, OkResult, PipelineResponse, WireValue

LOGGER = logging.getLogger(__name__)

NOTE_COLUMNS = 3


def parse_int(value: object) -> int:
    """Best-effort integer parse; anything unparseable yields 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        LOGGER.warning("Could not parse integer from %r; using 0", value)
        return 0


def _cell_text(cell: WireValue) -> str:
    value = cell.value
    return "" if value is None else str(value)


def result_at(response: Optional[PipelineResponse], index: int = 0) -> Optional[ExecuteResult]:
    if response is None or index < 0 or index >= len(response.results):
        return None
    r = response.results[index]
    if not isinstance(r, OkResult) or r.response is None:
        return None
    return r.response.result


def notes_from_response(response: Optional[PipelineResponse], index: int = 0) -> List[Note]:
    result = result_at(response, index)
    if result is None:
        return []

    notes: List[Note] = []
    for row in result.rows:
        if len(row) < NOTE_COLUMNS:
            LOGGER.debug("Skipping short row with %d cell(s)", len(row))
            continue
        notes.append(
            Note(
                id=parse_int(row[0].value),
                body=_cell_text(row[1]),
                created_at=_cell_text(row[2]),
            )
        )
    return notes


def last_insert_id(response: Optional[PipelineResponse], index: int = 0) -> int:
    result = result_at(response, index)
    if result is None or result.last_insert_rowid is None:
        return 0
    return parse_int(result.last_insert_rowid)


def affected_rows(response: Optional[PipelineResponse], index: int = 0) -> int:
    result = result_at(response, index)
    return 0 if result is None else result.affected_row_count


__all__ = ["affected_rows", "last_insert_id", "notes_from_response", "parse_int"]
