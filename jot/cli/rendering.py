"""
Terminal rendering for notes.

Views are built from ``rich.text.Text`` so note bodies are never parsed as
console markup; the console decides whether dim styling becomes ANSI.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from jot.services.notes.models import Note

MAX_PREVIEW_LEN = 72
ELLIPSIS = "…"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# month labels must not depend on the process locale
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR


def dim(s: str) -> Text:
    return Text(s, style="dim")


def preview(body: str, limit: int = MAX_PREVIEW_LEN) -> str:
    """Truncate to at most ``limit`` characters, ellipsis included."""
    if len(body) > limit:
        return body[: limit - 1] + ELLIPSIS
    return body


def plural(n: int, unit: str) -> str:
    return f"{n} {unit}{'' if n == 1 else 's'} ago"


def format_age(created_at: str, now: Optional[datetime] = None) -> str:
    """
    Relative age of a store timestamp (UTC, ``YYYY-MM-DD HH:MM:SS``).

    Unparseable input is returned as-is.
    """
    try:
        t = datetime.strptime(created_at, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return created_at

    now = now or datetime.now(timezone.utc)
    secs = (now - t).total_seconds()

    if secs < _MINUTE:
        return "just now"
    if secs < _HOUR:
        return plural(int(secs // _MINUTE), "min")
    if secs < _DAY:
        return plural(int(secs // _HOUR), "hr")

    days = int(secs // _DAY)
    if days == 1:
        return "yesterday"
    if days < 30:
        return plural(days, "day")
    return f"{_MONTHS[t.month - 1]} {t.day}"


def note_lines(notes: Sequence[Note], now: Optional[datetime] = None) -> List[Text]:
    """One line per note, ids right-aligned to the width of the first (newest) id."""
    if not notes:
        return [Text("no notes yet")]

    id_width = len(str(notes[0].id))
    lines = []
    for n in notes:
        body = preview(n.body)
        line = Text(f"  {n.id:>{id_width}}  {body:<{MAX_PREVIEW_LEN}}  ")
        line.append_text(dim(format_age(n.created_at, now)))
        lines.append(line)
    return lines


def note_header(note: Note, now: Optional[datetime] = None) -> Text:
    """Dim ``#id  age`` line shown above a full note body."""
    return Text.assemble(
        dim(f"#{note.id}"),
        "  ",
        dim(format_age(note.created_at, now)),
    )


def show_note(console: Console, note: Note, now: Optional[datetime] = None) -> None:
    """
    Header, blank line, then the body written verbatim.

    The body bypasses rich so tabs and control characters reach the
    terminal exactly as stored.
    """
    console.print(note_header(note, now), soft_wrap=True)
    console.file.write(f"\n{note.body}\n")
    console.file.flush()
