#!/usr/bin/env python
"""Command line interface for jot."""

import logging
import re
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from typer.core import TyperGroup

from jot.cli import rendering
from jot.config import load_config
from jot.exceptions import JotError, UsageError
from jot.services.notes import NotesService

USAGE = """jot — quick sticky notes

usage:
  jot <text>       add a note
  jot ls           list all notes
  jot peek <id>    view a note
  jot rm <id>      delete a note
  jot pop          view + delete the latest note"""

HELP_TOKENS = ("-h", "--help", "help")
SUBCOMMANDS = ("ls", "peek", "rm", "pop")
ADD_COMMAND = "add"

_ID_RE = re.compile(r"[+-]?\d+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


class _JotGroup(TyperGroup):
    """Anything that is not a known subcommand is the text of a new note."""

    def parse_args(self, ctx, args):
        if not args or args[0] in HELP_TOKENS:
            typer.echo(USAGE)
            ctx.exit(0)
        if args[0] not in SUBCOMMANDS:
            # "--" first, so option-like words and later "--" stay in the body
            args = [ADD_COMMAND, "--", *args]
        return super().parse_args(ctx, args)


app = typer.Typer(cls=_JotGroup, add_completion=False)

_PASSTHROUGH = {
    "ignore_unknown_options": True,
    "allow_extra_args": True,
    "help_option_names": [],
}


def _configure_logging(debug: bool) -> None:
    logger = logging.getLogger("jot")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))
    # silent unless JOT_DEBUG; errors reach the user as the single jot: line
    logger.setLevel(logging.DEBUG if debug else logging.CRITICAL + 1)


def _fail(exc: Exception) -> None:
    err_console.print(f"jot: {exc}", markup=False, emoji=False, soft_wrap=True)
    raise typer.Exit(1)


def _open_service() -> NotesService:
    config = load_config()
    _configure_logging(config.debug)
    service = NotesService(config)
    service.init_schema()
    return service


def _parse_id(raw: Optional[str], command: str) -> int:
    if raw is None:
        raise UsageError(f"usage: jot {command} <id>")
    if not _ID_RE.fullmatch(raw):
        raise UsageError(f"invalid note id: {raw}")
    note_id = int(raw)
    if not _INT64_MIN <= note_id <= _INT64_MAX:
        raise UsageError(f"invalid note id: {raw}")
    return note_id


@app.command(ADD_COMMAND, hidden=True, context_settings=_PASSTHROUGH)
def add(words: Optional[List[str]] = typer.Argument(None)):
    """Add a note."""
    try:
        service = _open_service()
        note_id = service.add(" ".join(words or []))
        console.print(f"noted (#{note_id})")
    except JotError as e:
        _fail(e)


@app.command("ls", context_settings=_PASSTHROUGH)
def list_notes():
    """List all notes."""
    try:
        notes = _open_service().list()
        for line in rendering.note_lines(notes):
            console.print(line, soft_wrap=True)
    except JotError as e:
        _fail(e)


@app.command("peek", context_settings=_PASSTHROUGH)
def peek(note_id: Optional[str] = typer.Argument(None)):
    """View a note."""
    try:
        service = _open_service()
        note = service.get(_parse_id(note_id, "peek"))
        rendering.show_note(console, note)
    except JotError as e:
        _fail(e)


@app.command("rm", context_settings=_PASSTHROUGH)
def remove(note_id: Optional[str] = typer.Argument(None)):
    """Delete a note."""
    try:
        service = _open_service()
        parsed = _parse_id(note_id, "rm")
        service.delete(parsed)
        console.print(f"removed #{parsed}")
    except JotError as e:
        _fail(e)


@app.command("pop", context_settings=_PASSTHROUGH)
def pop():
    """View and delete the latest note."""
    try:
        service = _open_service()
        note = service.latest()
        rendering.show_note(console, note)
        console.print()
        service.delete(note.id)
        console.print(rendering.dim("(removed)"))
    except JotError as e:
        _fail(e)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
