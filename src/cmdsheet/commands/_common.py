"""Helpers shared by the command modules."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from cmdsheet.exceptions import CmdsheetError
from cmdsheet.output import error


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Report a :class:`CmdsheetError` on stderr and exit with its code."""
    try:
        yield
    except CmdsheetError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
