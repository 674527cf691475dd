"""History commands -- list, clear and recall recently generated commands.

Provides the ``cmdsheet history`` sub-command group on top of
:class:`~cmdsheet.history.RecentHistory`. Entries are numbered from 1,
most recent first.
"""

from __future__ import annotations

import typer

from cmdsheet.commands._common import exit_on_error
from cmdsheet.exit_codes import EXIT_NOT_FOUND
from cmdsheet.output import error, format_response, info, print_command, print_table, success, warning


history_app = typer.Typer(no_args_is_help=True)


def _open_history():  # noqa: ANN202
    from cmdsheet.config import get_cache_dir, resolve_config
    from cmdsheet.history import RecentHistory

    config = resolve_config()
    if not config.history.enabled:
        warning("Recent history is disabled (history.enabled = false).")
    return RecentHistory(get_cache_dir(), config.history)


@history_app.command("list")
def history_list() -> None:
    """Show recent commands, most recent first.

    Example::

        cmdsheet history list
        cmdsheet history list --plain | cut -f2
    """
    with exit_on_error(), _open_history() as history:
        entries = history.entries()

    if not entries:
        info("No recent commands.")
        return
    rows = [[str(index), entry] for index, entry in enumerate(entries, start=1)]
    print_table(["#", "command"], rows, title="Recent commands")


@history_app.command("clear")
def history_clear() -> None:
    """Forget every recent command."""
    with exit_on_error(), _open_history() as history:
        history.clear()
    success("Recent history cleared.")


@history_app.command("recall")
def history_recall(
    index: int = typer.Argument(help="Entry number as shown by 'history list'.", min=1),
) -> None:
    """Load a recent command back into structured fields where possible.

    Only commands of the general-purpose ``shell`` family can be mapped
    back. Anything else is reported as opaque and printed verbatim.

    Example::

        cmdsheet history recall 1
    """
    from cmdsheet.session import GeneratorSession

    with exit_on_error(), _open_history() as history:
        entries = history.entries()
    if index > len(entries):
        error(f"No history entry #{index} ({len(entries)} stored).")
        raise typer.Exit(code=EXIT_NOT_FOUND)

    session = GeneratorSession("shell")
    recalled = session.recall(entries[index - 1])
    if recalled.opaque or recalled.family is None:
        warning("Entry does not match a known action; shown as-is.")
        print_command(session.render())
        return
    format_response({"family": recalled.family.value, **recalled.values, "command": session.render()})
