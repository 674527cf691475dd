"""Generate commands -- browse families and render command lines.

Provides the root-level ``families``, ``schema``, ``tips`` and ``gen``
commands. ``gen`` is the CLI face of a
:class:`~cmdsheet.session.GeneratorSession`: field values arrive as
repeated ``-s key=value`` options, the rendered command goes to stdout, and
it is then optionally recorded in the recent history and copied to the
clipboard.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from cmdsheet.commands._common import exit_on_error
from cmdsheet.exceptions import InvalidUsageError
from cmdsheet.output import (
    OutputFormat,
    debug,
    format_response,
    get_output,
    print_command,
    print_table,
    success,
    suggest,
    warning,
)


def parse_assignments(pairs: list[str]) -> dict[str, str]:
    """Turn ``["mode=extract", "archive=a.tgz"]`` into a dict.

    Only the first ``=`` splits, so values may contain ``=`` themselves.

    Raises:
        InvalidUsageError: If a pair has no ``=`` or an empty key.
    """
    values: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise InvalidUsageError(f"Expected KEY=VALUE, got: {pair!r}")
        values[key.strip()] = value
    return values


def _describe_field(spec: Any) -> str:
    if spec.kind == "enum":
        return " | ".join(spec.choices)
    if spec.kind == "text" and spec.fallback:
        return f"blank -> {spec.fallback}"
    return ""


def families_command() -> None:
    """List every tool family.

    Example::

        cmdsheet families
        cmdsheet families --json
    """
    from cmdsheet.families import list_families

    rows = [[f.name.value, f.title, f.description] for f in list_families()]
    print_table(["family", "title", "description"], rows, title="Tool families")


def schema_command(
    family: str = typer.Argument(help="Tool family, e.g. 'tar'."),
) -> None:
    """Show the options a tool family accepts.

    Example::

        cmdsheet schema socket
    """
    from cmdsheet.families import get_family

    with exit_on_error():
        schema = get_family(family).schema

    if get_output().format == OutputFormat.JSON:
        format_response(schema.model_dump(mode="json"))
        return

    rows = [
        [spec.name, spec.kind, str(spec.default), _describe_field(spec), spec.label]
        for spec in schema.fields
    ]
    print_table(["field", "kind", "default", "values", "label"], rows, title=schema.title)


def tips_command(
    family: str = typer.Argument(help="Tool family, e.g. 'cron'."),
    field: Optional[str] = typer.Argument(None, help="Only show tips for this field."),
) -> None:
    """Show the help text attached to a family's choices.

    Example::

        cmdsheet tips cron
        cmdsheet tips shell action
    """
    from cmdsheet.families import get_family
    from cmdsheet.options import field_key

    with exit_on_error():
        tips = get_family(family).tips

    if field is not None:
        key = field_key(field)
        tips = {key: tips[key]} if key in tips else {}
    if not tips:
        warning(f"No tips for {family}{'.' + field if field else ''}.")
        return

    rows = [
        [name, value, tip.description, tip.example]
        for name, by_value in tips.items()
        for value, tip in by_value.items()
    ]
    print_table(["field", "value", "description", "example"], rows, title=f"{family} tips")


def gen_command(
    family: str = typer.Argument(help="Tool family, e.g. 'tar'."),
    assignments: Optional[list[str]] = typer.Option(
        None, "--set", "-s", help="Field value as KEY=VALUE (repeatable)."
    ),
    copy: bool = typer.Option(False, "--copy", "-c", help="Copy the command to the clipboard."),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record in recent history."),
) -> None:
    """Render the command line for a tool family.

    Unset fields keep their defaults. Values that a field does not accept
    are ignored with a warning, exactly as an interactive form would ignore
    them.

    Example::

        cmdsheet gen tar
        cmdsheet gen tar -s mode=extract -s extract_dir=/tmp/out
        cmdsheet gen process -s tool=htop -s action=delay -s delaySeconds=5 --copy
    """
    from cmdsheet.clipboard import Clipboard
    from cmdsheet.config import get_cache_dir, resolve_config
    from cmdsheet.history import RecentHistory
    from cmdsheet.session import GeneratorSession

    with exit_on_error():
        values = parse_assignments(assignments or [])
        config = resolve_config()
        clipboard = Clipboard(config.clipboard.ack_seconds) if config.clipboard.enabled else None
        session = GeneratorSession(family, clipboard=clipboard)
        rejected = session.model.update(values)
        for name in rejected:
            warning(f"Ignored {name}={values[name]!r} (not accepted by {session.family.value}).")
        if rejected:
            suggest(f"See valid values with: cmdsheet schema {session.family.value}")

        command = session.render()
        print_command(command, session.family.value)

        if config.history.enabled and not no_history:
            with RecentHistory(get_cache_dir(), config.history) as history:
                history.push(command)
            debug("Recorded in recent history.")

    if copy:
        if session.copy():
            success("Copied to clipboard.")
        else:
            warning("Could not copy to the clipboard.")
