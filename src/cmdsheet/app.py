"""Typer application and CLI entry point for cmdsheet.

This module wires together the top-level Typer application and registers
the built-in commands: ``families``, ``schema``, ``tips`` and ``gen`` at
the root, plus the ``history``, ``config`` and ``simulate`` sub-groups.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`cmdsheet.config`: Global and project configuration resolution.
    :mod:`cmdsheet.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from cmdsheet import __version__
from cmdsheet.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="cmdsheet",
    help="Compose shell commands for common tools from a handful of options.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

# ------------------------------------------------------------------ #
# Commands
# ------------------------------------------------------------------ #

from cmdsheet.commands.config import config_app  # noqa: E402
from cmdsheet.commands.generate import (  # noqa: E402
    families_command,
    gen_command,
    schema_command,
    tips_command,
)
from cmdsheet.commands.history import history_app  # noqa: E402
from cmdsheet.commands.simulate import simulate_app  # noqa: E402

app.command("families")(families_command)
app.command("schema")(schema_command)
app.command("tips")(tips_command)
app.command("gen")(gen_command)
app.add_typer(history_app, name="history", help="Recently generated commands.")
app.add_typer(config_app, name="config", help="Configuration management.")
app.add_typer(simulate_app, name="simulate", help="Fabricated ping, traceroute and ps output.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"cmdsheet {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    root = logging.getLogger("cmdsheet")
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~cmdsheet.output.OutputManager` from
    CLI flags (falling back to ``CMDSHEET_FORMAT`` and the configured
    ``output.format``), routes library logging to stderr, and stores the
    shared flags in ``ctx.obj``.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        json_output: Force JSON output format.
        plain_output: Force plain-text output format.
        no_color: Disable all colour and Rich markup.
        quiet: Suppress non-essential diagnostic output.
        verbose: Enable debug-level diagnostic output.
    """
    from cmdsheet.config import resolve_config
    from cmdsheet.exceptions import ConfigError
    from cmdsheet.output import OutputFormat, OutputManager, set_output

    _configure_logging(verbose)

    cli_format = None
    if json_output:
        cli_format = "json"
    elif plain_output:
        cli_format = "plain"

    try:
        fmt = OutputFormat(resolve_config(cli_format=cli_format).output.format)
    except (ConfigError, ValueError):
        # Commands that need the config report the problem themselves.
        fmt = OutputFormat(cli_format or "auto")

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)

    ctx.ensure_object(dict)
    ctx.obj["format"] = fmt.value
    ctx.obj["quiet"] = quiet
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from cmdsheet.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``cmdsheet`` console script.

    Unhandled :class:`~cmdsheet.exceptions.CmdsheetError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from cmdsheet.exceptions import CmdsheetError
        from cmdsheet.output import error

        if isinstance(exc, CmdsheetError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
