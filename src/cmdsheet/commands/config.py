"""Config commands -- view and modify global configuration.

Provides the ``cmdsheet config`` sub-command group for reading, updating
and resetting the user's :class:`~cmdsheet.models.GlobalConfig`. Settings
control the default output format, whether commands are recorded in the
recent history, clipboard behaviour and the simulators' cadence.
"""

from __future__ import annotations

import typer
from pydantic import ValidationError

from cmdsheet.commands._common import exit_on_error
from cmdsheet.exit_codes import EXIT_INVALID_USAGE
from cmdsheet.options import coerce_bool
from cmdsheet.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False, "--effective", help="Include project and environment overrides."
    ),
) -> None:
    """Show current configuration.

    Example::

        cmdsheet config show
        cmdsheet config show --effective --json
    """
    from cmdsheet.config import get_config_dir, load_global_config, resolve_config

    with exit_on_error():
        config = resolve_config() if effective else load_global_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(help="Config key (dot notation, e.g. 'history.max_entries')."),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys. The value is coerced to the type of
    the existing setting (bool, int, float or str) and the whole config is
    validated before saving.

    Raises:
        typer.Exit: With code 2 if the key path is invalid, the value
            cannot be coerced, or validation fails.

    Example::

        cmdsheet config set output.format plain
        cmdsheet config set history.enabled false
        cmdsheet config set clipboard.ack_seconds 1.5
    """
    from cmdsheet.config import load_global_config, save_global_config
    from cmdsheet.models import GlobalConfig

    with exit_on_error():
        config = load_global_config()
    data = config.model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    current = target[final_key]
    coerced: object
    if isinstance(current, bool):
        coerced = coerce_bool(value)
        if coerced is None:
            error(f"Expected true/false for {key}, got: {value}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
    elif isinstance(current, (int, float)):
        number_type = type(current)
        try:
            coerced = number_type(value)
        except ValueError:
            error(f"Expected {number_type.__name__} for {key}, got: {value}")
            raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    else:
        coerced = value

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Do not ask for confirmation."),
) -> None:
    """Reset configuration to defaults.

    Example::

        cmdsheet config reset --force
    """
    from cmdsheet.config import save_global_config
    from cmdsheet.models import GlobalConfig

    if not force:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
