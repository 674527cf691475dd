"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for cmdsheet:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.cmdsheet/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir` and :func:`get_data_dir`.
* **Global config** -- A single :class:`~cmdsheet.models.GlobalConfig`
  JSON file storing defaults (output format, history, clipboard, simulation).
* **Precedence resolution** -- :func:`resolve_config` merges CLI flags,
  environment variables, project-local config, and global config into the
  final effective configuration.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from cmdsheet.exceptions import ConfigError
from cmdsheet.models import GlobalConfig

logger = logging.getLogger(__name__)

_APP_NAME = "cmdsheet"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "cmdsheet.json"

ENV_FORMAT = "CMDSHEET_FORMAT"
ENV_HISTORY_DISABLED = "CMDSHEET_HISTORY_DISABLED"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def _ensure_dir(env_var: str, segments: tuple[str, ...], fallback: Optional[str]) -> Path:
    if _is_xdg_platform():
        path = _xdg_base(env_var, segments) / _APP_NAME
    else:
        path = _fallback_base_dir()
        if fallback:
            path = path / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/cmdsheet/`` (default ``~/.config/cmdsheet/``).
    On macOS/Windows: ``~/.cmdsheet/``.
    """
    return _ensure_dir("XDG_CONFIG_HOME", (".config",), None)


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds the recent-command history store.

    On Linux/BSD: ``$XDG_CACHE_HOME/cmdsheet/`` (default ``~/.cache/cmdsheet/``).
    On macOS/Windows: ``~/.cmdsheet/cache/``.
    """
    return _ensure_dir("XDG_CACHE_HOME", (".cache",), "cache")


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/cmdsheet/`` (default ``~/.local/share/cmdsheet/``).
    On macOS/Windows: ``~/.cmdsheet/logs/``.
    """
    return _ensure_dir("XDG_DATA_HOME", (".local", "share"), "logs")


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the original exception re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Global config ---


def _global_config_path() -> Path:
    """Path to the global config file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_global_config() -> GlobalConfig:
    """Load the global configuration from the XDG config directory.

    Returns:
        The deserialised :class:`~cmdsheet.models.GlobalConfig`, or a
        default instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            Pydantic validation.
    """
    path = _global_config_path()
    if not path.is_file():
        return GlobalConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return GlobalConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: GlobalConfig) -> None:
    """Persist the global configuration atomically to disk."""
    data = config.model_dump(mode="json")
    _atomic_write(_global_config_path(), json.dumps(data, indent=2) + "\n")


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local overrides from ``./cmdsheet.json``.

    The file holds a partial :class:`~cmdsheet.models.GlobalConfig`, for
    instance ``{"history": {"enabled": false}}`` to keep a shared checkout
    from recording commands.

    Returns:
        The parsed JSON object, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid project config at {path}: expected a JSON object")
    return data


def _deep_merge(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# --- Precedence resolution ---


def resolve_config(cli_format: Optional[str] = None) -> GlobalConfig:
    """Resolve the effective configuration.

    Precedence (high to low):
        1. CLI flags (``cli_format``)
        2. Environment variables (``CMDSHEET_FORMAT``,
           ``CMDSHEET_HISTORY_DISABLED``)
        3. Project config (``./cmdsheet.json``)
        4. User config (``~/.config/cmdsheet/config.json``)
        5. Defaults

    Raises:
        ConfigError: If any layer fails validation.
    """
    global_cfg = load_global_config()

    project = load_project_config()
    if project is not None:
        logger.debug("Applying project config from %s", Path.cwd() / _PROJECT_CONFIG_FILENAME)
        merged = _deep_merge(global_cfg.model_dump(mode="json"), project)
        try:
            global_cfg = GlobalConfig.model_validate(merged)
        except ValueError as exc:
            raise ConfigError(f"Invalid project config: {exc}") from exc

    env_format = os.environ.get(ENV_FORMAT)
    if env_format:
        global_cfg.output.format = env_format
    if os.environ.get(ENV_HISTORY_DISABLED, "").lower() in ("1", "true", "yes"):
        global_cfg.history.enabled = False

    if cli_format is not None:
        global_cfg.output.format = cli_format

    return global_cfg
