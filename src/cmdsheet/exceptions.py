"""Exception hierarchy for cmdsheet.

All exceptions inherit from :class:`CmdsheetError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`cmdsheet.exit_codes`.
The top-level error handler in :func:`cmdsheet.app.main` catches
``CmdsheetError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Command synthesis itself never raises: empty text and unknown enum values
degrade to defaults. These exceptions only cover the edges of the system
(CLI input, configuration files, history storage).

Subclass hierarchy::

    CmdsheetError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- UnknownFamilyError  (exit 4)
    +-- HistoryError        (exit 5)
    +-- ConfigError         (exit 1)
"""

from cmdsheet.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_STORAGE_ERROR,
)


class CmdsheetError(Exception):
    """Base exception for all cmdsheet errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`cmdsheet.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(CmdsheetError):
    """Raised for invalid CLI arguments such as a ``-s`` pair without ``=``."""

    exit_code = EXIT_INVALID_USAGE


class UnknownFamilyError(CmdsheetError):
    """Raised when a tool family name is outside the closed set of families."""

    exit_code = EXIT_NOT_FOUND


class HistoryError(CmdsheetError):
    """Raised when the recent-command store cannot be opened or written."""

    exit_code = EXIT_STORAGE_ERROR


class ConfigError(CmdsheetError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
