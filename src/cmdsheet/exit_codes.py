"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~cmdsheet.exceptions.CmdsheetError` subclass.
Shell wrappers can inspect the exit code to determine the failure class
without parsing stderr.

Example::

    $ cmdsheet gen nosuchtool
    $ echo $?
    4   # EXIT_NOT_FOUND -- the tool family does not exist
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (e.g. a malformed ``-s`` pair)."""

EXIT_NOT_FOUND = 4
"""The requested tool family, field or history entry does not exist."""

EXIT_STORAGE_ERROR = 5
"""The recent-command history could not be opened or written."""
