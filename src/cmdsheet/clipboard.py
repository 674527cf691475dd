"""Write-only clipboard access through :mod:`pyperclip`.

A failed copy is never fatal: it is logged, :meth:`Clipboard.copy` returns
``False``, and the transient "copied" state simply does not light up.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import pyperclip

logger = logging.getLogger(__name__)


class Clipboard:
    """Copy text to the system clipboard and remember when that succeeded.

    Args:
        ack_seconds: How long :attr:`copied` stays true after a copy.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        ack_seconds: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ack_seconds = ack_seconds
        self._clock = clock
        self._copied_at: Optional[float] = None

    @property
    def copied(self) -> bool:
        """``True`` for ``ack_seconds`` after the last successful copy."""
        if self._copied_at is None:
            return False
        return self._clock() - self._copied_at < self._ack_seconds

    def copy(self, text: str) -> bool:
        """Put *text* on the clipboard.

        Returns:
            ``True`` on success. ``False`` when *text* is empty or no
            clipboard mechanism is available.
        """
        if not text:
            return False

        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            logger.warning("Failed to copy to clipboard: %s", exc)
            return False

        self._copied_at = self._clock()
        logger.debug("Copied %d characters", len(text))
        return True
