"""Bounded recent-command history persisted with :mod:`diskcache`.

The history is a single most-recent-first list of rendered commands stored
under one fixed key (:data:`HISTORY_KEY`) in a :class:`diskcache.Cache`
directory. It is read once when a :class:`RecentHistory` is opened and
rewritten in full on every :meth:`RecentHistory.push`.

:func:`recall_entry` maps a stored string back onto the general-purpose
``shell`` family. That mapping is best effort: it matches the entry's
leading words against the known shell actions and gives up (returning an
opaque result) when nothing matches, instead of guessing.

See Also:
    :class:`~cmdsheet.models.HistoryConfig` -- ``enabled`` and
    ``max_entries``.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Optional

import diskcache

from cmdsheet.exceptions import HistoryError
from cmdsheet.families.shell import SHELL_ACTIONS, category_of
from cmdsheet.models import FamilyName, HistoryConfig, RecalledCommand

logger = logging.getLogger(__name__)

HISTORY_KEY = "recent-commands"
MAX_ENTRIES = 5


class RecentHistory:
    """Most-recent-first list of rendered commands, deduplicated by equality.

    Args:
        cache_dir: Root directory for the store. A ``history/``
            subdirectory is created inside it.
        config: History configuration. When disabled nothing is read or
            written and :meth:`push` is a no-op.

    Raises:
        HistoryError: If the store cannot be opened.

    Example::

        with RecentHistory(get_cache_dir(), HistoryConfig()) as history:
            history.push("tar cvzf a.tar.gz src/")
            history.entries()   # ['tar cvzf a.tar.gz src/', ...]
    """

    def __init__(self, cache_dir: str | Path, config: HistoryConfig) -> None:
        self._config = config
        self._directory = Path(cache_dir) / "history"
        self._cache: Optional[diskcache.Cache] = None
        self._entries: list[str] = []
        if not config.enabled:
            return
        try:
            self._cache = diskcache.Cache(str(self._directory))
            stored = self._cache.get(HISTORY_KEY, [])
        except (OSError, sqlite3.Error) as exc:
            raise HistoryError(f"Cannot open command history at {self._directory}: {exc}") from exc
        if not isinstance(stored, list):
            logger.warning("Discarding malformed history under %r", HISTORY_KEY)
            stored = []
        self._entries = [entry for entry in stored if isinstance(entry, str) and entry][: self.limit]

    @property
    def limit(self) -> int:
        return min(self._config.max_entries, MAX_ENTRIES)

    @property
    def enabled(self) -> bool:
        return self._cache is not None

    def entries(self) -> list[str]:
        """Return a copy of the stored commands, most recent first."""
        return list(self._entries)

    def push(self, command: str) -> list[str]:
        """Record *command* as the most recent entry.

        Any equal entry further down is removed and the list is truncated
        to :attr:`limit`. Blank commands are ignored.

        Returns:
            The updated entries.
        """
        if self._cache is None or not command.strip():
            return self.entries()
        self._entries = [command] + [entry for entry in self._entries if entry != command]
        del self._entries[self.limit:]
        self._write()
        return self.entries()

    def clear(self) -> None:
        """Forget every entry."""
        self._entries = []
        if self._cache is not None:
            self._write()

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache`."""
        if self._cache is not None:
            self._cache.close()
            self._cache = None

    def __enter__(self) -> "RecentHistory":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _write(self) -> None:
        assert self._cache is not None
        try:
            self._cache.set(HISTORY_KEY, list(self._entries))
        except (OSError, sqlite3.Error) as exc:
            raise HistoryError(f"Cannot write command history: {exc}") from exc


# Longest actions first so "git commit -m" wins over a shorter prefix.
_ACTIONS_BY_LENGTH = sorted(SHELL_ACTIONS, key=lambda action: len(action.split()), reverse=True)


def recall_entry(entry: str) -> RecalledCommand:
    """Map a history entry back to ``shell`` family values.

    The entry's leading words are compared with every known shell action,
    longest first; the remainder becomes the ``target``. Commands from
    other families, or typed by hand, usually do not match and come back
    opaque with no structured values.

    A single-word action such as ``top`` also matches ``top -u root``
    (which was really a ``process`` command). That misattribution is a
    known limitation of matching on words alone.
    """
    words = entry.split()
    for action in _ACTIONS_BY_LENGTH:
        action_words = action.split()
        if words[: len(action_words)] == action_words:
            target = " ".join(words[len(action_words):])
            return RecalledCommand(
                command=entry,
                family=FamilyName.SHELL,
                values={"category": category_of(action), "action": action, "target": target},
            )
    logger.debug("History entry %r matches no known action", entry)
    return RecalledCommand(command=entry, opaque=True)
