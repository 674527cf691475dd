"""Presentation adapter: one generator "page" worth of state.

A :class:`GeneratorSession` owns the current :class:`~cmdsheet.options.OptionModel`
and, optionally, a :class:`~cmdsheet.history.RecentHistory` and a
:class:`~cmdsheet.clipboard.Clipboard`. A front end feeds it partial field
updates and displays whatever :meth:`GeneratorSession.render` returns.
Nothing here affects what command is synthesised; it only decides when
to synthesise, where to record it, and where to copy it.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from cmdsheet.clipboard import Clipboard
from cmdsheet.composer import synthesize
from cmdsheet.families import get_family
from cmdsheet.history import RecentHistory, recall_entry
from cmdsheet.models import FamilyName, RecalledCommand
from cmdsheet.options import OptionModel

logger = logging.getLogger(__name__)


class GeneratorSession:
    """Interactive state for one tool family.

    Args:
        family: Family to start with.
        history: Where committed commands are recorded. Optional.
        clipboard: Used by :meth:`copy`. Optional; without one, copying
            always reports failure.
        values: Initial field overrides.

    Example::

        session = GeneratorSession("socket")
        session.on_model_change({"tcp": False, "udp": False})   # 'ss -l-n-p-t'
        session.commit()
    """

    def __init__(
        self,
        family: FamilyName | str,
        history: Optional[RecentHistory] = None,
        clipboard: Optional[Clipboard] = None,
        values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._history = history
        self._clipboard = clipboard
        self._opaque: Optional[str] = None
        self._model = OptionModel(get_family(family).schema, values)

    @property
    def model(self) -> OptionModel:
        return self._model

    @property
    def family(self) -> FamilyName:
        return self._model.family

    @property
    def is_opaque(self) -> bool:
        """Whether a recalled, unmatched history entry is on display."""
        return self._opaque is not None

    @property
    def copied(self) -> bool:
        return self._clipboard is not None and self._clipboard.copied

    @property
    def recent(self) -> list[str]:
        return self._history.entries() if self._history is not None else []

    def render(self) -> str:
        """Return the command currently on display."""
        if self._opaque is not None:
            return self._opaque
        return synthesize(self._model)

    def on_model_change(self, partial: Mapping[str, Any]) -> str:
        """Apply a partial update and return the re-rendered command.

        Any edit ends the display of an opaque recalled entry.
        """
        self._opaque = None
        rejected = self._model.update(partial)
        if rejected:
            logger.debug("Rejected updates for %s: %s", self.family.value, rejected)
        return self.render()

    def switch_family(self, family: FamilyName | str) -> str:
        """Discard the current model and start over with *family*'s defaults."""
        self._opaque = None
        self._model = OptionModel(get_family(family).schema)
        return self.render()

    def commit(self) -> list[str]:
        """Push the current command onto the recent history.

        Returns:
            The history after the push (empty without a history).
        """
        if self._history is None:
            return []
        return self._history.push(self.render())

    def copy(self) -> bool:
        """Copy the current command; see :meth:`Clipboard.copy`."""
        if self._clipboard is None:
            return False
        return self._clipboard.copy(self.render())

    def recall(self, entry: str) -> RecalledCommand:
        """Load a history entry back into the session.

        Entries that map onto the ``shell`` family replace the model with
        the recovered values. Anything else is shown verbatim with the
        structured fields reset, until the next :meth:`on_model_change`.
        """
        recalled = recall_entry(entry)
        if recalled.opaque or recalled.family is None:
            self._model.reset()
            self._opaque = entry
        else:
            self._opaque = None
            self._model = OptionModel(get_family(recalled.family).schema, recalled.values)
        return recalled
