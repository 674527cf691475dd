"""Abstract base class for tool families.

A tool family pairs a declarative :class:`~cmdsheet.models.FamilySchema`
with the grammar of one real command-line tool (or a pair of sibling tools
such as ``ss``/``netstat``). Composition happens in two explicit steps:

1. :meth:`CommandFamily.normalize` -- turns arbitrary input into a complete,
   legal value mapping. Missing or invalid values fall back to schema
   defaults, text is trimmed, blank text is replaced by the field's
   ``fallback`` literal, and any family-specific fallback policy (for
   example "no protocol selected means TCP") is applied here.
2. :meth:`CommandFamily.compose` -- maps the normalised values to an ordered
   list of command tokens. It is pure and may assume its input is complete.

Example:
    Minimal family::

        class EchoFamily(CommandFamily):
            @property
            def schema(self) -> FamilySchema:
                return _SCHEMA

            def compose(self, values):
                return ["echo", values["text"]]
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping

from cmdsheet.models import FamilyName, FamilySchema, TextField, Tip
from cmdsheet.options import OptionModel


class CommandFamily(ABC):
    """Base class for all tool families.

    Subclasses must implement :attr:`schema` and :meth:`compose`. Families
    that carry lookup help for their enum values override :attr:`tips`, and
    families with a fallback policy beyond per-field literals override
    :meth:`normalize` (calling ``super().normalize`` first).
    """

    @property
    @abstractmethod
    def schema(self) -> FamilySchema:
        """Return the family's option schema."""
        ...

    @property
    def name(self) -> FamilyName:
        return self.schema.family

    @property
    def title(self) -> str:
        return self.schema.title

    @property
    def description(self) -> str:
        return self.schema.description

    @property
    def tips(self) -> dict[str, dict[str, Tip]]:
        """Static help keyed by field name, then by enum value.

        Returns:
            An empty mapping unless the family overrides it.
        """
        return {}

    def normalize(self, values: Mapping[str, Any]) -> dict[str, Any]:
        """Return a complete value mapping ready for :meth:`compose`.

        Args:
            values: Any mapping of field names (snake_case or camelCase) to
                values. Unknown names and illegal values are dropped.

        Returns:
            One entry per schema field. Text fields are stripped, and blank
            ones replaced by their ``fallback``.
        """
        normalized = OptionModel(self.schema, values).as_dict()
        for spec in self.schema.fields:
            if isinstance(spec, TextField):
                text = normalized[spec.name].strip()
                normalized[spec.name] = text or spec.fallback
        return normalized

    @abstractmethod
    def compose(self, values: Mapping[str, Any]) -> list[str]:
        """Map normalised *values* to command tokens, in canonical order."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name.value}>"


def escape_single_quotes(text: str) -> str:
    r"""Escape ``'`` as ``\'`` for text that is wrapped in single quotes."""
    return text.replace("'", "\\'")


def close_single_quotes(text: str) -> str:
    r"""Escape ``'`` as ``'\''`` so *text* survives inside a single-quoted shell word."""
    return text.replace("'", "'\\''")
