"""The mutable option model behind a single command generator.

An :class:`OptionModel` holds one value per field of a
:class:`~cmdsheet.models.FamilySchema`. It is created with the family's
defaults and then edited one partial update at a time, the way a form
is edited keystroke by keystroke.

The model never raises on bad input. A value that does not fit its field
(an enum label outside ``choices``, an unparseable boolean, an unknown
field name) is dropped and the previous value kept. Free text is stored
exactly as given; trimming and fallbacks happen when the command is
composed.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Optional

from cmdsheet.models import BooleanField, EnumField, FamilyName, FamilySchema, TextField

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off", ""})


def field_key(name: str) -> str:
    """Normalise a field name to snake_case (``ignoreCase`` -> ``ignore_case``).

    Example::

        >>> field_key("delaySeconds")
        'delay_seconds'
        >>> field_key("extract-dir")
        'extract_dir'
    """
    result = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name.strip())
    result = result.lower().replace("-", "_")
    return re.sub(r"_+", "_", result).strip("_")


def coerce_bool(value: Any) -> Optional[bool]:
    """Interpret *value* as a boolean, or return ``None`` if it is not one."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0 if value in (0, 1) else None
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return None


class OptionModel:
    """Field values for one tool family, seeded from the schema defaults.

    Args:
        schema: The family schema that declares the legal fields.
        values: Optional initial overrides, applied through :meth:`update`
            (so they are validated the same way as later edits).

    Example::

        model = OptionModel(get_family("tar").schema, {"mode": "extract"})
        model.set("compression", "xz")
        model.set("compression", "rar")   # ignored, stays "xz"
    """

    def __init__(
        self,
        schema: FamilySchema,
        values: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self._schema = schema
        self._values: dict[str, Any] = schema.defaults()
        if values:
            self.update(values)

    @property
    def schema(self) -> FamilySchema:
        return self._schema

    @property
    def family(self) -> FamilyName:
        return self._schema.family

    def get(self, name: str) -> Any:
        """Return the current value of field *name*.

        Raises:
            KeyError: If the family has no such field.
        """
        return self._values[field_key(name)]

    def set(self, name: str, value: Any) -> bool:
        """Set field *name* to *value*.

        Returns:
            ``True`` if the value was accepted, ``False`` if it was ignored
            and the previous value retained.
        """
        key = field_key(name)
        spec = self._schema.field(key)
        if spec is None:
            logger.debug("Ignoring unknown field %r for %s", name, self.family.value)
            return False

        if isinstance(spec, EnumField):
            label = "" if value is None else str(value)
            if label not in spec.choices:
                logger.debug(
                    "Ignoring %r for %s.%s; expected one of %s",
                    value, self.family.value, key, spec.choices,
                )
                return False
            self._values[key] = label
        elif isinstance(spec, BooleanField):
            flag = coerce_bool(value)
            if flag is None:
                logger.debug("Ignoring non-boolean %r for %s.%s", value, self.family.value, key)
                return False
            self._values[key] = flag
        elif isinstance(spec, TextField):
            self._values[key] = "" if value is None else str(value)
        return True

    def update(self, partial: Mapping[str, Any]) -> list[str]:
        """Apply several field changes at once.

        Returns:
            The names (as given) of the entries that were rejected.
        """
        return [name for name, value in partial.items() if not self.set(name, value)]

    def reset(self) -> None:
        """Restore every field to its schema default."""
        self._values = self._schema.defaults()

    def as_dict(self) -> dict[str, Any]:
        """Return a copy of the current values."""
        return dict(self._values)

    def __repr__(self) -> str:
        return f"OptionModel({self.family.value!r}, {self._values!r})"
