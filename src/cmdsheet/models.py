"""Canonical Pydantic models shared across all cmdsheet modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`OutputConfig`, :class:`HistoryConfig`, :class:`ClipboardConfig`,
    :class:`SimulationConfig` and :class:`GlobalConfig`.

**Family schema models** -- the declarative description of what a tool
family accepts, consumed by :class:`~cmdsheet.options.OptionModel` and the
composers in :mod:`cmdsheet.families`:
    :class:`FamilyName`, :class:`EnumField`, :class:`BooleanField`,
    :class:`TextField`, :class:`FamilySchema`, :class:`Tip` and
    :class:`RecalledCommand`.

A field is a tagged variant discriminated on ``kind`` so that a schema can
be serialised (``cmdsheet schema tar --json``) and validated back without
losing which shape each field has.
"""

from __future__ import annotations

import enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator


# --- Configuration ---


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class HistoryConfig(BaseModel):
    """Recent-command history settings stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Record generated commands")
    max_entries: int = Field(
        default=5, ge=1, le=5, description="Number of recent commands kept"
    )


class ClipboardConfig(BaseModel):
    """Clipboard behaviour stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Allow copying to the clipboard")
    ack_seconds: float = Field(
        default=2.0, ge=0, description="How long the 'copied' state lasts"
    )


class SimulationConfig(BaseModel):
    """Cadence of the simulated ping, traceroute and process views."""

    ping_interval_ms: int = Field(default=1000, ge=0)
    traceroute_interval_ms: int = Field(default=500, ge=0)
    refresh_seconds: float = Field(default=3.0, ge=0)


class GlobalConfig(BaseModel):
    """Top-level user configuration persisted as ``config.json``.

    Loaded and saved by :func:`~cmdsheet.config.load_global_config` and
    :func:`~cmdsheet.config.save_global_config`. Every section has defaults
    so an empty file (or no file at all) is a valid configuration.
    """

    output: OutputConfig = Field(default_factory=OutputConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    clipboard: ClipboardConfig = Field(default_factory=ClipboardConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)


# --- Family schemas ---


class FamilyName(str, enum.Enum):
    """The closed set of tool families a command can be composed for."""

    TAR = "tar"
    ZIP = "zip"
    COMPRESSION = "compression"
    SOCKET = "socket"
    LINK = "link"
    SEARCH = "search"
    FIND = "find"
    PROCESS = "process"
    CRON = "cron"
    SSH_KEYGEN = "ssh-keygen"
    KUBECTL = "kubectl"
    COMPOSE = "docker-compose"
    JOURNALCTL = "journalctl"
    TRANSFER = "transfer"
    RSYNC = "rsync"
    CHMOD = "chmod"
    CHOWN = "chown"
    USER = "user"
    SYSINFO = "sysinfo"
    SHELL = "shell"
    TMUX = "tmux"
    SED = "sed"
    SORT = "sort"
    CUT = "cut"
    ECHO = "echo"


class EnumField(BaseModel):
    """Exactly one value out of a fixed set of labels."""

    kind: Literal["enum"] = "enum"
    name: str
    label: str = ""
    choices: list[str]
    default: str
    description: str = ""

    @model_validator(mode="after")
    def _default_is_a_choice(self) -> "EnumField":
        if self.default not in self.choices:
            raise ValueError(
                f"default {self.default!r} of field {self.name!r} is not one of {self.choices}"
            )
        return self


class BooleanField(BaseModel):
    """An independent on/off toggle."""

    kind: Literal["boolean"] = "boolean"
    name: str
    label: str = ""
    default: bool = False
    description: str = ""


class TextField(BaseModel):
    """Free text; ``fallback`` replaces it at composition time when blank."""

    kind: Literal["text"] = "text"
    name: str
    label: str = ""
    default: str = ""
    fallback: str = ""
    description: str = ""


FieldSpec = Annotated[
    Union[EnumField, BooleanField, TextField], Field(discriminator="kind")
]


class FamilySchema(BaseModel):
    """Every field a tool family accepts, in display order."""

    family: FamilyName
    title: str
    description: str = ""
    fields: list[FieldSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_field_names(self) -> "FamilySchema":
        seen: set[str] = set()
        for spec in self.fields:
            if spec.name in seen:
                raise ValueError(f"duplicate field {spec.name!r} in {self.family.value} schema")
            seen.add(spec.name)
        return self

    def field(self, name: str) -> Optional[FieldSpec]:
        """Return the field called *name*, or ``None``."""
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def defaults(self) -> dict[str, Any]:
        """Return a fresh mapping of every field to its declared default."""
        return {spec.name: spec.default for spec in self.fields}


class Tip(BaseModel):
    """Human-readable help for one enum value (description plus a sample)."""

    description: str
    example: str = ""


class RecalledCommand(BaseModel):
    """A history entry mapped back onto a family, as far as that is possible.

    When ``opaque`` is true the entry could not be matched and only
    ``command`` is meaningful; ``family`` is ``None`` and ``values`` empty.
    """

    command: str
    family: Optional[FamilyName] = None
    values: dict[str, Any] = Field(default_factory=dict)
    opaque: bool = False
