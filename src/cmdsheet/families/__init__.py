"""Tool families and the closed registry that dispatches to them.

Every member of :class:`~cmdsheet.models.FamilyName` has exactly one
:class:`~cmdsheet.families.base.CommandFamily` implementation. The registry
is checked when this package is imported, so a new enum member without a
composer fails loudly instead of falling through to some other family.

Example::

    from cmdsheet.families import get_family

    tar = get_family("tar")
    tokens = tar.compose(tar.normalize({"mode": "list"}))
"""

from __future__ import annotations

from cmdsheet.exceptions import UnknownFamilyError
from cmdsheet.families.archive import CompressionFamily, TarFamily, ZipFamily
from cmdsheet.families.base import CommandFamily
from cmdsheet.families.devops import ComposeFamily, KubectlFamily, SshKeygenFamily
from cmdsheet.families.network import LinkFamily, RsyncFamily, SocketFamily, TransferFamily
from cmdsheet.families.search import FindFamily, SearchFamily
from cmdsheet.families.shell import ShellFamily, TmuxFamily
from cmdsheet.families.system import (
    ChmodFamily,
    ChownFamily,
    CronFamily,
    JournalctlFamily,
    ProcessFamily,
    SysinfoFamily,
    UserFamily,
)
from cmdsheet.families.text import CutFamily, EchoFamily, SedFamily, SortFamily
from cmdsheet.models import FamilyName

FAMILIES: dict[FamilyName, CommandFamily] = {
    family.name: family
    for family in (
        TarFamily(),
        ZipFamily(),
        CompressionFamily(),
        SocketFamily(),
        LinkFamily(),
        SearchFamily(),
        FindFamily(),
        ProcessFamily(),
        CronFamily(),
        SshKeygenFamily(),
        KubectlFamily(),
        ComposeFamily(),
        JournalctlFamily(),
        TransferFamily(),
        RsyncFamily(),
        ChmodFamily(),
        ChownFamily(),
        UserFamily(),
        SysinfoFamily(),
        ShellFamily(),
        TmuxFamily(),
        SedFamily(),
        SortFamily(),
        CutFamily(),
        EchoFamily(),
    )
}

_missing = set(FamilyName) - set(FAMILIES)
if _missing:
    raise RuntimeError(f"No composer registered for: {sorted(m.value for m in _missing)}")


def get_family(name: FamilyName | str) -> CommandFamily:
    """Look up a family by enum member or by its string value.

    Raises:
        UnknownFamilyError: If *name* is not one of :class:`FamilyName`.
    """
    try:
        key = FamilyName(name)
    except ValueError:
        known = ", ".join(member.value for member in FamilyName)
        raise UnknownFamilyError(f"Unknown tool family '{name}'. Known families: {known}") from None
    return FAMILIES[key]


def list_families() -> list[CommandFamily]:
    """Return every family, in :class:`FamilyName` declaration order."""
    return [FAMILIES[member] for member in FamilyName]


__all__ = ["CommandFamily", "FAMILIES", "get_family", "list_families"]
