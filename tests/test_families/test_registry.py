"""Registry completeness plus totality and idempotence over every family.

Every family is composed for every combination of its enum choices and
boolean toggles (text fields at their defaults, then blank). Composition
must never raise, never emit an empty command, and rendering a rendered
command must not change it.
"""

from __future__ import annotations

import itertools
from typing import Any, Iterator

import pytest

from cmdsheet.exceptions import UnknownFamilyError
from cmdsheet.families import FAMILIES, get_family, list_families
from cmdsheet.families.base import CommandFamily
from cmdsheet.models import BooleanField, EnumField, FamilyName, TextField
from cmdsheet.renderer import render


def _combinations(family: CommandFamily) -> Iterator[dict[str, Any]]:
    names: list[str] = []
    domains: list[list[Any]] = []
    for spec in family.schema.fields:
        if isinstance(spec, EnumField):
            names.append(spec.name)
            domains.append(spec.choices)
        elif isinstance(spec, BooleanField):
            names.append(spec.name)
            domains.append([False, True])
    for combo in itertools.product(*domains):
        yield dict(zip(names, combo))


def _blank_text(family: CommandFamily) -> dict[str, str]:
    return {spec.name: "" for spec in family.schema.fields if isinstance(spec, TextField)}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class TestRegistry:
    def test_every_name_has_a_family(self) -> None:
        assert set(FAMILIES) == set(FamilyName)

    def test_lookup_by_string_and_enum(self) -> None:
        assert get_family("ssh-keygen") is get_family(FamilyName.SSH_KEYGEN)

    def test_unknown_family(self) -> None:
        with pytest.raises(UnknownFamilyError, match="docker"):
            get_family("docker")

    def test_unknown_family_exit_code(self) -> None:
        with pytest.raises(UnknownFamilyError) as info:
            get_family("docker")
        assert info.value.exit_code == 4

    def test_list_families_in_declaration_order(self) -> None:
        assert [f.name for f in list_families()] == list(FamilyName)

    def test_schema_family_matches_key(self) -> None:
        for name, family in FAMILIES.items():
            assert family.schema.family == name


# ---------------------------------------------------------------------------
# Totality and idempotence
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("name", list(FamilyName), ids=lambda n: n.value)
class TestTotality:
    def test_all_combinations_compose(self, name: FamilyName) -> None:
        family = get_family(name)
        for values in _combinations(family):
            for overrides in ({}, _blank_text(family)):
                tokens = family.compose(family.normalize({**values, **overrides}))
                command = render(tokens)
                assert command, f"{name.value} rendered nothing for {values}"
                assert render([command]) == command
                assert command == command.strip()
                assert "  " not in command

    def test_normalize_is_idempotent(self, name: FamilyName) -> None:
        family = get_family(name)
        for values in _combinations(family):
            once = family.normalize(values)
            assert family.normalize(once) == once

    def test_normalize_is_complete(self, name: FamilyName) -> None:
        family = get_family(name)
        normalized = family.normalize({"no_such_field": "x"})
        assert set(normalized) == {spec.name for spec in family.schema.fields}

    def test_tips_reference_real_choices(self, name: FamilyName) -> None:
        family = get_family(name)
        for field_name, by_value in family.tips.items():
            spec = family.schema.field(field_name)
            assert isinstance(spec, EnumField)
            assert set(by_value) <= set(spec.choices)
