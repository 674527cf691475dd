"""Tests for cmdsheet.renderer and the composer entry points."""

from __future__ import annotations

import pytest

from cmdsheet.composer import build_command, compose, synthesize
from cmdsheet.exceptions import UnknownFamilyError
from cmdsheet.families import get_family
from cmdsheet.options import OptionModel
from cmdsheet.renderer import render


class TestRender:
    def test_joins_with_single_spaces(self) -> None:
        assert render(["tar", "cvzf", "a.tar.gz"]) == "tar cvzf a.tar.gz"

    def test_skips_empty_tokens(self) -> None:
        assert render(["gzip", "", "-k", "", "file"]) == "gzip -k file"

    def test_collapses_inner_whitespace(self) -> None:
        assert render(["tar", "cvzf ", " a.tar.gz", "src/   config/"]) == "tar cvzf a.tar.gz src/ config/"

    def test_all_empty(self) -> None:
        assert render(["", " "]) == ""

    def test_idempotent(self) -> None:
        once = render(["a ", " b", "", "c  d"])
        assert render([once]) == once

    def test_keeps_spacing_inside_quotes(self) -> None:
        assert render(["grep", "-r", '"a  b"', " ."]) == 'grep -r "a  b" .'
        assert render(["sed", "'s/x  /y/g'", "f"]) == "sed 's/x  /y/g' f"

    def test_unbalanced_quote_collapses(self) -> None:
        assert render(["echo", '"a  b']) == 'echo "a b'

    def test_closed_single_quote_stays_one_word(self) -> None:
        assert render(["sed", "'s/it'\\''s  x/y/'", "f"]) == "sed 's/it'\\''s  x/y/' f"

    def test_quoted_idempotent(self) -> None:
        once = render(["grep", '"x   y"', "  f  "])
        assert render([once]) == once


class TestComposer:
    def test_compose_returns_tokens(self) -> None:
        model = OptionModel(get_family("chmod").schema, {"target": "run.sh"})
        assert compose(model) == ["chmod", "755", "run.sh"]

    def test_synthesize_applies_fallbacks(self) -> None:
        model = OptionModel(get_family("chmod").schema, {"target": "   "})
        assert synthesize(model) == "chmod 755 <file-or-folder>"

    def test_build_command(self) -> None:
        assert build_command("tar", archive="a.tar.gz", targets="src/", exclude="") == "tar cvzf a.tar.gz src/"

    def test_build_command_unknown_family(self) -> None:
        with pytest.raises(UnknownFamilyError):
            build_command("docker")
