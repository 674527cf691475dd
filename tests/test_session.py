"""Tests for cmdsheet.session.GeneratorSession."""

from __future__ import annotations

from pathlib import Path

import pytest

from cmdsheet.exceptions import UnknownFamilyError
from cmdsheet.history import RecentHistory
from cmdsheet.models import FamilyName, HistoryConfig
from cmdsheet.session import GeneratorSession


class _FakeClipboard:
    def __init__(self, succeed: bool = True) -> None:
        self.copied = False
        self.texts: list[str] = []
        self._succeed = succeed

    def copy(self, text: str) -> bool:
        self.texts.append(text)
        self.copied = self._succeed
        return self._succeed


@pytest.fixture
def history(tmp_path: Path) -> RecentHistory:
    store = RecentHistory(tmp_path, HistoryConfig())
    yield store
    store.close()


class TestRendering:
    def test_renders_defaults(self) -> None:
        assert GeneratorSession("socket").render() == "ss -l-n-p-t"

    def test_on_model_change_rerenders(self) -> None:
        session = GeneratorSession("socket")
        assert session.on_model_change({"tool": "netstat", "process": False}) == "netstat -lnt"

    def test_rejected_change_keeps_command(self) -> None:
        session = GeneratorSession("tar", values={"exclude": ""})
        before = session.render()
        assert session.on_model_change({"mode": "zip"}) == before

    def test_initial_values(self) -> None:
        session = GeneratorSession(FamilyName.PROCESS, values={"action": "delay", "delaySeconds": "1"})
        assert session.render() == "htop -d 10"

    def test_switch_family_starts_from_defaults(self) -> None:
        session = GeneratorSession("tar", values={"mode": "list"})
        assert session.switch_family("chmod") == "chmod 755 <file-or-folder>"
        assert session.family == FamilyName.CHMOD

    def test_unknown_family(self) -> None:
        with pytest.raises(UnknownFamilyError):
            GeneratorSession("docker")


class TestCommitAndCopy:
    def test_commit_pushes_render(self, history: RecentHistory) -> None:
        session = GeneratorSession("chmod", history=history, values={"target": "a.sh"})
        assert session.commit() == ["chmod 755 a.sh"]
        assert session.recent == ["chmod 755 a.sh"]

    def test_commit_without_history(self) -> None:
        assert GeneratorSession("chmod").commit() == []

    def test_copy_uses_clipboard(self) -> None:
        clipboard = _FakeClipboard()
        session = GeneratorSession("chmod", clipboard=clipboard, values={"target": "a.sh"})
        assert session.copy() is True
        assert clipboard.texts == ["chmod 755 a.sh"]
        assert session.copied is True

    def test_copy_without_clipboard(self) -> None:
        session = GeneratorSession("chmod")
        assert session.copy() is False
        assert session.copied is False


class TestRecall:
    def test_recall_shell_entry(self) -> None:
        session = GeneratorSession("shell")
        recalled = session.recall("mkdir projects")
        assert recalled.opaque is False
        assert session.model.get("category") == "folders"
        assert session.render() == "mkdir projects"

    def test_recall_opaque_entry_shows_verbatim(self) -> None:
        session = GeneratorSession("shell", values={"category": "git", "action": "git push"})
        session.recall("tar cvzf a.tar.gz src/")
        assert session.is_opaque is True
        assert session.render() == "tar cvzf a.tar.gz src/"
        assert session.model.get("category") == "files"

    def test_edit_after_opaque_recall_resumes_synthesis(self) -> None:
        session = GeneratorSession("shell")
        session.recall("some-unknown --thing")
        assert session.on_model_change({"target": "x.txt"}) == "touch x.txt"
        assert session.is_opaque is False
