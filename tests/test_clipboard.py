"""Tests for cmdsheet.clipboard -- pyperclip writes and the copied state."""

from __future__ import annotations

import pyperclip
import pytest

from cmdsheet.clipboard import Clipboard


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> _Clock:
    return _Clock()


@pytest.fixture
def copies(monkeypatch: pytest.MonkeyPatch) -> list[str]:
    recorded: list[str] = []
    monkeypatch.setattr("cmdsheet.clipboard.pyperclip.copy", recorded.append)
    return recorded


class TestClipboard:
    def test_copy_hands_text_to_pyperclip(self, copies: list[str], clock: _Clock) -> None:
        clipboard = Clipboard(clock=clock)
        assert clipboard.copy("ls -la") is True
        assert copies == ["ls -la"]

    def test_copied_lasts_ack_seconds(self, copies: list[str], clock: _Clock) -> None:
        clipboard = Clipboard(ack_seconds=2.0, clock=clock)
        assert clipboard.copied is False
        clipboard.copy("ls")
        clock.now += 1.9
        assert clipboard.copied is True
        clock.now += 0.2
        assert clipboard.copied is False

    def test_empty_text_not_copied(self, copies: list[str]) -> None:
        assert Clipboard().copy("") is False
        assert copies == []

    def test_no_clipboard_mechanism(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def _fail(text: str) -> None:
            raise pyperclip.PyperclipException("could not find a copy/paste mechanism")

        monkeypatch.setattr("cmdsheet.clipboard.pyperclip.copy", _fail)
        clipboard = Clipboard()
        assert clipboard.copy("ls") is False
        assert clipboard.copied is False
