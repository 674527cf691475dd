"""Tests for cmdsheet.history -- the bounded recent list and entry recall."""

from __future__ import annotations

from pathlib import Path

import diskcache
import pytest

from cmdsheet.exceptions import HistoryError
from cmdsheet.history import HISTORY_KEY, RecentHistory, recall_entry
from cmdsheet.models import FamilyName, HistoryConfig


@pytest.fixture
def history(tmp_path: Path) -> RecentHistory:
    store = RecentHistory(tmp_path, HistoryConfig())
    yield store
    store.close()


# ---------------------------------------------------------------------------
# Push / dedup / truncate
# ---------------------------------------------------------------------------


class TestRecentHistory:
    def test_starts_empty(self, history: RecentHistory) -> None:
        assert history.entries() == []
        assert history.enabled is True

    def test_push_is_most_recent_first(self, history: RecentHistory) -> None:
        history.push("ls")
        history.push("pwd")
        assert history.entries() == ["pwd", "ls"]

    def test_duplicate_moves_to_front(self, history: RecentHistory) -> None:
        for command in ["a", "b", "c"]:
            history.push(command)
        assert history.push("a") == ["a", "c", "b"]

    def test_truncates_to_five(self, history: RecentHistory) -> None:
        for i in range(8):
            history.push(f"cmd {i}")
        assert history.entries() == ["cmd 7", "cmd 6", "cmd 5", "cmd 4", "cmd 3"]

    def test_blank_commands_ignored(self, history: RecentHistory) -> None:
        history.push("ls")
        assert history.push("   ") == ["ls"]

    def test_smaller_limit(self, tmp_path: Path) -> None:
        with RecentHistory(tmp_path, HistoryConfig(max_entries=2)) as store:
            for command in ["a", "b", "c"]:
                store.push(command)
            assert store.entries() == ["c", "b"]

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        with RecentHistory(tmp_path, HistoryConfig()) as store:
            store.push("tar cvzf a.tar.gz src/")
        with RecentHistory(tmp_path, HistoryConfig()) as store:
            assert store.entries() == ["tar cvzf a.tar.gz src/"]

    def test_stored_under_fixed_key(self, tmp_path: Path) -> None:
        with RecentHistory(tmp_path, HistoryConfig()) as store:
            store.push("ls")
        with diskcache.Cache(str(tmp_path / "history")) as cache:
            assert cache.get(HISTORY_KEY) == ["ls"]

    def test_malformed_store_is_discarded(self, tmp_path: Path) -> None:
        with diskcache.Cache(str(tmp_path / "history")) as cache:
            cache.set(HISTORY_KEY, {"not": "a list"})
        with RecentHistory(tmp_path, HistoryConfig()) as store:
            assert store.entries() == []

    def test_non_string_entries_dropped(self, tmp_path: Path) -> None:
        with diskcache.Cache(str(tmp_path / "history")) as cache:
            cache.set(HISTORY_KEY, ["ls", 3, "", None, "pwd"])
        with RecentHistory(tmp_path, HistoryConfig()) as store:
            assert store.entries() == ["ls", "pwd"]

    def test_clear(self, history: RecentHistory) -> None:
        history.push("ls")
        history.clear()
        assert history.entries() == []

    def test_disabled_is_a_no_op(self, tmp_path: Path) -> None:
        store = RecentHistory(tmp_path, HistoryConfig(enabled=False))
        assert store.enabled is False
        assert store.push("ls") == []
        assert not (tmp_path / "history").exists()

    def test_unopenable_store_raises(self, tmp_path: Path) -> None:
        (tmp_path / "history").write_text("not a directory")
        with pytest.raises(HistoryError):
            RecentHistory(tmp_path, HistoryConfig())

    def test_max_entries_capped_by_config_model(self) -> None:
        with pytest.raises(ValueError):
            HistoryConfig(max_entries=6)


# ---------------------------------------------------------------------------
# Recall
# ---------------------------------------------------------------------------


class TestRecallEntry:
    def test_single_word_action(self) -> None:
        recalled = recall_entry("touch notes.txt")
        assert recalled.family == FamilyName.SHELL
        assert recalled.values == {"category": "files", "action": "touch", "target": "notes.txt"}
        assert recalled.opaque is False

    def test_longest_action_wins(self) -> None:
        recalled = recall_entry('git commit -m "Fix login bug"')
        assert recalled.values["action"] == "git commit -m"
        assert recalled.values["target"] == '"Fix login bug"'

    def test_action_without_target(self) -> None:
        assert recall_entry("df -h").values == {"category": "system", "action": "df -h", "target": ""}

    def test_unknown_command_is_opaque(self) -> None:
        recalled = recall_entry("tar cvzf a.tar.gz src/")
        assert recalled.opaque is True
        assert recalled.family is None
        assert recalled.values == {}
        assert recalled.command == "tar cvzf a.tar.gz src/"

    def test_partial_word_does_not_match(self) -> None:
        assert recall_entry("touchy file").opaque is True
