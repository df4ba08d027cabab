"""Tests for the local SQLite slot store."""

from __future__ import annotations

import pytest

from habit_tracker.exceptions import LocalStorageError
from habit_tracker.habits.models import Theme
from habit_tracker.storage.database import HABITS_SLOT, THEME_SLOT, LocalStore


def test_creates_parent_directory(tmp_path):
    LocalStore(str(tmp_path / "nested" / "dir" / "habits.db"))
    assert (tmp_path / "nested" / "dir" / "habits.db").exists()


def test_missing_slot_reads_none(store):
    assert store.get(HABITS_SLOT) is None
    assert store.read_habits() == []
    assert store.read_theme() is None


def test_habits_survive_reopen(tmp_path, make_habit):
    path = str(tmp_path / "habits.db")
    habit = make_habit(name="Floss", days=("monday", "sunday"))
    LocalStore(path).write_habits([habit])

    loaded = LocalStore(path).read_habits()

    assert loaded == [habit]


def test_write_replaces_previous_collection(store, make_habit):
    store.write_habits([make_habit(name="A"), make_habit(name="B")])
    store.write_habits([make_habit(name="C")])
    assert [habit.name for habit in store.read_habits()] == ["C"]


def test_corrupt_json_raises(store):
    store.set(HABITS_SLOT, "{not json")
    with pytest.raises(LocalStorageError):
        store.read_habits()


def test_non_list_raises(store):
    store.set(HABITS_SLOT, '{"id": "1"}')
    with pytest.raises(LocalStorageError):
        store.read_habits()


def test_invalid_record_raises(store):
    store.set(HABITS_SLOT, '[{"name": "no id"}]')
    with pytest.raises(LocalStorageError):
        store.read_habits()


def test_record_without_day_set_loads_empty(store):
    store.set(HABITS_SLOT, '[{"id": "1", "name": "Old record"}]')
    habit = store.read_habits()[0]
    assert habit.completed_days.values() == [False] * 7


def test_theme_slot(store):
    store.write_theme(Theme.DARK)
    assert store.get(THEME_SLOT) == "dark"
    assert store.read_theme() == Theme.DARK


def test_unknown_theme_ignored(store):
    store.set(THEME_SLOT, "sepia")
    assert store.read_theme() is None
