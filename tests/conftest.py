"""Shared fixtures: an in-memory remote service, a temp local store and habit builders."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

import pytest
import requests

from habit_tracker.exceptions import RemoteStatusError, RemoteTransportError
from habit_tracker.habits.models import DayOfWeek, DaySet, Habit, Theme, generate_local_id
from habit_tracker.storage.database import LocalStore
from habit_tracker.sync.gateway import PersistenceGateway
from habit_tracker.tracker import HabitTracker


class FakeRemote:
    """Stands in for HabitAPIClient; keeps habits in a dict and records every call."""

    def __init__(self, habits: Optional[list[Habit]] = None, theme: Optional[Theme] = None):
        self.habits = {habit.id: habit for habit in habits or []}
        self.theme = theme
        self.next_id = 100
        self.fail = False
        self.fail_ops: set[str] = set()
        self.calls: list[tuple] = []

    def _check(self, *call):
        self.calls.append(call)
        if self.fail or call[0] in self.fail_ops:
            raise RemoteTransportError(f"{call[0]} failed: offline")

    def ops(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def fetch_habits(self) -> list[Habit]:
        self._check("fetch")
        return [habit.model_copy(deep=True) for habit in self.habits.values()]

    def create_habit(self, habit: Habit) -> Habit:
        self._check("create", habit.id)
        created = habit.model_copy(deep=True, update={"id": str(self.next_id)})
        self.next_id += 1
        self.habits[created.id] = created
        return created.model_copy(deep=True)

    def update_habit(self, habit: Habit) -> None:
        self._check("update", habit.id)
        self.habits[habit.id] = habit.model_copy(deep=True)

    def delete_habit(self, habit_id: str) -> None:
        self._check("delete", habit_id)
        self.habits.pop(habit_id, None)

    def get_theme(self) -> Theme:
        self._check("get_theme")
        if self.theme is None:
            raise RemoteStatusError(404, "GET /settings/theme returned 404")
        return self.theme

    def put_theme(self, theme: Theme) -> None:
        self._check("put_theme", theme)
        self.theme = theme


class FakeSession:
    """Records requests and replays queued responses or errors."""

    def __init__(self):
        self.headers: dict = {}
        self.requests: list[dict] = []
        self.responses: list = []

    def queue(self, response):
        self.responses.append(response)

    def request(self, method, url, json=None, timeout=None):
        self.requests.append({"method": method, "url": url, "json": json, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, requests.RequestException):
            raise response
        return response


@pytest.fixture
def make_habit() -> Callable[..., Habit]:
    """Factory for habits with chosen completed days."""

    def _make(
        name: str = "Habit",
        days: tuple = (),
        habit_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> Habit:
        return Habit(
            id=habit_id or generate_local_id(),
            name=name,
            completed_days=DaySet(**{DayOfWeek(day).value: True for day in days}),
            created_at=created_at or datetime(2025, 10, 1, 7, 0, tzinfo=timezone.utc),
            **kwargs,
        )

    return _make


@pytest.fixture
def remote() -> FakeRemote:
    return FakeRemote()


@pytest.fixture
def store(tmp_path) -> LocalStore:
    return LocalStore(str(tmp_path / "data" / "habits.db"))


@pytest.fixture
def gateway(remote, store) -> PersistenceGateway:
    return PersistenceGateway(remote, store, system_theme=Theme.LIGHT)


@pytest.fixture
def tracker(gateway) -> HabitTracker:
    return HabitTracker(gateway)


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()
