"""Application state: the habit collection, theme and the intents that change them."""

import logging
import threading
from datetime import date, datetime
from typing import Optional

from .exceptions import HabitNotFoundError
from .habits.models import (
    DayOfWeek,
    EditHabitData,
    Habit,
    HabitFormData,
    Theme,
    is_local_id,
    new_habit,
    recolor,
    rename,
    reset_progress,
    toggle_day,
)
from .habits.query import HabitQuery, visible_list
from .habits.stats import summarize
from .sync.gateway import LoadSource, PersistenceGateway, SyncReport

logger = logging.getLogger(__name__)


class HabitTracker:
    """
    Owns the working habit collection and theme.

    Every intent updates memory first and then hands the collection to the
    gateway. Remote failures never undo the in-memory change.
    """

    def __init__(self, gateway: PersistenceGateway, sync_on_load: bool = True):
        self.gateway = gateway
        self.sync_on_load = sync_on_load

        self.habits: list[Habit] = []
        self.theme: Theme = gateway.system_theme
        self.habits_loaded = False
        self.theme_loaded = False
        self.load_source: Optional[LoadSource] = None
        self.last_report: Optional[SyncReport] = None

        self._lock = threading.RLock()

    def load(self) -> Optional[SyncReport]:
        """Load habits and theme, then run the save protocol once if enabled."""
        with self._lock:
            self.habits, self.load_source = self.gateway.load_habits()
            self.habits_loaded = True

            self.theme = self.gateway.load_theme()
            self.theme_loaded = True

            logger.info(
                f"Loaded {len(self.habits)} habits from {self.load_source.value}, "
                f"theme {self.theme.value}"
            )

            if self.sync_on_load:
                return self._sync_all()
            return None

    def get_habit(self, habit_id: str) -> Habit:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        raise HabitNotFoundError(f"Habit not found: {habit_id}")

    def add_habit(self, form: HabitFormData, now: Optional[datetime] = None) -> Habit:
        """
        Create a habit and try to register it remotely.

        Returns:
            The stored habit; carries the remote id if the create succeeded
        """
        with self._lock:
            habit = new_habit(form, now)
            self.habits.append(habit)
            logger.info(f"Added habit {habit.name!r} ({habit.id})")

            report = self._sync(habit.id)
            if report and habit.id in report.created:
                return self.get_habit(report.created[habit.id])
            return habit

    def edit_habit(self, habit_id: str, edit: EditHabitData) -> Habit:
        with self._lock:
            habit = self.get_habit(habit_id)
            rename(habit, edit.name)
            if edit.color is not None:
                recolor(habit, edit.color)
            self._sync(habit.id)
            return self._current(habit)

    def toggle_day(self, habit_id: str, day: DayOfWeek) -> Habit:
        with self._lock:
            habit = self.get_habit(habit_id)
            toggle_day(habit, day)
            self._sync(habit.id)
            return self._current(habit)

    def delete_habit(self, habit_id: str) -> SyncReport:
        with self._lock:
            habit = self.get_habit(habit_id)
            self.habits.remove(habit)
            logger.info(f"Deleted habit {habit.name!r} ({habit_id})")

            report = self._sync()
            deleted = self.gateway.delete_habit(habit_id)
            return report.merge(deleted) if report else deleted

    def reset_all_progress(self) -> Optional[SyncReport]:
        """Clear the week for every habit."""
        with self._lock:
            for habit in self.habits:
                reset_progress(habit)
            return self._sync_all()

    def set_theme(self, theme: Theme) -> Optional[SyncReport]:
        with self._lock:
            self.theme = Theme(theme)
            if not self.theme_loaded:
                return None
            return self.gateway.save_theme(self.theme)

    def toggle_theme(self) -> Theme:
        with self._lock:
            self.set_theme(Theme.DARK if self.theme == Theme.LIGHT else Theme.LIGHT)
            return self.theme

    def visible(self, query: HabitQuery, today: Optional[date] = None) -> list[Habit]:
        """Snapshot of the habits matching `query`, in display order."""
        with self._lock:
            return [habit.model_copy(deep=True) for habit in visible_list(self.habits, query, today)]

    def summary(self) -> dict:
        with self._lock:
            return summarize(self.habits)

    def sync(self) -> Optional[SyncReport]:
        """Run the full save protocol over every habit."""
        with self._lock:
            return self._sync_all()

    def _current(self, habit: Habit) -> Habit:
        """The record now standing in for `habit` (replaced if it was just created remotely)."""
        if self.last_report and habit.id in self.last_report.created:
            return self.get_habit(self.last_report.created[habit.id])
        return habit

    def _sync(self, *habit_ids: str) -> Optional[SyncReport]:
        """Save, pushing the given habits plus any that are still local-only."""
        pending = {habit.id for habit in self.habits if is_local_id(habit.id)}
        return self._push(pending.union(habit_ids))

    def _sync_all(self) -> Optional[SyncReport]:
        return self._push(None)

    def _push(self, only_ids: Optional[set]) -> Optional[SyncReport]:
        if not self.habits_loaded:
            return None
        report = self.gateway.save_habits(self.habits, only_ids=only_ids)
        self.last_report = report
        if not report.ok:
            logger.warning(f"Sync finished with {len(report.failures)} failure(s)")
        return report
