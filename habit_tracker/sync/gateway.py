"""Reconciliation of habits and theme between the remote service and local storage."""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..exceptions import HabitTrackerException, LocalStorageError, RemoteServiceError
from ..habits.models import Habit, Theme, is_local_id
from ..habits.seed import seed_habits
from ..remote.client import HabitAPIClient
from ..storage.database import LocalStore

logger = logging.getLogger(__name__)


class LoadSource(str, Enum):
    """Which tier the working set came from."""

    REMOTE = "remote"
    LOCAL = "local"
    SEED = "seed"


@dataclass
class SyncFailure:
    """One swallowed sync error."""
    habit_id: Optional[str]
    operation: str  # "create", "update", "delete", "local_write", "theme"
    error: str


@dataclass
class SyncReport:
    """Outcome of one reconciliation pass."""
    local_written: bool = False
    created: dict[str, str] = field(default_factory=dict)  # local id -> remote id
    updated: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failures: list[SyncFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def record_failure(self, habit_id: Optional[str], operation: str, error: Exception):
        self.failures.append(SyncFailure(habit_id, operation, str(error)))
        logger.warning(
            f"Sync {operation} failed for habit {habit_id}: {error}",
            extra={"habit_id": habit_id, "operation": operation, "error_type": type(error).__name__},
        )

    def merge(self, other: "SyncReport") -> "SyncReport":
        """Fold another pass's results into this report."""
        self.local_written = self.local_written or other.local_written
        self.created.update(other.created)
        self.updated.extend(other.updated)
        self.deleted.extend(other.deleted)
        self.failures.extend(other.failures)
        return self

    def to_dict(self) -> dict:
        data = asdict(self)
        data["ok"] = self.ok
        return data


class PersistenceGateway:
    """Keeps the habit collection and theme in step with both storage tiers."""

    def __init__(
        self,
        client: HabitAPIClient,
        store: LocalStore,
        system_theme: Theme = Theme.LIGHT,
    ):
        """
        Initialize the gateway.

        Args:
            client: Remote habit service client
            store: Local durable store
            system_theme: Theme used when no stored preference is available
        """
        self.client = client
        self.store = store
        self.system_theme = Theme(system_theme)

    def load_habits(self) -> tuple[list[Habit], LoadSource]:
        """
        Load the working set of habits.

        Tries the remote service first, then the local cache, then seed data.
        An empty result from a tier counts as unavailable.

        Returns:
            Tuple of (habits, source)
        """
        try:
            habits = self.client.fetch_habits()
            if habits:
                logger.info(f"Loaded {len(habits)} habits from remote service")
                return habits, LoadSource.REMOTE
            logger.info("Remote service has no habits, trying local storage")
        except RemoteServiceError as e:
            logger.warning(f"Remote habits unavailable, trying local storage: {e}")

        try:
            habits = self.store.read_habits()
            if habits:
                logger.info(f"Loaded {len(habits)} habits from local storage")
                return habits, LoadSource.LOCAL
            logger.info("Local storage has no habits, using seed data")
        except LocalStorageError as e:
            logger.error(f"Local habits unreadable, using seed data: {e}")

        return seed_habits(), LoadSource.SEED

    def save_habits(
        self, habits: list[Habit], only_ids: Optional[Iterable[str]] = None
    ) -> SyncReport:
        """
        Persist the collection locally, then push records to the remote service.

        Local-only records are created remotely and replaced in `habits` (and
        the local cache) by the local record carrying the remote id and any
        fields the service echoed. Remote-known records are updated one by
        one. Failures are recorded in the report and never stop the remaining
        records.

        Args:
            habits: The working collection; modified in place on successful creates
            only_ids: Restrict remote pushes to these ids (the local write is always full)

        Returns:
            SyncReport describing what happened
        """
        report = SyncReport()
        self._write_local(habits, report)

        targets = None if only_ids is None else set(only_ids)

        for index, habit in enumerate(list(habits)):
            if targets is not None and habit.id not in targets:
                continue

            if is_local_id(habit.id):
                try:
                    created = self.client.create_habit(habit)
                except HabitTrackerException as e:
                    report.record_failure(habit.id, "create", e)
                    continue

                habits[index] = created
                report.created[habit.id] = created.id
                logger.info(f"Created habit {habit.name!r} remotely as {created.id}")
                self._write_local(habits, report)
            else:
                try:
                    self.client.update_habit(habit)
                except HabitTrackerException as e:
                    report.record_failure(habit.id, "update", e)
                    continue
                report.updated.append(habit.id)

        return report

    def delete_habit(self, habit_id: str) -> SyncReport:
        """
        Remove a habit from the remote service.

        Local-only habits were never sent, so nothing is requested for them.
        """
        report = SyncReport()
        if is_local_id(habit_id):
            report.deleted.append(habit_id)
            return report

        try:
            self.client.delete_habit(habit_id)
            report.deleted.append(habit_id)
        except HabitTrackerException as e:
            report.record_failure(habit_id, "delete", e)
        return report

    def load_theme(self) -> Theme:
        """
        Load the theme preference.

        Tries the remote service, then the local mirror, then the system theme.
        """
        try:
            return self.client.get_theme()
        except RemoteServiceError as e:
            logger.warning(f"Remote theme unavailable: {e}")

        try:
            theme = self.store.read_theme()
            if theme is not None:
                return theme
        except LocalStorageError as e:
            logger.error(f"Local theme unreadable: {e}")

        return self.system_theme

    def save_theme(self, theme: Theme) -> SyncReport:
        """Mirror the theme locally, then store it remotely."""
        report = SyncReport()
        try:
            self.store.write_theme(theme)
            report.local_written = True
        except LocalStorageError as e:
            report.record_failure(None, "local_write", e)

        try:
            self.client.put_theme(theme)
        except RemoteServiceError as e:
            report.record_failure(None, "theme", e)
        return report

    def _write_local(self, habits: list[Habit], report: SyncReport):
        try:
            self.store.write_habits(habits)
            report.local_written = True
        except LocalStorageError as e:
            report.record_failure(None, "local_write", e)
