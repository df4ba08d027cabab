"""Simple SQLite key/value store for offline habit data."""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from ..exceptions import LocalStorageError
from ..habits.models import Habit, Theme

logger = logging.getLogger(__name__)

HABITS_SLOT = "habits"
THEME_SLOT = "theme"


class LocalStore:
    """Named slots holding the cached habit collection and theme."""

    def __init__(self, db_path: str = "data/habits.db"):
        """Initialize database."""
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Create the slots table if it doesn't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS slots (
                    name TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        logger.info(f"Local store initialized at {self.db_path}")

    def get(self, name: str) -> Optional[str]:
        """Read a raw slot value, None if the slot was never written."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT value FROM slots WHERE name = ?", (name,)
                ).fetchone()
        except sqlite3.Error as e:
            raise LocalStorageError(f"Failed to read slot {name}: {e}") from e

        return row[0] if row else None

    def set(self, name: str, value: str):
        """Write a raw slot value, replacing any previous one."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO slots (name, value) VALUES (?, ?)",
                    (name, value),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise LocalStorageError(f"Failed to write slot {name}: {e}") from e

    def read_habits(self) -> list[Habit]:
        """
        Load the cached habit collection.

        Returns:
            Cached habits, empty if nothing was stored

        Raises:
            LocalStorageError: If the slot can't be read or parsed
        """
        raw = self.get(HABITS_SLOT)
        if not raw:
            return []

        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise LocalStorageError(f"Habits slot holds {type(data).__name__}, not a list")
            return [Habit.model_validate(item) for item in data]
        except (json.JSONDecodeError, ValidationError) as e:
            raise LocalStorageError(f"Failed to parse cached habits: {e}") from e

    def write_habits(self, habits: list[Habit]):
        """Replace the cached habit collection."""
        self.set(HABITS_SLOT, json.dumps([habit.to_storage() for habit in habits]))
        logger.debug(f"Cached {len(habits)} habits locally")

    def read_theme(self) -> Optional[Theme]:
        """Cached theme, None if absent or not a known theme."""
        raw = self.get(THEME_SLOT)
        if raw is None:
            return None
        try:
            return Theme(raw)
        except ValueError:
            logger.warning(f"Ignoring unknown cached theme: {raw!r}")
            return None

    def write_theme(self, theme: Theme):
        self.set(THEME_SLOT, Theme(theme).value)
