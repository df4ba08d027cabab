"""Intent API models."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ..habits.models import Category, DaySet, Frequency, Habit, Theme, is_local_id
from ..habits.stats import (
    completed_count,
    completion_percentage,
    failure_rate,
    is_fully_completed,
    streak,
)


class HabitView(BaseModel):
    """A habit with its derived statistics, as shown in the habit list."""

    id: str
    name: str
    color: str
    frequency: Frequency
    category: Category
    start_date: Optional[date] = None
    completed_days: DaySet
    created_at: datetime
    total_days: int = 0
    failure_days: int = 0

    # Derived
    completed_count: int
    completion_percentage: int
    is_completed: bool
    streak: int
    failure_rate: float
    synced: bool

    @classmethod
    def from_habit(cls, habit: Habit, today: Optional[date] = None) -> "HabitView":
        return cls(
            id=habit.id,
            name=habit.name,
            color=habit.color,
            frequency=habit.frequency,
            category=habit.category,
            start_date=habit.start_date,
            completed_days=habit.completed_days,
            created_at=habit.created_at,
            total_days=habit.total_days,
            failure_days=habit.failure_days,
            completed_count=completed_count(habit),
            completion_percentage=completion_percentage(habit),
            is_completed=is_fully_completed(habit),
            streak=streak(habit, today),
            failure_rate=failure_rate(habit),
            synced=not is_local_id(habit.id),
        )


class SummaryResponse(BaseModel):
    """Response for /api/summary endpoint."""

    total_habits: int
    completed_habits: int
    theme: Theme


class ThemeRequest(BaseModel):
    """Body for PUT /api/theme."""

    theme: Theme


class ThemeResponse(BaseModel):
    """Response for the theme endpoints."""

    theme: Theme
