"""Data models for habits, their weekly completion record and input payloads."""

import secrets
import time
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

LOCAL_ID_PREFIX = "local-"

HABIT_COLORS = ("#3B82F6", "#F59E0B", "#10B981")


class DayOfWeek(str, Enum):
    """Weekday keys of a Day-Set, Monday first."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


DAYS_ORDER: list[DayOfWeek] = list(DayOfWeek)


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"


class Category(str, Enum):
    HEALTH = "Health"
    FITNESS = "Fitness"
    STUDY = "Study"
    WORK = "Work"
    PERSONAL = "Personal"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class DaySet(BaseModel):
    """Completion flags for each day of the week. All seven days are always present."""

    monday: bool = False
    tuesday: bool = False
    wednesday: bool = False
    thursday: bool = False
    friday: bool = False
    saturday: bool = False
    sunday: bool = False

    def is_done(self, day: DayOfWeek) -> bool:
        return getattr(self, DayOfWeek(day).value)

    def values(self) -> list[bool]:
        """Flags in Monday to Sunday order."""
        return [self.is_done(day) for day in DAYS_ORDER]


class Habit(BaseModel):
    """A trackable recurring activity with its weekly completion record."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    color: str = HABIT_COLORS[0]
    frequency: Frequency = Frequency.DAILY
    category: Category = Category.HEALTH
    start_date: Optional[date] = Field(None, alias="startDate")
    completed_days: DaySet = Field(default_factory=DaySet, alias="completedDays")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )

    # Advisory counters, not kept consistent with completed_days
    total_days: int = Field(0, ge=0, alias="totalDays")
    failure_days: int = Field(0, ge=0, alias="failureDays")

    @field_validator("completed_days", mode="before")
    @classmethod
    def default_day_set(cls, v):
        """Missing or null Day-Sets load as empty."""
        return DaySet() if v is None else v

    @field_validator("start_date", mode="before")
    @classmethod
    def empty_start_date(cls, v):
        return None if v == "" else v

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps are treated as UTC so all records compare."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def to_storage(self) -> dict:
        """Serialize in the local storage (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True)


def _clean_name(v):
    return v.strip() if isinstance(v, str) else v


class HabitFormData(BaseModel):
    """Payload for creating a habit."""

    name: str = Field(..., min_length=1, max_length=50, description="Habit name")
    color: str = Field(HABIT_COLORS[0], description="Display colour")
    frequency: Frequency = Frequency.DAILY
    category: Category = Category.HEALTH
    start_date: date = Field(default_factory=date.today, alias="startDate")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _clean_name(v)


class EditHabitData(BaseModel):
    """Payload for editing a habit's name and colour."""

    name: str = Field(..., min_length=1, max_length=50, description="New habit name")
    color: Optional[str] = Field(None, description="New display colour")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return _clean_name(v)


def generate_local_id() -> str:
    """Generate an id for a habit the remote service has not acknowledged yet."""
    millis = int(time.time() * 1000)
    return f"{LOCAL_ID_PREFIX}{millis}-{secrets.token_hex(3)}"


def is_local_id(habit_id: str) -> bool:
    """True if the id was generated locally and never confirmed by the remote service."""
    return habit_id.startswith(LOCAL_ID_PREFIX)


def new_habit(form: HabitFormData, now: Optional[datetime] = None) -> Habit:
    """Build a fresh habit from a validated creation payload."""
    return Habit(
        id=generate_local_id(),
        name=form.name,
        color=form.color,
        frequency=form.frequency,
        category=form.category,
        start_date=form.start_date,
        completed_days=DaySet(),
        created_at=now or datetime.now(timezone.utc),
        total_days=0,
        failure_days=0,
    )


def toggle_day(habit: Habit, day: DayOfWeek) -> Habit:
    """Flip one day's completion flag in place."""
    key = DayOfWeek(day).value
    setattr(habit.completed_days, key, not getattr(habit.completed_days, key))
    return habit


def rename(habit: Habit, name: str) -> Habit:
    habit.name = name
    return habit


def recolor(habit: Habit, color: str) -> Habit:
    habit.color = color
    return habit


def reset_progress(habit: Habit) -> Habit:
    """Clear every completion flag for the week."""
    habit.completed_days = DaySet()
    return habit
