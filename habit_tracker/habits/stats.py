"""Derived statistics for habits."""

import math
from datetime import date
from typing import Iterable, Optional

from .models import DAYS_ORDER, Habit

DAYS_IN_WEEK = 7


def completed_count(habit: Habit) -> int:
    """Number of days marked complete this week (0-7)."""
    return sum(1 for done in habit.completed_days.values() if done)


def completion_percentage(habit: Habit) -> int:
    """
    Percentage of the week completed, rounded half up.

    Example:
        3 of 7 days = 42.86% -> 43
    """
    return math.floor(completed_count(habit) / DAYS_IN_WEEK * 100 + 0.5)


def is_fully_completed(habit: Habit) -> bool:
    return completed_count(habit) == DAYS_IN_WEEK


def day_index(day: date) -> int:
    """
    Position of a date's weekday in DAYS_ORDER.

    Python weekday is already Monday=0, Sunday=6.
    """
    return day.weekday()


def streak(habit: Habit, today: Optional[date] = None) -> int:
    """
    Count consecutive completed days ending today.

    Starts at today's weekday and walks backwards, wrapping from Monday to
    Sunday, until a day is not complete or the whole week has been counted.

    Args:
        habit: Habit to inspect
        today: Reference date (defaults to the current date)

    Returns:
        Streak length (0-7)
    """
    if today is None:
        today = date.today()

    start = day_index(today)
    count = 0
    for offset in range(DAYS_IN_WEEK):
        day = DAYS_ORDER[(start - offset) % DAYS_IN_WEEK]
        if not habit.completed_days.is_done(day):
            break
        count += 1
    return count


def failure_rate(habit: Habit) -> float:
    """Share of tracked days that were failures, 0.0 when nothing is tracked."""
    if not habit.total_days:
        return 0.0
    return habit.failure_days / habit.total_days


def summarize(habits: Iterable[Habit]) -> dict:
    """Totals shown in the header: habit count and fully completed habits."""
    habits = list(habits)
    return {
        "total_habits": len(habits),
        "completed_habits": sum(1 for habit in habits if is_fully_completed(habit)),
    }
