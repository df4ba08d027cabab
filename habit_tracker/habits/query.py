"""Filtering and sorting of the habit list for display."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from .models import Habit
from .stats import is_fully_completed, streak


class FilterKind(str, Enum):
    ALL = "all"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"


class SortKind(str, Enum):
    NAME = "name"
    STREAK = "streak"
    CREATED = "created"


class HabitQuery(BaseModel):
    """What the user asked to see."""

    search_term: str = ""
    filter_kind: FilterKind = FilterKind.ALL
    sort_kind: SortKind = SortKind.CREATED


def matches(habit: Habit, query: HabitQuery) -> bool:
    """Check a habit against the search term and the filter kind."""
    if query.search_term.casefold() not in habit.name.casefold():
        return False

    if query.filter_kind == FilterKind.COMPLETED:
        return is_fully_completed(habit)
    if query.filter_kind == FilterKind.INCOMPLETE:
        return not is_fully_completed(habit)
    return True


def visible_list(
    habits: list[Habit], query: HabitQuery, today: Optional[date] = None
) -> list[Habit]:
    """
    Produce the ordered list of habits to display.

    Sorting is stable, so habits with equal keys keep their input order.

    Args:
        habits: Full habit collection
        query: Search term, filter kind and sort kind
        today: Reference date for streak sorting

    Returns:
        New list; the input is not modified
    """
    visible = [habit for habit in habits if matches(habit, query)]

    if query.sort_kind == SortKind.NAME:
        visible.sort(key=lambda habit: habit.name.casefold())
    elif query.sort_kind == SortKind.STREAK:
        visible.sort(key=lambda habit: streak(habit, today), reverse=True)
    else:
        visible.sort(key=lambda habit: habit.created_at, reverse=True)

    return visible
