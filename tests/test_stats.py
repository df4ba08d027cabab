"""Tests for derived habit statistics.

Streaks count consecutive completed days ending today, walking backwards
through the week and wrapping from Monday to Sunday.
"""

from __future__ import annotations

from datetime import date

import pytest

from habit_tracker.habits.models import DAYS_ORDER, DayOfWeek, toggle_day
from habit_tracker.habits.stats import (
    completed_count,
    completion_percentage,
    failure_rate,
    is_fully_completed,
    streak,
    summarize,
)

# 2025-10-13 is a Monday
MONDAY = date(2025, 10, 13)
WEDNESDAY = date(2025, 10, 15)
THURSDAY = date(2025, 10, 16)
SUNDAY = date(2025, 10, 19)


class TestCompletion:
    @pytest.mark.parametrize(
        "count, expected",
        [(0, 0), (1, 14), (2, 29), (3, 43), (4, 57), (5, 71), (6, 86), (7, 100)],
    )
    def test_percentage_rounds_half_up(self, make_habit, count, expected):
        habit = make_habit(days=tuple(DAYS_ORDER[:count]))
        assert completed_count(habit) == count
        assert completion_percentage(habit) == expected

    def test_count_matches_true_flags(self, make_habit):
        habit = make_habit(days=("monday", "friday", "sunday"))
        assert completed_count(habit) == 3

    def test_fully_completed_needs_all_days(self, make_habit):
        habit = make_habit(days=tuple(DAYS_ORDER))
        assert is_fully_completed(habit)

        toggle_day(habit, DayOfWeek.THURSDAY)
        assert not is_fully_completed(habit)

    def test_empty_week_not_completed(self, make_habit):
        assert not is_fully_completed(make_habit())


class TestStreak:
    def test_no_completions_is_zero(self, make_habit):
        assert streak(make_habit(), today=WEDNESDAY) == 0

    def test_counts_back_from_today(self, make_habit):
        habit = make_habit(days=("monday", "tuesday", "wednesday"))
        assert streak(habit, today=WEDNESDAY) == 3

    def test_today_incomplete_is_zero(self, make_habit):
        habit = make_habit(days=("monday", "tuesday"))
        assert streak(habit, today=WEDNESDAY) == 0

    def test_gap_stops_streak(self, make_habit):
        habit = make_habit(days=("monday", "tuesday", "thursday"))
        assert streak(habit, today=THURSDAY) == 1

    def test_wraps_from_monday_to_sunday(self, make_habit):
        habit = make_habit(days=("saturday", "sunday", "monday"))
        assert streak(habit, today=MONDAY) == 3

    def test_full_week_caps_at_seven(self, make_habit):
        habit = make_habit(days=tuple(DAYS_ORDER))
        assert streak(habit, today=SUNDAY) == 7

    def test_depends_on_reference_date(self, make_habit):
        habit = make_habit(days=("saturday", "sunday"))
        assert streak(habit, today=SUNDAY) == 2
        assert streak(habit, today=MONDAY) == 0


class TestFailureRate:
    def test_ratio_of_failures(self, make_habit):
        habit = make_habit(total_days=30, failure_days=6)
        assert failure_rate(habit) == pytest.approx(0.2)

    def test_nothing_tracked_is_zero(self, make_habit):
        assert failure_rate(make_habit()) == 0.0


def test_summary_counts_completed_habits(make_habit):
    habits = [
        make_habit(name="A", days=tuple(DAYS_ORDER)),
        make_habit(name="B", days=("monday",)),
        make_habit(name="C", days=tuple(DAYS_ORDER)),
    ]
    assert summarize(habits) == {"total_habits": 3, "completed_habits": 2}
