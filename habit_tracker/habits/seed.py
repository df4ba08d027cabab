"""Example habits used when no other source has any."""

from .models import Habit

# Seed ids carry the local prefix so the first sync creates them remotely.
SEED_HABITS = [
    {
        "id": "local-seed-1",
        "name": "Morning Run",
        "color": "#3B82F6",
        "frequency": "daily",
        "category": "Fitness",
        "startDate": "2025-10-01",
        "createdAt": "2025-10-01T07:00:00.000Z",
        "completedDays": {"monday": True, "wednesday": True, "friday": True},
        "totalDays": 30,
        "failureDays": 5,
    },
    {
        "id": "local-seed-2",
        "name": "Read 20 mins",
        "color": "#F59E0B",
        "frequency": "daily",
        "category": "Study",
        "startDate": "2025-09-20",
        "createdAt": "2025-09-20T19:30:00.000Z",
        "completedDays": {"tuesday": True, "thursday": True, "saturday": True},
        "totalDays": 25,
        "failureDays": 7,
    },
    {
        "id": "local-seed-3",
        "name": "Meal Prep",
        "color": "#10B981",
        "frequency": "weekly",
        "category": "Health",
        "startDate": "2025-10-05",
        "createdAt": "2025-10-05T12:00:00.000Z",
        "completedDays": {"sunday": True},
        "totalDays": 10,
        "failureDays": 2,
    },
]


def seed_habits() -> list[Habit]:
    """Fresh copies of the example habits."""
    return [Habit.model_validate(data) for data in SEED_HABITS]
