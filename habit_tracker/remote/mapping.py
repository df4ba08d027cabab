"""Translation between remote service records and in-memory habits."""

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from ..exceptions import InvalidHabitDataError, MalformedResponseError
from ..habits.models import (
    HABIT_COLORS,
    Category,
    DaySet,
    Frequency,
    Habit,
    generate_local_id,
    is_local_id,
)

logger = logging.getLogger(__name__)


def habit_from_api(payload: Any) -> Habit:
    """
    Build a habit from a remote record.

    The remote service uses a snake_case start_date and numeric ids. Missing
    fields get the same defaults a freshly created record would have.

    Args:
        payload: One decoded JSON object from the remote service

    Returns:
        Habit with a string id

    Raises:
        MalformedResponseError: If the payload is not an object or has invalid values
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected habit object, got {type(payload).__name__}")

    raw_id = payload.get("id")
    habit_id = str(raw_id) if raw_id is not None else generate_local_id()

    start_date = payload.get("start_date") or payload.get("startDate")

    try:
        return Habit(
            id=habit_id,
            name=payload.get("name") or "Untitled",
            color=payload.get("color") or HABIT_COLORS[0],
            frequency=payload.get("frequency") or Frequency.DAILY,
            category=payload.get("category") or Category.PERSONAL,
            start_date=start_date,
            completed_days=payload.get("completedDays") or DaySet(),
            created_at=payload.get("createdAt") or datetime.now(timezone.utc),
            total_days=payload.get("totalDays") or 0,
            failure_days=payload.get("failureDays") or 0,
        )
    except ValidationError as e:
        logger.warning(f"Invalid habit record from remote (id={raw_id}): {e}")
        raise MalformedResponseError(f"Invalid habit record {raw_id}: {e}") from e


def merge_api_echo(habit: Habit, payload: Any) -> Habit:
    """
    Apply a remote echo of `habit` on top of the local record.

    The service may answer with only part of the record. Fields it leaves out
    or sends as null keep their local values, so progress and createdAt survive
    a create.

    Raises:
        MalformedResponseError: If the payload is not an object or has invalid values
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected habit object, got {type(payload).__name__}")

    merged = habit_to_api(habit)
    merged["id"] = habit.id
    echoed = {key: value for key, value in payload.items() if value is not None}
    if "startDate" in echoed:
        merged.pop("start_date")
    merged.update(echoed)
    return habit_from_api(merged)


def habit_to_api(habit: Habit) -> dict:
    """
    Build the remote payload for a habit.

    Local-only ids are left out so the remote service assigns one.
    """
    payload = {
        "name": habit.name,
        "color": habit.color,
        "frequency": habit.frequency.value,
        "category": habit.category.value,
        "start_date": habit.start_date.isoformat() if habit.start_date else None,
        "completedDays": habit.completed_days.model_dump(),
        "createdAt": habit.created_at.isoformat(),
        "totalDays": habit.total_days,
        "failureDays": habit.failure_days,
    }
    if not is_local_id(habit.id):
        payload["id"] = remote_id(habit.id)
    return payload


def remote_id(habit_id: str) -> int:
    """
    Numeric id used in remote URLs.

    Raises:
        InvalidHabitDataError: If the id is local-only or not numeric
    """
    if is_local_id(habit_id):
        raise InvalidHabitDataError(f"Habit {habit_id} is not known to the remote service")
    try:
        return int(habit_id)
    except ValueError:
        raise InvalidHabitDataError(f"Habit id {habit_id!r} is not a remote id")
