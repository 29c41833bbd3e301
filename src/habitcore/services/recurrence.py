"""Recurrence rules: decide which calendar days a habit is expected on."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, TypeVar

from ..errors import InvalidHabitDefinition
from ..logging_config import get_logger
from ..models.habit import Daily, Habit, Monthly, SpecificDays, Weekly

logger = get_logger(__name__)

H = TypeVar("H", bound=Habit)


def validate_habit(habit: Habit) -> None:
    """Reject definitions no day could ever satisfy."""

    if habit.end_date is not None and habit.start_date > habit.end_date:
        logger.warning(
            "Rejected habit with start_date after end_date",
            extra={"habit_id": habit.id, "start_date": habit.start_date, "end_date": habit.end_date},
        )
        raise InvalidHabitDefinition(
            f"Habit {habit.id!r} starts on {habit.start_date} after it ends on {habit.end_date}"
        )


def weekday_index(day: date) -> int:
    """Return the day of week with Sunday as 0 and Saturday as 6."""

    return (day.weekday() + 1) % 7


def _week_start(day: date) -> date:
    return day - timedelta(days=weekday_index(day))


def as_day(value: date) -> date:
    """Drop the time of day from a ``datetime``; plain dates pass through."""

    return value.date() if isinstance(value, datetime) else value


def matches_schedule(habit: Habit, day: date) -> bool:
    """Evaluate the recurrence rule for a habit already known to be valid.

    Callers walking many days validate once with ``validate_habit`` and then
    call this per day.
    """

    day = as_day(day)

    if day < habit.start_date:
        return False
    if habit.end_date is not None and day > habit.end_date:
        return False

    schedule = habit.schedule
    if isinstance(schedule, Daily):
        return True
    if isinstance(schedule, SpecificDays):
        return weekday_index(day) in schedule.days_of_week
    if isinstance(schedule, Weekly):
        # times_per_week is not enforced here; every in-range week qualifies.
        return _week_start(day) >= _week_start(habit.start_date)
    if isinstance(schedule, Monthly):
        # Exact day-of-month match; a start on the 31st skips shorter months.
        return day.day == habit.start_date.day
    raise InvalidHabitDefinition(f"Unsupported schedule: {schedule!r}")


def is_scheduled(habit: Habit, day: date) -> bool:
    """Return True when ``day`` is a scheduled day for ``habit``."""

    validate_habit(habit)
    return matches_schedule(habit, day)


def scheduled_days(habit: Habit, start: date, end: date) -> Iterator[date]:
    """Yield every scheduled day in ``[start, end]`` in ascending order."""

    validate_habit(habit)
    cursor = max(as_day(start), habit.start_date)
    end = as_day(end)
    if habit.end_date is not None:
        end = min(end, habit.end_date)
    while cursor <= end:
        if matches_schedule(habit, cursor):
            yield cursor
        cursor += timedelta(days=1)


def habits_due_on(habits: Iterable[H], day: date) -> list[H]:
    """Return the habits scheduled on ``day``, keeping their input order."""

    return [habit for habit in habits if is_scheduled(habit, day)]


__all__ = [
    "as_day",
    "habits_due_on",
    "is_scheduled",
    "matches_schedule",
    "scheduled_days",
    "validate_habit",
    "weekday_index",
]
