"""Habit statistics: streaks, completion rate and cumulative goal progress.

Every function here is a pure fold over a habit definition and a snapshot of
its logs. The reference day is always passed in by the caller; nothing in this
module reads the clock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from ..logging_config import get_logger
from ..models.habit import CompletionType, DayStatus, Habit, HabitLog, TargetComparison
from .recurrence import as_day, matches_schedule, validate_habit
from .status import DailyStatus, compute_status, meets_target

logger = get_logger(__name__)

Number = Union[int, float]


@dataclass(frozen=True, slots=True)
class HabitStats:
    """Aggregate statistics for one habit up to a reference day."""

    current_streak: int = 0
    best_streak: int = 0
    completion_rate: float = 0.0
    days_completed: int = 0
    goal_progress: Number = 0


@dataclass(frozen=True, slots=True)
class GoalProgress:
    """Cumulative progress measured against the habit's total target."""

    total: Number
    target: Optional[float]
    ratio: float
    reached: bool


def index_logs_by_day(logs: Iterable[HabitLog], *, habit_id: Optional[int] = None) -> dict[date, HabitLog]:
    """Key logs by calendar day; when a day repeats, the later log wins."""

    by_day: dict[date, HabitLog] = {}
    for log in logs:
        if habit_id is not None and log.habit_id != habit_id:
            continue
        by_day[as_day(log.occurred_on)] = log
    return by_day


def _round_rate(done: int, expected: int) -> float:
    if expected <= 0:
        return 0.0
    rate = Decimal(done) * 100 / Decimal(expected)
    return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _goal_progress(habit: Habit, by_day: dict[date, HabitLog]) -> Number:
    try:
        kind = CompletionType(habit.completion_type)
    except ValueError:
        return 0
    if kind in (CompletionType.COUNT, CompletionType.DURATION):
        return sum((log.value or 0) for log in by_day.values())
    if kind is CompletionType.BINARY:
        return sum(1 for log in by_day.values() if compute_status(habit, log).status is DayStatus.DONE)
    if kind is CompletionType.CHECKLIST:
        return sum(len(set(log.completed_checklist_item_ids or ())) for log in by_day.values())
    return 0


def compute_stats(habit: Habit, logs: Iterable[HabitLog], today: date) -> HabitStats:
    """Fold a habit's log history into streaks, completion rate and goal progress.

    Args:
        habit: Habit definition; must not end before it starts
        logs: All logs for the habit, in insertion order
        today: Reference day, inclusive; a ``datetime`` is truncated to its date

    Returns:
        A fresh ``HabitStats`` value

    Raises:
        InvalidHabitDefinition: If ``start_date`` is after ``end_date``
    """
    validate_habit(habit)
    today = as_day(today)
    by_day = index_logs_by_day(logs, habit_id=habit.id)

    def is_done(day: date) -> bool:
        return compute_status(habit, by_day.get(day)).status is DayStatus.DONE

    best_streak = 0
    run = 0
    days_completed = 0
    expected = 0

    day = habit.start_date
    while day <= today:
        if matches_schedule(habit, day):
            expected += 1
            if is_done(day):
                run += 1
                days_completed += 1
            else:
                best_streak = max(best_streak, run)
                run = 0
        day += timedelta(days=1)
    best_streak = max(best_streak, run)

    # Walk back from today; the first missed scheduled day ends the streak.
    current_streak = 0
    day = today
    while day >= habit.start_date:
        if matches_schedule(habit, day):
            if not is_done(day):
                break
            current_streak += 1
        day -= timedelta(days=1)

    stats = HabitStats(
        current_streak=current_streak,
        best_streak=best_streak,
        completion_rate=_round_rate(days_completed, expected),
        days_completed=days_completed,
        goal_progress=_goal_progress(habit, by_day),
    )
    logger.debug(
        "Computed habit stats",
        extra={"habit_id": habit.id, "today": today, "scheduled_days": expected},
    )
    return stats


def daily_statuses(
    habit: Habit, logs: Iterable[HabitLog], start: date, end: date
) -> list[tuple[date, DailyStatus]]:
    """Return ``(day, status)`` for every scheduled day in ``[start, end]``."""

    validate_habit(habit)
    by_day = index_logs_by_day(logs, habit_id=habit.id)
    rows: list[tuple[date, DailyStatus]] = []
    day, end = as_day(start), as_day(end)
    while day <= end:
        if matches_schedule(habit, day):
            rows.append((day, compute_status(habit, by_day.get(day))))
        day += timedelta(days=1)
    return rows


def evaluate_goal(habit: Habit, goal_progress: Number) -> GoalProgress:
    """Compare cumulative progress with the habit's optional total target."""

    target = habit.total_target
    if target is None:
        return GoalProgress(total=goal_progress, target=None, ratio=0.0, reached=False)

    comparison = TargetComparison.parse(habit.total_target_comparison) or TargetComparison.GREATER_THAN_OR_EQUAL
    reached = meets_target(float(goal_progress), float(target), comparison)
    if target > 0:
        ratio = max(0.0, min(1.0, goal_progress / target))
    else:
        ratio = 1.0 if reached else 0.0
    return GoalProgress(total=goal_progress, target=float(target), ratio=ratio, reached=reached)


__all__ = [
    "GoalProgress",
    "HabitStats",
    "compute_stats",
    "daily_statuses",
    "evaluate_goal",
    "index_logs_by_day",
]
