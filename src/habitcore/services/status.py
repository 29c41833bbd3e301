"""Daily status calculation for a single habit log."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..errors import InvalidHabitDefinition
from ..models.habit import CompletionType, DayStatus, Habit, HabitLog, TargetComparison


@dataclass(frozen=True, slots=True)
class DailyStatus:
    """Completion verdict for one habit on one day."""

    status: DayStatus
    progress: float
    is_complete: bool


NOT_STARTED = DailyStatus(status=DayStatus.NONE, progress=0.0, is_complete=False)
COMPLETED = DailyStatus(status=DayStatus.DONE, progress=1.0, is_complete=True)


def effective_target(target: Optional[float]) -> float:
    """Return a usable divisor: missing, zero or negative targets count as 1."""

    if target is None or target <= 0:
        return 1.0
    return float(target)


def meets_target(value: float, target: float, comparison: TargetComparison) -> bool:
    """Apply ``comparison`` between a logged value and its target."""

    if comparison is TargetComparison.GREATER_THAN_OR_EQUAL:
        return value >= target
    if comparison is TargetComparison.GREATER_THAN:
        return value > target
    if comparison is TargetComparison.LESS_THAN:
        return value < target
    if comparison is TargetComparison.LESS_THAN_OR_EQUAL:
        return value <= target
    if comparison is TargetComparison.EQUAL:
        return value == target
    if comparison is TargetComparison.ANY_VALUE:
        return value > 0
    raise ValueError(f"Unhandled comparison: {comparison!r}")


def _ratio(value: float, target: float) -> float:
    return max(0.0, min(1.0, value / target))


def _target_status(habit: Habit, log: HabitLog) -> DailyStatus:
    value = float(log.value or 0)
    target = effective_target(habit.daily_target)
    try:
        comparison = TargetComparison.parse(habit.daily_target_comparison) or TargetComparison.GREATER_THAN_OR_EQUAL
    except InvalidHabitDefinition:
        # An unrecognised stored comparison is never met.
        comparison = None

    if comparison is not None and meets_target(value, target, comparison):
        return COMPLETED
    if value > 0:
        # Below target, or over an upper limit.
        return DailyStatus(status=DayStatus.PARTIAL, progress=_ratio(value, target), is_complete=False)
    return NOT_STARTED


def _checklist_status(habit: Habit, log: HabitLog) -> DailyStatus:
    total = habit.checklist_item_count
    if total <= 0:
        return NOT_STARTED

    done = len(set(log.completed_checklist_item_ids or ()))
    if done >= total:
        return COMPLETED
    if done > 0:
        return DailyStatus(status=DayStatus.PARTIAL, progress=done / total, is_complete=False)
    return NOT_STARTED


def compute_status(habit: Habit, log: Optional[HabitLog]) -> DailyStatus:
    """Judge one day's log (or its absence) against the habit's completion rule.

    Never raises for odd inputs: zero targets, empty checklists, missing
    values and unrecognised stored enum strings all resolve to a ``none`` or
    ``partial`` verdict.
    """

    if log is None:
        return NOT_STARTED

    try:
        kind = CompletionType(habit.completion_type)
    except ValueError:
        return NOT_STARTED
    if kind is CompletionType.BINARY:
        return COMPLETED
    if kind in (CompletionType.COUNT, CompletionType.DURATION):
        return _target_status(habit, log)
    if kind is CompletionType.CHECKLIST:
        return _checklist_status(habit, log)
    return NOT_STARTED


__all__ = [
    "COMPLETED",
    "DailyStatus",
    "NOT_STARTED",
    "compute_status",
    "effective_target",
    "meets_target",
]
