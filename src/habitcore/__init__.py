"""Habit recurrence, daily status and streak statistics engine."""

from __future__ import annotations

from .errors import HabitCoreError, HabitNotFound, InvalidHabitDefinition
from .models import (
    CompletionType,
    Daily,
    DayStatus,
    Habit,
    HabitChecklistItem,
    HabitLog,
    Monthly,
    SpecificDays,
    TargetComparison,
    Weekly,
)
from .services import (
    DailyStatus,
    GoalProgress,
    HabitStats,
    compute_stats,
    compute_status,
    daily_statuses,
    evaluate_goal,
    habits_due_on,
    is_scheduled,
    scheduled_days,
)

__all__ = [
    "CompletionType",
    "Daily",
    "DailyStatus",
    "DayStatus",
    "GoalProgress",
    "Habit",
    "HabitChecklistItem",
    "HabitCoreError",
    "HabitLog",
    "HabitNotFound",
    "HabitStats",
    "InvalidHabitDefinition",
    "Monthly",
    "SpecificDays",
    "TargetComparison",
    "Weekly",
    "compute_stats",
    "compute_status",
    "daily_statuses",
    "evaluate_goal",
    "habits_due_on",
    "is_scheduled",
    "scheduled_days",
]
