"""Service module exports."""

from . import recurrence, stats, status
from .recurrence import habits_due_on, is_scheduled, matches_schedule, scheduled_days, validate_habit
from .stats import GoalProgress, HabitStats, compute_stats, daily_statuses, evaluate_goal
from .status import DailyStatus, compute_status

__all__ = [
    "DailyStatus",
    "GoalProgress",
    "HabitStats",
    "compute_stats",
    "compute_status",
    "daily_statuses",
    "evaluate_goal",
    "habits_due_on",
    "is_scheduled",
    "matches_schedule",
    "recurrence",
    "scheduled_days",
    "stats",
    "status",
    "validate_habit",
]
