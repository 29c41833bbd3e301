"""SQLModel table exports and habit variant types."""

from .habit import (
    CompletionType,
    Daily,
    DayStatus,
    FrequencyType,
    Habit,
    HabitChecklistItem,
    HabitLog,
    Monthly,
    Schedule,
    SpecificDays,
    TargetComparison,
    Weekly,
)

__all__ = [
    "CompletionType",
    "Daily",
    "DayStatus",
    "FrequencyType",
    "Habit",
    "HabitChecklistItem",
    "HabitLog",
    "Monthly",
    "Schedule",
    "SpecificDays",
    "TargetComparison",
    "Weekly",
]
