"""Habit repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.habit import Habit, HabitLog
from ...services.stats import HabitStats


class HabitRepository(Protocol):
    """Source and sink for habits and their daily logs."""

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID, checklist items included."""
        ...

    def require(self, habit_id: int) -> Habit:
        """Like ``get_by_id`` but raise ``HabitNotFound`` on a miss."""
        ...

    def list_all(self) -> list[Habit]:
        """List all habits ordered by name."""
        ...

    def create(self, habit: Habit) -> Habit:
        """Create a new habit."""
        ...

    # Habit log operations
    def get_logs(self, habit_id: int) -> list[HabitLog]:
        """Get every log for a habit, ordered by day then insertion."""
        ...

    def add_log(self, log: HabitLog) -> HabitLog:
        """Append a log, even if the day already has one."""
        ...

    def upsert_log(self, log: HabitLog) -> HabitLog:
        """Replace the day's logs with ``log``."""
        ...

    def delete_log(self, habit_id: int, occurred_on: date) -> None:
        """Delete every log for a habit on a day."""
        ...

    def get_stats(self, habit_id: int, today: Optional[date] = None) -> HabitStats:
        """Compute statistics for a habit from its stored logs."""
        ...
