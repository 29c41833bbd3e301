"""Exceptions raised by the habit engine and its persistence layer."""

from __future__ import annotations


class HabitCoreError(Exception):
    """Base class for all habitcore errors."""


class InvalidHabitDefinition(HabitCoreError, ValueError):
    """Raised when a habit definition can never be satisfied (e.g. start after end)."""


class HabitNotFound(HabitCoreError, LookupError):
    """Raised when a repository lookup does not find the requested habit."""

    def __init__(self, habit_id: int):
        super().__init__(f"Habit {habit_id} does not exist")
        self.habit_id = habit_id


__all__ = ["HabitCoreError", "HabitNotFound", "InvalidHabitDefinition"]
