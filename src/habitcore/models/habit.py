"""Habit tracking data structures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, Union

from sqlalchemy import JSON, Column
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..errors import InvalidHabitDefinition


class CompletionType(str, Enum):
    """How a day's log is judged against the habit."""

    BINARY = "binary"
    COUNT = "count"
    DURATION = "duration"
    CHECKLIST = "checklist"


class TargetComparison(str, Enum):
    """Comparison applied between a logged value and a target."""

    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    EQUAL = "equal"
    ANY_VALUE = "any_value"

    @classmethod
    def parse(cls, value: "TargetComparison | str | None") -> Optional["TargetComparison"]:
        """Resolve canonical names, legacy aliases and symbols to a member."""

        if value is None or isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        try:
            return _COMPARISON_ALIASES[key]
        except KeyError:
            pass
        try:
            return cls(key)
        except ValueError as exc:
            raise InvalidHabitDefinition(f"Unknown target comparison: {value!r}") from exc


_COMPARISON_ALIASES = {
    "at_least": TargetComparison.GREATER_THAN_OR_EQUAL,
    "at-least": TargetComparison.GREATER_THAN_OR_EQUAL,
    "exactly": TargetComparison.EQUAL,
    "less-than": TargetComparison.LESS_THAN,
    "any-value": TargetComparison.ANY_VALUE,
    ">": TargetComparison.GREATER_THAN,
    ">=": TargetComparison.GREATER_THAN_OR_EQUAL,
    "<": TargetComparison.LESS_THAN,
    "<=": TargetComparison.LESS_THAN_OR_EQUAL,
    "==": TargetComparison.EQUAL,
}


class FrequencyType(str, Enum):
    """Stored discriminant for the schedule variants."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    SPECIFIC_DAYS = "specific_days"


class DayStatus(str, Enum):
    """Tri-state verdict for one habit on one day."""

    DONE = "done"
    PARTIAL = "partial"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Daily:
    """Scheduled every day the habit is active."""


@dataclass(frozen=True, slots=True)
class Weekly:
    """A number of times per week. The count is informational only."""

    times_per_week: int = 1


@dataclass(frozen=True, slots=True)
class Monthly:
    """A number of times per month, anchored on the start date's day-of-month."""

    times_per_month: int = 1


@dataclass(frozen=True, slots=True)
class SpecificDays:
    """Fixed weekdays, 0 = Sunday through 6 = Saturday."""

    days_of_week: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "days_of_week", frozenset(self.days_of_week))


Schedule = Union[Daily, Weekly, Monthly, SpecificDays]


class Habit(SQLModel, table=True):
    """A habit definition with its recurrence and completion rules."""

    __tablename__: ClassVar[str] = "habit"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False, max_length=80, index=True)
    completion_type: CompletionType = Field(default=CompletionType.BINARY, nullable=False)
    daily_target: Optional[float] = Field(default=None)
    daily_target_comparison: Optional[TargetComparison] = Field(default=None)
    total_target: Optional[float] = Field(default=None)
    total_target_comparison: Optional[TargetComparison] = Field(default=None)
    frequency_type: FrequencyType = Field(default=FrequencyType.DAILY, nullable=False)
    frequency_times: int = Field(default=1, nullable=False)
    frequency_days: list[int] = Field(default_factory=list, sa_column=Column(JSON))
    start_date: date = Field(nullable=False, index=True)
    end_date: Optional[date] = Field(default=None)

    checklist_items: list["HabitChecklistItem"] = Relationship(
        back_populates="habit",
        sa_relationship=relationship(
            "HabitChecklistItem",
            back_populates="habit",
            cascade="all, delete-orphan",
        ),
    )

    @property
    def schedule(self) -> Schedule:
        """Return the recurrence variant described by the frequency columns."""

        kind = FrequencyType(self.frequency_type)
        if kind is FrequencyType.DAILY:
            return Daily()
        if kind is FrequencyType.WEEKLY:
            return Weekly(times_per_week=self.frequency_times)
        if kind is FrequencyType.MONTHLY:
            return Monthly(times_per_month=self.frequency_times)
        return SpecificDays(days_of_week=frozenset(self.frequency_days or ()))

    @property
    def checklist_item_count(self) -> int:
        return len(self.checklist_items or ())

    @classmethod
    def with_schedule(cls, schedule: Schedule, **fields) -> "Habit":
        """Build a habit whose frequency columns encode ``schedule``."""

        if isinstance(schedule, Daily):
            fields.update(frequency_type=FrequencyType.DAILY)
        elif isinstance(schedule, Weekly):
            fields.update(frequency_type=FrequencyType.WEEKLY, frequency_times=schedule.times_per_week)
        elif isinstance(schedule, Monthly):
            fields.update(frequency_type=FrequencyType.MONTHLY, frequency_times=schedule.times_per_month)
        elif isinstance(schedule, SpecificDays):
            fields.update(
                frequency_type=FrequencyType.SPECIFIC_DAYS,
                frequency_days=sorted(schedule.days_of_week),
            )
        else:
            raise InvalidHabitDefinition(f"Unsupported schedule: {schedule!r}")
        return cls(**fields)


class HabitChecklistItem(SQLModel, table=True):
    """One named sub-task of a checklist habit."""

    __tablename__: ClassVar[str] = "habit_checklist_item"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: Optional[int] = Field(default=None, foreign_key="habit.id", index=True)
    text: str = Field(nullable=False, max_length=120)

    habit: Optional["Habit"] = Relationship(
        back_populates="checklist_items",
        sa_relationship=relationship("Habit", back_populates="checklist_items"),
    )


class HabitLog(SQLModel, table=True):
    """What was recorded for a habit on one calendar day.

    Several rows may exist for the same day; readers treat the most
    recently inserted one as authoritative.
    """

    __tablename__: ClassVar[str] = "habit_log"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_id: int = Field(foreign_key="habit.id", nullable=False, index=True)
    occurred_on: date = Field(nullable=False, index=True)
    value: Optional[float] = Field(default=None)
    completed_checklist_item_ids: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    notes: str = Field(default="", max_length=255)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)
