"""SQLModel implementation of Habit repository."""

from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...errors import HabitNotFound
from ...logging_config import get_logger
from ...models.habit import Habit, HabitLog
from ...services.recurrence import validate_habit
from ...services.stats import HabitStats, compute_stats

logger = get_logger(__name__)


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_by_id(self, habit_id: int) -> Optional[Habit]:
        """Retrieve a habit by ID, checklist items included."""
        with self.session_factory() as session:
            obj = session.exec(
                select(Habit)
                .where(Habit.id == habit_id)
                .options(selectinload(Habit.checklist_items))  # type: ignore[arg-type]
            ).first()
            if obj:
                session.expunge_all()
            return obj

    def require(self, habit_id: int) -> Habit:
        """Like ``get_by_id`` but raise ``HabitNotFound`` on a miss."""
        habit = self.get_by_id(habit_id)
        if habit is None:
            raise HabitNotFound(habit_id)
        return habit

    def list_all(self) -> list[Habit]:
        """List all habits ordered by name."""
        with self.session_factory() as session:
            statement = (
                select(Habit)
                .options(selectinload(Habit.checklist_items))  # type: ignore[arg-type]
                .order_by(Habit.name)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def create(self, habit: Habit) -> Habit:
        """Create a new habit after checking its date range."""
        validate_habit(habit)
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            # Load checklist items before detaching.
            _ = list(habit.checklist_items)
            session.expunge_all()
            logger.info("Created habit", extra={"habit_id": habit.id, "habit_name": habit.name})
            return habit

    # Habit log operations
    def get_logs(self, habit_id: int) -> list[HabitLog]:
        """Get every log for a habit, ordered by day then insertion."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .order_by(HabitLog.occurred_on, HabitLog.id)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def add_log(self, log: HabitLog) -> HabitLog:
        """Append a log, even if the day already has one."""
        with self.session_factory() as session:
            session.add(log)
            session.commit()
            session.refresh(log)
            session.expunge(log)
            logger.info(
                "Added habit log",
                extra={"habit_id": log.habit_id, "occurred_on": log.occurred_on},
            )
            return log

    def upsert_log(self, log: HabitLog) -> HabitLog:
        """Replace the day's logs with ``log``."""
        with self.session_factory() as session:
            existing = list(
                session.exec(
                    select(HabitLog)
                    .where(HabitLog.habit_id == log.habit_id)
                    .where(HabitLog.occurred_on == log.occurred_on)
                    .order_by(HabitLog.id)  # type: ignore[arg-type]
                ).all()
            )

            if existing:
                # Keep the newest row, drop older duplicates.
                target = existing[-1]
                for stale in existing[:-1]:
                    session.delete(stale)
                target.value = log.value
                target.completed_checklist_item_ids = list(log.completed_checklist_item_ids or [])
                target.notes = log.notes
                session.add(target)
            else:
                target = log
                session.add(target)

            session.commit()
            session.refresh(target)
            session.expunge(target)
            logger.info(
                "Upserted habit log",
                extra={"habit_id": target.habit_id, "occurred_on": target.occurred_on, "replaced": len(existing)},
            )
            return target

    def delete_log(self, habit_id: int, occurred_on: date) -> None:
        """Delete every log for a habit on a day."""
        with self.session_factory() as session:
            rows = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_id == habit_id)
                .where(HabitLog.occurred_on == occurred_on)
            ).all()
            for row in rows:
                session.delete(row)
            session.commit()

    def get_stats(self, habit_id: int, today: Optional[date] = None) -> HabitStats:
        """Compute statistics for a habit from its stored logs."""
        habit = self.require(habit_id)
        return compute_stats(habit, self.get_logs(habit_id), today or date.today())
