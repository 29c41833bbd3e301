"""Pytest configuration and shared fixtures for habitcore tests.

Provides database fixtures for repository tests and in-memory builders for
engine tests that never touch a database.
"""

from __future__ import annotations

import logging
import tempfile
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable, Optional

import pytest
from sqlmodel import Session, SQLModel, create_engine

# Import all models to ensure they're registered with SQLModel metadata
from habitcore.models import (
    CompletionType,
    Daily,
    Habit,
    HabitChecklistItem,
    HabitLog,
    Schedule,
    TargetComparison,
)

# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch, tmp_path):
    """Point config at a per-test data dir and detach log handlers afterwards."""
    monkeypatch.setenv("HABITCORE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("HABITCORE_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITCORE_LOG_LEVEL", raising=False)
    yield
    habit_logger = logging.getLogger("habitcore")
    for handler in list(habit_logger.handlers):
        habit_logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a database session for a single test."""
    session = Session(db_engine, expire_on_commit=False)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching what repositories expect: Callable[[], Session]."""

    def factory():
        return Session(db_engine, expire_on_commit=False)

    return factory


# =============================================================================
# Builders
# =============================================================================


@pytest.fixture
def build_habit():
    """Factory for transient (never persisted) habits used by engine tests."""

    def _build(
        *,
        schedule: Schedule = Daily(),
        completion_type: CompletionType = CompletionType.BINARY,
        start_date: date = date(2024, 1, 1),
        end_date: Optional[date] = None,
        daily_target: Optional[float] = None,
        daily_target_comparison: Optional[TargetComparison] = None,
        checklist: Iterable[str] = (),
        habit_id: int = 1,
        **extra,
    ) -> Habit:
        return Habit.with_schedule(
            schedule,
            id=habit_id,
            name=extra.pop("name", "Test Habit"),
            completion_type=completion_type,
            start_date=start_date,
            end_date=end_date,
            daily_target=daily_target,
            daily_target_comparison=daily_target_comparison,
            checklist_items=[HabitChecklistItem(text=text) for text in checklist],
            **extra,
        )

    return _build


@pytest.fixture
def build_log():
    """Factory for transient habit logs."""

    def _build(
        occurred_on: date,
        *,
        value: Optional[float] = None,
        items: Iterable[str] = (),
        habit_id: int = 1,
    ) -> HabitLog:
        return HabitLog(
            habit_id=habit_id,
            occurred_on=occurred_on,
            value=value,
            completed_checklist_item_ids=list(items),
        )

    return _build


@pytest.fixture
def daily_logs(build_log):
    """Build one log per day for each inclusive ``(first, last)`` range given."""

    def _build(*ranges: tuple[date, date], **kwargs) -> list[HabitLog]:
        logs: list[HabitLog] = []
        for first, last in ranges:
            day = first
            while day <= last:
                logs.append(build_log(day, **kwargs))
                day += timedelta(days=1)
        return logs

    return _build


@pytest.fixture
def habit_factory(db_session):
    """Factory for persisted habits.

    Returns:
        Callable: Function that creates and persists Habit instances
    """

    def _create_habit(
        name: str = "Exercise",
        *,
        schedule: Schedule = Daily(),
        completion_type: CompletionType = CompletionType.BINARY,
        start_date: date = date(2024, 1, 1),
        checklist: Iterable[str] = (),
        **fields,
    ) -> Habit:
        habit = Habit.with_schedule(
            schedule,
            name=name,
            completion_type=completion_type,
            start_date=start_date,
            checklist_items=[HabitChecklistItem(text=text) for text in checklist],
            **fields,
        )
        db_session.add(habit)
        db_session.commit()
        db_session.refresh(habit)
        return habit

    return _create_habit
