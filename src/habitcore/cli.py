"""Command line entry points for habitcore."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import date, datetime

import click

from .config import BaseConfig
from .errors import HabitCoreError
from .domain.repositories.habit import HabitRepository
from .infra.database import bootstrap_database, create_db_engine, init_database
from .infra.repositories.habit import SQLModelHabitRepository
from .logging_config import setup_logging
from .services.recurrence import habits_due_on
from .services.stats import evaluate_goal


def _parse_day(ctx, param, value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise click.BadParameter("expected YYYY-MM-DD") from exc


@click.group()
@click.pass_context
def main(ctx: click.Context) -> None:
    """Habit schedule and streak statistics."""

    config = BaseConfig()
    setup_logging(config)
    if ctx.invoked_subcommand == "init-db":
        ctx.obj = config
        return
    _, session_factory = bootstrap_database(config)
    ctx.obj = SQLModelHabitRepository(session_factory)


@main.command("init-db")
@click.pass_obj
def init_db(config: BaseConfig) -> None:
    """Create the database schema."""

    engine = create_db_engine(config)
    try:
        init_database(engine)
    finally:
        engine.dispose()
    click.echo(f"Database ready at {config.DATABASE_URL}")


@main.command("stats")
@click.argument("habit_id", type=int)
@click.option("--today", callback=_parse_day, default=None, help="Reference day (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON")
@click.pass_obj
def stats_command(repo: HabitRepository, habit_id: int, today: date | None, as_json: bool) -> None:
    """Print streaks, completion rate and goal progress for HABIT_ID."""

    try:
        habit = repo.require(habit_id)
        stats = repo.get_stats(habit_id, today=today)
    except HabitCoreError as exc:
        raise click.ClickException(str(exc)) from exc

    goal = evaluate_goal(habit, stats.goal_progress)
    if as_json:
        payload = {"habit_id": habit_id, **asdict(stats), "goal": asdict(goal)}
        click.echo(json.dumps(payload, default=str))
        return

    click.echo(f"{habit.name}")
    click.echo(f"  current streak:  {stats.current_streak}")
    click.echo(f"  best streak:     {stats.best_streak}")
    click.echo(f"  completion rate: {stats.completion_rate:.2f}%")
    click.echo(f"  days completed:  {stats.days_completed}")
    if goal.target is None:
        click.echo(f"  goal progress:   {stats.goal_progress}")
    else:
        marker = " (reached)" if goal.reached else ""
        click.echo(f"  goal progress:   {stats.goal_progress} / {goal.target:g}{marker}")


@main.command("due")
@click.option("--day", callback=_parse_day, default=None, help="Day to check (YYYY-MM-DD)")
@click.pass_obj
def due_command(repo: HabitRepository, day: date | None) -> None:
    """List habits scheduled on a day (default: today)."""

    day = day or date.today()
    try:
        due = habits_due_on(repo.list_all(), day)
    except HabitCoreError as exc:
        raise click.ClickException(str(exc)) from exc

    if not due:
        click.echo(f"Nothing scheduled on {day.isoformat()}.")
        return
    for habit in due:
        click.echo(f"{habit.id}\t{habit.name}")


if __name__ == "__main__":  # pragma: no cover
    main()
