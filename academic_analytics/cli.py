# -*- coding: utf-8 -*-
"""Command line front end for the analytics engine.

Each command reads a JSON file shaped like the matching HTTP request body
(see services/shared/models.py) and prints a rich table, or raw JSON with
--json.
"""
import json
import typing as t
from pathlib import Path

import click
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from academic_analytics.errors import AnalyticsError
from academic_analytics.goals import build_goal_report
from academic_analytics.grades import check_weight_total
from academic_analytics.log_config import setup_logging
from academic_analytics.models import Goal
from academic_analytics.priority import smart_todo
from academic_analytics.schedule import materialize, validate_date_range, validate_sessions
from services.shared.convert import (
    course_to_domain,
    goal_report_from_domain,
    occurrence_from_domain,
    resolve_now,
    scored_from_domain,
    session_to_domain,
    task_to_domain,
)
from services.shared.models import (
    GoalReportRequest,
    MaterializeScheduleRequest,
    MaterializeScheduleResponse,
    SmartTodoRequest,
    SmartTodoResponse,
)

console = Console()
error_console = Console(stderr=True)

M = t.TypeVar("M", bound=BaseModel)


def load_request(path: str, model: type[M]) -> M:
    """Read and validate a JSON request file, exiting with status 1 on bad input."""
    try:
        return model.model_validate(json.loads(Path(path).read_text(encoding="utf-8")))
    except json.JSONDecodeError as e:
        error_console.print(f"[red]Error:[/red] {path} is not valid JSON: {e}")
        raise SystemExit(1)
    except ValidationError as e:
        error_console.print(f"[red]Error:[/red] {path} failed validation:\n{e}")
        raise SystemExit(1)


def print_json(model: BaseModel) -> None:
    click.echo(model.model_dump_json(by_alias=True, indent=2))


def format_datetime_human(value) -> str:
    """Format a datetime as 'Mon 01/15 14:30'."""
    return value.strftime("%a %m/%d %H:%M")


def fail(error: AnalyticsError) -> t.NoReturn:
    error_console.print(f"[red]Error:[/red] {error}")
    raise SystemExit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Academic analytics: class schedules, goal reports and smart to-do lists."""
    setup_logging(log_level="DEBUG" if verbose else "WARNING")


@main.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")
def schedule(request_file: str, as_json: bool) -> None:
    """Expand a weekly schedule into dated classes.

    REQUEST_FILE: JSON with sessions, startDate, endDate and optional courseId.
    """
    request = load_request(request_file, MaterializeScheduleRequest)
    sessions = [session_to_domain(s) for s in request.sessions]
    try:
        validate_sessions(sessions)
        validate_date_range(request.start_date, request.end_date)
    except AnalyticsError as e:
        fail(e)

    occurrences = materialize(sessions, request.start_date, request.end_date, request.course_id)

    if as_json:
        print_json(MaterializeScheduleResponse(
            occurrences=[occurrence_from_domain(o) for o in occurrences]
        ))
        return

    table = Table(title="📅 Classes", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=4)
    table.add_column("Type", style="white")
    table.add_column("Start", style="yellow")
    table.add_column("End", style="yellow")
    table.add_column("Location", style="dim")
    for idx, occurrence in enumerate(occurrences, 1):
        table.add_row(
            str(idx),
            occurrence.class_type,
            format_datetime_human(occurrence.start_time),
            format_datetime_human(occurrence.end_time),
            occurrence.location or "—",
        )
    console.print(table)
    console.print(f"Total: {len(occurrences)} class(es)")


@main.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")
def report(request_file: str, as_json: bool) -> None:
    """Goal feasibility report for one course.

    REQUEST_FILE: JSON with goalId, course, targetGrade and tasks.
    """
    request = load_request(request_file, GoalReportRequest)
    tasks = [task_to_domain(task) for task in request.tasks]
    try:
        check_weight_total(tasks)
    except AnalyticsError as e:
        fail(e)

    detail = build_goal_report(
        Goal(course_ref=request.course.id, target_grade=request.target_grade, id=request.goal_id),
        course_to_domain(request.course),
        tasks,
    )
    response = goal_report_from_domain(detail)

    if as_json:
        print_json(response)
        return

    current = "—" if response.current_grade is None else f"{response.current_grade:.2f}"
    required = (
        "—" if response.required_avg_for_remaining is None
        else f"{response.required_avg_for_remaining:.2f}"
    )
    ok = response.achievable

    summary = Text()
    summary.append("Target grade: ", style="white")
    summary.append(f"{response.target_grade:.2f}\n", style="bold")
    summary.append("Current grade: ", style="white")
    summary.append(f"{current}\n", style="bold")
    summary.append("Required on remaining work: ", style="white")
    summary.append(f"{required}\n", style="bold")
    summary.append("Recommendation: ", style="white")
    summary.append(response.recommendation, style="bold green" if ok else "bold red")

    title = f"🎯 {response.course.code or response.course.id} {response.course.title}".strip()
    console.print(Panel(summary, title=title, border_style="green" if ok else "red"))

    if response.past_events:
        past = Table(title="Graded", header_style="bold magenta")
        past.add_column("Title")
        past.add_column("Weight", justify="right")
        past.add_column("Grade", justify="right")
        past.add_column("Contribution")
        for event in response.past_events:
            style = "green" if event.contribution == "positive" else "red"
            past.add_row(event.title, f"{event.weight:.1f}%", f"{event.grade:.1f}",
                         Text(event.contribution, style=style))
        console.print(past)

    if response.upcoming_tasks:
        upcoming = Table(title="Upcoming", header_style="bold magenta")
        upcoming.add_column("Title")
        upcoming.add_column("Due", style="yellow")
        upcoming.add_column("Weight", justify="right")
        upcoming.add_column("Importance")
        for task in response.upcoming_tasks:
            upcoming.add_row(task.title, format_datetime_human(task.due_at),
                             f"{task.weight:.1f}%", task.importance)
        console.print(upcoming)


@main.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")
def todo(request_file: str, as_json: bool) -> None:
    """Pending tasks ranked by importance.

    REQUEST_FILE: JSON with tasks, courses and optional now.
    """
    request = load_request(request_file, SmartTodoRequest)
    now = resolve_now(request.now)
    courses = {course.id: course_to_domain(course) for course in request.courses}
    ranked = smart_todo([task_to_domain(task) for task in request.tasks], now, courses)

    if as_json:
        print_json(SmartTodoResponse(tasks=[scored_from_domain(s) for s in ranked]))
        return

    if not ranked:
        console.print("✅ Nothing pending.")
        return

    table = Table(title="📋 To-do", show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", width=4)
    table.add_column("Score", justify="right", style="bold")
    table.add_column("Course", style="white")
    table.add_column("Title", style="white")
    table.add_column("Due", style="yellow")
    table.add_column("Weight", justify="right")
    for idx, scored in enumerate(ranked, 1):
        task = scored.task
        code = scored.course.code if scored.course and scored.course.code else task.course_ref
        table.add_row(
            str(idx),
            f"{scored.importance_score:.2f}",
            code,
            task.title,
            format_datetime_human(task.due_at),
            f"{task.weight:.1f}%",
        )
    console.print(table)


if __name__ == "__main__":
    main()
