# -*- coding: utf-8 -*-
import typing as t
from datetime import date, datetime, timezone

from fastmcp import FastMCP

from academic_analytics.goals import build_goal_report
from academic_analytics.grades import aggregate, check_weight_total
from academic_analytics.log_config import setup_logging
from academic_analytics.models import (
    ClassOccurrence,
    CourseRef,
    GoalReportDetail,
    Goal,
    GradableTask,
    GradeSummary,
    ScoredTask,
    WeeklySession,
)
from academic_analytics.priority import smart_todo
from academic_analytics.schedule import materialize, validate_date_range, validate_sessions

mcp = FastMCP("AcademicAnalytics")


def _materialize_schedule(
        sessions: list[WeeklySession],
        start_date: date,
        end_date: date,
        course_ref: str = "",
) -> list[ClassOccurrence]:
    validate_sessions(sessions)
    validate_date_range(start_date, end_date)
    return materialize(sessions, start_date, end_date, course_ref)


def _project_goal(goal: Goal, course: CourseRef, tasks: list[GradableTask]) -> GoalReportDetail:
    check_weight_total(tasks)
    return build_goal_report(goal, course, tasks)


def _rank_tasks(
        tasks: list[GradableTask],
        courses: t.Optional[list[CourseRef]] = None,
        now: t.Optional[datetime] = None,
) -> list[ScoredTask]:
    now = now or datetime.now(timezone.utc)
    return smart_todo(tasks, now, {course.id: course for course in courses or []})


def _format_due(due_at: datetime) -> str:
    return due_at.strftime("%a %-m/%-d %-I:%M %p")


def format_todo_summary(ranked: list[ScoredTask]) -> str:
    """Plain-text table of ranked tasks."""
    if not ranked:
        return "✅ Nothing pending."

    lines = []
    lines.append("📋 TO-DO BY IMPORTANCE")
    lines.append("=" * 100)
    lines.append(f"{'#':<4} {'Score':<8} {'Course':<10} {'Title':<40} {'Due':<20} {'Weight':<8}")
    lines.append("-" * 100)

    for idx, scored in enumerate(ranked, 1):
        task = scored.task
        title = task.title[:39] if len(task.title) > 39 else task.title
        code = scored.course.code if scored.course and scored.course.code else task.course_ref
        code = code[:9] if len(code) > 9 else code
        lines.append(
            f"{idx:<4} {scored.importance_score:<8.2f} {code:<10} {title:<40} "
            f"{_format_due(task.due_at):<20} {task.weight:.1f}%"
        )

    lines.append("=" * 100)
    lines.append(f"Total: {len(ranked)} task(s)")
    return "\n".join(lines)


@mcp.tool()
def materialize_schedule(
        sessions: list[WeeklySession],
        start_date: date,
        end_date: date,
        course_ref: str = "",
) -> list[ClassOccurrence]:
    """Expands a weekly class schedule into dated class occurrences.

    :param sessions: Weekly sessions (weekday 0 = Sunday, offsets in seconds after midnight UTC).
    :param start_date: First day of the course (inclusive).
    :param end_date: Last day of the course (inclusive).
    :param course_ref: Course identifier stamped on every occurrence.
    :return: Occurrences ordered by day, then schedule order.
    """
    return _materialize_schedule(sessions, start_date, end_date, course_ref)


@mcp.tool()
def aggregate_grades(tasks: list[GradableTask]) -> GradeSummary:
    """Computes the weighted average grade over graded tasks.

    :param tasks: Tasks of one course; ungraded ones are ignored.
    :return: The average (None if nothing is graded) and the weight graded so far.
    """
    return aggregate(tasks)


@mcp.tool()
def project_goal(goal: Goal, course: CourseRef, tasks: list[GradableTask]) -> GoalReportDetail:
    """Reports whether a course's target grade is still achievable.

    :param goal: The grade goal.
    :param course: The course the goal belongs to.
    :param tasks: All tasks of the course, graded and ungraded.
    :return: Goal report with annotated past events and upcoming tasks.
    """
    return _project_goal(goal, course, tasks)


@mcp.tool()
def rank_tasks(
        tasks: list[GradableTask],
        courses: t.Optional[list[CourseRef]] = None,
        now: t.Optional[datetime] = None,
) -> list[ScoredTask]:
    """Ranks pending tasks by importance score, highest first.

    :param tasks: Tasks across courses.
    :param courses: Course context, used for grade-based scoring.
    :param now: Reference time (defaults to the current UTC time).
    :return: Pending tasks annotated with their importance score.
    """
    return _rank_tasks(tasks, courses, now)


@mcp.tool()
def show_todo_summary(
        tasks: list[GradableTask],
        courses: t.Optional[list[CourseRef]] = None,
        now: t.Optional[datetime] = None,
) -> str:
    """Displays pending tasks as a table ordered by importance.

    :param tasks: Tasks across courses.
    :param courses: Course context, used for grade-based scoring.
    :param now: Reference time (defaults to the current UTC time).
    :return: Formatted table string.
    """
    return format_todo_summary(_rank_tasks(tasks, courses, now))


if __name__ == "__main__":
    setup_logging()
    mcp.run()
