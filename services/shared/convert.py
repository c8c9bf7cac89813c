"""
Conversion between the Pydantic wire models and the engine dataclasses.

The engine only ever sees dataclasses; services and tools convert at their
boundary with these helpers.
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
import typing as t

from academic_analytics import models as domain
from academic_analytics.schedule import as_utc
from services.shared.models import (
    ClassOccurrence,
    CourseInfo,
    CourseSummary,
    GoalReportResponse,
    PastEvent,
    ScoredTask,
    Task,
    UpcomingTask,
    WeeklySession,
)


def resolve_now(now: t.Optional[datetime]) -> datetime:
    """Request time, defaulting to the current UTC time."""
    return as_utc(now) if now is not None else datetime.now(timezone.utc)


def session_to_domain(session: WeeklySession) -> domain.WeeklySession:
    return domain.WeeklySession(
        class_type=session.class_type,
        weekday=session.weekday,
        start_offset_seconds=session.start_offset_seconds,
        end_offset_seconds=session.end_offset_seconds,
        location=session.location,
    )


def task_to_domain(task: Task) -> domain.GradableTask:
    return domain.GradableTask(
        id=task.id,
        title=task.title,
        course_ref=task.course_ref,
        weight=task.weight,
        grade=task.grade,
        is_completed=task.is_completed,
        due_at=task.due_at,
    )


def course_to_domain(course: t.Union[CourseInfo, CourseSummary]) -> domain.CourseRef:
    return domain.CourseRef(
        id=course.id,
        code=course.code,
        title=course.title,
        current_grade=getattr(course, "current_grade", None),
    )


def occurrence_from_domain(occurrence: domain.ClassOccurrence) -> ClassOccurrence:
    return ClassOccurrence(**asdict(occurrence))


def task_fields(task: domain.GradableTask) -> dict[str, t.Any]:
    return asdict(task)


def scored_from_domain(scored: domain.ScoredTask) -> ScoredTask:
    course = CourseInfo(**asdict(scored.course)) if scored.course is not None else None
    return ScoredTask(
        **task_fields(scored.task),
        importance_score=scored.importance_score,
        course=course,
    )


def goal_report_from_domain(detail: domain.GoalReportDetail) -> GoalReportResponse:
    """Serialize a GoalReportDetail into the API report shape."""
    return GoalReportResponse(
        goal_id=detail.goal.id,
        course=CourseSummary(
            id=detail.course.id,
            code=detail.course.code,
            title=detail.course.title,
        ),
        target_grade=detail.goal.target_grade,
        current_grade=detail.report.current_grade,
        past_events=[
            PastEvent(**task_fields(entry.task), contribution=entry.contribution)
            for entry in detail.past_events
        ],
        upcoming_tasks=[
            UpcomingTask(**task_fields(entry.task), importance=entry.importance)
            for entry in detail.upcoming_tasks
        ],
        achievable=detail.report.achievable,
        required_avg_for_remaining=detail.report.required_avg_for_remaining,
        recommendation=detail.report.recommendation,
    )
