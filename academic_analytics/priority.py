"""
Task priority scoring.

An importance score is the sum of four independently capped factors:

- urgency (0-50): deadline proximity, saturating 10 days out
- weight (0-30): share of the course grade the task is worth
- grade urgency (0-10): how low the known grade is
- goal gap (0-10): distance from 100%, scaled by weight

The last two apply only with a course context and a known grade; without
them a flat 10 points stands in so scores stay comparable.
"""
from __future__ import annotations

from datetime import datetime
import typing as t

from academic_analytics.log_config import get_logger
from academic_analytics.models import CourseRef, GradableTask, ScoredTask
from academic_analytics.schedule import as_utc

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400.0

URGENCY_MAX = 50.0
URGENCY_HORIZON_DAYS = 10.0
URGENCY_POINTS_PER_DAY = URGENCY_MAX / URGENCY_HORIZON_DAYS
WEIGHT_MAX = 30.0
GRADE_MAX = 10.0
GOAL_GAP_MAX = 10.0
NO_GRADE_POINTS = 10.0


def days_left(due_at: datetime, now: datetime) -> float:
    """Days until due_at. Naive datetimes count as UTC."""
    return (as_utc(due_at) - as_utc(now)).total_seconds() / SECONDS_PER_DAY


def urgency_factor(days: float) -> float:
    """50 when due now or overdue, 0 once ten or more days remain."""
    days = min(max(days, 0.0), URGENCY_HORIZON_DAYS)
    return max(0.0, URGENCY_MAX - days * URGENCY_POINTS_PER_DAY)


def weight_factor(weight: float) -> float:
    return (weight / 100) * WEIGHT_MAX


def importance_score(
        task: GradableTask,
        now: datetime,
        course: t.Optional[CourseRef] = None,
) -> float:
    """Composite urgency score for a task, rounded to 2 decimal places.

    The grade used is the task's own grade, falling back to the course's
    current grade.

    :param task: The task to score.
    :param now: Reference time (naive means UTC).
    :param course: Owning course, if known.
    """
    score = urgency_factor(days_left(task.due_at, now))
    score += weight_factor(task.weight)

    grade = task.grade
    if grade is None and course is not None:
        grade = course.current_grade

    if course is not None and grade is not None:
        score += max(0.0, GRADE_MAX - grade / 10)
        score += ((100 - grade) / 100) * (task.weight / 100) * GOAL_GAP_MAX
    else:
        score += NO_GRADE_POINTS

    return round(score, 2)


def rank(scored: t.Iterable[ScoredTask]) -> list[ScoredTask]:
    """Sort by importance score, highest first. Ties keep their input order."""
    return sorted(scored, key=lambda s: s.importance_score, reverse=True)


def score_tasks(
        tasks: t.Iterable[GradableTask],
        now: datetime,
        courses: t.Optional[t.Mapping[str, CourseRef]] = None,
) -> list[ScoredTask]:
    """Score every task against its course, keeping input order."""
    courses = courses or {}
    scored = []
    for task in tasks:
        course = courses.get(task.course_ref)
        scored.append(ScoredTask(
            task=task,
            importance_score=importance_score(task, now, course),
            course=course,
        ))
    return scored


def is_pending(task: GradableTask, now: datetime) -> bool:
    """Not completed and not yet past its due time."""
    return not task.is_completed and as_utc(task.due_at) >= as_utc(now)


def smart_todo(
        tasks: t.Iterable[GradableTask],
        now: datetime,
        courses: t.Optional[t.Mapping[str, CourseRef]] = None,
) -> list[ScoredTask]:
    """Ranked to-do list of pending tasks.

    Tasks whose course is missing from ``courses`` are still listed, scored
    without course context.

    :param tasks: Tasks in retrieval order.
    :param now: Reference time.
    :param courses: Course context keyed by course id.
    :return: Pending tasks as ScoredTask, most important first.
    """
    pending = [task for task in tasks if is_pending(task, now)]
    ranked = rank(score_tasks(pending, now, courses))
    logger.debug("todo_ranked", pending=len(pending))
    return ranked
