"""
Goal feasibility projection.

Given what has been graded so far and the weight of the work still to come,
work out the average needed on the remaining work to reach a target grade.
Weight that has not been entered yet (the gap up to 100%) is assumed to exist
and to be still ungraded, which keeps the projection conservative.
"""
from __future__ import annotations

import typing as t

from academic_analytics.grades import (
    MAX_TOTAL_WEIGHT,
    Weighted,
    aggregate,
    categorize_importance,
    contribution,
    partition_tasks,
    total_weight,
)
from academic_analytics.log_config import get_logger
from academic_analytics.models import (
    CourseRef,
    GradableTask,
    Goal,
    GoalReport,
    GoalReportDetail,
    PastEventEntry,
    UpcomingTaskEntry,
)

logger = get_logger(__name__)

MAX_GRADE = 100.0


def project(
        target_grade: float,
        past_graded: t.Iterable[Weighted],
        future_ungraded: t.Iterable[Weighted],
) -> GoalReport:
    """Project whether target_grade is still reachable.

    :param target_grade: Goal for the final course grade (0-100).
    :param past_graded: Tasks that already have a grade.
    :param future_ungraded: Tasks that are still to be graded.
    :return: A GoalReport. required_avg_for_remaining is None when no weight
        is left to earn.
    """
    summary = aggregate(past_graded)
    current_grade = summary.average if summary.average is not None else 0.0
    past_weight = summary.weight_so_far

    remaining_known = total_weight(future_ungraded)
    accounted = past_weight + remaining_known
    missing_weight = max(0.0, MAX_TOTAL_WEIGHT - accounted)
    remaining_adjusted = remaining_known + missing_weight

    if remaining_adjusted > 0:
        required = (target_grade * MAX_TOTAL_WEIGHT - current_grade * past_weight) / remaining_adjusted
        achievable = required <= MAX_GRADE
    else:
        required = None
        achievable = current_grade >= target_grade

    report = GoalReport(
        current_grade=summary.average,
        required_avg_for_remaining=required,
        achievable=achievable,
        recommendation="ON_TRACK" if achievable else "CONSIDER_ADJUSTING_GOAL",
    )
    logger.debug(
        "goal_projected",
        target_grade=target_grade,
        past_weight=past_weight,
        remaining_known=remaining_known,
        missing_weight=missing_weight,
        achievable=achievable,
    )
    return report


def build_goal_report(
        goal: Goal,
        course: CourseRef,
        tasks: t.Iterable[GradableTask],
) -> GoalReportDetail:
    """Full goal report for one course.

    Graded tasks become past events, annotated with whether their grade sits
    at or above the target; ungraded tasks become upcoming tasks, annotated
    with an importance bucket from their weight. Tasks should come from a
    single consistent read of the course, otherwise weight can be counted
    twice or dropped.
    """
    past, future = partition_tasks(tasks)
    report = project(goal.target_grade, past, future)

    return GoalReportDetail(
        goal=goal,
        course=course,
        report=report,
        past_events=[
            PastEventEntry(task=task, contribution=contribution(task.grade, goal.target_grade))
            for task in past
        ],
        upcoming_tasks=[
            UpcomingTaskEntry(task=task, importance=categorize_importance(task.weight))
            for task in future
        ],
    )
