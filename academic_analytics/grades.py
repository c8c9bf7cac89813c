"""
Weighted grade aggregation.

Pure reductions over graded tasks; none of these functions depend on the
order of their input except partition_tasks(), which preserves it.
"""
from __future__ import annotations

import typing as t

from academic_analytics.errors import WeightLimitExceededError
from academic_analytics.models import Contribution, GradableTask, GradeSummary, Importance

MAX_TOTAL_WEIGHT = 100.0
WEIGHT_TOLERANCE = 1e-9

HIGH_IMPORTANCE_WEIGHT = 20
MEDIUM_IMPORTANCE_WEIGHT = 10


class Weighted(t.Protocol):
    weight: float
    grade: t.Optional[float]


def aggregate(tasks: t.Iterable[Weighted]) -> GradeSummary:
    """Weight-weighted average grade over the tasks that have a grade.

    Ungraded tasks are ignored. When nothing is graded (or the graded tasks
    carry no weight) the average is None.

    :param tasks: Objects exposing ``grade`` and ``weight``.
    :return: GradeSummary with the average and the weight of graded tasks.
    """
    weighted_sum = 0.0
    weight_so_far = 0.0
    for task in tasks:
        if task.grade is None:
            continue
        weighted_sum += task.grade * task.weight
        weight_so_far += task.weight

    average = weighted_sum / weight_so_far if weight_so_far > 0 else None
    return GradeSummary(average=average, weight_so_far=weight_so_far)


def partition_tasks(tasks: t.Iterable[GradableTask]) -> tuple[list[GradableTask], list[GradableTask]]:
    """Split tasks into (graded, ungraded), keeping input order in each."""
    graded: list[GradableTask] = []
    ungraded: list[GradableTask] = []
    for task in tasks:
        (ungraded if task.grade is None else graded).append(task)
    return graded, ungraded


def total_weight(tasks: t.Iterable[Weighted]) -> float:
    return sum(task.weight for task in tasks)


def check_weight_total(tasks: t.Iterable[Weighted]) -> float:
    """Return the total weight, refusing sums above 100%.

    :raises WeightLimitExceededError: If the weights add up to more than 100.
    """
    total = total_weight(tasks)
    if total > MAX_TOTAL_WEIGHT + WEIGHT_TOLERANCE:
        raise WeightLimitExceededError(total)
    return total


def categorize_importance(weight: float) -> Importance:
    """Bucket a task by weight: high (>= 20), medium (>= 10), else low."""
    if weight >= HIGH_IMPORTANCE_WEIGHT:
        return "high"
    if weight >= MEDIUM_IMPORTANCE_WEIGHT:
        return "medium"
    return "low"


def contribution(grade: float, target_grade: float) -> Contribution:
    """Whether a graded task pulls the course toward the target or away."""
    return "positive" if grade >= target_grade else "negative"
