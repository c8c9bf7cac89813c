"""Tests for importance scoring and ranking of pending tasks."""
from datetime import datetime, timedelta, timezone

import pytest

from academic_analytics.models import CourseRef, GradableTask, ScoredTask
from academic_analytics.priority import (
    importance_score,
    rank,
    smart_todo,
    urgency_factor,
)

NOW = datetime(2024, 9, 2, 12, 0, tzinfo=timezone.utc)
COURSE = CourseRef(id="c1", code="IPC144", title="Intro to Programming")


def task(weight: float = 0, days: float = 0, grade=None, task_id: str = "", **kwargs) -> GradableTask:
    return GradableTask(
        course_ref=kwargs.pop("course_ref", "c1"),
        weight=weight,
        due_at=NOW + timedelta(days=days),
        grade=grade,
        id=task_id,
        **kwargs,
    )


def test_due_now_without_grade_data() -> None:
    """Full urgency plus the flat 10 points when no grade is known."""
    assert importance_score(task(weight=0, days=0), NOW) == 60.0


def test_ten_days_out_has_no_urgency() -> None:
    # 0 urgency + 15 weight + 10 flat
    assert importance_score(task(weight=50, days=10), NOW) == 25.0


def test_course_context_without_any_grade_uses_flat_points() -> None:
    # 40 urgency + 6 weight + 10 flat
    assert importance_score(task(weight=20, days=2), NOW, COURSE) == 56.0


def test_graded_task_with_course_context() -> None:
    # 30 urgency + 12 weight + (10 - 7) grade + 0.3*0.4*10 goal gap
    assert importance_score(task(weight=40, days=4, grade=70), NOW, COURSE) == pytest.approx(46.2)


def test_graded_task_without_course_uses_flat_points() -> None:
    # 30 urgency + 12 weight + 10 flat
    assert importance_score(task(weight=40, days=4, grade=70), NOW) == 52.0


def test_course_current_grade_stands_in_for_missing_task_grade() -> None:
    course = CourseRef(id="c1", current_grade=50)

    # 30 urgency + 12 weight + (10 - 5) grade + 0.5*0.4*10 goal gap
    assert importance_score(task(weight=40, days=4), NOW, course) == pytest.approx(49.0)


def test_perfect_grade_earns_no_grade_points() -> None:
    # 0 urgency + 30 weight + 0 grade + 0 goal gap
    assert importance_score(task(weight=100, days=15, grade=100), NOW, COURSE) == 30.0


def test_overdue_tasks_saturate_at_full_urgency() -> None:
    assert urgency_factor(-3) == 50.0
    assert importance_score(task(weight=0, days=-1), NOW) == 60.0


def test_score_is_rounded_to_two_decimals() -> None:
    # 8 hours left: 50 - (1/3)*5 = 48.333...
    assert importance_score(task(weight=0, days=1 / 3), NOW) == 58.33


def test_score_never_increases_as_deadline_moves_away() -> None:
    scores = [
        importance_score(task(weight=35, days=half_days / 2, grade=64), NOW, COURSE)
        for half_days in range(0, 21)
    ]

    assert all(a >= b for a, b in zip(scores, scores[1:]))
    assert scores[0] > scores[-1]


def test_score_is_constant_beyond_ten_days() -> None:
    scores = {importance_score(task(weight=35, days=d), NOW) for d in (10, 11, 30, 365)}
    assert len(scores) == 1


def test_rank_sorts_descending_and_keeps_ties_in_input_order() -> None:
    scored = [
        ScoredTask(task(task_id="a"), 10.0),
        ScoredTask(task(task_id="b"), 20.0),
        ScoredTask(task(task_id="c"), 10.0),
        ScoredTask(task(task_id="d"), 20.0),
        ScoredTask(task(task_id="e"), 15.5),
    ]

    assert [s.task.id for s in rank(scored)] == ["b", "d", "e", "a", "c"]


def test_smart_todo_filters_and_ranks_pending_tasks() -> None:
    tasks = [
        task(weight=10, days=9, task_id="later"),
        task(weight=30, days=1, task_id="soon"),
        task(weight=50, days=1, task_id="done", is_completed=True),
        task(weight=50, days=-1, task_id="missed"),
        task(weight=10, days=9, task_id="orphan", course_ref="gone"),
    ]

    ranked = smart_todo(tasks, NOW, {"c1": COURSE})

    assert [s.task.id for s in ranked] == ["soon", "later", "orphan"]
    assert ranked[0].course is COURSE
    assert ranked[-1].course is None
    # same score, so retrieval order decides between "later" and "orphan"
    assert ranked[1].importance_score == ranked[2].importance_score


def test_smart_todo_keeps_task_due_exactly_now() -> None:
    assert [s.task.id for s in smart_todo([task(task_id="now", days=0)], NOW)] == ["now"]


def test_smart_todo_with_nothing_pending() -> None:
    assert smart_todo([task(days=-2)], NOW) == []


def test_naive_datetimes_are_treated_as_utc() -> None:
    naive_due = GradableTask(course_ref="c1", weight=10, due_at=datetime(2024, 9, 11, 12, 0), id="n")

    assert importance_score(naive_due, NOW) == pytest.approx(18.0)
    assert importance_score(task(10, 9), NOW.replace(tzinfo=None)) == pytest.approx(18.0)
    assert [s.task.id for s in smart_todo([naive_due], NOW)] == ["n"]
