"""Tests for the AcademicAnalytics MCP tool implementations."""
from datetime import date, datetime, timedelta, timezone

import pytest

from academic_analytics.errors import ScheduleConfigurationError, WeightLimitExceededError
from academic_analytics.models import CourseRef, GradableTask, Goal, ScoredTask, WeeklySession
from academic_analytics.server import (
    _materialize_schedule,
    _project_goal,
    _rank_tasks,
    format_todo_summary,
)

NOW = datetime(2024, 9, 2, 12, 0, tzinfo=timezone.utc)


def task(task_id: str, weight: float, days: float, grade=None, title: str = "") -> GradableTask:
    return GradableTask(course_ref="c1", weight=weight, due_at=NOW + timedelta(days=days),
                        grade=grade, id=task_id, title=title or task_id)


def test_materialize_schedule_validates_first() -> None:
    bad = WeeklySession("lecture", 1, 3600, 0)

    with pytest.raises(ScheduleConfigurationError):
        _materialize_schedule([bad], date(2024, 9, 1), date(2024, 9, 30))


def test_materialize_schedule() -> None:
    lecture = WeeklySession("lecture", 1, 9 * 3600, 10 * 3600)

    occurrences = _materialize_schedule([lecture], date(2024, 9, 1), date(2024, 9, 30), "c1")

    assert len(occurrences) == 5


def test_project_goal_refuses_weights_over_100() -> None:
    with pytest.raises(WeightLimitExceededError):
        _project_goal(Goal("c1", 80), CourseRef("c1"), [task("a", 70, -5, 60), task("b", 40, 5)])


def test_project_goal() -> None:
    detail = _project_goal(Goal("c1", 80), CourseRef("c1"), [task("a", 10, -5, 70), task("b", 90, 5)])

    assert detail.report.recommendation == "ON_TRACK"


def test_rank_tasks_uses_course_context() -> None:
    course = CourseRef("c1", code="IPC144", current_grade=50)

    ranked = _rank_tasks([task("a", 10, 9), task("b", 40, 4)], [course], NOW)

    assert [s.task.id for s in ranked] == ["b", "a"]
    assert ranked[0].course is course


def test_format_todo_summary() -> None:
    course = CourseRef("c1", code="IPC144")
    ranked = [ScoredTask(task("b", 40, 4, title="Assignment 2"), 49.0, course)]

    text = format_todo_summary(ranked)

    assert "TO-DO BY IMPORTANCE" in text
    assert "IPC144" in text
    assert "Assignment 2" in text
    assert "49.00" in text
    assert "Total: 1 task(s)" in text


def test_format_todo_summary_empty() -> None:
    assert format_todo_summary([]) == "✅ Nothing pending."


def test_rank_tasks_accepts_naive_due_dates() -> None:
    naive = GradableTask(course_ref="c1", weight=10, due_at=datetime(2030, 1, 1, 12), id="n")
    aware = GradableTask(course_ref="c1", weight=10, due_at=datetime(2030, 1, 2, 12, tzinfo=timezone.utc), id="a")

    ranked = _rank_tasks([naive, aware])

    assert sorted(s.task.id for s in ranked) == ["a", "n"]


def test_rank_tasks_accepts_naive_now() -> None:
    ranked = _rank_tasks([task("a", 10, 9), task("b", 40, -1)], None, datetime(2024, 9, 2, 12, 0))

    assert [s.task.id for s in ranked] == ["a"]
    assert ranked[0].importance_score == pytest.approx(18.0)


def test_show_todo_summary_with_naive_due_date() -> None:
    naive = GradableTask(course_ref="c1", weight=10, due_at=datetime(2024, 9, 5, 12), title="Essay")

    text = format_todo_summary(_rank_tasks([naive], None, NOW))

    assert "Essay" in text
    assert "Total: 1 task(s)" in text
