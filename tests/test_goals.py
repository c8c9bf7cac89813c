"""Tests for goal feasibility projection and the goal report."""
from datetime import datetime, timedelta, timezone

import pytest

from academic_analytics.goals import build_goal_report, project
from academic_analytics.models import CourseRef, GradableTask, Goal

START = datetime(2024, 9, 2, tzinfo=timezone.utc)


def task(weight: float, grade=None, title: str = "", days: int = 0) -> GradableTask:
    return GradableTask(
        course_ref="c1",
        weight=weight,
        grade=grade,
        due_at=START + timedelta(days=days),
        title=title,
    )


def test_on_track_when_goal_still_achievable() -> None:
    """10% graded at 70, 90% to come: 81.11 needed for an 80."""
    report = project(80, [task(10, 70)], [task(90)])

    assert report.current_grade == pytest.approx(70)
    assert report.required_avg_for_remaining == pytest.approx(81.11, abs=0.01)
    assert report.achievable is True
    assert report.recommendation == "ON_TRACK"


def test_consider_adjusting_when_required_average_exceeds_100() -> None:
    report = project(90, [task(30, 40), task(30, 40)], [task(40)])

    assert report.required_avg_for_remaining == pytest.approx(165)
    assert report.achievable is False
    assert report.recommendation == "CONSIDER_ADJUSTING_GOAL"


def test_fully_graded_course_compares_current_grade_with_target() -> None:
    report = project(75, [task(100, 80)], [])

    assert report.required_avg_for_remaining is None
    assert report.achievable is True
    assert report.recommendation == "ON_TRACK"


def test_fully_graded_course_below_target() -> None:
    report = project(75, [task(100, 70)], [])

    assert report.required_avg_for_remaining is None
    assert report.achievable is False
    assert report.recommendation == "CONSIDER_ADJUSTING_GOAL"


def test_missing_weight_counts_as_remaining_work() -> None:
    """Only 50% entered: the other 50% is presumed still to come."""
    report = project(80, [task(20, 80)], [task(30)])

    # (80*100 - 80*20) / (30 + 50)
    assert report.required_avg_for_remaining == pytest.approx(80)
    assert report.achievable is True


def test_nothing_graded_requires_the_target_itself() -> None:
    """A null current grade counts as 0 with no weight behind it."""
    report = project(60, [], [task(40)])

    assert report.current_grade is None
    assert report.required_avg_for_remaining == pytest.approx(60)
    assert report.achievable is True


def test_empty_course_requires_the_target_on_everything() -> None:
    report = project(85, [], [])

    assert report.required_avg_for_remaining == pytest.approx(85)
    assert report.achievable is True


def test_weight_overage_is_absorbed_by_the_clamp() -> None:
    """110% of weight entered: no missing weight, no error."""
    report = project(80, [task(60, 70)], [task(50)])

    # (80*100 - 70*60) / 50
    assert report.required_avg_for_remaining == pytest.approx(76)
    assert report.achievable is True


def test_exactly_100_required_is_achievable() -> None:
    report = project(100, [], [task(100)])

    assert report.required_avg_for_remaining == pytest.approx(100)
    assert report.achievable is True


def test_goal_report_annotates_past_and_upcoming_tasks() -> None:
    tasks = [
        task(10, 85, "Quiz 1", days=1),
        task(25, title="Midterm", days=20),
        task(15, 60, "Lab 1", days=5),
        task(12, title="Lab 2", days=30),
        task(5, title="Quiz 2", days=31),
    ]
    goal = Goal(course_ref="c1", target_grade=80, id="g1")
    course = CourseRef(id="c1", code="IPC144", title="Intro to Programming")

    detail = build_goal_report(goal, course, tasks)

    assert detail.goal is goal
    assert detail.course is course
    assert [(e.task.title, e.contribution) for e in detail.past_events] == [
        ("Quiz 1", "positive"),
        ("Lab 1", "negative"),
    ]
    assert [(u.task.title, u.importance) for u in detail.upcoming_tasks] == [
        ("Midterm", "high"),
        ("Lab 2", "medium"),
        ("Quiz 2", "low"),
    ]
    # graded: (85*10 + 60*15) / 25 = 70; remaining 42 known + 33 missing
    assert detail.report.current_grade == pytest.approx(70)
    assert detail.report.required_avg_for_remaining == pytest.approx((8000 - 70 * 25) / 75)
    assert detail.report.achievable is True
