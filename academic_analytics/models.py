"""
Data models for the academic analytics engine.

This module contains the dataclasses exchanged by the schedule materializer,
grade aggregator, goal feasibility engine and priority scorer. Records such as
GoalReport and ScoredTask are derived per request and never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
import typing as t


ClassType = t.Literal["lecture", "lab", "tutorial"]
Recommendation = t.Literal["ON_TRACK", "CONSIDER_ADJUSTING_GOAL"]
Contribution = t.Literal["positive", "negative"]
Importance = t.Literal["high", "medium", "low"]
CourseStatus = t.Literal["active", "inactive"]

CLASS_TYPES: tuple[str, ...] = t.get_args(ClassType)


@dataclass
class WeeklySession:
    """A recurring weekly time slot, e.g. Monday lecture 9:00-10:30."""
    class_type: ClassType
    weekday: int  # 0 = Sunday ... 6 = Saturday
    start_offset_seconds: int  # seconds after midnight
    end_offset_seconds: int
    location: str = ""


@dataclass
class CourseSchedule:
    """Weekly template plus inclusive calendar bounds for one course."""
    sessions: list[WeeklySession] = field(default_factory=list)
    start_date: t.Optional[date] = None
    end_date: t.Optional[date] = None


@dataclass
class ClassOccurrence:
    """A concrete dated class generated from a weekly session."""
    course_ref: str
    class_type: ClassType
    start_time: datetime
    end_time: datetime
    location: str = ""

    @property
    def key(self) -> tuple[str, datetime, str]:
        """Identity used by bulk inserts: (course, start, class type)."""
        return (self.course_ref, self.start_time, self.class_type)


@dataclass
class GradableTask:
    """A weighted, time-bounded academic task (assignment, exam, ...)."""
    course_ref: str
    weight: float
    due_at: datetime
    grade: t.Optional[float] = None  # None means not graded yet
    is_completed: bool = False
    id: str = ""
    title: str = ""


@dataclass
class Goal:
    """A target grade for one course."""
    course_ref: str
    target_grade: float
    id: str = ""


@dataclass
class CourseRef:
    """Course context handed to the scorer and the goal report."""
    id: str
    code: str = ""
    title: str = ""
    current_grade: t.Optional[float] = None


@dataclass
class GradeSummary:
    """Weighted average over graded tasks and the weight already counted."""
    average: t.Optional[float]
    weight_so_far: float


@dataclass
class GoalReport:
    """Feasibility projection for a goal. Recomputed on every request."""
    current_grade: t.Optional[float]
    required_avg_for_remaining: t.Optional[float]
    achievable: bool
    recommendation: Recommendation


@dataclass
class PastEventEntry:
    task: GradableTask
    contribution: Contribution


@dataclass
class UpcomingTaskEntry:
    task: GradableTask
    importance: Importance


@dataclass
class GoalReportDetail:
    """Goal report together with the annotated task lists it was built from."""
    goal: Goal
    course: CourseRef
    report: GoalReport
    past_events: list[PastEventEntry] = field(default_factory=list)
    upcoming_tasks: list[UpcomingTaskEntry] = field(default_factory=list)


@dataclass
class ScoredTask:
    """A pending task annotated with its importance score."""
    task: GradableTask
    importance_score: float
    course: t.Optional[CourseRef] = None
