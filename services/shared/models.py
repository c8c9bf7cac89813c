"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
academic_analytics.models. Fields are snake_case in Python and camelCase on
the wire; both spellings are accepted on input.
"""
from __future__ import annotations

from datetime import date, datetime
import typing as t

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from academic_analytics.schedule import as_utc


# Type literals for commonly used values
ClassType = t.Literal["lecture", "lab", "tutorial"]
Recommendation = t.Literal["ON_TRACK", "CONSIDER_ADJUSTING_GOAL"]
Contribution = t.Literal["positive", "negative"]
Importance = t.Literal["high", "medium", "low"]

MAX_OFFSET_SECONDS = 86399


class ApiModel(BaseModel):
    """Base model: camelCase aliases, population by field name allowed."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WeeklySession(ApiModel):
    """
    Recurring weekly slot. Offsets are seconds after midnight, e.g.
    Monday 9:00-10:30 lecture -> weekday=1, 32400, 37800.
    """
    class_type: ClassType = "lecture"
    weekday: int = Field(ge=0, le=6)  # 0 = Sunday
    start_offset_seconds: int = Field(ge=0, le=MAX_OFFSET_SECONDS)
    end_offset_seconds: int = Field(ge=0, le=MAX_OFFSET_SECONDS)
    location: str = ""

    @model_validator(mode="after")
    def _ends_after_start(self) -> "WeeklySession":
        if self.end_offset_seconds <= self.start_offset_seconds:
            raise ValueError("endOffsetSeconds must be greater than startOffsetSeconds")
        return self


class ClassOccurrence(ApiModel):
    """A concrete dated class."""
    course_ref: str = ""
    class_type: ClassType
    start_time: datetime
    end_time: datetime
    location: str = ""


class Task(ApiModel):
    """
    A gradable task (assignment, exam, quiz, ...).
    grade is null until the task has been graded.
    """
    id: str = ""
    title: str = ""
    course_ref: str = ""
    weight: float = Field(ge=0, le=100)
    grade: t.Optional[float] = Field(default=None, ge=0, le=100)
    is_completed: bool = False
    due_at: datetime

    @field_validator("due_at")
    @classmethod
    def _due_at_utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class GradeItem(ApiModel):
    """Minimal input for grade aggregation."""
    weight: float = Field(ge=0, le=100)
    grade: t.Optional[float] = Field(default=None, ge=0, le=100)


class CourseInfo(ApiModel):
    """Course context. current_grade feeds the priority scorer when known."""
    id: str
    code: str = ""
    title: str = ""
    current_grade: t.Optional[float] = Field(default=None, ge=0, le=100)


class CourseSummary(ApiModel):
    id: str
    code: str = ""
    title: str = ""


class ScoredTask(Task):
    """A task annotated with its importance score."""
    importance_score: float
    course: t.Optional[CourseInfo] = None


class PastEvent(Task):
    contribution: Contribution


class UpcomingTask(Task):
    importance: Importance


# Request/Response Models for API endpoints
class MaterializeScheduleRequest(ApiModel):
    """Request model for expanding a weekly schedule into classes."""
    course_id: str = ""
    sessions: list[WeeklySession] = Field(default_factory=list)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def _range_in_order(self) -> "MaterializeScheduleRequest":
        if self.start_date > self.end_date:
            raise ValueError("startDate must not be after endDate")
        return self


class MaterializeScheduleResponse(ApiModel):
    """Response model for materialized classes."""
    occurrences: list[ClassOccurrence]


class UpcomingClassesRequest(MaterializeScheduleRequest):
    """Request model for the classes of the coming days."""
    now: t.Optional[datetime] = None
    days: int = Field(default=7, ge=1, le=366)


class UpcomingClassesResponse(ApiModel):
    classes: list[ClassOccurrence]


class AggregateGradesRequest(ApiModel):
    """Request model for weighted grade aggregation."""
    tasks: list[GradeItem] = Field(default_factory=list)


class AggregateGradesResponse(ApiModel):
    """Response model for weighted grade aggregation."""
    average: t.Optional[float]
    weight_so_far: float


class GoalReportRequest(ApiModel):
    """Request model for a goal feasibility report."""
    goal_id: str = ""
    course: CourseSummary
    target_grade: float = Field(ge=0, le=100)
    tasks: list[Task] = Field(default_factory=list)


class GoalReportResponse(ApiModel):
    """Response model for a goal feasibility report."""
    goal_id: str
    course: CourseSummary
    target_grade: float
    current_grade: t.Optional[float]
    past_events: list[PastEvent]
    upcoming_tasks: list[UpcomingTask]
    achievable: bool
    required_avg_for_remaining: t.Optional[float]
    recommendation: Recommendation


class SmartTodoRequest(ApiModel):
    """Request model for the ranked to-do list."""
    now: t.Optional[datetime] = None
    tasks: list[Task] = Field(default_factory=list)
    courses: list[CourseInfo] = Field(default_factory=list)


class SmartTodoResponse(ApiModel):
    """Response model for the ranked to-do list."""
    tasks: list[ScoredTask]


class ErrorResponse(ApiModel):
    success: bool = False
    errors: list[str]
