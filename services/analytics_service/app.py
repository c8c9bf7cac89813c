"""
FastAPI service for academic analytics.

This service exposes the academic_analytics engine as REST API endpoints.
It is stateless: every request carries the course, task and schedule data it
needs, and nothing is stored between requests. These are fast, CPU-only
operations with no LLM involvement.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from academic_analytics.config import SERVICE_HOST, SERVICE_PORT
from academic_analytics.courses import upcoming_classes
from academic_analytics.errors import WeightLimitExceededError
from academic_analytics.goals import build_goal_report
from academic_analytics.grades import aggregate, check_weight_total
from academic_analytics.log_config import get_logger, setup_logging
from academic_analytics.models import Goal
from academic_analytics.priority import smart_todo
from academic_analytics.schedule import materialize
from services.shared.convert import (
    course_to_domain,
    goal_report_from_domain,
    occurrence_from_domain,
    resolve_now,
    scored_from_domain,
    session_to_domain,
    task_to_domain,
)
from services.shared.models import (
    AggregateGradesRequest,
    AggregateGradesResponse,
    ErrorResponse,
    GoalReportRequest,
    GoalReportResponse,
    MaterializeScheduleRequest,
    MaterializeScheduleResponse,
    SmartTodoRequest,
    SmartTodoResponse,
    UpcomingClassesRequest,
    UpcomingClassesResponse,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize resources on startup and cleanup on shutdown."""
    setup_logging()
    logger.info("analytics_service_started")
    yield


app = FastAPI(
    title="Academic Analytics Service",
    description="REST API for class schedules, grade averages, goal feasibility and task priorities",
    version="1.0.0",
    lifespan=lifespan,
)


class UnprocessableInput(HTTPException):
    """422 carrying a list of error messages."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(status_code=422, detail=errors)


@app.exception_handler(UnprocessableInput)
async def unprocessable_input_handler(request: Request, exc: UnprocessableInput) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"success": False, "errors": exc.detail})


def _format_validation_error(error: dict) -> str:
    """'<message> at <field.path>', with the leading 'body' dropped."""
    loc = [str(part) for part in error.get("loc", ())]
    if loc and loc[0] == "body":
        loc = loc[1:]
    if not loc:
        return error["msg"]
    return f"{error['msg']} at {'.'.join(loc)}"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [_format_validation_error(error) for error in exc.errors()]
    logger.warning("request_rejected", path=request.url.path, errors=errors)
    return JSONResponse(status_code=422, content={"success": False, "errors": errors})


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "academic-analytics-service"}


def _materialize(request: MaterializeScheduleRequest):
    sessions = [session_to_domain(s) for s in request.sessions]
    return materialize(sessions, request.start_date, request.end_date, request.course_id)


@app.post("/schedule/materialize", response_model=MaterializeScheduleResponse, responses={422: {"model": ErrorResponse}})
async def materialize_schedule(request: MaterializeScheduleRequest) -> MaterializeScheduleResponse:
    """
    Expand a weekly schedule into dated classes between startDate and endDate.

    Classes are returned in day order, then schedule order. Callers storing
    them must delete a course's previous classes before inserting these.
    """
    occurrences = _materialize(request)
    logger.info("schedule_materialized", course_id=request.course_id, count=len(occurrences))
    return MaterializeScheduleResponse(
        occurrences=[occurrence_from_domain(o) for o in occurrences]
    )


@app.post("/classes/upcoming", response_model=UpcomingClassesResponse, responses={422: {"model": ErrorResponse}})
async def list_upcoming_classes(request: UpcomingClassesRequest) -> UpcomingClassesResponse:
    """Classes of a course starting within the next `days` days (default: one week)."""
    now = resolve_now(request.now)
    classes = upcoming_classes(_materialize(request), now, request.days)
    return UpcomingClassesResponse(classes=[occurrence_from_domain(c) for c in classes])


@app.post("/grades/aggregate", response_model=AggregateGradesResponse)
async def aggregate_grades(request: AggregateGradesRequest) -> AggregateGradesResponse:
    """Weighted average over the graded tasks; ungraded tasks are ignored."""
    summary = aggregate(request.tasks)
    return AggregateGradesResponse(average=summary.average, weight_so_far=summary.weight_so_far)


@app.post("/goals/report", response_model=GoalReportResponse, responses={422: {"model": ErrorResponse}})
async def goal_report(request: GoalReportRequest) -> GoalReportResponse:
    """
    Report whether a course's target grade is still achievable.

    Rejects task sets whose weights sum to more than 100%.
    """
    tasks = [task_to_domain(task) for task in request.tasks]
    try:
        check_weight_total(tasks)
    except WeightLimitExceededError as e:
        logger.warning("goal_report_rejected", goal_id=request.goal_id, total_weight=e.total)
        raise UnprocessableInput([str(e)])

    detail = build_goal_report(
        Goal(course_ref=request.course.id, target_grade=request.target_grade, id=request.goal_id),
        course_to_domain(request.course),
        tasks,
    )

    logger.info(
        "goal_report_built",
        goal_id=request.goal_id,
        achievable=detail.report.achievable,
        recommendation=detail.report.recommendation,
    )
    return goal_report_from_domain(detail)


@app.post("/todo", response_model=SmartTodoResponse)
async def todo(request: SmartTodoRequest) -> SmartTodoResponse:
    """
    Pending tasks ranked by importance score, highest first.

    Completed and past-due tasks are left out.
    """
    now = resolve_now(request.now)
    courses = {course.id: course_to_domain(course) for course in request.courses}
    ranked = smart_todo([task_to_domain(task) for task in request.tasks], now, courses)
    logger.info("todo_ranked", received=len(request.tasks), pending=len(ranked))
    return SmartTodoResponse(tasks=[scored_from_domain(s) for s in ranked])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=SERVICE_HOST, port=SERVICE_PORT)
