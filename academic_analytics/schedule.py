"""
Weekly schedule materialization.

Expands a course's recurring weekly sessions into dated ClassOccurrence
records. Days start at UTC midnight and weekdays are numbered from Sunday = 0,
for every caller, so output never depends on the server timezone.
"""
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
import typing as t

from academic_analytics.errors import ScheduleConfigurationError
from academic_analytics.log_config import get_logger
from academic_analytics.models import CLASS_TYPES, ClassOccurrence, CourseSchedule, WeeklySession

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400
ONE_DAY = timedelta(days=1)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def as_utc_date(value: t.Union[date, datetime]) -> date:
    """Return the UTC calendar date of a date or datetime.

    Naive datetimes are taken to already be in UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def weekday_of(day: date) -> int:
    """Day of week with Sunday = 0 and Saturday = 6."""
    return day.isoweekday() % 7


def utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time(0), tzinfo=timezone.utc)


def iter_days(start_date: date, end_date: date) -> t.Iterator[date]:
    """Yield every calendar day from start_date to end_date inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += ONE_DAY


def materialize(
        sessions: t.Sequence[WeeklySession],
        start_date: t.Union[date, datetime],
        end_date: t.Union[date, datetime],
        course_ref: str = "",
) -> list[ClassOccurrence]:
    """Expand weekly sessions into class occurrences over a date range.

    Occurrences come out ordered by day, then by the order of the sessions in
    the template, so identical inputs always give identical lists. Input is
    assumed valid; run validate_sessions() first when it comes from a user.

    :param sessions: Weekly template.
    :param start_date: First day to scan (inclusive).
    :param end_date: Last day to scan (inclusive).
    :param course_ref: Course identifier stamped on each occurrence.
    :return: The list of ClassOccurrence objects.
    """
    first = as_utc_date(start_date)
    last = as_utc_date(end_date)

    by_weekday: dict[int, list[WeeklySession]] = {}
    for session in sessions:
        by_weekday.setdefault(session.weekday, []).append(session)

    occurrences: list[ClassOccurrence] = []
    for day in iter_days(first, last):
        todays = by_weekday.get(weekday_of(day))
        if not todays:
            continue

        midnight = utc_midnight(day)
        for session in todays:
            start_time = midnight + timedelta(seconds=session.start_offset_seconds)
            end_time = start_time + timedelta(
                seconds=session.end_offset_seconds - session.start_offset_seconds
            )
            occurrences.append(ClassOccurrence(
                course_ref=course_ref,
                class_type=session.class_type,
                start_time=start_time,
                end_time=end_time,
                location=session.location,
            ))

    logger.debug(
        "schedule_materialized",
        course_ref=course_ref,
        start_date=first.isoformat(),
        end_date=last.isoformat(),
        occurrences=len(occurrences),
    )
    return occurrences


def materialize_course(schedule: CourseSchedule, course_ref: str = "") -> list[ClassOccurrence]:
    """Materialize a CourseSchedule over its own start and end dates."""
    if schedule.start_date is None or schedule.end_date is None:
        return []
    return materialize(schedule.sessions, schedule.start_date, schedule.end_date, course_ref)


def validate_sessions(sessions: t.Sequence[WeeklySession]) -> None:
    """Reject sessions that materialize() cannot represent.

    :raises ScheduleConfigurationError: On the first invalid session.
    """
    for index, session in enumerate(sessions):
        where = f"schedule[{index}]"
        if session.class_type not in CLASS_TYPES:
            raise ScheduleConfigurationError(f"{where}: unknown class type {session.class_type!r}")
        if not 0 <= session.weekday <= 6:
            raise ScheduleConfigurationError(f"{where}: weekday must be between 0 and 6")
        for name in ("start_offset_seconds", "end_offset_seconds"):
            offset = getattr(session, name)
            if not 0 <= offset < SECONDS_PER_DAY:
                raise ScheduleConfigurationError(
                    f"{where}: {name} must be between 0 and {SECONDS_PER_DAY - 1}"
                )
        if session.end_offset_seconds <= session.start_offset_seconds:
            raise ScheduleConfigurationError(f"{where}: session must end after it starts")


def validate_date_range(start_date: t.Union[date, datetime], end_date: t.Union[date, datetime]) -> None:
    """:raises ScheduleConfigurationError: If the range ends before it starts."""
    if as_utc_date(start_date) > as_utc_date(end_date):
        raise ScheduleConfigurationError("startDate must not be after endDate")
