"""Course-level helpers around materialized schedules."""
from __future__ import annotations

from datetime import date, datetime, timedelta
import typing as t

from academic_analytics.models import ClassOccurrence, CourseSchedule, CourseStatus
from academic_analytics.schedule import as_utc_date


class Dated(t.Protocol):
    end_date: t.Optional[date]


def course_status(end_date: t.Union[date, datetime], today: t.Union[date, datetime]) -> CourseStatus:
    """A course whose end date has passed is inactive."""
    return "inactive" if as_utc_date(end_date) < as_utc_date(today) else "active"


def split_active(courses: t.Iterable[Dated], today: t.Union[date, datetime]) -> tuple[list, list]:
    """Split courses into (active, inactive) by end date, keeping order."""
    active, inactive = [], []
    for course in courses:
        if course.end_date is not None and course_status(course.end_date, today) == "inactive":
            inactive.append(course)
        else:
            active.append(course)
    return active, inactive


def upcoming_classes(
        occurrences: t.Iterable[ClassOccurrence],
        now: datetime,
        days: int = 7,
) -> list[ClassOccurrence]:
    """Classes starting between now and the same time ``days - 1`` days later.

    The default gives a one-week view: today plus the next six days.
    """
    until = now + timedelta(days=max(days - 1, 0))
    window = [o for o in occurrences if now <= o.start_time <= until]
    return sorted(window, key=lambda o: o.start_time)


def needs_regeneration(old: CourseSchedule, new: CourseSchedule) -> bool:
    """Whether an edit invalidates the classes generated from ``old``.

    Previously generated classes must then be deleted before the new ones are
    inserted, since occurrences have no identity to upsert on.
    """
    return (
        old.sessions != new.sessions
        or old.start_date != new.start_date
        or old.end_date != new.end_date
    )
