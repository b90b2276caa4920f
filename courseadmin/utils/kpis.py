from datetime import date, datetime
from typing import Iterable, Optional

import pytz

PLANNED = "planned"
ACTIVE = "active"
ENDED = "ended"

STATUS_LABELS = {PLANNED: "Planned", ACTIVE: "Active", ENDED: "Ended"}


def today_in(tz_name: str) -> date:
    return datetime.now(pytz.timezone(tz_name)).date()


def _parse_iso_date(s) -> Optional[date]:
    s = (s or "").strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s)
    except ValueError:
        return None


def course_status(course, today: date) -> str:
    # A course without an end date counts as ended; one without a start is never planned.
    start = _parse_iso_date(course.start_date)
    end = _parse_iso_date(course.end_date)
    if start and start > today:
        return PLANNED
    if end is None or end < today:
        return ENDED
    return ACTIVE


def count_active_courses(courses: Iterable, today: date) -> int:
    return sum(1 for c in courses if course_status(c, today) == ACTIVE)


def total_revenue(enrollments: Iterable, courses: Iterable) -> float:
    """Sum of course price over paid enrollments; unknown courses add 0."""
    price_by_id = {c.record_id: float(c.price or 0) for c in courses}
    return sum(price_by_id.get(e.course_id, 0.0) for e in enrollments if e.paid)


def format_eur(amount: float) -> str:
    # 1234.5 -> "1.234,50"
    s = f"{amount:,.2f}"
    return s.replace(",", "_").replace(".", ",").replace("_", ".")
