from dataclasses import dataclass, fields, replace
from datetime import date
from typing import Optional

from courseadmin.config import COURSES, ENROLLMENTS, INSTRUCTORS, PARTICIPANTS, ROOMS


# -----------------------------
# Data model (UI shape)
# -----------------------------
@dataclass(frozen=True)
class Instructor:
    record_id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    subject: str = ""


@dataclass(frozen=True)
class Participant:
    record_id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    birth_date: str = ""            # YYYY-MM-DD or ""


@dataclass(frozen=True)
class Room:
    record_id: Optional[str] = None
    name: str = ""
    building: str = ""
    capacity: int = 0


@dataclass(frozen=True)
class Course:
    record_id: Optional[str] = None
    title: str = ""
    description: str = ""
    start_date: str = ""            # YYYY-MM-DD
    end_date: str = ""              # YYYY-MM-DD
    max_participants: int = 0
    price: float = 0.0
    instructor_id: Optional[str] = None
    room_id: Optional[str] = None


@dataclass(frozen=True)
class Enrollment:
    record_id: Optional[str] = None
    participant_id: Optional[str] = None
    course_id: Optional[str] = None
    enrolled_on: str = ""           # YYYY-MM-DD
    paid: bool = False


RECORD_TYPES = {
    COURSES: Course,
    INSTRUCTORS: Instructor,
    PARTICIPANTS: Participant,
    ROOMS: Room,
    ENROLLMENTS: Enrollment,
}

REQUIRED_FIELDS = {
    COURSES: ["title", "start_date", "end_date"],
    INSTRUCTORS: ["name"],
    PARTICIPANTS: ["name"],
    ROOMS: ["name"],
    ENROLLMENTS: ["participant_id", "course_id"],
}

FIELD_LABELS = {
    "title": "Title",
    "start_date": "Start date",
    "end_date": "End date",
    "name": "Name",
    "participant_id": "Participant",
    "course_id": "Course",
}


def new_record(kind: str, today: date):
    """Form defaults for a fresh record of the given kind."""
    if kind == COURSES:
        return Course(max_participants=20, price=0.0)
    if kind == ROOMS:
        return Room(capacity=30)
    if kind == ENROLLMENTS:
        return Enrollment(enrolled_on=today.isoformat(), paid=False)
    return RECORD_TYPES[kind]()


def record_fields(record) -> dict:
    return {f.name: getattr(record, f.name) for f in fields(record) if f.name != "record_id"}


def with_record_id(record, record_id: Optional[str]):
    return replace(record, record_id=record_id)


def _is_empty(v) -> bool:
    if v is None:
        return True
    if isinstance(v, str):
        return not v.strip()
    return False


def missing_required(record, kind: str) -> list[str]:
    return [name for name in REQUIRED_FIELDS[kind] if _is_empty(getattr(record, name, None))]


def validate_record(record, kind: str) -> list[str]:
    problems = [f"{FIELD_LABELS.get(n, n)} is required." for n in missing_required(record, kind)]

    if kind == COURSES and record.start_date and record.end_date:
        try:
            start = date.fromisoformat(record.start_date)
            end = date.fromisoformat(record.end_date)
        except ValueError:
            problems.append("Start and end date must be valid dates.")
        else:
            if end < start:
                problems.append("End date must be on/after start date.")

    return problems
