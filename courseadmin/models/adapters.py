"""
Mapping between record-store field bags and the UI dataclasses.

`*_from_wire` never fails: absent or null values fall back to the
dataclass defaults and reference URLs are reduced to bare record ids.
`*_to_wire` resolves ids back to URLs through a `ref_url(kind, id)`
callable, normally `RecordClient.record_url`.
"""
from typing import Callable, Optional

from courseadmin.config import COURSES, ENROLLMENTS, INSTRUCTORS, PARTICIPANTS, ROOMS, WIRE_FIELDS
from courseadmin.models.records import Course, Enrollment, Instructor, Participant, Room
from courseadmin.services.records_client import WireRecord, extract_record_id

RefUrl = Callable[[str, str], str]


def _text(fields: dict, key: str) -> str:
    v = fields.get(key)
    return "" if v is None else str(v)


def _int(fields: dict, key: str) -> int:
    v = fields.get(key)
    if v is None or v == "":
        return 0
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return 0


def _float(fields: dict, key: str) -> float:
    v = fields.get(key)
    if v is None or v == "":
        return 0.0
    try:
        return float(str(v).replace(",", ""))
    except (TypeError, ValueError):
        return 0.0


def _ref(fields: dict, key: str) -> Optional[str]:
    return extract_record_id(fields.get(key))


def _ref_url(ref_url: RefUrl, kind: str, record_id: Optional[str]) -> Optional[str]:
    return ref_url(kind, record_id) if record_id else None


# -----------------------------
# wire -> UI
# -----------------------------
def instructor_from_wire(rec: WireRecord) -> Instructor:
    w = WIRE_FIELDS[INSTRUCTORS]
    f = rec.fields or {}
    return Instructor(
        record_id=rec.record_id,
        name=_text(f, w["name"]),
        email=_text(f, w["email"]),
        phone=_text(f, w["phone"]),
        subject=_text(f, w["subject"]),
    )


def participant_from_wire(rec: WireRecord) -> Participant:
    w = WIRE_FIELDS[PARTICIPANTS]
    f = rec.fields or {}
    return Participant(
        record_id=rec.record_id,
        name=_text(f, w["name"]),
        email=_text(f, w["email"]),
        phone=_text(f, w["phone"]),
        birth_date=_text(f, w["birth_date"]),
    )


def room_from_wire(rec: WireRecord) -> Room:
    w = WIRE_FIELDS[ROOMS]
    f = rec.fields or {}
    return Room(
        record_id=rec.record_id,
        name=_text(f, w["name"]),
        building=_text(f, w["building"]),
        capacity=_int(f, w["capacity"]),
    )


def course_from_wire(rec: WireRecord) -> Course:
    w = WIRE_FIELDS[COURSES]
    f = rec.fields or {}
    return Course(
        record_id=rec.record_id,
        title=_text(f, w["title"]),
        description=_text(f, w["description"]),
        start_date=_text(f, w["start_date"]),
        end_date=_text(f, w["end_date"]),
        max_participants=_int(f, w["max_participants"]),
        price=_float(f, w["price"]),
        instructor_id=_ref(f, w["instructor_id"]),
        room_id=_ref(f, w["room_id"]),
    )


def enrollment_from_wire(rec: WireRecord) -> Enrollment:
    w = WIRE_FIELDS[ENROLLMENTS]
    f = rec.fields or {}
    return Enrollment(
        record_id=rec.record_id,
        participant_id=_ref(f, w["participant_id"]),
        course_id=_ref(f, w["course_id"]),
        enrolled_on=_text(f, w["enrolled_on"]),
        paid=bool(f.get(w["paid"]) or False),
    )


# -----------------------------
# UI -> wire
# -----------------------------
def instructor_to_wire(r: Instructor, ref_url: RefUrl) -> dict:
    w = WIRE_FIELDS[INSTRUCTORS]
    return {
        w["name"]: r.name,
        w["email"]: r.email,
        w["phone"]: r.phone,
        w["subject"]: r.subject,
    }


def participant_to_wire(r: Participant, ref_url: RefUrl) -> dict:
    w = WIRE_FIELDS[PARTICIPANTS]
    return {
        w["name"]: r.name,
        w["email"]: r.email,
        w["phone"]: r.phone,
        w["birth_date"]: r.birth_date,
    }


def room_to_wire(r: Room, ref_url: RefUrl) -> dict:
    w = WIRE_FIELDS[ROOMS]
    return {
        w["name"]: r.name,
        w["building"]: r.building,
        w["capacity"]: int(r.capacity),
    }


def course_to_wire(r: Course, ref_url: RefUrl) -> dict:
    w = WIRE_FIELDS[COURSES]
    return {
        w["title"]: r.title,
        w["description"]: r.description,
        w["start_date"]: r.start_date,
        w["end_date"]: r.end_date,
        w["max_participants"]: int(r.max_participants),
        w["price"]: float(r.price),
        w["instructor_id"]: _ref_url(ref_url, INSTRUCTORS, r.instructor_id),
        w["room_id"]: _ref_url(ref_url, ROOMS, r.room_id),
    }


def enrollment_to_wire(r: Enrollment, ref_url: RefUrl) -> dict:
    w = WIRE_FIELDS[ENROLLMENTS]
    return {
        w["participant_id"]: _ref_url(ref_url, PARTICIPANTS, r.participant_id),
        w["course_id"]: _ref_url(ref_url, COURSES, r.course_id),
        w["enrolled_on"]: r.enrolled_on,
        w["paid"]: bool(r.paid),
    }


ADAPTERS = {
    COURSES: (course_from_wire, course_to_wire),
    INSTRUCTORS: (instructor_from_wire, instructor_to_wire),
    PARTICIPANTS: (participant_from_wire, participant_to_wire),
    ROOMS: (room_from_wire, room_to_wire),
    ENROLLMENTS: (enrollment_from_wire, enrollment_to_wire),
}
