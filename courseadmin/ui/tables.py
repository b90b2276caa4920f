from datetime import date
from typing import Sequence

import pandas as pd

from courseadmin.utils.kpis import STATUS_LABELS, course_status

MISSING = "—"

COURSE_COLUMNS = ["Title", "Instructor", "Room", "Start", "End", "Price (EUR)", "Status"]
INSTRUCTOR_COLUMNS = ["Name", "Email", "Phone", "Subject"]
PARTICIPANT_COLUMNS = ["Name", "Email", "Phone", "Birth date"]
ROOM_COLUMNS = ["Room", "Building", "Capacity"]
ENROLLMENT_COLUMNS = ["Participant", "Course", "Enrolled on", "Paid"]


def _frame(rows: list[dict], columns: list[str]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=columns) if rows else pd.DataFrame(columns=columns)


def room_label(room) -> str:
    return f"{room.name} ({room.building})" if room.building else room.name


def courses_df(courses: Sequence, instructors: Sequence, rooms: Sequence, today: date) -> pd.DataFrame:
    instructor_names = {i.record_id: i.name for i in instructors}
    room_labels = {r.record_id: room_label(r) for r in rooms}
    rows = [
        {
            "Title": c.title,
            "Instructor": instructor_names.get(c.instructor_id, MISSING),
            "Room": room_labels.get(c.room_id, MISSING),
            "Start": c.start_date,
            "End": c.end_date,
            "Price (EUR)": float(c.price),
            "Status": STATUS_LABELS[course_status(c, today)],
        }
        for c in courses
    ]
    return _frame(rows, COURSE_COLUMNS)


def instructors_df(instructors: Sequence) -> pd.DataFrame:
    rows = [
        {"Name": i.name, "Email": i.email, "Phone": i.phone, "Subject": i.subject}
        for i in instructors
    ]
    return _frame(rows, INSTRUCTOR_COLUMNS)


def participants_df(participants: Sequence) -> pd.DataFrame:
    rows = [
        {"Name": p.name, "Email": p.email, "Phone": p.phone, "Birth date": p.birth_date}
        for p in participants
    ]
    return _frame(rows, PARTICIPANT_COLUMNS)


def rooms_df(rooms: Sequence) -> pd.DataFrame:
    rows = [{"Room": r.name, "Building": r.building, "Capacity": int(r.capacity)} for r in rooms]
    return _frame(rows, ROOM_COLUMNS)


def enrollments_df(enrollments: Sequence, participants: Sequence, courses: Sequence) -> pd.DataFrame:
    participant_names = {p.record_id: p.name for p in participants}
    course_titles = {c.record_id: c.title for c in courses}
    rows = [
        {
            "Participant": participant_names.get(e.participant_id, MISSING),
            "Course": course_titles.get(e.course_id, MISSING),
            "Enrolled on": e.enrolled_on,
            "Paid": bool(e.paid),
        }
        for e in enrollments
    ]
    return _frame(rows, ENROLLMENT_COLUMNS)
