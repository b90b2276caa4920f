"""Tests for form defaults and required-field validation."""
from datetime import date

from courseadmin.models.records import (
    Course,
    Enrollment,
    Instructor,
    Room,
    missing_required,
    new_record,
    record_fields,
    validate_record,
)

TODAY = date(2024, 6, 15)


def test_new_record_defaults():
    assert new_record("courses", TODAY) == Course(max_participants=20, price=0.0)
    assert new_record("rooms", TODAY).capacity == 30
    assert new_record("enrollments", TODAY) == Enrollment(enrolled_on="2024-06-15", paid=False)
    assert new_record("instructors", TODAY) == Instructor()


def test_record_fields_excludes_record_id():
    assert record_fields(Room(record_id="r1", name="A1", building="B", capacity=5)) == {
        "name": "A1",
        "building": "B",
        "capacity": 5,
    }


def test_missing_required_treats_whitespace_and_none_as_empty():
    assert missing_required(Instructor(name="   "), "instructors") == ["name"]
    assert missing_required(Enrollment(course_id="c1"), "enrollments") == ["participant_id"]
    assert missing_required(Course(title="T", start_date="2024-01-01", end_date="2024-01-02"), "courses") == []


def test_validate_course_lists_every_missing_field():
    problems = validate_record(Course(), "courses")
    assert problems == ["Title is required.", "Start date is required.", "End date is required."]


def test_validate_course_rejects_end_before_start():
    course = Course(title="T", start_date="2024-05-01", end_date="2024-04-30")
    assert validate_record(course, "courses") == ["End date must be on/after start date."]


def test_validate_course_accepts_single_day_course():
    course = Course(title="T", start_date="2024-05-01", end_date="2024-05-01")
    assert validate_record(course, "courses") == []
