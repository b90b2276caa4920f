"""Tests for wire <-> UI record adapters."""
import pytest

from courseadmin.models.adapters import (
    ADAPTERS,
    course_from_wire,
    enrollment_from_wire,
    participant_to_wire,
    room_from_wire,
)
from courseadmin.models.records import Course, Participant
from courseadmin.services.records_client import WireRecord

INSTR_ID = "aaaaaaaaaaaaaaaaaaaaaaa1"
ROOM_ID = "bbbbbbbbbbbbbbbbbbbbbbb2"
PART_ID = "ccccccccccccccccccccccc3"
COURSE_ID = "ddddddddddddddddddddddd4"


def full_wire_fields(client):
    return {
        "courses": {
            "titel": "Python basics",
            "beschreibung": "Intro",
            "startdatum": "2024-01-01",
            "enddatum": "2024-12-31",
            "max_teilnehmer": 12,
            "preis": 199.5,
            "dozent": client.record_url("instructors", INSTR_ID),
            "raum": client.record_url("rooms", ROOM_ID),
        },
        "instructors": {"name": "Ada", "email": "ada@example.org", "telefon": "123", "fachgebiet": "CS"},
        "participants": {"name": "Bob", "email": "bob@example.org", "telefon": "456", "geburtsdatum": "1990-05-01"},
        "rooms": {"raumname": "A1", "gebaeude": "Main", "kapazitaet": 30},
        "enrollments": {
            "teilnehmer": client.record_url("participants", PART_ID),
            "kurs": client.record_url("courses", COURSE_ID),
            "anmeldedatum": "2024-02-01",
            "bezahlt": True,
        },
    }


def test_course_from_wire_maps_fields_and_references(client):
    fields = full_wire_fields(client)["courses"]
    course = course_from_wire(WireRecord("c1", fields))

    assert course == Course(
        record_id="c1",
        title="Python basics",
        description="Intro",
        start_date="2024-01-01",
        end_date="2024-12-31",
        max_participants=12,
        price=199.5,
        instructor_id=INSTR_ID,
        room_id=ROOM_ID,
    )


def test_course_from_wire_substitutes_defaults_for_missing_and_null():
    course = course_from_wire(WireRecord("c1", {"titel": None, "dozent": None}))
    assert course == Course(record_id="c1")


def test_room_capacity_falls_back_to_zero_when_unparseable():
    assert room_from_wire(WireRecord("r1", {"kapazitaet": "lots"})).capacity == 0


def test_enrollment_with_malformed_reference_has_no_relation():
    e = enrollment_from_wire(WireRecord("e1", {"teilnehmer": "not-a-url", "bezahlt": None}))
    assert e.participant_id is None
    assert e.paid is False


@pytest.mark.parametrize("kind", list(ADAPTERS))
def test_wire_to_ui_and_back_preserves_every_field(client, kind):
    fields = full_wire_fields(client)[kind]
    from_wire, to_wire = ADAPTERS[kind]

    record = from_wire(WireRecord("x1", fields))

    assert record.record_id == "x1"
    assert to_wire(record, client.record_url) == fields


def test_missing_references_are_sent_as_null(client):
    _, to_wire = ADAPTERS["courses"]
    fields = to_wire(Course(title="T"), client.record_url)
    assert fields["dozent"] is None
    assert fields["raum"] is None


def test_empty_birth_date_is_sent_as_empty_string(client):
    assert participant_to_wire(Participant(name="Bob"), client.record_url)["geburtsdatum"] == ""


def test_empty_birth_date_survives_the_round_trip(client):
    from_wire, to_wire = ADAPTERS["participants"]
    fields = {"name": "Bob", "email": "", "telefon": "", "geburtsdatum": ""}

    assert to_wire(from_wire(WireRecord("p1", fields)), client.record_url) == fields
