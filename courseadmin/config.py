# courseadmin/config.py
from dataclasses import dataclass, field
from typing import Mapping, Optional

COURSES = "courses"
INSTRUCTORS = "instructors"
PARTICIPANTS = "participants"
ROOMS = "rooms"
ENROLLMENTS = "enrollments"

# Tab order in the UI
ENTITY_KINDS = [COURSES, INSTRUCTORS, PARTICIPANTS, ROOMS, ENROLLMENTS]

ENTITY_LABELS = {
    COURSES: "Course",
    INSTRUCTORS: "Instructor",
    PARTICIPANTS: "Participant",
    ROOMS: "Room",
    ENROLLMENTS: "Enrollment",
}

TAB_TITLES = {
    COURSES: "Courses",
    INSTRUCTORS: "Instructors",
    PARTICIPANTS: "Participants",
    ROOMS: "Rooms",
    ENROLLMENTS: "Enrollments",
}

# UI field -> field name in the remote record store
WIRE_FIELDS = {
    COURSES: {
        "title": "titel",
        "description": "beschreibung",
        "start_date": "startdatum",       # YYYY-MM-DD
        "end_date": "enddatum",           # YYYY-MM-DD
        "max_participants": "max_teilnehmer",
        "price": "preis",
        "instructor_id": "dozent",        # reference URL
        "room_id": "raum",                # reference URL
    },
    INSTRUCTORS: {
        "name": "name",
        "email": "email",
        "phone": "telefon",
        "subject": "fachgebiet",
    },
    PARTICIPANTS: {
        "name": "name",
        "email": "email",
        "phone": "telefon",
        "birth_date": "geburtsdatum",
    },
    ROOMS: {
        "name": "raumname",
        "building": "gebaeude",
        "capacity": "kapazitaet",
    },
    ENROLLMENTS: {
        "participant_id": "teilnehmer",   # reference URL
        "course_id": "kurs",              # reference URL
        "enrolled_on": "anmeldedatum",
        "paid": "bezahlt",
    },
}

DEFAULT_BASE_URL = "https://my.living-apps.de/rest"
DEFAULT_TIMEOUT = 30.0
DEFAULT_TIMEZONE = "Europe/Berlin"
DEFAULT_LOG_LEVEL = "INFO"

# st.secrets keys
SECRET_BASE_URL = "RECORDS_API_BASE_URL"
SECRET_APP_IDS = "RECORDS_APP_IDS"
SECRET_COOKIES = "RECORDS_API_COOKIES"
SECRET_TIMEOUT = "RECORDS_API_TIMEOUT"
SECRET_TIMEZONE = "APP_TIMEZONE"
SECRET_LOG_LEVEL = "LOG_LEVEL"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Settings:
    base_url: str
    app_ids: dict
    cookies: dict = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    timezone: str = DEFAULT_TIMEZONE
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings(secrets: Optional[Mapping]) -> Settings:
    """
    Build Settings from st.secrets (or any mapping with the same keys).
    RECORDS_APP_IDS must name an app id for every entity kind.
    """
    if secrets is None:
        secrets = {}

    app_ids = dict(secrets.get(SECRET_APP_IDS) or {})
    missing = [k for k in ENTITY_KINDS if not str(app_ids.get(k, "")).strip()]
    if missing:
        raise ConfigError(f"{SECRET_APP_IDS} is missing app ids for: {', '.join(missing)}")

    try:
        timeout = float(secrets.get(SECRET_TIMEOUT, DEFAULT_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigError(f"{SECRET_TIMEOUT} must be a number of seconds")

    return Settings(
        base_url=str(secrets.get(SECRET_BASE_URL) or DEFAULT_BASE_URL).rstrip("/"),
        app_ids={k: str(app_ids[k]).strip() for k in ENTITY_KINDS},
        cookies=dict(secrets.get(SECRET_COOKIES) or {}),
        timeout=timeout,
        timezone=str(secrets.get(SECRET_TIMEZONE) or DEFAULT_TIMEZONE),
        log_level=str(secrets.get(SECRET_LOG_LEVEL) or DEFAULT_LOG_LEVEL),
    )
