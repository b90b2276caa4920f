"""Page-level tests run through Streamlit's AppTest harness against the in-memory store."""
import pytest
import requests
from streamlit.testing.v1 import AppTest

from courseadmin.services.records_client import get_record_client
from fakes import APP_IDS, BASE_URL, FakeStoreSession

APP_FILE = "../streamlit_app.py"


@pytest.fixture
def page_store(monkeypatch):
    """Route every requests.Session call made by the page into a fake store."""
    store = FakeStoreSession()

    def request(self, method, url, **kwargs):
        return store.request(method, url, json=kwargs.get("json"), timeout=kwargs.get("timeout"))

    monkeypatch.setattr(requests.Session, "request", request)
    get_record_client.clear()
    yield store
    get_record_client.clear()


def page(secrets=None):
    at = AppTest.from_file(APP_FILE, default_timeout=10)
    for key, value in (secrets or {"RECORDS_API_BASE_URL": BASE_URL, "RECORDS_APP_IDS": dict(APP_IDS)}).items():
        at.secrets[key] = value
    return at


def metric_value(at, label):
    return next(m.value for m in at.metric if m.label == label)


def test_page_loads_every_collection_once_and_shows_counters(page_store):
    cid = page_store.seed("courses", {"titel": "Python", "startdatum": "2000-01-01", "enddatum": "2999-12-31", "preis": 100})
    page_store.seed("courses", {"titel": "Old", "startdatum": "2000-01-01", "enddatum": "2000-02-01"})
    pid = page_store.seed("participants", {"name": "Bob"})
    page_store.seed("enrollments", {
        "teilnehmer": f"{BASE_URL}/apps/{APP_IDS['participants']}/records/{pid}",
        "kurs": f"{BASE_URL}/apps/{APP_IDS['courses']}/records/{cid}",
        "bezahlt": True,
    })

    at = page().run()

    assert not at.exception
    assert page_store.methods() == ["GET"] * 5
    assert metric_value(at, "Active courses") == "1"
    assert metric_value(at, "Enrollments") == "1"
    assert metric_value(at, "Revenue") == "100,00 €"
    assert [t.label for t in at.tabs] == ["Courses", "Instructors", "Participants", "Rooms", "Enrollments"]


def test_page_rerun_does_not_reload(page_store):
    at = page().run()
    at.run()

    assert not at.exception
    assert page_store.methods().count("GET") == 5


def test_failed_collection_shows_one_error_toast(page_store):
    page_store.fail.add(("GET", "rooms"))
    page_store.fail.add(("GET", "courses"))

    at = page().run()

    assert not at.exception
    assert [t.value for t in at.toast] == ["Error loading data"]


def test_missing_app_ids_stop_the_page_with_an_error(page_store):
    at = page({"LOG_LEVEL": "INFO"}).run()

    assert at.error[0].value.startswith("Configuration error: RECORDS_APP_IDS is missing app ids")
    assert page_store.calls == []


def _invalid_course_save_script():
    import streamlit as st

    from courseadmin.models.records import Course
    from courseadmin.services.records_client import RecordClient
    from courseadmin.ui import views
    from courseadmin.ui.state import CreateMode, init_state_if_missing
    from fakes import APP_IDS, BASE_URL

    init_state_if_missing()
    store = st.session_state["store"]
    client = RecordClient(BASE_URL, APP_IDS, session=store)
    views.submit_form("courses", CreateMode(), Course(start_date="2024-02-01", end_date="2024-01-01"), client)


def test_invalid_save_shows_problems_and_makes_no_call():
    store = FakeStoreSession()
    at = AppTest.from_function(_invalid_course_save_script, default_timeout=10)
    at.session_state["store"] = store

    at.run()

    assert not at.exception
    assert [e.value for e in at.error] == ["Title is required.", "End date must be on/after start date."]
    assert store.calls == []


def _cancelled_delete_script():
    import streamlit as st

    from courseadmin.ui import views
    from courseadmin.ui.state import get_view, init_state_if_missing, request_delete, set_view

    init_state_if_missing()
    if not st.session_state.get("asked"):
        st.session_state["asked"] = True
        set_view("rooms", request_delete(get_view("rooms"), "r1"))
        views.cancel_delete("rooms")


def test_cancelled_delete_clears_pending_delete():
    at = AppTest.from_function(_cancelled_delete_script, default_timeout=10)

    at.run()

    assert not at.exception
    assert at.session_state["asked"] is True
    assert at.session_state["view_rooms"].pending_delete is None
