# courseadmin/ui/views.py
from datetime import date
from typing import Callable, Optional

import streamlit as st

from courseadmin.config import (
    COURSES,
    ENROLLMENTS,
    ENTITY_LABELS,
    INSTRUCTORS,
    PARTICIPANTS,
    ROOMS,
    TAB_TITLES,
)
from courseadmin.models.records import Course, Enrollment, Instructor, Participant, Room, new_record
from courseadmin.services.records_client import RecordClient
from courseadmin.ui import controller, tables
from courseadmin.ui.state import (
    AppState,
    EditMode,
    close_dialog,
    confirm_delete,
    dismiss_delete,
    get_app_state,
    get_view,
    open_create,
    open_edit,
    push_notice,
    request_delete,
    set_app_state,
    set_view,
)

MISSING = tables.MISSING


def _iso_or_none(s: str) -> Optional[date]:
    try:
        return date.fromisoformat(s) if s else None
    except ValueError:
        return None


def _iso(d: Optional[date]) -> str:
    return d.isoformat() if d else ""


def _ref_select(label: str, current: Optional[str], records, describe, key: str) -> Optional[str]:
    options = [None] + [r.record_id for r in records]
    names = {r.record_id: describe(r) for r in records}
    index = options.index(current) if current in options else 0
    return st.selectbox(
        label,
        options,
        index=index,
        format_func=lambda rid: "Select..." if rid is None else names.get(rid, MISSING),
        key=key,
    )


# -----------------------------
# Per-entity form widgets
# -----------------------------
def _course_form(form: dict, state: AppState, k: str) -> Course:
    title = st.text_input("Title *", value=form["title"], placeholder="e.g. Python basics", key=f"{k}_title")
    description = st.text_area("Description", value=form["description"], height=90, key=f"{k}_desc")

    c1, c2 = st.columns(2)
    with c1:
        start = st.date_input("Start date *", value=_iso_or_none(form["start_date"]), key=f"{k}_start")
    with c2:
        end = st.date_input("End date *", value=_iso_or_none(form["end_date"]), key=f"{k}_end")

    c3, c4 = st.columns(2)
    with c3:
        max_participants = st.number_input(
            "Max. participants", min_value=0, step=1, value=int(form["max_participants"]), key=f"{k}_max"
        )
    with c4:
        price = st.number_input(
            "Price (EUR)", min_value=0.0, step=0.01, format="%.2f", value=float(form["price"]), key=f"{k}_price"
        )

    c5, c6 = st.columns(2)
    with c5:
        instructor_id = _ref_select("Instructor", form["instructor_id"], state.instructors, lambda i: i.name, f"{k}_instr")
    with c6:
        room_id = _ref_select("Room", form["room_id"], state.rooms, tables.room_label, f"{k}_room")

    return Course(
        title=title.strip(),
        description=description.strip(),
        start_date=_iso(start),
        end_date=_iso(end),
        max_participants=int(max_participants),
        price=float(price),
        instructor_id=instructor_id,
        room_id=room_id,
    )


def _instructor_form(form: dict, state: AppState, k: str) -> Instructor:
    return Instructor(
        name=st.text_input("Name *", value=form["name"], key=f"{k}_name").strip(),
        email=st.text_input("Email", value=form["email"], key=f"{k}_email").strip(),
        phone=st.text_input("Phone", value=form["phone"], key=f"{k}_phone").strip(),
        subject=st.text_input("Subject area", value=form["subject"], key=f"{k}_subject").strip(),
    )


def _participant_form(form: dict, state: AppState, k: str) -> Participant:
    name = st.text_input("Name *", value=form["name"], key=f"{k}_name")
    email = st.text_input("Email", value=form["email"], key=f"{k}_email")
    phone = st.text_input("Phone", value=form["phone"], key=f"{k}_phone")
    birth_date = st.date_input(
        "Birth date (optional)",
        value=_iso_or_none(form["birth_date"]),
        min_value=date(1900, 1, 1),
        key=f"{k}_birth",
    )
    return Participant(name=name.strip(), email=email.strip(), phone=phone.strip(), birth_date=_iso(birth_date))


def _room_form(form: dict, state: AppState, k: str) -> Room:
    name = st.text_input("Room name *", value=form["name"], key=f"{k}_name")
    building = st.text_input("Building", value=form["building"], key=f"{k}_building")
    capacity = st.number_input("Capacity", min_value=0, step=1, value=int(form["capacity"]), key=f"{k}_cap")
    return Room(name=name.strip(), building=building.strip(), capacity=int(capacity))


def _enrollment_form(form: dict, state: AppState, k: str) -> Enrollment:
    participant_id = _ref_select("Participant *", form["participant_id"], state.participants, lambda p: p.name, f"{k}_part")
    course_id = _ref_select("Course *", form["course_id"], state.courses, lambda c: c.title, f"{k}_course")
    enrolled_on = st.date_input("Enrollment date", value=_iso_or_none(form["enrolled_on"]), key=f"{k}_date")
    paid = st.toggle("Paid", value=bool(form["paid"]), key=f"{k}_paid")
    return Enrollment(participant_id=participant_id, course_id=course_id, enrolled_on=_iso(enrolled_on), paid=paid)


# -----------------------------
# Dialog actions
# -----------------------------
def submit_form(kind: str, mode, record, client: RecordClient) -> list[str]:
    """
    Save a submitted form. Validation problems are shown inline and returned
    without touching the record store; a save stores the new state, queues
    its notice and reruns the page, which closes the dialog.
    """
    state, notice, problems = controller.save_form(get_app_state(), client, kind, mode, record)
    if problems:
        for p in problems:
            st.error(p)
        return problems
    set_app_state(state)
    push_notice(notice)
    st.rerun()


def cancel_delete(kind: str) -> None:
    set_view(kind, dismiss_delete(get_view(kind)))
    st.rerun()


def submit_delete(kind: str, record_id: str, client: RecordClient) -> None:
    view, rid = confirm_delete(get_view(kind))
    set_view(kind, view)
    state, notice = controller.delete_record(get_app_state(), client, kind, rid or record_id)
    set_app_state(state)
    push_notice(notice)
    st.rerun()


# -----------------------------
# Dialogs
# -----------------------------
def _open_form_dialog(kind: str, mode, form: dict, client: RecordClient, form_fn: Callable) -> None:
    label = ENTITY_LABELS[kind]
    editing = isinstance(mode, EditMode)
    k = f"{kind}_{mode.record.record_id if editing else 'new'}"

    @st.dialog(f"Edit {label.lower()}" if editing else f"New {label.lower()}")
    def _dialog():
        with st.form(f"form_{k}"):
            record = form_fn(form, get_app_state(), k)
            submitted = st.form_submit_button("Save" if editing else "Create", type="primary")

        if st.button("Cancel", key=f"cancel_{k}"):
            st.rerun()

        if submitted:
            submit_form(kind, mode, record, client)

    _dialog()


def _open_delete_dialog(kind: str, record_id: str, name: str, client: RecordClient) -> None:
    label = ENTITY_LABELS[kind]

    @st.dialog(f"Delete {label.lower()}?")
    def _dialog():
        st.write(f"**{name}** will be deleted permanently. Are you sure?")
        c1, c2 = st.columns(2)
        with c1:
            cancel = st.button("Cancel", key=f"del_cancel_{kind}")
        with c2:
            confirm = st.button("Delete", type="primary", key=f"del_confirm_{kind}")

        if cancel:
            cancel_delete(kind)
        if confirm:
            submit_delete(kind, record_id, client)

    _dialog()


# -----------------------------
# Shared list view
# -----------------------------
def _render_list_view(
    kind: str,
    state: AppState,
    client: RecordClient,
    today: date,
    df,
    describe: Callable,
    form_fn: Callable,
) -> None:
    label = ENTITY_LABELS[kind]
    records = state.records(kind)
    ask_delete = False

    h1, h2 = st.columns([4, 1])
    with h1:
        st.subheader(TAB_TITLES[kind])
    with h2:
        if st.button(f"New {label.lower()}", key=f"new_{kind}", type="primary"):
            set_view(kind, open_create(get_view(kind), new_record(kind, today)))

    if not records:
        st.info(f"No {TAB_TITLES[kind].lower()} yet.")
    else:
        st.dataframe(df, width="stretch", hide_index=True)

        by_id = {r.record_id: r for r in records}
        c1, c2, c3 = st.columns([4, 1, 1])
        with c1:
            selected = st.selectbox(
                label,
                list(by_id),
                format_func=lambda rid: describe(by_id[rid]),
                key=f"pick_{kind}",
                label_visibility="collapsed",
            )
        with c2:
            if st.button("Edit", key=f"edit_{kind}") and selected in by_id:
                set_view(kind, open_edit(get_view(kind), by_id[selected]))
        with c3:
            if st.button("Delete", key=f"delete_{kind}") and selected in by_id:
                set_view(kind, request_delete(get_view(kind), selected))
                ask_delete = True

    view = get_view(kind)
    if view.dialog_open:
        # The dialog keeps itself open across its own reruns
        set_view(kind, close_dialog(view))
        _open_form_dialog(kind, view.mode, view.form, client, form_fn)
    elif ask_delete:
        # Opened only on the click; pending_delete is settled by Cancel or Delete
        target = next((r for r in records if r.record_id == view.pending_delete), None)
        name = describe(target) if target else view.pending_delete
        _open_delete_dialog(kind, view.pending_delete, name, client)


def render_courses(state: AppState, client: RecordClient, today: date) -> None:
    df = tables.courses_df(state.courses, state.instructors, state.rooms, today)
    _render_list_view(COURSES, state, client, today, df, lambda c: c.title or MISSING, _course_form)


def render_instructors(state: AppState, client: RecordClient, today: date) -> None:
    df = tables.instructors_df(state.instructors)
    _render_list_view(INSTRUCTORS, state, client, today, df, lambda i: i.name or MISSING, _instructor_form)


def render_participants(state: AppState, client: RecordClient, today: date) -> None:
    df = tables.participants_df(state.participants)
    _render_list_view(PARTICIPANTS, state, client, today, df, lambda p: p.name or MISSING, _participant_form)


def render_rooms(state: AppState, client: RecordClient, today: date) -> None:
    df = tables.rooms_df(state.rooms)
    _render_list_view(ROOMS, state, client, today, df, tables.room_label, _room_form)


def render_enrollments(state: AppState, client: RecordClient, today: date) -> None:
    participants = {p.record_id: p.name for p in state.participants}
    courses = {c.record_id: c.title for c in state.courses}

    def describe(e):
        return f"{participants.get(e.participant_id, MISSING)} – {courses.get(e.course_id, MISSING)}"

    df = tables.enrollments_df(state.enrollments, state.participants, state.courses)
    _render_list_view(ENROLLMENTS, state, client, today, df, describe, _enrollment_form)


RENDERERS = {
    COURSES: render_courses,
    INSTRUCTORS: render_instructors,
    PARTICIPANTS: render_participants,
    ROOMS: render_rooms,
    ENROLLMENTS: render_enrollments,
}
