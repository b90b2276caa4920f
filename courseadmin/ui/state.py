# courseadmin/ui/state.py
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Union

import streamlit as st

from courseadmin.config import ENTITY_KINDS
from courseadmin.models.records import record_fields

# Centralize keys to avoid typos across files
KEY_APP_STATE = "app_state"
KEY_NOTICES = "_notices"


def view_key(kind: str) -> str:
    return f"view_{kind}"


# -----------------------------
# Application state
# -----------------------------
@dataclass(frozen=True)
class AppState:
    courses: tuple = ()
    instructors: tuple = ()
    participants: tuple = ()
    rooms: tuple = ()
    enrollments: tuple = ()
    loading: bool = True

    def records(self, kind: str) -> tuple:
        return getattr(self, kind)


def loaded(state: AppState, collections: dict) -> AppState:
    """Replace every collection wholesale and clear the loading flag."""
    changes = {kind: tuple(collections.get(kind, ())) for kind in ENTITY_KINDS}
    return replace(state, loading=False, **changes)


def mark_reload(state: AppState) -> AppState:
    return replace(state, loading=True)


def replace_collection(state: AppState, kind: str, records) -> AppState:
    return replace(state, **{kind: tuple(records)})


def append_record(state: AppState, kind: str, record) -> AppState:
    return replace(state, **{kind: state.records(kind) + (record,)})


def remove_record(state: AppState, kind: str, record_id: str) -> AppState:
    kept = tuple(r for r in state.records(kind) if r.record_id != record_id)
    return replace(state, **{kind: kept})


# -----------------------------
# Per-view dialog state
# -----------------------------
@dataclass(frozen=True)
class CreateMode:
    pass


@dataclass(frozen=True)
class EditMode:
    record: Any


FormMode = Union[CreateMode, EditMode]


@dataclass(frozen=True)
class ViewState:
    dialog_open: bool = False
    mode: FormMode = field(default_factory=CreateMode)
    pending_delete: Optional[str] = None
    form: Optional[dict] = None


def open_create(view: ViewState, defaults) -> ViewState:
    return replace(view, dialog_open=True, mode=CreateMode(), form=record_fields(defaults))


def open_edit(view: ViewState, record) -> ViewState:
    return replace(view, dialog_open=True, mode=EditMode(record), form=record_fields(record))


def close_dialog(view: ViewState) -> ViewState:
    return replace(view, dialog_open=False)


def request_delete(view: ViewState, record_id: str) -> ViewState:
    return replace(view, pending_delete=record_id)


def dismiss_delete(view: ViewState) -> ViewState:
    return replace(view, pending_delete=None)


def confirm_delete(view: ViewState) -> tuple[ViewState, Optional[str]]:
    return replace(view, pending_delete=None), view.pending_delete


# -----------------------------
# Session glue
# -----------------------------
def init_state_if_missing() -> None:
    """Call at the top of the page before rendering widgets."""
    if KEY_APP_STATE not in st.session_state:
        st.session_state[KEY_APP_STATE] = AppState()
    for kind in ENTITY_KINDS:
        if view_key(kind) not in st.session_state:
            st.session_state[view_key(kind)] = ViewState()
    if KEY_NOTICES not in st.session_state:
        st.session_state[KEY_NOTICES] = []


def get_app_state() -> AppState:
    return st.session_state[KEY_APP_STATE]


def set_app_state(state: AppState) -> None:
    st.session_state[KEY_APP_STATE] = state


def get_view(kind: str) -> ViewState:
    return st.session_state[view_key(kind)]


def set_view(kind: str, view: ViewState) -> None:
    st.session_state[view_key(kind)] = view


def push_notice(notice) -> None:
    st.session_state.setdefault(KEY_NOTICES, []).append(notice)


def pop_notices() -> list:
    notices = st.session_state.get(KEY_NOTICES, [])
    st.session_state[KEY_NOTICES] = []
    return notices
