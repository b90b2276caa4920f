"""
Page controller: turns user actions into record-store calls and state
transitions. Every handler returns the new AppState plus a Notice for the
page to show; a failed call leaves the state unchanged.
"""
from dataclasses import dataclass

from courseadmin.config import ENTITY_LABELS
from courseadmin.models.records import validate_record, with_record_id
from courseadmin.repositories import records_repo
from courseadmin.services.records_client import RecordClient, RequestError
from courseadmin.ui.state import (
    AppState,
    EditMode,
    FormMode,
    append_record,
    loaded,
    remove_record,
    replace_collection,
)
from courseadmin.utils.log import get_logger

logger = get_logger(__name__)

MSG_LOAD_ERROR = "Error loading data"
MSG_CREATE_ERROR = "Error creating"
MSG_UPDATE_ERROR = "Error updating"
MSG_DELETE_ERROR = "Error deleting"


@dataclass(frozen=True)
class Notice:
    level: str      # "success" | "error"
    message: str


def _ok(kind: str, verb: str) -> Notice:
    return Notice("success", f"{ENTITY_LABELS[kind]} {verb}")


def load_state(client: RecordClient, state: AppState = None) -> tuple[AppState, list[Notice]]:
    collections, failed = records_repo.load_all(client)
    new_state = loaded(state or AppState(), collections)
    if failed:
        return new_state, [Notice("error", MSG_LOAD_ERROR)]
    return new_state, []


def create_record(state: AppState, client: RecordClient, kind: str, record) -> tuple[AppState, Notice]:
    try:
        new_id = records_repo.create_record(client, kind, record)
        if new_id:
            state = append_record(state, kind, with_record_id(record, new_id))
            logger.info("Created %s %s", kind, new_id)
        else:
            # TODO: drop this reload once the record store reliably returns ids on POST
            logger.warning("Create %s returned no record id; reloading %s", kind, kind)
            state = replace_collection(state, kind, records_repo.load_records(client, kind))
            logger.info("Created %s; reloaded %d %s", kind, len(state.records(kind)), kind)
    except RequestError as exc:
        logger.error("Create %s failed: %s", kind, exc)
        return state, Notice("error", MSG_CREATE_ERROR)

    return state, _ok(kind, "created")


def update_record(state: AppState, client: RecordClient, kind: str, record_id: str, record) -> tuple[AppState, Notice]:
    try:
        records_repo.update_record(client, kind, record_id, record)
        fresh = records_repo.load_records(client, kind)
    except RequestError as exc:
        logger.error("Update %s %s failed: %s", kind, record_id, exc)
        return state, Notice("error", MSG_UPDATE_ERROR)

    logger.info("Updated %s %s", kind, record_id)
    return replace_collection(state, kind, fresh), _ok(kind, "updated")


def delete_record(state: AppState, client: RecordClient, kind: str, record_id: str) -> tuple[AppState, Notice]:
    try:
        records_repo.delete_record(client, kind, record_id)
    except RequestError as exc:
        logger.error("Delete %s %s failed: %s", kind, record_id, exc)
        return state, Notice("error", MSG_DELETE_ERROR)

    logger.info("Deleted %s %s", kind, record_id)
    return remove_record(state, kind, record_id), _ok(kind, "deleted")


def save_form(state: AppState, client: RecordClient, kind: str, mode: FormMode, record):
    """
    Validate then create or update depending on the form mode.
    Returns (state, notice, problems); with problems nothing is sent.
    """
    problems = validate_record(record, kind)
    if problems:
        return state, None, problems

    if isinstance(mode, EditMode):
        state, notice = update_record(state, client, kind, mode.record.record_id, record)
    else:
        state, notice = create_record(state, client, kind, record)
    return state, notice, []
