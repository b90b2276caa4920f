from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from courseadmin.config import ENTITY_KINDS
from courseadmin.models.adapters import ADAPTERS
from courseadmin.services.records_client import RecordClient, RequestError
from courseadmin.utils.log import get_logger

logger = get_logger(__name__)


def load_records(client: RecordClient, kind: str) -> list:
    from_wire, _ = ADAPTERS[kind]
    return [from_wire(rec) for rec in client.list_records(kind)]


def create_record(client: RecordClient, kind: str, record) -> Optional[str]:
    _, to_wire = ADAPTERS[kind]
    return client.create_record(kind, to_wire(record, client.record_url))


def update_record(client: RecordClient, kind: str, record_id: str, record) -> None:
    _, to_wire = ADAPTERS[kind]
    client.update_record(kind, record_id, to_wire(record, client.record_url))


def delete_record(client: RecordClient, kind: str, record_id: str) -> None:
    client.delete_record(kind, record_id)


def load_all(client: RecordClient) -> tuple[dict, list[str]]:
    """
    Fetch every collection concurrently and wait for all of them.
    A failed fetch does not cancel the others; its collection comes back empty.
    Returns ({kind: records}, failed_kinds).
    """
    collections = {kind: [] for kind in ENTITY_KINDS}
    failed = []

    with ThreadPoolExecutor(max_workers=len(ENTITY_KINDS)) as executor:
        futures = {kind: executor.submit(load_records, client, kind) for kind in ENTITY_KINDS}
        for kind, fut in futures.items():
            try:
                collections[kind] = fut.result()
            except RequestError as exc:
                logger.warning("Loading %s failed: %s", kind, exc)
                failed.append(kind)

    logger.info(
        "Loaded %s",
        ", ".join(f"{k}={len(v)}" for k, v in collections.items()),
    )
    return collections, failed
