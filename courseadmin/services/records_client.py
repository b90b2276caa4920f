import re
from dataclasses import dataclass, field
from typing import Optional

import requests
import streamlit as st

from courseadmin.config import load_settings
from courseadmin.utils.log import get_logger

logger = get_logger(__name__)

# Record ids are 24 hex chars at the end of a reference URL
_RECORD_ID_RE = re.compile(r"([a-f0-9]{24})$", re.IGNORECASE)


class RequestError(Exception):
    """Any failed call against the record store (non-2xx or transport error)."""

    def __init__(self, status_code: Optional[int], body: str):
        super().__init__(f"HTTP {status_code}: {body}" if status_code else body)
        self.status_code = status_code
        self.body = body


@dataclass
class WireRecord:
    record_id: str
    fields: dict = field(default_factory=dict)


def extract_record_id(url: Optional[str]) -> Optional[str]:
    if not url or not isinstance(url, str):
        return None
    m = _RECORD_ID_RE.search(url.strip())
    return m.group(1) if m else None


class RecordClient:
    def __init__(
        self,
        base_url: str,
        app_ids: dict,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.app_ids = dict(app_ids)
        self.session = session or requests.Session()
        self.timeout = timeout

    def _records_path(self, kind: str) -> str:
        return f"/apps/{self.app_ids[kind]}/records"

    def record_url(self, kind: str, record_id: str) -> str:
        return f"{self.base_url}{self._records_path(kind)}/{record_id}"

    def _call(self, method: str, path: str, payload: Optional[dict] = None):
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(
                method,
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise RequestError(None, str(exc)) from exc

        if not resp.ok:
            logger.warning("%s %s -> %s", method, url, resp.status_code)
            raise RequestError(resp.status_code, resp.text)

        if method == "DELETE":
            return None
        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError as exc:
            raise RequestError(resp.status_code, resp.text) from exc
        if data is None:
            return {}
        # Every endpoint answers with a JSON object
        if not isinstance(data, dict):
            logger.warning("%s %s -> unexpected %s body", method, url, type(data).__name__)
            raise RequestError(resp.status_code, resp.text)
        return data

    def list_records(self, kind: str) -> list[WireRecord]:
        data = self._call("GET", self._records_path(kind))
        return [
            WireRecord(record_id=rid, fields=(rec.get("fields") if isinstance(rec, dict) else None) or {})
            for rid, rec in data.items()
        ]

    def get_record(self, kind: str, record_id: str) -> WireRecord:
        data = self._call("GET", f"{self._records_path(kind)}/{record_id}")
        return WireRecord(record_id=data.get("id") or record_id, fields=data.get("fields") or {})

    def create_record(self, kind: str, fields: dict) -> Optional[str]:
        """Returns the server-assigned id, or None when the response carries none."""
        data = self._call("POST", self._records_path(kind), {"fields": fields})
        return data.get("id") or data.get("record_id") or None

    def update_record(self, kind: str, record_id: str, fields: dict) -> None:
        self._call("PATCH", f"{self._records_path(kind)}/{record_id}", {"fields": fields})

    def delete_record(self, kind: str, record_id: str) -> None:
        self._call("DELETE", f"{self._records_path(kind)}/{record_id}")


# -----------------------------
# Record store client (safe to cache)
# -----------------------------
@st.cache_resource
def get_record_client() -> RecordClient:
    settings = load_settings(st.secrets)
    session = requests.Session()
    session.cookies.update(settings.cookies)
    return RecordClient(
        settings.base_url,
        settings.app_ids,
        session=session,
        timeout=settings.timeout,
    )
