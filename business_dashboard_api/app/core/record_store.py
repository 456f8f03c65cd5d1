"""
Boundary to the hosted record store.

The record store is an external backend‑as‑a‑service offering generic
CRUD over named tables (``client``, ``project``, ``task``,
``app_invoice``).  This module defines the interface the services
depend on, the typed request parameters sent with each call and the
response models used to read the replies.

Two implementations are provided:

* :class:`HttpRecordStore` talks to the hosted service over HTTP using
  the ``requests`` library.  Transport failures are converted into a
  ``{"success": False, "message": ...}`` response so that callers see a
  single failure shape.  No retries are attempted.
* :class:`InMemoryRecordStore` keeps tables in process memory.  It is
  used for local development when no store URL is configured and by
  the test‑suite.

Every method returns the raw response dictionary of the store:

* ``fetch_records``     -> ``{success, message?, data: [record]}``
* ``get_record_by_id``  -> ``{success, message?, data: record | None}``
* ``create_record``     -> ``{success, message?, results: [{success, message?, data}]}``
* ``update_record``     -> same shape as ``create_record``
* ``delete_record``     -> ``{success, message?}``
"""

from __future__ import annotations

import copy
import itertools
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import requests
from pydantic import BaseModel

from .config import settings


logger = logging.getLogger(__name__)

ASC = "ASC"
DESC = "DESC"


@dataclass(frozen=True)
class OrderBy:
    """Sort instruction for ``fetch_records``."""

    field: str
    direction: str = ASC

    def to_payload(self) -> Dict[str, str]:
        return {"fieldName": self.field, "sorttype": self.direction}


@dataclass(frozen=True)
class FetchParams:
    """Fields to return and ordering to apply for a read.

    ``to_payload`` produces the parameter object expected by the store,
    e.g. ``{"fields": [{"field": {"Name": "title"}}], "orderBy": [...]}``.
    """

    fields: Sequence[str]
    order_by: Sequence[OrderBy] = ()

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "fields": [{"field": {"Name": name}} for name in self.fields],
        }
        if self.order_by:
            payload["orderBy"] = [order.to_payload() for order in self.order_by]
        return payload


class StoreResult(BaseModel):
    """Outcome for a single record of a create/update batch."""

    success: bool
    message: Optional[str] = None
    data: Any = None


class StoreResponse(BaseModel):
    """Envelope returned by every record store call."""

    success: bool
    message: Optional[str] = None
    data: Any = None
    results: Optional[List[StoreResult]] = None


class RecordStore(ABC):
    """Generic CRUD over named tables."""

    @abstractmethod
    def fetch_records(self, table: str, params: FetchParams) -> Dict[str, Any]:
        ...

    @abstractmethod
    def get_record_by_id(self, table: str, record_id: int, params: FetchParams) -> Dict[str, Any]:
        ...

    @abstractmethod
    def create_record(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def update_record(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        ...

    @abstractmethod
    def delete_record(self, table: str, record_ids: List[int]) -> Dict[str, Any]:
        ...


class HttpRecordStore(RecordStore):
    """Record store client speaking JSON over HTTP.

    Each SDK operation maps to one request below ``base_url``:

    ==================  ======  ================================
    operation           method  path
    ==================  ======  ================================
    fetch_records       POST    ``/tables/{table}/fetch``
    get_record_by_id    POST    ``/tables/{table}/records/{id}``
    create_record       POST    ``/tables/{table}/records``
    update_record       PUT     ``/tables/{table}/records``
    delete_record       DELETE  ``/tables/{table}/records``
    ==================  ======  ================================

    The project id and public key are sent as ``X-Project-Id`` and
    ``X-Public-Key`` headers.
    """

    def __init__(
        self,
        *,
        base_url: str,
        project_id: str = "",
        public_key: str = "",
        timeout: float = 15,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.project_id = project_id
        self.public_key = public_key
        self.timeout = timeout
        self.session = session or requests.Session()

    # ------------------------------------------------------------------
    # Low level HTTP helper
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, json_body: Any) -> Dict[str, Any]:
        """Perform an HTTP request and return the decoded response body.

        HTTP and transport errors are reported as an unsuccessful
        response carrying a readable message instead of raising.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.project_id:
            headers["X-Project-Id"] = self.project_id
        if self.public_key:
            headers["X-Public-Key"] = self.public_key
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                except ValueError:
                    message = exc.response.text
                else:
                    if isinstance(err_json, dict):
                        message = err_json.get("message") or err_json.get("detail") or str(err_json)
                    else:
                        message = str(err_json)
            if not message:
                message = str(exc)
            logger.error("Record store request failed (%s): %s", status, message)
            return {"success": False, "message": message}
        except requests.RequestException as exc:
            logger.error("Record store request failed: %s", exc)
            return {"success": False, "message": str(exc)}

        try:
            body = response.json()
        except ValueError:
            logger.error("Record store returned a non‑JSON body for %s %s", method, url)
            return {"success": False, "message": "Invalid response from record store"}
        if not isinstance(body, dict):
            return {"success": False, "message": "Invalid response from record store"}
        return body

    # ------------------------------------------------------------------
    # SDK operations
    # ------------------------------------------------------------------
    def fetch_records(self, table: str, params: FetchParams) -> Dict[str, Any]:
        return self._request("POST", f"/tables/{table}/fetch", params.to_payload())

    def get_record_by_id(self, table: str, record_id: int, params: FetchParams) -> Dict[str, Any]:
        return self._request("POST", f"/tables/{table}/records/{record_id}", params.to_payload())

    def create_record(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._request("POST", f"/tables/{table}/records", {"records": records})

    def update_record(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._request("PUT", f"/tables/{table}/records", {"records": records})

    def delete_record(self, table: str, record_ids: List[int]) -> Dict[str, Any]:
        return self._request("DELETE", f"/tables/{table}/records", {"RecordIds": record_ids})


class InMemoryRecordStore(RecordStore):
    """Thread‑safe record store kept in process memory.

    Identifiers are assigned from a single counter shared by all
    tables.  Created records receive a ``CreatedOn`` timestamp the same
    way the hosted store stamps them.
    """

    def __init__(self) -> None:
        self._tables: Dict[str, Dict[int, Dict[str, Any]]] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _table(self, table: str) -> Dict[int, Dict[str, Any]]:
        return self._tables.setdefault(table, {})

    @staticmethod
    def _project(record: Dict[str, Any], fields: Sequence[str]) -> Dict[str, Any]:
        projected = {"Id": record["Id"]}
        for name in fields:
            projected[name] = copy.deepcopy(record.get(name))
        return projected

    @staticmethod
    def _sort(rows: List[Dict[str, Any]], order_by: Sequence[OrderBy]) -> List[Dict[str, Any]]:
        # Apply keys from last to first; the sort is stable.  Records
        # without a value always go last.
        for order in reversed(order_by):
            present = [row for row in rows if row.get(order.field) is not None]
            missing = [row for row in rows if row.get(order.field) is None]
            present.sort(key=lambda row: row[order.field], reverse=order.direction == DESC)
            rows = present + missing
        return rows

    def fetch_records(self, table: str, params: FetchParams) -> Dict[str, Any]:
        with self._lock:
            rows = [self._project(rec, params.fields) for rec in self._table(table).values()]
        return {"success": True, "data": self._sort(rows, params.order_by)}

    def get_record_by_id(self, table: str, record_id: int, params: FetchParams) -> Dict[str, Any]:
        with self._lock:
            record = self._table(table).get(record_id)
            data = self._project(record, params.fields) if record is not None else None
        return {"success": True, "data": data}

    def create_record(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        results = []
        with self._lock:
            rows = self._table(table)
            for fields in records:
                record_id = next(self._ids)
                record = copy.deepcopy(fields)
                record["Id"] = record_id
                record.setdefault("CreatedOn", datetime.now(timezone.utc).isoformat())
                rows[record_id] = record
                results.append({"success": True, "data": copy.deepcopy(record)})
        return {"success": True, "results": results}

    def update_record(self, table: str, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        results = []
        with self._lock:
            rows = self._table(table)
            for fields in records:
                record_id = fields.get("Id")
                if record_id not in rows:
                    results.append(
                        {"success": False, "message": f"Record with Id {record_id} does not exist"}
                    )
                    continue
                changes = {k: copy.deepcopy(v) for k, v in fields.items() if k != "Id"}
                rows[record_id].update(changes)
                results.append({"success": True, "data": copy.deepcopy(rows[record_id])})
        return {"success": True, "results": results}

    def delete_record(self, table: str, record_ids: List[int]) -> Dict[str, Any]:
        with self._lock:
            rows = self._table(table)
            missing = [record_id for record_id in record_ids if record_id not in rows]
            if missing:
                return {"success": False, "message": f"Record with Id {missing[0]} does not exist"}
            for record_id in record_ids:
                del rows[record_id]
        return {"success": True}


_store: Optional[RecordStore] = None
_store_lock = threading.Lock()


def _build_default_store() -> RecordStore:
    if settings.record_store_url:
        return HttpRecordStore(
            base_url=settings.record_store_url,
            project_id=settings.record_store_project_id,
            public_key=settings.record_store_public_key,
            timeout=settings.record_store_timeout,
        )
    logger.warning("RECORD_STORE_URL is not set; records are kept in memory only")
    return InMemoryRecordStore()


def get_record_store() -> RecordStore:
    """Return the process‑wide record store, creating it on first use."""
    global _store
    with _store_lock:
        if _store is None:
            _store = _build_default_store()
        return _store


def set_record_store(store: Optional[RecordStore]) -> None:
    """Replace the process‑wide record store.

    Passing ``None`` makes the next :func:`get_record_store` call build
    a new store from ``settings``.
    """
    global _store
    with _store_lock:
        _store = store
