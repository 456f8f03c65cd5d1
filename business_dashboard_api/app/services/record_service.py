"""
Shared mechanics for the entity services.

Every entity service is a thin accessor over the record store: it
names a table, enumerates the store fields it reads, translates domain
field names to store field names and back, and checks every reply.

Store calls are blocking (the HTTP store uses ``requests``), so they
are executed in a worker thread.  This keeps the event loop free and
lets independent reads, such as the four dashboard fetches, overlap.

Failure handling follows a single rule: nothing is retried and nothing
is swallowed.  An unsuccessful reply raises ``RecordStoreError`` with
the store's message; for batch writes the first failing record's
message is raised as ``PartialWriteError``.  When an update or delete
of a single record fails, the record is looked up once more; if it does
not exist the failure is reported as ``RecordNotFoundError`` instead.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, ValidationError

from business_dashboard_api.app.core.errors import (
    PartialWriteError,
    RecordNotFoundError,
    RecordStoreError,
)
from business_dashboard_api.app.core.record_store import (
    FetchParams,
    OrderBy,
    StoreResponse,
    get_record_store,
)


logger = logging.getLogger(__name__)


def lookup_id(value: Any) -> Optional[int]:
    """Normalise a lookup field to a plain integer id.

    The store returns lookup fields either as a bare id or as an object
    such as ``{"Id": 3, "Name": "Acme"}``.
    """
    if isinstance(value, dict):
        value = value.get("Id")
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _to_store_value(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


class RecordService:
    """Base class for the per‑entity accessors.

    Subclasses set the class attributes below and expose the public,
    entity‑specific operations.
    """

    table: ClassVar[str] = ""
    entity: ClassVar[str] = "record"
    # Store field names requested on every read.
    fields: ClassVar[Tuple[str, ...]] = ()
    order_by: ClassVar[Tuple[OrderBy, ...]] = ()
    # Domain field name -> store field name.
    field_map: ClassVar[Dict[str, str]] = {}
    # Domain fields holding a reference to another record.
    lookup_fields: ClassVar[Tuple[str, ...]] = ()
    read_model: ClassVar[Type[BaseModel]]

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------
    @classmethod
    def to_store(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Translate domain values to store fields, dropping unknown names."""
        return {
            cls.field_map[name]: _to_store_value(value)
            for name, value in values.items()
            if name in cls.field_map
        }

    @classmethod
    def from_store(cls, record: Dict[str, Any]) -> Dict[str, Any]:
        """Translate a store record to domain values (without the id)."""
        values = {name: record.get(store_name) for name, store_name in cls.field_map.items()}
        for name in cls.lookup_fields:
            values[name] = lookup_id(values.get(name))
        return values

    @classmethod
    def to_read(cls, record: Dict[str, Any]) -> BaseModel:
        return cls.read_model(id=record["Id"], **cls.from_store(record))

    # ------------------------------------------------------------------
    # Response checks
    # ------------------------------------------------------------------
    @classmethod
    def _check(cls, raw: Any, action: str) -> StoreResponse:
        """Parse a store reply and raise if it reports a failure."""
        try:
            response = StoreResponse.model_validate(raw)
        except ValidationError as exc:
            logger.error("Malformed record store reply while trying to %s %s: %s", action, cls.entity, exc)
            raise RecordStoreError("Invalid response from record store") from exc
        if not response.success:
            message = response.message or f"Failed to {action} {cls.entity}"
            logger.error("Error trying to %s %s: %s", action, cls.entity, message)
            raise RecordStoreError(message)
        return response

    @classmethod
    def _first_result(cls, response: StoreResponse, action: str) -> Dict[str, Any]:
        """Return the data of the first record of a write batch.

        Every result is checked; the first failure wins.
        """
        results = response.results or []
        failed = [result for result in results if not result.success]
        if failed:
            logger.error(
                "Failed to %s %s: %s",
                action,
                cls.entity,
                [result.model_dump() for result in failed],
            )
            message = failed[0].message or f"Failed to {action} {cls.entity}"
            raise PartialWriteError(message, failed_results=failed)
        if not results or not isinstance(results[0].data, dict) or "Id" not in results[0].data:
            logger.error("Record store returned no record after trying to %s %s", action, cls.entity)
            raise RecordStoreError(f"Failed to {action} {cls.entity}")
        return results[0].data

    # ------------------------------------------------------------------
    # Store calls
    # ------------------------------------------------------------------
    @staticmethod
    async def _call(func: Callable[..., Any], *args: Any) -> Any:
        return await asyncio.to_thread(func, *args)

    @classmethod
    async def _fetch_all(cls) -> List[Dict[str, Any]]:
        store = get_record_store()
        raw = await cls._call(
            store.fetch_records, cls.table, FetchParams(fields=cls.fields, order_by=cls.order_by)
        )
        response = cls._check(raw, "fetch")
        return list(response.data or [])

    @classmethod
    async def _fetch_one(cls, record_id: int) -> Dict[str, Any]:
        store = get_record_store()
        raw = await cls._call(
            store.get_record_by_id, cls.table, record_id, FetchParams(fields=cls.fields)
        )
        response = cls._check(raw, "fetch")
        if not response.data:
            raise RecordNotFoundError(f"{cls.entity.capitalize()} {record_id} not found")
        return response.data

    @classmethod
    async def _create(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        store = get_record_store()
        raw = await cls._call(store.create_record, cls.table, [cls.to_store(values)])
        return cls._first_result(cls._check(raw, "create"), "create")

    @classmethod
    async def _update(cls, record_id: int, values: Dict[str, Any]) -> Dict[str, Any]:
        store = get_record_store()
        record = {"Id": record_id, **cls.to_store(values)}
        raw = await cls._call(store.update_record, cls.table, [record])
        try:
            return cls._first_result(cls._check(raw, "update"), "update")
        except RecordStoreError as exc:
            await cls._raise_if_missing(record_id, exc)
            raise

    @classmethod
    async def _delete(cls, record_id: int) -> None:
        store = get_record_store()
        raw = await cls._call(store.delete_record, cls.table, [record_id])
        try:
            cls._check(raw, "delete")
        except RecordStoreError as exc:
            await cls._raise_if_missing(record_id, exc)
            raise

    @classmethod
    async def _raise_if_missing(cls, record_id: int, failure: RecordStoreError) -> None:
        """Raise ``RecordNotFoundError`` if ``record_id`` does not exist.

        Any other outcome of the lookup returns quietly so that the
        caller re-raises ``failure``.
        """
        try:
            await cls._fetch_one(record_id)
        except RecordNotFoundError as exc:
            raise exc from failure
        except RecordStoreError:
            logger.debug("Could not confirm whether %s %s exists", cls.entity, record_id)
