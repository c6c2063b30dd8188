"""
Access to the external record store (an Airtable base).

Only two operations are needed: list every record of the primary table, and
fetch a single record of that same table by id. Linked records living in other
tables cannot be addressed; the resolver works around that by guessing.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from .models import RawRecord

LOGGER = logging.getLogger(__name__)

PAGE_SIZE = 100


class RecordStoreError(RuntimeError):
    """Raised when the record store cannot be reached or answers badly."""


class RecordStore(Protocol):
    async def list_records(self) -> List[RawRecord]:
        ...

    async def find(self, record_id: str) -> Optional[RawRecord]:
        ...


def _to_record(payload: Dict[str, Any]) -> RawRecord:
    try:
        return RawRecord(id=payload["id"], fields=payload.get("fields") or {})
    except (KeyError, TypeError, ValueError) as exc:
        raise RecordStoreError(f"Malformed record payload: {exc}") from exc


class AirtableStore:
    """Async client for one table of an Airtable base."""

    def __init__(
        self,
        base_id: str,
        table: str,
        token: str,
        *,
        api_url: str = "https://api.airtable.com/v0",
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_id = base_id
        self.table = table
        self._client = client or httpx.AsyncClient(
            base_url=f"{api_url.rstrip('/')}/{base_id}",
            headers={"Authorization": f"Bearer {token}"},
            timeout=timeout,
        )

    async def __aenter__(self) -> "AirtableStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_records(self) -> List[RawRecord]:
        records: List[RawRecord] = []
        params: Dict[str, Any] = {"pageSize": PAGE_SIZE}

        while True:
            try:
                data = await self._get_json(f"/{self.table}", params=params)
            except httpx.HTTPStatusError as exc:
                raise RecordStoreError(f"Failed to list {self.table}: {exc}") from exc
            records.extend(_to_record(item) for item in data.get("records") or [])

            offset = data.get("offset")
            if not offset:
                break
            params["offset"] = offset

        LOGGER.debug("Listed %s records from %s/%s", len(records), self.base_id, self.table)
        return records

    async def find(self, record_id: str) -> Optional[RawRecord]:
        try:
            data = await self._get_json(f"/{self.table}/{record_id}")
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                return None
            raise RecordStoreError(f"Failed to fetch record {record_id}: {exc}") from exc
        return _to_record(data)

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise RecordStoreError(f"Request to record store failed: {exc}") from exc

        # HTTPStatusError propagates; callers decide what a 404 means
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError as exc:
            raise RecordStoreError(f"Record store returned invalid JSON for {path}") from exc
        if not isinstance(data, dict):
            raise RecordStoreError(f"Unexpected response shape for {path}")
        return data
