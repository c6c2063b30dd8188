"""
Linked record resolution.

The source API returns linked fields as bare arrays of record ids and never
says which table they point to. We guess a collection key from the field name,
gather every referenced id across the batch, and try to fetch each one from the
only table we can address. Whatever is found ends up in the reference table;
anything else is simply absent and the normalizer falls back to flat fields.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, Iterable, Mapping, Optional, Set

from .models import RawRecord, ReferenceTable
from .rules import REFERENCE_ID_PREFIX
from .store import RecordStore

LOGGER = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[_\s]")


def collection_key(field_name: str) -> str:
    """Guess a collection key from a field name ("Token Information" -> "tokeninformation")."""
    return _SEPARATORS.sub("", field_name).lower()


def is_reference_array(value: Any) -> bool:
    """
    True when ``value`` looks like a list of linked record ids.

    Only the first element is inspected: ``["rec1", 2]`` counts, ``["a", "rec1"]``
    does not.
    """
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and isinstance(value[0], str)
        and value[0].startswith(REFERENCE_ID_PREFIX)
    )


def collect_reference_ids(records: Iterable[RawRecord]) -> Dict[str, Set[str]]:
    """Union the referenced ids of every record, grouped by guessed collection key."""
    ids_by_key: Dict[str, Set[str]] = {}

    for record in records:
        for field_name, value in record.fields.items():
            if not is_reference_array(value):
                continue
            ids = ids_by_key.setdefault(collection_key(field_name), set())
            ids.update(item for item in value if isinstance(item, str))

    return ids_by_key


async def _find_or_none(store: RecordStore, record_id: str) -> Optional[RawRecord]:
    try:
        record = await store.find(record_id)
    except Exception as exc:
        LOGGER.warning("Unable to find record %s in main table, might be in a different table: %s", record_id, exc)
        return None
    if record is None:
        LOGGER.warning("Record %s not found in main table, might be in a different table", record_id)
    return record


async def resolve_references(store: RecordStore, records: Iterable[RawRecord]) -> ReferenceTable:
    """
    Build the reference table for one batch of records.

    Every distinct id is fetched once, even when it is linked under several
    collection keys. All fetches run concurrently. A failed or missing id is
    logged and left out; a failure while assembling one key leaves that key
    out without affecting the others.
    """
    ids_by_key = collect_reference_ids(records)
    fetches: Dict[str, "asyncio.Task[Optional[RawRecord]]"] = {}

    def fetch(record_id: str) -> "asyncio.Task[Optional[RawRecord]]":
        if record_id not in fetches:
            fetches[record_id] = asyncio.create_task(_find_or_none(store, record_id))
        return fetches[record_id]

    async def resolve_key(key: str, record_ids: Set[str]) -> Dict[str, Mapping[str, Any]]:
        found: Dict[str, Mapping[str, Any]] = {}
        try:
            linked = await asyncio.gather(*(fetch(record_id) for record_id in sorted(record_ids)))
            for record in linked:
                if record is not None:
                    found[record.id] = record.fields
        except Exception:
            LOGGER.exception("Error fetching linked records for %s", key)
            return {}
        return found

    keys = [key for key, record_ids in ids_by_key.items() if record_ids]
    resolved = await asyncio.gather(*(resolve_key(key, ids_by_key[key]) for key in keys))

    table = {key: found for key, found in zip(keys, resolved) if found}
    LOGGER.debug("Fetched %s distinct linked ids, %s collection keys resolved", len(fetches), len(table))
    return table
