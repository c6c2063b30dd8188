from __future__ import annotations

import logging
from typing import List

from .models import Organization
from .normalize import normalize_records
from .resolver import resolve_references
from .store import RecordStore

LOGGER = logging.getLogger(__name__)


async def fetch_organizations(store: RecordStore) -> List[Organization]:
    """
    Run one fetch cycle: list the primary table, resolve linked records for
    the whole batch, then normalize each record.

    A failure to list the table propagates; failures while resolving linked
    records only degrade individual organizations to their flat fields.
    """
    records = await store.list_records()
    references = await resolve_references(store, records)
    organizations = normalize_records(records, references)

    LOGGER.info("Fetched %s organizations", len(organizations))
    if organizations:
        LOGGER.debug("First organization: %s", organizations[0].model_dump())
    return organizations
