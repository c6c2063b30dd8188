from typing import Dict, Iterable, List, Optional

import pytest

from org_directory.models import RawRecord
from org_directory.store import RecordStoreError


class FakeStore:
    """In-memory record store that counts lookups."""

    def __init__(
        self,
        records: Iterable[RawRecord] = (),
        linked: Iterable[RawRecord] = (),
        failing: Iterable[str] = (),
    ):
        self.records = list(records)
        self.by_id: Dict[str, RawRecord] = {r.id: r for r in [*self.records, *linked]}
        self.failing = set(failing)
        self.find_calls: List[str] = []
        self.list_error: Optional[Exception] = None

    async def list_records(self) -> List[RawRecord]:
        if self.list_error is not None:
            raise self.list_error
        return list(self.records)

    async def find(self, record_id: str) -> Optional[RawRecord]:
        self.find_calls.append(record_id)
        if record_id in self.failing:
            raise RecordStoreError(f"boom {record_id}")
        return self.by_id.get(record_id)


@pytest.fixture
def make_store():
    return FakeStore
