# memberdir_core/storage/provider.py
from __future__ import annotations
from typing import List
from memberdir_core.storage.models import EntryRow


class StoreError(Exception):
    """The persistence backend could not complete a query or a write."""


class RecordProvider:
    # Interface
    def superseding_exists(self, master_key: str, member_key: str, timestamp: int) -> bool:
        """True if the pair already has a row with body_timestamp >= timestamp."""
        ...


    def replace(self, row: EntryRow) -> None:
        """Delete any row for row.pair and insert `row`, all or nothing."""
        ...

    def list_siblings(self, master_key: str, exclude_member_key: str) -> List[EntryRow]: ...
    def delete_older_than(self, cutoff_ms: int) -> int: ...

    def count(self) -> int:
        """Number of live rows. Diagnostics only: sweep logging and tests."""
        ...

    def close(self) -> None: ...
