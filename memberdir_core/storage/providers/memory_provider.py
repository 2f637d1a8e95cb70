from typing import Dict, List, Tuple
from dataclasses import replace as _copy
from memberdir_core.storage.models import EntryRow
from memberdir_core.storage.provider import RecordProvider

class InMemoryRecordProvider(RecordProvider):
    def __init__(self):
        self.rows: Dict[Tuple[str, str], EntryRow] = {}

    def superseding_exists(self, master_key: str, member_key: str, timestamp: int) -> bool:
        row = self.rows.get((master_key, member_key))
        return row is not None and row.body_timestamp >= timestamp

    # single dict assignment: readers never see the pair missing or doubled
    def replace(self, row: EntryRow):
        self.rows[row.pair] = _copy(row)

    def list_siblings(self, master_key: str, exclude_member_key: str) -> List[EntryRow]:
        found = [
            _copy(r) for r in list(self.rows.values())
            if r.master_key == master_key and r.member_key != exclude_member_key
        ]
        return sorted(found, key=lambda r: r.member_key)

    def delete_older_than(self, cutoff_ms: int) -> int:
        deleted = 0
        for pair, r in list(self.rows.items()):
            # skip rows replaced since the snapshot was taken
            if r.body_timestamp < cutoff_ms and self.rows.get(pair) is r:
                del self.rows[pair]
                deleted += 1
        return deleted

    def count(self) -> int:
        return len(self.rows)

    def close(self):
        self.rows.clear()
