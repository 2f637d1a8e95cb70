"""
memberdir_core.store
--------------------
Record store: owns the set of live directory records on top of a
RecordProvider.

- admit(): last-writer-wins. A candidate is refused unless its body.timestamp
  is strictly newer than the live record for its (authority, member) pair;
  otherwise the provider replaces the pair's row in one atomic unit.
- list_siblings(): other live records under the same authority.
- purge_expired(): drops records whose body.timestamp is before a cutoff.

Entries reaching admit() are expected to have passed validate_entry().
Provider failures surface as StoreError; nothing is retried here.
"""

from __future__ import annotations
from enum import Enum
from typing import List
from .entry import Entry, Sibling
from .logger import get_logger
from .storage import EntryRow, RecordProvider, StoreError

log = get_logger("memberdir.store")


class AdmitOutcome(str, Enum):
    ADMITTED = "admitted"
    CONFLICT = "conflict"


class RecordStore:
    def __init__(self, provider: RecordProvider):
        self.provider = provider

    def admit(self, entry: Entry) -> AdmitOutcome:
        master_key, member_key = entry.pair
        try:
            if self.provider.superseding_exists(master_key, member_key, entry.body.timestamp):
                log.info(f"[ADMIT] conflict member={member_key} ts={entry.body.timestamp}")
                return AdmitOutcome.CONFLICT
            self.provider.replace(EntryRow.from_entry(entry))
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"admit failed: {e}") from e

        log.info(f"[ADMIT] member={member_key} ts={entry.body.timestamp}")
        return AdmitOutcome.ADMITTED

    def list_siblings(self, authority_key: str, exclude_member_key: str) -> List[Sibling]:
        try:
            rows = self.provider.list_siblings(authority_key, exclude_member_key)
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"list_siblings failed: {e}") from e
        return [r.to_sibling() for r in rows]

    def purge_expired(self, cutoff_ms: int) -> int:
        try:
            deleted = self.provider.delete_older_than(cutoff_ms)
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"purge failed: {e}") from e
        log.info(f"[PURGE] cutoff={cutoff_ms} deleted={deleted}")
        return deleted

    def live_count(self) -> int:
        try:
            return self.provider.count()
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"count failed: {e}") from e

    def close(self) -> None:
        self.provider.close()
