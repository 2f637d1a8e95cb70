# memberdir_core/directory.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional
from .constants import FRESHNESS_WINDOW_MS, RETENTION_WINDOW_MS
from .entry import Entry
from .logger import get_logger
from .storage import StoreError
from .store import AdmitOutcome, RecordStore
from .utils import now_ms
from .validator import validate_entry

log = get_logger("memberdir.directory")


@dataclass
class DirectoryResponse:
    status: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def _error(status: int, message: str) -> DirectoryResponse:
    return DirectoryResponse(status, {"error": message})


class DirectoryService:
    """
    Request/response boundary of the directory.

    submit() mirrors the HTTP POST handler: validate, admit, then return the
    authority's other members. cleanup() is the scheduled expiry sweep.
    The store is injected so tests can hand in an in-memory provider.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Optional[Callable[[], int]] = None,
        freshness_ms: int = FRESHNESS_WINDOW_MS,
        retention_ms: int = RETENTION_WINDOW_MS,
    ):
        self.store = store
        self.clock = clock or now_ms
        self.freshness_ms = freshness_ms
        self.retention_ms = retention_ms

    def submit(self, payload: Any) -> DirectoryResponse:
        if not isinstance(payload, Mapping):
            return _error(400, "Invalid request body")
        entry = Entry.from_dict(payload)

        rejection = validate_entry(entry, now_ms=self.clock(), freshness_ms=self.freshness_ms)
        if rejection:
            log.info(f"[SUBMIT] rejected ({rejection.kind.value}): {rejection.reason}")
            return _error(400, rejection.reason)

        try:
            outcome = self.store.admit(entry)
        except StoreError:
            log.exception("[SUBMIT] admission failed")
            return _error(500, "Failed to update database")

        if outcome is AdmitOutcome.CONFLICT:
            return _error(400, "Newer entry already exists")

        try:
            siblings = self.store.list_siblings(entry.authority_key, entry.member.key)
        except StoreError:
            log.exception("[SUBMIT] sibling query failed")
            return _error(500, "Failed to query database")

        return DirectoryResponse(200, [s.to_dict() for s in siblings])

    def cleanup(self, now: Optional[int] = None) -> int:
        """Purge records older than the retention window. Never raises StoreError."""
        log.info("Cleaning up old entries...")
        cutoff = (self.clock() if now is None else now) - self.retention_ms
        try:
            deleted = self.store.purge_expired(cutoff)
        except StoreError:
            log.exception("[CLEANUP] sweep failed")
            return 0

        try:
            log.info(f"[CLEANUP] deleted={deleted} remaining={self.store.live_count()}")
        except StoreError:
            log.warning(f"[CLEANUP] deleted={deleted} remaining=unknown")
        return deleted

    def close(self) -> None:
        self.store.close()
