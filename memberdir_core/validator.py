"""
memberdir_core.validator
------------------------
Admission gate for submitted entries. Checks run in a fixed order and the
first failure decides the rejection reason:

1. body.timestamp is fresh: now - window <= ts <= now
2. required fields are non-empty
3. member link: authority signed member.key + member.metadata
4. body link:   authority signed member.signature + body.data + body.timestamp

Both links are signed by the authority key. The body link covers the member
signature, so a body signed for one endorsed identity version does not verify
once the member is re-endorsed with new metadata.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from .constants import FRESHNESS_WINDOW_MS
from .crypto import verify_signature
from .entry import Entry, body_message, member_message
from .utils import now_ms as _now_ms


class RejectionKind(str, Enum):
    MALFORMED = "malformed"
    CHAIN = "chain"


@dataclass(frozen=True)
class Rejection:
    kind: RejectionKind
    reason: str

    def __str__(self) -> str:
        return self.reason


def _fresh(ts, now: int, window_ms: int) -> bool:
    if isinstance(ts, bool) or not isinstance(ts, int) or not ts:
        return False
    return now - window_ms <= ts <= now


def validate_entry(
    entry: Entry,
    now_ms: Optional[int] = None,
    freshness_ms: int = FRESHNESS_WINDOW_MS,
) -> Optional[Rejection]:
    """Return None when the entry may be admitted, else the Rejection."""
    now = _now_ms() if now_ms is None else now_ms

    if not _fresh(entry.body.timestamp, now, freshness_ms):
        return Rejection(RejectionKind.MALFORMED, "Invalid Timestamp")

    required = (
        ("masterKey", entry.authority_key),
        ("member.key", entry.member.key),
        ("member.signature", entry.member.signature),
        ("body.signature", entry.body.signature),
    )
    for name, value in required:
        if not value:
            return Rejection(RejectionKind.MALFORMED, f"{name} is required")

    result = verify_signature(entry.authority_key, entry.member.signature, member_message(entry.member))
    if not result:
        return Rejection(RejectionKind.CHAIN, f"Invalid memberSignature: {result}")

    result = verify_signature(
        entry.authority_key, entry.body.signature, body_message(entry.member.signature, entry.body)
    )
    if not result:
        return Rejection(RejectionKind.CHAIN, f"Invalid bodySignature: {result}")

    return None
