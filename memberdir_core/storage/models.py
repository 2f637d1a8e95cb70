# memberdir_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass
from memberdir_core.entry import Body, Entry, Member, Sibling


@dataclass
class EntryRow:
    """
    Storage-level representation of a live directory record.

    One row per (master_key, member_key). Providers store these flat columns
    and never interpret the signatures.
    """
    master_key: str
    member_key: str
    member_metadata: str
    member_signature: str
    body_data: str
    body_timestamp: int
    body_signature: str

    @property
    def pair(self):
        return self.master_key, self.member_key

    @classmethod
    def from_entry(cls, e: Entry) -> "EntryRow":
        return cls(
            master_key=e.authority_key,
            member_key=e.member.key,
            member_metadata=e.member.metadata,
            member_signature=e.member.signature,
            body_data=e.body.data,
            body_timestamp=e.body.timestamp,
            body_signature=e.body.signature,
        )

    def to_entry(self) -> Entry:
        return Entry(
            authority_key=self.master_key,
            member=Member(self.member_key, self.member_metadata, self.member_signature),
            body=Body(self.body_data, self.body_timestamp, self.body_signature),
        )

    def to_sibling(self) -> Sibling:
        return self.to_entry().to_sibling()
