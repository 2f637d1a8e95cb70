"""
memberdir_core.entry
--------------------
Defines Entry, the record submitted to and stored by the directory.

An Entry carries:
- masterKey: the authority public key (base64) that endorses everything below
- member:    identity claim {key, metadata, signature}, signed by the authority
- body:      payload {data, timestamp, signature}, signed by the authority and
             bound to one specific member.signature

Signed messages are plain string concatenations with no separator. This keeps
compatibility with existing signers but is ambiguous: ("ab", "c") and
("a", "bc") produce the same member message.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Mapping, Optional
from .crypto import public_key_b64, sign_message


@dataclass
class Member:
    key: str = ""
    metadata: str = ""
    signature: str = ""     # authority signature over key + metadata


@dataclass
class Body:
    data: str = ""
    timestamp: Any = 0      # ms since epoch; validated, not coerced
    signature: str = ""     # authority signature over member.signature + data + timestamp


def member_message(member: Member) -> str:
    return f"{member.key}{member.metadata}"

def body_message(member_signature: str, body: Body) -> str:
    return f"{member_signature}{body.data}{body.timestamp}"


def _text(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    return "" if value is None else str(value)

def _section(data: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = data.get(name)
    return value if isinstance(value, Mapping) else {}


@dataclass
class Sibling:
    """A stored record as returned to a submitter: authority key omitted."""
    member: Member = field(default_factory=Member)
    body: Body = field(default_factory=Body)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sibling":
        m, b = _section(data, "member"), _section(data, "body")
        return cls(
            member=Member(_text(m, "key"), _text(m, "metadata"), _text(m, "signature")),
            body=Body(_text(b, "data"), b.get("timestamp", 0), _text(b, "signature")),
        )


@dataclass
class Entry:
    authority_key: str = ""
    member: Member = field(default_factory=Member)
    body: Body = field(default_factory=Body)

    @property
    def pair(self):
        return self.authority_key, self.member.key

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (camelCase, as submitted over HTTP)."""
        return {
            "masterKey": self.authority_key,
            "member": asdict(self.member),
            "body": asdict(self.body),
        }

    def to_sibling(self) -> Sibling:
        return Sibling(member=self.member, body=self.body)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entry":
        """Rebuild an Entry from its wire form.

        Only shape is normalised here; presence, freshness and signatures
        are the validator's job.
        """
        authority = data.get("masterKey", data.get("authorityKey"))
        sibling = Sibling.from_dict(data)
        return cls(
            authority_key="" if authority is None else str(authority),
            member=sibling.member,
            body=sibling.body,
        )


def make_entry(
    authority_priv: bytes,
    member_key: str,
    metadata: str,
    data: str,
    timestamp: int,
    member_signature: Optional[str] = None,
) -> Entry:
    """Build and sign a complete Entry with the authority's private key.

    Pass `member_signature` to reuse an existing identity endorsement
    instead of re-signing the member claim.
    """
    member = Member(key=member_key, metadata=metadata)
    member.signature = member_signature or sign_message(authority_priv, member_message(member))
    body = Body(data=data, timestamp=timestamp)
    body.signature = sign_message(authority_priv, body_message(member.signature, body))
    return Entry(authority_key=public_key_b64(authority_priv), member=member, body=body)
