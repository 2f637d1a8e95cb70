"""
memberdir_core.crypto
---------------------
Ed25519 primitives for the membership directory:

- verify_signature(): the chain verifier. Takes base64 key and signature
  strings plus the signed message and reports either success or the exact
  stage that failed (decode, import, encode, mismatch, engine error).
- ed25519_generate() / ed25519_sign(): used by submitters to build entries.

verify_signature() never raises; every failure is returned as a VerifyResult.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519
from .utils import b64d, b64e, message_bytes


class VerifyFailure(str, Enum):
    KEY_DECODE = "Failed to decode key"
    KEY_IMPORT = "Failed to import key"
    SIGNATURE_DECODE = "Failed to decode signature"
    MESSAGE_ENCODE = "Failed to parse body"
    MISMATCH = "Invalid signature"
    ENGINE = "Failed to verify signature"


@dataclass(frozen=True)
class VerifyResult:
    reason: Optional[VerifyFailure] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        return "ok" if self.reason is None else self.reason.value


VALID = VerifyResult()


# --------- Ed25519 (sign/verify) ----------
def ed25519_generate() -> Tuple[bytes, bytes]:
    sk = ed25519.Ed25519PrivateKey.generate()
    pk = sk.public_key()
    return sk.private_bytes_raw(), pk.public_bytes_raw()

def ed25519_sign(priv_raw: bytes, data: bytes) -> bytes:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    return sk.sign(data)

def public_key_b64(priv_raw: bytes) -> str:
    sk = ed25519.Ed25519PrivateKey.from_private_bytes(priv_raw)
    return b64e(sk.public_key().public_bytes_raw())

def sign_message(priv_raw: bytes, message: str) -> str:
    """Sign `message` the way verify_signature() expects and return base64."""
    return b64e(ed25519_sign(priv_raw, message_bytes(message)))


def verify_signature(key_b64: str, sig_b64: str, message: str) -> VerifyResult:
    try:
        key_raw = b64d(key_b64)
    except (ValueError, TypeError, AttributeError):
        return VerifyResult(VerifyFailure.KEY_DECODE)

    try:
        public_key = ed25519.Ed25519PublicKey.from_public_bytes(key_raw)
    except ValueError:
        return VerifyResult(VerifyFailure.KEY_IMPORT)

    try:
        sig = b64d(sig_b64)
    except (ValueError, TypeError, AttributeError):
        return VerifyResult(VerifyFailure.SIGNATURE_DECODE)

    try:
        data = message_bytes(message)
    except (UnicodeEncodeError, AttributeError):
        return VerifyResult(VerifyFailure.MESSAGE_ENCODE)

    try:
        public_key.verify(sig, data)
    except InvalidSignature:
        return VerifyResult(VerifyFailure.MISMATCH)
    except (ValueError, TypeError):
        return VerifyResult(VerifyFailure.ENGINE)

    return VALID
