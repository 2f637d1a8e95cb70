"""
memberdir_core.utils
--------------------
Small helpers shared by the verifier, the validator and the store:
base64 codecs, the millisecond wall clock and signed-message encoding.
"""

from __future__ import annotations
import base64, time


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

_ASCII_WHITESPACE = {ord(c): None for c in " \t\n\f\r"}

def b64d(s: str) -> bytes:
    """Forgiving base64 decode (the browser `atob` rules).

    ASCII whitespace is ignored and trailing padding is optional; anything
    else outside the base64 alphabet raises ValueError.
    """
    s = s.translate(_ASCII_WHITESPACE)
    if len(s) % 4 == 0 and s.endswith("="):
        s = s[:-2] if s.endswith("==") else s[:-1]
    if len(s) % 4 == 1 or "=" in s:
        raise ValueError("invalid base64 length or padding")
    s += "=" * (-len(s) % 4)
    return base64.b64decode(s.encode("ascii"), validate=True)

def now_ms() -> int:
    return int(time.time() * 1000)

def message_bytes(message: str) -> bytes:
    # One byte per character; raises UnicodeEncodeError beyond U+00FF
    return message.encode("latin-1")
