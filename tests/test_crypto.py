from memberdir_core.crypto import (
    VerifyFailure, ed25519_generate, ed25519_sign,
    public_key_b64, sign_message, verify_signature,
)
import pytest
from memberdir_core.utils import b64d, b64e


def test_sign_verify():
    priv, pub = ed25519_generate()
    sig = b64e(ed25519_sign(priv, b"hello"))
    assert verify_signature(b64e(pub), sig, "hello")
    assert not verify_signature(b64e(pub), sig, "hellO")


def test_verify_signature_accepts_valid_message():
    priv, _ = ed25519_generate()
    key = public_key_b64(priv)
    sig = sign_message(priv, "member-keyv1")
    result = verify_signature(key, sig, "member-keyv1")
    assert result.ok
    assert result.reason is None
    assert bool(result)


def test_verify_signature_latin1_message():
    priv, _ = ed25519_generate()
    sig = sign_message(priv, "café")
    assert verify_signature(public_key_b64(priv), sig, "café").ok


def test_verify_signature_mismatch():
    priv, _ = ed25519_generate()
    sig = sign_message(priv, "one")
    result = verify_signature(public_key_b64(priv), sig, "two")
    assert not result
    assert result.reason is VerifyFailure.MISMATCH
    assert str(result) == "Invalid signature"


def test_verify_signature_wrong_key():
    priv, _ = ed25519_generate()
    other, _ = ed25519_generate()
    sig = sign_message(priv, "msg")
    assert verify_signature(public_key_b64(other), sig, "msg").reason is VerifyFailure.MISMATCH


def test_verify_signature_failure_reasons_in_order():
    priv, _ = ed25519_generate()
    key = public_key_b64(priv)
    sig = sign_message(priv, "msg")

    assert verify_signature("not base64!!", "also bad!!", "msg").reason is VerifyFailure.KEY_DECODE
    assert verify_signature(b64e(b"short"), "also bad!!", "msg").reason is VerifyFailure.KEY_IMPORT
    assert verify_signature(key, "***", "msg").reason is VerifyFailure.SIGNATURE_DECODE
    assert verify_signature(key, sig, "snow ☃").reason is VerifyFailure.MESSAGE_ENCODE


def test_verify_signature_never_raises_on_garbage():
    result = verify_signature(None, None, None)
    assert result.reason is VerifyFailure.KEY_DECODE
    assert str(result) == "Failed to decode key"


def test_b64d_forgiving_rules():
    assert b64d("YWI") == b"ab"
    assert b64d(" YW Jj ") == b"abc"
    assert b64d("YWI=\n") == b"ab"
    for bad in ("YWJjZ", "YW=I", "YWI==", "YW*j"):
        with pytest.raises(ValueError):
            b64d(bad)


def test_verify_signature_unpadded_and_wrapped_encodings():
    priv, _ = ed25519_generate()
    key = public_key_b64(priv)
    sig = sign_message(priv, "msg")

    assert verify_signature(key.rstrip("="), sig.rstrip("="), "msg").ok
    wrapped = sig[:44] + "\r\n " + sig[44:]
    assert verify_signature(f" {key}\n", wrapped, "msg").ok
    assert verify_signature(key + "A", sig, "msg").reason is VerifyFailure.KEY_DECODE
