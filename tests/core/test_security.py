"""Tests for bearer token verification."""

from app.core.security import create_access_token, decode_access_token


def test_round_trip():
    assert decode_access_token(create_access_token(17)) == 17


def test_expired_token():
    assert decode_access_token(create_access_token(17, expires_minutes=-1)) is None


def test_wrong_key():
    token = create_access_token(17, secret_key="other-key")
    assert decode_access_token(token) is None
    assert decode_access_token(token, secret_key="other-key") == 17


def test_tampered_payload():
    payload, signature = create_access_token(17).split(".")
    forged_payload = create_access_token(18).split(".")[0]
    assert decode_access_token(f"{forged_payload}.{signature}") is None
    assert decode_access_token(f"{payload}.{signature}") == 17


def test_malformed_tokens():
    assert decode_access_token("") is None
    assert decode_access_token("not-a-token") is None
    assert decode_access_token("a.b.c") is None


def test_non_ascii_tokens():
    signature = create_access_token(17).split(".")[1]
    assert decode_access_token(f"\xe9abc.{signature}") is None
    assert decode_access_token("abc.\xe9\xe9") is None
