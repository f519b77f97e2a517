"""Bybit v5 request signing.

The signed string is ``timestamp + api_key + recv_window + body`` with no
delimiters, where ``body`` is the exact JSON byte sequence sent on the wire.
"""
from __future__ import annotations

import hmac
from hashlib import sha256

from alert_relay.errors import SigningError


def _encode(value: str, *, field: str) -> bytes:
    if not isinstance(value, str):
        raise SigningError(f"{field} must be text")
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SigningError(f"{field} is not valid UTF-8") from exc


def build_signing_payload(*, timestamp: str, api_key: str, recv_window: str, body: bytes) -> bytes:
    if not isinstance(body, bytes):
        raise SigningError("body must be the serialized request bytes")
    return (
        _encode(timestamp, field="timestamp")
        + _encode(api_key, field="api_key")
        + _encode(recv_window, field="recv_window")
        + body
    )


def sign_payload(payload: bytes, secret: str) -> str:
    if not secret:
        raise SigningError("BYBIT_SECRET is required to sign requests")
    key = _encode(secret, field="secret")
    return hmac.new(key, payload, sha256).hexdigest()
