from __future__ import annotations

from typing import Any


class RelayError(Exception):
    """Base class for every failure surfaced to the webhook caller."""

    http_status = 500


class ValidationError(RelayError):
    http_status = 400


class SigningError(RelayError):
    http_status = 500


class TransportError(RelayError):
    http_status = 502


class ExchangeError(RelayError):
    http_status = 502

    def __init__(self, *, code: int, message: str, payload: Any = None):
        super().__init__(f"Bybit API error: code={code} message={message}")
        self.code = code
        self.message = message
        self.payload = payload
