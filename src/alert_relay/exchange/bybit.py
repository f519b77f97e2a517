from __future__ import annotations

import time
from typing import Any, Callable

import httpx

from alert_relay.errors import ExchangeError, SigningError, TransportError
from alert_relay.exchange.signing import build_signing_payload, sign_payload
from alert_relay.types import ExchangeResult, OrderRequest, SignedRequest

_DEFAULT_BASE_URL = "https://api.bybit.com"
_DEFAULT_RECV_WINDOW_MS = 5_000
_DEFAULT_TIMEOUT_SECONDS = 5.0
_ORDER_CREATE_PATH = "/v5/order/create"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _parse_envelope(payload: Any) -> tuple[int, str] | None:
    if not isinstance(payload, dict):
        return None
    code = payload.get("retCode")
    if isinstance(code, bool) or not isinstance(code, int):
        return None
    return code, str(payload.get("retMsg", ""))


class BybitClient:
    """Single-attempt client for Bybit v5 market order creation.

    There is no idempotency key: a timeout after the exchange accepted the
    order is indistinguishable from a lost request, and resubmitting may open
    a duplicate position.
    """

    def __init__(
        self,
        *,
        api_key: str,
        api_secret: str,
        base_url: str = _DEFAULT_BASE_URL,
        timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS,
        recv_window_ms: int = _DEFAULT_RECV_WINDOW_MS,
        transport: httpx.AsyncBaseTransport | None = None,
        clock_ms: Callable[[], int] = _now_ms,
    ) -> None:
        self._api_key = api_key
        self._api_secret = api_secret
        self._base_url = base_url.rstrip("/")
        self._recv_window = str(int(max(1, recv_window_ms)))
        self._clock_ms = clock_ms
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    def sign_order(self, order: OrderRequest) -> SignedRequest:
        if not self._api_key:
            raise SigningError("BYBIT_API_KEY is required to sign requests")
        body = order.to_body()
        timestamp = str(self._clock_ms())
        payload = build_signing_payload(
            timestamp=timestamp,
            api_key=self._api_key,
            recv_window=self._recv_window,
            body=body,
        )
        return SignedRequest(
            api_key=self._api_key,
            timestamp=timestamp,
            recv_window=self._recv_window,
            signature=sign_payload(payload, self._api_secret),
            body=body,
        )

    async def create_order(self, order: OrderRequest) -> ExchangeResult:
        signed = self.sign_order(order)
        try:
            response = await self._client.post(
                _ORDER_CREATE_PATH,
                content=signed.body,
                headers=signed.headers(),
            )
        except httpx.TimeoutException as exc:
            raise TransportError(f"Bybit request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise TransportError(f"Bybit request failed: {exc}") from exc

        payload: Any
        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        envelope = _parse_envelope(payload)
        if response.status_code >= 400:
            if envelope is not None:
                raise ExchangeError(code=envelope[0], message=envelope[1], payload=payload)
            raise ExchangeError(
                code=response.status_code,
                message=f"HTTP {response.status_code}: {str(payload)[:200]}",
                payload=payload,
            )
        if envelope is None:
            raise ExchangeError(
                code=response.status_code,
                message="malformed response: missing integer retCode",
                payload=payload,
            )

        ret_code, ret_msg = envelope
        if ret_code != 0:
            raise ExchangeError(code=ret_code, message=ret_msg, payload=payload)

        result = payload.get("result")
        return ExchangeResult(
            ret_code=ret_code,
            ret_msg=ret_msg,
            result=result if isinstance(result, dict) else None,
            raw=payload,
        )
