from __future__ import annotations

import logging
from typing import Any, Protocol

from alert_relay.errors import ExchangeError
from alert_relay.orders import build_order_request
from alert_relay.types import ExchangeResult, OrderRequest, TimeInForce
from alert_relay.validator import parse_alert

logger = logging.getLogger("alert_relay.relay")


class OrderClient(Protocol):
    async def create_order(self, order: OrderRequest) -> ExchangeResult: ...


async def relay_alert(
    payload: Any,
    *,
    client: OrderClient,
    time_in_force: TimeInForce = "GTC",
) -> ExchangeResult:
    """Validate an alert payload, build the market order and submit it once."""
    alert = parse_alert(payload)
    order = build_order_request(alert, time_in_force=time_in_force)
    log_extra = {
        "symbol": order.symbol,
        "side": order.side,
        "qty": order.qty,
        "category": order.category.value,
    }
    logger.info("alert_received", extra=log_extra)

    try:
        result = await client.create_order(order)
    except ExchangeError as exc:
        logger.warning(
            "order_rejected: %s",
            exc.message,
            extra={**log_extra, "ret_code": exc.code},
        )
        raise

    logger.info(
        "order_accepted",
        extra={**log_extra, "ret_code": result.ret_code, "order_id": result.order_id},
    )
    return result
