from __future__ import annotations

import json
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Literal

Side = Literal["Buy", "Sell"]
TimeInForce = Literal["GTC", "IOC"]


class Action(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class ProductCategory(str, Enum):
    SPOT = "spot"
    LINEAR = "linear"


@dataclass(frozen=True)
class Alert:
    action: Action
    symbol: str
    quantity: Decimal
    stop_loss: Decimal | None = None
    take_profit: Decimal | None = None
    category: ProductCategory = ProductCategory.LINEAR


@dataclass(frozen=True)
class OrderRequest:
    category: ProductCategory
    symbol: str
    side: Side
    qty: str
    time_in_force: TimeInForce = "GTC"
    stop_loss: str | None = None
    take_profit: str | None = None
    order_type: Literal["Market"] = "Market"

    def to_fields(self) -> dict[str, str]:
        fields = {
            "category": self.category.value,
            "symbol": self.symbol,
            "side": self.side,
            "orderType": self.order_type,
            "qty": self.qty,
            "timeInForce": self.time_in_force,
        }
        if self.stop_loss is not None:
            fields["stopLoss"] = self.stop_loss
        if self.take_profit is not None:
            fields["takeProfit"] = self.take_profit
        return fields

    def to_body(self) -> bytes:
        """Compact JSON with a fixed key order; these bytes are signed and sent as-is."""
        return json.dumps(self.to_fields(), separators=(",", ":"), ensure_ascii=False).encode(
            "utf-8"
        )


@dataclass(frozen=True)
class SignedRequest:
    api_key: str
    timestamp: str
    recv_window: str
    signature: str
    body: bytes

    def headers(self) -> dict[str, str]:
        return {
            "X-BAPI-API-KEY": self.api_key,
            "X-BAPI-TIMESTAMP": self.timestamp,
            "X-BAPI-SIGN": self.signature,
            "X-BAPI-RECV-WINDOW": self.recv_window,
            "Content-Type": "application/json",
        }


@dataclass(frozen=True)
class ExchangeResult:
    ret_code: int
    ret_msg: str
    result: dict[str, Any] | None
    raw: dict[str, Any]

    @property
    def order_id(self) -> str | None:
        if not self.result:
            return None
        value = self.result.get("orderId")
        return str(value) if value is not None else None
