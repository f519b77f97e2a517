from __future__ import annotations

from decimal import Decimal

from alert_relay.types import Action, Alert, OrderRequest, Side, TimeInForce

# Exchange/venue suffixes TradingView appends to tickers.
_SYMBOL_SUFFIXES = ("-EQ", "-BE", "-BZ", ".NS", ".BO", ".P")

_SIDES: dict[Action, Side] = {Action.BUY: "Buy", Action.SELL: "Sell"}


def format_decimal(value: Decimal) -> str:
    # Fixed-point, keeping the scale the caller supplied ("0.010" stays "0.010").
    return format(value, "f")


def normalize_symbol(raw: str) -> str:
    symbol = raw.rsplit(":", 1)[-1].strip().upper()
    for suffix in _SYMBOL_SUFFIXES:
        if symbol.endswith(suffix) and len(symbol) > len(suffix):
            return symbol[: -len(suffix)]
    return symbol


def build_order_request(alert: Alert, *, time_in_force: TimeInForce = "GTC") -> OrderRequest:
    return OrderRequest(
        category=alert.category,
        symbol=normalize_symbol(alert.symbol),
        side=_SIDES[alert.action],
        qty=format_decimal(alert.quantity),
        time_in_force=time_in_force,
        stop_loss=format_decimal(alert.stop_loss) if alert.stop_loss is not None else None,
        take_profit=format_decimal(alert.take_profit) if alert.take_profit is not None else None,
    )
