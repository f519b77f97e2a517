"""Parsing and validation of inbound alert payloads."""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from alert_relay.errors import ValidationError
from alert_relay.types import Action, Alert, ProductCategory

_ACTIONS = {"buy": Action.BUY, "sell": Action.SELL}
_CATEGORIES = {
    "linear": ProductCategory.LINEAR,
    "linearperpetual": ProductCategory.LINEAR,
    "spot": ProductCategory.SPOT,
}

# Order sizes and prices never need more than this; anything beyond it would
# expand into an enormous fixed-point string once formatted for the exchange.
_MAX_EXPONENT = 30
_MAX_DIGITS = 40

_LABELS = {
    "stop_loss": "stopLoss",
    "take_profit": "takeProfit",
    "product_category": "productCategory",
}


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


def _bounded(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("must be a finite number")
    if value and (
        abs(value.adjusted()) > _MAX_EXPONENT or len(value.as_tuple().digits) > _MAX_DIGITS
    ):
        raise ValueError("is out of range")
    return value


class AlertPayload(BaseModel):
    """Inbound alert body; short keys from the original TradingView template are accepted."""

    action: Action
    symbol: str
    quantity: Decimal = Field(validation_alias=AliasChoices("quantity", "qty"))
    stop_loss: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("stopLoss", "sl"),
    )
    take_profit: Optional[Decimal] = Field(
        default=None,
        validation_alias=AliasChoices("takeProfit", "tp"),
    )
    product_category: ProductCategory = Field(
        default=ProductCategory.LINEAR,
        validation_alias=AliasChoices("productCategory", "category"),
    )

    @field_validator("action", mode="before")
    @classmethod
    def _parse_action(cls, value: Any) -> Action:
        action = _ACTIONS.get(value.strip().lower()) if isinstance(value, str) else None
        if action is None:
            raise ValueError(f"must be Buy or Sell, got {value!r}")
        return action

    @field_validator("symbol")
    @classmethod
    def _strip_symbol(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("quantity", "stop_loss", "take_profit", mode="before")
    @classmethod
    def _numbers_only(cls, value: Any) -> Any:
        return _reject_bool(value)

    @field_validator("quantity")
    @classmethod
    def _positive_quantity(cls, value: Decimal) -> Decimal:
        value = _bounded(value)
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @field_validator("stop_loss", "take_profit")
    @classmethod
    def _optional_trigger(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        if value is None:
            return None
        value = _bounded(value)
        # Non-positive levels mean "not set".
        return value if value > 0 else None

    @field_validator("product_category", mode="before")
    @classmethod
    def _category_or_default(cls, value: Any) -> ProductCategory:
        if isinstance(value, str):
            return _CATEGORIES.get(value.strip().lower(), ProductCategory.LINEAR)
        return ProductCategory.LINEAR


def _describe(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    if not error["loc"]:
        return "alert body must be a JSON object"
    field = str(error["loc"][0])
    field = _LABELS.get(field, field)
    if error["type"] == "missing":
        return f"{field} is required"
    if error["type"] == "value_error":
        return f"{field} {error['ctx']['error']}"
    return f"{field}: {error['msg']}"


def parse_alert(payload: Any) -> Alert:
    """Validate a decoded JSON payload and return an immutable Alert.

    Numbers should be decoded as Decimal (``json.loads(..., parse_float=Decimal)``)
    so the caller's precision survives into the order quantity.
    """
    try:
        model = AlertPayload.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(_describe(exc)) from exc

    return Alert(
        action=model.action,
        symbol=model.symbol,
        quantity=model.quantity,
        stop_loss=model.stop_loss,
        take_profit=model.take_profit,
        category=model.product_category,
    )
