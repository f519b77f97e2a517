__all__ = ["BybitClient", "build_signing_payload", "sign_payload"]

from alert_relay.exchange.bybit import BybitClient
from alert_relay.exchange.signing import build_signing_payload, sign_payload
