import json
import logging

from alert_relay.logging_utils import JsonFormatter


def test_json_formatter_includes_order_fields() -> None:
    record = logging.LogRecord(
        name="alert_relay.relay",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="order_accepted",
        args=(),
        exc_info=None,
    )
    record.symbol = "BTCUSDT"
    record.qty = "10"
    record.ret_code = 0

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "order_accepted"
    assert payload["logger"] == "alert_relay.relay"
    assert payload["symbol"] == "BTCUSDT"
    assert payload["qty"] == "10"
    assert payload["ret_code"] == 0
    assert "side" not in payload
