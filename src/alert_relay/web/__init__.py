__all__ = ["create_app"]

from alert_relay.web.main import create_app
