import pytest
from pydantic import ValidationError

from alert_relay.settings import Settings


def test_credentials_configured_requires_both_secrets() -> None:
    assert Settings(BYBIT_API_KEY="k", BYBIT_SECRET="").credentials_configured() is False
    assert Settings(BYBIT_API_KEY="k", BYBIT_SECRET="s").credentials_configured() is True


def test_time_in_force_is_restricted() -> None:
    assert Settings(TIME_IN_FORCE="IOC").time_in_force == "IOC"
    with pytest.raises(ValidationError):
        Settings(TIME_IN_FORCE="FOK")


def test_settings_are_read_only() -> None:
    settings = Settings(BYBIT_API_KEY="k")
    with pytest.raises(ValidationError):
        settings.bybit_api_key = "other"  # type: ignore[misc]
