from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Bybit (v5)
    bybit_api_key: str = Field(default="", validation_alias="BYBIT_API_KEY")
    bybit_api_secret: str = Field(default="", validation_alias="BYBIT_SECRET")
    bybit_base_url: str = Field(default="https://api.bybit.com", validation_alias="BYBIT_BASE_URL")
    recv_window_ms: int = Field(default=5_000, gt=0, validation_alias="RECV_WINDOW_MS")
    request_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        validation_alias="REQUEST_TIMEOUT_SECONDS",
    )

    # Order policy, held constant for every alert
    time_in_force: Literal["GTC", "IOC"] = Field(default="GTC", validation_alias="TIME_IN_FORCE")

    # Logging
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def credentials_configured(self) -> bool:
        return bool(self.bybit_api_key.strip() and self.bybit_api_secret.strip())
