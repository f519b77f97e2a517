from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from alert_relay.exchange import BybitClient
from alert_relay.settings import Settings
from alert_relay.web.routes import error_response, router

logger = logging.getLogger("alert_relay.web")


def create_app(settings: Settings | None = None, *, client: BybitClient | None = None) -> FastAPI:
    """Build the webhook app.

    Settings are read once here and stay fixed for the life of the process.
    An injected ``client`` is used as-is and left open on shutdown.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if not settings.credentials_configured():
            logger.warning("BYBIT_API_KEY / BYBIT_SECRET not set; orders will fail to sign")
        owned = client is None
        app.state.settings = settings
        app.state.client = client or BybitClient(
            api_key=settings.bybit_api_key,
            api_secret=settings.bybit_api_secret,
            base_url=settings.bybit_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            recv_window_ms=settings.recv_window_ms,
        )
        logger.info("Alert relay started")
        try:
            yield
        finally:
            if owned:
                await app.state.client.aclose()
            logger.info("Alert relay stopped")

    app = FastAPI(lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        message = "POST method required" if exc.status_code == 405 else str(exc.detail)
        return error_response(exc.status_code, message)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error while processing alert", exc_info=exc)
        return error_response(500, "Internal server error")

    app.include_router(router)
    return app
