import json
import logging
from decimal import Decimal

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from alert_relay.errors import ExchangeError, RelayError
from alert_relay.relay import relay_alert

logger = logging.getLogger("alert_relay.webhook")

router = APIRouter()


def error_response(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse({"success": False, "error": message, **extra}, status_code=status_code)


@router.get("/health")
async def health():
    return {"ok": True}


@router.options("/")
@router.options("/webhook")
async def preflight():
    return Response(status_code=204)


@router.post("/")
@router.post("/webhook")
async def webhook(request: Request):
    raw = await request.body()
    try:
        payload = json.loads(raw, parse_float=Decimal)
    except (ValueError, RecursionError) as exc:
        logger.warning(f"Rejected malformed JSON body: {exc}")
        return error_response(400, f"Malformed JSON body: {exc}")

    settings = request.app.state.settings
    try:
        result = await relay_alert(
            payload,
            client=request.app.state.client,
            time_in_force=settings.time_in_force,
        )
    except ExchangeError as exc:
        return error_response(exc.http_status, str(exc), code=exc.code)
    except RelayError as exc:
        if exc.http_status >= 500:
            logger.error(f"Alert relay failed: {exc}")
        else:
            logger.info(f"Alert rejected: {exc}")
        return error_response(exc.http_status, str(exc))

    return {"success": True, "result": result.raw}
