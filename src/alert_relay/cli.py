from __future__ import annotations

import asyncio
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer
import uvicorn

from alert_relay.errors import RelayError
from alert_relay.exchange import BybitClient
from alert_relay.logging_utils import configure_logging
from alert_relay.orders import build_order_request
from alert_relay.relay import relay_alert
from alert_relay.settings import Settings
from alert_relay.validator import parse_alert
from alert_relay.web import create_app

app = typer.Typer(no_args_is_help=True, add_completion=False)
logger = logging.getLogger("alert_relay")


def _load_alert(source: str) -> Any:
    """Accept inline JSON, a path to a JSON file, or ``-`` for stdin."""
    if source == "-":
        text = typer.get_text_stream("stdin").read()
    elif Path(source).is_file():
        text = Path(source).read_text(encoding="utf-8")
    else:
        text = source
    try:
        return json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"invalid alert JSON: {e}") from e


def _client_from(settings: Settings) -> BybitClient:
    return BybitClient(
        api_key=settings.bybit_api_key,
        api_secret=settings.bybit_api_secret,
        base_url=settings.bybit_base_url,
        timeout_seconds=settings.request_timeout_seconds,
        recv_window_ms=settings.recv_window_ms,
    )


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
) -> None:
    """
    Run the webhook server.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


@app.command()
def show_config() -> None:
    settings = Settings()
    configure_logging(settings.log_level)
    redacted = settings.model_dump()
    redacted["bybit_api_secret"] = "***" if redacted["bybit_api_secret"] else ""
    logger.info("loaded_config")
    typer.echo(redacted)


@app.command()
def preview(
    alert: str = typer.Argument(..., help="Alert JSON, a JSON file path, or '-' for stdin."),
) -> None:
    """
    Validate and sign an alert without sending it.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    payload = _load_alert(alert)

    async def _run() -> None:
        client = _client_from(settings)
        try:
            order = build_order_request(parse_alert(payload), time_in_force=settings.time_in_force)
            signed = client.sign_order(order)
        except RelayError as e:
            typer.echo({"ok": False, "error": str(e)})
            raise typer.Exit(code=1) from e
        finally:
            await client.aclose()
        headers = signed.headers()
        headers["X-BAPI-API-KEY"] = "***"
        typer.echo(
            json.dumps(
                {"ok": True, "body": signed.body.decode("utf-8"), "headers": headers},
                indent=2,
            )
        )

    asyncio.run(_run())


@app.command()
def send(
    alert: str = typer.Argument(..., help="Alert JSON, a JSON file path, or '-' for stdin."),
) -> None:
    """
    Relay one alert to Bybit and print the exchange response.
    """
    settings = Settings()
    configure_logging(settings.log_level)
    payload = _load_alert(alert)

    async def _run() -> None:
        client = _client_from(settings)
        try:
            result = await relay_alert(
                payload,
                client=client,
                time_in_force=settings.time_in_force,
            )
        except RelayError as e:
            typer.echo(json.dumps({"success": False, "error": str(e)}))
            raise typer.Exit(code=1) from e
        finally:
            await client.aclose()
        typer.echo(json.dumps({"success": True, "result": result.raw}, indent=2))

    asyncio.run(_run())


def main() -> None:
    app()


if __name__ == "__main__":
    main()
