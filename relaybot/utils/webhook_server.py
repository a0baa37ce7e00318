"""
HTTP front door for Telegram webhook deliveries.
Every authenticated update is acknowledged with 200 so Telegram never redelivers it.
"""
import hmac
import logging
from json import JSONDecodeError
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from relaybot.core.bot import RelayBot
from relaybot.storage.analytics import EventLog

logger = logging.getLogger(__name__)

SECRET_HEADER = "x-telegram-bot-api-secret-token"


def is_authorized(header_value: Optional[str], secret: str) -> bool:
    if header_value is None:
        return False
    return hmac.compare_digest(header_value.encode("utf-8"), secret.encode("utf-8"))


def create_app(relay: RelayBot, webhook_secret: str, events: Optional[EventLog] = None, lifespan=None) -> FastAPI:
    events = events or relay.events
    app = FastAPI(title="Relaybot", lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException):
        # Unknown paths and wrong methods are both reported as 404
        if exc.status_code in (404, 405):
            return PlainTextResponse("not found", status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.get("/")
    async def health_check():
        return PlainTextResponse("ok")

    @app.post("/webhook")
    async def telegram_webhook(request: Request):
        if not is_authorized(request.headers.get(SECRET_HEADER), webhook_secret):
            logger.warning("Rejected webhook call with bad secret token")
            events.emit("auth_failed")
            return PlainTextResponse("unauthorized", status_code=401)

        try:
            update = await request.json()
        except (JSONDecodeError, UnicodeDecodeError) as e:
            logger.info(f"Ignoring unparseable update body: {e}")
            events.emit("update_ignored", reason="invalid_json")
            return PlainTextResponse("ok")

        try:
            await relay.handle_update(update)
        except Exception as e:
            logger.error(f"Error handling update: {e}", exc_info=True)
            events.emit("update_failed", error=str(e))

        return PlainTextResponse("ok")

    return app
