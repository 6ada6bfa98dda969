"""FastAPI app entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from cocs_bot.api.responses import CORSJSONResponse, error_response
from cocs_bot.api.routes import router
from cocs_bot.config import Settings, get_settings
from cocs_bot.domain.errors import CocsBotError
from cocs_bot.services.notifier import Notifier
from cocs_bot.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

HTTP_ERROR_MESSAGES = {404: "Not found", 405: "Method not allowed"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    configure_logging(settings)
    missing = settings.missing_required()
    if missing:
        logger.warning("application.config_missing", missing=missing)
    logger.info("application.starting", service=settings.service_name, secret_check=bool(settings.webhook_secret))
    yield
    logger.info("application.shutdown")


def create_app(settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None) -> FastAPI:
    """Build the app around one settings object; ``transport`` is for tests."""

    settings = settings or get_settings()
    app = FastAPI(
        title="COCS Bot",
        default_response_class=CORSJSONResponse,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.notifier = Notifier.from_settings(settings, transport=transport)

    @app.exception_handler(CocsBotError)
    async def bot_error_handler(request: Request, exc: CocsBotError) -> CORSJSONResponse:
        if exc.status_code >= 500:
            logger.error("webhook.failed", error=exc.message, path=request.url.path)
        else:
            logger.warning("webhook.rejected", error=exc.message, status_code=exc.status_code)
        message = exc.message if exc.expose else "Internal server error"
        return error_response(message, exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> CORSJSONResponse:
        logger.exception("webhook.failed", error=str(exc), path=request.url.path)
        return error_response("Internal server error", 500)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> CORSJSONResponse:
        message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
        return error_response(message, exc.status_code, headers=exc.headers)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cocs_bot.main:app",
        host=app.state.settings.api_host,
        port=app.state.settings.api_port,
    )
