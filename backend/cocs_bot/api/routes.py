"""FastAPI routes."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Header, Request, Response

from cocs_bot.api.responses import PREFLIGHT_HEADERS, CORSJSONResponse
from cocs_bot.config import Settings
from cocs_bot.domain.errors import MalformedPayloadError
from cocs_bot.services.ingestion import process_deployment_event
from cocs_bot.services.notifier import Notifier
from cocs_bot.services.security import WEBHOOK_SECRET_HEADER, require_configuration, verify_webhook_secret
from cocs_bot.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(default_response_class=CORSJSONResponse)

SKIP_MESSAGE = "Build still in progress, skipping notification"


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


async def _read_json(request: Request) -> Any:
    body = await request.body()
    try:
        return json.loads(body)
    except ValueError as exc:
        logger.error("webhook.invalid_json", error=str(exc))
        raise MalformedPayloadError("Invalid JSON payload") from exc


@router.api_route("/health", methods=["GET", "HEAD"])
def health(settings: Annotated[Settings, Depends(get_app_settings)]) -> dict[str, str]:
    return {"status": "ok", "service": settings.service_name}


@router.options("/webhook")
@router.options("/")
def webhook_preflight() -> Response:
    return Response(status_code=204, headers=PREFLIGHT_HEADERS)


@router.post("/webhook")
@router.post("/")
async def receive_webhook(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    notifier: Annotated[Notifier, Depends(get_notifier)],
    webhook_secret: Annotated[str | None, Header(alias=WEBHOOK_SECRET_HEADER)] = None,
):
    require_configuration(settings)
    verify_webhook_secret(settings, webhook_secret)
    payload = await _read_json(request)
    result = await process_deployment_event(payload, settings, notifier)

    if not result.delivered:
        return CORSJSONResponse({"message": SKIP_MESSAGE})
    return CORSJSONResponse({"success": True, "deploymentId": result.deployment_id, "status": result.status})
