"""Deployment webhook orchestration."""

import json
from typing import Any

from cocs_bot.config import DEFAULT_REPO_NAME, DEFAULT_REPO_OWNER, Settings
from cocs_bot.domain.errors import MalformedPayloadError
from cocs_bot.domain.models import DeploymentInfo, WebhookResult
from cocs_bot.services.normalization import is_valid_deployment_payload, normalize_deployment_payload
from cocs_bot.services.notifier import Notifier
from cocs_bot.utils.formatting import commit_url
from cocs_bot.utils.logging import get_logger

logger = get_logger(__name__)

PAYLOAD_PREVIEW_CHARS = 200


def attach_commit_url(info: DeploymentInfo, settings: Settings) -> DeploymentInfo:
    """Fill in a GitHub commit link when the payload carried a hash but no URL."""

    if not info.commit_hash or info.commit_url:
        return info
    owner = settings.github_repo_owner or info.repo_owner or DEFAULT_REPO_OWNER
    name = settings.github_repo_name or info.repo_name or DEFAULT_REPO_NAME
    return info.model_copy(update={"commit_url": commit_url(owner, name, info.commit_hash)})


async def process_deployment_event(payload: Any, settings: Settings, notifier: Notifier) -> WebhookResult:
    """Validate, normalize and deliver one deployment event.

    Non-terminal statuses are skipped without contacting Discord.
    """

    if not is_valid_deployment_payload(payload):
        logger.warning("webhook.invalid_payload", preview=json.dumps(payload, default=str)[:PAYLOAD_PREVIEW_CHARS])
        raise MalformedPayloadError("Invalid payload structure")

    info = normalize_deployment_payload(payload, default_project_name=settings.default_project_name)
    info = attach_commit_url(info, settings)

    if not info.is_terminal:
        logger.info("webhook.skipped", deployment_id=info.id, status=info.status)
        return WebhookResult(delivered=False, deployment_id=info.id, status=info.status)

    await notifier.notify_build(info)
    return WebhookResult(delivered=True, deployment_id=info.id, status=info.status)
