"""Build notification delivery."""

from typing import Any

import httpx

from cocs_bot.adapters.discord import DiscordClient
from cocs_bot.config import Settings
from cocs_bot.domain.models import DeploymentInfo
from cocs_bot.utils.logging import get_logger

logger = get_logger(__name__)


class Notifier:
    """Posts build notifications to the configured Discord channel."""

    def __init__(self, client: DiscordClient, channel_id: str) -> None:
        self.client = client
        self.channel_id = channel_id

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> "Notifier":
        client = DiscordClient(
            settings.discord_bot_token or "",
            api_base=settings.discord_api_base,
            timeout=settings.discord_timeout_seconds,
            transport=transport,
        )
        return cls(client, settings.discord_channel_id or "")

    async def notify_build(self, info: DeploymentInfo) -> dict[str, Any]:
        message = await self.client.send_build_notification(self.channel_id, info)
        logger.info("notification.sent", deployment_id=info.id, status=info.status, message_id=message.get("id"))
        return message
