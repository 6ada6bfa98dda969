"""Discord REST API client."""

from typing import Any

import httpx

from cocs_bot.domain.errors import DiscordAPIError
from cocs_bot.domain.models import DeploymentInfo
from cocs_bot.services.rendering import render_build_embed

DISCORD_API_BASE = "https://discord.com/api/v10"
USER_AGENT = "COCS-Bot/1.0"


class DiscordClient:
    """Bot-token authenticated client for the Discord REST API.

    Holds only configuration; every call opens its own ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        token: str,
        api_base: str = DISCORD_API_BASE,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bot {self.token}",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.request(method, f"{self.api_base}{path}", headers=self.headers(), json=json)
        if not response.is_success:
            raise DiscordAPIError(response.status_code, response.reason_phrase, response.text)
        return response.json() if response.content else {}

    async def send_message(self, channel_id: str, message: dict[str, Any]) -> dict[str, Any]:
        """Post a message (content, embeds, ...) to a channel."""

        return await self._request("POST", f"/channels/{channel_id}/messages", json=message)

    async def send_build_notification(self, channel_id: str, info: DeploymentInfo) -> dict[str, Any]:
        embed = render_build_embed(info)
        return await self.send_message(channel_id, {"embeds": [embed.model_dump()]})

    async def get_bot_user(self) -> dict[str, Any]:
        return await self._request("GET", "/users/@me")

    async def get_channel(self, channel_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/channels/{channel_id}")
