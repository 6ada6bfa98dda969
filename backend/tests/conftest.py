import json
import os

import httpx
import pytest

os.environ.setdefault("DISCORD_BOT_TOKEN", "env-token")
os.environ.setdefault("DISCORD_CHANNEL_ID", "000000")
os.environ.setdefault("LOG_FORMAT", "console")

from fastapi.testclient import TestClient  # noqa: E402

from cocs_bot.config import Settings, get_settings  # noqa: E402
from cocs_bot.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def make_settings(**overrides) -> Settings:
    values = {
        "discord_bot_token": "test-token",
        "discord_channel_id": "123456",
        "webhook_secret": None,
        "github_repo_owner": None,
        "github_repo_name": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class DiscordRecorder:
    """Fake Discord API that records every request it receives."""

    def __init__(self, status_code: int = 200, payload: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = payload if payload is not None else {"id": "msg-1"}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def discord() -> DiscordRecorder:
    return DiscordRecorder()


@pytest.fixture
def client_factory(discord):
    def _factory(**overrides) -> TestClient:
        app = create_app(make_settings(**overrides), transport=discord.transport)
        return TestClient(app)

    return _factory


@pytest.fixture
def settings_factory():
    return make_settings
