"""Shared-secret checks for inbound webhooks."""

from cocs_bot.config import Settings
from cocs_bot.domain.errors import ConfigurationMissingError, UnauthorizedError

WEBHOOK_SECRET_HEADER = "X-Webhook-Secret"


def _xor_accumulate(left: bytes, right: bytes) -> tuple[int, int]:
    """XOR every byte pair; returns the accumulator and the number of bytes scanned."""

    result = 0
    scanned = 0
    for a, b in zip(left, right):
        result |= a ^ b
        scanned += 1
    return result, scanned


def secure_compare(provided: str | None, expected: str | None) -> bool:
    """Compare two secrets without exiting early on the first mismatch."""

    if not isinstance(provided, str) or not isinstance(expected, str):
        return False
    left = provided.encode("utf-8")
    right = expected.encode("utf-8")
    if len(left) != len(right):
        return False
    result, _ = _xor_accumulate(left, right)
    return result == 0


def require_configuration(settings: Settings) -> None:
    if not settings.discord_bot_token:
        raise ConfigurationMissingError("Bot token not configured")
    if not settings.discord_channel_id:
        raise ConfigurationMissingError("Discord channel ID not configured")


def verify_webhook_secret(settings: Settings, provided: str | None) -> None:
    """No-op when no shared secret is configured."""

    if not settings.webhook_secret:
        return
    if not secure_compare(provided, settings.webhook_secret):
        raise UnauthorizedError()
