"""Error taxonomy for webhook processing."""


class CocsBotError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    expose = True

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationMissingError(CocsBotError):
    """A required secret or setting is not configured."""

    status_code = 500


class UnauthorizedError(CocsBotError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class MalformedPayloadError(CocsBotError):
    """Request body is not JSON or does not look like a deployment event."""

    status_code = 400


class DiscordAPIError(CocsBotError):
    """Discord answered a REST call with a non-2xx status."""

    status_code = 500
    expose = False

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.upstream_status = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"Discord API error: {status_code} {reason} - {body}")
