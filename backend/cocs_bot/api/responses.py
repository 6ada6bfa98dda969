"""Response helpers shared by routes and exception handlers."""

from typing import Any

from fastapi.responses import JSONResponse

ALLOW_ORIGIN = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **ALLOW_ORIGIN,
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Webhook-Secret",
}


class CORSJSONResponse(JSONResponse):
    """JSON response that always carries a permissive CORS origin."""

    def __init__(self, content: Any, status_code: int = 200, headers: dict[str, str] | None = None, **kwargs: Any) -> None:
        super().__init__(content, status_code=status_code, headers={**ALLOW_ORIGIN, **(headers or {})}, **kwargs)


def error_response(message: str, status_code: int, headers: dict[str, str] | None = None) -> CORSJSONResponse:
    return CORSJSONResponse({"error": message}, status_code=status_code, headers=headers)
