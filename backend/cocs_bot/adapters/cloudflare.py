"""Cloudflare Pages deployment webhook adapter."""

import math
from datetime import datetime, timezone
from typing import Any

from cocs_bot.adapters.interfaces import DeploymentSourceAdapter
from cocs_bot.domain.models import DeploymentInfo

KeyPath = tuple[str, ...]

# Candidate keys per attribute, in priority order, relative to the deployment object.
ID_KEYS: tuple[KeyPath, ...] = (("id",), ("deployment_id",))
ENVIRONMENT_KEYS: tuple[KeyPath, ...] = (("environment",),)
STATUS_KEYS: tuple[KeyPath, ...] = (("latest_stage", "status"), ("status",))
BRANCH_KEYS: tuple[KeyPath, ...] = (("branch",), ("git_branch",))
COMMIT_HASH_KEYS: tuple[KeyPath, ...] = (("commit_hash",), ("git_commit_hash",))
COMMIT_MESSAGE_KEYS: tuple[KeyPath, ...] = (("commit_message",),)
COMMIT_AUTHOR_KEYS: tuple[KeyPath, ...] = (("commit_author",), ("author",))
DEPLOYMENT_URL_KEYS: tuple[KeyPath, ...] = (("url",), ("deployment_url",))
BUILD_LOGS_URL_KEYS: tuple[KeyPath, ...] = (("build_logs_url",), ("logs_url",))
COMMIT_URL_KEYS: tuple[KeyPath, ...] = (("commit_url",),)
BUILD_TIME_KEYS: tuple[KeyPath, ...] = (("build_time",), ("duration",))
CREATED_AT_KEYS: tuple[KeyPath, ...] = (("created_at",), ("created_on",))
ERROR_KEYS: tuple[KeyPath, ...] = (("error",), ("build_error",))
ERROR_MESSAGE_KEYS: tuple[KeyPath, ...] = (("error_message",), ("message",))
REPO_OWNER_KEYS: tuple[KeyPath, ...] = (("source", "config", "owner"),)
REPO_NAME_KEYS: tuple[KeyPath, ...] = (("source", "config", "repo_name"),)


def is_present(value: Any) -> bool:
    """``None`` and the empty string are absent; ``0`` and ``False`` are not."""

    return value is not None and value != ""


def get_path(source: Any, path: KeyPath) -> Any:
    value = source
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def first_present(sources: list[tuple[Any, KeyPath]], default: Any = None) -> Any:
    """Return the first present value among ``(source, path)`` candidates."""

    for source, path in sources:
        value = get_path(source, path)
        if is_present(value):
            return value
    return default


def _text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _seconds(value: Any) -> float | None:
    """Finite number of seconds, or ``None`` when the value is not numeric."""

    try:
        seconds = float(value)
    except (TypeError, ValueError):
        return None
    return seconds if math.isfinite(seconds) else None


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CloudflarePagesAdapter(DeploymentSourceAdapter):
    def __init__(self, default_project_name: str = "tlc-survey") -> None:
        self.default_project_name = default_project_name

    def is_valid(self, payload: Any) -> bool:
        if not isinstance(payload, dict):
            return False
        has_deployment = any(
            is_present(get_path(payload, path)) for path in (("deployment",), ("deployment_id",), ("id",))
        )
        has_status = any(
            is_present(get_path(payload, path))
            for path in (("status",), ("deployment", "status"), ("latest_stage", "status"))
        )
        return has_deployment or has_status

    def normalize(self, payload: dict[str, Any]) -> DeploymentInfo:
        nested = payload.get("deployment")
        if not is_present(nested):
            deployment = payload
        elif isinstance(nested, dict):
            deployment = nested
        else:
            deployment = {}

        def resolve(keys: tuple[KeyPath, ...], default: Any = None) -> Any:
            return first_present([(deployment, path) for path in keys], default)

        classified = resolve(STATUS_KEYS)
        status = _text(classified) if is_present(classified) else "unknown"
        stages = resolve((("stages",),), [])
        latest_stage = resolve((("latest_stage",),))

        return DeploymentInfo(
            id=_text(resolve(ID_KEYS)),
            project_name=_text(
                first_present(
                    [(deployment, ("project_name",)), (payload, ("project_name",))],
                    self.default_project_name,
                )
            ),
            environment=_text(resolve(ENVIRONMENT_KEYS, "production")),
            status=status,
            is_success=classified == "success",
            is_failure=classified == "failure",
            branch=_text(resolve(BRANCH_KEYS, "main")),
            commit_hash=_text(resolve(COMMIT_HASH_KEYS, "")),
            commit_message=_text(resolve(COMMIT_MESSAGE_KEYS, "")),
            commit_author=_text(resolve(COMMIT_AUTHOR_KEYS, "")),
            deployment_url=_text(resolve(DEPLOYMENT_URL_KEYS, "")),
            build_logs_url=_text(resolve(BUILD_LOGS_URL_KEYS, "")),
            commit_url=_text(resolve(COMMIT_URL_KEYS, "")),
            build_time=_seconds(resolve(BUILD_TIME_KEYS)),
            created_at=_text(resolve(CREATED_AT_KEYS)) or _utc_now_iso(),
            error=resolve(ERROR_KEYS),
            error_message=_text(resolve(ERROR_MESSAGE_KEYS)),
            stages=stages if isinstance(stages, list) else [stages],
            latest_stage=latest_stage,
            repo_owner=_text(resolve(REPO_OWNER_KEYS)),
            repo_name=_text(resolve(REPO_NAME_KEYS)),
            raw=payload,
        )
