"""Deployment payload normalization service."""

from typing import Any

from cocs_bot.adapters.cloudflare import CloudflarePagesAdapter
from cocs_bot.domain.models import DeploymentInfo


def is_valid_deployment_payload(payload: Any) -> bool:
    """Cheap shape check before normalization."""

    return CloudflarePagesAdapter().is_valid(payload)


def normalize_deployment_payload(payload: dict[str, Any], default_project_name: str = "tlc-survey") -> DeploymentInfo:
    """Normalize a Cloudflare Pages payload into a canonical deployment record."""

    return CloudflarePagesAdapter(default_project_name=default_project_name).normalize(payload)
