"""Adapter interface contracts."""

from abc import ABC, abstractmethod
from typing import Any

from cocs_bot.domain.models import DeploymentInfo


class DeploymentSourceAdapter(ABC):
    """Normalize external deployment webhook payloads."""

    @abstractmethod
    def is_valid(self, payload: Any) -> bool:
        raise NotImplementedError

    @abstractmethod
    def normalize(self, payload: dict[str, Any]) -> DeploymentInfo:
        raise NotImplementedError
