"""Domain schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DeploymentInfo(BaseModel):
    """Canonical deployment event derived from a hosting provider webhook."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    project_name: str
    environment: str = "production"
    status: str = "unknown"
    is_success: bool = False
    is_failure: bool = False
    branch: str = "main"
    commit_hash: str = ""
    commit_message: str = ""
    commit_author: str = ""
    deployment_url: str = ""
    build_logs_url: str = ""
    commit_url: str = ""
    build_time: float | None = None
    created_at: str
    error: Any | None = None
    error_message: str | None = None
    stages: list[Any] = Field(default_factory=list)
    latest_stage: Any | None = None
    repo_owner: str | None = None
    repo_name: str | None = None
    raw: Any = None

    @model_validator(mode="after")
    def validate_classification(self) -> "DeploymentInfo":
        if self.is_success and self.is_failure:
            raise ValueError("a deployment cannot be both successful and failed")
        return self

    @property
    def is_terminal(self) -> bool:
        return self.is_success or self.is_failure


class EmbedField(BaseModel):
    name: str
    value: str
    inline: bool = False


class EmbedFooter(BaseModel):
    text: str


class NotificationDocument(BaseModel):
    """Discord embed rendered for a build notification."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    color: int
    timestamp: str
    fields: list[EmbedField] = Field(default_factory=list)
    footer: EmbedFooter


class WebhookResult(BaseModel):
    """Outcome of processing a single webhook delivery."""

    delivered: bool
    deployment_id: str | None = None
    status: str
