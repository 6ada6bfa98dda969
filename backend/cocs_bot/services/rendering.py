"""Discord embed rendering for build notifications."""

import json

from cocs_bot.domain.models import DeploymentInfo, EmbedField, EmbedFooter, NotificationDocument
from cocs_bot.utils.formatting import format_build_time, short_commit_hash, truncate

SUCCESS_COLOR = 0x00FF00
FAILURE_COLOR = 0xFF0000
UNKNOWN_COLOR = 0xFFFF00

COMMIT_MESSAGE_LIMIT = 200
ERROR_DETAILS_LIMIT = 1000


def _status_style(info: DeploymentInfo) -> tuple[int, str, str]:
    if info.is_success:
        return SUCCESS_COLOR, "✅", "Success"
    if info.is_failure:
        return FAILURE_COLOR, "❌", "Failure"
    return UNKNOWN_COLOR, "⚠️", "Unknown"


def _description(info: DeploymentInfo) -> str:
    if info.is_failure and info.error_message:
        return f"**Error:** {info.error_message}"
    if info.is_success:
        return "Build completed successfully"
    return f"Build status: {info.status}"


def _error_details(error: object) -> str:
    text = error if isinstance(error, str) else json.dumps(error, separators=(",", ":"), ensure_ascii=False)
    return f"```{text[:ERROR_DETAILS_LIMIT]}```"


def render_build_embed(info: DeploymentInfo) -> NotificationDocument:
    """Render a deployment record as a Discord embed."""

    color, emoji, label = _status_style(info)
    fields: list[EmbedField] = []

    if info.branch:
        fields.append(EmbedField(name="Branch", value=f"`{info.branch}`", inline=True))

    if info.commit_hash:
        short_hash = short_commit_hash(info.commit_hash)
        value = f"[`{short_hash}`]({info.commit_url})" if info.commit_url else f"`{short_hash}`"
        fields.append(EmbedField(name="Commit", value=value, inline=True))

    # A zero build time still gets a field and renders as N/A.
    if info.build_time is not None:
        fields.append(EmbedField(name="Build Time", value=format_build_time(info.build_time), inline=True))

    if info.commit_author:
        fields.append(EmbedField(name="Author", value=info.commit_author, inline=True))

    if info.commit_message:
        fields.append(
            EmbedField(
                name="Commit Message",
                value=truncate(info.commit_message, COMMIT_MESSAGE_LIMIT),
                inline=False,
            )
        )

    if info.deployment_url:
        fields.append(EmbedField(name="Deployment", value=f"[View Deployment]({info.deployment_url})", inline=True))

    if info.build_logs_url:
        fields.append(EmbedField(name="Build Logs", value=f"[View Logs]({info.build_logs_url})", inline=True))

    if info.is_failure and info.error is not None and info.error != "":
        fields.append(EmbedField(name="Error Details", value=_error_details(info.error), inline=False))

    return NotificationDocument(
        title=f"{emoji} Build {label} - {info.project_name}",
        description=_description(info),
        color=color,
        timestamp=info.created_at,
        fields=fields,
        footer=EmbedFooter(text=f"Deployment ID: {info.id or 'unknown'}"),
    )
