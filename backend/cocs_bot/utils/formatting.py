"""Display helpers for deployment details."""

import math

GITHUB_COMMIT_URL = "https://github.com/{owner}/{repo}/commit/{sha}"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def short_commit_hash(commit_hash: str | None) -> str:
    """Return the first 7 characters of a commit hash."""

    if not commit_hash:
        return "unknown"
    return commit_hash[:7]


def format_build_time(seconds: float | None) -> str:
    """Format a build duration in seconds, e.g. ``65 -> "1m 5s"``.

    Zero and missing durations both render as ``N/A``.
    """

    if not seconds:
        return "N/A"
    if seconds < 60:
        return f"{_round_half_up(seconds)}s"

    minutes = math.floor(seconds / 60)
    remaining = _round_half_up(seconds % 60)
    if remaining == 0:
        return f"{minutes}m"
    return f"{minutes}m {remaining}s"


def commit_url(repo_owner: str, repo_name: str, commit_hash: str | None) -> str:
    """Build a GitHub commit URL, or an empty string without a hash."""

    if not commit_hash:
        return ""
    return GITHUB_COMMIT_URL.format(owner=repo_owner, repo=repo_name, sha=commit_hash)


def truncate(text: str, limit: int, marker: str = "...") -> str:
    if len(text) > limit:
        return text[: limit - len(marker)] + marker
    return text
