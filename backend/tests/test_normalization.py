import json
from datetime import datetime
from pathlib import Path

import pytest

from cocs_bot.services.normalization import is_valid_deployment_payload, normalize_deployment_payload

FIXTURES = Path(__file__).resolve().parents[2] / "fixtures"


def test_cloudflare_fixture_normalizes_to_deployment_info() -> None:
    payload = json.loads((FIXTURES / "cloudflare_pages_success.json").read_text())
    info = normalize_deployment_payload(payload)

    assert info.id == "a1b2c3d4-5678-90ab-cdef-1234567890ab"
    assert info.project_name == "tlc-survey"
    assert info.environment == "production"
    assert info.status == "success"
    assert info.is_success is True
    assert info.is_failure is False
    assert info.branch == "main"
    assert info.commit_hash == "9f8e7d6c5b4a39281706f5e4d3c2b1a098765432"
    assert info.commit_author == "octocat"
    assert info.build_time == 84
    assert info.repo_owner == "TLC-Community-Survey"
    assert info.repo_name == "Survey"
    assert info.latest_stage["name"] == "deploy"
    assert len(info.stages) == 2
    assert info.raw is payload


def test_latest_stage_status_wins_over_deployment_status() -> None:
    payload = {"deployment": {"status": "active", "latest_stage": {"status": "success"}}}
    info = normalize_deployment_payload(payload)

    assert info.status == "success"
    assert info.is_success is True
    assert info.is_failure is False


def test_nested_deployment_value_wins_over_flat_value() -> None:
    payload = {"branch": "flat-branch", "deployment": {"id": "d1", "branch": "nested-branch"}}
    info = normalize_deployment_payload(payload)

    assert info.branch == "nested-branch"


def test_nested_deployment_does_not_fall_back_to_flat_fields() -> None:
    payload = {"commit_hash": "abc1234", "deployment": {"id": "d1"}}
    info = normalize_deployment_payload(payload)

    assert info.commit_hash == ""


def test_project_name_falls_back_to_top_level_then_default() -> None:
    top_level = normalize_deployment_payload({"project_name": "docs", "deployment": {"id": "d1"}})
    assert top_level.project_name == "docs"

    defaulted = normalize_deployment_payload({"deployment": {"id": "d1"}}, default_project_name="site")
    assert defaulted.project_name == "site"


def test_flat_payload_is_read_as_deployment() -> None:
    info = normalize_deployment_payload({"deployment_id": "d9", "status": "failure", "git_branch": "dev"})

    assert info.id == "d9"
    assert info.is_failure is True
    assert info.branch == "dev"


def test_alias_keys_are_tried_in_order() -> None:
    info = normalize_deployment_payload(
        {
            "deployment": {
                "id": "",
                "deployment_id": "d2",
                "git_commit_hash": "deadbeef",
                "author": "alice",
                "deployment_url": "https://d2.pages.dev",
                "logs_url": "https://logs/d2",
                "duration": 42,
                "created_on": "2026-01-01T00:00:00Z",
                "build_error": {"code": 1},
                "message": "boom",
            }
        }
    )

    assert info.id == "d2"
    assert info.commit_hash == "deadbeef"
    assert info.commit_author == "alice"
    assert info.deployment_url == "https://d2.pages.dev"
    assert info.build_logs_url == "https://logs/d2"
    assert info.build_time == 42
    assert info.created_at == "2026-01-01T00:00:00Z"
    assert info.error == {"code": 1}
    assert info.error_message == "boom"


def test_defaults_for_sparse_payload() -> None:
    info = normalize_deployment_payload({"status": "queued"})

    assert info.id is None
    assert info.environment == "production"
    assert info.branch == "main"
    assert info.commit_hash == ""
    assert info.build_time is None
    assert info.error is None
    assert info.error_message is None
    assert info.stages == []
    assert info.latest_stage is None
    assert info.is_terminal is False
    datetime.fromisoformat(info.created_at.replace("Z", "+00:00"))


def test_missing_status_is_unknown() -> None:
    info = normalize_deployment_payload({"id": "d1"})

    assert info.status == "unknown"
    assert info.is_success is False
    assert info.is_failure is False


def test_zero_build_time_is_present() -> None:
    info = normalize_deployment_payload({"deployment": {"id": "d1", "build_time": 0, "duration": 30}})

    assert info.build_time == 0


@pytest.mark.parametrize("status", ["SUCCESS", "succeeded", "Success", "failed"])
def test_status_classification_is_exact(status: str) -> None:
    info = normalize_deployment_payload({"deployment": {"status": status}})

    assert info.status == status
    assert info.is_terminal is False


def test_commit_url_from_payload_is_kept() -> None:
    info = normalize_deployment_payload({"deployment": {"commit_url": "https://example.com/c/1"}})

    assert info.commit_url == "https://example.com/c/1"


@pytest.mark.parametrize(
    "payload",
    [
        {"deployment": {}},
        {"deployment_id": "d1"},
        {"id": 0},
        {"status": "success"},
        {"deployment": {"status": "building"}},
        {"latest_stage": {"status": "failure"}},
    ],
)
def test_validator_accepts_deployment_or_status_fields(payload) -> None:
    assert is_valid_deployment_payload(payload) is True


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "deployment",
        42,
        ["deployment"],
        {},
        {"project_name": "site", "branch": "main"},
        {"id": "", "status": None},
        {"latest_stage": {"name": "build"}},
    ],
)
def test_validator_rejects_payloads_without_identity_or_status(payload) -> None:
    assert is_valid_deployment_payload(payload) is False


@pytest.mark.parametrize("build_time", ["fast", float("inf"), float("nan"), [12], {"s": 3}])
def test_unusable_build_time_becomes_none(build_time) -> None:
    info = normalize_deployment_payload({"deployment": {"id": "d1", "build_time": build_time}})

    assert info.build_time is None


def test_numeric_string_build_time_is_converted() -> None:
    info = normalize_deployment_payload({"deployment": {"id": "d1", "duration": "84.5"}})

    assert info.build_time == 84.5
