"""Unit tests for repository context resolution."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from dependency_check.context import (
    RepositoryContext,
    pr_number_from_event,
    resolve_repository_context,
)
from dependency_check.github_client import GitHubInputError


@pytest.fixture
def clean_actions_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.delenv("GITHUB_REPOSITORY", raising=False)
    monkeypatch.delenv("GITHUB_EVENT_PATH", raising=False)
    return monkeypatch


@pytest.mark.unit
def test_resolve_repository_context_uses_explicit_values(
    clean_actions_env: pytest.MonkeyPatch,
) -> None:
    context = resolve_repository_context(repo_full_name="acme/widgets", pr_number=12)

    assert context == RepositoryContext(owner="acme", repo="widgets", pr_number=12)
    assert context.full_name == "acme/widgets"


@pytest.mark.unit
def test_resolve_repository_context_reads_actions_environment(
    clean_actions_env: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    event_path = tmp_path / "event.json"
    event_path.write_text(json.dumps({"pull_request": {"number": 77}}), encoding="utf-8")
    clean_actions_env.setenv("GITHUB_REPOSITORY", "octo/tools")
    clean_actions_env.setenv("GITHUB_EVENT_PATH", str(event_path))

    context = resolve_repository_context()

    assert context == RepositoryContext(owner="octo", repo="tools", pr_number=77)


@pytest.mark.unit
def test_resolve_repository_context_requires_repository(
    clean_actions_env: pytest.MonkeyPatch,
) -> None:
    with pytest.raises(GitHubInputError, match="GITHUB_REPOSITORY"):
        resolve_repository_context(pr_number=1)


@pytest.mark.unit
def test_resolve_repository_context_requires_pr_number(
    clean_actions_env: pytest.MonkeyPatch,
) -> None:
    with pytest.raises(GitHubInputError, match="Pull request number"):
        resolve_repository_context(repo_full_name="acme/widgets")


@pytest.mark.unit
def test_resolve_repository_context_rejects_unreadable_event(
    clean_actions_env: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    event_path = tmp_path / "event.json"
    event_path.write_text("{not json", encoding="utf-8")
    clean_actions_env.setenv("GITHUB_EVENT_PATH", str(event_path))

    with pytest.raises(GitHubInputError, match="Could not read event payload"):
        resolve_repository_context(repo_full_name="acme/widgets")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("payload", "expected"),
    [
        ({"pull_request": {"number": 5}, "number": 9}, 5),
        ({"issue": {"number": 6}}, 6),
        ({"number": 9}, 9),
        ({"action": "opened"}, None),
        ({"number": True}, None),
    ],
)
def test_pr_number_from_event(payload: dict[str, object], expected: int | None) -> None:
    assert pr_number_from_event(payload) == expected
