"""Integration tests for GitHub client against live GitHub API."""

from __future__ import annotations

import os

import pytest
from dependency_check.checker import check_dependencies
from dependency_check.github_client import (
    GitHubDependencyLookup,
    build_github_client,
    fetch_pull_request_state,
    parse_repo_full_name,
)
from dependency_check.schema import DependencyReference


def _integration_target() -> tuple[str, str, int]:
    """Return owner/repo/pr target configured for integration tests."""
    repo = os.getenv("GITHUB_TEST_REPO")
    pr_value = os.getenv("GITHUB_TEST_PR")
    if not repo or not pr_value:
        pytest.skip("Set GITHUB_TEST_REPO and GITHUB_TEST_PR to run GitHub integration tests.")
    try:
        pr_number = int(pr_value)
    except ValueError as error:
        raise pytest.SkipTest("GITHUB_TEST_PR must be an integer.") from error
    owner, name = parse_repo_full_name(repo)
    return owner, name, pr_number


def _has_github_token() -> bool:
    """Return whether a GitHub token is configured."""
    return bool(os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN"))


@pytest.mark.integration
def test_live_fetch_pull_request_state() -> None:
    if not _has_github_token():
        pytest.skip("Set GITHUB_TOKEN or GH_TOKEN for integration tests.")
    owner, repo, pr_number = _integration_target()

    with build_github_client(timeout_seconds=20) as client:
        state = fetch_pull_request_state(client=client, owner=owner, repo=repo, number=pr_number)

    assert state.number == pr_number
    assert state.title


@pytest.mark.integration
def test_live_check_resolves_target_pull_request() -> None:
    if not _has_github_token():
        pytest.skip("Set GITHUB_TOKEN or GH_TOKEN for integration tests.")
    owner, repo, pr_number = _integration_target()
    reference = DependencyReference(owner=owner, repo=repo, number=pr_number)

    with build_github_client(timeout_seconds=20) as client:
        outcome = check_dependencies([reference], GitHubDependencyLookup(client))

    assert outcome.lookup_failures == 0
    assert len(outcome.unresolved) <= 1
