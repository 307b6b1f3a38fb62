"""Ambient repository context for a dependency check run."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dependency_check.github_client import (
    GitHubInputError,
    parse_repo_full_name,
    validate_pr_number,
)

GITHUB_REPOSITORY_ENV_VAR = "GITHUB_REPOSITORY"
GITHUB_EVENT_PATH_ENV_VAR = "GITHUB_EVENT_PATH"


@dataclass(frozen=True, slots=True)
class RepositoryContext:
    """Repository and pull request being checked."""

    owner: str
    repo: str
    pr_number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def _read_event_payload(event_path: Path) -> dict[str, Any]:
    """Load the GitHub Actions event payload JSON."""
    try:
        payload = json.loads(event_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise GitHubInputError(f"Could not read event payload '{event_path}': {error}") from error
    if not isinstance(payload, dict):
        raise GitHubInputError(f"Event payload '{event_path}' is not a JSON object.")
    return payload


def pr_number_from_event(payload: dict[str, Any]) -> int | None:
    """Return the pull request or issue number carried by an event payload."""
    for key in ("pull_request", "issue"):
        section = payload.get(key)
        if isinstance(section, dict):
            number = section.get("number")
            if isinstance(number, int) and not isinstance(number, bool):
                return number
    number = payload.get("number")
    if isinstance(number, int) and not isinstance(number, bool):
        return number
    return None


def resolve_repository_context(
    *,
    repo_full_name: str | None = None,
    pr_number: int | None = None,
) -> RepositoryContext:
    """Resolve the run context from explicit values, then the Actions environment."""
    resolved_repo = repo_full_name or os.getenv(GITHUB_REPOSITORY_ENV_VAR)
    if not resolved_repo:
        raise GitHubInputError(
            f"Repository is not set. Pass --repo or set {GITHUB_REPOSITORY_ENV_VAR}."
        )
    owner, repo = parse_repo_full_name(resolved_repo)

    if pr_number is None:
        event_path = os.getenv(GITHUB_EVENT_PATH_ENV_VAR)
        if event_path:
            pr_number = pr_number_from_event(_read_event_payload(Path(event_path)))
    if pr_number is None:
        raise GitHubInputError(
            f"Pull request number is not set. Pass --pr or set {GITHUB_EVENT_PATH_ENV_VAR}."
        )

    return RepositoryContext(owner=owner, repo=repo, pr_number=validate_pr_number(pr_number))
