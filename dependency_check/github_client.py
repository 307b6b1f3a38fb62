"""GitHub API wrapper and auth helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import httpx
from dotenv import load_dotenv

DEFAULT_GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_URL_ENV_VAR = "GITHUB_API_URL"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_JSON_MEDIA_TYPE = "application/vnd.github+json"


class GitHubAuthError(RuntimeError):
    """Raised when required GitHub authentication is missing."""


class GitHubInputError(ValueError):
    """Raised when repository or PR input values are invalid."""


class GitHubApiError(RuntimeError):
    """Raised when a GitHub API request fails."""

    def __init__(self, message: str, *, status_code: int, endpoint: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint


@dataclass(frozen=True, slots=True)
class PullRequestState:
    """Pull request fields needed to decide whether it is still open."""

    number: int
    title: str
    body: str
    merged: bool
    closed_at: datetime | None


@dataclass(frozen=True, slots=True)
class IssueState:
    """Issue fields needed to decide whether it is still open."""

    number: int
    title: str
    closed_at: datetime | None


def _ensure_mapping(value: object, *, context: str) -> dict[str, Any]:
    """Ensure a response fragment is a JSON object."""
    if not isinstance(value, dict):
        raise GitHubApiError(
            f"Expected JSON object for {context}.",
            status_code=500,
            endpoint=context,
        )
    return value


def _require_str(payload: dict[str, Any], *, key: str, endpoint: str) -> str:
    """Read a required string field from payload."""
    value = payload.get(key)
    if not isinstance(value, str):
        raise GitHubApiError(
            f"Expected string field '{key}' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


def _require_bool(payload: dict[str, Any], *, key: str, endpoint: str) -> bool:
    """Read a required boolean field from payload."""
    value = payload.get(key)
    if not isinstance(value, bool):
        raise GitHubApiError(
            f"Expected boolean field '{key}' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


def _require_int(payload: dict[str, Any], *, key: str, endpoint: str) -> int:
    """Read a required integer field from payload."""
    value = payload.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise GitHubApiError(
            f"Expected integer field '{key}' in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    return value


def _optional_timestamp(payload: dict[str, Any], *, key: str, endpoint: str) -> datetime | None:
    """Read an optional ISO 8601 timestamp field from payload."""
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise GitHubApiError(
            f"Expected '{key}' to be a string or null in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )
    try:
        return datetime.fromisoformat(value)
    except ValueError as error:
        raise GitHubApiError(
            f"Expected '{key}' to be an ISO 8601 timestamp in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        ) from error


def _request_json(client: httpx.Client, endpoint: str) -> dict[str, Any]:
    """Perform a single JSON GET request against GitHub API."""
    # Transferred issues and renamed repositories answer with 301.
    response = client.get(
        endpoint,
        headers={"Accept": GITHUB_JSON_MEDIA_TYPE},
        follow_redirects=True,
    )
    if response.status_code >= 300:
        raise GitHubApiError(
            f"GitHub API request failed with status {response.status_code} for '{endpoint}'.",
            status_code=response.status_code,
            endpoint=endpoint,
        )
    try:
        payload = response.json()
    except ValueError as error:
        raise GitHubApiError(
            f"Expected JSON body in GitHub response for '{endpoint}'.",
            status_code=500,
            endpoint=endpoint,
        ) from error
    return _ensure_mapping(payload, context=endpoint)


def fetch_pull_request_state(
    *,
    client: httpx.Client,
    owner: str,
    repo: str,
    number: int,
) -> PullRequestState:
    """Fetch pull request state from GitHub."""
    endpoint = f"/repos/{owner}/{repo}/pulls/{number}"
    payload = _request_json(client, endpoint)

    body = payload.get("body")
    if body is None:
        body = ""
    elif not isinstance(body, str):
        raise GitHubApiError(
            "Expected 'body' to be a string or null in GitHub response.",
            status_code=500,
            endpoint=endpoint,
        )

    return PullRequestState(
        number=_require_int(payload, key="number", endpoint=endpoint),
        title=_require_str(payload, key="title", endpoint=endpoint),
        body=body,
        merged=_require_bool(payload, key="merged", endpoint=endpoint),
        closed_at=_optional_timestamp(payload, key="closed_at", endpoint=endpoint),
    )


def fetch_issue_state(
    *,
    client: httpx.Client,
    owner: str,
    repo: str,
    number: int,
) -> IssueState:
    """Fetch issue state from GitHub."""
    endpoint = f"/repos/{owner}/{repo}/issues/{number}"
    payload = _request_json(client, endpoint)
    return IssueState(
        number=_require_int(payload, key="number", endpoint=endpoint),
        title=_require_str(payload, key="title", endpoint=endpoint),
        closed_at=_optional_timestamp(payload, key="closed_at", endpoint=endpoint),
    )


class GitHubDependencyLookup:
    """Dependency lookup backed by the GitHub REST API."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestState:
        return fetch_pull_request_state(client=self._client, owner=owner, repo=repo, number=number)

    def get_issue(self, owner: str, repo: str, number: int) -> IssueState:
        return fetch_issue_state(client=self._client, owner=owner, repo=repo, number=number)


def parse_repo_full_name(repo_full_name: str) -> tuple[str, str]:
    """Parse and validate repository input in owner/repo format."""
    owner, separator, repo = repo_full_name.strip().partition("/")
    if not separator or not owner or not repo or "/" in repo:
        raise GitHubInputError(
            f"Invalid repo '{repo_full_name}'. Expected format is owner/repo."
        )
    return owner, repo


def validate_pr_number(pr_number: int) -> int:
    """Validate and normalize pull request number input."""
    if pr_number <= 0:
        raise GitHubInputError(f"Invalid PR number '{pr_number}'. Expected a positive integer.")
    return pr_number


def get_github_token() -> str:
    """Read GitHub token from environment and fail fast if missing."""
    token, _source = get_github_token_with_source()
    return token


def get_github_token_with_source() -> tuple[str, str]:
    """Read GitHub token and return token value with environment source key."""
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

    github_token = os.getenv("GITHUB_TOKEN")
    if github_token:
        return github_token, "GITHUB_TOKEN"

    gh_token = os.getenv("GH_TOKEN")
    if gh_token:
        return gh_token, "GH_TOKEN"

    message = "Missing GitHub token. Set GITHUB_TOKEN (preferred) or GH_TOKEN."
    raise GitHubAuthError(message)


def get_github_api_base_url() -> str:
    """Return the GitHub API base URL, honoring the Actions-provided override."""
    return os.getenv(GITHUB_API_URL_ENV_VAR) or DEFAULT_GITHUB_API_BASE_URL


def fetch_authenticated_user_login(*, client: httpx.Client) -> str:
    """Fetch authenticated GitHub user login for token validation."""
    endpoint = "/user"
    payload = _request_json(client, endpoint)
    return _require_str(payload, key="login", endpoint=endpoint)


def build_github_client(
    timeout_seconds: int = 20,
    *,
    trust_env: bool = True,
) -> httpx.Client:
    """Build an authenticated GitHub HTTP client."""
    token = get_github_token()
    headers = {
        "Accept": GITHUB_JSON_MEDIA_TYPE,
        "Authorization": f"Bearer {token}",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }
    return httpx.Client(
        base_url=get_github_api_base_url(),
        headers=headers,
        timeout=timeout_seconds,
        trust_env=trust_env,
        follow_redirects=True,
    )
