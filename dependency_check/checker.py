"""Resolution of dependency references against a lookup capability."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

import httpx

from dependency_check.github_client import GitHubApiError, IssueState, PullRequestState
from dependency_check.schema import DependencyReference, EntityKind, ResolvedEntity, RunOutcome

logger = logging.getLogger(__name__)

LOOKUP_ERRORS: tuple[type[Exception], ...] = (GitHubApiError, httpx.HTTPError)


class DependencyLookup(Protocol):
    """Capability to fetch an issue or pull request by owner, repo and number."""

    def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestState:
        """Fetch a pull request, raising a lookup error when it cannot be found."""

    def get_issue(self, owner: str, repo: str, number: int) -> IssueState:
        """Fetch an issue, raising a lookup error when it cannot be found."""


@dataclass(frozen=True, slots=True)
class Found:
    """Reference located as one entity kind."""

    kind: EntityKind
    entity: PullRequestState | IssueState


@dataclass(frozen=True, slots=True)
class NotFound:
    """Reference located as neither a pull request nor an issue."""

    reference: DependencyReference


LookupResult = Found | NotFound


def is_pull_request_open(pull_request: PullRequestState) -> bool:
    """A pull request is open when it is neither merged nor closed."""
    return not pull_request.merged and pull_request.closed_at is None


def is_issue_open(issue: IssueState) -> bool:
    """An issue is open when it has no closed timestamp."""
    return issue.closed_at is None


def resolve_reference(reference: DependencyReference, lookup: DependencyLookup) -> LookupResult:
    """Look up a reference as a pull request first, then as an issue."""
    logger.info("  Fetching pull request %s", reference)
    try:
        pull_request = lookup.get_pull_request(reference.owner, reference.repo, reference.number)
    except LOOKUP_ERRORS as error:
        logger.warning("    Pull request lookup failed: %s", error)
    else:
        return Found(kind=EntityKind.PULL_REQUEST, entity=pull_request)

    logger.info("  Fetching issue %s", reference)
    try:
        issue = lookup.get_issue(reference.owner, reference.repo, reference.number)
    except LOOKUP_ERRORS as error:
        logger.warning("    Issue lookup failed: %s", error)
    else:
        return Found(kind=EntityKind.ISSUE, entity=issue)

    return NotFound(reference=reference)


def classify(found: Found) -> ResolvedEntity:
    """Build the resolved entity for a successful lookup."""
    if isinstance(found.entity, PullRequestState):
        is_open = is_pull_request_open(found.entity)
    else:
        is_open = is_issue_open(found.entity)
    return ResolvedEntity(
        kind=found.kind,
        number=found.entity.number,
        title=found.entity.title,
        is_open=is_open,
    )


def check_dependencies(
    references: Iterable[DependencyReference],
    lookup: DependencyLookup,
) -> RunOutcome:
    """Resolve each reference in order and collect the ones still open."""
    outcome = RunOutcome()
    for reference in references:
        result = resolve_reference(reference, lookup)
        if isinstance(result, NotFound):
            logger.info("    Could not locate %s. Will need to verify manually.", reference)
            outcome.lookup_failures += 1
            continue

        entity = classify(result)
        label = "PR" if entity.kind is EntityKind.PULL_REQUEST else "Issue"
        if entity.is_open:
            logger.info("    %s is still open.", label)
            outcome.unresolved.append(entity)
        else:
            logger.info("    %s has been closed.", label)
    return outcome
