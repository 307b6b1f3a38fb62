"""Dependency check orchestration entrypoints."""

from __future__ import annotations

import logging

from dependency_check.checker import DependencyLookup, check_dependencies
from dependency_check.context import RepositoryContext
from dependency_check.extractor import extract_dependencies
from dependency_check.schema import RunOutcome

logger = logging.getLogger(__name__)


def run_dependency_check(
    *,
    body: str | None,
    context: RepositoryContext,
    lookup: DependencyLookup,
) -> RunOutcome:
    """Extract dependencies from a PR body and check which are still open."""
    if not body:
        logger.info("Pull request body is empty.")
        return RunOutcome()

    logger.info("Reading body of %s#%d...", context.full_name, context.pr_number)
    references = extract_dependencies(body, owner=context.owner, repo=context.repo)

    logger.info("Analyzing %d dependencies...", len(references))
    return check_dependencies(references, lookup)
