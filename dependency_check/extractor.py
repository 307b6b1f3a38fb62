"""Dependency reference extraction from pull request descriptions."""

from __future__ import annotations

import logging
import re

from dependency_check.schema import DependencyReference

logger = logging.getLogger(__name__)

KEY_PHRASES = r"(?:depends on|blocked by)"
ENTITY_TYPES = r"(?:issues|pull)"
OWNER_PATTERN = r"(?P<owner>[-_A-Za-z0-9]+)"
REPO_PATTERN = r"(?P<repo>[-._A-Za-z0-9]+)"
NUMBER_PATTERN = r"(?P<number>[0-9]+)"
GITHUB_URL_PREFIX = r"https://github\.com/"

LINE_SEPARATOR_PATTERN = re.compile(r"\r\n|\r|\n")
QUICK_LINK_PATTERN = re.compile(
    rf"{KEY_PHRASES} #{NUMBER_PATTERN}",
    re.IGNORECASE | re.ASCII,
)
PARTIAL_LINK_PATTERN = re.compile(
    rf"{KEY_PHRASES} {OWNER_PATTERN}/{REPO_PATTERN}#{NUMBER_PATTERN}",
    re.IGNORECASE | re.ASCII,
)
PARTIAL_URL_PATTERN = re.compile(
    rf"{KEY_PHRASES} {OWNER_PATTERN}/{REPO_PATTERN}/{ENTITY_TYPES}/{NUMBER_PATTERN}",
    re.IGNORECASE | re.ASCII,
)
FULL_URL_PATTERN = re.compile(
    rf"{KEY_PHRASES} {GITHUB_URL_PREFIX}{OWNER_PATTERN}/{REPO_PATTERN}/{ENTITY_TYPES}/"
    rf"{NUMBER_PATTERN}",
    re.IGNORECASE | re.ASCII,
)
MARKDOWN_LINK_PATTERN = re.compile(
    rf"{KEY_PHRASES} \[.*\]\({GITHUB_URL_PREFIX}{OWNER_PATTERN}/{REPO_PATTERN}/"
    rf"{ENTITY_TYPES}/{NUMBER_PATTERN}\)",
    re.IGNORECASE | re.ASCII,
)

# Priority order: the first form that matches a line wins.
EXPLICIT_REPO_FORMS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("partial-link", PARTIAL_LINK_PATTERN),
    ("partial-url", PARTIAL_URL_PATTERN),
    ("full-url", FULL_URL_PATTERN),
    ("markdown", MARKDOWN_LINK_PATTERN),
)


def split_lines(text: str | None) -> list[str]:
    """Split text on LF, CRLF and bare CR line separators."""
    if not text:
        return []
    return LINE_SEPARATOR_PATTERN.split(text)


def _parse_number(digits: str, line: str) -> int | None:
    """Parse a matched decimal number, or return None when it is too long to convert."""
    try:
        return int(digits, 10)
    except ValueError:
        logger.info("  Ignoring unparseable dependency number in '%s'", line)
        return None


def match_dependency_line(line: str, *, owner: str, repo: str) -> DependencyReference | None:
    """Return the dependency referenced by one line, if any.

    Bare ``#<number>`` references resolve against the given ``owner``/``repo``.
    """
    quick_match = QUICK_LINK_PATTERN.search(line)
    if quick_match is not None:
        number = _parse_number(quick_match.group("number"), line)
        if number is None:
            return None
        logger.info("  Found number-referenced dependency in '%s'", line)
        return DependencyReference(owner=owner, repo=repo, number=number)

    for form_name, pattern in EXPLICIT_REPO_FORMS:
        match = pattern.search(line)
        if match is None:
            continue
        number = _parse_number(match.group("number"), line)
        if number is None:
            return None
        logger.info("  Found %s dependency in '%s'", form_name, line)
        return DependencyReference(
            owner=match.group("owner"),
            repo=match.group("repo"),
            number=number,
        )

    logger.info("  Found no dependency in '%s'", line)
    return None


def extract_dependencies(
    text: str | None,
    *,
    owner: str,
    repo: str,
) -> list[DependencyReference]:
    """Extract dependency references from text, one per matching line, in line order."""
    references: list[DependencyReference] = []
    for line in split_lines(text):
        reference = match_dependency_line(line, owner=owner, repo=repo)
        if reference is not None:
            references.append(reference)
    return references
