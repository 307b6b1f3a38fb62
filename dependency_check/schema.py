"""Schema contract for dependency references and check outcomes."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class EntityKind(StrEnum):
    """Kinds of GitHub entities a dependency can resolve to."""

    PULL_REQUEST = "pull_request"
    ISSUE = "issue"


class DependencyReference(BaseModel):
    """Issue or pull request referenced as a dependency in a PR body."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    number: int = Field(ge=0)

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


class ResolvedEntity(BaseModel):
    """Fetched dependency classified by kind and open status."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: EntityKind
    number: int
    title: str
    is_open: bool


class RunOutcome(BaseModel):
    """Accumulated result of checking every dependency reference."""

    model_config = ConfigDict(extra="forbid")

    unresolved: list[ResolvedEntity] = Field(default_factory=list)
    lookup_failures: int = Field(default=0, ge=0)

    @property
    def passed(self) -> bool:
        """Return whether no dependency is still open."""
        return not self.unresolved
