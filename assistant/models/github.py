"""GitHub repository and issue summaries."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepoSummary:
    name: str
    language: str | None
    description: str | None
    url: str
    stars: int
    updated_at: str


@dataclass(frozen=True)
class IssueSummary:
    number: int
    title: str
    url: str
    user: str
    created_at: str  # MM/DD
