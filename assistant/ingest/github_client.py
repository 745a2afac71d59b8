"""GitHub REST client for public repository and issue listings."""

import logging
from datetime import datetime

import httpx

from assistant.errors import UpstreamError
from assistant.models.github import IssueSummary, RepoSummary

logger = logging.getLogger(__name__)

GITHUB_BASE_URL = "https://api.github.com"


class GithubClient:
    def __init__(
        self,
        base_url: str = GITHUB_BASE_URL,
        token: str = "",
        issues_per_page: int = 5,
        repos_per_page: int = 30,
        timeout: float = 15.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.issues_per_page = issues_per_page
        self.repos_per_page = repos_per_page
        self.timeout = timeout

    def _headers(self, owner: str) -> dict[str, str]:
        headers = {
            "User-Agent": owner,
            "Accept": "application/vnd.github.v3+json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _get(self, endpoint: str, owner: str, params: dict, detail: str) -> list:
        url = f"{self.base_url}{endpoint}"
        try:
            resp = httpx.get(
                url, params=params, headers=self._headers(owner), timeout=self.timeout
            )
        except httpx.RequestError as e:
            logger.error("GitHub request failed: GET %s -> %s", endpoint, e)
            raise UpstreamError(f"GitHub request failed: {e}", detail=detail) from e

        if resp.status_code >= 400:
            try:
                message = resp.json().get("message")
            except (ValueError, AttributeError):
                message = None
            logger.error("GitHub API %d: GET %s -> %s", resp.status_code, endpoint, message)
            raise UpstreamError(
                message or "GitHub query failed.", resp.status_code, detail=detail
            )
        data = resp.json()
        return data if isinstance(data, list) else []

    def list_repos(self, owner: str) -> list[RepoSummary]:
        """Public repositories of a user or organization, most recently updated first."""
        raw = self._get(
            f"/users/{owner}/repos",
            owner,
            {"sort": "updated", "per_page": self.repos_per_page},
            detail=f"Check that the GitHub user {owner} exists.",
        )
        return [
            RepoSummary(
                name=r.get("name", ""),
                language=r.get("language"),
                description=r.get("description"),
                url=r.get("html_url", ""),
                stars=int(r.get("stargazers_count", 0)),
                updated_at=r.get("updated_at", ""),
            )
            for r in raw
        ]

    def list_issues(self, owner: str, repo: str) -> list[IssueSummary]:
        """Newest open issues of a repository. Pull requests are skipped."""
        raw = self._get(
            f"/repos/{owner}/{repo}/issues",
            owner,
            {
                "state": "open",
                "sort": "created",
                "direction": "desc",
                "per_page": self.issues_per_page,
            },
            detail=f"Check that the repository {owner}/{repo} is public and correctly named.",
        )
        return [
            IssueSummary(
                number=i["number"],
                title=i.get("title", ""),
                url=i.get("html_url", ""),
                user=(i.get("user") or {}).get("login", ""),
                created_at=format_month_day(i.get("created_at", "")),
            )
            for i in raw
            if "pull_request" not in i
        ]


def format_month_day(iso_str: str) -> str:
    """'2024-11-19T08:00:00Z' -> '11/19'. Unparseable input comes back unchanged."""
    try:
        return datetime.fromisoformat(iso_str.replace("Z", "+00:00")).strftime("%m/%d")
    except (ValueError, AttributeError):
        return iso_str
