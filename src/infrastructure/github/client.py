"""GitHub public repository lookup.

Read-only passthrough used to enrich profiles with a user's latest public
repositories. Upstream failures are reported, never allowed to crash the
request worker.
"""

from dataclasses import asdict, dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import GitHubProfileNotFoundError, UpstreamServiceError

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    """The subset of a GitHub repository payload exposed to clients."""

    name: str
    full_name: str
    html_url: str
    description: Optional[str] = None
    language: Optional[str] = None
    stargazers_count: int = 0
    watchers_count: int = 0
    forks_count: int = 0
    created_at: Optional[str] = None

    @classmethod
    def from_payload(cls, item: dict[str, Any]) -> "RepositorySummary":
        return cls(
            name=item["name"],
            full_name=item["full_name"],
            html_url=item["html_url"],
            description=item.get("description"),
            language=item.get("language"),
            stargazers_count=item.get("stargazers_count", 0),
            watchers_count=item.get("watchers_count", 0),
            forks_count=item.get("forks_count", 0),
            created_at=item.get("created_at"),
        )

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


class GitHubClient:
    """Fetches a user's public repositories from the GitHub REST API."""

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        token: str = settings.github_token,
        repo_count: int = settings.github_repo_count,
        timeout: float = settings.github_timeout_seconds,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._repo_count = repo_count
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.app_name,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def fetch(self, username: str) -> list[RepositorySummary]:
        """
        Get the user's oldest-created public repositories.

        Raises:
            GitHubProfileNotFoundError: GitHub answered with a non-success status
            UpstreamServiceError: GitHub could not be reached or sent garbage
        """
        params = {
            "per_page": self._repo_count,
            "sort": "created",
            "direction": "asc",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._headers(),
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(f"/users/{quote(username, safe='')}/repos", params=params)
        except httpx.HTTPError:
            logger.exception("github_request_failed", username=username)
            raise UpstreamServiceError("github")

        if response.status_code != httpx.codes.OK:
            logger.info(
                "github_profile_not_found",
                username=username,
                upstream_status=response.status_code,
            )
            raise GitHubProfileNotFoundError(username)

        try:
            return [RepositorySummary.from_payload(item) for item in response.json()]
        except (ValueError, KeyError, TypeError):
            logger.exception("github_payload_invalid", username=username)
            raise UpstreamServiceError("github")
