"""Release API client for GitHub and Gitea."""

from dataclasses import dataclass, field
from typing import Callable
import logging

import httpx

from grd import __version__
from grd.core.errors import ApiError, NetworkError
from grd.core.providers import normalize_host
from grd.models.release import Release
from grd.models.repository import Provider, Repository

logger = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"
USER_AGENT = f"grd/{__version__}"


def github_releases_url(repository: Repository) -> str:
    if repository.host is None or normalize_host(repository.host) == "github.com":
        base = GITHUB_API_BASE
    else:
        # GitHub Enterprise Server
        base = f"{repository.scheme}://{repository.host}/api/v3"
    return f"{base}/repos/{repository.owner}/{repository.name}/releases"


def gitea_releases_url(repository: Repository) -> str:
    return (
        f"{repository.scheme}://{repository.host}{repository.sub_path}"
        f"/api/v1/repos/{repository.owner}/{repository.name}/releases"
    )


@dataclass(frozen=True)
class ApiDialect:
    """How one provider exposes its release list."""

    releases_url: Callable[[Repository], str]
    auth_scheme: str
    params: dict = field(default_factory=dict)
    headers: dict = field(default_factory=dict)


DIALECTS: dict[Provider, ApiDialect] = {
    Provider.GITHUB: ApiDialect(
        releases_url=github_releases_url,
        auth_scheme="Bearer",
        params={"per_page": 100},
        headers={
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        },
    ),
    Provider.GITEA: ApiDialect(
        releases_url=gitea_releases_url,
        auth_scheme="token",
        params={"limit": 50},
        headers={"Accept": "application/json"},
    ),
}


def parse_releases(payload) -> list[Release]:
    """Parse a release list response, skipping drafts."""
    if not isinstance(payload, list):
        raise ApiError("Unexpected API response: expected a list of releases")

    releases = []
    for data in payload:
        try:
            release = Release.from_api_response(data)
        except (KeyError, TypeError, AttributeError) as e:
            raise ApiError(f"Unexpected API response: malformed release ({e!r})") from e
        if not release.draft:
            releases.append(release)
    return releases


class ReleaseClient:
    """Client for the release APIs of all supported providers."""

    def __init__(
        self,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.token = token
        self.client = httpx.Client(
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.client.close()

    def _headers(self, dialect: ApiDialect) -> dict:
        headers = dict(dialect.headers)
        if self.token:
            headers["Authorization"] = f"{dialect.auth_scheme} {self.token}"
        return headers

    def list_releases(self, repository: Repository) -> list[Release]:
        """Get releases of a repository, newest first as the API orders them."""
        dialect = DIALECTS[repository.provider]
        url = dialect.releases_url(repository)
        logger.info("Fetching releases from %s", url)

        try:
            response = self.client.get(
                url, params=dialect.params, headers=self._headers(dialect)
            )
        except httpx.TransportError as e:
            raise NetworkError(f"HTTP request to {url} failed: {e}") from e

        logger.debug("%s answered HTTP %s", url, response.status_code)

        if response.status_code == 404:
            raise ApiError(f"Repository {repository} not found")
        if response.status_code in (401, 403):
            raise ApiError(
                f"Access to {repository} denied (HTTP {response.status_code}). "
                "Check your token or the API rate limit."
            )
        if not response.is_success:
            raise ApiError(
                f"Failed to list releases of {repository}: HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ApiError(f"Could not deserialize JSON from {url}: {e}") from e

        releases = parse_releases(payload)
        logger.info("Found %d release(s) for %s", len(releases), repository)
        return releases
