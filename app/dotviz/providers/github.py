"""GitHub repository provider.

Reads the dotfiles repository through the GitHub REST API:

- Files: GET /repos/{owner}/{repo}/contents/{path}?ref={branch}
  (base64-encoded ``content`` field)
- Listing: GET /repos/{owner}/{repo}/git/trees/{branch}?recursive=1
- Repository info: GET /repos/{owner}/{repo}
- Latest commit: GET /repos/{owner}/{repo}/commits/{branch}
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from types import TracebackType
from typing import Any, Self

import httpx

from dotviz import __version__
from dotviz.providers.base import FetchError, RepositoryProvider

logger = logging.getLogger(__name__)

API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"


@dataclass(frozen=True, slots=True)
class RepositoryInfo:
    """Summary of a GitHub repository."""

    name: str
    full_name: str
    description: str | None
    url: str
    default_branch: str
    last_updated: str | None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "full_name": self.full_name,
            "description": self.description,
            "url": self.url,
            "default_branch": self.default_branch,
            "last_updated": self.last_updated,
        }


class GitHubProvider(RepositoryProvider):
    """Provider reading a repository branch from the GitHub API.

    The provider owns its HTTP client unless one is passed in, and can be
    used as a context manager to close it.

    Args:
        owner: Repository owner.
        repo: Repository name.
        branch: Branch or ref to read.
        token: Optional API token.
        timeout: Per-request timeout in seconds.
        client: Optional preconfigured httpx client.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        branch: str = "main",
        token: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

        self._headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"dotviz/{__version__}",
            "X-GitHub-Api-Version": API_VERSION,
        }
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    @property
    def description(self) -> str:
        return f"github.com/{self.owner}/{self.repo}@{self.branch}"

    @property
    def repo_url(self) -> str:
        """API URL of the repository."""
        return f"{API_URL}/repos/{self.owner}/{self.repo}"

    def _get_json(
        self,
        url: str,
        what: str,
        params: dict[str, str] | None = None,
        path: str | None = None,
    ) -> Any:
        """GET a JSON document, mapping every failure to FetchError.

        Args:
            url: Absolute API URL.
            what: Short description used in error messages.
            params: Optional query parameters.
            path: Repository path attached to raised errors.

        Returns:
            Decoded JSON body.

        Raises:
            FetchError: On transport errors, non-2xx responses or invalid JSON.
        """
        try:
            response = self._client.get(url, params=params, headers=self._headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "GitHub returned HTTP %d for %s", e.response.status_code, what
            )
            msg = f"Failed to fetch {what} (HTTP {e.response.status_code})"
            raise FetchError(msg, path=path) from e
        except httpx.HTTPError as e:
            logger.error("Request for %s failed: %s", what, e)
            raise FetchError(f"Failed to fetch {what}: {e}", path=path) from e
        except ValueError as e:
            logger.error("Invalid JSON in response for %s", what)
            raise FetchError(f"Failed to fetch {what}: invalid response", path=path) from e

    def get_file(self, path: str) -> str:
        data = self._get_json(
            f"{self.repo_url}/contents/{path}",
            f"file {path}",
            params={"ref": self.branch},
            path=path,
        )

        if not isinstance(data, dict) or data.get("type") != "file" or "content" not in data:
            logger.error("File not found or is a directory: %s", path)
            raise FetchError(f"File not found or is a directory: {path}", path=path)

        try:
            return base64.b64decode(data["content"] or "").decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            logger.error("Cannot decode %s: %s", path, e)
            raise FetchError(f"Failed to decode file: {path}", path=path) from e

    def list_source_paths(self, prefix: str = "") -> list[str]:
        data = self._get_json(
            f"{self.repo_url}/git/trees/{self.branch}",
            "repository tree",
            params={"recursive": "1"},
        )
        if not isinstance(data, dict) or not isinstance(data.get("tree"), list):
            raise FetchError("Failed to fetch repository tree: unexpected response")

        if data.get("truncated"):
            logger.warning("Repository tree for %s is truncated", self.description)

        directory = prefix.strip("/")
        paths: list[str] = []
        for item in data["tree"]:
            if not isinstance(item, dict) or item.get("type") != "blob":
                continue
            path = str(item.get("path", ""))
            if not directory or path.startswith(f"{directory}/"):
                paths.append(path)
        return sorted(paths)

    def get_repo_info(self) -> RepositoryInfo:
        """Fetch repository metadata.

        Returns:
            RepositoryInfo for the configured repository.

        Raises:
            FetchError: If the request fails.
        """
        data = self._get_json(self.repo_url, "repository information")
        try:
            return RepositoryInfo(
                name=data["name"],
                full_name=data["full_name"],
                description=data.get("description"),
                url=data["html_url"],
                default_branch=data["default_branch"],
                last_updated=data.get("updated_at"),
            )
        except (KeyError, TypeError) as e:
            raise FetchError("Failed to fetch repository information: incomplete response") from e

    def get_latest_commit_sha(self) -> str:
        """Fetch the SHA of the latest commit on the configured branch.

        Raises:
            FetchError: If the request fails.
        """
        data = self._get_json(f"{self.repo_url}/commits/{self.branch}", "latest commit")
        sha = data.get("sha") if isinstance(data, dict) else None
        if not isinstance(sha, str):
            raise FetchError("Failed to fetch latest commit: missing sha")
        return sha

    def close(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
