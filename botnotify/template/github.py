"""Repository content fetcher backed by the GitHub contents API."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx

from botnotify.errors import ConfigError, FetchError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class ContentFetcher(ABC):
    """Source of template files stored in a repository."""

    @abstractmethod
    async def fetch(self, path: str, ref: str) -> dict[str, Any]:
        """Return the file record for ``path`` at ``ref``.

        The record carries the file body base64-encoded under ``content``.
        """
        ...


def split_repository(repository: str | None) -> tuple[str, str]:
    """Split ``owner/repo`` into its two parts."""
    owner, _, repo = (repository or "").partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigError(
            f"Repository must be given as owner/repo, got {repository!r}",
        )
    return owner, repo


class GitHubContentFetcher(ContentFetcher):
    """Reads files through ``GET /repos/{owner}/{repo}/contents/{path}``."""

    def __init__(
        self,
        token: str,
        repository: str | None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
    ) -> None:
        self._repository = repository
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout

    def content_url(self, path: str) -> str:
        owner, repo = split_repository(self._repository)
        return (
            f"{self._api_url}/repos/{owner}/{repo}"
            f"/contents/{quote(path.lstrip('/'))}"
        )

    async def fetch(self, path: str, ref: str) -> dict[str, Any]:
        url = self.content_url(path)
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
        }

        try:
            async with httpx.AsyncClient(verify=True) as client:
                resp = await client.get(
                    url, params={"ref": ref}, headers=headers, timeout=self._timeout,
                )
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Failed to get {path}@{ref} from {self._repository}: "
                f"HTTP {e.response.status_code}",
                path=path,
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(
                f"Failed to get {path}@{ref} from {self._repository}: {e}",
                path=path,
            ) from e
        except ValueError as e:
            raise FetchError(f"Contents API returned invalid JSON for {path}", path=path) from e

        if not isinstance(data, dict) or not isinstance(data.get("content"), str):
            raise FetchError(f"Path {path} is not a file", path=path)

        logger.debug("Fetched %s@%s from %s", path, ref, self._repository)
        return data
