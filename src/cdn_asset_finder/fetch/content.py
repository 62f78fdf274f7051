from __future__ import annotations

from ..github.client import GitHubClient
from ..ratelimit import RateLimiter


class ContentFetcher:
    """Fetches raw file bodies from GitHub repositories."""

    def __init__(self, api: GitHubClient, limiter: RateLimiter):
        self._api = api
        self._limiter = limiter

    async def fetch_raw(self, owner: str, repo: str, path: str) -> str:
        """Return the file at ``path`` as text.

        Raises ``httpx.HTTPStatusError`` when the path does not exist and
        ``NotAFileError`` when it is a directory or other non-file entry.
        """
        await self._limiter.ensure_capacity()
        return await self._api.get_raw_content(owner, repo, path)
