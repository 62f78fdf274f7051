from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

from ..exceptions import NotAFileError

TEXT_MATCH_MEDIA_TYPE = "application/vnd.github.v3.text-match+json"
RAW_MEDIA_TYPE = "application/vnd.github.raw"


class GitHubClient:
    """Thin async wrapper over the GitHub REST v3 endpoints this tool needs.

    Docs: https://docs.github.com/en/rest/search/search#search-code
    Requires a bearer token; code search is not available anonymously.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str,
        user_agent: str,
        *,
        base_url: Optional[str] = None,
        request_timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {
            "User-Agent": user_agent,
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._client = httpx.AsyncClient(
            base_url=(base_url or self.BASE_URL).rstrip("/"),
            headers=headers,
            timeout=request_timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":  # type: ignore[override]
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:  # type: ignore[override]
        await self.aclose()
        return None

    async def rate_limit(self) -> Tuple[int, float]:
        # GET /rate_limit does not count against the quota
        resp = await self._client.get("/rate_limit")
        resp.raise_for_status()
        core = resp.json()["resources"]["core"]
        return int(core["remaining"]), float(core["reset"])

    async def search_code(self, query: str, *, page: int = 1, per_page: int = 100) -> Dict[str, Any]:
        params = {"q": query, "per_page": per_page, "page": page}
        resp = await self._client.get(
            "/search/code",
            params=params,
            headers={"Accept": TEXT_MATCH_MEDIA_TYPE},
        )
        resp.raise_for_status()
        return resp.json()

    async def get_raw_content(self, owner: str, repo: str, path: str) -> str:
        url = f"/repos/{quote(owner)}/{quote(repo)}/contents/{quote(path)}"
        resp = await self._client.get(url, headers={"Accept": RAW_MEDIA_TYPE})
        resp.raise_for_status()
        ct = resp.headers.get("content-type", "")
        # Directories (and submodules/symlinks) come back as JSON metadata, not raw bytes
        if ct.startswith("application/json"):
            data = resp.json()
            kind = "dir" if isinstance(data, list) else data.get("type")
            if kind != "file":
                raise NotAFileError(f"{owner}/{repo}/{path} is not a regular file ({kind})")
        return resp.text
