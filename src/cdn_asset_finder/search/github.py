from __future__ import annotations

import asyncio
import logging
import math
from typing import List

from ..github.client import GitHubClient
from ..ratelimit import RateLimiter
from .base import SearchPage, SearchResultItem

logger = logging.getLogger(__name__)

# GitHub code search serves at most this many results per query
SEARCH_RESULT_LIMIT = 1000
MAX_PER_PAGE = 100


class GitHubCodeSearchClient:
    """Code search scoped to a single GitHub organisation."""

    def __init__(
        self,
        api: GitHubClient,
        limiter: RateLimiter,
        org: str,
        *,
        per_page: int = MAX_PER_PAGE,
    ):
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {per_page}")
        self._api = api
        self._limiter = limiter
        self.org = org
        self.per_page = per_page
        self.max_pages = math.ceil(SEARCH_RESULT_LIMIT / per_page)

    def build_query(self, term: str) -> str:
        return f"{term} org:{self.org}"

    async def search(self, term: str, page: int = 1) -> SearchPage:
        if not term or not term.strip():
            raise ValueError("Search term must be a non-empty string")
        await self._limiter.ensure_capacity()
        data = await self._api.search_code(self.build_query(term), page=page, per_page=self.per_page)
        items = [SearchResultItem.from_api(it) for it in data.get("items") or []]
        return SearchPage(items=items, total_count=int(data.get("total_count") or 0))

    async def search_all(self, term: str) -> List[SearchResultItem]:
        first = await self.search(term, 1)
        results: List[SearchResultItem] = list(first.items)

        total_pages = math.ceil(first.total_count / self.per_page)
        logger.info("%d potential matches found with %s", first.total_count, term)
        if total_pages > self.max_pages:
            logger.warning(
                "Only the first %d of %d result pages for %s can be retrieved",
                self.max_pages,
                total_pages,
                term,
            )
            total_pages = self.max_pages

        pages = await asyncio.gather(*(self.search(term, p) for p in range(2, total_pages + 1)))
        for page in pages:
            results.extend(page.items)
        return results
