from __future__ import annotations

import asyncio
import logging
import re
from typing import Iterable, List, Optional, Set

import httpx

from ..api_config import ApiConfig, load_api_config
from ..extract.assets import SCRIPT_SRC_RX, extract_assets
from ..extract.models import Asset
from ..fetch.content import ContentFetcher
from ..github.clients import get_github_client, resolve_org
from ..ratelimit import RateLimiter, RateLimitState
from ..search.base import CodeSearchClient, SearchResultItem
from ..search.github import GitHubCodeSearchClient
from ..settings import Settings

logger = logging.getLogger(__name__)


class ResultAggregator:
    """Turns code search hits into Assets, processing each file at most once per run."""

    def __init__(
        self,
        search_client: CodeSearchClient,
        fetcher: ContentFetcher,
        pattern: re.Pattern[str] = SCRIPT_SRC_RX,
    ):
        self._search = search_client
        self._fetcher = fetcher
        self._pattern = pattern
        self.seen: Set[str] = set()

    async def _process_one(self, item: SearchResultItem, sink: List[Asset]) -> None:
        key = item.file_key
        if key in self.seen:
            return
        # claimed before the fetch so a duplicate in the same batch is skipped
        self.seen.add(key)
        content = await self._fetcher.fetch_raw(item.owner_login, item.repository_name, item.path)
        sink.extend(extract_assets(content, self._pattern, item.repository_name, item.path))

    async def process_all(self, items: Iterable[SearchResultItem]) -> List[Asset]:
        identified: List[Asset] = []
        await asyncio.gather(*(self._process_one(it, identified) for it in items))
        return identified

    async def search_all(self, search_terms: Iterable[str]) -> List[SearchResultItem]:
        per_term = await asyncio.gather(*(self._search.search_all(t) for t in search_terms))
        return [item for items in per_term for item in items]

    async def find_assets(self, search_terms: Iterable[str]) -> List[Asset]:
        """Search every term concurrently, then dedup and scan across all terms."""
        self.seen = set()
        items = await self.search_all(search_terms)
        assets = await self.process_all(items)
        logger.info("%d assets identified in %d search results", len(assets), len(items))
        return assets


def build_aggregator(
    settings: Settings,
    api_config: Optional[ApiConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """Wire the GitHub client, limiter, search client and fetcher from configuration.

    Returns ``(github_client, aggregator)``; the caller owns closing the client.
    """
    cfg = api_config or load_api_config(settings.api_config_path)
    api = get_github_client(settings, cfg, transport=transport)
    limiter = RateLimiter(
        api.rate_limit,
        RateLimitState(),
        fallback_wait=settings.rate_limit_fallback_wait,
    )
    search_client = GitHubCodeSearchClient(
        api,
        limiter,
        resolve_org(settings, cfg),
        per_page=settings.search_per_page,
    )
    fetcher = ContentFetcher(api, limiter)
    return api, ResultAggregator(search_client, fetcher)


async def find_assets_with_settings(
    search_terms: List[str],
    settings: Settings,
    api_config: Optional[ApiConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[Asset]:
    api, aggregator = build_aggregator(settings, api_config, transport=transport)
    async with api:
        return await aggregator.find_assets(search_terms)


async def search_with_settings(
    search_terms: List[str],
    settings: Settings,
    api_config: Optional[ApiConfig] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[SearchResultItem]:
    api, aggregator = build_aggregator(settings, api_config, transport=transport)
    async with api:
        items = await aggregator.search_all(search_terms)
    # Remove duplicates, preserve order
    seen: Set[str] = set()
    uniq: List[SearchResultItem] = []
    for it in items:
        if it.file_key not in seen:
            uniq.append(it)
            seen.add(it.file_key)
    return uniq
