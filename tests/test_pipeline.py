from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from cdn_asset_finder.api_config import ApiConfig
from cdn_asset_finder.fetch import ContentFetcher
from cdn_asset_finder.github import GitHubClient
from cdn_asset_finder.pipeline import ResultAggregator, find_assets_with_settings, search_with_settings
from cdn_asset_finder.ratelimit import RateLimiter
from cdn_asset_finder.search import GitHubCodeSearchClient
from cdn_asset_finder.settings import Settings

from fake_github import FakeGitHub, search_item

INDEX_HTML = "\n".join([
    "<html>",
    "<head>",
    '  <script type="text/javascript" src="https://cdn.example.com/assets/app.bundle.js"></script>',
    "  <script src='//cdn.example.com/js/vendor.js'></script>",
    "</head>",
    "</html>",
])


def _settings() -> Settings:
    return Settings(github_token="t0ken", github_org="companieshouse", github_api_url="https://api.github.com")


def test_cross_term_dedup_processes_each_file_once():
    shared = search_item("companieshouse", "ch-service", "assets/index.html")
    fake = FakeGitHub(
        results={
            "cdn.example.com": [shared],
            "app.bundle.js": [shared, search_item("companieshouse", "other", "views/page.njk")],
        },
        files={
            ("companieshouse", "ch-service", "assets/index.html"): INDEX_HTML,
            ("companieshouse", "other", "views/page.njk"): "<p>no scripts</p>",
        },
    )

    assets = asyncio.run(
        find_assets_with_settings(["cdn.example.com", "app.bundle.js"], _settings(), ApiConfig(), transport=fake.transport)
    )

    assert sorted(a.name for a in assets) == ["app.bundle.js", "vendor.js"]
    assert {a.linenumber for a in assets} == {3, 4}
    assert all(a.repository == "ch-service" and a.filepath == "assets/index.html" for a in assets)
    fetched = [r.url.path for r in fake.paths("/repos/")]
    assert fetched.count("/repos/companieshouse/ch-service/contents/assets/index.html") == 1
    assert len(fetched) == 2


def test_duplicates_within_one_batch_are_fetched_once():
    item = search_item("companieshouse", "ch-service", "assets/index.html")
    fake = FakeGitHub(
        results={"cdn": [item, item, item]},
        files={("companieshouse", "ch-service", "assets/index.html"): INDEX_HTML},
    )
    assets = asyncio.run(find_assets_with_settings(["cdn"], _settings(), ApiConfig(), transport=fake.transport))
    assert len(assets) == 2
    assert len(fake.paths("/repos/")) == 1


def test_zero_results_yields_no_assets():
    fake = FakeGitHub(results={})
    assets = asyncio.run(find_assets_with_settings(["nothing"], _settings(), ApiConfig(), transport=fake.transport))
    assert assets == []
    assert fake.paths("/repos/") == []


def test_org_from_api_config_is_used():
    fake = FakeGitHub(results={})
    cfg = ApiConfig()
    cfg.github.org = "someorg"
    asyncio.run(find_assets_with_settings(["cdn"], _settings(), cfg, transport=fake.transport))
    assert fake.paths("/search/code")[0].url.params["q"] == "cdn org:someorg"


def test_search_with_settings_dedups_hits():
    a = search_item("companieshouse", "ch-service", "a.html")
    b = search_item("companieshouse", "ch-service", "b.html")
    fake = FakeGitHub(results={"x": [a, b], "y": [b]})
    items = asyncio.run(search_with_settings(["x", "y"], _settings(), ApiConfig(), transport=fake.transport))
    assert sorted(it.path for it in items) == ["a.html", "b.html"]


@pytest.mark.parametrize("per_page", [0, 101, 200])
def test_settings_reject_page_size_outside_github_range(per_page):
    with pytest.raises(ValidationError):
        Settings(github_token="t0ken", search_per_page=per_page)


def test_all_hits_found_with_smaller_page_size():
    items = [search_item("companieshouse", f"repo-{i}", "index.html") for i in range(250)]
    fake = FakeGitHub(results={"cdn": items})
    settings = Settings(github_token="t0ken", github_org="companieshouse", search_per_page=60)
    found = asyncio.run(search_with_settings(["cdn"], settings, ApiConfig(), transport=fake.transport))
    assert len(found) == 250


def test_exhausted_quota_suspends_then_run_completes():
    fake = FakeGitHub(
        results={"cdn.example.com": [search_item("companieshouse", "ch-service", "assets/index.html")]},
        files={("companieshouse", "ch-service", "assets/index.html"): INDEX_HTML},
        remaining=0,
        reset=1_030.0,
    )
    now = {"t": 1_000.0}
    sleeps = []

    async def fake_sleep(seconds: float) -> None:
        sleeps.append(seconds)
        now["t"] += seconds
        # quota refills once the reset time is reached
        fake.remaining = 5000

    async def go():
        api = GitHubClient("t0ken", "test-agent", transport=fake.transport)
        limiter = RateLimiter(api.rate_limit, clock=lambda: now["t"], sleep=fake_sleep)
        aggregator = ResultAggregator(
            GitHubCodeSearchClient(api, limiter, "companieshouse"),
            ContentFetcher(api, limiter),
        )
        async with api:
            return await aggregator.find_assets(["cdn.example.com"])

    assets = asyncio.run(go())

    assert sleeps == [30.0]
    assert sorted(a.name for a in assets) == ["app.bundle.js", "vendor.js"]
    assert [r.url.path for r in fake.requests] == [
        "/rate_limit",
        "/search/code",
        "/rate_limit",
        "/repos/companieshouse/ch-service/contents/assets/index.html",
    ]
