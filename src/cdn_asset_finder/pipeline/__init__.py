from .aggregate import (
    ResultAggregator,
    build_aggregator,
    find_assets_with_settings,
    search_with_settings,
)

__all__ = [
    "ResultAggregator",
    "build_aggregator",
    "find_assets_with_settings",
    "search_with_settings",
]
