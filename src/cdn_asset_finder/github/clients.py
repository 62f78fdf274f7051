from __future__ import annotations

from typing import Optional

import httpx

from ..api_config import ApiConfig, load_api_config
from ..exceptions import ConfigurationError
from ..settings import Settings
from .client import GitHubClient


def get_github_client(
    settings: Settings,
    api_config: ApiConfig | None = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> GitHubClient:
    cfg = api_config or load_api_config(settings.api_config_path)
    token = (cfg.github.token if cfg else None) or settings.github_token
    if not token:
        raise ConfigurationError(
            "GitHub token missing. Set GITHUB_TOKEN, put it in github.yaml, or pass --token."
        )
    base_url = (cfg.github.api_url if cfg else None) or settings.github_api_url
    return GitHubClient(
        token=token,
        user_agent=settings.user_agent,
        base_url=base_url,
        request_timeout=settings.request_timeout,
        transport=transport,
    )


def resolve_org(settings: Settings, api_config: ApiConfig | None = None) -> str:
    cfg = api_config or load_api_config(settings.api_config_path)
    return (cfg.github.org if cfg else None) or settings.github_org
