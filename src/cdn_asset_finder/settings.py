from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables.

    Environment variables:
    - GITHUB_TOKEN: bearer token for the GitHub REST API
    - GITHUB_ORG: organisation the code search is scoped to (default: "companieshouse")
    - GITHUB_API_URL: REST API base URL (default: "https://api.github.com")
    - API_CONFIG_PATH: optional path to YAML file with GitHub credentials
    - USER_AGENT: HTTP user agent (default: "cdn-asset-finder/0.1")
    - REQUEST_TIMEOUT: request timeout in seconds (default: 30.0)
    - RATE_LIMIT_FALLBACK_WAIT: seconds to back off when the quota lookup fails (default: 60.0)
    - SEARCH_PER_PAGE: code search page size, 1..100 (default: 100)
    - OUTPUT_PATH: markdown report path (default: "identified_assets.md")
    - LOG_LEVEL: logging level name (default: "INFO")
    """

    github_token: Optional[str] = None
    github_org: str = "companieshouse"
    github_api_url: str = "https://api.github.com"
    api_config_path: Optional[str] = None

    user_agent: str = "cdn-asset-finder/0.1"
    request_timeout: float = 30.0
    rate_limit_fallback_wait: float = 60.0

    # GitHub caps per_page at 100
    search_per_page: int = Field(100, ge=1, le=100)

    output_path: str = "identified_assets.md"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
