from .client import GitHubClient
from .clients import get_github_client, resolve_org

__all__ = ["GitHubClient", "get_github_client", "resolve_org"]
