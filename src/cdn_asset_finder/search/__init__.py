from .base import CodeSearchClient, SearchPage, SearchResultItem
from .github import GitHubCodeSearchClient

__all__ = ["CodeSearchClient", "GitHubCodeSearchClient", "SearchPage", "SearchResultItem"]
