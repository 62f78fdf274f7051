from .content import ContentFetcher

__all__ = ["ContentFetcher"]
