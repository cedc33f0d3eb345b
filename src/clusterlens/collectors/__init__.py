from .resource_fetcher import ResourceFetcher

__all__ = ["ResourceFetcher"]
