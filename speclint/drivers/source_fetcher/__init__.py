"""Source fetcher drivers."""

from speclint.drivers.source_fetcher.git_fetcher import GitSourceFetcher

__all__ = ["GitSourceFetcher"]
