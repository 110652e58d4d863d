"""archive_scout.errors: exceptions surfaced to crawl callers."""

from __future__ import annotations

__all__ = ["CrawlError", "ConfigurationMissing", "PatternUnavailable"]


class CrawlError(Exception):
    """Base class for errors that abort a crawl before any request is sent."""


class ConfigurationMissing(CrawlError):
    """No crawler configuration was supplied."""

    def __init__(self) -> None:
        super().__init__("crawler error: failed to obtain the configuration")


class PatternUnavailable(CrawlError):
    """The configuration holds no matching pattern for the requested domain."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        super().__init__(f"crawler error: failed to obtain regex object for: {domain}")
