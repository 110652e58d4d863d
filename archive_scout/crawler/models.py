# archive_scout/crawler/models.py
"""
Data models for the ArchiveScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class PageData:
    """Holds the final URL and the decoded HTML of a fetched page."""

    url: str
    content: str


@dataclass(frozen=True, slots=True)
class CrawlRequest:
    """One crawl invocation: where to start, which host to stay on, what to look for."""

    base_url: str
    base_domain: str
    subdomain: str
    domain: str

    @property
    def start_url(self) -> str:
        """Seed URL in the ``base/year/hint`` form understood by web archives."""
        return f"{self.base_url.rstrip('/')}/{datetime.now().year}/{self.subdomain}"
