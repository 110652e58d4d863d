"""archive_scout.sources: web archives that can be crawled and the rule that enables them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from archive_scout.config import CrawlerConfig, SourceFilter
from archive_scout.engine import CrawlEngine

__all__: Sequence[str] = ("ArchiveSource", "ARCHIVE_SOURCES", "should_enable", "enabled_sources")


@dataclass(frozen=True, slots=True)
class ArchiveSource:
    """A web archive whose snapshot pages are crawled for names."""

    name: str
    base_url: str
    base_domain: str

    def __str__(self) -> str:
        return self.name

    async def query(self, engine: CrawlEngine, domain: str, hint: str | None = None) -> List[str]:
        """Crawl this archive for *domain*, seeding the crawl with *hint* (the domain by default)."""
        return await engine.crawl(self.base_url, self.base_domain, hint or domain, domain)


ARCHIVE_SOURCES: Sequence[ArchiveSource] = (
    ArchiveSource("ArchiveIt", "https://wayback.archive-it.org/all", "wayback.archive-it.org"),
    ArchiveSource("ArchiveToday", "http://archive.is", "archive.is"),
    ArchiveSource("Arquivo", "http://arquivo.pt/wayback", "arquivo.pt"),
    ArchiveSource("LoCArchive", "http://webarchive.loc.gov/all", "webarchive.loc.gov"),
    ArchiveSource(
        "OpenUKArchive", "http://www.webarchive.org.uk/wayback/archive", "webarchive.org.uk"
    ),
    ArchiveSource(
        "UKGovArchive", "http://webarchive.nationalarchives.gov.uk", "nationalarchives.gov.uk"
    ),
    ArchiveSource("Wayback", "http://web.archive.org/web", "web.archive.org"),
)


def should_enable(name: str, source_filter: SourceFilter) -> bool:
    """Listed sources get ``include``; unlisted ones get the opposite."""
    wanted = name.casefold()
    for listed in source_filter.sources:
        if listed.casefold() == wanted:
            return source_filter.include
    return not source_filter.include


def enabled_sources(
    config: CrawlerConfig, sources: Sequence[ArchiveSource] = ARCHIVE_SOURCES
) -> List[ArchiveSource]:
    """Sources allowed by ``config.source_filter``, in catalog order."""
    return [s for s in sources if should_enable(s.name, config.source_filter)]
