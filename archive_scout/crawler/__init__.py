"""archive_scout.crawler: асинхронный обход страниц веб-архивов."""

from .crawler import ArchiveCrawler, ParseFunc
from .models import CrawlRequest, PageData

__all__ = ["ArchiveCrawler", "ParseFunc", "CrawlRequest", "PageData"]
