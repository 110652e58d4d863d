# File: archive_scout/engine.py
"""archive_scout.engine: one crawl session – permit, traversal, name extraction."""

from __future__ import annotations

from re import Pattern
from typing import List, Optional

from archive_scout.collector import ResultCollector
from archive_scout.config import CrawlerConfig
from archive_scout.crawler import ArchiveCrawler, CrawlRequest, PageData
from archive_scout.errors import ConfigurationMissing, PatternUnavailable
from archive_scout.gate import DEFAULT_CAPACITY, ConcurrencyGate
from archive_scout.logger import get_logger
from archive_scout.names import clean_name

__all__ = ["CrawlEngine", "crawl", "extract_name"]

logger = get_logger("engine")


def extract_name(pattern: Pattern[str], url: str) -> str:
    """Первое совпадение *pattern* в URL после очистки, либо пустая строка."""
    match = pattern.search(url)
    if match is None:
        return ""
    name = clean_name(match.group(0))
    # clean-up may cut into the domain itself
    if name and pattern.fullmatch(name):
        return name
    return ""


class CrawlEngine:
    """Фасад для источников: проверка конфигурации, разрешение на сессию, обход и сбор имён.

    Все сессии одного движка делят один ConcurrencyGate.
    """

    def __init__(
        self, config: Optional[CrawlerConfig], gate: Optional[ConcurrencyGate] = None
    ) -> None:
        self.config = config
        if gate is None:
            gate = ConcurrencyGate(config.max_crawl_sessions if config else DEFAULT_CAPACITY)
        self.gate = gate

    async def crawl(
        self,
        base_url: str,
        base_domain: str,
        subdomain: str,
        domain: str,
        collector: Optional[ResultCollector] = None,
    ) -> List[str]:
        """
        Обходит архив начиная с ``base_url/<год>/subdomain`` и возвращает найденные имена *domain*.

        Raises
        ------
        ConfigurationMissing
            Конфигурация не передана.
        PatternUnavailable
            Домен не указан в конфигурации.

        Таймаут и ошибки загрузки страниц не считаются ошибкой: возвращается то, что успели собрать.
        Если передан *collector*, имена накапливаются в нём и переживают отмену вызова.
        """
        if self.config is None:
            raise ConfigurationMissing()
        pattern = self.config.domain_regex(domain)
        if pattern is None:
            raise PatternUnavailable(domain)

        request = CrawlRequest(base_url, base_domain, subdomain, domain)
        results = collector if collector is not None else ResultCollector()

        def parse(page: PageData, links: List[str]) -> None:
            for link in links:
                results.insert(extract_name(pattern, link))

        async with self.gate.permit():
            logger.debug("Crawling %s for %s", request.start_url, domain)
            async with ArchiveCrawler(
                self.config, request.start_url, [base_domain], parse
            ) as crawler:
                pages = await crawler.crawl()

        logger.info("%s: %d names from %d pages", base_domain, len(results), pages)
        return results.slice()


async def crawl(
    config: Optional[CrawlerConfig],
    gate: ConcurrencyGate,
    base_url: str,
    base_domain: str,
    subdomain: str,
    domain: str,
) -> List[str]:
    """Одноразовый вызов :meth:`CrawlEngine.crawl` с заданным gate."""
    return await CrawlEngine(config, gate).crawl(base_url, base_domain, subdomain, domain)
