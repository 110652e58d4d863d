# === FILE: archive_scout/scanner.py ===
"""
Модуль-обёртка для запуска всех включённых архивов по одному домену.
"""
import asyncio
from typing import Dict, List, Optional, Sequence

from archive_scout.config import CrawlerConfig
from archive_scout.engine import CrawlEngine
from archive_scout.gate import ConcurrencyGate
from archive_scout.logger import logger
from archive_scout.sources import ARCHIVE_SOURCES, ArchiveSource, enabled_sources


async def start_scan(
    cfg: CrawlerConfig,
    domain: str,
    hint: Optional[str] = None,
    sources: Sequence[ArchiveSource] = ARCHIVE_SOURCES,
) -> Dict[str, List[str]]:
    """
    Запускает обход всех включённых архивов параллельно и собирает имена по источникам.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация; *domain* добавляется в ``cfg.domains``, если его там нет.
    domain : str
        Целевой домен.
    hint : str, optional
        Подсказка для стартового URL (по умолчанию сам домен).

    Returns
    -------
    Dict[str, List[str]]
        Имя источника → найденные имена. Источники, завершившиеся ошибкой, пропускаются.
    """
    if cfg.domain_regex(domain) is None:
        cfg = cfg.with_domains(domain)
    gate = ConcurrencyGate(cfg.max_crawl_sessions)
    engine = CrawlEngine(cfg, gate)

    active = enabled_sources(cfg, sources)
    logger.info("Scanning %s with %d sources", domain, len(active))
    outcomes = await asyncio.gather(
        *(source.query(engine, domain, hint) for source in active),
        return_exceptions=True,
    )

    results: Dict[str, List[str]] = {}
    for source, outcome in zip(active, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("%s failed: %s", source.name, outcome)
            continue
        results[source.name] = outcome
    return results


__all__ = ["start_scan"]
