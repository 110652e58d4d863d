# === FILE: archive_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import Callable, List, Optional, Sequence, Set, Tuple

from aiohttp import ClientSession, ClientTimeout

from archive_scout.config import CrawlerConfig
from archive_scout.crawler.fetcher import Fetcher
from archive_scout.crawler.link_extractor import extract_links, host_allowed, normalize_url
from archive_scout.crawler.models import PageData
from archive_scout.logger import get_logger

__all__ = ("ArchiveCrawler", "ParseFunc")

#: Called once per fetched page with the absolute URLs of all its anchors.
ParseFunc = Callable[[PageData, List[str]], None]


class ArchiveCrawler:
    """Асинхронный краулер архивов: один стартовый URL, разрешённые хосты, общий лимит времени.

    robots.txt не запрашивается, повторных попыток нет.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        start_url: str,
        allowed_domains: Sequence[str],
        parse: ParseFunc,
    ) -> None:
        self.config = config
        self.start_url = start_url
        self.allowed_domains = tuple(allowed_domains)
        self.parse = parse
        self.visited: Set[str] = set()
        self.pages_fetched = 0
        # fetches in flight count against max_pages too
        self._reserved = 0
        self.session: Optional[ClientSession] = None
        self.logger = get_logger("crawler")

    async def __aenter__(self) -> ArchiveCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> int:
        """Обходит страницы до исчерпания очереди или таймаута; возвращает число загруженных страниц."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        self.logger.debug("Старт обхода: %s", self.start_url)
        start = time.monotonic()

        root = normalize_url(self.start_url)
        if not host_allowed(root, self.allowed_domains):
            self.logger.debug("Start URL %s is outside %s", root, ", ".join(self.allowed_domains))
            return 0

        fetcher = Fetcher(self.session, self.config)
        queue: asyncio.Queue[Tuple[str, int]] = asyncio.Queue()
        self.visited.add(root)
        await queue.put((root, 0))
        workers = [
            asyncio.create_task(self._worker(queue, fetcher))
            for _ in range(self.config.concurrent_requests)
        ]
        try:
            await asyncio.wait_for(queue.join(), timeout=self.config.timeout)
        except asyncio.TimeoutError:
            self.logger.debug("Timeout after %.1f s: %s", self.config.timeout, self.start_url)
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

        self.logger.debug(
            "Завершено: %d страниц за %.2f с", self.pages_fetched, time.monotonic() - start
        )
        return self.pages_fetched

    async def _worker(self, queue: asyncio.Queue[Tuple[str, int]], fetcher: Fetcher) -> None:
        while True:
            url, depth = await queue.get()
            try:
                await self._visit(queue, fetcher, url, depth)
            except Exception as exc:
                self.logger.debug("Skipping %s: %s", url, exc)
            finally:
                queue.task_done()

    async def _visit(
        self, queue: asyncio.Queue[Tuple[str, int]], fetcher: Fetcher, url: str, depth: int
    ) -> None:
        if self._reserved >= self.config.max_pages:
            return
        self._reserved += 1
        try:
            page = await fetcher.fetch(url)
        except BaseException:
            self._reserved -= 1
            raise
        if page is None:
            self._reserved -= 1
            return
        self.pages_fetched += 1

        links = extract_links(page)
        self.parse(page, links)

        if depth >= self.config.max_depth:
            return
        for link in links:
            norm = normalize_url(link)
            if norm in self.visited or not host_allowed(norm, self.allowed_domains):
                continue
            self.visited.add(norm)
            await queue.put((norm, depth + 1))
