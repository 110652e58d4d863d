# archive_scout/crawler/fetcher.py
"""
Fetcher module: single-attempt HTTP GET with per-host concurrency and a randomized delay.
"""
from __future__ import annotations

import asyncio
import random
from collections import defaultdict
from typing import DefaultDict, Optional
from urllib.parse import urlparse

from aiohttp import ClientError, ClientSession
from archive_scout.config import CrawlerConfig
from archive_scout.crawler.models import PageData
from archive_scout.logger import get_logger

logger = get_logger("crawler")


class Fetcher:
    """Fetches HTML pages; failures are logged at DEBUG and reported as None."""

    def __init__(self, session: ClientSession, config: CrawlerConfig) -> None:
        self.session = session
        self.config = config
        self._host_limits: DefaultDict[str, asyncio.Semaphore] = defaultdict(
            lambda: asyncio.Semaphore(config.concurrent_requests_per_domain)
        )

    def request_delay(self) -> float:
        """Pause before the next request, randomized when the config asks for it."""
        delay = self.config.request_delay
        if self.config.request_delay_randomize:
            delay *= random.uniform(0.5, 1.5)
        return delay

    async def fetch(self, url: str) -> Optional[PageData]:
        """
        GET the URL once.

        Returns PageData for a 200 HTML response, None otherwise.
        """
        host = (urlparse(url).hostname or "").lower()
        async with self._host_limits[host]:
            delay = self.request_delay()
            if delay > 0:
                await asyncio.sleep(delay)
            try:
                async with self.session.get(url, raise_for_status=False) as resp:
                    if resp.status != 200:
                        logger.debug("HTTP %s for %s", resp.status, url)
                        return None
                    ctype = resp.headers.get("Content-Type", "").lower()
                    if "html" not in ctype:
                        logger.debug("Skipping %s (%s)", url, ctype or "no content type")
                        return None
                    text = await resp.text(errors="replace")
                    return PageData(str(resp.url), text)
            except (ClientError, asyncio.TimeoutError, ValueError) as exc:
                logger.debug("Failed %s: %s", url, exc)
                return None
