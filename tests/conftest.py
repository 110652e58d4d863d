# File: tests/conftest.py
from collections.abc import AsyncIterator

import pytest
from aiohttp import web

from archive_scout.config import CrawlerConfig
from archive_scout.crawler.models import PageData


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a fast CrawlerConfig for crawler tests: no delay, short timeout.
    """
    return CrawlerConfig(
        domains=["example.com"],
        timeout=5.0,
        user_agent="TestAgent/1.0",
        request_delay=0.0,
        max_depth=1,
    )


@pytest.fixture()
def mock_page_data() -> PageData:
    """
    Provide a simple PageData instance with HTML content.
    """
    html = (
        '<html><body><a href="/web/2024/http://www.example.com/">W</a>'
        '<a href="http://external.org">X</a><a name="no-href">N</a></body></html>'
    )
    return PageData(url="http://archive.test/web/2024/example.com", content=html)


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
