# archive_scout/crawler/link_extractor.py
"""
Link extraction and host filtering utilities for ArchiveScout.
"""
from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urldefrag, urljoin, urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag
from archive_scout.crawler.models import PageData


def extract_links(page: PageData) -> List[str]:
    """
    Return every ``<a href>`` of the page resolved against ``page.url``.

    Hrefs that cannot be resolved are skipped.
    """
    soup = BeautifulSoup(page.content, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        try:
            links.append(urljoin(page.url, href_val.strip()))
        except ValueError:
            continue
    return links


def host_allowed(url: str, allowed_domains: Iterable[str]) -> bool:
    """
    True for http(s) URLs whose host is one of *allowed_domains* or a subdomain of one.
    """
    try:
        parsed = urlparse(url)
        host = (parsed.hostname or "").lower()
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not host:
        return False
    for domain in allowed_domains:
        domain = domain.lower().strip(".")
        if host == domain or host.endswith("." + domain):
            return True
    return False


def normalize_url(url: str) -> str:
    """
    Drop the fragment and lowercase scheme and host.

    The path is left untouched: archive URLs embed the original URL there.
    """
    url, _ = urldefrag(url)
    parsed = urlparse(url)
    return parsed._replace(scheme=parsed.scheme.lower(), netloc=parsed.netloc.lower()).geturl()
