"""HTML sniffing and feed link discovery."""

from collections.abc import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from .exceptions import OversizeInputError

# Largest document the discovery parser accepts (positions are 32-bit).
MAX_INPUT_BYTES = 2**32 - 1


def is_html(content: str) -> bool:
    """Return True when ``content`` looks like an HTML page rather than a feed.

    Only the leading token is inspected. The DOCTYPE check is case sensitive
    while the bare tag accepts ``<html`` and ``<HTML``; lowercase doctypes
    such as ``<!doctype html>`` are therefore not recognized.
    """
    trimmed = content.lstrip()
    return (
        trimmed.startswith("<!DOCTYPE html")
        or trimmed.startswith("<html")
        or trimmed.startswith("<HTML")
    )


def is_feed_type(link_type: str) -> bool:
    """Return True for MIME types naming an RSS or Atom document."""
    link_type = link_type.lower()
    return "atom" in link_type or "rss" in link_type


def _check_size(content: str) -> None:
    # A str never encodes to more than 4 bytes per character.
    if len(content) * 4 <= MAX_INPUT_BYTES:
        return
    size = len(content.encode("utf-8"))
    if size > MAX_INPUT_BYTES:
        raise OversizeInputError(size, MAX_INPUT_BYTES)


class FeedLinkParser:
    """Single-pass iterator over the feed URLs advertised by an HTML page.

    Yields absolute URLs of ``<link rel="alternate">`` elements whose
    ``type`` names RSS or Atom, in document order. Relative ``href`` values
    are resolved against ``base_url``. Once exhausted the parser stays
    exhausted; materialize it with ``list()`` to reuse the results.
    """

    def __init__(self, content: str, base_url: str):
        _check_size(content)
        self.base_url = base_url
        self._soup = BeautifulSoup(content, "html.parser")
        self._urls = self._feed_urls()

    def _feed_urls(self) -> Iterator[str]:
        for link in self._soup.find_all("link", rel="alternate"):
            link_type = link.get("type")
            if not link_type or not is_feed_type(link_type):
                continue
            href = link.get("href")
            if href is None:
                continue
            try:
                url = urljoin(self.base_url, href.strip())
            except ValueError:
                # Unjoinable href, e.g. an unterminated IPv6 host.
                continue
            yield url

    def __iter__(self) -> "FeedLinkParser":
        return self

    def __next__(self) -> str:
        return next(self._urls)


def discover_feed_urls(
    content: str, base_url: str, limit: int | None = None
) -> list[str]:
    """Return the feed URLs advertised by ``content`` as a list.

    Args:
        content: HTML document text
        base_url: URL the document was retrieved from
        limit: Optional maximum number of URLs to return

    Raises:
        OversizeInputError: If the document is too large to scan
    """
    urls = []
    for url in FeedLinkParser(content, base_url):
        if limit is not None and len(urls) >= limit:
            break
        urls.append(url)
    return urls
