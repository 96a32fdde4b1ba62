"""RSS/Atom feed processing: feed resolution, feed parsing and entry parsing."""

import xml.etree.ElementTree as ET
from itertools import islice
from urllib.parse import urlparse

import requests

from .config import Config, FetchConfig
from .content import extract_text_and_description
from .dates import PLACEHOLDER_DATE, parse_date
from .discovery import FeedLinkParser, is_html
from .exceptions import DateParseError, FeedError, NoFeedFoundError, TransportError
from .logging_config import ExecutionLogger, create_execution_logger
from .models import DEFAULT_DATE, NO_URL, FeedEntry, FeedItem
from .text import normalize_and_truncate, slugify
from .tree import descendants, find_first, find_named, local_name, node_text, parse_xml

TITLE_MAX_CHARS = 256

ENTRY_TAGS = ("item", "entry")
DATE_TAGS = ("published", "updated", "date", "pubDate")
AUTHOR_TAGS = ("author", "creator")


def resolve_author(author_node: ET.Element | None, default: str) -> str:
    """Name of an ``author``/``creator`` element.

    Prefers a nested ``name`` element (Atom), then the element's own text
    (RSS, Dublin Core), then ``default``.
    """
    if author_node is None:
        return default
    name = node_text(find_named(author_node, "name"))
    if name is not None:
        return name
    return node_text(author_node) or default


def _title(node: ET.Element) -> str:
    text = node_text(find_named(node, "title"))
    if text is None:
        return ""
    return normalize_and_truncate(text, TITLE_MAX_CHARS)


def _is_web_url(value: str | None) -> bool:
    if not value:
        return False
    return urlparse(value).scheme in ("http", "https")


def _is_entry_link(node: ET.Element) -> bool:
    # One predicate over the whole entry: whichever candidate comes first in
    # document order wins.
    name = local_name(node)
    if name == "id":
        return _is_web_url(node_text(node))
    if name == "enclosure":
        return _is_web_url(node.get("url"))
    return name == "link"


def resolve_entry_url(entry: ET.Element) -> str:
    """Link of an item/entry, or ``NO_URL`` when it has none.

    The first ``id`` holding an http(s) URL, ``enclosure`` with an http(s)
    ``url`` attribute, or ``link`` element is used. Its text is returned,
    else its ``url`` attribute, else its ``href`` attribute.
    """
    node = find_first(entry, _is_entry_link)
    if node is None:
        return NO_URL
    return node_text(node) or node.get("url") or node.get("href") or NO_URL


def parse(document: str, feed_url: str) -> FeedItem:
    """Parse feed-level metadata from an RSS/Atom document.

    Args:
        document: Feed document text
        feed_url: URL the document was fetched from

    Returns:
        FeedItem describing the feed

    Raises:
        MalformedDocumentError: If the document is not well-formed XML
    """
    root = parse_xml(document)

    title = _title(root)
    # Raw text, unlike the title.
    description = title
    description_node = find_named(root, "description", "subtitle")
    if description_node is not None and description_node.text:
        description = description_node.text

    url = feed_url
    link_node = find_named(root, "link")
    if link_node is not None:
        url = node_text(link_node) or link_node.get("href") or feed_url

    author = resolve_author(find_named(root, "author"), title)

    return FeedItem(
        title=title,
        description=description,
        url=url,
        feed_url=feed_url,
        author=author,
        slug=slugify(title),
    )


def parse_entry(
    entry: ET.Element, default_author: str, logger: ExecutionLogger | None = None
) -> FeedEntry:
    """Build a FeedEntry from one ``item``/``entry`` element.

    An unparseable date is logged and replaced by ``DEFAULT_DATE``.
    """
    text, description = extract_text_and_description(entry)
    url = resolve_entry_url(entry)

    date_str = node_text(find_named(entry, *DATE_TAGS)) or PLACEHOLDER_DATE
    try:
        date = parse_date(date_str)
    except DateParseError as e:
        if logger is None:
            logger = create_execution_logger("entry_parser")
        logger.error(f"{e} from {url}", entry_url=url, error=str(e))
        date = DEFAULT_DATE

    return FeedEntry(
        title=_title(entry),
        author=resolve_author(find_named(entry, *AUTHOR_TAGS), default_author),
        url=url,
        text=text,
        description=description,
        date=date,
    )


def get_feed_entries_doc(
    document: str, default_author: str, logger: ExecutionLogger | None = None
) -> list[FeedEntry]:
    """Parse every item/entry of a feed document, in document order.

    Args:
        document: Feed document text
        default_author: Author used for entries that name none
        logger: Logger receiving per-entry date failures

    Raises:
        MalformedDocumentError: If the document is not well-formed XML
    """
    root = parse_xml(document)
    return [
        parse_entry(node, default_author, logger)
        for node in descendants(root)
        if local_name(node) in ENTRY_TAGS
    ]


class FeedProcessor:
    """Fetches feeds over HTTP and turns them into FeedItem/FeedEntry records."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        execution_id: str | None = None,
        session: requests.Session | None = None,
    ):
        """Initialize FeedProcessor with configuration.

        Args:
            config: Fetch configuration (timeouts, discovery limits); read
                from the environment when omitted
            execution_id: Execution ID for logging context
            session: Optional pre-configured HTTP session
        """
        self.config = config or Config().get_fetch_config()
        self.logger = create_execution_logger("feed_processor", execution_id)
        self.entry_logger = create_execution_logger(
            "entry_parser", self.logger.execution_id
        )
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": self.config.user_agent})

        self.logger.debug(
            "FeedProcessor initialized",
            timeout=self.config.timeout,
            max_discovery_depth=self.config.max_discovery_depth,
        )

    def fetch(self, url: str) -> str:
        """Download ``url`` and return the decoded body.

        Raises:
            TransportError: On connection failures and non-2xx responses
        """
        self.logger.debug("Downloading document", feed_url=url)
        try:
            response = self.session.get(url, timeout=self.config.timeout)
        except requests.RequestException as e:
            self.logger.error(
                f"Failed to download {url}: {e}", feed_url=url, error=str(e)
            )
            raise TransportError(url, reason=str(e)) from e

        if not 200 <= response.status_code < 300:
            self.logger.error(
                f"Request to {url} returned status code {response.status_code}",
                feed_url=url,
                status_code=response.status_code,
            )
            raise TransportError(url, response.status_code)

        return response.text

    def get_feed_with_data(self, url: str) -> tuple[FeedItem, str]:
        """Resolve ``url`` to a feed and return it with the raw feed body.

        HTML pages are searched for advertised RSS/Atom links, and the first
        candidates are tried in order.

        Raises:
            TransportError: If ``url`` itself cannot be downloaded
            MalformedDocumentError: If the feed is not well-formed XML
            OversizeInputError: If an HTML page is too large to scan
            NoFeedFoundError: If an HTML page yields no usable feed
        """
        return self._resolve(url, depth=0)

    def _resolve(self, url: str, depth: int) -> tuple[FeedItem, str]:
        body = self.fetch(url)

        if is_html(body):
            return self._resolve_from_html(url, body, depth)

        feed = parse(body, url)
        self.logger.info("Parsed feed", feed_url=url)
        return feed, body

    def _resolve_from_html(self, url: str, body: str, depth: int) -> tuple[FeedItem, str]:
        if depth >= self.config.max_discovery_depth:
            self.logger.warning(
                "Discovery depth exhausted on HTML page", feed_url=url, depth=depth
            )
            raise NoFeedFoundError(url)

        candidates = FeedLinkParser(body, url)
        for candidate in islice(candidates, self.config.max_discovery_candidates):
            self.logger.info(
                "Following embedded feed link", feed_url=url, candidate=candidate
            )
            try:
                return self._resolve(candidate, depth + 1)
            except FeedError as e:
                self.logger.warning(
                    f"Embedded feed candidate failed: {e}",
                    feed_url=url,
                    candidate=candidate,
                    error=str(e),
                )

        raise NoFeedFoundError(url)

    def get_feed(self, url: str) -> FeedItem:
        """Resolve ``url`` to a FeedItem, discarding the raw body."""
        feed, _ = self.get_feed_with_data(url)
        return feed

    def get_feed_entries(self, feed: FeedItem) -> list[FeedEntry]:
        """Download ``feed.feed_url`` and parse its entries."""
        body = self.fetch(feed.feed_url)
        entries = get_feed_entries_doc(body, feed.author, logger=self.entry_logger)
        self.logger.log_feed_processing(feed.feed_url, len(entries))
        return entries

    def fetch_all_entries(self, feeds: list[FeedItem]) -> dict[str, list[FeedEntry]]:
        """Fetch the entries of several feeds.

        Feeds that fail to download or parse are logged and left out of the
        result.

        Returns:
            Mapping of feed URL to that feed's entries
        """
        self.logger.log_execution_start(feed_count=len(feeds))
        results = {}

        for feed in feeds:
            try:
                results[feed.feed_url] = self.get_feed_entries(feed)
            except FeedError as e:
                self.logger.error(
                    f"Failed to fetch entries for {feed.feed_url}: {e}",
                    feed_url=feed.feed_url,
                    error=str(e),
                )

        self.logger.log_execution_end(
            success=len(results) == len(feeds),
            metrics={
                "feeds_processed": len(results),
                "feeds_failed": len(feeds) - len(results),
                "entries_found": sum(len(e) for e in results.values()),
            },
        )
        return results


def get_feed_with_data(url: str) -> tuple[FeedItem, str]:
    """Resolve ``url`` with a default FeedProcessor."""
    with requests.Session() as session:
        return FeedProcessor(session=session).get_feed_with_data(url)


def get_feed(url: str) -> FeedItem:
    """Resolve ``url`` to a FeedItem with a default FeedProcessor."""
    with requests.Session() as session:
        return FeedProcessor(session=session).get_feed(url)


def get_feed_entries(feed: FeedItem) -> list[FeedEntry]:
    """Fetch and parse the entries of ``feed`` with a default FeedProcessor."""
    with requests.Session() as session:
        return FeedProcessor(session=session).get_feed_entries(feed)
