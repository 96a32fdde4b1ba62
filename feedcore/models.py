"""Data models for feed ingestion."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from pathlib import Path

# Used for entries whose date could not be normalized.
DEFAULT_DATE = datetime(1970, 1, 1, tzinfo=UTC)

NO_URL = "NOURL"


@dataclass(frozen=True)
class FeedItem:
    """Represents one subscribed RSS/Atom feed."""

    title: str = ""
    description: str = ""
    url: str = ""
    feed_url: str = ""
    author: str = ""
    slug: str = ""


@dataclass(frozen=True)
class FeedEntry:
    """Represents a single item/entry of a feed."""

    title: str = ""
    author: str = ""
    url: str = NO_URL
    text: str = ""
    description: str = ""
    date: datetime = DEFAULT_DATE
    lastupdated: datetime = field(default_factory=lambda: datetime.now(UTC))
    seen: bool = False
    filepath: Path | None = None

    def with_seen(self, seen: bool = True) -> "FeedEntry":
        """Return a copy of this entry with the ``seen`` flag changed."""
        return replace(self, seen=seen)

    def with_filepath(self, filepath: Path | str) -> "FeedEntry":
        """Return a copy of this entry stored at ``filepath``."""
        return replace(self, filepath=Path(filepath))
