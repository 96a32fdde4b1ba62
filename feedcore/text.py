"""Small string helpers shared by the feed and entry parsers."""

import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def normalize_and_truncate(text: str, max_chars: int) -> str:
    """Collapse whitespace runs, trim, and keep at most ``max_chars`` characters."""
    normalized = _WHITESPACE_RE.sub(" ", text).strip()
    return normalized[:max_chars].rstrip()


def slugify(text: str) -> str:
    """Turn ``text`` into a lowercase, dash-separated identifier.

    >>> slugify("Hello, World!")
    'hello-world'
    """
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    return _NON_ALNUM_RE.sub("-", ascii_text.lower()).strip("-")
