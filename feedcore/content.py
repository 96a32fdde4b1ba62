"""Entry body and summary extraction.

Entry bodies arrive as HTML (``content:encoded``, Atom ``content``) or as
plain text. They are converted to lightweight markdown for the full text,
and a short plain-text summary is derived for list views.
"""

import re
import xml.etree.ElementTree as ET

from bs4 import BeautifulSoup
from bs4.element import (
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)

from .tree import find_named, node_text

DESCRIPTION_MAX_CHARS = 280

# Tags whose whole subtree is discarded.
_SKIP_TAGS = frozenset(
    {"script", "style", "head", "noscript", "iframe", "template", "svg", "form"}
)

# Tags rendered as a paragraph of their own.
_BLOCK_TAGS = frozenset(
    {
        "p", "div", "section", "article", "main", "header", "footer", "aside",
        "figure", "figcaption", "table", "tr", "dl", "dt", "dd", "address",
        "details", "summary",
    }
)

_HEADINGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

_SKIP_STRINGS = (Comment, Declaration, Doctype, ProcessingInstruction)

_WHITESPACE_RE = re.compile(r"[ \t\r\n\f\v]+")
_PADDED_NEWLINE_RE = re.compile(r"[ \t]*\n[ \t]*")
_BLANK_LINES_RE = re.compile(r"\n{3,}")
_PRE_TOKEN_RE = re.compile("\x00(\\d+)\x00")

MARKDOWN_PATTERNS = [
    re.compile(r"\*\*(.*?)\*\*"),  # bold
    re.compile(r"\*(.*?)\*"),  # italic
    re.compile(r"`(.*?)`"),  # inline code
    re.compile(r"~~(.*?)~~"),  # strikethrough
    re.compile(r"#+\s*"),  # headings
    re.compile(r"!\[(.*?)\]\(.*?\)"),  # images
    re.compile(r"\[(.*?)\]\(.*?\)"),  # links
    re.compile(r">+\s*"),  # blockquotes
    re.compile(r"[-*_=]{3,}"),  # horizontal rules
    re.compile(r"`{3}.*?`{3}"),  # code blocks
]


class _MarkdownRenderer:
    """Renders a BeautifulSoup tree as markdown text."""

    def __init__(self):
        # Preformatted blocks are kept aside so whitespace cleanup skips them.
        self._pre_blocks: list[str] = []

    def render(self, soup: BeautifulSoup) -> str:
        markup = self._children(soup)
        markup = _PADDED_NEWLINE_RE.sub("\n", markup)
        markup = _BLANK_LINES_RE.sub("\n\n", markup).strip()
        return _PRE_TOKEN_RE.sub(lambda m: self._pre_blocks[int(m.group(1))], markup)

    def _children(self, node: Tag) -> str:
        return "".join(self._node(child) for child in node.children)

    def _node(self, node) -> str:
        if isinstance(node, _SKIP_STRINGS):
            return ""
        if isinstance(node, NavigableString):
            return _WHITESPACE_RE.sub(" ", str(node))
        if not isinstance(node, Tag) or node.name in _SKIP_TAGS:
            return ""

        name = node.name
        if name in _HEADINGS:
            inner = self._children(node).strip()
            return f"\n\n{'#' * _HEADINGS[name]} {inner}\n\n" if inner else ""
        if name in ("strong", "b"):
            return self._wrap(node, "**")
        if name in ("em", "i"):
            return self._wrap(node, "*")
        if name in ("del", "s", "strike"):
            return self._wrap(node, "~~")
        if name == "code":
            text = node.get_text()
            return f"`{text}`" if text else ""
        if name == "pre":
            self._pre_blocks.append(f"```\n{node.get_text().strip(chr(10))}\n```")
            return f"\n\n\x00{len(self._pre_blocks) - 1}\x00\n\n"
        if name == "a":
            inner = self._children(node).strip()
            href = node.get("href")
            if href and inner:
                return f"[{inner}]({href})"
            return inner
        if name == "img":
            src = node.get("src")
            return f"![{node.get('alt', '')}]({src})" if src else ""
        if name == "br":
            return "\n"
        if name == "hr":
            return "\n\n---\n\n"
        if name in ("ul", "ol"):
            return self._list(node, ordered=name == "ol")
        if name == "li":
            return f"\n- {self._children(node).strip()}\n"
        if name == "blockquote":
            inner = self._children(node).strip()
            quoted = "\n".join(f"> {line}" for line in inner.splitlines())
            return f"\n\n{quoted}\n\n"
        if name in _BLOCK_TAGS:
            return f"\n\n{self._children(node).strip()}\n\n"
        return self._children(node)

    def _wrap(self, node: Tag, marker: str) -> str:
        inner = self._children(node).strip()
        return f"{marker}{inner}{marker}" if inner else ""

    def _list(self, node: Tag, ordered: bool) -> str:
        lines = []
        for index, item in enumerate(node.find_all("li", recursive=False), start=1):
            bullet = f"{index}." if ordered else "-"
            lines.append(f"{bullet} {self._children(item).strip()}")
        return "\n\n" + "\n".join(lines) + "\n\n"


def html_to_markdown(content: str) -> str:
    """Convert an HTML fragment (or plain text) to lightweight markdown."""
    if not content:
        return ""
    soup = BeautifulSoup(content, "html.parser")
    return _MarkdownRenderer().render(soup)


def strip_markdown_tags(text: str) -> str:
    """Remove markdown syntax from ``text``, keeping the enclosed words.

    The substitutions run in a fixed order on the same buffer; bold must be
    handled before italic.
    """
    for pattern in MARKDOWN_PATTERNS:
        text = pattern.sub(lambda m: (m.group(1) or "") if m.re.groups else "", text)
    return text


def summarize(markup: str, max_chars: int = DESCRIPTION_MAX_CHARS) -> str:
    """Plain, single-line summary of ``markup`` of at most ``max_chars`` characters."""
    return strip_markdown_tags(markup).replace("\n", "")[:max_chars]


def extract_text_and_description(entry: ET.Element) -> tuple[str, str]:
    """Return ``(text, description)`` for an item/entry element.

    ``text`` comes from the first ``content``/``encoded`` element, falling
    back to ``description``/``summary``. ``description`` prefers
    ``description``/``summary`` and otherwise summarizes ``text``.
    """
    content_raw = node_text(find_named(entry, "content", "encoded"))
    description_raw = node_text(find_named(entry, "description", "summary"))

    if content_raw is not None:
        text = html_to_markdown(content_raw)
    elif description_raw is not None:
        text = html_to_markdown(description_raw)
    else:
        text = ""

    if description_raw is not None:
        description = summarize(html_to_markdown(description_raw))
    else:
        description = summarize(text)

    return text, description
