"""Document-order traversal helpers over parsed XML trees.

Feed dialects nest the same information in different places, so lookups
here are unscoped: ``find_named(node, "author")`` returns the first
``author`` element anywhere below ``node`` (or ``node`` itself), in
document order, whatever its namespace.
"""

import xml.etree.ElementTree as ET  # for ET.Element / ET.ParseError only
from collections.abc import Callable, Iterator

import defusedxml.ElementTree as defused_ET
from defusedxml import DefusedXmlException

from .exceptions import MalformedDocumentError


def parse_xml(document: str) -> ET.Element:
    """Parse ``document`` and return its root element.

    Raises:
        MalformedDocumentError: If the text is not well-formed XML or uses
            forbidden constructs (entity expansion, external references)
    """
    try:
        return defused_ET.fromstring(document.lstrip("\ufeff \t\r\n"))
    except (ET.ParseError, DefusedXmlException) as e:
        raise MalformedDocumentError(f"Failed to parse feed document: {e}") from e


def local_name(node: ET.Element) -> str:
    """Tag name without its namespace, e.g. ``{http://...}creator`` -> ``creator``."""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    return tag.rpartition("}")[2]


def descendants(node: ET.Element) -> Iterator[ET.Element]:
    """Depth-first pre-order walk, starting with ``node`` itself."""
    return node.iter()


def find_first(
    node: ET.Element, predicate: Callable[[ET.Element], bool]
) -> ET.Element | None:
    """Return the first element below ``node`` matching ``predicate``."""
    return next((n for n in descendants(node) if predicate(n)), None)


def find_named(node: ET.Element, *names: str) -> ET.Element | None:
    """Return the first element below ``node`` whose local name is in ``names``."""
    return find_first(node, lambda n: local_name(n) in names)


def node_text(node: ET.Element | None) -> str | None:
    """Return the stripped leading text of ``node``, or None if it has none."""
    if node is None or node.text is None:
        return None
    text = node.text.strip()
    return text or None

