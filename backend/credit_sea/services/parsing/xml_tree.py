"""
Credit Sea - XML Tree Reader

Turns raw report bytes into a tree of RawNode objects. The bureau feed is
inconsistent about repeating elements: a tag may be missing, appear once, or
appear as several siblings. Child lookups therefore return one of three
Lookup variants (Absent, One, Many) and callers handle all three explicitly.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as SafeET
from defusedxml.ElementTree import ParseError as SafeParseError

from .errors import MalformedInputError

logger = logging.getLogger(__name__)


# =============================================================================
# LOOKUP VARIANTS
# =============================================================================

class Lookup:
    """Result of resolving a tag under a node."""

    def first(self) -> Optional[RawNode]:
        raise NotImplementedError

    def as_tuple(self) -> Tuple[RawNode, ...]:
        raise NotImplementedError


class Absent(Lookup):
    """No element with the requested tag."""

    def first(self) -> Optional[RawNode]:
        return None

    def as_tuple(self) -> Tuple[RawNode, ...]:
        return ()

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()


@dataclass(frozen=True)
class One(Lookup):
    """Exactly one element with the requested tag."""
    node: RawNode

    def first(self) -> Optional[RawNode]:
        return self.node

    def as_tuple(self) -> Tuple[RawNode, ...]:
        return (self.node,)


@dataclass(frozen=True)
class Many(Lookup):
    """Several sibling elements with the requested tag, in document order."""
    nodes: Tuple[RawNode, ...]

    def first(self) -> Optional[RawNode]:
        return self.nodes[0]

    def as_tuple(self) -> Tuple[RawNode, ...]:
        return self.nodes


# =============================================================================
# RAW NODE
# =============================================================================

@dataclass(frozen=True)
class RawNode:
    """An XML element reduced to its local tag name, text and children."""
    tag: str
    text: Optional[str] = None
    children: Tuple[RawNode, ...] = ()

    def child(self, tag: str) -> Lookup:
        """Resolve direct children named `tag` into a Lookup variant."""
        matches = tuple(c for c in self.children if c.tag == tag)
        if not matches:
            return ABSENT
        if len(matches) == 1:
            return One(matches[0])
        return Many(matches)


def _local_name(tag: str) -> str:
    # "{urn:ns}Tag" -> "Tag"
    return tag.split("}")[-1]


def _to_node(element) -> RawNode:
    """
    Copy an ElementTree element into RawNode, children before parents.

    Uses an explicit stack: nesting depth is bounded only by the upload
    size, not by the interpreter's recursion limit.
    """
    built = {}
    stack = [(element, False)]
    while stack:
        current, expanded = stack.pop()
        if expanded:
            built[id(current)] = RawNode(
                tag=_local_name(current.tag),
                text=current.text,
                children=tuple(built.pop(id(c)) for c in current),
            )
        else:
            stack.append((current, True))
            stack.extend((c, False) for c in current)
    return built[id(element)]


def parse_xml(xml_bytes: bytes) -> RawNode:
    """
    Parse raw XML bytes into a RawNode tree rooted at the document element.

    Raises MalformedInputError for anything that is not well-formed XML,
    including empty input, truncated documents, invalid byte sequences and
    entity declarations rejected by defusedxml.
    """
    if not xml_bytes or not xml_bytes.strip():
        raise MalformedInputError("Malformed XML: document is empty")

    try:
        element = SafeET.fromstring(xml_bytes)
    except SafeParseError as e:
        logger.error(f"XML parse failed: {e}")
        raise MalformedInputError(f"Malformed XML: {e}") from e
    except DefusedXmlException as e:
        logger.error(f"XML rejected by defusedxml: {e!r}")
        raise MalformedInputError(f"Malformed XML: forbidden construct ({e!r})") from e

    return _to_node(element)
