"""
Credit Sea - Field Extractor

Safe navigation over a RawNode tree. A missing hop is an expected outcome,
not an error: the walk short-circuits to ABSENT. The only fatal lookup is the
document root itself.
"""
from __future__ import annotations
from typing import Optional, Sequence

from .errors import SchemaError
from .xml_tree import ABSENT, Lookup, One, RawNode

REPORT_ROOT_TAG = "INProfileResponse"


def extract(root: Optional[RawNode], path: Sequence[str]) -> Lookup:
    """
    Walk `path` from `root`, one tag per hop.

    Returns ABSENT as soon as a hop is missing. The last hop's variant is
    returned as-is so repeating elements keep their One/Many shape. When an
    intermediate hop yields several siblings the walk continues from the
    first one in document order.
    """
    if root is None:
        return ABSENT
    if not path:
        return One(root)

    node = root
    for tag in path[:-1]:
        node = node.child(tag).first()
        if node is None:
            return ABSENT
    return node.child(path[-1])


def extract_node(root: Optional[RawNode], path: Sequence[str]) -> Optional[RawNode]:
    """First node at `path`, or None when absent."""
    return extract(root, path).first()


def text_at(root: Optional[RawNode], path: Sequence[str]) -> Optional[str]:
    """Text of the first node at `path`, or None when absent."""
    node = extract_node(root, path)
    return node.text if node is not None else None


def require_root(document: RawNode, tag: str = REPORT_ROOT_TAG) -> RawNode:
    """Return the document element if it is `tag`, else raise SchemaError."""
    if document.tag != tag:
        raise SchemaError(expected_root=tag, actual_root=document.tag)
    return document
