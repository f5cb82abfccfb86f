"""Read-only node interface consumed by the aggregator.

Any tree representation can be totalled as long as its nodes expose the
members of :class:`DocumentNode`. Positions follow the ProseMirror
convention: the root's content starts at offset 0 and the content of a node
that starts at ``pos`` starts at ``pos + 1``.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class DocumentNode(Protocol):
    """A node of a host document tree, seen read-only."""

    @property
    def type_name(self) -> str:
        """The node's type tag, e.g. ``bullet_list`` or ``paragraph``."""

    @property
    def attrs(self) -> Mapping[str, Any]:
        """Node attributes (``checked``, ``done``, ...)."""

    @property
    def is_text(self) -> bool:
        """True for text leaves."""

    @property
    def text(self) -> Optional[str]:
        """Text of a text leaf, ``None`` for other nodes."""

    @property
    def node_size(self) -> int:
        """Total extent of the node, boundaries included."""

    def children(self) -> Iterator[tuple[DocumentNode, int, int]]:
        """Yield ``(child, offset, index)`` for each direct child."""


Visitor = Callable[[DocumentNode, int], Optional[bool]]


def walk(root: DocumentNode, visit: Visitor) -> None:
    """Depth-first walk over the descendants of *root* in document order.

    ``visit(node, pos)`` receives each node with its absolute start
    position. Returning ``False`` skips that node's subtree.
    """
    _walk_content(root, 0, visit)


def _walk_content(node: DocumentNode, content_start: int, visit: Visitor) -> None:
    for child, offset, _index in node.children():
        pos = content_start + offset
        if visit(child, pos) is False:
            continue
        _walk_content(child, pos + 1, visit)
