"""Pydantic models for a ProseMirror-style document tree.

The JSON shape matches what ProseMirror's ``Node.toJSON`` produces::

    {"type": "bullet_list", "content": [
        {"type": "list_item", "content": [
            {"type": "paragraph", "content": [{"type": "text", "text": "$500"}]}
        ]}
    ]}

``Node`` satisfies :class:`autosum.tree.base.DocumentNode`, so a parsed
document can be handed straight to the aggregator.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field

# Node types that never have content and occupy a single position.
LEAF_TYPES = frozenset(
    {
        "hard_break",
        "hardBreak",
        "image",
        "horizontal_rule",
        "horizontalRule",
    }
)


class Mark(BaseModel):
    """Inline formatting attached to a text node (bold, link, ...)."""

    type: str
    attrs: dict[str, Any] = Field(default_factory=dict)


class Node(BaseModel):
    """One node of the document tree."""

    type: str
    attrs: dict[str, Any] = Field(default_factory=dict)
    content: list[Node] = Field(default_factory=list)
    text: Optional[str] = None
    marks: list[Mark] = Field(default_factory=list)

    @property
    def type_name(self) -> str:
        return self.type

    @property
    def is_text(self) -> bool:
        return self.type == "text"

    @property
    def is_leaf(self) -> bool:
        return self.is_text or self.type in LEAF_TYPES

    @property
    def node_size(self) -> int:
        if self.is_text:
            return len(self.text or "")
        if self.is_leaf:
            return 1
        return 2 + sum(child.node_size for child in self.content)

    def children(self) -> Iterator[tuple[Node, int, int]]:
        offset = 0
        for index, child in enumerate(self.content):
            yield child, offset, index
            offset += child.node_size

    def to_json(self, **kwargs) -> str:
        """Serialize to JSON string, omitting empty fields."""
        return self.model_dump_json(indent=2, exclude_defaults=True, **kwargs)

    @classmethod
    def from_json(cls, json_str: str) -> Node:
        """Deserialize from JSON string."""
        return cls.model_validate_json(json_str)


Node.model_rebuild()
