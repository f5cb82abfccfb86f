"""Document tree models and the read-only node interface."""

from autosum.tree.base import DocumentNode, walk
from autosum.tree.schema import LEAF_TYPES, Mark, Node

__all__ = [
    "DocumentNode",
    "LEAF_TYPES",
    "Mark",
    "Node",
    "walk",
]
