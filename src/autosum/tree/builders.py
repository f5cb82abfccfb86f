"""Shorthand constructors for building document trees in code."""

from __future__ import annotations

from typing import Any, Union

from autosum.tree.schema import Node

Content = Union[Node, str]


def text(value: str) -> Node:
    return Node(type="text", text=value)


def paragraph(*content: Content) -> Node:
    return Node(type="paragraph", content=[_coerce(c) for c in content])


def doc(*content: Node) -> Node:
    return Node(type="doc", content=list(content))


def list_item(*content: Content, **attrs: Any) -> Node:
    """A list item; bare strings become paragraphs."""
    return Node(type="list_item", attrs=attrs, content=[_block(c) for c in content])


def check_item(checked: bool, *content: Content) -> Node:
    return Node(type="check_item", attrs={"checked": checked}, content=[_block(c) for c in content])


def bullet_list(*items: Content) -> Node:
    return Node(type="bullet_list", content=[_item(i) for i in items])


def ordered_list(*items: Content, order: int = 1) -> Node:
    return Node(type="ordered_list", attrs={"order": order}, content=[_item(i) for i in items])


def check_list(*items: Node) -> Node:
    return Node(type="checkList", content=list(items))


def _coerce(value: Content) -> Node:
    return text(value) if isinstance(value, str) else value


def _block(value: Content) -> Node:
    return paragraph(value) if isinstance(value, str) else value


def _item(value: Content) -> Node:
    return list_item(value) if isinstance(value, str) else value
