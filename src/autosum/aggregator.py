"""List aggregator: per-list totals over a document tree.

Walks the tree, finds every list node (bullet, ordered or checklist) at any
depth and sums the first number of each of its items. Nested lists are
totalled on their own and never leak into their parent's sum. A list needs at
least two numeric items before a total is reported.

Nothing here raises on odd content: an unparseable item is skipped and a
list without enough numbers simply yields no total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from autosum.config import MatchingConfig
from autosum.numeric import Unit, format_with_unit, parse_numeric_value
from autosum.tree.base import DocumentNode, walk

logger = logging.getLogger(__name__)

MIN_NUMERIC_ITEMS = 2


@dataclass(frozen=True)
class ListTypeMatcher:
    """Classifies node type tags as lists and checklists."""

    exact: frozenset[str] = field(default_factory=lambda: frozenset(MatchingConfig().list_types))
    substrings: tuple[str, ...] = field(default_factory=lambda: tuple(MatchingConfig().list_type_substrings))
    checklist_markers: tuple[str, ...] = field(
        default_factory=lambda: tuple(MatchingConfig().checklist_markers)
    )

    @classmethod
    def from_config(cls, config: MatchingConfig) -> ListTypeMatcher:
        return cls(
            exact=frozenset(config.list_types),
            substrings=tuple(config.list_type_substrings),
            checklist_markers=tuple(config.checklist_markers),
        )

    def is_list(self, type_name: Any) -> bool:
        if not isinstance(type_name, str):
            return False
        return type_name in self.exact or any(s in type_name for s in self.substrings)

    def is_check_list(self, type_name: Any) -> bool:
        if not isinstance(type_name, str):
            return False
        return any(marker in type_name for marker in self.checklist_markers)


DEFAULT_MATCHER = ListTypeMatcher()


class ListTotal(BaseModel):
    """The computed total of one reportable list."""

    model_config = ConfigDict(frozen=True)

    total: float
    checked_total: Optional[float] = None
    unchecked_total: Optional[float] = None
    display_unit: Unit = Unit.NONE
    position: int  # offset just past the list's closing boundary
    has_values: bool = True
    is_check_list: bool = False
    item_count: int = 0
    list_type: str = ""


def is_list_node(node: DocumentNode, matcher: Optional[ListTypeMatcher] = None) -> bool:
    return (matcher or DEFAULT_MATCHER).is_list(node.type_name)


def is_check_list_type(type_name: str, matcher: Optional[ListTypeMatcher] = None) -> bool:
    return (matcher or DEFAULT_MATCHER).is_check_list(type_name)


def item_text(item: DocumentNode, matcher: Optional[ListTypeMatcher] = None) -> str:
    """Text that belongs to a list item itself.

    Text of any list nested inside the item is left out; those lists are
    totalled separately.
    """
    matcher = matcher or DEFAULT_MATCHER
    parts: list[str] = []

    def collect(node: DocumentNode, _pos: int) -> bool:
        if is_list_node(node, matcher):
            return False
        if node.is_text:
            parts.append(node.text or "")
        return True

    walk(item, collect)
    return "".join(parts)


def is_item_checked(item: DocumentNode) -> bool:
    """Checked state of a checklist item: ``checked``, else ``done``, else False."""
    attrs = item.attrs
    if not isinstance(attrs, Mapping):
        return False
    if attrs.get("checked") is not None:
        return bool(attrs["checked"])
    if attrs.get("done") is not None:
        return bool(attrs["done"])
    return False


@dataclass
class _ListAccumulator:
    """Running sums for a single list; a fresh one per list."""

    is_check_list: bool
    total: float = 0.0
    checked_total: float = 0.0
    unchecked_total: float = 0.0
    display_unit: Optional[Unit] = None
    count: int = 0

    def add(self, value: float, unit: Unit, checked: bool) -> None:
        self.total += value
        self.count += 1
        if self.is_check_list:
            if checked:
                self.checked_total += value
            else:
                self.unchecked_total += value
        if self.display_unit is None:
            self.display_unit = unit


def calculate_list_total(
    list_node: DocumentNode,
    list_pos: int,
    matcher: Optional[ListTypeMatcher] = None,
) -> Optional[ListTotal]:
    """Total a single list node that starts at *list_pos*.

    Returns ``None`` when fewer than two items carry a number.
    """
    matcher = matcher or DEFAULT_MATCHER
    list_type = list_node.type_name
    acc = _ListAccumulator(is_check_list=is_check_list_type(list_type, matcher))

    for item, _offset, index in list_node.children():
        text = item_text(item, matcher)
        if not text.strip():
            continue

        parsed = parse_numeric_value(text)
        if parsed is None:
            logger.debug("No value in item %d of %s at %d: %r", index, list_type, list_pos, text)
            continue

        checked = is_item_checked(item) if acc.is_check_list else False
        acc.add(parsed.value, parsed.unit, checked)

    if acc.count < MIN_NUMERIC_ITEMS:
        logger.debug("%s at %d has %d numeric item(s), no total", list_type, list_pos, acc.count)
        return None

    return ListTotal(
        total=acc.total,
        checked_total=acc.checked_total if acc.is_check_list else None,
        unchecked_total=acc.unchecked_total if acc.is_check_list else None,
        display_unit=acc.display_unit or Unit.NONE,
        position=list_pos + list_node.node_size,
        has_values=True,
        is_check_list=acc.is_check_list,
        item_count=acc.count,
        list_type=list_type,
    )


def find_all_list_totals(
    root: DocumentNode,
    matcher: Optional[ListTypeMatcher] = None,
) -> list[ListTotal]:
    """Find every list below *root* and return the reportable totals.

    Totals come back in the order their lists start, so a parent list
    precedes the lists nested inside it.
    """
    matcher = matcher or DEFAULT_MATCHER
    totals: list[ListTotal] = []

    def visit(node: DocumentNode, pos: int) -> bool:
        if is_list_node(node, matcher):
            total = calculate_list_total(node, pos, matcher)
            if total is not None:
                totals.append(total)
        # Keep walking: lists nested in items get their own total.
        return not node.is_text

    walk(root, visit)
    return totals


def format_list_total(total: ListTotal) -> str:
    """Format a total for display, with the checklist breakdown when relevant."""
    formatted = format_with_unit(total.total, total.display_unit)

    if has_checked_breakdown(total):
        checked = format_with_unit(total.checked_total, total.display_unit)
        unchecked = format_with_unit(total.unchecked_total, total.display_unit)
        return f"{formatted}. Checked: {checked}. Unchecked: {unchecked}"

    return formatted


def has_checked_breakdown(total: ListTotal) -> bool:
    """True for checklists where at least some value is checked off."""
    return (
        total.is_check_list
        and total.checked_total is not None
        and total.unchecked_total is not None
        and total.checked_total > 0
    )
