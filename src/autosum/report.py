"""Autosum report: diagnostics and statistics from a totalling run."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Optional

from autosum.aggregator import (
    DEFAULT_MATCHER,
    ListTotal,
    ListTypeMatcher,
    format_list_total,
    item_text,
)
from autosum.numeric import parse_numeric_value
from autosum.tree.base import DocumentNode, walk


@dataclass
class ReportedTotal:
    """One reportable list as it appears in the report."""

    position: int
    list_type: str
    item_count: int
    formatted: str


@dataclass
class AutosumReport:
    """Summary of a totalling run over one document."""

    # Source info
    source_file: str = ""

    # Timing
    load_time_seconds: float = 0.0
    compute_time_seconds: float = 0.0
    total_time_seconds: float = 0.0

    # List counts
    list_count: int = 0
    check_list_count: int = 0
    nested_list_count: int = 0
    item_count: int = 0
    numeric_item_count: int = 0

    totals: list[ReportedTotal] = field(default_factory=list)

    @property
    def reportable_count(self) -> int:
        return len(self.totals)

    @property
    def skipped_list_count(self) -> int:
        return self.list_count - self.reportable_count

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return json.dumps(self._to_dict(), indent=indent)

    def _to_dict(self) -> dict:
        """Convert to a plain dict for JSON serialization."""
        return {
            "source_file": self.source_file,
            "timing": {
                "load_seconds": round(self.load_time_seconds, 3),
                "compute_seconds": round(self.compute_time_seconds, 3),
                "total_seconds": round(self.total_time_seconds, 3),
            },
            "list_counts": {
                "lists": self.list_count,
                "check_lists": self.check_list_count,
                "nested_lists": self.nested_list_count,
                "reportable": self.reportable_count,
                "skipped": self.skipped_list_count,
            },
            "item_counts": {
                "items": self.item_count,
                "numeric": self.numeric_item_count,
            },
            "totals": [
                {
                    "position": t.position,
                    "list_type": t.list_type,
                    "items": t.item_count,
                    "total": t.formatted,
                }
                for t in self.totals
            ],
        }

    @classmethod
    def from_document(
        cls,
        root: DocumentNode,
        totals: list[ListTotal],
        source_file: str = "",
        matcher: Optional[ListTypeMatcher] = None,
    ) -> AutosumReport:
        """Build a report by walking a document tree and its computed totals."""
        report = cls(source_file=source_file)
        _count_lists(root, report, matcher or DEFAULT_MATCHER)
        report.totals = [
            ReportedTotal(
                position=t.position,
                list_type=t.list_type,
                item_count=t.item_count,
                formatted=format_list_total(t),
            )
            for t in totals
        ]
        return report


def _count_lists(root: DocumentNode, report: AutosumReport, matcher: ListTypeMatcher) -> None:
    """Walk the tree to populate list and item counters."""
    list_ends: list[int] = []

    def visit(node: DocumentNode, pos: int) -> bool:
        if not matcher.is_list(node.type_name):
            return not node.is_text

        # Lists are visited in start order, so any enclosing list is still open.
        while list_ends and list_ends[-1] <= pos:
            list_ends.pop()
        if list_ends:
            report.nested_list_count += 1
        list_ends.append(pos + node.node_size)

        report.list_count += 1
        if matcher.is_check_list(node.type_name):
            report.check_list_count += 1
        for item, _offset, _index in node.children():
            report.item_count += 1
            if parse_numeric_value(item_text(item, matcher)) is not None:
                report.numeric_item_count += 1
        return True

    walk(root, visit)
