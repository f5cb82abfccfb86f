"""Positioned annotations for displaying list totals.

An annotation is the renderer-neutral description of a total widget: where
it goes, which side of the position it sticks to, and the ordered label /
value parts to show. Turning it into DOM, terminal output or anything else
is left to the host.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from autosum.aggregator import ListTotal, has_checked_breakdown
from autosum.config import LabelConfig
from autosum.numeric import format_with_unit


class PartKind(str, Enum):
    LABEL = "label"
    VALUE = "value"


class AnnotationPart(BaseModel):
    kind: PartKind
    text: str


class TotalAnnotation(BaseModel):
    """A total to display right after a list."""

    position: int
    side: int = 1  # after the list end
    key: str
    parts: list[AnnotationPart] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(part.text for part in self.parts)

    def values(self) -> list[str]:
        return [part.text for part in self.parts if part.kind == PartKind.VALUE]


def _label(text: str) -> AnnotationPart:
    return AnnotationPart(kind=PartKind.LABEL, text=text)


def _value(text: str) -> AnnotationPart:
    return AnnotationPart(kind=PartKind.VALUE, text=text)


def create_total_annotation(
    total: ListTotal, labels: Optional[LabelConfig] = None
) -> TotalAnnotation:
    """Build the annotation for one list total."""
    labels = labels or LabelConfig()
    unit = total.display_unit

    parts = [
        _label(labels.total),
        _value(format_with_unit(total.total, unit)),
    ]
    if has_checked_breakdown(total):
        parts += [
            _label(labels.separator),
            _label(labels.checked),
            _value(format_with_unit(total.checked_total, unit)),
            _label(labels.separator),
            _label(labels.unchecked),
            _value(format_with_unit(total.unchecked_total, unit)),
        ]

    return TotalAnnotation(
        position=total.position,
        key=f"autosum-{total.position}",
        parts=parts,
    )


def create_total_annotations(
    totals: list[ListTotal], labels: Optional[LabelConfig] = None
) -> list[TotalAnnotation]:
    return [create_total_annotation(total, labels) for total in totals]
