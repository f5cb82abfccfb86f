"""Running totals for numeric values in document lists."""

from autosum.aggregator import (
    ListTotal,
    ListTypeMatcher,
    calculate_list_total,
    find_all_list_totals,
    format_list_total,
)
from autosum.annotations import TotalAnnotation, create_total_annotation, create_total_annotations
from autosum.numeric import ParsedNumber, Unit, format_with_unit, parse_numeric_value
from autosum.pipeline import Autosum

__all__ = [
    "Autosum",
    "ListTotal",
    "ListTypeMatcher",
    "ParsedNumber",
    "TotalAnnotation",
    "Unit",
    "calculate_list_total",
    "create_total_annotation",
    "create_total_annotations",
    "find_all_list_totals",
    "format_list_total",
    "format_with_unit",
    "parse_numeric_value",
]
