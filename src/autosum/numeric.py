"""Numeric value parser for list totals.

Extracts at most one quantity from a line of text. Supports integers,
decimals, a ``$`` prefix and the magnitude suffixes ``k`` (thousands),
``m`` and ``tr`` (millions). Lines that look like versions, dates, clock
times or URLs are rejected outright, even when they also hold a plain number.
"""

from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Unit(str, Enum):
    NONE = ""
    K = "k"
    M = "m"
    TR = "tr"  # triệu, Vietnamese notation for millions


UNIT_MULTIPLIERS: dict[Unit, float] = {
    Unit.NONE: 1,
    Unit.K: 1_000,
    Unit.M: 1_000_000,
    Unit.TR: 1_000_000,
}


@dataclass(frozen=True)
class ParsedNumber:
    """A quantity found in a line of text."""

    value: float  # fully expanded, e.g. "2m" -> 2_000_000
    unit: Unit
    original_text: str


@dataclass(frozen=True)
class PatternRecognizer:
    """A named pattern that reports the first span it finds in a line."""

    name: str
    pattern: re.Pattern

    def search(self, text: str) -> Optional[tuple[int, int]]:
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.span()

    def matches(self, text: str) -> bool:
        return self.search(text) is not None


VERSION = PatternRecognizer("version", re.compile(r"\d+\.\d+\.\d+", re.ASCII))
ISO_DATE = PatternRecognizer("iso_date", re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII))
CLOCK_TIME = PatternRecognizer("clock_time", re.compile(r"\d{1,2}:\d{2}", re.ASCII))
URL = PatternRecognizer("url", re.compile(r"https?://"))

# Checked in order; the first hit rejects the whole line.
EXCLUSION_RECOGNIZERS: tuple[PatternRecognizer, ...] = (VERSION, ISO_DATE, CLOCK_TIME, URL)

# $500k, 1.5m, 2tr, 100, 2.75 ... Digits are ASCII only; whitespace may be any
# Unicode space.
NUMERIC_PATTERN = re.compile(
    r"\$?\s*(?P<number>[0-9]+(?:\.[0-9]+)?)\s*(?P<unit>k|m|tr)?",
    re.IGNORECASE,
)


def excluded_by(text: str) -> Optional[PatternRecognizer]:
    """Return the first exclusion recognizer that matches *text*, if any."""
    for recognizer in EXCLUSION_RECOGNIZERS:
        if recognizer.matches(text):
            return recognizer
    return None


def parse_numeric_value(text: str) -> Optional[ParsedNumber]:
    """Parse the first numeric value in *text*.

    Returns ``None`` when the line holds no number or matches one of the
    exclusion patterns. Only the first number in the line is considered.
    """
    if not text:
        return None

    if excluded_by(text) is not None:
        return None

    match = NUMERIC_PATTERN.search(text)
    if match is None:
        return None

    try:
        base_value = float(match.group("number"))
    except ValueError:
        return None

    unit = Unit((match.group("unit") or "").lower())
    return ParsedNumber(
        value=base_value * UNIT_MULTIPLIERS[unit],
        unit=unit,
        original_text=match.group(0).strip(),
    )


def unit_multiplier(unit: Unit | str) -> float:
    """Multiplier for a unit; unknown or empty units scale by 1."""
    try:
        return UNIT_MULTIPLIERS[Unit(unit)]
    except ValueError:
        return 1


def format_number(value: float) -> str:
    """Format with thousands separators and at most two decimals.

    Whole numbers get no decimal point; trailing zeros are stripped. Halves
    round away from zero on the shortest decimal form, so 0.125 gives 0.13.
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    if not math.isfinite(value):
        return f"{value:,.2f}"
    rounded = Decimal(repr(float(value))).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    formatted = f"{rounded:,f}"
    if "." in formatted:
        formatted = formatted.rstrip("0").rstrip(".")
    return formatted


def format_with_unit(value: float, unit: Unit | str) -> str:
    """Format a normalized value in the given display unit.

    >>> format_with_unit(2500, "k")
    '2.5k'
    >>> format_with_unit(1234, "")
    '1,234'
    """
    suffix = unit.value if isinstance(unit, Unit) else (unit or "")
    if not suffix:
        return format_number(value)
    return f"{format_number(value / unit_multiplier(suffix))}{suffix}"
