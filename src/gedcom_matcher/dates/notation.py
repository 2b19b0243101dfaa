"""
Range/period notation for GEDCOM DATE values.

Two notation families express the same bounded or open interval:

    DateRange (FROM/TO)          DatePeriod (BET/AFT/BEF)
    FROM x TO y          <->     BET x AND y
    FROM x               <->     AFT x
    TO x                 <->     BEF x

Some import pipelines rewrite the first family into the second. The date
normalization pass uses these conversions to find the rewritten value in NEW
and put OLD's spelling back.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class PeriodKind(str, Enum):
    BETWEEN = "BET"
    AFTER = "AFT"
    BEFORE = "BEF"


@dataclass(frozen=True)
class DateRange:
    """``FROM start TO end``; either side may be absent, not both."""
    start: Optional[str] = None
    end: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.start and not self.end:
            raise ValueError("DateRange needs a start or an end")


@dataclass(frozen=True)
class DatePeriod:
    """``BET first AND second``, ``AFT first`` or ``BEF first``."""
    kind: PeriodKind
    first: str
    second: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.kind is PeriodKind.BETWEEN) != (self.second is not None):
            raise ValueError(f"{self.kind.value} period with wrong number of dates")


DateNotation = Union[DateRange, DatePeriod]


def parse_notation(text: str) -> Optional[DateNotation]:
    """
    Classify ``text`` as a DateRange or DatePeriod, or None for any other
    DATE value (plain dates, ABT, INT, ...).

    Matching is on upper-case GEDCOM keywords; the date parts are kept
    verbatim. With several separators the last one splits.
    """
    if text.startswith("FROM "):
        body = text[len("FROM "):]
        start, sep, end = body.rpartition(" TO ")
        if sep and start and end:
            return DateRange(start=start, end=end)
        return DateRange(start=body) if body else None

    if text.startswith("TO "):
        body = text[len("TO "):]
        return DateRange(end=body) if body else None

    if text.startswith("BET "):
        body = text[len("BET "):]
        first, sep, second = body.rpartition(" AND ")
        if sep and first and second:
            return DatePeriod(PeriodKind.BETWEEN, first, second)
        return None

    if text.startswith("AFT "):
        body = text[len("AFT "):]
        return DatePeriod(PeriodKind.AFTER, body) if body else None

    if text.startswith("BEF "):
        body = text[len("BEF "):]
        return DatePeriod(PeriodKind.BEFORE, body) if body else None

    return None


def format_notation(notation: DateNotation) -> str:
    if isinstance(notation, DateRange):
        if notation.start and notation.end:
            return f"FROM {notation.start} TO {notation.end}"
        if notation.start:
            return f"FROM {notation.start}"
        return f"TO {notation.end}"

    if notation.kind is PeriodKind.BETWEEN:
        return f"BET {notation.first} AND {notation.second}"
    return f"{notation.kind.value} {notation.first}"


def range_to_period(notation: DateRange) -> DatePeriod:
    if notation.start and notation.end:
        return DatePeriod(PeriodKind.BETWEEN, notation.start, notation.end)
    if notation.start:
        return DatePeriod(PeriodKind.AFTER, notation.start)
    return DatePeriod(PeriodKind.BEFORE, notation.end or "")


def period_to_range(notation: DatePeriod) -> DateRange:
    if notation.kind is PeriodKind.BETWEEN:
        return DateRange(start=notation.first, end=notation.second)
    if notation.kind is PeriodKind.AFTER:
        return DateRange(start=notation.first)
    return DateRange(end=notation.first)


def range_text_to_period_text(text: str) -> Optional[str]:
    """'FROM 1900 TO 1910' -> 'BET 1900 AND 1910'; None if not a range."""
    notation = parse_notation(text)
    if not isinstance(notation, DateRange):
        return None
    return format_notation(range_to_period(notation))


def period_text_to_range_text(text: str) -> Optional[str]:
    """'BET 1900 AND 1910' -> 'FROM 1900 TO 1910'; None if not a period."""
    notation = parse_notation(text)
    if not isinstance(notation, DatePeriod):
        return None
    return format_notation(period_to_range(notation))
