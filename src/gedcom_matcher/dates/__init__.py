"""
Date handling: bound extraction and range/period notation conversion.
"""

from .normalizer import DateBounds, DateParseError, SimpleDate, earliest_year, parse_date_literal
from .notation import (
    DateNotation,
    DatePeriod,
    DateRange,
    PeriodKind,
    format_notation,
    parse_notation,
    period_text_to_range_text,
    period_to_range,
    range_text_to_period_text,
    range_to_period,
)

__all__ = [
    "DateBounds",
    "DateNotation",
    "DateParseError",
    "DatePeriod",
    "DateRange",
    "PeriodKind",
    "SimpleDate",
    "earliest_year",
    "format_notation",
    "parse_date_literal",
    "parse_notation",
    "period_text_to_range_text",
    "period_to_range",
    "range_text_to_period_text",
    "range_to_period",
]
