# src/gedcom_matcher/dates/normalizer.py

"""
Bound extraction for GEDCOM DATE values.

``parse_date_literal`` turns a DATE value into its earliest and latest
possible calendar dates. The matcher only needs the year of the earliest
bound (for person keys), but both bounds are computed so range values can be
checked for order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Month and calendar helpers
# ---------------------------------------------------------------------------

MONTHS = {
    "JAN": 1,
    "FEB": 2,
    "MAR": 3,
    "APR": 4,
    "MAY": 5,
    "JUN": 6,
    "JUL": 7,
    "AUG": 8,
    "SEP": 9,
    "SEPT": 9,
    "OCT": 10,
    "NOV": 11,
    "DEC": 12,
}

CALENDAR_ALIASES = {
    "JULIAN": "JULIAN",
    "OLD STYLE": "JULIAN",
    "GREGORIAN": "GREGORIAN",
    "NEW STYLE": "GREGORIAN",
}

SEASONS = {"SPRING", "SUMMER", "AUTUMN", "FALL", "WINTER"}

EARLY_MID_LATE = {"EARLY", "MID", "LATE"}


# ---------------------------------------------------------------------------
# Qualifier mapping
# ---------------------------------------------------------------------------

# alias (upper case) -> standard GEDCOM keyword
QUALIFIER_ALIASES: Dict[str, str] = {}

def _add_qualifier_aliases(aliases: List[str], code: str) -> None:
    for a in aliases:
        QUALIFIER_ALIASES[a.upper()] = code


_add_qualifier_aliases(["abt", "abt.", "about", "circa", "c.", "ca", "ca."], "ABT")
_add_qualifier_aliases(["cal", "cal.", "calculated"], "CAL")
_add_qualifier_aliases(["est", "est.", "estimated"], "EST")
_add_qualifier_aliases(["bef", "bef.", "before"], "BEF")
_add_qualifier_aliases(["aft", "aft.", "after"], "AFT")
_add_qualifier_aliases(["bet", "bet.", "betw", "between", "btw"], "BET")
_add_qualifier_aliases(["from"], "FROM")
_add_qualifier_aliases(["to"], "TO")
_add_qualifier_aliases(["int"], "INT")


class DateParseError(ValueError):
    """Raised when a DATE value cannot be interpreted."""


@dataclass(frozen=True)
class SimpleDate:
    """A calendar date with year precision at minimum."""
    year: int
    month: Optional[int] = None
    day: Optional[int] = None

    def sort_key(self) -> Tuple[int, int, int]:
        return (self.year, self.month or 0, self.day or 0)


@dataclass(frozen=True)
class DateBounds:
    """Earliest and latest dates a DATE value admits; None is an open bound."""
    earliest: Optional[SimpleDate]
    latest: Optional[SimpleDate]


# ---------------------------------------------------------------------------
# Core parsing helpers
# ---------------------------------------------------------------------------

def _strip_calendar_suffix(raw: str) -> str:
    """
    Remove a trailing '(CalendarName)' suffix if present.
    """
    s = raw.strip()

    if s.endswith(")"):
        idx = s.rfind("(")
        if idx != -1:
            label = s[idx + 1 : -1].strip()
            if label.upper() in CALENDAR_ALIASES:
                s = s[:idx].strip()

    return s


def _strip_phrase(raw: str) -> str:
    """Drop a trailing '(date phrase)' as used by INT dates."""
    s = raw.strip()
    if s.endswith(")"):
        idx = s.find("(")
        if idx != -1:
            s = s[:idx].strip()
    return s


def _parse_year(token: str) -> Optional[int]:
    token = token.strip()
    # dual-dated years: 1750/51
    if "/" in token:
        token = token.split("/", 1)[0]
    if 3 <= len(token) <= 4 and token.isascii() and token.isdigit():
        return int(token)
    return None


def _parse_simple_date(tokens: List[str]) -> SimpleDate:
    """
    Parse a date with no leading keyword (ABT, BEF, BET, etc. removed already).

    Supports:
        - '1900', '1750/51'
        - 'JAN 1900'
        - '1 JAN 1900'
        - 'SPRING 1880', 'EARLY 1800S' (year precision)
        - a trailing 'B.C.' / 'BC'
    """
    tokens = [t for t in tokens if t]
    if not tokens:
        raise DateParseError("missing date")

    bc = False
    if tokens[-1] in ("B.C.", "BC", "(B.C.)"):
        bc = True
        tokens = tokens[:-1]
        if not tokens:
            raise DateParseError("missing year before B.C.")

    def _year(token: str) -> int:
        year = _parse_year(token)
        if year is None:
            raise DateParseError(f"not a year: {token!r}")
        return -year if bc else year

    if len(tokens) == 1:
        return SimpleDate(year=_year(tokens[0]))

    if len(tokens) == 2:
        first, year_token = tokens
        if first in SEASONS:
            return SimpleDate(year=_year(year_token))
        if first in EARLY_MID_LATE:
            return SimpleDate(year=_year(year_token.rstrip("S")))
        mon = MONTHS.get(first)
        if mon is None:
            raise DateParseError(f"not a month: {first!r}")
        return SimpleDate(year=_year(year_token), month=mon)

    if len(tokens) == 3:
        day_token, mon_token, year_token = tokens
        mon = MONTHS.get(mon_token)
        if mon is None:
            raise DateParseError(f"not a month: {mon_token!r}")
        if not (day_token.isascii() and day_token.isdigit()) or not 1 <= int(day_token) <= 31:
            raise DateParseError(f"not a day: {day_token!r}")
        return SimpleDate(year=_year(year_token), month=mon, day=int(day_token))

    raise DateParseError(f"unrecognized date: {' '.join(tokens)!r}")


def _split_on(tokens: List[str], separator: str) -> Optional[Tuple[List[str], List[str]]]:
    """
    Split tokens into (left, right) at the first occurrence of ``separator``.
    Returns None if no separator found.
    """
    for i, t in enumerate(tokens):
        if t == separator:
            return tokens[:i], tokens[i + 1 :]
    return None


# ---------------------------------------------------------------------------
# Main public API
# ---------------------------------------------------------------------------

def parse_date_literal(raw: Optional[str]) -> DateBounds:
    """
    Parse a GEDCOM DATE value into its earliest/latest bounds.

        '1 JAN 1900'              -> 1900-01-01 .. 1900-01-01
        'ABT 1900'                -> 1900 .. 1900
        'BET 1900 AND 1910'       -> 1900 .. 1910
        'FROM 1900 TO 1910'       -> 1900 .. 1910
        'AFT 1900' / 'FROM 1900'  -> 1900 .. open
        'BEF 1900' / 'TO 1900'    -> open .. 1900

    Calendar escapes (``@#DJULIAN@``) and suffixes (``(Julian)``) are
    ignored; bounds are reported as written.

    Raises:
        DateParseError: for empty values, bare date phrases, unknown words and
        ranges whose end precedes their start.
    """
    s = _strip_calendar_suffix(str(raw or ""))
    if not s:
        raise DateParseError("empty date")
    if s.startswith("("):
        raise DateParseError(f"date phrase only: {s!r}")

    tokens = [
        t for t in s.replace(",", " ").upper().split()
        if not (t.startswith("@#") and t.endswith("@"))
    ]
    if not tokens:
        raise DateParseError(f"no date in {s!r}")

    keyword = QUALIFIER_ALIASES.get(tokens[0])
    rest = tokens[1:] if keyword else tokens

    if keyword == "INT":
        date = _parse_simple_date(_strip_phrase(" ".join(rest)).split())
        return DateBounds(earliest=date, latest=date)

    if keyword == "BET":
        split = _split_on(rest, "AND")
        if not split:
            raise DateParseError(f"BET without AND: {s!r}")
        return _ordered(_parse_simple_date(split[0]), _parse_simple_date(split[1]), s)

    if keyword == "FROM":
        split = _split_on(rest, "TO")
        if split:
            return _ordered(_parse_simple_date(split[0]), _parse_simple_date(split[1]), s)
        return DateBounds(earliest=_parse_simple_date(rest), latest=None)

    if keyword in ("TO", "BEF"):
        return DateBounds(earliest=None, latest=_parse_simple_date(rest))

    if keyword == "AFT":
        return DateBounds(earliest=_parse_simple_date(rest), latest=None)

    # ABT / CAL / EST or a plain date
    date = _parse_simple_date(rest)
    return DateBounds(earliest=date, latest=date)


def _ordered(earliest: SimpleDate, latest: SimpleDate, text: str) -> DateBounds:
    if latest.sort_key() < earliest.sort_key():
        raise DateParseError(f"dates out of order: {text!r}")
    return DateBounds(earliest=earliest, latest=latest)


def earliest_year(raw: Optional[str]) -> str:
    """
    Year of the earliest bound as text, or '' when the value does not parse
    or has an open start (``BEF 1900``).
    """
    try:
        bounds = parse_date_literal(raw)
    except DateParseError:
        return ""
    if bounds.earliest is None:
        return ""
    return str(bounds.earliest.year)
