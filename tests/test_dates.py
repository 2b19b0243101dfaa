# tests/test_dates.py

from __future__ import annotations

import pytest

from gedcom_matcher.dates.normalizer import DateParseError, SimpleDate, earliest_year, parse_date_literal


def test_full_date():
    bounds = parse_date_literal("12 MAR 1880")
    assert bounds.earliest == SimpleDate(year=1880, month=3, day=12)
    assert bounds.latest == bounds.earliest


def test_month_year():
    bounds = parse_date_literal("JUN 1900")
    assert bounds.earliest == SimpleDate(year=1900, month=6)


def test_approximate_abt():
    bounds = parse_date_literal("ABT 1882")
    assert bounds.earliest.year == 1882
    assert bounds.latest.year == 1882


def test_approximate_circa_alias():
    assert parse_date_literal("circa 1850").earliest.year == 1850


def test_between_range():
    bounds = parse_date_literal("BET 1900 AND 1910")
    assert bounds.earliest.year == 1900
    assert bounds.latest.year == 1910


def test_from_to_range():
    bounds = parse_date_literal("FROM 1 JAN 1900 TO 1910")
    assert bounds.earliest == SimpleDate(year=1900, month=1, day=1)
    assert bounds.latest.year == 1910


def test_open_ranges():
    assert parse_date_literal("AFT 1900").latest is None
    assert parse_date_literal("FROM 1900").latest is None
    assert parse_date_literal("BEF 1900").earliest is None
    assert parse_date_literal("TO 1900").earliest is None


def test_interpreted_date_drops_phrase():
    assert parse_date_literal("INT 1900 (about the turn of the century)").earliest.year == 1900


def test_calendar_escape_and_dual_year():
    assert parse_date_literal("@#DJULIAN@ 11 FEB 1750/51").earliest.year == 1750


def test_bc_year_is_negative():
    assert parse_date_literal("500 B.C.").earliest.year == -500


@pytest.mark.parametrize(
    "raw",
    ["", "(unknown)", "sometime in spring", "BET 1910 AND 1900", "BET 1900", "32 JAN 1900"],
)
def test_unparseable_values_raise(raw):
    with pytest.raises(DateParseError):
        parse_date_literal(raw)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("12 MAR 1880", "1880"),
        ("ABT 1882", "1882"),
        ("BET 1875 AND 1880", "1875"),
        ("AFT 1870", "1870"),
        ("BEF 1880", ""),
        ("not a date", ""),
        (None, ""),
        ("ABT \u00b9\u2079\u2070\u2070", ""),
        ("\u00b9\u00b2 MAR 1880", ""),
    ],
)
def test_earliest_year(raw, expected):
    assert earliest_year(raw) == expected
