# tests/test_tokenizer.py

from __future__ import annotations

import pytest

from gedcom_matcher.loader import GedcomSyntaxError, is_pointer, tokenize_line, tokenize_text
from gedcom_matcher.utils import mock_file_path


def test_tokenize_line_simple_head() -> None:
    token = tokenize_line("0 HEAD", lineno=1)
    assert token.lineno == 1
    assert token.level == 0
    assert token.xref is None
    assert token.pointer is None
    assert token.tag == "HEAD"
    assert token.value == ""


def test_tokenize_line_with_xref_and_tag_only() -> None:
    token = tokenize_line("0 @I1@ INDI", lineno=1)
    assert token.level == 0
    assert token.xref == "@I1@"
    assert token.pointer is None
    assert token.tag == "INDI"
    assert token.value == ""


def test_tokenize_line_with_value() -> None:
    line = "1 NOTE This is a test note"
    token = tokenize_line(line, lineno=10)
    assert token.level == 1
    assert token.pointer is None
    assert token.tag == "NOTE"
    assert token.value == "This is a test note"
    assert token.raw == line


def test_tokenize_line_pointer_value() -> None:
    token = tokenize_line("2 SOUR @S87@", lineno=4)
    assert token.tag == "SOUR"
    assert token.pointer == "@S87@"
    assert token.value == ""


def test_calendar_escape_is_a_value_not_a_pointer() -> None:
    token = tokenize_line("2 DATE @#DJULIAN@ 1750", lineno=1)
    assert token.pointer is None
    assert token.value == "@#DJULIAN@ 1750"
    assert not is_pointer("@#DJULIAN@")


def test_vendor_tag_is_kept_verbatim() -> None:
    token = tokenize_line("3 _APID 1,7602::2771226", lineno=1)
    assert token.tag == "_APID"
    assert token.value == "1,7602::2771226"


def test_tokenize_line_with_bom_on_first_line() -> None:
    # Simulate a UTF-8 BOM at the start of the first line.
    line = "\ufeff0 HEAD"
    token = tokenize_line(line, lineno=1)
    assert token.level == 0
    assert token.tag == "HEAD"
    assert token.pointer is None


def test_tokenize_line_invalid_level_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("X HEAD", lineno=1)


def test_tokenize_line_missing_tag_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("0 ", lineno=1)


def test_tokenize_line_xref_without_tag_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("0 @I1@", lineno=1)


def test_tokenize_text_handles_crlf_and_blank_lines() -> None:
    tokens = list(tokenize_text("0 HEAD\r\n\r\n1 CHAR UTF-8\r\n0 TRLR\r\n"))
    assert [t.tag for t in tokens] == ["HEAD", "CHAR", "TRLR"]
    assert tokens[1].value == "UTF-8"
    assert tokens[2].lineno == 4


def test_tokenize_text_reads_existing_mock_file() -> None:
    path = mock_file_path("old_1.ged")
    tokens = list(tokenize_text(path.read_text(encoding="utf-8")))

    assert tokens, "Expected at least one token from mock GEDCOM file"
    # First line should be level 0 (usually HEAD).
    assert tokens[0].level == 0
    assert tokens[0].tag == "HEAD"


def test_tokenize_line_non_ascii_level_raises() -> None:
    with pytest.raises(GedcomSyntaxError):
        tokenize_line("\u00b9 NAME A /A/", lineno=3)
