# src/gedcom_matcher/loader/tokenizer.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass(frozen=True)
class Token:
    """
    A single GEDCOM line token.

    Attributes:
        lineno: 1-based line number in the original file.
        level: Parsed GEDCOM level (0, 1, 2, ...).
        xref: Optional identifier owned by this line, e.g. "@I1@" or None.
        tag: GEDCOM tag, e.g. "INDI", "BIRT", "_APID", "CONC", "CONT".
        value: The raw line value (payload) as a string (may be empty).
        pointer: Cross-reference carried as the value, e.g. "@S1@" or None.
        raw: The original line content without trailing newline characters.
    """
    lineno: int
    level: int
    xref: Optional[str]
    tag: str
    value: str
    pointer: Optional[str]
    raw: str


class GedcomSyntaxError(ValueError):
    """Raised when a GEDCOM line cannot be parsed according to basic syntax."""


def _strip_eol(line: str) -> str:
    """Strip trailing CR/LF characters but preserve all other whitespace."""
    return line.rstrip("\r\n")


def is_pointer(value: str) -> bool:
    """
    True if ``value`` is exactly one ``@XREF@`` cross-reference.

    ``@#DJULIAN@ 1750`` style calendar escapes are values, not pointers.
    """
    return (
        len(value) > 2
        and value.startswith("@")
        and value.endswith("@")
        and not value.startswith("@#")
        and "@" not in value[1:-1]
        and " " not in value
    )


def tokenize_line(line: str, lineno: int = 0) -> Token:
    """
    Parse a single GEDCOM line into a Token.

    Hybrid parsing strategy:
        - Manually split off the level.
        - Then manually detect an optional xref (starts with '@' and
          continues until the next space).
        - Remaining part is split into TAG and optional VALUE; a value that
          is a single ``@XREF@`` becomes the token's pointer.

    This is deliberately strict about the required order:
        <level> [<xref>] <tag> [<value>]

    Examples:
        "0 HEAD"
        "0 @I1@ INDI"
        "1 NAME John /Doe/"
        "2 SOUR @S1@"
    """
    raw = _strip_eol(line)

    if not raw.strip():
        raise GedcomSyntaxError(f"Empty or whitespace-only line at {lineno}")

    # Handle optional UTF-8 BOM on the very first line.
    if lineno == 1 and raw.startswith("\ufeff"):
        raw = raw.lstrip("\ufeff")

    # Some exporters indent lines by level; the level number is what counts.
    text = raw.lstrip(" \t")

    # --- 1. Extract level -------------------------------------------------
    parts = text.split(" ", 1)
    if len(parts) == 1:
        raise GedcomSyntaxError(
            f"Line {lineno}: missing tag (only level found) -> {raw!r}"
        )

    level_str, rest = parts[0], parts[1]
    if not (level_str.isascii() and level_str.isdigit()):
        raise GedcomSyntaxError(
            f"Line {lineno}: level is not numeric -> {level_str!r} in {raw!r}"
        )

    level = int(level_str)
    rest = rest.lstrip(" ")

    if not rest:
        raise GedcomSyntaxError(
            f"Line {lineno}: missing tag after level -> {raw!r}"
        )

    # --- 2. Extract optional xref ----------------------------------------
    xref: Optional[str] = None

    if rest.startswith("@"):
        try:
            space_index = rest.index(" ")
        except ValueError:
            raise GedcomSyntaxError(
                f"Line {lineno}: xref present but no tag -> {raw!r}"
            ) from None

        xref = rest[:space_index]
        rest = rest[space_index + 1 :].lstrip(" ")

        if not is_pointer(xref):
            raise GedcomSyntaxError(
                f"Line {lineno}: malformed xref {xref!r} -> {raw!r}"
            )
        if not rest:
            raise GedcomSyntaxError(
                f"Line {lineno}: xref present but missing tag -> {raw!r}"
            )

    # --- 3. Extract tag and optional value --------------------------------
    if " " in rest:
        tag, value = rest.split(" ", 1)
    else:
        tag, value = rest, ""

    if not tag:
        raise GedcomSyntaxError(
            f"Line {lineno}: empty tag after level/xref -> {raw!r}"
        )

    pointer: Optional[str] = None
    if is_pointer(value.strip()):
        if xref is not None:
            raise GedcomSyntaxError(
                f"Line {lineno}: line owns {xref} and also points at {value.strip()} -> {raw!r}"
            )
        pointer = value.strip()
        value = ""

    return Token(
        lineno=lineno,
        level=level,
        xref=xref,
        tag=tag,
        value=value,
        pointer=pointer,
        raw=raw,
    )


def tokenize_text(text: str) -> Iterator[Token]:
    """
    Yield Token objects for every non-empty GEDCOM line in ``text``.

    Raises:
        GedcomSyntaxError: if a line is syntactically invalid.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    for lineno, raw_line in enumerate(normalized.split("\n"), start=1):
        stripped = _strip_eol(raw_line)

        if not stripped.strip():
            # Skip truly blank lines; they are not meaningful in GEDCOM.
            continue

        yield tokenize_line(stripped, lineno=lineno)
