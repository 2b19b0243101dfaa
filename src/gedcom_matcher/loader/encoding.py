"""
Character set detection for GEDCOM input.

A byte-order mark wins; otherwise the ``1 CHAR`` line of the header decides.
"""

from __future__ import annotations

import re
from typing import Dict

from gedcom_matcher.logging import get_logger

log = get_logger(__name__)

DEFAULT_ENCODING = "utf-8"

# GEDCOM CHAR value -> Python codec
CHARSET_CODECS: Dict[str, str] = {
    "UTF-8": "utf-8",
    "UTF8": "utf-8",
    "UNICODE": "utf-16",
    "UTF-16": "utf-16",
    "ASCII": "ascii",
    "ANSI": "cp1252",
    "WINDOWS-1252": "cp1252",
    "IBMPC": "cp437",
    "IBM WINDOWS": "cp1252",
    "MACINTOSH": "mac_roman",
    "LATIN1": "latin-1",
    "ISO-8859-1": "latin-1",
}

_CHAR_LINE = re.compile(rb"^\s*1\s+CHAR\s+([^\r\n]+)", re.MULTILINE)

# Only the header is inspected.
_HEADER_BYTES = 4096


def detect_encoding(data: bytes) -> str:
    """Return the Python codec name to decode ``data`` with."""
    if data.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"
    if data.startswith(b"\xff\xfe") or data.startswith(b"\xfe\xff"):
        return "utf-16"
    if len(data) >= 2 and data[0] == 0 and data[1] != 0:
        return "utf-16-be"
    if len(data) >= 2 and data[0] != 0 and data[1] == 0:
        return "utf-16-le"

    match = _CHAR_LINE.search(data[:_HEADER_BYTES])
    if not match:
        log.debug("No CHAR line in header; assuming %s", DEFAULT_ENCODING)
        return DEFAULT_ENCODING

    declared = match.group(1).decode("ascii", errors="replace").strip().upper()
    if declared == "ANSEL":
        log.warning("ANSEL character set is read as Latin-1; diacritics may be garbled")
        return "latin-1"

    codec = CHARSET_CODECS.get(declared)
    if codec is None:
        log.warning("Unknown CHAR %r; assuming %s", declared, DEFAULT_ENCODING)
        return DEFAULT_ENCODING
    if codec == "ascii":
        # Exporters that claim ASCII still emit the odd 8-bit byte.
        return "latin-1"
    return codec
