"""
gedcom_writer.py
Serialize a GEDCOMTree back to GEDCOM bytes.

Levels are taken from tree depth, not from the stored ``level`` attribute, so
subtrees moved between files always come out correctly numbered. Values are
re-wrapped: embedded newlines become CONT lines and anything longer than
``wrap_width`` continues on CONC lines.
"""

from __future__ import annotations

from typing import List

from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.logging import get_logger

log = get_logger(__name__)

DEFAULT_WRAP_WIDTH = 120

# Python codec -> GEDCOM CHAR value
CHAR_NAMES = {
    "utf-8": "UTF-8",
    "utf-8-sig": "UTF-8",
    "utf-16": "UNICODE",
    "ascii": "ASCII",
    "cp1252": "ANSI",
}

# A CONC split never leaves fewer than this many value characters on a line.
_MIN_CHUNK = 1


def _line_prefix(level: int, node: GEDCOMNode, tag: str) -> str:
    parts = [str(level)]
    if node.xref:
        parts.append(node.xref)
    parts.append(tag)
    return " ".join(parts)


def _split_point(text: str, limit: int) -> int:
    """
    Index at which to cut ``text`` so the head is at most ``limit`` chars and
    neither side of the cut is a space (readers strip them around CONC).
    """
    if len(text) <= limit:
        return len(text)
    cut = limit
    while cut > _MIN_CHUNK and (text[cut - 1] == " " or text[cut] == " "):
        cut -= 1
    if cut <= _MIN_CHUNK:
        return limit
    return cut


def _emit_value(out: List[str], prefix: str, value: str, level: int, wrap_width: int) -> None:
    """Append the line for ``prefix``+``value`` plus any CONT/CONC continuations."""
    segments = value.split("\n")

    for index, segment in enumerate(segments):
        if index == 0:
            head_prefix = prefix
        else:
            head_prefix = f"{level + 1} CONT"

        room = max(wrap_width - len(head_prefix) - 1, _MIN_CHUNK + 1)
        cut = _split_point(segment, room)
        head, rest = segment[:cut], segment[cut:]
        out.append(f"{head_prefix} {head}" if head else head_prefix)

        conc_prefix = f"{level + 1} CONC"
        room = max(wrap_width - len(conc_prefix) - 1, _MIN_CHUNK + 1)
        while rest:
            cut = _split_point(rest, room)
            out.append(f"{conc_prefix} {rest[:cut]}")
            rest = rest[cut:]


def _emit_node(out: List[str], node: GEDCOMNode, level: int, wrap_width: int) -> None:
    prefix = _line_prefix(level, node, node.tag)
    if node.pointer:
        out.append(f"{prefix} {node.pointer}")
    elif node.value:
        _emit_value(out, prefix, node.value, level, wrap_width)
    else:
        out.append(prefix)

    for child in node.children:
        _emit_node(out, child, level + 1, wrap_width)


def _sync_charset(tree: GEDCOMTree, encoding: str) -> None:
    head = tree.head()
    if head is None:
        return
    char = head.find_first("CHAR")
    name = CHAR_NAMES.get(encoding.lower())
    if char is not None and name and char.value != name:
        log.info("Header CHAR %s -> %s", char.value, name)
        char.value = name


def serialize_lines(tree: GEDCOMTree, wrap_width: int = DEFAULT_WRAP_WIDTH) -> List[str]:
    """Return the GEDCOM text lines for ``tree`` (no line terminators)."""
    out: List[str] = []
    for record in tree.records:
        _emit_node(out, record, 0, wrap_width)
    return out


def serialize(
    tree: GEDCOMTree,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
    encoding: str = "utf-8",
) -> bytes:
    """
    Serialize ``tree`` to bytes in ``encoding``.

    The header CHAR line is updated to name the output character set.
    """
    _sync_charset(tree, encoding)
    lines = serialize_lines(tree, wrap_width)
    text = "\n".join(lines) + "\n" if lines else ""
    return text.encode(encoding, errors="replace")
