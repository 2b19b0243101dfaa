# src/gedcom_matcher/loader/value_reconstructor.py

"""
Fold GEDCOM continuation lines into whole values.

    0 @N1@ NOTE Graduated        ->  NOTE value "Graduated with honors\nClass of 1900"
    1 CONC  with honors
    1 CONT Class of 1900

CONC glues text on directly, CONT starts a new line. Matching compares whole
values, and the writer splits them again on output with its own width, so
continuation lines never survive loading.
"""

from __future__ import annotations

from typing import List

from .segmenter import GEDCOMNode

CONCATENATION = "CONC"
CONTINUATION = "CONT"


def fold_continuations(node: GEDCOMNode) -> int:
    """
    Fold the CONC/CONT children of ``node`` and of everything below it.
    Returns the number of continuation lines removed.
    """
    pieces = [node.value or ""]
    kept: List[GEDCOMNode] = []
    folded = 0

    for child in node.children:
        tag = (child.tag or "").upper()
        if tag == CONCATENATION:
            pieces.append(child.value or "")
            folded += 1
        elif tag == CONTINUATION:
            pieces.append("\n" + (child.value or ""))
            folded += 1
        else:
            folded += fold_continuations(child)
            kept.append(child)

    node.value = "".join(pieces)
    node.children = kept
    return folded


def reconstruct_values(records: List[GEDCOMNode]) -> List[GEDCOMNode]:
    """Fold continuations in every record, in place. Returns ``records``."""
    for record in records:
        fold_continuations(record)
    return records
