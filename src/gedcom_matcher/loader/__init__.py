# src/gedcom_matcher/loader/__init__.py

"""
Public interface for the GEDCOM loader stack.

Intended usage from other parts of the project and tests:

    from gedcom_matcher.loader import (
        GEDCOMNode,
        GEDCOMTree,
        load_gedcom,
        parse,
    )
"""

from __future__ import annotations

from .encoding import detect_encoding
from .tokenizer import Token, GedcomSyntaxError, is_pointer, tokenize_line, tokenize_text
from .segmenter import GEDCOMNode, GEDCOMStructureError, segment_lines, segment_records
from .tree_builder import GEDCOMTree, build_tree, load_gedcom, parse
from .value_reconstructor import fold_continuations, reconstruct_values


__all__ = [
    "Token",
    "GedcomSyntaxError",
    "GEDCOMNode",
    "GEDCOMStructureError",
    "GEDCOMTree",
    "build_tree",
    "detect_encoding",
    "fold_continuations",
    "is_pointer",
    "load_gedcom",
    "parse",
    "reconstruct_values",
    "segment_lines",
    "segment_records",
    "tokenize_line",
    "tokenize_text",
]
