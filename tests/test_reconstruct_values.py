# tests/test_reconstruct_values.py

from __future__ import annotations

from gedcom_matcher.loader import fold_continuations, reconstruct_values
from gedcom_matcher.loader.segmenter import GEDCOMNode


def test_conc_appends_without_newline():
    # Build a fake record tree with CONT/CONC mixture
    parent = GEDCOMNode(level=1, tag="NOTE", value="Line one", lineno=1)
    conc = GEDCOMNode(level=2, tag="CONC", value=" and more", lineno=2)
    cont = GEDCOMNode(level=2, tag="CONT", value="Second line", lineno=3)
    conc2 = GEDCOMNode(level=2, tag="CONC", value=" more text", lineno=4)

    parent.children = [conc, cont, conc2]

    reconstruct_values([parent])

    assert parent.value == "Line one and more\nSecond line more text"
    # CONC/CONT nodes should be removed
    assert parent.children == []


def test_empty_cont_adds_blank_line():
    parent = GEDCOMNode(level=0, tag="NOTE", value="First", xref="@N1@")
    parent.children = [
        GEDCOMNode(level=1, tag="CONT", value=""),
        GEDCOMNode(level=1, tag="CONT", value="Third"),
    ]

    reconstruct_values([parent])

    assert parent.value == "First\n\nThird"


def test_other_children_are_kept_and_folded_recursively():
    source = GEDCOMNode(level=1, tag="SOUR", pointer="@S1@")
    page = GEDCOMNode(level=2, tag="PAGE", value="Roll")
    page.children = [GEDCOMNode(level=3, tag="CONC", value=" 12")]
    source.children = [page]

    reconstruct_values([source])

    assert source.children == [page]
    assert page.value == "Roll 12"
    assert page.children == []


def test_fold_continuations_counts_removed_lines():
    note = GEDCOMNode(level=0, tag="NOTE", value="a", xref="@N1@")
    note.children = [
        GEDCOMNode(level=1, tag="CONC", value="b"),
        GEDCOMNode(level=1, tag="CONT", value="c"),
    ]

    assert fold_continuations(note) == 2
    assert note.value == "ab\nc"
