# tests/test_restore.py

from __future__ import annotations

from gedcom_matcher.exporter import serialize_lines
from gedcom_matcher.restore import (
    merge_media_files,
    normalize_dates,
    restore_citation_quality,
    restore_header_anchor,
    restore_notes,
    restore_source_ids,
)


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------

def test_note_is_restored_on_matching_event(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 DATE JUN 1900
        2 NOTE @N1@
        0 @N1@ NOTE Graduated with honors
        0 TRLR
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 DATE JUN 1900
        0 TRLR
    """)

    restore_notes(session, old, new)
    assert new.find_by_xref("@N1@") is None  # queued, not applied

    session.edits.commit()
    new.reindex()

    grad = new.find_by_xref("@I1@").find_first("GRAD")
    assert grad.first_value("NOTE") == "@N1@"
    assert new.find_by_xref("@N1@").value == "Graduated with honors"
    assert [r.tag for r in new.records] == ["INDI", "NOTE", "TRLR"]
    assert session.stats["notes"]["found"] == 1


def test_note_body_referenced_twice_is_copied_once(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 BIRT
        2 NOTE @N1@
        1 DEAT
        2 NOTE @N1@
        0 @N1@ NOTE Shared
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 BIRT
        1 DEAT
    """)

    restore_notes(session, old, new)
    session.edits.commit()

    assert [r.tag for r in new.records] == ["INDI", "NOTE"]
    person = new.records[0]
    assert person.find_first("BIRT").first_value("NOTE") == "@N1@"
    assert person.find_first("DEAT").first_value("NOTE") == "@N1@"


def test_note_without_matching_event_is_reported(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 NOTE @N1@
        0 @N1@ NOTE Lost
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 BIRT
    """)

    restore_notes(session, old, new)

    assert len(session.edits) == 0
    assert session.stats["notes"]["not_found"] == 1


def test_note_with_several_candidates_goes_to_first(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE 1900
        2 NOTE @N1@
        0 @N1@ NOTE Lodger
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE 1900
        2 PLAC Boston
        1 RESI
        2 DATE 1900
        2 PLAC Salem
    """)

    restore_notes(session, old, new)
    session.edits.commit()

    first, second = new.records[0].children
    assert first.first_value("NOTE") == "@N1@"
    assert second.find_first("NOTE") is None
    assert session.stats["notes"]["ambiguous"] == 1


# ---------------------------------------------------------------------------
# Citation quality
# ---------------------------------------------------------------------------

def test_quality_is_restored_without_duplicating_extension_id(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 DATE JUN 1925
        2 SOUR @S87@
        3 QUAY 3
        3 _APID 1,7602::2771226
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 DATE JUN 1925
        2 SOUR @S87@
        3 _APID 1,7602::2771226
    """)

    restore_citation_quality(session, old, new)
    session.edits.commit()

    assert serialize_lines(new) == [
        "0 @I1@ INDI",
        "1 GRAD",
        "2 DATE JUN 1925",
        "2 SOUR @S87@",
        "3 _APID 1,7602::2771226",
        "3 QUAY 3",
    ]


def test_citation_to_other_source_is_not_found(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 SOUR @S1@
        3 QUAY 2
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 GRAD
        2 SOUR @S2@
    """)

    restore_citation_quality(session, old, new)

    assert len(session.edits) == 0
    assert session.stats["citations"]["not_found"] == 1


# ---------------------------------------------------------------------------
# Source extension ids
# ---------------------------------------------------------------------------

def test_source_extension_id_is_copied(session, gedcom):
    old = gedcom("""
        0 @S1@ SOUR
        1 TITL Census 1900
        1 _APID 12345
    """)
    new = gedcom("""
        0 @S1@ SOUR
        1 TITL Census 1900
    """)
    session.correspondence.add("@S1@", "@S1@")

    restore_source_ids(session, old, new)
    session.edits.commit()

    assert new.find_by_xref("@S1@").first_value("_APID") == "12345"


def test_source_without_correspondence_is_skipped(session, gedcom):
    old = gedcom("""
        0 @S1@ SOUR
        1 TITL Census 1900
        1 _APID 12345
    """)
    new = gedcom("""
        0 @S1@ SOUR
        1 TITL Census 1900
    """)

    restore_source_ids(session, old, new)

    assert len(session.edits) == 0
    assert session.stats["source_ids"]["not_found"] == 1


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

def test_old_file_goes_before_new_file(session, gedcom):
    old = gedcom("""
        0 @M1@ OBJE
        1 FILE photos/john.jpg
        2 FORM jpg
        2 TITL John portrait
    """)
    new = gedcom("""
        0 @M1@ OBJE
        1 FILE https://media.example.com/40.jpg
        2 FORM jpg
        2 TITL John portrait
        1 RIN 7
    """)

    merge_media_files(session, old, new)
    session.edits.commit()

    media = new.find_by_xref("@M1@")
    assert [c.payload for c in media.children] == [
        "photos/john.jpg",
        "https://media.example.com/40.jpg",
        "7",
    ]
    assert media.children[0].first_value("TITL") == "John portrait"


# ---------------------------------------------------------------------------
# Header anchor
# ---------------------------------------------------------------------------

def test_anchor_is_added_to_header(session, gedcom):
    old = gedcom("""
        0 HEAD
        1 _ROOT @I1@
        0 @I1@ INDI
    """)
    new = gedcom("""
        0 HEAD
        1 CHAR UTF-8
        0 @I1@ INDI
    """)

    restore_header_anchor(session, old, new)
    session.edits.commit()

    assert new.head().first_value("_ROOT") == "@I1@"


def test_existing_anchor_is_replaced(session, gedcom):
    old = gedcom("""
        0 HEAD
        1 _ROOT @I1@
        0 @I1@ INDI
    """)
    new = gedcom("""
        0 HEAD
        1 _ROOT @I2@
        0 @I1@ INDI
        0 @I2@ INDI
    """)

    restore_header_anchor(session, old, new)

    assert len(session.edits) == 0
    assert new.head().find_children("_ROOT")[0].pointer == "@I1@"


def test_anchor_to_missing_person_is_skipped(session, gedcom):
    old = gedcom("""
        0 HEAD
        1 _ROOT @I1@
        0 @I1@ INDI
    """)
    new = gedcom("""
        0 HEAD
        0 @I10@ INDI
    """)

    restore_header_anchor(session, old, new)

    assert len(session.edits) == 0
    assert new.head().find_first("_ROOT") is None
    assert session.stats["header"]["not_found"] == 1


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def test_period_notation_is_put_back(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE FROM 1900 TO 1910
        1 OCCU Clerk
        2 DATE FROM 1905
        0 @F1@ FAM
        1 MARR
        2 DATE TO 1920
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE BET 1900 AND 1910
        1 OCCU Clerk
        2 DATE AFT 1905
        0 @F1@ FAM
        1 MARR
        2 DATE BEF 1920
    """)

    normalize_dates(session, old, new)

    person = new.find_by_xref("@I1@")
    assert person.find_first("RESI").first_value("DATE") == "FROM 1900 TO 1910"
    assert person.find_first("OCCU").first_value("DATE") == "FROM 1905"
    assert new.find_by_xref("@F1@").find_first("MARR").first_value("DATE") == "TO 1920"
    assert session.stats["dates"]["changed"] == 3
    assert len(session.edits) == 0


def test_dates_already_in_range_notation_are_left_alone(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE FROM 1900 TO 1910
        1 BIRT
        2 DATE BET 1880 AND 1881
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE FROM 1900 TO 1910
        1 BIRT
        2 DATE 1880
    """)

    normalize_dates(session, old, new)

    assert new.records[0].find_first("BIRT").first_value("DATE") == "1880"
    assert session.stats["dates"] == {"unchanged": 1}


def test_date_without_converted_counterpart_is_reported(session, gedcom):
    old = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE FROM 1900 TO 1910
    """)
    new = gedcom("""
        0 @I1@ INDI
        1 RESI
        2 DATE BET 1900 AND 1911
    """)

    normalize_dates(session, old, new)

    assert new.records[0].find_first("RESI").first_value("DATE") == "BET 1900 AND 1911"
    assert session.stats["dates"]["not_found"] == 1
