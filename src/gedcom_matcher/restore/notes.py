"""
Restore notes.

The import drops every top-level NOTE record. For each note reference under
an item of an OLD record, find the same item in NEW, queue a copy of the
reference under it and queue the note record itself as a new NEW record.
When the OLD item matches several NEW items, the first one gets the note.
"""

from __future__ import annotations

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.matching.items import find_matching_items
from gedcom_matcher.matching.tags import NOTE, TRAILER

from .common import describe, log_outcome, resolve_new_record

PASS_NAME = "notes"


def _queue_note_record(
    session: ReconcileSession,
    new_tree: GEDCOMTree,
    note_record: GEDCOMNode,
) -> None:
    xref = note_record.xref
    if xref in session.queued_notes:
        return
    session.queued_notes.add(xref)

    existing = new_tree.find_by_xref(xref)
    if existing is not None:
        if existing.tag != NOTE:
            session.logger.warning("    NEW already uses %s for %s; note body not copied", xref, existing.tag)
        return

    # keep TRLR last
    trailer = next((r for r in new_tree.records if r.tag == TRAILER), None)
    session.edits.add_child_before(new_tree.root, note_record.clone(), trailer)


def add_note_to(
    session: ReconcileSession,
    new_tree: GEDCOMTree,
    top: GEDCOMNode,
    item: GEDCOMNode,
    note_ref: GEDCOMNode,
    note_record: GEDCOMNode,
) -> bool:
    session.logger.debug("looking for: %s | %s", top, item.tag)

    top_new = resolve_new_record(session, new_tree, top)
    matches = find_matching_items(item, top_new) if top_new is not None else []

    target = log_outcome(
        session, PASS_NAME, "note", matches, describe(top, item, note_record),
    )
    if target is None:
        return False

    session.edits.add_child(target, note_ref.clone())
    _queue_note_record(session, new_tree, note_record)
    return True


def restore_notes(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> None:
    session.section("Notes")
    for top in old_tree.records:
        for item in top.children:
            for att in item.children:
                if att.tag != NOTE or not att.pointer:
                    continue
                note_record = old_tree.find_by_xref(att.pointer)
                if note_record is None:
                    continue
                add_note_to(session, new_tree, top, item, att, note_record)
