"""
Propagate source extension ids.

An OLD SOUR record's extension id (``_APID``) is copied to the NEW source it
was paired with. Only sources with a correspondence qualify.
"""

from __future__ import annotations

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.matching.tags import SOUR

from .common import resolve_new_record

PASS_NAME = "source_ids"


def restore_source_ids(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> None:
    tag = session.tag("extension_id_tag", "_APID")
    session.section(f"SOUR.{tag}s")

    for old_source in old_tree.find_records_by_tag(SOUR):
        extension_id = old_source.find_first(tag)
        if extension_id is None or not extension_id.value:
            continue

        new_source = None
        if session.correspondence.knows_old(old_source.xref):
            new_source = resolve_new_record(session, new_tree, old_source)
        if new_source is None:
            session.logger.warning("    NOT FOUND, for sour: %s", old_source.xref)
            session.count(PASS_NAME, "not_found")
            continue

        if any(c.value == extension_id.value for c in new_source.find_children(tag)):
            session.logger.debug("    %s already carries %s %s", new_source.xref, tag, extension_id.value)
            session.count(PASS_NAME, "present")
            continue

        session.edits.add_child(new_source, extension_id.clone())
        session.count(PASS_NAME, "found")
