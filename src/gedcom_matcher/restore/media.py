"""
Merge media file detail.

The import keeps media records but rewrites their FILE structure. OLD's FILE
subtree is put back right in front of NEW's first FILE, so it becomes the
primary file reference while NEW's own stays available.
"""

from __future__ import annotations

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.matching.tags import FILE, OBJE

from .common import resolve_new_record

PASS_NAME = "media"


def merge_media_files(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> None:
    session.section("OBJEs")

    for old_media in old_tree.find_records_by_tag(OBJE):
        new_media = resolve_new_record(session, new_tree, old_media)
        if new_media is None:
            session.logger.warning("    NOT FOUND, for obje: %s", old_media.xref)
            session.count(PASS_NAME, "not_found")
            continue

        old_file = old_media.find_first(FILE)
        if old_file is None:
            session.logger.debug("    no FILE on OLD %s", old_media.xref)
            continue

        session.logger.info("    found: %s", new_media)
        session.count(PASS_NAME, "found")
        session.edits.add_child_before(new_media, old_file.clone(), new_media.find_first(FILE))
