"""
Reconciliation driver.

    OLD --+
          +--> correspondences --> rewrite NEW ids --> restoration passes
    NEW --+                                            (queued edits)
                                                            |
                                   commit <-----------------+

Passes run in a fixed order. Every pass except date normalization only reads
the two trees and queues insertions; the queue is committed once at the end.
"""

from __future__ import annotations

from typing import Dict, List

from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.matching.correspondence import build_all_correspondences, report_duplicates
from gedcom_matcher.matching.rewriter import rewrite_identifiers
from gedcom_matcher.restore import (
    merge_media_files,
    normalize_dates,
    restore_citation_quality,
    restore_header_anchor,
    restore_notes,
    restore_source_ids,
)

from .session import ReconcileSession

RESTORATION_PASSES = (
    restore_header_anchor,
    restore_notes,
    restore_citation_quality,
    restore_source_ids,
    merge_media_files,
    normalize_dates,
)


def match_and_update(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> Dict[str, List[str]]:
    """
    Reconcile ``new_tree`` against ``old_tree`` in place.

    Returns the keys that were excluded as duplicates, per category.
    """
    build_all_correspondences(session, old_tree, new_tree)
    duplicates = report_duplicates(session)

    rewrite_identifiers(session, new_tree)

    for restore in RESTORATION_PASSES:
        restore(session, old_tree, new_tree)

    applied = session.edits.commit()
    session.count("edits", "applied", applied)
    new_tree.reindex()

    session.section("Done")
    session.logger.info("Applied %d queued edits", applied)
    return duplicates
