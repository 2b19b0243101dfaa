"""
Identifier rewriter.

Applies the correspondence to NEW in one traversal: owned identifiers and
pointers found in ``forward`` are replaced by the OLD identifier, and every
RIN (record-modification stamp) is blanked. Afterwards NEW records that were
matched carry their OLD identifier, so later passes look them up by OLD id.
"""

from __future__ import annotations

from typing import List

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree

from .tags import RECORD_ID_NUMBER


def drop_colliding_pairs(session: ReconcileSession, new_tree: GEDCOMTree) -> List[str]:
    """
    Forget pairs whose OLD id is owned by another NEW record that keeps its
    id. Rewriting them would leave two records with the same identifier.
    A dropped pair's NEW record keeps its id too, which can block further
    pairs, so this repeats until nothing more is dropped.
    Returns the NEW ids whose pairs were dropped.
    """
    forward = session.correspondence.forward
    kept_ids = {
        node.xref
        for node in new_tree.iter_nodes()
        if node.xref and node.xref not in forward
    }

    dropped: List[str] = []
    while True:
        colliding = [
            new_id for new_id, old_id in sorted(forward.items()) if old_id in kept_ids
        ]
        if not colliding:
            return dropped

        for new_id in colliding:
            old_id = session.correspondence.discard_new(new_id)
            session.logger.warning(
                "Not renaming NEW %s to %s: NEW keeps another record with id %s",
                new_id, old_id, old_id,
            )
            session.count("rewrite", "collision")
            kept_ids.add(new_id)
            dropped.append(new_id)


def _rewrite_node(session: ReconcileSession, node: GEDCOMNode) -> None:
    forward = session.correspondence.forward

    if node.xref and node.xref in forward:
        node.xref = forward[node.xref]
        session.count("rewrite", "ids")

    if node.pointer and node.pointer in forward:
        node.pointer = forward[node.pointer]
        session.count("rewrite", "pointers")

    if node.tag == RECORD_ID_NUMBER:
        node.value = ""


def rewrite_identifiers(session: ReconcileSession, new_tree: GEDCOMTree) -> None:
    session.section("Rewriting identifiers")
    drop_colliding_pairs(session, new_tree)

    for node in new_tree.iter_nodes():
        _rewrite_node(session, node)

    new_tree.reindex()

    stats = session.stats.get("rewrite", {})
    session.logger.info(
        "Rewrote %d identifiers and %d pointers",
        stats.get("ids", 0), stats.get("pointers", 0),
    )
