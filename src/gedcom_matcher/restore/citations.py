"""
Restore citation quality and extension ids.

ORIGINAL
--------
 0 @I12@ INDI      <----------- top
   1 GRAD          <----------- item
     2 DATE JUN 1925
     2 SOUR @S87@  <----------- citation
       3 QUAY 3    <----------- lost on import
       3 _APID 1,7602::2771226

NEW
---
 0 @I12@ INDI      <----------- top (found by id)
   1 GRAD          <----------- item (found by the item matcher)
     2 DATE JUN 1925
     2 SOUR @S87@  <----------- citation with the same pointer
       3 QUAY 3    +++++++++++++ queued
       3 _APID 1,7602::2771226
"""

from __future__ import annotations

from typing import List, Optional

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.matching.items import find_matching_items
from gedcom_matcher.matching.tags import SOUR

from .common import describe, log_outcome, resolve_new_record

PASS_NAME = "citations"


def _matching_citations(
    session: ReconcileSession,
    new_tree: GEDCOMTree,
    top: GEDCOMNode,
    item: GEDCOMNode,
    citation: GEDCOMNode,
) -> List[GEDCOMNode]:
    top_new = resolve_new_record(session, new_tree, top)
    if top_new is None:
        return []

    found: List[GEDCOMNode] = []
    for item_new in find_matching_items(item, top_new):
        session.logger.debug("    checking: %s", item_new)
        for citation_new in item_new.children:
            # NEW pointers were rewritten into OLD's id space already
            if citation_new.tag == SOUR and citation_new.pointer == citation.pointer:
                found.append(citation_new)
    return found


def _queue_unless_present(
    session: ReconcileSession,
    target: GEDCOMNode,
    line: Optional[GEDCOMNode],
) -> None:
    if line is None:
        return
    if target.find_first(line.tag) is not None:
        session.logger.debug("    %s already present on %s", line.tag, target)
        return
    session.edits.add_child(target, line.clone())


def add_quality_to(
    session: ReconcileSession,
    new_tree: GEDCOMTree,
    top: GEDCOMNode,
    item: GEDCOMNode,
    citation: GEDCOMNode,
) -> bool:
    quality = citation.find_first(session.tag("quality_tag", "QUAY"))
    extension_id = citation.find_first(session.tag("extension_id_tag", "_APID"))
    if quality is None and extension_id is None:
        return False

    session.logger.debug("looking for: %s", describe(top, item, citation))
    matches = _matching_citations(session, new_tree, top, item, citation)

    what = ",".join(
        name for name, line in (("quay", quality), ("apid", extension_id)) if line is not None
    )
    target = log_outcome(session, PASS_NAME, what, matches, describe(top, item, citation))
    if target is None:
        return False

    _queue_unless_present(session, target, quality)
    _queue_unless_present(session, target, extension_id)
    return True


def restore_citation_quality(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> None:
    session.section("Quality / extension ids")
    for top in old_tree.records:
        for item in top.children:
            for citation in item.children:
                if citation.tag == SOUR and citation.pointer:
                    add_quality_to(session, new_tree, top, item, citation)
