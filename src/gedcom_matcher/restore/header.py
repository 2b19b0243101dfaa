"""
Restore the header anchor person (``1 _ROOT @I1@`` under HEAD).
"""

from __future__ import annotations

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree

PASS_NAME = "header"


def restore_header_anchor(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> None:
    tag = session.tag("anchor_tag", "_ROOT")

    old_head = old_tree.head()
    if old_head is None:
        return
    anchor = old_head.first_value(tag)
    if not anchor:
        return

    session.section(f"HEAD.{tag}")
    new_head = new_tree.head()
    if new_head is None:
        session.logger.warning("    NOT FOUND, NEW has no HEAD record")
        session.count(PASS_NAME, "not_found")
        return

    if new_tree.find_by_xref(anchor) is None:
        session.logger.warning("    NOT FOUND, anchor %s is not a record in NEW", anchor)
        session.count(PASS_NAME, "not_found")
        return

    existing = new_head.find_first(tag)
    if existing is not None:
        existing.pointer = anchor
        existing.value = ""
    else:
        session.edits.add_child(new_head, GEDCOMNode(level=1, tag=tag, pointer=anchor))
    session.logger.info("    %s set to %s", tag, anchor)
    session.count(PASS_NAME, "found")
