from __future__ import annotations

from typing import List, Optional

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree


def resolve_new_record(
    session: ReconcileSession,
    new_tree: GEDCOMTree,
    old_record: GEDCOMNode,
) -> Optional[GEDCOMNode]:
    """
    The NEW record corresponding to ``old_record``.

    Identifiers are already rewritten, so this is the NEW record owning the
    OLD identifier, provided it is the same kind of record and the id was
    not withdrawn because of a collision.
    """
    if not old_record.xref or old_record.xref in session.correspondence.blocked:
        return None
    node = new_tree.find_by_xref(old_record.xref)
    if node is None or node.tag != old_record.tag:
        return None
    return node


def describe(*nodes: Optional[GEDCOMNode]) -> str:
    return " | ".join(str(n) for n in nodes if n is not None)


def log_outcome(
    session: ReconcileSession,
    pass_name: str,
    what: str,
    matches: List[GEDCOMNode],
    context: str,
) -> Optional[GEDCOMNode]:
    """
    Log and count a lookup result; return the node to use, if any.

    Several matches are reported and the first one (file order) is used.
    """
    if not matches:
        session.logger.warning("    NOT FOUND, for %s: %s", what, context)
        session.count(pass_name, "not_found")
        return None

    if len(matches) > 1:
        session.logger.warning("    MULTIPLE MATCHING EVENTS FOUND, for %s: %s", what, context)
        session.count(pass_name, "ambiguous")
    else:
        session.count(pass_name, "found")

    session.logger.info("    found: %s", matches[0])
    return matches[0]
