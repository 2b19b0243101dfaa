"""
Correspondence builder.

For one record category:

1. Scan NEW and file every record under its heuristic key. A key met twice
   is ambiguous: it is pulled from the table and remembered as a duplicate,
   so it can never match.
2. Scan OLD, compute the same keys and pair each OLD record with the NEW
   record filed under its key. Keys that repeat within OLD are ambiguous too.

Records with a REFN already have stable identity and are skipped on both
sides. Misses are logged; nothing here is fatal.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Optional, Set, Tuple

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree

from .keys import CATEGORIES, Category, MediaIndex, build_media_reference_index
from .tags import REFERENCE_NUMBER


def _candidates(
    tree: GEDCOMTree,
    category: Category,
    media_index: Optional[MediaIndex],
) -> List[Tuple[GEDCOMNode, str]]:
    """(record, key) pairs for every keyed record of ``category``, file order."""
    out: List[Tuple[GEDCOMNode, str]] = []
    for record in tree.find_records_by_tag(category.tag):
        if not record.xref:
            continue
        if record.first_value(REFERENCE_NUMBER):
            continue
        for key in category.keys(record, media_index):
            out.append((record, key))
    return out


def index_new_records(
    session: ReconcileSession,
    new_tree: GEDCOMTree,
    category: Category,
    media_index: Optional[MediaIndex] = None,
) -> Dict[str, str]:
    """Phase 1: key -> NEW id, with colliding keys moved to the duplicate set."""
    table = session.key_tables.setdefault(category.name, {})
    duplicates = session.duplicates.setdefault(category.name, set())
    sharing = session.duplicate_records.setdefault(category.name, {})

    for record, key in _candidates(new_tree, category, media_index):
        if key in duplicates:
            if record.xref not in sharing[key]:
                sharing[key].append(record.xref)
            continue
        if table.get(key) == record.xref:
            # two FILEs of one media object
            continue
        if key in table:
            sharing[key] = [table.pop(key), record.xref]
            duplicates.add(key)
            session.logger.debug("Ambiguous %s key in NEW: %r", category.name, key)
        else:
            table[key] = record.xref

    return table


def match_old_records(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    category: Category,
    media_index: Optional[MediaIndex] = None,
) -> int:
    """Phase 2: pair OLD records with NEW ones through the key table."""
    table = session.key_tables.get(category.name, {})
    duplicates = session.duplicates.get(category.name, set())
    old_duplicates: Set[str] = session.old_duplicates.setdefault(category.name, set())

    candidates = _candidates(old_tree, category, media_index)
    seen = Counter(key for _, key in {(record.xref, key) for record, key in candidates})
    old_duplicates.update(key for key, n in seen.items() if n > 1)

    matched = 0
    for record, key in candidates:
        if key in old_duplicates:
            session.logger.warning(
                "Cannot match %s %s: key %r is not unique in OLD",
                category.tag, record.xref, key,
            )
            session.count(category.name, "ambiguous")
            continue

        new_id = table.get(key)
        if new_id is None:
            reason = "ambiguous in NEW" if key in duplicates else "no match in NEW"
            session.logger.warning(
                "Cannot match %s %s based on key %r (%s)",
                category.tag, record.xref, key, reason,
            )
            session.count(category.name, "ambiguous" if key in duplicates else "not_found")
            continue

        pairs = session.correspondence
        if pairs.knows_old(record.xref) and pairs.to_new(record.xref) == new_id:
            # another FILE of the same media object agreed
            continue

        if pairs.add(record.xref, new_id):
            matched += 1
            session.count(category.name, "found")
            if record.xref != new_id:
                session.logger.debug("%s: NEW %s -> OLD %s", category.tag, new_id, record.xref)
        else:
            session.logger.warning(
                "Cannot match %s %s to %s: one side is already matched",
                category.tag, record.xref, new_id,
            )
            session.count(category.name, "ambiguous")

    return matched


def build_correspondences(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
    category: Category,
) -> int:
    """Run both phases for one category. Returns the number of OLD records paired."""
    session.section(f"Matching {category.tag} records")

    new_index = build_media_reference_index(new_tree) if category.needs_media_index else None
    old_index = build_media_reference_index(old_tree) if category.needs_media_index else None

    index_new_records(session, new_tree, category, new_index)
    matched = match_old_records(session, old_tree, category, old_index)

    session.logger.info("%s: %d matched", category.tag, matched)
    return matched


def build_all_correspondences(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> int:
    """Repositories, sources, persons and media objects, in that order."""
    return sum(
        build_correspondences(session, old_tree, new_tree, category)
        for category in CATEGORIES
    )


def report_duplicates(session: ReconcileSession) -> Dict[str, List[str]]:
    """Log every key excluded as a duplicate in NEW. Returns them sorted."""
    report = {
        category: sorted(keys)
        for category, keys in session.duplicates.items()
        if keys
    }
    if not report:
        return report

    session.section("WARNING: Duplicates found")
    for category, keys in sorted(report.items()):
        sharing = session.duplicate_records.get(category, {})
        for key in keys:
            session.logger.warning(
                "    %s: %r (%s)", category, key, ", ".join(sharing.get(key, [])),
            )
    return report
