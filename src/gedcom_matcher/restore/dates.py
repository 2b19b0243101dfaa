"""
Normalize date notation.

Some imports rewrite ``FROM x TO y`` as ``BET x AND y``, ``FROM x`` as
``AFT x`` and ``TO x`` as ``BEF x``. For every OLD person or family event
written in the FROM/TO family, find the NEW event of the same tag carrying
the converted value and put OLD's text back.

This pass changes DATE values in place instead of queueing edits: it only
compares values and never adds or removes lines.
"""

from __future__ import annotations

from typing import FrozenSet, Optional

from gedcom_matcher.core.session import ReconcileSession
from gedcom_matcher.dates.notation import DateRange, format_notation, parse_notation, range_to_period
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree
from gedcom_matcher.matching.tags import DATE, FAM, FAMILY_EVENTS, INDI, INDIVIDUAL_ITEMS

from .common import describe, resolve_new_record

PASS_NAME = "dates"


def _events_for(tag: str) -> Optional[FrozenSet[str]]:
    if tag == INDI:
        return INDIVIDUAL_ITEMS
    if tag == FAM:
        return FAMILY_EVENTS
    return None


def _restore_event_date(
    session: ReconcileSession,
    top_new: Optional[GEDCOMNode],
    event: GEDCOMNode,
    original: str,
    wanted: str,
) -> bool:
    if top_new is None:
        return False

    for event_new in top_new.children:
        if event_new.tag != event.tag:
            continue
        date_new = event_new.find_first(DATE)
        if date_new is None:
            continue
        session.logger.debug("    checking %s", date_new)
        if date_new.value == wanted:
            date_new.value = original
            session.logger.info("    changed: %s", date_new)
            session.count(PASS_NAME, "changed")
            return True
        if date_new.value == original:
            session.count(PASS_NAME, "unchanged")
            return True
    return False


def normalize_record_dates(
    session: ReconcileSession,
    top: GEDCOMNode,
    new_tree: GEDCOMTree,
    tags: FrozenSet[str],
) -> None:
    top_new = resolve_new_record(session, new_tree, top)

    for event in top.children:
        if event.tag not in tags:
            continue
        date = event.find_first(DATE)
        if date is None:
            continue

        notation = parse_notation(date.value)
        if not isinstance(notation, DateRange):
            continue

        wanted = format_notation(range_to_period(notation))
        session.logger.debug("date: %s | looking for: %s", describe(top, event, date), wanted)

        if not _restore_event_date(session, top_new, event, date.value, wanted):
            session.logger.warning(
                "    NOT FOUND, for date: %s | looking for: %s",
                describe(top, event, date), wanted,
            )
            session.count(PASS_NAME, "not_found")


def normalize_dates(
    session: ReconcileSession,
    old_tree: GEDCOMTree,
    new_tree: GEDCOMTree,
) -> None:
    session.section("Dates")
    for top in old_tree.records:
        tags = _events_for(top.tag)
        if tags is not None:
            normalize_record_dates(session, top, new_tree, tags)
