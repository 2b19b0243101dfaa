"""
Nested item matcher.

Decides whether an item (event, attribute, name...) under an OLD record is
the same item as a candidate under the corresponding NEW record. The checks
run in a fixed order and the first decisive one wins:

1. tags differ                              -> no
2. both EVEN and TYPE differs (no case)     -> no
3. candidate is the only one of its kind    -> yes
4. main values differ                       -> no
5. DATE: both present -> equal?; one present -> no; none -> go on
6. PLAC up to the first comma differs       -> no
7. same SOUR pointer on both sides          -> yes, otherwise no

Step 3 counts NEW siblings as they were before any restoration edits; the
passes queue their insertions so this stays true.
"""

from __future__ import annotations

from typing import List, Tuple

from gedcom_matcher.loader.segmenter import GEDCOMNode

from .tags import DATE, GENERIC_EVENT, PLAC, SOUR, TYPE


def _event_type(item: GEDCOMNode) -> str:
    return item.first_value(TYPE).lower()


def _signature(item: GEDCOMNode) -> Tuple[str, str]:
    if item.tag == GENERIC_EVENT:
        return (item.tag, _event_type(item))
    return (item.tag, "")


def _place_head(item: GEDCOMNode) -> str:
    return item.first_value(PLAC).split(",")[0].lower()


def is_unique(new_item: GEDCOMNode, new_parent: GEDCOMNode) -> bool:
    """True if no other child of ``new_parent`` has ``new_item``'s tag (and EVEN type)."""
    signature = _signature(new_item)
    count = 0
    for sibling in new_parent.children:
        if sibling.tag == new_item.tag and _signature(sibling) == signature:
            count += 1
            if count > 1:
                return False
    return True


def items_match(old_item: GEDCOMNode, new_item: GEDCOMNode, new_parent: GEDCOMNode) -> bool:
    if old_item is None or new_item is None:
        return False

    if old_item.tag != new_item.tag:
        return False

    if old_item.tag == GENERIC_EVENT and _event_type(old_item) != _event_type(new_item):
        return False

    if is_unique(new_item, new_parent):
        return True

    if old_item.payload != new_item.payload:
        return False

    date = old_item.first_value(DATE)
    date_new = new_item.first_value(DATE)
    if date and date_new:
        return date == date_new
    if date or date_new:
        return False

    if _place_head(old_item) != _place_head(new_item):
        return False

    source = old_item.first_value(SOUR)
    source_new = new_item.first_value(SOUR)
    return bool(source) and source == source_new


def find_matching_items(old_item: GEDCOMNode, new_parent: GEDCOMNode) -> List[GEDCOMNode]:
    """All children of ``new_parent`` matching ``old_item``, in file order."""
    return [
        new_item
        for new_item in new_parent.children
        if items_match(old_item, new_item, new_parent)
    ]
