"""
Heuristic keys for top-level records.

The import pipeline re-numbers every record, so OLD and NEW records are
paired on text they still share:

    REPO   NAME
    SOUR   TITL
    INDI   NAME|birth year
    OBJE   FILE.TITL|name of a person using the object

A media object can have several FILE entries and so several keys.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from gedcom_matcher.dates.normalizer import earliest_year
from gedcom_matcher.loader.segmenter import GEDCOMNode
from gedcom_matcher.loader.tree_builder import GEDCOMTree

from .tags import BIRT, DATE, FILE, INDI, NAME, OBJE, REPO, SOUR, TITL

KEY_SEPARATOR = "|"

# OBJE xref -> NAME of the person referencing it
MediaIndex = Dict[str, str]


def birth_year(indi: GEDCOMNode) -> str:
    """
    Year of the earliest bound of the person's birth date.

    With several dated BIRT events the last one wins. An unparseable date
    gives '' and weakens the key to the name alone; that is accepted, not
    reported.
    """
    year = ""
    for child in indi.children:
        if child.tag != BIRT:
            continue
        full_date = child.first_value(DATE)
        if full_date:
            year = earliest_year(full_date)
    return year


def build_media_reference_index(tree: GEDCOMTree) -> MediaIndex:
    """Map each OBJE xref to the NAME of the (last) INDI that links it."""
    index: MediaIndex = {}
    for indi in tree.find_records_by_tag(INDI):
        name = indi.first_value(NAME)
        for child in indi.children:
            # heuristic only; a later reference simply replaces an earlier one
            if child.tag == OBJE and child.pointer:
                index[child.pointer] = name
    return index


def repository_keys(record: GEDCOMNode, media_index: Optional[MediaIndex] = None) -> List[str]:
    return [record.first_value(NAME)]


def source_keys(record: GEDCOMNode, media_index: Optional[MediaIndex] = None) -> List[str]:
    return [record.first_value(TITL)]


def person_keys(record: GEDCOMNode, media_index: Optional[MediaIndex] = None) -> List[str]:
    return [record.first_value(NAME) + KEY_SEPARATOR + birth_year(record)]


def media_keys(record: GEDCOMNode, media_index: Optional[MediaIndex] = None) -> List[str]:
    used_by = (media_index or {}).get(record.xref or "", "")
    return [
        file_node.first_value(TITL) + KEY_SEPARATOR + used_by
        for file_node in record.find_children(FILE)
    ]


@dataclass(frozen=True)
class Category:
    """A record tag plus the function deriving its heuristic keys."""
    name: str
    tag: str
    keys: Callable[[GEDCOMNode, Optional[MediaIndex]], List[str]]
    needs_media_index: bool = False


REPOSITORIES = Category("repository", REPO, repository_keys)
SOURCES = Category("source", SOUR, source_keys)
PERSONS = Category("person", INDI, person_keys)
MEDIA = Category("media", OBJE, media_keys, needs_media_index=True)

# Order in which correspondences are built.
CATEGORIES = (REPOSITORIES, SOURCES, PERSONS, MEDIA)
