"""
GEDCOM 5.5.1 tag groups used by the matcher.
"""

from __future__ import annotations

from typing import FrozenSet

INDIVIDUAL_EVENTS: FrozenSet[str] = frozenset({
    "BIRT", "CHR", "DEAT", "BURI", "CREM", "ADOP", "BAPM", "BARM", "BASM",
    "BLES", "CHRA", "CONF", "FCOM", "ORDN", "NATU", "EMIG", "IMMI", "CENS",
    "PROB", "WILL", "GRAD", "RETI", "EVEN",
})

INDIVIDUAL_ATTRIBUTES: FrozenSet[str] = frozenset({
    "CAST", "DSCR", "EDUC", "IDNO", "NATI", "NCHI", "NMR", "OCCU", "PROP",
    "RELI", "RESI", "SSN", "TITL", "FACT",
})

FAMILY_EVENTS: FrozenSet[str] = frozenset({
    "ANUL", "CENS", "DIV", "DIVF", "ENGA", "MARB", "MARC", "MARR", "MARL",
    "MARS", "RESI", "EVEN",
})

INDIVIDUAL_ITEMS: FrozenSet[str] = INDIVIDUAL_EVENTS | INDIVIDUAL_ATTRIBUTES

# Generic user-defined event; its TYPE says what it is.
GENERIC_EVENT = "EVEN"

REFERENCE_NUMBER = "REFN"
RECORD_ID_NUMBER = "RIN"

HEAD = "HEAD"
TRAILER = "TRLR"
INDI = "INDI"
FAM = "FAM"
SOUR = "SOUR"
REPO = "REPO"
OBJE = "OBJE"
NOTE = "NOTE"
NAME = "NAME"
TITL = "TITL"
FILE = "FILE"
BIRT = "BIRT"
DATE = "DATE"
PLAC = "PLAC"
TYPE = "TYPE"
