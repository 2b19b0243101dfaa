"""
Content restoration passes.

Each pass reads OLD and the id-rewritten NEW and queues the insertions that
put lost content back. Nothing is inserted until the session's edit queue is
committed.
"""

from .citations import restore_citation_quality
from .dates import normalize_dates
from .header import restore_header_anchor
from .media import merge_media_files
from .notes import restore_notes
from .sources import restore_source_ids

__all__ = [
    "merge_media_files",
    "normalize_dates",
    "restore_citation_quality",
    "restore_header_anchor",
    "restore_notes",
    "restore_source_ids",
]
