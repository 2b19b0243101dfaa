"""
gedcom_matcher: reconcile a re-imported GEDCOM file with its hand-curated
original, carrying identifiers and lost content back into the new file.
"""

__version__ = "0.1.0"
