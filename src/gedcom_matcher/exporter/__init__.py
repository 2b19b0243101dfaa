"""
Exporter package.

Re-exports the GEDCOM serializer used by the pipeline.
"""

from __future__ import annotations

from .gedcom_writer import DEFAULT_WRAP_WIDTH, serialize, serialize_lines

__all__ = ["DEFAULT_WRAP_WIDTH", "serialize", "serialize_lines"]
