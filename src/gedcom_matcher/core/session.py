from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from gedcom_matcher.core.edits import EditQueue


@dataclass
class Correspondence:
    """
    OLD <-> NEW identifier pairs believed to denote the same record.

    ``forward`` maps NEW ids to OLD ids (used to rewrite NEW), ``reverse``
    maps OLD ids to NEW ids. Pairs whose ids are already identical need no
    rewriting and are kept only in ``unchanged``.
    """

    forward: Dict[str, str] = field(default_factory=dict)
    reverse: Dict[str, str] = field(default_factory=dict)
    unchanged: Set[str] = field(default_factory=set)
    # OLD ids whose pair was withdrawn; NEW records with these ids are unrelated
    blocked: Set[str] = field(default_factory=set)

    def add(self, old_id: str, new_id: str) -> bool:
        """
        Record a pair. Returns False (and records nothing) if either side is
        already paired with something else.
        """
        if self.knows_old(old_id) or new_id in self.forward or new_id in self.unchanged:
            return False

        if old_id == new_id:
            self.unchanged.add(old_id)
        else:
            self.forward[new_id] = old_id
            self.reverse[old_id] = new_id
        return True

    def discard_new(self, new_id: str) -> Optional[str]:
        """Forget the pair for ``new_id``; returns the OLD id it mapped to."""
        old_id = self.forward.pop(new_id, None)
        if old_id is not None:
            self.reverse.pop(old_id, None)
            self.blocked.add(old_id)
        return old_id

    def knows_old(self, old_id: str) -> bool:
        return old_id in self.reverse or old_id in self.unchanged

    def to_old(self, new_id: str) -> str:
        return self.forward.get(new_id, new_id)

    def to_new(self, old_id: str) -> str:
        return self.reverse.get(old_id, old_id)

    def __len__(self) -> int:
        return len(self.forward)


@dataclass
class ReconcileSession:
    """
    State shared by every reconciliation pass.

    Each pass is a function of (session, old_tree, new_tree); nothing lives in
    module globals, so several sessions can run side by side.
    """

    config: Any
    logger: Any

    correspondence: Correspondence = field(default_factory=Correspondence)

    # category -> heuristic key -> NEW id
    key_tables: Dict[str, Dict[str, str]] = field(default_factory=dict)
    # category -> keys seen more than once in NEW
    duplicates: Dict[str, Set[str]] = field(default_factory=dict)
    # category -> duplicate key -> NEW ids sharing it
    duplicate_records: Dict[str, Dict[str, List[str]]] = field(default_factory=dict)
    # category -> keys seen more than once in OLD
    old_duplicates: Dict[str, Set[str]] = field(default_factory=dict)

    edits: EditQueue = field(default_factory=EditQueue)
    queued_notes: Set[str] = field(default_factory=set)

    # pass name -> Counter(found / not_found / ambiguous / ...)
    stats: Dict[str, Counter] = field(default_factory=dict)

    def count(self, pass_name: str, outcome: str, n: int = 1) -> None:
        self.stats.setdefault(pass_name, Counter())[outcome] += n

    def tag(self, name: str, default: str) -> str:
        """Configured tag name, e.g. ``tag("extension_id_tag", "_APID")``."""
        getter = getattr(self.config, "tag", None)
        return getter(name, default) if getter else default

    def section(self, title: str) -> None:
        """Write a pass header to the diagnostic log."""
        self.logger.info("-" * 60)
        self.logger.info(title)
