"""
Deferred structural edits.

Restoration passes never insert into NEW directly: the item matcher's
uniqueness check counts siblings, and an insertion made mid-pass would change
what later lookups see. Insertions are queued here and applied once, in
enqueue order, after every read-only pass has finished.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from gedcom_matcher.core.exceptions import EditQueueError
from gedcom_matcher.loader.segmenter import GEDCOMNode


@dataclass(eq=False)
class PendingEdit:
    parent: GEDCOMNode
    child: GEDCOMNode
    before: Optional[GEDCOMNode] = None

    def apply(self) -> None:
        self.child.relevel(self.parent.level + 1)
        if self.before is None:
            self.parent.children.append(self.child)
            return

        for index, sibling in enumerate(self.parent.children):
            if sibling is self.before:
                self.parent.children.insert(index, self.child)
                return
        raise EditQueueError(
            f"anchor {self.before!r} is not a child of {self.parent!r}"
        )


@dataclass
class EditQueue:
    edits: List[PendingEdit] = field(default_factory=list)
    committed: bool = False

    def __len__(self) -> int:
        return len(self.edits)

    def _enqueue(self, edit: PendingEdit) -> None:
        if self.committed:
            raise EditQueueError("edit queued after commit")
        self.edits.append(edit)

    def add_child(self, parent: GEDCOMNode, child: GEDCOMNode) -> None:
        """Queue ``child`` to be appended to ``parent``."""
        self._enqueue(PendingEdit(parent=parent, child=child))

    def add_child_before(
        self,
        parent: GEDCOMNode,
        child: GEDCOMNode,
        before: Optional[GEDCOMNode],
    ) -> None:
        """Queue ``child`` to go right before ``before`` (append if None)."""
        self._enqueue(PendingEdit(parent=parent, child=child, before=before))

    def commit(self) -> int:
        """Apply every queued edit in order. Returns the number applied."""
        if self.committed:
            raise EditQueueError("edit queue already committed")
        self.committed = True
        for edit in self.edits:
            edit.apply()
        return len(self.edits)
