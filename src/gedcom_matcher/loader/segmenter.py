# src/gedcom_matcher/loader/segmenter.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Iterator

from .tokenizer import Token


@dataclass(eq=False)
class GEDCOMNode:
    """
    A hierarchical GEDCOM line node produced from a flat token stream.

    Nodes compare by identity: two lines with the same text are still two
    different lines in the file.

    Attributes:
        level: GEDCOM level number (0 for records, >0 for substructures).
        tag: The GEDCOM tag (HEAD, INDI, BIRT, DATE, NOTE, _APID, etc.).
        value: The free-text value (string, empty for pointer lines).
        xref: Identifier owned by this line, e.g. "@I1@" on level-0 records.
        pointer: Cross-reference carried by this line, e.g. "@S1@".
        children: Nested GEDCOMNode list ordered as they appeared.
        lineno: Line number in original file (for debugging).
    """

    level: int
    tag: str
    value: str = ""
    xref: Optional[str] = None
    pointer: Optional[str] = None
    lineno: int = 0
    children: List["GEDCOMNode"] = field(default_factory=list)

    # ---------- Helper / Mixin Methods ----------

    @property
    def payload(self) -> str:
        """The pointer for pointer lines, otherwise the value."""
        return self.pointer if self.pointer else (self.value or "")

    def add_child(self, child: "GEDCOMNode") -> None:
        self.children.append(child)

    def find_children(self, tag: str) -> List["GEDCOMNode"]:
        """Return all direct children of this node with a given tag."""
        return [c for c in self.children if c.tag == tag]

    def find_first(self, tag: str) -> Optional["GEDCOMNode"]:
        """Return the first direct child with this tag, or None."""
        for c in self.children:
            if c.tag == tag:
                return c
        return None

    def first_value(self, tag: str) -> str:
        """Payload of the first direct child with this tag, or ''."""
        child = self.find_first(tag)
        return child.payload if child is not None else ""

    def iter_subtree(self) -> Iterator["GEDCOMNode"]:
        """Yield this node and all descendants in depth-first order."""
        yield self
        for child in self.children:
            yield from child.iter_subtree()

    def clone(self) -> "GEDCOMNode":
        """Deep copy of this node and its subtree."""
        return GEDCOMNode(
            level=self.level,
            tag=self.tag,
            value=self.value,
            xref=self.xref,
            pointer=self.pointer,
            lineno=self.lineno,
            children=[c.clone() for c in self.children],
        )

    def relevel(self, level: int) -> None:
        """Set this node's level and renumber the subtree below it."""
        self.level = level
        for child in self.children:
            child.relevel(level + 1)

    def __str__(self) -> str:
        parts = [str(self.level)]
        if self.xref:
            parts.append(self.xref)
        parts.append(self.tag)
        if self.pointer:
            parts.append(self.pointer)
        elif self.value:
            parts.append(self.value)
        return " ".join(parts)

    def __repr__(self) -> str:
        ref = f" {self.xref}" if self.xref else ""
        target = f" -> {self.pointer}" if self.pointer else ""
        return f"<GEDCOMNode {self.level}{ref} {self.tag}{target}: {self.value!r}>"


# ---------- SEGMENTER IMPLEMENTATION ----------

class GEDCOMStructureError(Exception):
    """Raised when hierarchical structure rules are violated."""


def segment_lines(tokens: List[Token]) -> List[GEDCOMNode]:
    """
    Convert a flat list of Tokens into a full hierarchical tree.

    Rules:
        - Level 0 tokens are roots.
        - Level N nodes must be children of the nearest previous node
          with level (N-1).
        - Levels may not jump more than +1 (e.g., level 3 cannot follow level 1).

    Children keep the order in which they appear in the file; item matching
    relies on that order when it picks the first of several candidates.
    """
    if not tokens:
        return []

    root_nodes: List[GEDCOMNode] = []
    stack: List[GEDCOMNode] = []  # stack[level] = last node at that level

    for tok in tokens:
        node = GEDCOMNode(
            level=tok.level,
            tag=tok.tag,
            value=tok.value,
            xref=tok.xref,
            pointer=tok.pointer,
            lineno=tok.lineno,
        )

        if tok.level == 0:
            root_nodes.append(node)
            stack = [node]
            continue

        if not stack:
            raise GEDCOMStructureError(
                f"Line {tok.lineno}: level {tok.level} line before any level-0 record"
            )

        if tok.level > len(stack):
            raise GEDCOMStructureError(
                f"Line {tok.lineno}: Level jumped from {len(stack)-1} to {tok.level} without intermediate parent"
            )

        # Pop the stack down to parent level
        parent_level = tok.level - 1
        stack = stack[: tok.level]

        parent = stack[parent_level]
        parent.add_child(node)
        stack.append(node)

    return root_nodes


def segment_records(tokens: List[Token]) -> List[GEDCOMNode]:
    """
    Convenience wrapper: build the tree and return the level-0 nodes.
    """
    return segment_lines(tokens)
