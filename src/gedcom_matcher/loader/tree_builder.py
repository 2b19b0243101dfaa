# src/gedcom_matcher/loader/tree_builder.py

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from gedcom_matcher.logging import get_logger

from .encoding import detect_encoding
from .segmenter import GEDCOMNode, GEDCOMStructureError, segment_records
from .tokenizer import Token, tokenize_text
from .value_reconstructor import fold_continuations

log = get_logger(__name__)

ROOT_LEVEL = -1


@dataclass
class GEDCOMTree:
    """
    A parsed GEDCOM file: a synthetic root whose direct children are the
    level-0 records (HEAD, INDI, FAM, SOUR, REPO, NOTE, OBJE, TRLR, ...).

    Records keep file order. The xref index is built lazily and must be
    rebuilt with ``reindex()`` after identifiers are rewritten or records
    are added.

    Attributes:
        root: Synthetic level -1 node owning the records.
        name: Where the tree came from (file path), for diagnostics.
    """

    root: GEDCOMNode
    name: str = ""

    _xref_index: Dict[str, GEDCOMNode] = field(
        default_factory=dict, init=False, repr=False
    )
    _tag_index: Dict[str, List[GEDCOMNode]] = field(
        default_factory=dict, init=False, repr=False
    )
    _indexes_built: bool = field(default=False, init=False, repr=False)

    # ------------------------------------------------------------------ #
    # Core helpers
    # ------------------------------------------------------------------ #

    @property
    def records(self) -> List[GEDCOMNode]:
        return self.root.children

    def __len__(self) -> int:  # pragma: no cover - trivial wrapper
        return len(self.records)

    def __iter__(self) -> Iterator[GEDCOMNode]:  # pragma: no cover - simple
        return iter(self.records)

    def iter_nodes(self) -> Iterator[GEDCOMNode]:
        """
        Iterate over every node in the tree (depth-first), including records
        and all descendants but not the synthetic root.
        """
        for record in self.records:
            yield from record.iter_subtree()

    # ------------------------------------------------------------------ #
    # Index construction
    # ------------------------------------------------------------------ #

    def _build_indexes(self) -> None:
        """Build xref and tag indexes from the current records."""
        xref_index: Dict[str, GEDCOMNode] = {}
        tag_index: Dict[str, List[GEDCOMNode]] = {}

        for node in self.iter_nodes():
            if node.xref:
                if node.xref in xref_index:
                    raise GEDCOMStructureError(
                        f"{self.name or 'GEDCOM'}: duplicate identifier {node.xref} "
                        f"(lines {xref_index[node.xref].lineno} and {node.lineno})"
                    )
                xref_index[node.xref] = node

        for record in self.records:
            tag = (record.tag or "").upper()
            if tag:
                tag_index.setdefault(tag, []).append(record)

        self._xref_index = xref_index
        self._tag_index = tag_index
        self._indexes_built = True

    def _ensure_indexes(self) -> None:
        if not self._indexes_built:
            self._build_indexes()

    def reindex(self) -> None:
        """Rebuild the indexes after the tree was mutated."""
        self._build_indexes()

    # ------------------------------------------------------------------ #
    # Public query API
    # ------------------------------------------------------------------ #

    def find_by_xref(self, xref: Optional[str]) -> Optional[GEDCOMNode]:
        """
        Return the node owning the given @XREF@ identifier, if any.
        """
        if not xref:
            return None
        self._ensure_indexes()
        return self._xref_index.get(xref)

    def find_records_by_tag(self, tag: str) -> List[GEDCOMNode]:
        """
        Return all level-0 records with the given tag (case-insensitive),
        in file order.
        """
        if not tag:
            return []
        self._ensure_indexes()
        return list(self._tag_index.get(tag.upper(), []))

    def head(self) -> Optional[GEDCOMNode]:
        """The HEAD record, or None."""
        for record in self.records:
            if record.tag == "HEAD":
                return record
        return None

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        return f"<GEDCOMTree {self.name!r} records={len(self.records)}>"


def build_tree(tokens: Iterable[Token], name: str = "") -> GEDCOMTree:
    """
    Build a GEDCOMTree from a token stream.

        tokens -> GEDCOMTree(root -> [GEDCOMNode, ...])

    CONC/CONT lines are folded into their parent values and the identifier
    index is built eagerly so duplicate identifiers fail at load time.
    """
    token_list = list(tokens)
    records = segment_records(token_list)
    folded = sum(fold_continuations(record) for record in records)
    if folded:
        log.debug("%s: folded %d CONC/CONT lines", name or "GEDCOM", folded)

    root = GEDCOMNode(level=ROOT_LEVEL, tag="", children=records)
    tree = GEDCOMTree(root=root, name=name)
    tree.reindex()
    return tree


def parse(data: bytes, encoding: str, name: str = "") -> GEDCOMTree:
    """
    Parse raw GEDCOM bytes decoded with ``encoding`` into a GEDCOMTree.

    Raises:
        GedcomSyntaxError: on a malformed line.
        GEDCOMStructureError: on a level jump or duplicate identifier.
    """
    text = data.decode(encoding, errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return build_tree(tokenize_text(text), name=name)


def load_gedcom(path: Union[str, Path]) -> GEDCOMTree:
    """
    Read a GEDCOM file, detect its character set and parse it.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    data = file_path.read_bytes()
    encoding = detect_encoding(data)
    log.info("Loading %s (%s)", file_path, encoding)

    tree = parse(data, encoding, name=str(file_path))
    log.info("Loaded %s: %d records", file_path, len(tree.records))
    return tree
