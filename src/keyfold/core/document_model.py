"""
Document model for keyword-annotated markup.

A MarkupDocument owns a tree of DocumentNode handles parsed from the source
bytes. The folding core only depends on the DocumentTree protocol, so any
other tree provider with the same four accessors can be used instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple
from uuid import uuid4


@dataclass(eq=False)
class DocumentNode:
    """One element of a markup document."""

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    start: int = 0
    end: int = 0
    children: List[DocumentNode] = field(default_factory=list)
    line: int = 1

    def __repr__(self) -> str:
        return f"DocumentNode({self.tag!r}, span=({self.start}, {self.end}), children={len(self.children)})"

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def append(self, child: DocumentNode) -> DocumentNode:
        """Append a child node and return it."""
        self.children.append(child)
        return child


class DocumentTree(Protocol):
    """Read-only view of a document tree used by the folding core."""

    def root(self) -> DocumentNode:
        ...

    def children(self, node: DocumentNode) -> Sequence[DocumentNode]:
        ...

    def attribute_value(self, node: DocumentNode, name: str) -> Optional[str]:
        ...

    def span(self, node: DocumentNode) -> Tuple[int, int]:
        ...


class MarkupDocument:
    """
    A parsed markup document.

    Holds the raw source bytes alongside the element tree so that node spans
    can be mapped back onto the text for display.
    """

    def __init__(
        self,
        root: DocumentNode,
        source: bytes = b"",
        source_path: Optional[Path] = None,
        encoding: str = "utf-8",
    ):
        self.document_id = str(uuid4())
        self._root = root
        self.source = source
        self.source_path = source_path
        self.encoding = encoding
        self.loaded_at = datetime.now()

    @classmethod
    def from_file(cls, path: Path) -> MarkupDocument:
        """Parse a markup file from disk."""
        from ..converters.markup_parser import MarkupParser

        return MarkupParser().parse_file(path)

    @classmethod
    def from_string(cls, text: str) -> MarkupDocument:
        """Parse markup held in a string."""
        from ..converters.markup_parser import MarkupParser

        return MarkupParser().parse_string(text)

    # Tree provider interface

    def root(self) -> DocumentNode:
        return self._root

    def children(self, node: DocumentNode) -> Sequence[DocumentNode]:
        return node.children

    def attribute_value(self, node: DocumentNode, name: str) -> Optional[str]:
        return node.attributes.get(name)

    def span(self, node: DocumentNode) -> Tuple[int, int]:
        return node.span

    # Helpers

    def iter_nodes(self) -> Iterator[DocumentNode]:
        """Yield every node in document (pre-)order."""
        stack = [self._root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, tag: str) -> List[DocumentNode]:
        """Return all nodes with the given tag, in document order."""
        return [node for node in self.iter_nodes() if node.tag == tag]

    def text(self) -> str:
        """Decoded source text."""
        return self.source.decode(self.encoding, errors="replace")

    def get_stats(self) -> Dict[str, Any]:
        """Get document statistics."""
        node_count = 0
        max_depth = 0
        stack = [(self._root, 1)]
        while stack:
            node, depth = stack.pop()
            node_count += 1
            max_depth = max(max_depth, depth)
            stack.extend((child, depth + 1) for child in node.children)

        return {
            "document_id": self.document_id,
            "source_path": str(self.source_path) if self.source_path else None,
            "root_tag": self._root.tag,
            "node_count": node_count,
            "max_depth": max_depth,
            "size_bytes": len(self.source),
            "loaded_at": self.loaded_at.isoformat(),
        }
