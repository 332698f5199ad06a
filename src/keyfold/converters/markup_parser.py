"""
Parser from XML markup to the keyfold document model.

Uses the expat binding so that every element can be mapped back to its exact
byte span in the source: from the ``<`` of its start tag to just past the
``>`` of its end tag (or of its self-closing tag).

Elements produced by expanding an internal entity reference have no tags of
their own in the source. They are given the span of the reference, from its
``&`` to just past its ``;``, so folding one hides the reference.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Union
from xml.parsers import expat

from ..core.document_model import DocumentNode, MarkupDocument


class MarkupParseError(ValueError):
    """Raised when a document is not well-formed markup."""

    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        super().__init__(message)
        self.line = line
        self.column = column


def tag_end(data: bytes, pos: int) -> int:
    """Offset just past the ``>`` closing the tag at ``pos``, skipping quoted values."""
    quote = None
    size = len(data)
    while pos < size:
        ch = data[pos:pos + 1]
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in (b'"', b"'"):
            quote = ch
        elif ch == b">":
            return pos + 1
        pos += 1
    return size


def reference_end(data: bytes, pos: int) -> int:
    """Offset just past the ``;`` ending the entity reference at ``pos``."""
    end = data.find(b";", pos)
    return len(data) if end < 0 else end + 1


class MarkupParser:
    """
    Builds a MarkupDocument from XML bytes.

    The parser keeps every attribute as a plain string; it has no notion of
    which elements may carry keywords.
    """

    def __init__(self, encoding: Optional[str] = None):
        self.encoding = encoding
        self.logger = logging.getLogger(__name__)

    def parse_file(self, path: Union[str, Path]) -> MarkupDocument:
        """Parse a markup file. ``OSError`` from reading it propagates."""
        path = Path(path)
        data = path.read_bytes()
        document = self.parse_bytes(data, source_path=path)
        self.logger.info(f"Parsed {path} ({document.get_stats()['node_count']} nodes)")
        return document

    def parse_string(self, text: str) -> MarkupDocument:
        """Parse markup held in a string, treating it as UTF-8."""
        return MarkupParser(encoding="utf-8").parse_bytes(text.encode("utf-8"))

    def parse_bytes(self, data: bytes, source_path: Optional[Path] = None) -> MarkupDocument:
        """Parse raw markup bytes."""
        parser = expat.ParserCreate(self.encoding)
        stack: List[DocumentNode] = []
        roots: List[DocumentNode] = []

        def start_element(name: str, attrs: Dict[str, str]) -> None:
            node = DocumentNode(
                tag=name,
                attributes=dict(attrs),
                start=parser.CurrentByteIndex,
                line=parser.CurrentLineNumber,
            )
            if data[node.start:node.start + 1] == b"&":
                node.end = reference_end(data, node.start)
            if stack:
                stack[-1].append(node)
            else:
                roots.append(node)
            stack.append(node)

        def end_element(name: str) -> None:
            node = stack.pop()
            if data[node.start:node.start + 1] == b"&":
                return
            head_end = tag_end(data, node.start)
            if data[node.start:head_end].endswith(b"/>"):
                node.end = head_end
            else:
                node.end = tag_end(data, parser.CurrentByteIndex)

        parser.StartElementHandler = start_element
        parser.EndElementHandler = end_element

        try:
            parser.Parse(data, True)
        except expat.ExpatError as e:
            where = f"{source_path}:" if source_path else "line "
            raise MarkupParseError(
                f"{where}{e.lineno}:{e.offset}: {expat.errors.messages[e.code]}",
                line=e.lineno,
                column=e.offset,
            ) from e

        if not roots:
            raise MarkupParseError("Document has no root element")

        self.logger.debug(f"Root element <{roots[0].tag}> spans {roots[0].span}")
        return MarkupDocument(
            roots[0],
            source=data,
            source_path=source_path,
            encoding=self.encoding or "utf-8",
        )
