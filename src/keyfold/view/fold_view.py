"""
In-memory fold view over a markup document.

The view records which byte ranges of the source are folded and can render
the document text with those ranges collapsed, the way an editor shows a
hidden block as its first line followed by a marker.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from ..converters.markup_parser import tag_end
from ..core.document_model import MarkupDocument

DEFAULT_FOLD_MARKER = "..."

Span = Tuple[int, int]


class FoldView:
    """Fold state of one displayed document."""

    def __init__(self, document: MarkupDocument, marker: str = DEFAULT_FOLD_MARKER):
        self.document = document
        self.marker = marker
        self._folds: List[Span] = []
        self.logger = logging.getLogger(__name__)

    def fold_range(self, start: int, end: int) -> None:
        """Hide the byte range ``[start, end)``."""
        size = len(self.document.source)
        if start < 0 or end < start or end > size:
            raise ValueError(f"Invalid fold range ({start}, {end}) for a {size}-byte document")
        self._folds.append((start, end))

    def unfold_all(self) -> None:
        """Remove every fold, whoever made it."""
        if self._folds:
            self.logger.debug(f"Unfolding {len(self._folds)} range(s)")
        self._folds.clear()

    @property
    def folded_ranges(self) -> List[Span]:
        """Folded ranges in the order they were folded."""
        return list(self._folds)

    def outermost_ranges(self) -> List[Span]:
        """
        Outermost folded ranges in document order.

        Ranges nested inside another folded range are dropped, since the
        enclosing fold already hides them.
        """
        outer: List[Span] = []
        for start, end in sorted(set(self._folds), key=lambda span: (span[0], -span[1])):
            if outer and start < outer[-1][1]:
                if end > outer[-1][1]:
                    outer[-1] = (outer[-1][0], end)
                continue
            outer.append((start, end))
        return outer

    def is_folded(self, start: int, end: int) -> bool:
        """Whether ``[start, end)`` lies entirely inside a folded range."""
        return any(s <= start and end <= e for s, e in self._folds)

    def render(self) -> str:
        """Document text with every outermost fold collapsed."""
        data = self.document.source
        marker = self.marker.encode(self.document.encoding)
        parts: List[bytes] = []
        pos = 0

        for start, end in self.outermost_ranges():
            parts.append(data[pos:start])
            opening = data[start:min(tag_end(data, start), end)]
            parts.append(opening.split(b"\n", 1)[0].rstrip(b"\r"))
            parts.append(marker)
            pos = end

        parts.append(data[pos:])
        return b"".join(parts).decode(self.document.encoding, errors="replace")
