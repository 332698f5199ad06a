"""
Serializable summary of a refold.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from ..core.document_model import DocumentNode
from ..core.visibility import VisibilityState
from .fold_view import FoldView


class FoldedRange(BaseModel):
    """A folded element of the document."""

    start: int
    end: int
    tag: Optional[str] = None
    line: Optional[int] = None


class FoldReport(BaseModel):
    """Keyword state and folds of a document after a refold."""

    source_path: Optional[str] = None
    all_keywords: List[str] = Field(default_factory=list)
    visible_keywords: List[str] = Field(default_factory=list)
    folded: List[FoldedRange] = Field(default_factory=list)
    hidden: List[FoldedRange] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: FoldView, state: VisibilityState) -> FoldReport:
        """Build a report from a view and the visibility state that produced it."""
        document = view.document
        by_span: Dict[Tuple[int, int], DocumentNode] = {
            node.span: node for node in document.iter_nodes()
        }

        def describe(span: Tuple[int, int]) -> FoldedRange:
            node = by_span.get(span)
            return FoldedRange(
                start=span[0],
                end=span[1],
                tag=node.tag if node else None,
                line=node.line if node else None,
            )

        return cls(
            source_path=str(document.source_path) if document.source_path else None,
            all_keywords=sorted(state.all_keywords),
            visible_keywords=sorted(state.visible_keywords),
            folded=[describe(span) for span in view.folded_ranges],
            hidden=[describe(span) for span in view.outermost_ranges()],
        )

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(indent=indent)
