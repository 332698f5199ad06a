"""
keyfold: fold the parts of a markup document that do not match chosen keywords.
"""

from .core import (
    DocumentNode,
    KeyExtractor,
    FoldPlanner,
    MarkupDocument,
    RefoldOrchestrator,
    VisibilityIndex,
    VisibilityState,
)
from .converters import MarkupParseError, MarkupParser
from .view import FoldReport, FoldView

__version__ = "0.1.0"

__all__ = [
    "DocumentNode",
    "KeyExtractor",
    "FoldPlanner",
    "MarkupDocument",
    "RefoldOrchestrator",
    "VisibilityIndex",
    "VisibilityState",
    "MarkupParser",
    "MarkupParseError",
    "FoldView",
    "FoldReport",
]
