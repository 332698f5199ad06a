"""
Core document handling and keyword folding modules.
"""

from .document_model import DocumentNode, DocumentTree, MarkupDocument
from .extractor import DEFAULT_KEYWORD_ATTRIBUTE, KeyExtractor
from .fold_planner import FoldPlanner, FoldPrimitive
from .keywords import KeywordSet, difference, intersection, union
from .orchestrator import KeywordSelector, RefoldOrchestrator
from .visibility import VisibilityIndex, VisibilityState

__all__ = [
    "DocumentNode",
    "DocumentTree",
    "MarkupDocument",
    "DEFAULT_KEYWORD_ATTRIBUTE",
    "KeyExtractor",
    "FoldPlanner",
    "FoldPrimitive",
    "KeywordSet",
    "union",
    "intersection",
    "difference",
    "KeywordSelector",
    "RefoldOrchestrator",
    "VisibilityIndex",
    "VisibilityState",
]
