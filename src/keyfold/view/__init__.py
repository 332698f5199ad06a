"""
Fold display and reporting modules.
"""

from .fold_view import DEFAULT_FOLD_MARKER, FoldView
from .report import FoldedRange, FoldReport

__all__ = ["DEFAULT_FOLD_MARKER", "FoldView", "FoldedRange", "FoldReport"]
