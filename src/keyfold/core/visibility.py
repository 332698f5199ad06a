"""
Per-document keyword index and visible-keyword selection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .document_model import DocumentTree
from .extractor import KeyExtractor
from .keywords import EMPTY, KeywordSet, difference, format_keywords


@dataclass
class VisibilityState:
    """
    Visibility state of one open document.

    ``all_keywords`` is the keyword universe as of the last refresh and goes
    stale as soon as the document is edited. ``visible_keywords`` is the last
    chosen selection; it may name keywords that are no longer in the document.
    """

    all_keywords: KeywordSet = field(default=EMPTY)
    visible_keywords: KeywordSet = field(default=EMPTY)

    @property
    def invisible_keywords(self) -> KeywordSet:
        return difference(self.all_keywords, self.visible_keywords)


class VisibilityIndex:
    """Caches the keyword universe of a document inside a VisibilityState."""

    def __init__(self, extractor: KeyExtractor, state: VisibilityState):
        self.extractor = extractor
        self.state = state
        self.logger = logging.getLogger(__name__)

    @property
    def all_keywords(self) -> KeywordSet:
        return self.state.all_keywords

    @all_keywords.setter
    def all_keywords(self, keywords: KeywordSet) -> None:
        self.state.all_keywords = frozenset(keywords)

    @property
    def visible_keywords(self) -> KeywordSet:
        return self.state.visible_keywords

    @visible_keywords.setter
    def visible_keywords(self, keywords: KeywordSet) -> None:
        self.state.visible_keywords = frozenset(keywords)

    def ensure_initialized(self, tree: DocumentTree) -> None:
        """Build the keyword universe unless one is already cached."""
        if not self.state.all_keywords:
            self.refresh(tree)

    def refresh(self, tree: DocumentTree) -> None:
        """Rebuild the keyword universe from ``tree``."""
        extractor = self.extractor
        if tree is not extractor.tree:
            extractor = KeyExtractor(tree, extractor.attribute)
        self.state.all_keywords = extractor.subtree_keys(tree.root())
        self.logger.debug(f"Keyword universe refreshed: {format_keywords(self.state.all_keywords)}")
