"""
User-facing refold operation.

Ties together the keyword index of one document, a keyword selector, the
fold planner and the document view.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

from .document_model import DocumentTree
from .extractor import DEFAULT_KEYWORD_ATTRIBUTE, KeyExtractor
from .fold_planner import FoldPlanner, FoldPrimitive
from .keywords import KeywordSet, format_keywords, keyword_set
from .visibility import VisibilityIndex, VisibilityState

DEFAULT_PROMPT = "Keywords to show"


class KeywordSelector(Protocol):
    """Asks the user for a new set of visible keywords."""

    def choose_subset(self, current: KeywordSet, candidates: KeywordSet, prompt: str) -> KeywordSet:
        ...


class RefoldOrchestrator:
    """
    Refolds a document around a chosen set of keywords.

    The orchestrator does not own the visibility state: it is handed the
    state of the document it works on, so the selection survives when the
    document is re-read and a new orchestrator is built around it.
    """

    def __init__(
        self,
        tree: DocumentTree,
        view: FoldPrimitive,
        selector: KeywordSelector,
        state: Optional[VisibilityState] = None,
        attribute: str = DEFAULT_KEYWORD_ATTRIBUTE,
        prompt: str = DEFAULT_PROMPT,
    ):
        self.tree = tree
        self.view = view
        self.selector = selector
        self.state = state if state is not None else VisibilityState()
        self.prompt = prompt

        self.extractor = KeyExtractor(tree, attribute)
        self.index = VisibilityIndex(self.extractor, self.state)
        self.planner = FoldPlanner(tree, self.extractor, view)
        self.logger = logging.getLogger(__name__)

    def refresh_keyword_universe(self) -> KeywordSet:
        """Re-read every keyword in the document."""
        self.index.refresh(self.tree)
        return self.index.all_keywords

    def ensure_initialized(self) -> None:
        """Build the keyword universe if it has never been built."""
        self.index.ensure_initialized(self.tree)

    def refold(self) -> KeywordSet:
        """
        Ask for a new keyword selection and refold the document around it.

        The previous selection is offered as the pre-selected set and the
        rest of the keyword universe as further candidates. The view is
        always fully unfolded before folding again.
        """
        self.ensure_initialized()
        chosen = self.selector.choose_subset(
            self.state.visible_keywords, self.state.invisible_keywords, self.prompt
        )
        return self._refold_with(chosen)

    def apply(self, keywords: Iterable[str]) -> KeywordSet:
        """Refold the document around a given selection without prompting."""
        self.ensure_initialized()
        return self._refold_with(keywords)

    def _refold_with(self, keywords: Iterable[str]) -> KeywordSet:
        chosen = keyword_set(keywords)
        self.view.unfold_all()
        self.planner.fold_subtrees_not_matching(self.tree.root(), chosen)
        self.index.visible_keywords = chosen
        self.logger.info(
            f"Refolded around [{format_keywords(chosen)}] ({self.planner.fold_count} fold(s))"
        )
        return chosen
