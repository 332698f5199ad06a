"""
Post-order keyword matching and folding.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Protocol, Tuple

from .document_model import DocumentNode, DocumentTree
from .extractor import KeyExtractor
from .keywords import intersection, keyword_set


class FoldPrimitive(Protocol):
    """The fold/unfold operations of a document view."""

    def fold_range(self, start: int, end: int) -> None:
        ...

    def unfold_all(self) -> None:
        ...


class FoldPlanner:
    """
    Folds every subtree that does not match a keyword selection.

    A node matches when one of its own keywords is selected or when any of
    its descendants matches. Folding happens in the same post-order pass that
    decides matching.
    """

    def __init__(self, tree: DocumentTree, extractor: KeyExtractor, view: FoldPrimitive):
        self.tree = tree
        self.extractor = extractor
        self.view = view
        self.logger = logging.getLogger(__name__)
        self.fold_count = 0

    def fold_subtrees_not_matching(self, root: DocumentNode, selected: Iterable[str]) -> bool:
        """
        Fold the non-matching subtrees below and including ``root``.

        Returns True when ``root`` or any of its descendants carries a
        selected keyword.
        """
        self.fold_count = 0
        matched = self._fold(root, keyword_set(selected))
        self.logger.debug(f"Folded {self.fold_count} subtree(s) below <{root.tag}>")
        return matched

    def _fold(self, root: DocumentNode, selected: frozenset) -> bool:
        # Post-order walk on an explicit stack, since documents may nest deeper
        # than the recursion limit. Entries are (node, children_done).
        matched: Dict[int, bool] = {}
        stack: List[Tuple[DocumentNode, bool]] = [(root, False)]

        while stack:
            node, children_done = stack.pop()

            if not children_done:
                if intersection(self.extractor.direct_keys(node), selected):
                    # a node that matches by itself is not descended
                    matched[id(node)] = True
                    continue
                stack.append((node, True))
                # every child is visited: each one folds itself independently
                stack.extend((child, False) for child in reversed(self.tree.children(node)))
                continue

            children = self.tree.children(node)
            node_matched = any([matched.pop(id(child)) for child in children])
            if not node_matched:
                start, end = self.tree.span(node)
                self.view.fold_range(start, end)
                self.fold_count += 1
            matched[id(node)] = node_matched

        return matched[id(root)]
