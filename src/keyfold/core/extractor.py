"""
Keyword extraction from document nodes.
"""

from __future__ import annotations

from .document_model import DocumentNode, DocumentTree
from .keywords import EMPTY, KeywordSet, parse_keywords, union

DEFAULT_KEYWORD_ATTRIBUTE = "keys"


class KeyExtractor:
    """
    Reads keywords declared on nodes of a document tree.

    A node declares its keywords in a single attribute whose value is a
    whitespace-separated list. The extractor knows nothing about the schema,
    so it visits every node whether or not it could carry the attribute.
    """

    def __init__(self, tree: DocumentTree, attribute: str = DEFAULT_KEYWORD_ATTRIBUTE):
        self.tree = tree
        self.attribute = attribute

    def direct_keys(self, node: DocumentNode) -> KeywordSet:
        """Keywords declared on ``node`` itself."""
        return parse_keywords(self.tree.attribute_value(node, self.attribute))

    def subtree_keys(self, node: DocumentNode) -> KeywordSet:
        """Keywords declared anywhere in the subtree rooted at ``node``."""
        keys = EMPTY
        # explicit stack: documents may nest deeper than the recursion limit
        stack = [node]
        while stack:
            current = stack.pop()
            keys = union(keys, self.direct_keys(current))
            stack.extend(self.tree.children(current))
        return keys
