import sys
import unittest

from keyfold.core.document_model import MarkupDocument
from keyfold.core.extractor import KeyExtractor


class TestKeyExtractor(unittest.TestCase):
    def test_subtree_keys_unions_every_level(self) -> None:
        document = MarkupDocument.from_string(
            '<root keys="a"><child1 keys="b"/><child2><grandchild keys="c"/></child2></root>'
        )
        extractor = KeyExtractor(document)
        root = document.root()

        self.assertEqual(extractor.subtree_keys(root), {"a", "b", "c"})
        self.assertEqual(extractor.subtree_keys(root.children[1]), {"c"})
        self.assertEqual(extractor.direct_keys(root), {"a"})
        self.assertEqual(extractor.direct_keys(root.children[1]), frozenset())

    def test_malformed_keyword_values_degrade_to_tokens(self) -> None:
        document = MarkupDocument.from_string('<r keys="  linux,windows ;  "/>')
        self.assertEqual(KeyExtractor(document).direct_keys(document.root()), {"linux,windows", ";"})

    def test_attribute_name_is_configurable(self) -> None:
        document = MarkupDocument.from_string('<r keys="a" tags="x y"><c tags="z"/></r>')
        extractor = KeyExtractor(document, attribute="tags")
        self.assertEqual(extractor.subtree_keys(document.root()), {"x", "y", "z"})

    def test_visits_nodes_that_cannot_carry_keywords(self) -> None:
        document = MarkupDocument.from_string(
            '<r><title>t</title><deep><deeper><deepest keys="hidden"/></deeper></deep></r>'
        )
        self.assertEqual(KeyExtractor(document).subtree_keys(document.root()), {"hidden"})

    def test_deep_nesting_does_not_hit_the_recursion_limit(self) -> None:
        depth = 3 * sys.getrecursionlimit()
        document = MarkupDocument.from_string("<a>" * depth + '<b keys="k"/>' + "</a>" * depth)
        extractor = KeyExtractor(document)

        self.assertEqual(extractor.subtree_keys(document.root()), {"k"})
        self.assertEqual(extractor.subtree_keys(document.find("b")[0]), {"k"})


if __name__ == "__main__":
    unittest.main(verbosity=2)
