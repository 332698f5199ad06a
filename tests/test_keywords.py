import unittest

from keyfold.core.keywords import (
    difference,
    format_keywords,
    intersection,
    keyword_set,
    parse_keywords,
    union,
)


class TestKeywordSetAlgebra(unittest.TestCase):
    def test_operations_return_new_sets_without_mutating_inputs(self) -> None:
        a = {"intro", "linux"}
        b = ["linux", "windows"]

        self.assertEqual(union(a, b), {"intro", "linux", "windows"})
        self.assertEqual(intersection(a, b), {"linux"})
        self.assertEqual(difference(a, b), {"intro"})
        self.assertEqual(a, {"intro", "linux"})
        self.assertEqual(b, ["linux", "windows"])
        self.assertIsInstance(union(a, b), frozenset)

    def test_empty_inputs_yield_empty_results(self) -> None:
        self.assertEqual(union([], []), frozenset())
        self.assertEqual(intersection({"a"}, []), frozenset())
        self.assertEqual(difference([], {"a"}), frozenset())
        self.assertEqual(keyword_set(None), frozenset())

    def test_matching_is_exact_and_case_sensitive(self) -> None:
        self.assertEqual(intersection({"Linux"}, {"linux"}), frozenset())
        self.assertEqual(intersection({"linux."}, {"linux"}), frozenset())

    def test_difference_never_contains_subtracted_keywords(self) -> None:
        samples = [
            (set(), set()),
            ({"a", "b"}, {"b"}),
            ({"a"}, {"a", "b", "c"}),
            ({"x", "y", "z"}, set()),
        ]
        for universe, visible in samples:
            with self.subTest(universe=universe, visible=visible):
                self.assertFalse(difference(universe, visible) & visible)


class TestKeywordParsing(unittest.TestCase):
    def test_splits_on_any_whitespace(self) -> None:
        self.assertEqual(parse_keywords(" linux \t debian\nadmin "), {"linux", "debian", "admin"})

    def test_absent_or_blank_attribute_is_empty(self) -> None:
        self.assertEqual(parse_keywords(None), frozenset())
        self.assertEqual(parse_keywords(""), frozenset())
        self.assertEqual(parse_keywords("   "), frozenset())

    def test_punctuation_is_kept_verbatim(self) -> None:
        self.assertEqual(parse_keywords("linux, windows;"), {"linux,", "windows;"})

    def test_duplicates_collapse(self) -> None:
        self.assertEqual(parse_keywords("a a b"), {"a", "b"})

    def test_format_is_sorted(self) -> None:
        self.assertEqual(format_keywords({"b", "a", "c"}), "a b c")
        self.assertEqual(format_keywords([]), "")


if __name__ == "__main__":
    unittest.main(verbosity=2)
