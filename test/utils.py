"""
Tests for the internal utilities.

This module verifies:
- The Unset sentinel (singleton identity, falsiness, finality, union support).
- coalesce() preserving falsey values other than Unset.
- rename() in both function and decorator forms.
- mirror() exposing immutable views of backing fields.
- Grapheme segmentation helpers (ASCII fast path agreeing with the segmenter).
"""
import copy
import unittest
from unittest import TestCase

from uniopts.utils import *


class UnsetTest(TestCase):

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self) -> None:
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass

    def testUnion(self) -> None:
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)
        self.assertNotIsInstance(1, str | Unset)


class CoalesceTest(TestCase):

    def testReplacesUnsetOnly(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce("", "fallback"), "")


class RenameTest(TestCase):

    def testFunctionForm(self) -> None:
        def f():
            pass

        rename(f, "work")
        self.assertEqual((f.__name__, f.__qualname__), ("work", "work"))

    def testDecoratorForm(self) -> None:
        @rename("work")
        def f():
            pass

        self.assertEqual(f.__name__, "work")

    def testArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "x")


class MirrorTest(TestCase):

    def testImmutableViews(self) -> None:
        class Holder:
            items = mirror("items")
            table = mirror("table")
            tags = mirror("tags")
            label = mirror("label")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}
                self._tags = {"x"}
                self._label = "name"

        holder = Holder()
        self.assertEqual(holder.items, (1, 2))
        self.assertEqual(holder.tags, frozenset({"x"}))
        self.assertEqual(holder.label, "name")
        with self.assertRaises(TypeError):
            holder.table["b"] = 2
        with self.assertRaises(AttributeError):
            holder.items = []


class GraphemeTest(TestCase):

    def testSplit(self) -> None:
        self.assertEqual(graphemes(""), [])
        self.assertEqual(graphemes("ab"), ["a", "b"])
        self.assertEqual(graphemes("e\u0301x"), ["e\u0301", "x"])
        self.assertEqual(graphemes("😮!"), ["😮", "!"])

    def testFirstCluster(self) -> None:
        self.assertEqual(grapheme(""), "")
        self.assertEqual(grapheme("help"), "h")
        self.assertEqual(grapheme("e\u0301lan"), "e\u0301")
        self.assertEqual(grapheme("\r\nx"), "\r\n")
        self.assertEqual(grapheme("🇯🇵x"), "🇯🇵")

    def testFastPathAgreesWithSegmenter(self) -> None:
        for text in ("a", "ab", "a-", "a=b", "Z9", "a\u0301", "éa", "😮a", "\r\n"):
            self.assertEqual(grapheme(text), graphemes(text)[0], text)

    def testIsGrapheme(self) -> None:
        self.assertTrue(is_grapheme("h"))
        self.assertTrue(is_grapheme("😮"))
        self.assertTrue(is_grapheme("\u00e9"))
        self.assertTrue(is_grapheme("e\u0301"))
        self.assertFalse(is_grapheme(""))
        self.assertFalse(is_grapheme("ab"))
        self.assertFalse(is_grapheme(1))

    def testTypeChecks(self) -> None:
        with self.assertRaises(TypeError):
            graphemes(1)
        with self.assertRaises(TypeError):
            grapheme(None)


if __name__ == "__main__":
    unittest.main()
