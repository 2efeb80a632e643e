"""
Tests for the shared helpers.

This module verifies:
- The Unset sentinel (singleton identity, falsy semantics, finality, unions).
- coalesce() resolution and mirror() read-only views.
- ordinal() wording for fault messages.
"""
import unittest
from unittest import TestCase

from clasp.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass

    def testUnionIsinstance(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", str | Unset)
        self.assertNotIsInstance(3, str | Unset)


class HelpersTest(TestCase):
    """
    Test suite for coalesce(), mirror() and ordinal().
    """

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(Unset))
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 5), 0)

    def testMirrorFreezesContainers(self):
        class Holder:
            names = mirror("names")
            target = mirror("target")

            def __init__(self):
                self._names = ["a", "b"]
                self._target = object()

        holder = Holder()
        self.assertEqual(holder.names, ("a", "b"))
        self.assertIs(holder.target, holder._target)
        with self.assertRaises(AttributeError):
            holder.names = ()

    def testRename(self):
        @rename("renamed")
        def original():
            pass

        self.assertEqual(original.__name__, "renamed")
        self.assertEqual(original.__qualname__, "renamed")

    def testOrdinalWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(12), "twelfth")
        self.assertEqual(ordinal(20), "twentieth")

    def testOrdinalSuffixes(self):
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(101), "101st")
        self.assertEqual(ordinal(111), "111th")
        self.assertEqual(ordinal(113), "113th")

    def testOrdinalValidation(self):
        with self.assertRaises(ValueError):
            ordinal(0)
        with self.assertRaises(TypeError):
            ordinal(True)
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
