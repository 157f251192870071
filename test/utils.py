"""
Utils module tests (sentinel, coalesce, rename, mirror, ordinal).

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from switchboard.utils import *


class TestUnset(TestCase):
    """Semantic guarantees of the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")
        self.assertIsNot(Unset, None)

    def testUnionWithTypes(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", str | Unset)

    def testFinal(self):
        with self.assertRaises(TypeError):
            class Derived(UnsetType):  # NOQA: F-841
                pass


class TestHelpers(TestCase):
    """Behavioral tests for coalesce, rename, mirror and ordinal."""

    def testCoalescePreservesFalseyValues(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertIsNone(coalesce(Unset))

    def testRenameFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testRenameDecoratorForm(self):
        @rename("h")
        def f():
            pass

        self.assertEqual(f.__name__, "h")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testMirrorIsReadOnly(self):
        class Holder:
            value = mirror("value")

            def __init__(self):
                self._value = 42

        holder = Holder()
        self.assertEqual(holder.value, 42)
        with self.assertRaises(AttributeError):
            holder.value = 43

    def testOrdinal(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(10), "tenth")
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(103), "103rd")
        self.assertEqual(ordinal(113), "113th")


if __name__ == "__main__":
    unittest.main()
