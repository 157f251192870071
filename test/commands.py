"""
Commands module behavioral tests (descriptor construction and immutability).

Scope
- Validate the three factories (Flag, Path, Property): kind tagging and field normalization.
- Validate immutability, sealing and identity semantics.
- Validate type checks and call forwarding.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

import switchboard
from switchboard import Command, Flag, Path, Property, Kind, Parser


def noop(output, value):
    pass


class TestFlag(TestCase):
    """Behavioral tests for Flag descriptors."""

    def testFlagFields(self):
        f = Flag("v", noop, "verbose")
        self.assertIs(f.kind, Kind.FLAG)
        self.assertEqual(f.name, "v")
        self.assertEqual(f.descr, "verbose")
        self.assertEqual(f.default, "")
        self.assertIs(f.callback, noop)

    def testFlagDescrDefaultsToEmpty(self):
        self.assertEqual(Flag("v", noop).descr, "")

    def testFlagNameIsNotValidated(self):
        f = Flag("some name/with?chars", noop)
        self.assertEqual(f.name, "some name/with?chars")

    def testFlagNameMustBeString(self):
        with self.assertRaises(TypeError):
            Flag(1, noop)

    def testFlagCallbackMustBeCallable(self):
        with self.assertRaises(TypeError):
            Flag("v", "noop")

    def testFlagCannotBeSubclassed(self):
        with self.assertRaises(TypeError):
            class Custom(Flag):  # NOQA: F-841
                pass

    def testFlagIgnoresDefault(self):
        calls = []
        f = Flag("v", lambda output, value: calls.append(value), "verbose", "x")
        self.assertEqual(f.default, "")

        sink = io.StringIO()
        parser = Parser([f], sink)
        parser.check([])
        self.assertEqual(calls, [])
        parser.help()
        self.assertIn("\tv\tverbose\n", sink.getvalue())
        self.assertNotIn("(=x)", sink.getvalue())

    def testFlagIgnoredDefaultIsStillTypeChecked(self):
        with self.assertRaises(TypeError):
            Flag("v", noop, "verbose", 1)


class TestPath(TestCase):
    """Behavioral tests for Path descriptors."""

    def testPathIsTaggedAsPath(self):
        p = Path(noop, "file")
        self.assertIs(p.kind, Kind.PATH)
        self.assertIsNot(p.kind, Kind.PROPERTY)

    def testPathHasNoNameNorDefault(self):
        p = Path(noop, "file")
        self.assertEqual(p.name, "")
        self.assertEqual(p.default, "")
        self.assertEqual(p.descr, "file")

    def testPathIgnoresNameAndDefault(self):
        p = Path(noop, "file", "input", "data.csv")
        self.assertIs(p.kind, Kind.PATH)
        self.assertEqual(p.name, "")
        self.assertEqual(p.default, "")
        self.assertEqual(p.descr, "file")

    def testPathIgnoresNameAndDefaultKeywords(self):
        p = Path(noop, name="input", default="data.csv")
        self.assertEqual((p.name, p.default), ("", ""))

    def testPathDescrMustBeString(self):
        with self.assertRaises(TypeError):
            Path(noop, 3)


class TestProperty(TestCase):
    """Behavioral tests for Property descriptors."""

    def testPropertyFields(self):
        p = Property("o", noop, "output", "out.txt")
        self.assertIs(p.kind, Kind.PROPERTY)
        self.assertEqual(p.name, "o")
        self.assertEqual(p.descr, "output")
        self.assertEqual(p.default, "out.txt")

    def testPropertyDefaultsToEmpty(self):
        p = Property("o", noop)
        self.assertEqual(p.descr, "")
        self.assertEqual(p.default, "")

    def testPropertyKeywordArguments(self):
        p = Property("o", noop, default="out.txt", descr="output")
        self.assertEqual((p.descr, p.default), ("output", "out.txt"))

    def testPropertyDefaultMustBeString(self):
        with self.assertRaises(TypeError):
            Property("o", noop, default=1)


class TestCommand(TestCase):
    """Behavioral tests shared by every descriptor."""

    def testCommandCannotBeBuiltDirectly(self):
        with self.assertRaises(TypeError):
            Command()

    def testFieldsAreReadOnly(self):
        f = Flag("v", noop)
        with self.assertRaises(AttributeError):
            f.name = "w"
        with self.assertRaises(AttributeError):
            f.kind = Kind.PROPERTY

    def testNewAttributesRejected(self):
        p = Path(noop)
        with self.assertRaises(AttributeError):
            p.extra = True
        with self.assertRaises(AttributeError):
            del p.descr

    def testIdentitySemantics(self):
        first, second = Flag("v", noop), Flag("v", noop)
        self.assertNotEqual(first, second)
        self.assertEqual(len({first, second, first}), 2)

    def testCallForwardsToCallback(self):
        received = []
        p = Property("o", lambda output, value: received.append((output, value)) or "done")
        self.assertEqual(p("sink", "value"), "done")
        self.assertEqual(received, [("sink", "value")])

    def testReprIsStable(self):
        self.assertTrue(repr(Flag("v", noop, "verbose")).startswith("flag(kind="))
        self.assertIn("default='out.txt'", repr(Property("o", noop, default="out.txt")))

    def testRichReprYieldsIntrospectableFields(self):
        names = [name for name, _ in Path(noop).__rich_repr__()]
        self.assertEqual(names, ["kind", "name", "default", "descr", "callback"])

    def testPackageAuthor(self):
        self.assertEqual(switchboard.__author__, "Switchboard Developers")


if __name__ == "__main__":
    unittest.main()
