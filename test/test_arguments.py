"""
Arguments module behavioral tests (Flag, Param, FlagType).

Scope
- Validate construction defaults and normalization of every field.
- Validate the accepted spellings of type (enum, name, builtin).
- Validate default/type/array agreement and the boolean-param ban.
- Validate immutability and copy.replace() re-validation.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API (Flag, Param, FlagType) plus copy.replace.
"""

from __future__ import annotations

import copy
import unittest
from unittest import TestCase

from rich.text import Text

from flargs import Flag, Param, FlagType


class TestFlag(TestCase):
    """Behavioral tests for Flag specifications."""

    def testFlagDefaults(self):
        f = Flag("name")
        self.assertEqual(f.name, "name")
        self.assertIsNone(f.shorthand)
        self.assertIsNone(f.descr)
        self.assertIs(f.type, FlagType.STRING)
        self.assertFalse(f.array)
        self.assertFalse(f.required)
        self.assertIsNone(f.default)

    def testFlagTemplateWithoutName(self):
        f = Flag(type=int)
        self.assertIsNone(f.name)
        self.assertIs(f.type, FlagType.NUMBER)

    def testFlagTypeSpellings(self):
        self.assertIs(Flag("a", type=int).type, FlagType.NUMBER)
        self.assertIs(Flag("a", type=float).type, FlagType.NUMBER)
        self.assertIs(Flag("a", type=str).type, FlagType.STRING)
        self.assertIs(Flag("a", type=bool).type, FlagType.BOOLEAN)
        self.assertIs(Flag("a", type="boolean").type, FlagType.BOOLEAN)
        self.assertIs(Flag("a", type=" Number ").type, FlagType.NUMBER)
        self.assertIs(Flag("a", type=FlagType.STRING).type, FlagType.STRING)

    def testFlagUnknownTypeNameRejected(self):
        with self.assertRaises(ValueError):
            Flag("a", type="integer")

    def testFlagUnknownTypeObjectRejected(self):
        with self.assertRaises(TypeError):
            Flag("a", type=list)
        with self.assertRaises(TypeError):
            Flag("a", type=[])

    def testFlagNameTrimmed(self):
        self.assertEqual(Flag("  dry-run ").name, "dry-run")

    def testFlagNameEmptyRejected(self):
        with self.assertRaises(ValueError):
            Flag("   ")

    def testFlagNameMalformedRejected(self):
        for name in ("--jobs", "dry run", "a--b", "trailing-"):
            with self.subTest(name=name), self.assertRaises(ValueError):
                Flag(name)

    def testFlagNameMustBeString(self):
        with self.assertRaises(TypeError):
            Flag(5)

    def testFlagShorthandValidated(self):
        self.assertEqual(Flag("opt", "0").shorthand, "0")
        with self.assertRaises(ValueError):
            Flag("opt", "")
        with self.assertRaises(ValueError):
            Flag("opt", "-o")

    def testFlagDescrAcceptsText(self):
        descr = Text("styled")
        self.assertIs(Flag("a", descr=descr).descr, descr)

    def testFlagDescrEmptyRejected(self):
        with self.assertRaises(ValueError):
            Flag("a", descr="  ")

    def testFlagDefaultMustMatchType(self):
        with self.assertRaises(TypeError):
            Flag("jobs", type=int, default="4")
        with self.assertRaises(TypeError):
            Flag("jobs", type=int, default=True)
        with self.assertRaises(TypeError):
            Flag("jobs", type=int, default=float("inf"))
        with self.assertRaises(TypeError):
            Flag("verbose", type=bool, default=1)

    def testFlagScalarDefaultKept(self):
        self.assertEqual(Flag("jobs", type=int, default=4).default, 4)
        self.assertEqual(Flag("ratio", type=float, default=0.5).default, 0.5)
        self.assertIs(Flag("verbose", type=bool, default=False).default, False)

    def testFlagArrayDefaultFrozen(self):
        f = Flag("tags", array=True, default=["a", "b"])
        self.assertEqual(f.default, ("a", "b"))

    def testFlagArrayDefaultMustBeIterableOfType(self):
        with self.assertRaises(TypeError):
            Flag("tags", array=True, default="a")
        with self.assertRaises(TypeError):
            Flag("sizes", type=int, array=True, default=[1, "2"])
        with self.assertRaises(TypeError):
            Flag("sizes", type=int, array=True, default=3)

    def testFlagRequiredAndArrayCoercedToBool(self):
        f = Flag("a", array=1, required="yes")
        self.assertIs(f.array, True)
        self.assertIs(f.required, True)

    def testFlagSpellings(self):
        self.assertEqual(Flag("jobs", "j").spellings, ("--jobs", "-j"))
        self.assertEqual(Flag("jobs").spellings, ("--jobs",))
        self.assertEqual(Flag().spellings, ())

    def testFlagIsImmutable(self):
        f = Flag("jobs")
        with self.assertRaises(AttributeError):
            f.name = "other"
        with self.assertRaises(AttributeError):
            f.anything = 1

    def testFlagReplaceReturnsValidatedCopy(self):
        f = Flag("jobs", "j", type=int, default=1)
        g = copy.replace(f, default=4)
        self.assertIsNot(f, g)
        self.assertEqual(g.default, 4)
        self.assertEqual(g.shorthand, "j")
        self.assertEqual(f.default, 1)

    def testFlagReplaceName(self):
        g = copy.replace(Flag(type=int), name="jobs")
        self.assertEqual(g.name, "jobs")

    def testFlagReplaceRevalidates(self):
        f = Flag("jobs", type=int, default=1)
        with self.assertRaises(TypeError):
            copy.replace(f, type=str)

    def testFlagRepr(self):
        text = repr(Flag("verbose", "v", type=bool))
        self.assertTrue(text.startswith("flag("))
        self.assertIn("name='verbose'", text)
        self.assertIn("shorthand='v'", text)


class TestParam(TestCase):
    """Behavioral tests for Param specifications."""

    def testParamDefaults(self):
        p = Param("path")
        self.assertEqual(p.name, "path")
        self.assertIs(p.type, FlagType.STRING)
        self.assertFalse(p.array)
        self.assertFalse(p.required)
        self.assertIsNone(p.default)

    def testParamHasNoShorthand(self):
        self.assertFalse(hasattr(Param("path"), "shorthand"))

    def testParamBooleanRejected(self):
        with self.assertRaises(ValueError):
            Param("flag", type=bool)
        with self.assertRaises(ValueError):
            Param("flag", type="boolean")

    def testParamNumberDefault(self):
        self.assertEqual(Param("port", type=int, default=8080).default, 8080)

    def testParamArrayDefault(self):
        self.assertEqual(Param("files", array=True, default=("x",)).default, ("x",))

    def testParamReplace(self):
        p = Param("port", type=int)
        q = copy.replace(p, required=True)
        self.assertTrue(q.required)
        self.assertFalse(p.required)

    def testParamReplaceToBooleanRejected(self):
        with self.assertRaises(ValueError):
            copy.replace(Param("port", type=int), type=bool)

    def testParamRichRepr(self):
        fields = dict(Param("port", type=int).__rich_repr__())
        self.assertEqual(fields["name"], "port")
        self.assertIs(fields["type"], FlagType.NUMBER)


if __name__ == "__main__":
    unittest.main()
