# python
"""
Utils module behavioral tests (sentinel, helpers, module globbing).

Scope
- Validate the Unset singleton: identity, falsiness, copying, unions.
- Validate coalesce(), rename() and mirror().
- Validate mglob() expansion and its input errors.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import copy
import pickle
import unittest
from unittest import TestCase

from helmsman.utils import Unset, UnsetType, coalesce, mglob, mirror, rename


class TestUnset(TestCase):
    """Behavioral tests for the Unset sentinel."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFalsyAndRepr(self):
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnionInIsinstance(self):
        self.assertTrue(isinstance(Unset, str | Unset))
        self.assertTrue(isinstance("x", str | Unset))
        self.assertFalse(isinstance(1, str | Unset))

    def testNoSubclassing(self):
        with self.assertRaises(TypeError):
            type("Other", (UnsetType,), {})


class TestHelpers(TestCase):
    """Behavioral tests for coalesce(), rename() and mirror()."""

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, 3), 3)
        self.assertIsNone(coalesce(Unset))
        for value in (None, 0, "", False):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, 3), value)

    def testRenameDirect(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testRenameDecorator(self):
        @rename("h")
        def f():
            pass

        self.assertEqual(f.__name__, "h")

    def testRenameErrors(self):
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(lambda: None, 3)
        with self.assertRaises(TypeError):
            rename()

    def testMirrorFreezes(self):
        class Box:
            items = mirror("items")
            table = mirror("table")

            def __init__(self):
                self._items = [1, 2]
                self._table = {"a": 1}

        box = Box()
        self.assertEqual(box.items, (1, 2))
        with self.assertRaises(TypeError):
            box.table["b"] = 2
        with self.assertRaises(AttributeError):
            box.items = ()


class TestModuleGlob(TestCase):
    """Behavioral tests for mglob()."""

    def testPlainNameIsReturnedAsIs(self):
        self.assertEqual(mglob("json"), ["json"])
        self.assertEqual(mglob("no.such.module"), ["no.such.module"])

    def testChildren(self):
        matches = mglob("json.*")
        self.assertIn("json.decoder", matches)
        self.assertIn("json.encoder", matches)
        self.assertNotIn("json", matches)
        self.assertEqual(matches, sorted(matches))

    def testRecursive(self):
        self.assertIn("helmsman.commands", mglob("helmsman.**.commands"))

    def testUnimportablePrefix(self):
        self.assertEqual(mglob("helmsman_no_such_package.*"), [])

    def testInputErrors(self):
        with self.assertRaises(TypeError):
            mglob(3)
        with self.assertRaises(ValueError):
            mglob("   ")
        with self.assertRaises(ValueError):
            mglob("*.commands")


if __name__ == "__main__":
    unittest.main()
