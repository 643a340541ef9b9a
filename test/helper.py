# python
"""
Helper module behavioral tests (help listing layout).

Scope
- Validate the exact line layout: banner, header, commands, parameters, defaults.
- Validate partial and missing banner metadata and the empty registry notice.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import sys
import types
import unittest
from unittest import TestCase, mock

from helmsman import BufferSink, Registry
from helmsman.helper import render


class StaticMetadata:
    def __init__(self, name=None, version=None, author=None):
        self.values = {"name": name, "version": version, "author": author}

    def name(self):
        return self.values["name"]

    def version(self):
        return self.values["version"]

    def author(self):
        return self.values["author"]


def ping():
    pass


def add(a: int, b: int = 2):
    """add two integers"""


class TestHelp(TestCase):
    """Behavioral tests for render()."""

    def setUp(self):
        patcher = mock.patch.dict(sys.modules, {"__main__": types.ModuleType("__main__")})
        patcher.start()
        self.addCleanup(patcher.stop)

    def testFullListing(self):
        registry = Registry()
        registry.register(add)
        registry.register(ping)
        sink = BufferSink()
        render(registry, sink, StaticMetadata("demo", "1.0", "someone"))
        self.assertEqual(sink.lines, [
            "****************************",
            "name: demo",
            "author: someone",
            "version: 1.0",
            "*********** HELP ***********",
            "",
            "available commands:",
            "",
            " add: add two integers",
            "  parameters:",
            "    -a (int)",
            "    -b (int) (default: 2)",
            "",
            " ping:",
            "  this command does not take any parameters.",
            "",
        ])
        self.assertEqual(sink.errors, [])

    def testPartialBanner(self):
        sink = BufferSink()
        render(Registry(), sink, StaticMetadata(version="2.0"))
        self.assertEqual(sink.lines[:3], ["****************************", "version: 2.0", "*********** HELP ***********"])

    def testEmptyRegistry(self):
        sink = BufferSink()
        render(Registry(), sink, StaticMetadata())
        self.assertEqual(sink.lines, [
            "*********** HELP ***********",
            "",
            "no commands are available.",
        ])

    def testColorfulKeepsText(self):
        registry = Registry()
        registry.register(add)
        plain, colorful = BufferSink(), BufferSink()
        render(registry, plain, StaticMetadata("demo"))
        render(registry, colorful, StaticMetadata("demo"), colorful=True)
        self.assertEqual(plain.lines, colorful.lines)

    def testNoneDefaultIsShown(self):
        def pick(limit: int = None):
            pass

        registry = Registry()
        registry.register(pick)
        sink = BufferSink()
        render(registry, sink, StaticMetadata())
        self.assertIn("    -limit (int) (default: None)", sink.lines)


if __name__ == "__main__":
    unittest.main()
