# python
"""
Registry module behavioral tests (registration, lookup, discovery).

Scope
- Validate case-insensitive resolution and registration order.
- Validate name collisions and idempotent re-adds.
- Validate every register() invocation mode and the command() decorator.
- Validate include() over module objects and module names.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import sys
import types
import unittest
from unittest import TestCase, mock

from helmsman import Command, Registry, command


def add(a: int, b: int = 2):
    """add two integers"""


def ping():
    pass


class TestRegistry(TestCase):
    """Behavioral tests for the command registry."""

    def testResolveIgnoresCase(self):
        registry = Registry()
        cmd = registry.register(add)
        for name in ("add", "ADD", "Add"):
            with self.subTest(name=name):
                self.assertIs(registry.resolve(name), cmd)
                self.assertIn(name, registry)

    def testResolveUnknown(self):
        self.assertIsNone(Registry().resolve("nope"))
        self.assertNotIn("nope", Registry())

    def testResolveRejectsNonString(self):
        with self.assertRaises(TypeError):
            Registry().resolve(1)

    def testRegistrationOrder(self):
        registry = Registry()
        registry.register(ping)
        registry.register(add)
        self.assertEqual([cmd.name for cmd in registry], ["ping", "add"])
        self.assertEqual(len(registry), 2)
        self.assertEqual(registry.commands, tuple(registry))

    def testCollisionRaises(self):
        registry = Registry()
        registry.register(add)
        with self.assertRaises(ValueError):
            registry.register("ADD", ping)

    def testSameCommandIsIdempotent(self):
        cmd = Command(add)
        registry = Registry([cmd])
        self.assertIs(registry.add(cmd), cmd)
        self.assertEqual(len(registry), 1)

    def testAddRejectsNonCommands(self):
        with self.assertRaises(TypeError):
            Registry().add(add)

    def testRegisterWithNameAndCallback(self):
        registry = Registry()
        cmd = registry.register("plus", add)
        self.assertEqual(cmd.name, "plus")
        self.assertIs(registry.resolve("PLUS"), cmd)

    def testRegisterWithExplicitSchema(self):
        from helmsman import Parameter

        registry = Registry()
        cmd = registry.register("pair", lambda a, b: None, [Parameter("a", int), Parameter("b", int)])
        self.assertEqual([p.name for p in cmd.parameters], ["a", "b"])

    def testRegisterAsDecorator(self):
        registry = Registry()

        @registry.register("hi")
        def greet():
            pass

        @registry.register(descr="says bye")
        def bye():
            pass

        self.assertTrue(callable(greet))
        self.assertEqual(registry.resolve("hi").callback, greet)
        self.assertEqual(registry.resolve("bye").descr, "says bye")

    def testCommandDecorator(self):
        registry = Registry()

        @registry.command
        def one():
            pass

        @registry.command("two")
        def second():
            pass

        self.assertTrue(callable(one))
        self.assertEqual([cmd.name for cmd in registry], ["one", "two"])

    def testRepr(self):
        self.assertEqual(repr(Registry([Command(add)])), "registry('add')")


class TestRegistryInclude(TestCase):
    """Behavioral tests for @command discovery."""

    @staticmethod
    def module():
        module = types.ModuleType("helmsman_fixture_commands")

        @command
        def first():
            pass

        @command("Second")
        def other(x: int = 1):
            pass

        def untagged():
            pass

        module.first = first
        module.other = other
        module.untagged = untagged
        module.value = 3
        return module

    def testIncludeModuleObject(self):
        registry = Registry()
        registry.include(self.module())
        self.assertEqual([cmd.name for cmd in registry], ["first", "Second"])

    def testIncludeModuleName(self):
        module = self.module()
        with mock.patch.dict(sys.modules, {module.__name__: module}):
            registry = Registry()
            registry.include(module.__name__)
        self.assertIn("second", registry)

    def testIncludeTwiceIsHarmless(self):
        module = self.module()
        registry = Registry()
        registry.include(module)
        registry.include(module)
        self.assertEqual(len(registry), 2)

    def testIncludeUnknownModule(self):
        with self.assertRaises(TypeError):
            Registry().include("helmsman_missing_module_for_tests")

    def testIncludeRejectsOtherTypes(self):
        with self.assertRaises(TypeError):
            Registry().include(42)


if __name__ == "__main__":
    unittest.main()
