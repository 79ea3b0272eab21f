"""
Switch specification tests (SwitchSpec, SwitchSet, MemberScanner, resolve_handler).

Scope
- Validate construction, normalization and immutability of SwitchSpec.
- Validate definition-time faults (descriptions, handlers, arity/type pairing).
- Validate the builder API and handler tables of SwitchSet.
- Validate target scanning order for classes, modules, objects and iterables.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import types
import unittest
from unittest import TestCase

from switchboard import (
    SwitchSpec,
    SwitchSet,
    SwitchRegistry,
    MemberScanner,
    resolve_handler,
    FLAG,
    UNTIL_NEXT,
    Unset,
)
from switchboard.kinds import Int32, Int32Array, StringArray
from switchboard.faults import (
    InvalidSpecError,
    MalformedSpecifierError,
    DuplicateSwitchError,
    UnsupportedTypeError,
    MissingHandlerError,
)


def noop(*arguments):
    pass


class TestSwitchSpec(TestCase):
    """Behavioral tests for SwitchSpec construction."""

    def testDefaults(self):
        spec = SwitchSpec("--verbose/-v", "Print more", noop)
        self.assertEqual(spec.specifier, "--verbose/-v")
        self.assertEqual(spec.names.long, "--verbose")
        self.assertEqual(spec.names.short, "-v")
        self.assertEqual(spec.arity, FLAG)
        self.assertIs(spec.type, Unset)
        self.assertIs(spec.handler, noop)

    def testFieldsTrimmed(self):
        spec = SwitchSpec(" -b ", "  Shorthand only ", " on_b ")
        self.assertEqual(spec.specifier, "-b")
        self.assertEqual(spec.description, "Shorthand only")
        self.assertEqual(spec.handler, "on_b")

    def testDeclaredTypeResolved(self):
        spec = SwitchSpec("--values", "Values", noop, 3, list[int])
        self.assertTrue(spec.type.array)
        self.assertEqual(spec.type.kind.label, "int64")

    def testContainsForms(self):
        spec = SwitchSpec("--verbose/-v", "Print more", noop)
        self.assertIn("-v", spec)
        self.assertIn("--verbose", spec)
        self.assertNotIn("-q", spec)

    def testReadOnly(self):
        spec = SwitchSpec("--verbose/-v", "Print more", noop)
        with self.assertRaises(AttributeError):
            spec.arity = 2
        with self.assertRaises(AttributeError):
            spec.description = "Other"
        with self.assertRaises(AttributeError):
            del spec.handler

    def testRepr(self):
        spec = SwitchSpec("-b", "Shorthand only", "on_b")
        self.assertTrue(repr(spec).startswith("switch-spec(specifier='-b'"))
        self.assertEqual(dict(spec.__rich_repr__())["description"], "Shorthand only")

    def testEmptyDescriptionRejected(self):
        with self.assertRaises(InvalidSpecError) as context:
            SwitchSpec("--verbose", "", noop)
        self.assertEqual(context.exception.message, "switch description must have a value")

    def testNonStringDescriptionRejected(self):
        with self.assertRaises(InvalidSpecError):
            SwitchSpec("--verbose", 5, noop)

    def testEmptyHandlerRejected(self):
        with self.assertRaises(InvalidSpecError) as context:
            SwitchSpec("--verbose", "Print more", " ")
        self.assertEqual(context.exception.message, "switch argument handler must have a value")

    def testNonCallableHandlerRejected(self):
        with self.assertRaises(InvalidSpecError):
            SwitchSpec("--verbose", "Print more", 5)

    def testMalformedSpecifierRejected(self):
        with self.assertRaises(MalformedSpecifierError):
            SwitchSpec("--verbose/--loud", "Print more", noop)

    def testArityBelowUntilNextRejected(self):
        with self.assertRaises(InvalidSpecError):
            SwitchSpec("--verbose", "Print more", noop, -3)

    def testBooleanArityRejected(self):
        with self.assertRaises(InvalidSpecError):
            SwitchSpec("--verbose", "Print more", noop, True)

    def testFlagWithTypeRejected(self):
        with self.assertRaises(InvalidSpecError):
            SwitchSpec("--count", "Count", noop, FLAG, Int32)

    def testScalarTypeNeedsArityOne(self):
        for arity in (0, 2, UNTIL_NEXT):
            with self.subTest(arity=arity):
                with self.assertRaises(InvalidSpecError):
                    SwitchSpec("--count", "Count", noop, arity, Int32)

    def testArrayTypeAcceptsAnyValueArity(self):
        for arity in (0, 1, 3, UNTIL_NEXT):
            with self.subTest(arity=arity):
                self.assertEqual(SwitchSpec("--items", "Items", noop, arity, StringArray).arity, arity)

    def testUnsupportedTypeRejected(self):
        with self.assertRaises(UnsupportedTypeError):
            SwitchSpec("--ratio", "Ratio", noop, 1, float)


class TestSwitchSet(TestCase):
    """Behavioral tests for the SwitchSet builder API."""

    def setUp(self):
        self.switches = SwitchSet()

    def testDefineRegisters(self):
        spec = self.switches.define("--verbose/-v", "Print more", noop)
        self.assertEqual(list(self.switches), [spec])
        self.assertEqual(self.switches.registry.lookup("-v"), "Print more")

    def testSwitchDecoratorReturnsCallback(self):
        @self.switches.switch("--count/-c", "How many", 1, Int32)
        def on_count(count):
            pass

        self.assertTrue(callable(on_count))
        self.assertIs(self.switches["-c"].handler, on_count)
        self.assertIs(self.switches["--count/-c"].type, Int32)

    def testDuplicateDefinitionRejected(self):
        self.switches.define("--verbose/-v", "Print more", noop)
        with self.assertRaises(DuplicateSwitchError):
            self.switches.define("--version/-v", "Show version", noop)
        self.assertEqual(len(self.switches), 1)

    def testHandlerTable(self):
        @self.switches.handler()
        def on_verbose():
            pass

        @self.switches.handler("quiet")
        def on_quiet():
            pass

        self.assertEqual(dict(self.switches.handlers), {"on_verbose": on_verbose, "quiet": on_quiet})

    def testDuplicateHandlerRejected(self):
        self.switches.handler("same")(noop)
        with self.assertRaises(TypeError):
            self.switches.handler("same")(noop)

    def testSharedRegistry(self):
        registry = SwitchRegistry()
        SwitchSet(registry).define("--verbose/-v", "Print more", noop)
        with self.assertRaises(DuplicateSwitchError):
            SwitchSet(registry).define("-v", "Version", noop)

    def testGetItemMissing(self):
        with self.assertRaises(KeyError):
            self.switches["--missing"]

    def testHandlersViewReadOnly(self):
        with self.assertRaises(TypeError):
            self.switches.handlers["x"] = noop


class TestMemberScanner(TestCase):
    """Behavioral tests for MemberScanner target scanning."""

    def setUp(self):
        self.scanner = MemberScanner()

    def testClassDeclarationOrder(self):
        class Args:
            zeta = SwitchSpec("--zeta", "Last letter", noop)
            alpha = SwitchSpec("--alpha", "First letter", noop)
            other = 5

        self.assertEqual([spec.specifier for spec in self.scanner.scan(Args)], ["--zeta", "--alpha"])

    def testClassInheritanceBaseFirst(self):
        class Base:
            alpha = SwitchSpec("--alpha", "First letter", noop)
            beta = SwitchSpec("--beta", "Second letter", noop)

        class Derived(Base):
            gamma = SwitchSpec("--gamma", "Third letter", noop)
            beta = SwitchSpec("--beta", "Replaced", noop)

        scanned = self.scanner.scan(Derived)
        self.assertEqual([spec.specifier for spec in scanned], ["--alpha", "--beta", "--gamma"])
        self.assertEqual(scanned[1].description, "Replaced")

    def testModule(self):
        module = types.ModuleType("options")
        module.verbose = SwitchSpec("--verbose", "Print more", noop)
        module.name = "not a switch"
        module.quiet = SwitchSpec("--quiet", "Print less", noop)
        self.assertEqual([spec.specifier for spec in self.scanner.scan(module)], ["--verbose", "--quiet"])

    def testInstanceAddsOwnSpecs(self):
        class Options:
            verbose = SwitchSpec("--verbose", "Print more", noop)

        options = Options()
        options.extra = SwitchSpec("--extra", "Extra", noop)
        self.assertEqual([spec.specifier for spec in self.scanner.scan(options)], ["--verbose", "--extra"])

    def testIterableAndSwitchSet(self):
        specs = [SwitchSpec("--a", "A", noop), SwitchSpec("--b", "B", noop)]
        self.assertEqual(self.scanner.scan(specs), tuple(specs))

        switches = SwitchSet()
        for spec in specs:
            switches.add(spec)
        self.assertEqual(self.scanner.scan(switches), tuple(specs))

    def testIterableWithOtherItemsRejected(self):
        with self.assertRaises(TypeError):
            self.scanner.scan([SwitchSpec("--a", "A", noop), "--b"])

    def testUnscannableRejected(self):
        with self.assertRaises(TypeError):
            self.scanner.scan(42)


class TestResolveHandler(TestCase):
    """Behavioral tests for resolve_handler()."""

    def testCallableReturnedAsIs(self):
        spec = SwitchSpec("--a", "A", noop)
        self.assertIs(resolve_handler(object(), spec), noop)

    def testNamedOnClass(self):
        class Args:
            @staticmethod
            def on_a():
                return "resolved"

        spec = SwitchSpec("--a", "A", "on_a")
        self.assertEqual(resolve_handler(Args, spec)(), "resolved")

    def testNamedInSwitchSet(self):
        switches = SwitchSet(handlers={"on_a": noop})
        spec = switches.define("--a", "A", "on_a")
        self.assertIs(resolve_handler(switches, spec), noop)

    def testMissingName(self):
        class Args:
            on_a = "not callable"

        spec = SwitchSpec("--a", "A", "on_a")
        with self.assertRaises(MissingHandlerError) as context:
            resolve_handler(Args, spec)
        self.assertIn("'on_a'", context.exception.message)
        self.assertIn("'Args'", context.exception.message)


if __name__ == "__main__":
    unittest.main()
