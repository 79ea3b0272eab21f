"""
Value kind tests (declaration resolution and coercion).

Scope
- resolve(): accepted declarations and UnsupportedTypeError for the rest.
- coerce()/coerce_all(): decimal parsing, width bounds, malformed input faults.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import collections.abc
import unittest
from unittest import TestCase

from switchboard.kinds import (
    ValueKind,
    ValueType,
    resolve,
    coerce,
    coerce_all,
    Int64,
    Int32,
    UInt16,
    UInt8,
    String,
    Int64Array,
    Int32Array,
    UInt8Array,
    StringArray,
)
from switchboard.faults import MalformedValueError, UnsupportedTypeError


class TestResolve(TestCase):
    """Behavioral tests for resolve()."""

    def testValueTypeUnchanged(self):
        self.assertIs(resolve(Int32Array), Int32Array)

    def testValueKindIsScalar(self):
        self.assertEqual(resolve(ValueKind.UINT8), UInt8)

    def testBuiltinScalars(self):
        self.assertEqual(resolve(str), String)
        self.assertEqual(resolve(int), Int64)

    def testGenericArrays(self):
        self.assertEqual(resolve(list[int]), Int64Array)
        self.assertEqual(resolve(list[str]), StringArray)
        self.assertEqual(resolve(tuple[str, ...]), StringArray)
        self.assertEqual(resolve(collections.abc.Sequence[int]), Int64Array)

    def testArrayOfKind(self):
        self.assertEqual(resolve(list[ValueKind.INT32]), Int32Array)

    def testUnsupportedScalars(self):
        for declared in (float, bool, bytes, object):
            with self.subTest(declared=declared):
                with self.assertRaises(UnsupportedTypeError):
                    resolve(declared)

    def testUnsupportedContainers(self):
        for declared in (list[list[int]], list[float], dict[str, int], tuple[int, str], list):
            with self.subTest(declared=declared):
                with self.assertRaises(UnsupportedTypeError):
                    resolve(declared)

    def testLabels(self):
        self.assertEqual(Int32.label, "int32")
        self.assertEqual(UInt8Array.label, "uint8[]")
        self.assertEqual(repr(StringArray), "ValueType(string[])")

    def testBounds(self):
        self.assertEqual(ValueKind.UINT8.bounds, (0, 255))
        self.assertEqual(ValueKind.INT16.bounds, (-32768, 32767))
        self.assertFalse(ValueKind.STRING.numeric)


class TestCoerce(TestCase):
    """Behavioral tests for coerce() and coerce_all()."""

    def testDecimalInt32(self):
        self.assertEqual(coerce("42", Int32), 42)
        self.assertEqual(coerce("-7", Int32), -7)
        self.assertEqual(coerce("+7", Int32), 7)

    def testStringPassesThrough(self):
        self.assertEqual(coerce("hello world", String), "hello world")
        self.assertEqual(coerce("", String), "")

    def testMalformedInteger(self):
        with self.assertRaises(MalformedValueError) as context:
            coerce("abc", Int32)
        self.assertEqual(context.exception.options["value"], "abc")
        self.assertIs(context.exception.options["kind"], ValueKind.INT32)
        self.assertIn("'abc'", context.exception.message)

    def testNonDecimalFormsRejected(self):
        for raw in (" 1", "1 ", "1_000", "0x10", "1.5", "", "-"):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedValueError):
                    coerce(raw, Int64)

    def testWidthBounds(self):
        self.assertEqual(coerce("255", UInt8), 255)
        self.assertEqual(coerce("-2147483648", Int32), -2147483648)
        self.assertEqual(coerce("65535", UInt16), 65535)
        for raw, type in (("256", UInt8), ("-1", UInt8), ("2147483648", Int32), ("65536", UInt16)):
            with self.subTest(raw=raw, type=type):
                with self.assertRaises(MalformedValueError):
                    coerce(raw, type)

    def testOverlongDecimalIsOutOfRange(self):
        for raw, type in (("9" * 5000, Int64), ("-" + "9" * 5000, Int32), ("1" + "0" * 20, UInt8)):
            with self.subTest(length=len(raw), type=type):
                with self.assertRaises(MalformedValueError) as context:
                    coerce(raw, type)
                self.assertEqual(context.exception.options["value"], raw)
                self.assertIn("out of range", context.exception.message)

    def testLeadingZerosDoNotCountAsDigits(self):
        self.assertEqual(coerce("0" * 5000 + "42", Int32), 42)
        self.assertEqual(coerce("-0000", Int64), 0)

    def testArrayElementRule(self):
        self.assertEqual(coerce("3", UInt8Array), 3)
        self.assertEqual(coerce_all(["1", "2", "3"], UInt8Array), [1, 2, 3])

    def testCoerceAllFailsOnAnyElement(self):
        with self.assertRaises(MalformedValueError):
            coerce_all(["1", "x"], Int32Array)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            coerce(42, Int32)

    def testPlainDeclarationAccepted(self):
        self.assertEqual(coerce("9", int), 9)
        self.assertIsInstance(resolve(int), ValueType)


if __name__ == "__main__":
    unittest.main()
