"""
Tests for the internal helpers (Unset sentinel, coalesce, rename, mirror, Variant).

This module verifies:
- Unset is a falsy, final, process-wide singleton that survives copy and pickle.
- coalesce() only replaces Unset.
- rename() in both function and decorator forms.
- mirror() exposes frozen views of private containers.
- Variant equality includes the concrete type.
"""
import copy
import pickle
import unittest
from collections import namedtuple
from types import MappingProxyType
from unittest import TestCase

from argtree.utils import *


class UnsetTest(TestCase):
    """Test suite for the `Unset` singleton."""

    def testSingleton(self) -> None:
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self) -> None:
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyAndPickleKeepIdentity(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testUnionSupport(self) -> None:
        self.assertEqual(str | Unset, str | UnsetType)


class CoalesceTest(TestCase):
    """Test suite for coalesce()."""

    def testReplacesUnset(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testPreservesFalsyValues(self) -> None:
        for value in (None, 0, "", []):
            with self.subTest(value=value):
                self.assertIs(coalesce(value, "fallback"), value)

    def testDefaultIsNone(self) -> None:
        self.assertIsNone(coalesce(Unset))


class RenameTest(TestCase):
    """Test suite for rename()."""

    def testFunctionForm(self) -> None:
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testDecoratorForm(self) -> None:
        @rename("g")
        def f():
            pass

        self.assertEqual(f.__name__, "g")

    def testWrongArity(self) -> None:
        with self.assertRaises(TypeError):
            rename()

    def testRejectsNonCallable(self) -> None:
        with self.assertRaises(TypeError):
            rename(1, "x")


class MirrorTest(TestCase):
    """Test suite for mirror()."""

    class Holder:
        items = mirror("items")
        mapping = mirror("mapping")
        name = mirror("name")

        def __init__(self):
            self._items = [1, 2]
            self._mapping = {"a": 1}
            self._name = "holder"

    def testSequenceIsTuple(self) -> None:
        self.assertEqual(self.Holder().items, (1, 2))

    def testMappingIsReadOnly(self) -> None:
        mapping = self.Holder().mapping
        self.assertIsInstance(mapping, MappingProxyType)
        with self.assertRaises(TypeError):
            mapping["b"] = 2

    def testStringIsUnchanged(self) -> None:
        self.assertEqual(self.Holder().name, "holder")

    def testPropertyIsNamed(self) -> None:
        self.assertEqual(self.Holder.items.fget.__name__, "items")

    def testPropertyIsReadOnly(self) -> None:
        with self.assertRaises(AttributeError):
            self.Holder().items = ()


class VariantTest(TestCase):
    """Test suite for Variant."""

    class Left(Variant, namedtuple("Left", ("value",))):
        __slots__ = ()

    class Right(Variant, namedtuple("Right", ("value",))):
        __slots__ = ()

    def testSameTypeSameContent(self) -> None:
        self.assertEqual(self.Left(1), self.Left(1))
        self.assertEqual(hash(self.Left(1)), hash(self.Left(1)))

    def testDifferentTypeSameContent(self) -> None:
        self.assertNotEqual(self.Left(1), self.Right(1))

    def testPlainTupleIsDifferent(self) -> None:
        self.assertNotEqual(self.Left(1), (1,))


if __name__ == '__main__':
    unittest.main()
