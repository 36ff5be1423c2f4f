"""
Tests for the Maybe type.

This module verifies the carrier semantics of `Maybe`:
- Variant construction, predicates and the default (Void) state.
- Binary optional conversion, including the documented Void/None asymmetry.
- Structural equality, hashing, truthiness and representation.
- Clone/copy/deepcopy/pickle behavior and singleton identity of Void and Null.
- Immutability and finality.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from rich.console import Console
from rich.text import Text

from voidable import Maybe, Variant, Void, Null, Some, UnwrapError
from voidable.utils import Unset


class TestVariants(TestCase):
    """Construction and introspection."""

    def testDefaultIsVoid(self):
        self.assertIs(Maybe(), Void)
        self.assertIs(Maybe[int](), Void)

    def testVariantSpellingsOnType(self):
        self.assertIs(Maybe.Void, Void)
        self.assertIs(Maybe.Null, Null)
        self.assertEqual(Maybe.Some(1), Some(1))

    def testSingletons(self):
        self.assertIs(Maybe(Variant.VOID), Void)
        self.assertIs(Maybe(Variant.NONE), Null)
        self.assertIs(Maybe(0), Void)

    def testPredicatesAreExclusive(self):
        cases = {
            "void": (Void, (True, False, False)),
            "null": (Null, (False, True, False)),
            "some": (Some(34), (False, False, True)),
        }
        for label, (maybe, expected) in cases.items():
            with self.subTest(label):
                self.assertEqual((maybe.is_void(), maybe.is_none(), maybe.is_some()), expected)

    def testVariantProperty(self):
        self.assertIs(Void.variant, Variant.VOID)
        self.assertIs(Null.variant, Variant.NONE)
        self.assertIs(Some("x").variant, Variant.SOME)

    def testSomeRequiresValue(self):
        with self.assertRaises(TypeError):
            Maybe(Variant.SOME)

    def testEmptyVariantsRejectValue(self):
        with self.assertRaises(TypeError):
            Maybe(Variant.NONE, 1)
        with self.assertRaises(TypeError):
            Maybe(Variant.VOID, 1)

    def testSomeOfNoneIsAllowed(self):
        maybe = Some(None)
        self.assertTrue(maybe.is_some())
        self.assertIsNone(maybe.unwrap())
        self.assertNotEqual(maybe, Null)


class TestUnwrap(TestCase):
    """Payload access."""

    def testUnwrapSome(self):
        self.assertEqual(Some(34).unwrap(), 34)
        self.assertEqual(Some(34).value, 34)

    def testUnwrapEmptyRaises(self):
        for maybe in (Void, Null):
            with self.subTest(repr(maybe)):
                with self.assertRaises(UnwrapError):
                    maybe.unwrap()
                with self.assertRaises(UnwrapError):
                    maybe.value

    def testUnwrapDefault(self):
        self.assertEqual(Void.unwrap(7), 7)
        self.assertIsNone(Null.unwrap(None))
        self.assertEqual(Some(1).unwrap(7), 1)

    def testPatternMatching(self):
        def describe(maybe):
            match maybe:
                case Maybe(Variant.SOME, payload):
                    return f"set {payload}"
                case Maybe(Variant.NONE):
                    return "clear"
                case Maybe(Variant.VOID):
                    return "keep"

        self.assertEqual(describe(Some(3)), "set 3")
        self.assertEqual(describe(Some(None)), "set None")
        self.assertEqual(describe(Null), "clear")
        self.assertEqual(describe(Void), "keep")

    def testPositionalPatternOnEmptyVariants(self):
        def payload_of(maybe):
            match maybe:
                case Maybe(Variant.SOME, payload):
                    return payload
                case Maybe(_, payload):
                    return payload

        self.assertEqual(payload_of(Some(3)), 3)
        self.assertIs(payload_of(Null), Unset)
        self.assertIs(payload_of(Void), Unset)

    def testPayloadNeverRaises(self):
        self.assertEqual(Some(0).payload, 0)
        self.assertIs(Null.payload, Unset)
        self.assertIs(Void.payload, Unset)
        with self.assertRaises(UnwrapError):
            Null.value


class TestOptionalConversion(TestCase):
    """Conversion to and from a binary optional."""

    def testSomeRoundTrip(self):
        for value in (0, 34, "", "Hello!", [1, 2], False):
            with self.subTest(value=value):
                self.assertEqual(Maybe.from_optional(Some(value).to_optional()), Some(value))

    def testNoneRoundTrip(self):
        self.assertIsNone(Maybe.from_optional(None).to_optional())

    def testFromOptionalNeverVoid(self):
        self.assertIs(Maybe.from_optional(None), Null)
        self.assertFalse(Maybe.from_optional(None).is_void())

    def testVoidCollapsesToNone(self):
        self.assertIsNone(Void.to_optional())
        # The way back lands on Null, not Void: the conversion is lossy.
        self.assertIs(Maybe.from_optional(Void.to_optional()), Null)

    def testFromMapping(self):
        payload = {"b": 34, "c": None}
        self.assertEqual(Maybe.from_mapping(payload, "b"), Some(34))
        self.assertIs(Maybe.from_mapping(payload, "c"), Null)
        self.assertIs(Maybe.from_mapping(payload, "d"), Void)


class TestEquality(TestCase):
    """Structural equality, hashing and truthiness."""

    def testVoidIsNotNull(self):
        self.assertNotEqual(Void, Null)

    def testNullIsNotSomeOfDefault(self):
        self.assertNotEqual(Null, Some(0))
        self.assertNotEqual(Null, Some(""))
        self.assertNotEqual(Void, Some(0))

    def testSomeComparesPayload(self):
        self.assertEqual(Some(34), Some(34))
        self.assertNotEqual(Some(34), Some(35))

    def testNotEqualToBareValues(self):
        self.assertNotEqual(Null, None)
        self.assertNotEqual(Some(34), 34)
        self.assertNotEqual(Void, False)  # noqa: E712

    def testHash(self):
        self.assertEqual(hash(Some(34)), hash(Some(34)))
        self.assertEqual(len({Void, Null, Some(1), Some(1), Maybe()}), 3)

    def testUnhashablePayload(self):
        with self.assertRaises(TypeError):
            hash(Some([1]))

    def testTruthiness(self):
        self.assertFalse(Void)
        self.assertFalse(Null)
        self.assertTrue(Some(0))
        self.assertTrue(Some(""))


class TestCopying(TestCase):
    """Clone, copy, deepcopy and pickle."""

    def testCloneEqualsOriginal(self):
        for value in (34, "Hello!", [1, [2, 3]], {"k": (1, 2)}):
            with self.subTest(value=value):
                self.assertEqual(Some(value).clone(), Some(value))

    def testCloneDeepCopiesPayload(self):
        payload = [1, [2, 3]]
        original = Some(payload)
        clone = original.clone()
        self.assertIsNot(clone.unwrap(), payload)
        clone.unwrap()[1].append(4)
        self.assertEqual(payload, [1, [2, 3]])

    def testEmptyVariantsCloneToThemselves(self):
        for maybe in (Void, Null):
            with self.subTest(repr(maybe)):
                self.assertIs(maybe.clone(), maybe)
                self.assertIs(copy.copy(maybe), maybe)
                self.assertIs(copy.deepcopy(maybe), maybe)

    def testShallowCopyIsSameInstance(self):
        maybe = Some([1])
        self.assertIs(copy.copy(maybe), maybe)

    def testPickleRoundTrip(self):
        self.assertIs(pickle.loads(pickle.dumps(Void)), Void)
        self.assertIs(pickle.loads(pickle.dumps(Null)), Null)
        self.assertEqual(pickle.loads(pickle.dumps(Some({"a": 1}))), Some({"a": 1}))

    def testThreadSafetySingleton(self):
        results = []
        lock = Lock()

        def worker():
            instance = Maybe(Variant.NONE)
            with lock:
                results.append(instance)

        threads = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertTrue(results)
        for instance in results:
            self.assertIs(instance, Null)


class TestGuards(TestCase):
    """Immutability and finality."""

    def testImmutable(self):
        with self.assertRaises(AttributeError):
            Some(1)._value = 2
        with self.assertRaises(AttributeError):
            Void.anything = 1
        with self.assertRaises(AttributeError):
            del Some(1)._variant

    def testFinalClass(self):
        with self.assertRaises(TypeError):
            type("Maybe", (Maybe,), {})


class TestRepresentation(TestCase):
    """repr() and Rich integration."""

    def testRepr(self):
        self.assertEqual(repr(Void), "Void")
        self.assertEqual(repr(Null), "Null")
        self.assertEqual(repr(Some(34)), "Some(34)")
        self.assertEqual(repr(Some("a")), "Some('a')")

    def testRich(self):
        self.assertEqual(Null.__rich__(), Text("null", style="dim"))
        self.assertEqual(Void.__rich__().plain, "(void)")
        self.assertEqual(Some(34).__rich__().plain, "Some(34)")

    def testRichConsolePrint(self):
        console = Console(color_system=None, force_terminal=False)
        with console.capture() as capture:
            console.print(Void, Null, Some(34))
        self.assertEqual(capture.get().strip(), "(void) null Some(34)")


if __name__ == '__main__':
    unittest.main()
