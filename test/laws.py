"""
Algebraic laws of the optional container.

Scope
- Functor laws for map() (identity, composition, Absent short-circuit).
- Monad laws for flat_map() (left/right identity, associativity) and its
  relation to map() + flatten().
- Fallback idempotence and filter() consistency.

Each law is checked against a handful of representative values, including the
ones that denote absence (None) and falsy payloads.
"""
import unittest
from unittest import TestCase

from optionals.maybe import *

VALUES = ("hello", "", 0, 5, [1, 2], None)


def containers():
    # Every value through the nullable constructor, plus the explicit variants.
    return [of(value) for value in VALUES] + [Present(None), Absent, unit()]


def half(number):
    return of(number // 2) if number % 2 == 0 else Absent


def describe(value):
    return of(repr(value))


class FunctorLawsTest(TestCase):

    def testIdentity(self) -> None:
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertEqual(maybe.map(lambda value: value), maybe)

    def testComposition(self) -> None:
        first, second = repr, len
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertEqual(
                    maybe.map(first).map(second),
                    maybe.map(lambda value: second(first(value))),
                )

    def testAbsentShortCircuits(self) -> None:
        calls = []
        self.assertTrue(Absent.map(calls.append).is_absent())
        self.assertEqual(calls, [])


class MonadLawsTest(TestCase):

    def testLeftIdentity(self) -> None:
        for number in (0, 1, 4, 7):
            with self.subTest(number=number):
                self.assertEqual(Present(number).flat_map(half), half(number))

    def testRightIdentity(self) -> None:
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertEqual(maybe.flat_map(Present), maybe)

    def testAssociativity(self) -> None:
        for number in (0, 2, 8, 3):
            maybe = of(number)
            with self.subTest(number=number):
                self.assertEqual(
                    maybe.flat_map(half).flat_map(half),
                    maybe.flat_map(lambda value: half(value).flat_map(half)),
                )

    def testFlatMapIsMapThenFlatten(self) -> None:
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertEqual(maybe.flat_map(describe), maybe.map(describe).flatten())


class FallbackLawsTest(TestCase):

    def testPresentWins(self) -> None:
        for maybe in filter(ispresent, containers()):
            with self.subTest(maybe=maybe):
                self.assertIs(maybe.or_else(of("other")), maybe)
                self.assertIs(maybe.or_else_call(lambda: of("other")), maybe)

    def testAbsentIsNeutral(self) -> None:
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertIs(Absent.or_else(maybe), maybe)
                self.assertEqual(maybe.or_else(Absent), maybe)

    def testGetOrAgreesWithIteration(self) -> None:
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertEqual(list(maybe) or ["default"], [maybe.get_or("default")])


class FilterLawsTest(TestCase):

    def testTrueKeepsFalseDrops(self) -> None:
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertIs(maybe.filter(lambda value: True), maybe)
                self.assertIs(maybe.filter(lambda value: False), Absent)

    def testFilterAgreesWithFlatMap(self) -> None:
        predicate = bool
        for maybe in containers():
            with self.subTest(maybe=maybe):
                self.assertEqual(
                    maybe.filter(predicate),
                    maybe.flat_map(lambda value: Present(value) if predicate(value) else Absent),
                )


if __name__ == '__main__':
    unittest.main()
