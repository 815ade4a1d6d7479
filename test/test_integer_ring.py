"""Unit tests for the integer ring adapter."""

from __future__ import annotations

import unittest
from fractions import Fraction

import pytest
import sympy as sp

from algebra_errors import InexactDivisionError, NotAUnitError
from integer_ring import (
    Integers,
    canonical_unit,
    div,
    divexact,
    divides,
    divrem,
    exp,
    gcdinv,
    gcdx,
    inv,
    is_square,
    is_unit,
    isprobable_prime,
    isqrt_exact,
    powmod,
    ppio,
)


class TestDivision(unittest.TestCase):
    def test_divrem_is_floor_based(self):
        self.assertEqual(divrem(7, 2), (3, 1))
        self.assertEqual(divrem(-7, 2), (-4, 1))
        self.assertEqual(divrem(7, -2), (-4, -1))
        self.assertEqual(div(-7, 2), -4)

    def test_divexact(self):
        self.assertEqual(divexact(12, 4), 3)
        self.assertEqual(divexact(-12, 4), -3)
        with self.assertRaises(InexactDivisionError):
            divexact(12, 5)
        # still an ArithmeticError for generic callers
        with self.assertRaises(ArithmeticError):
            divexact(1, 2)

    def test_divides(self):
        self.assertEqual(divides(12, 4), (True, 3))
        self.assertEqual(divides(13, 4), (False, 3))

    def test_inverse_only_for_units(self):
        self.assertEqual(inv(1), 1)
        self.assertEqual(inv(-1), -1)
        with self.assertRaises(ZeroDivisionError):
            inv(0)
        with self.assertRaises(NotAUnitError):
            inv(2)

    def test_units(self):
        self.assertTrue(is_unit(-1))
        self.assertFalse(is_unit(2))
        self.assertEqual(canonical_unit(-5), -1)
        self.assertEqual(canonical_unit(0), 1)


@pytest.mark.parametrize("a, b", [(6, 3), (-20, 4), (0, 7), (35, -5), (2**80, 2**40)])
def test_divexact_times_divisor(a: int, b: int) -> None:
    assert divexact(a, b) * b == a


@pytest.mark.parametrize("c", [7, 13, 100])
def test_powmod_matches_builtin(c: int) -> None:
    for a in range(1, 20):
        for b in range(1, 30):
            assert powmod(a, b, c) == pow(a, b, c)


def test_powmod_special_cases() -> None:
    assert powmod(0, 5, 7) == 0
    assert powmod(5, 0, 7) == 1
    assert powmod(2, 10, 1000) == 24
    with pytest.raises(ValueError):
        powmod(2, -1, 7)


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (12, 2, (4, 3)),
        (90, 6, (18, 5)),
        (35, 4, (1, 35)),
        (-24, 3, (3, -8)),
    ],
)
def test_ppio_values(a: int, b: int, expected) -> None:
    assert ppio(a, b) == expected


@pytest.mark.parametrize("a, b", [(360, 10), (2**5 * 3**4 * 7, 21), (1001, 13), (97, 97)])
def test_ppio_splits_into_coprime_parts(a: int, b: int) -> None:
    c, n = ppio(a, b)
    assert c * n == a
    assert sp.igcd(c, n) == 1
    b_primes = set(sp.factorint(b))
    assert set(sp.factorint(c)) <= b_primes
    assert not set(sp.factorint(n)) & b_primes


def test_ppio_rejects_zero() -> None:
    with pytest.raises(ValueError):
        ppio(0, 3)


def test_isprobable_prime_agrees_with_sympy() -> None:
    for n in range(200):
        assert isprobable_prime(n) == sp.isprime(n), n
    assert isprobable_prime(2**61 - 1)
    assert not isprobable_prime(561)  # Carmichael number
    assert isprobable_prime(-7)


def test_square_roots() -> None:
    assert isqrt_exact(49) == 7
    assert isqrt_exact(50, check=False) == 7
    with pytest.raises(ValueError):
        isqrt_exact(50)
    assert is_square(0)
    assert is_square(144)
    assert not is_square(-4)
    assert not is_square(2)


def test_exp_only_at_zero() -> None:
    assert exp(0) == 1
    with pytest.raises(ValueError):
        exp(1)


@pytest.mark.parametrize("a, b", [(12, 18), (-4, 0), (0, -7), (2, 3), (-15, 10), (0, 0), (2**70 + 1, 3**40)])
def test_gcdx_bezout(a: int, b: int) -> None:
    g, s, t = gcdx(a, b)
    assert g == sp.igcd(a, b)
    assert g >= 0
    assert s * a + t * b == g


def test_gcdinv() -> None:

    g, s = gcdinv(3, 7)
    assert g == 1
    assert (s * 3 - 1) % 7 == 0


class TestIntegersRing(unittest.TestCase):
    def setUp(self):
        self.ZZ = Integers()

    def test_coercion(self):
        ZZ = self.ZZ
        self.assertEqual(ZZ(sp.Integer(5)), 5)
        self.assertEqual(ZZ(Fraction(4, 2)), 2)
        self.assertEqual(ZZ("12"), 12)
        self.assertIsInstance(ZZ(sp.Integer(5)), int)
        with self.assertRaises(ValueError):
            ZZ(Fraction(1, 2))

    def test_gcdx(self):
        g, s, t = self.ZZ.gcdx(12, 18)
        self.assertEqual(g, 6)
        self.assertEqual(s * 12 + t * 18, 6)
        g, s, t = self.ZZ.gcdx(-4, 0)
        self.assertEqual(g, 4)
        self.assertEqual(s * -4, 4)

    def test_ring_interface(self):
        ZZ = self.ZZ
        self.assertEqual(ZZ.zero(), 0)
        self.assertEqual(ZZ.one(), 1)
        self.assertEqual(ZZ.characteristic(), 0)
        self.assertFalse(ZZ.is_field)
        self.assertEqual(ZZ.divexact(21, 7), 3)
        self.assertEqual(ZZ.divides(5, 0), (False, 0))
        self.assertEqual(ZZ.power(-1, -3), -1)
        with self.assertRaises(NotAUnitError):
            ZZ.power(2, -1)

    def test_rings_are_values(self):
        self.assertEqual(Integers(), Integers())
        self.assertEqual(hash(Integers()), hash(Integers()))


if __name__ == "__main__":
    unittest.main()
