"""Python integers exposed through the ring interface.

The module-level functions are the integer toolkit used by the rest of the
package; ``Integers`` wraps them as a ``Ring`` so the generic matrix and
module algorithms can run over ZZ.

Division here is floor based (the remainder takes the sign of the divisor),
which is what Python's ``divmod`` already does.
"""

from __future__ import annotations

import numbers
from typing import Any, Tuple

import sympy as sp
from sympy.ntheory.primetest import mr

from algebra_errors import InexactDivisionError, NotAUnitError
from ring_interface import Ring
from shared_utilities import DEFAULT_PRIMALITY_REPS


def is_unit(a: int) -> bool:
    """Return True if ``a`` is 1 or -1."""
    return a == 1 or a == -1


def canonical_unit(a: int) -> int:
    return -1 if a < 0 else 1


def divrem(a: int, b: int) -> Tuple[int, int]:
    """Floor division with remainder: ``a == q*b + r`` and ``r`` has the sign of ``b``."""
    return divmod(a, b)


def div(a: int, b: int) -> int:
    return a // b


def powmod(a: int, b: int, c: int) -> int:
    """Return ``a**b mod c`` by left-to-right square-and-multiply."""
    if b < 0:
        raise ValueError(f"exponent must be >= 0, got {b}")
    # special cases
    if a == 0:
        return 0
    if b == 0:
        return 1
    bit = 1 << (b.bit_length() - 1)
    z = a % c
    bit >>= 1
    while bit:
        z = (z * z) % c
        if b & bit:
            z = (z * a) % c
        bit >>= 1
    return z


def divides(a: int, b: int) -> Tuple[bool, int]:
    """Return ``(r == 0, q)`` for ``q, r = divrem(a, b)``."""
    q, r = divrem(a, b)
    return r == 0, q


def divexact(a: int, b: int) -> int:
    q, r = divrem(a, b)
    if r != 0:
        raise InexactDivisionError(f"{a} is not exactly divisible by {b}")
    return q


def inv(a: int) -> int:
    if a == 1 or a == -1:
        return a
    if a == 0:
        raise ZeroDivisionError("Inverse of zero")
    raise NotAUnitError(f"{a} is not a unit in the integers")


def gcdx(a: int, b: int) -> Tuple[int, int, int]:
    """Return ``(g, s, t)`` with ``g == s*a + t*b`` and ``g = gcd(a, b) >= 0``."""
    s, t, g = sp.ZZ.gcdex(sp.ZZ(a), sp.ZZ(b))
    g, s, t = int(g), int(s), int(t)
    if g < 0:
        return -g, -s, -t
    return g, s, t


def gcdinv(a: int, b: int) -> Tuple[int, int]:
    """Return ``(g, s)`` with ``g = gcd(a, b)`` and ``s*a == g (mod b)``."""
    g, s, _ = gcdx(a, b)
    return g, s



def isqrt_exact(a: int, check: bool = True) -> int:
    """Integer square root; raises ``ValueError`` on non-squares unless ``check`` is off."""
    s, exact = sp.integer_nthroot(a, 2)
    if check and not exact:
        raise ValueError(f"{a} is not a square")
    return int(s)


def is_square(a: int) -> bool:
    if a < 0:
        return False
    return bool(sp.integer_nthroot(a, 2)[1])


def exp(a: int) -> int:
    """Return 1 if ``a`` is 0; any other argument is an error."""
    if a != 0:
        raise ValueError(f"exp is only defined at 0 in the integers, got {a}")
    return 1


def ppio(a: int, b: int) -> Tuple[int, int]:
    """Split ``a`` into ``c*n`` where ``c = gcd(a, b**oo)`` and ``gcd(c, n) == 1``.

    ``c`` collects exactly the prime powers of ``a`` at primes dividing ``b``
    (Bernstein, "Factoring into coprimes in essentially linear time").
    """
    if a == 0:
        raise ValueError("ppio is undefined for a == 0")
    c = int(sp.igcd(a, b))
    n = div(a, c)
    g = int(sp.igcd(c, n))
    while g != 1:
        c *= g
        n = div(n, g)
        g = int(sp.igcd(c, n))
    return c, n


def isprobable_prime(x: int, reps: int = DEFAULT_PRIMALITY_REPS) -> bool:
    """Miller-Rabin test of ``|x|`` against the first ``reps`` primes as bases."""
    n = abs(int(x))
    if n < 2:
        return False
    bases = list(sp.primerange(2, sp.prime(max(reps, 1)) + 1))
    return bool(mr(n, bases))


class Integers(Ring):
    """The ring ZZ of Python integers."""

    domain = sp.ZZ

    def __call__(self, value: Any = 0) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, (numbers.Rational, str)):
            r = sp.Rational(value)
            if r.q != 1:
                raise ValueError(f"{value!r} is not an integer")
            return int(r.p)
        raise ValueError(f"Cannot coerce {value!r} into the integers")

    def is_zero(self, a: int) -> bool:
        return a == 0

    def is_one(self, a: int) -> bool:
        return a == 1

    def is_unit(self, a: int) -> bool:
        return is_unit(a)

    def canonical_unit(self, a: int) -> int:
        return canonical_unit(a)

    def divrem(self, a: int, b: int) -> Tuple[int, int]:
        return divrem(a, b)

    def div(self, a: int, b: int) -> int:
        return div(a, b)

    def divexact(self, a: int, b: int) -> int:
        return divexact(a, b)

    def divides(self, a: int, b: int) -> Tuple[bool, int]:
        if b == 0:
            return a == 0, 0
        return divides(a, b)

    def inv(self, a: int) -> int:
        return inv(a)

    def gcdx(self, a: int, b: int) -> Tuple[int, int, int]:
        return gcdx(a, b)

    def gcdinv(self, a: int, b: int) -> Tuple[int, int]:
        return gcdinv(a, b)

    def powmod(self, a: int, b: int, c: int) -> int:
        return powmod(a, b, c)

    def ppio(self, a: int, b: int) -> Tuple[int, int]:
        return ppio(a, b)

    def sqrt(self, a: int, check: bool = True) -> int:
        return isqrt_exact(a, check)

    def is_square(self, a: int) -> bool:
        return is_square(a)

    def exp(self, a: int) -> int:
        return exp(a)

    def isprobable_prime(self, x: int, reps: int = DEFAULT_PRIMALITY_REPS) -> bool:
        return isprobable_prime(x, reps)

    def characteristic(self) -> int:
        return 0

    def to_sympy(self, a: int) -> sp.Integer:
        return sp.Integer(a)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Integers)

    def __hash__(self) -> int:
        return hash("ZZ")

    def __repr__(self) -> str:
        return "Integers"
