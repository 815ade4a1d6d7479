"""Coefficient rings used by the module and Laurent polynomial code.

A ring is an ordinary object constructed by the caller; its elements are plain
Python/sympy values that support ``+``, ``-``, ``*`` and ``==``. Everything the
generic algorithms need beyond the operators goes through the ring object:

    R = FiniteField(5)
    q, r = R.divrem(R(3), R(2))
    g, s, t = R.gcdx(a, b)         # g == s*a + t*b, g normalized

Concrete rings here: rationals (``RationalField``), prime fields
(``FiniteField``) and univariate polynomial rings (``PolynomialRing``). The
integers live in ``integer_ring``.
"""

from __future__ import annotations

import numbers
from fractions import Fraction
from typing import Any, Dict, Tuple

import sympy as sp

from algebra_errors import InexactDivisionError, NotAUnitError
from shared_utilities import DEFAULT_VAR


class Ring:
    """Base class for coefficient rings.

    Subclasses implement coercion (``__call__``), ``is_unit``,
    ``canonical_unit``, ``divrem`` and ``characteristic``; the Euclidean
    helpers below are derived from those.
    """

    is_field = False
    domain: Any = None

    def __call__(self, value: Any = 0) -> Any:
        raise NotImplementedError

    def zero(self) -> Any:
        return self(0)

    def one(self) -> Any:
        return self(1)

    def is_zero(self, a: Any) -> bool:
        return a == self.zero()

    def is_one(self, a: Any) -> bool:
        return a == self.one()

    def is_unit(self, a: Any) -> bool:
        raise NotImplementedError

    def canonical_unit(self, a: Any) -> Any:
        raise NotImplementedError

    def divrem(self, a: Any, b: Any) -> Tuple[Any, Any]:
        raise NotImplementedError

    def characteristic(self) -> int:
        raise NotImplementedError

    def to_sympy(self, a: Any) -> sp.Expr:
        return sp.sympify(a)

    def divexact(self, a: Any, b: Any) -> Any:
        q, r = self.divrem(a, b)
        if not self.is_zero(r):
            raise InexactDivisionError(f"{a} is not exactly divisible by {b}")
        return q

    def divides(self, a: Any, b: Any) -> Tuple[bool, Any]:
        """Return ``(flag, q)`` where ``flag`` says whether ``b`` divides ``a``."""
        if self.is_zero(b):
            return self.is_zero(a), self.zero()
        q, r = self.divrem(a, b)
        return self.is_zero(r), q

    def inv(self, a: Any) -> Any:
        if self.is_zero(a):
            raise ZeroDivisionError("Inverse of zero")
        if not self.is_unit(a):
            raise NotAUnitError(f"{a} is not a unit")
        return self.divexact(self.one(), a)

    def power(self, a: Any, e: int) -> Any:
        """``a**e``; negative exponents need ``a`` to be a unit."""
        if e >= 0:
            return a ** e
        return self.inv(a) ** (-e)

    def gcdx(self, a: Any, b: Any) -> Tuple[Any, Any, Any]:
        """Extended Euclid: ``(g, s, t)`` with ``g == s*a + t*b``.

        ``g`` is divided by its canonical unit so that gcds are unique.
        """
        r0, r1 = a, b
        s0, s1 = self.one(), self.zero()
        t0, t1 = self.zero(), self.one()
        while not self.is_zero(r1):
            q, r = self.divrem(r0, r1)
            r0, r1 = r1, r
            s0, s1 = s1, s0 - q * s1
            t0, t1 = t1, t0 - q * t1
        if self.is_zero(r0):
            return r0, s0, t0
        u = self.inv(self.canonical_unit(r0))
        return r0 * u, s0 * u, t0 * u


class RationalField(Ring):
    """The rationals, with elements stored as ``sympy.Rational``."""

    is_field = True
    domain = sp.QQ

    def __call__(self, value: Any = 0) -> sp.Rational:
        if isinstance(value, Fraction):
            return sp.Rational(value.numerator, value.denominator)
        if isinstance(value, (numbers.Rational, str, sp.Rational)):
            return sp.Rational(value)
        raise ValueError(f"Cannot coerce {value!r} into the rationals")

    def is_unit(self, a: Any) -> bool:
        return not self.is_zero(a)

    def canonical_unit(self, a: Any) -> sp.Rational:
        return self.one() if self.is_zero(a) else a

    def divrem(self, a: Any, b: Any) -> Tuple[sp.Rational, sp.Rational]:
        if self.is_zero(b):
            raise ZeroDivisionError("Division by zero in the rationals")
        return a / b, self.zero()

    def characteristic(self) -> int:
        return 0

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RationalField)

    def __hash__(self) -> int:
        return hash("QQ")

    def __repr__(self) -> str:
        return "Rationals"


class FiniteField(Ring):
    """Prime field GF(p) backed by ``sympy.GF``."""

    is_field = True

    def __init__(self, p: int):
        p = int(p)
        if not sp.isprime(p):
            raise ValueError(f"GF({p}) needs a prime modulus")
        self.p = p
        self.domain = sp.GF(p)

    def __call__(self, value: Any = 0) -> Any:
        if isinstance(value, Fraction):
            value = sp.Rational(value.numerator, value.denominator)
        if isinstance(value, sp.Rational) and value.q != 1:
            if value.q % self.p == 0:
                raise ZeroDivisionError(f"{value} has no image in GF({self.p})")
            return self.domain(int(value.p)) / self.domain(int(value.q))
        return self.domain(int(value))

    def is_zero(self, a: Any) -> bool:
        return int(a) % self.p == 0

    def is_unit(self, a: Any) -> bool:
        return not self.is_zero(a)

    def canonical_unit(self, a: Any) -> Any:
        return self.one() if self.is_zero(a) else a

    def divrem(self, a: Any, b: Any) -> Tuple[Any, Any]:
        if self.is_zero(b):
            raise ZeroDivisionError(f"Division by zero in GF({self.p})")
        return a / b, self.zero()

    def characteristic(self) -> int:
        return self.p

    def to_sympy(self, a: Any) -> sp.Integer:
        return sp.Integer(int(a) % self.p)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, FiniteField) and other.p == self.p

    def __hash__(self) -> int:
        return hash(("GF", self.p))

    def __repr__(self) -> str:
        return f"Finite field GF({self.p})"


class PolynomialRing(Ring):
    """Univariate polynomials ``R[x]`` as ``sympy.Poly`` over ``R.domain``.

    Euclidean division needs ``R`` to be a field; over any other base ring
    ``divrem`` raises ``ValueError``, so gcds and normal forms are only
    available over fields.
    """

    def __init__(self, base_ring: Ring, var: str = DEFAULT_VAR):
        if isinstance(base_ring, PolynomialRing):
            raise ValueError("Multivariate polynomial rings are not supported")
        self.base_ring = base_ring
        self.var = var
        self.symbol = sp.Symbol(var)
        self.domain = base_ring.domain

    def __call__(self, value: Any = 0) -> sp.Poly:
        if isinstance(value, sp.Poly):
            if value.gens == (self.symbol,) and value.domain == self.domain:
                return value
            if len(value.gens) != 1:
                raise ValueError(f"{value} is not univariate")
            return self.from_coeffs(
                [self.base_ring(c) for c in reversed(value.all_coeffs())]
            )
        if isinstance(value, (str, sp.Expr)) and not isinstance(value, sp.Rational):
            expr = sp.sympify(value, locals={self.var: self.symbol})
            return sp.Poly(expr, self.symbol, domain=self.domain)
        return self.from_coeffs([self.base_ring(value)])

    def from_coeffs(self, coeffs) -> sp.Poly:
        """Build a polynomial from coefficients listed from degree 0 upwards."""
        terms = {
            (i,): self.base_ring.to_sympy(c)
            for i, c in enumerate(coeffs)
            if not self.base_ring.is_zero(c)
        }
        return self._from_dict(terms)

    def _from_dict(self, terms: Dict[Tuple[int], Any]) -> sp.Poly:
        if not terms:
            return sp.Poly(0, self.symbol, domain=self.domain)
        return sp.Poly.from_dict(terms, self.symbol, domain=self.domain)

    def gen(self) -> sp.Poly:
        return sp.Poly(self.symbol, self.symbol, domain=self.domain)

    def is_zero(self, a: sp.Poly) -> bool:
        return a.is_zero

    def degree(self, a: sp.Poly) -> int:
        """Degree of ``a``; the zero polynomial has degree -1."""
        return -1 if a.is_zero else int(a.degree())

    def valuation(self, a: sp.Poly) -> int:
        """Lowest exponent with a nonzero coefficient (-1 for zero)."""
        if a.is_zero:
            return -1
        return min(monom[0] for monom in a.monoms())

    def leading_coefficient(self, a: sp.Poly) -> Any:
        return self.base_ring(a.LC())

    def coeff(self, a: sp.Poly, i: int) -> Any:
        if i < 0:
            return self.base_ring.zero()
        return self.base_ring(a.nth(i))

    def set_coeff(self, a: sp.Poly, i: int, c: Any) -> sp.Poly:
        """Return a copy of ``a`` whose degree ``i`` coefficient is ``c``."""
        if i < 0:
            raise ValueError(f"Negative degree {i} in an ordinary polynomial")
        c = self.base_ring(c)
        terms = dict(a.as_dict())
        terms.pop((i,), None)
        if not self.base_ring.is_zero(c):
            terms[(i,)] = self.base_ring.to_sympy(c)
        return self._from_dict(terms)

    def shift_left(self, a: sp.Poly, n: int) -> sp.Poly:
        """Multiply ``a`` by ``x**n``."""
        return self._from_dict({(k + n,): c for (k,), c in a.as_dict().items()})

    def shift_right(self, a: sp.Poly, n: int) -> sp.Poly:
        """Divide ``a`` by ``x**n``, dropping the terms below degree ``n``."""
        return self._from_dict(
            {(k - n,): c for (k,), c in a.as_dict().items() if k >= n}
        )

    def evaluate(self, a: sp.Poly, b: Any) -> Any:
        """Horner evaluation of ``a`` at ``b``."""
        z = self.base_ring.zero()
        for c in a.all_coeffs():
            z = z * b + self.base_ring(c)
        return z

    def is_unit(self, a: sp.Poly) -> bool:
        return self.degree(a) == 0 and self.base_ring.is_unit(self.leading_coefficient(a))

    def canonical_unit(self, a: sp.Poly) -> sp.Poly:
        if a.is_zero:
            return self.one()
        return self.from_coeffs([self.base_ring.canonical_unit(self.leading_coefficient(a))])

    def divrem(self, a: sp.Poly, b: sp.Poly) -> Tuple[sp.Poly, sp.Poly]:
        if not self.base_ring.is_field:
            raise ValueError(f"{self!r} is not Euclidean, its coefficients do not form a field")
        if b.is_zero:
            raise ZeroDivisionError("Polynomial division by zero")
        return a.div(b, auto=False)

    def characteristic(self) -> int:
        return self.base_ring.characteristic()

    def to_sympy(self, a: sp.Poly) -> sp.Expr:
        return a.as_expr()

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, PolynomialRing)
            and other.base_ring == self.base_ring
            and other.var == self.var
        )

    def __hash__(self) -> int:
        return hash(("Poly", self.base_ring, self.var))

    def __repr__(self) -> str:
        return f"Univariate polynomial ring in {self.var} over {self.base_ring!r}"
