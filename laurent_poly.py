"""Laurent polynomials R[x, 1/x] as an ordinary polynomial plus a degree offset.

``LaurentPolyWrap(S, poly, mindeg)`` stands for ``x**mindeg * poly``: the
coefficient of degree ``i`` is ``poly[i - mindeg]``. Setting a coefficient
below ``mindeg`` shifts the stored polynomial up and lowers ``mindeg``, so the
storage only grows and never loses terms.

    S, x = LaurentPolynomialRing(Integers(), "x")
    p = 3*x**-2 + x
    p.coeff(-2)          # 3
    p.evaluate(2)        # 3/4 + 2
"""

from __future__ import annotations

import numbers
from typing import Any, Callable, Optional

import sympy as sp

from algebra_errors import NotAMonomialError
from ring_interface import PolynomialRing, Ring
from shared_utilities import DEFAULT_VAR


class LaurentPolyWrapRing(Ring):
    """Parent object of ``LaurentPolyWrap`` elements over a polynomial ring."""

    def __init__(self, polyring: PolynomialRing):
        self.polyring = polyring
        self.domain = polyring.domain

    @property
    def base_ring(self) -> Ring:
        return self.polyring.base_ring

    @property
    def var(self) -> str:
        return self.polyring.var

    def symbols(self):
        return [self.polyring.symbol]

    def nvars(self) -> int:
        return 1

    def characteristic(self) -> int:
        return self.polyring.characteristic()

    def __call__(self, value: Any = 0) -> "LaurentPolyWrap":
        if isinstance(value, LaurentPolyWrap):
            if value.parent == self:
                return value
            return LaurentPolyWrap(self, self.polyring(value.poly), value.mindeg)
        return LaurentPolyWrap(self, self.polyring(value))

    def gen(self) -> "LaurentPolyWrap":
        return LaurentPolyWrap(self, self.polyring.gen())

    def is_zero(self, a: "LaurentPolyWrap") -> bool:
        return a.is_zero()

    def is_one(self, a: "LaurentPolyWrap") -> bool:
        return a.is_one()

    def is_unit(self, a: "LaurentPolyWrap") -> bool:
        """Units of R[x, 1/x] are the monomials with a unit coefficient."""
        terms = a.poly.terms()
        if len(terms) != 1:
            return False
        return self.base_ring.is_unit(self.base_ring(terms[0][1]))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, LaurentPolyWrapRing) and other.polyring == self.polyring

    def __hash__(self) -> int:
        return hash(("Laurent", self.polyring))

    def __repr__(self) -> str:
        return f"Univariate Laurent polynomial ring in {self.var} over {self.base_ring!r}"


class LaurentPolyWrap:
    """Element of R[x, 1/x]: ``x**mindeg * poly``."""

    __hash__ = None

    def __init__(self, parent: LaurentPolyWrapRing, poly: sp.Poly, mindeg: int = 0):
        self.parent = parent
        self.poly = poly
        self.mindeg = int(mindeg)

    @property
    def base_ring(self) -> Ring:
        return self.parent.base_ring

    @property
    def _polyring(self) -> PolynomialRing:
        return self.parent.polyring

    def copy(self) -> "LaurentPolyWrap":
        return LaurentPolyWrap(self.parent, self.poly, self.mindeg)

    # Basic manipulation

    def terms_degrees(self) -> range:
        return range(self.mindeg, self.mindeg + self._polyring.degree(self.poly) + 1)

    def coeff(self, i: int) -> Any:
        if i < self.mindeg:
            return self.base_ring.zero()
        return self._polyring.coeff(self.poly, i - self.mindeg)

    def _enable_deg(self, i: int) -> None:
        diff = self.mindeg - i
        if diff > 0:
            self.mindeg = i
            self.poly = self._polyring.shift_left(self.poly, diff)

    def set_coeff(self, i: int, a: Any) -> "LaurentPolyWrap":
        """Set the degree ``i`` coefficient in place, growing storage if needed."""
        self._enable_deg(i)
        self.poly = self._polyring.set_coeff(self.poly, i - self.mindeg, a)
        return self

    def normalize(self) -> "LaurentPolyWrap":
        """Make ``mindeg`` the lowest exponent with a nonzero coefficient."""
        if self.poly.is_zero:
            self.mindeg = 0
            return self
        v = self._polyring.valuation(self.poly)
        if v > 0:
            self.poly = self._polyring.shift_right(self.poly, v)
            self.mindeg += v
        return self

    def is_zero(self) -> bool:
        return self.poly.is_zero

    def _is_monomial(self, k: int) -> bool:
        """True if this is exactly ``x**k``."""
        terms = self.poly.terms()
        if len(terms) != 1:
            return False
        (deg,), c = terms[0]
        return deg + self.mindeg == k and self.base_ring.is_one(self.base_ring(c))

    def is_one(self) -> bool:
        return self._is_monomial(0)

    def is_gen(self) -> bool:
        return self._is_monomial(1)

    def term_degree(self) -> int:
        """Degree of a single-term Laurent polynomial."""
        terms = self.poly.terms()
        if len(terms) != 1:
            raise NotAMonomialError(f"{self} is not a single term")
        return terms[0][0][0] + self.mindeg

    # Arithmetic

    def _coerce(self, other: Any) -> "LaurentPolyWrap":
        if isinstance(other, LaurentPolyWrap):
            if other.parent != self.parent:
                raise ValueError("Incompatible Laurent polynomial rings")
            return other
        return self.parent(other)

    def __neg__(self) -> "LaurentPolyWrap":
        return LaurentPolyWrap(self.parent, -self.poly, self.mindeg)

    def __add__(self, other: Any) -> "LaurentPolyWrap":
        p, q = self, self._coerce(other)
        if p.mindeg > q.mindeg:
            p, q = q, p
        q_ = q.poly
        if p.mindeg < q.mindeg:
            q_ = self._polyring.shift_left(q_, q.mindeg - p.mindeg)
        return LaurentPolyWrap(self.parent, p.poly + q_, p.mindeg)

    def __radd__(self, other: Any) -> "LaurentPolyWrap":
        return self + other

    def __sub__(self, other: Any) -> "LaurentPolyWrap":
        return self + (-self._coerce(other))

    def __rsub__(self, other: Any) -> "LaurentPolyWrap":
        return self._coerce(other) + (-self)

    def __mul__(self, other: Any) -> "LaurentPolyWrap":
        q = self._coerce(other)
        return LaurentPolyWrap(self.parent, self.poly * q.poly, self.mindeg + q.mindeg)

    def __rmul__(self, other: Any) -> "LaurentPolyWrap":
        return self * other

    def __pow__(self, e: int) -> "LaurentPolyWrap":
        if e >= 0:
            return LaurentPolyWrap(self.parent, self.poly ** e, self.mindeg * e)
        # only a single term with invertible coefficient has a negative power
        deg = self.term_degree()
        c = self.coeff(deg)
        R = self.base_ring
        # x**-3 works even where 1**-3 is not defined
        c = c if R.is_one(c) else R.power(c, e)
        return LaurentPolyWrap(self.parent, self._polyring(c), deg * e)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, LaurentPolyWrap):
            if other.parent != self.parent:
                return NotImplemented
        else:
            try:
                other = self.parent(other)
            except (TypeError, ValueError):
                return NotImplemented
        return (self - other).is_zero()

    # Evaluation

    def evaluate(self, b: Any) -> Any:
        """Value at ``b``: ``poly(b) * b**mindeg``.

        Raises ``ZeroDivisionError`` at ``b == 0`` when ``mindeg`` is negative.
        """
        if self.mindeg < 0 and b == 0:
            raise ZeroDivisionError(f"Cannot evaluate {self} at 0, it has negative degree terms")
        z = self._polyring.evaluate(self.poly, b)
        if isinstance(b, numbers.Integral):
            b = sp.Integer(b)
        s = b ** self.mindeg
        return s * z

    def map_coeffs(self, f: Callable[[Any], Any],
                   parent: Optional[LaurentPolyWrapRing] = None) -> "LaurentPolyWrap":
        """Apply ``f`` to every nonzero coefficient, optionally into another ring."""
        parent = self.parent if parent is None else parent
        R = self.base_ring
        coeffs = []
        for k in range(self._polyring.degree(self.poly) + 1):
            c = self._polyring.coeff(self.poly, k)
            coeffs.append(parent.base_ring(f(c)) if not R.is_zero(c) else parent.base_ring.zero())
        return LaurentPolyWrap(parent, parent.polyring.from_coeffs(coeffs), self.mindeg)

    def __str__(self) -> str:
        R = self.base_ring
        var = self.parent.var
        terms = []
        for k in reversed(self.terms_degrees()):
            c = self.coeff(k)
            if R.is_zero(c):
                continue
            if k == 0:
                terms.append(str(c))
                continue
            mon = var if k == 1 else f"{var}^{k}"
            terms.append(mon if R.is_one(c) else f"{c}*{mon}")
        return " + ".join(terms) if terms else "0"

    def __repr__(self) -> str:
        return f"LaurentPolyWrap({self})"


def LaurentPolynomialRing(R: Ring, s: str = DEFAULT_VAR):
    """Return ``(S, x)``: the ring S = R[x, 1/x] and its generator x."""
    P = PolynomialRing(R, s)
    S = LaurentPolyWrapRing(P)
    return S, S.gen()
