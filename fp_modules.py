"""Finitely presented modules over a ring, their elements and homomorphisms.

A module is described by its base ring, a number of generators and a list of
relation rows; an element is a coordinate row vector (1-D numpy object array)
kept reduced modulo the relations. Elements belong to exactly one module
object and mixing elements of different module objects is an error, even when
the modules look alike.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, List, Sequence

import numpy as np

from algebra_errors import IncompatibleModuleError
from normal_forms import matrix_from_rows, reduce_mod_rels, reduced_form, strip_zero_rows


class FPModuleElem:
    """Element of a finitely presented module."""

    __hash__ = None

    def __init__(self, parent: "FPModule", v: np.ndarray):
        self.parent = parent
        self.v = v

    @property
    def base_ring(self):
        return self.parent.base_ring

    def is_zero(self) -> bool:
        R = self.base_ring
        return all(R.is_zero(c) for c in self.v)

    def _check_parent(self, other: "FPModuleElem") -> None:
        if other.parent is not self.parent:
            raise IncompatibleModuleError("Incompatible module elements")

    def __neg__(self) -> "FPModuleElem":
        return self.parent([-c for c in self.v])

    def __add__(self, other: Any) -> "FPModuleElem":
        if not isinstance(other, FPModuleElem):
            return NotImplemented
        self._check_parent(other)
        return self.parent([a + b for a, b in zip(self.v, other.v)])

    def __sub__(self, other: Any) -> "FPModuleElem":
        if not isinstance(other, FPModuleElem):
            return NotImplemented
        self._check_parent(other)
        return self.parent([a - b for a, b in zip(self.v, other.v)])

    def __mul__(self, c: Any) -> "FPModuleElem":
        if isinstance(c, FPModuleElem):
            return NotImplemented
        c = self.base_ring(c)
        return self.parent([a * c for a in self.v])

    def __rmul__(self, c: Any) -> "FPModuleElem":
        if isinstance(c, FPModuleElem):
            return NotImplemented
        c = self.base_ring(c)
        return self.parent([c * a for a in self.v])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FPModuleElem):
            return NotImplemented
        self._check_parent(other)
        return all(a == b for a, b in zip(self.v, other.v))

    def __repr__(self) -> str:
        return "(" + ", ".join(str(c) for c in self.v) + ")"


class FPModule:
    """Base class: a module given by generators and relation rows."""

    elem_class = FPModuleElem

    def __init__(self, base_ring):
        self.base_ring = base_ring

    def ngens(self) -> int:
        raise NotImplementedError

    def relations(self) -> List[np.ndarray]:
        raise NotImplementedError

    def __call__(self, v: Any) -> FPModuleElem:
        """Build an element from a coordinate vector or a single-row matrix."""
        if isinstance(v, FPModuleElem):
            if v.parent is not self:
                raise IncompatibleModuleError("Element belongs to a different module")
            return v
        if isinstance(v, np.ndarray) and v.ndim == 2:
            if v.shape[0] != 1:
                raise IncompatibleModuleError("Not a vector in module element constructor")
            entries = list(v[0, :])
        else:
            entries = list(v)
        if len(entries) != self.ngens():
            raise IncompatibleModuleError(
                f"Length of vector ({len(entries)}) does not match number of generators ({self.ngens()})"
            )
        R = self.base_ring
        vec = np.empty(len(entries), dtype=object)
        for i, entry in enumerate(entries):
            vec[i] = R(entry)
        vec = reduce_mod_rels(R, vec, self.relations())
        return self.elem_class(self, vec)

    def zero(self) -> FPModuleElem:
        return self([self.base_ring.zero()] * self.ngens())

    def gen(self, i: int) -> FPModuleElem:
        """The ``i``-th generator (0-based)."""
        n = self.ngens()
        if not 0 <= i < n:
            raise IndexError(f"Generator index {i} out of range for {n} generators")
        R = self.base_ring
        return self([R.one() if j == i else R.zero() for j in range(n)])

    def gens(self) -> List[FPModuleElem]:
        return [self.gen(i) for i in range(self.ngens())]


class PresentedModule(FPModule):
    """``R^n`` modulo the row span of a relation matrix.

    The relations are put into reduced normal form (HNF, or RREF over a field)
    with zero rows stripped; generators are not eliminated.
    """

    def __init__(self, base_ring, ngens: int, rels: Iterable[Sequence[Any]] = ()):
        super().__init__(base_ring)
        self._ngens = int(ngens)
        rel_mat = matrix_from_rows(base_ring, rels, self._ngens)
        if rel_mat.shape[0]:
            rel_mat = strip_zero_rows(base_ring, reduced_form(base_ring, rel_mat))
        self.rels = [rel_mat[i, :].copy() for i in range(rel_mat.shape[0])]

    def ngens(self) -> int:
        return self._ngens

    def relations(self) -> List[np.ndarray]:
        return self.rels

    def __repr__(self) -> str:
        return (
            f"Module over {self.base_ring!r} with {self._ngens} generators "
            f"and {len(self.rels)} relations"
        )


class FreeModule(PresentedModule):
    """Free module ``R^n``."""

    def __init__(self, base_ring, rank: int):
        super().__init__(base_ring, rank)

    def rank(self) -> int:
        return self._ngens

    def __repr__(self) -> str:
        return f"Free module of rank {self._ngens} over {self.base_ring!r}"


class ModuleHomomorphism:
    """Map between modules defined by a Python function on elements."""

    def __init__(self, domain: FPModule, codomain: FPModule,
                 image_fn: Callable[[FPModuleElem], FPModuleElem]):
        self.domain = domain
        self.codomain = codomain
        self.image_fn = image_fn

    def __call__(self, x: FPModuleElem) -> FPModuleElem:
        if not isinstance(x, FPModuleElem) or x.parent is not self.domain:
            raise IncompatibleModuleError("Element is not in the domain of this map")
        return self.image_fn(x)

    def __repr__(self) -> str:
        return f"Module homomorphism\n  from: {self.domain!r}\n  to: {self.codomain!r}"
