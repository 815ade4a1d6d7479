#!/usr/bin/env python3

"""
Submodules of finitely presented modules.

Algorithm for ``submodule(m, gens)``:
1. Stack the generator coordinates (in m's coordinates) as rows of a matrix
2. Put the matrix into normal form (HNF over a ring, RREF over a field) and
   drop the zero rows; the remaining rows are the new generators
3. Append m's own relation rows and compute the left kernel of the stack:
   its rows, restricted to the generator columns, are the relations among
   the new generators modulo m's relations
4. Put the relations into normal form and cull every unit pivot, which
   removes a redundant generator together with the relation that defines it
5. The embedding sends coordinates x to sum_i x[i] * gens[gen_cols[i]]
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from algebra_errors import IncompatibleModuleError
from fp_modules import FPModule, FPModuleElem, ModuleHomomorphism
from normal_forms import (
    cull_matrix,
    left_kernel,
    reduced_form,
    strip_zero_rows,
    zero_matrix,
)

logger = logging.getLogger(__name__)


class SubmoduleElem(FPModuleElem):
    """Element of a ``Submodule``, in coordinates of its surviving generators."""


class Submodule(FPModule):
    """Submodule of ``m`` produced by ``submodule``.

    Attributes:
        m: the ambient module
        ambient_gens: normalized generating vectors, as elements of ``m``
        rels: relation rows in the coordinates of the surviving generators
        gen_cols: indices into ``ambient_gens`` of the surviving generators
        pivots: columns whose unit pivot removed a generator
        map: the embedding into ``m``
    """

    elem_class = SubmoduleElem

    def __init__(self, m: FPModule, ambient_gens: List[FPModuleElem],
                 rels: List[np.ndarray], gen_cols: List[int], pivots: List[int]):
        super().__init__(m.base_ring)
        self.m = m
        self.ambient_gens = ambient_gens
        self.rels = rels
        self.gen_cols = gen_cols
        self.pivots = pivots
        self.map = None

    def ngens(self) -> int:
        return len(self.gen_cols)

    def relations(self) -> List[np.ndarray]:
        return self.rels

    def supermodule(self) -> FPModule:
        """Return the module that this module is a submodule of."""
        return self.m

    def __repr__(self) -> str:
        kind = "Subspace" if self.base_ring.is_field else "Submodule"
        gens = ", ".join(repr(self.ambient_gens[j]) for j in self.gen_cols)
        return f"{kind} of:\n{self.m!r}\n with generators:\n[{gens}]"


def submodule(m: FPModule, gens: Sequence[FPModuleElem]) -> Tuple[Submodule, ModuleHomomorphism]:
    """Return the submodule of ``m`` generated by ``gens`` and its embedding map.

    Args:
        m: Ambient module (free, presented, or itself a submodule)
        gens: Elements of ``m`` generating the submodule

    Returns:
        Tuple of (N, f) where f: N -> m is the inclusion
    """
    R = m.base_ring
    gens = list(gens)
    for g in gens:
        if not isinstance(g, FPModuleElem) or g.parent is not m:
            raise IncompatibleModuleError("Incompatible module elements")

    # Drop trailing zero generators
    r = len(gens)
    while r > 0 and gens[r - 1].is_zero():
        r -= 1

    if r == 0:
        N = Submodule(m, [], [], [], [])
        f = ModuleHomomorphism(N, m, lambda x: m.zero())
        N.map = f
        logger.debug("[SUB] no nonzero generators, returning the zero submodule")
        return N, f

    # Make generators rows of a matrix
    s = m.ngens()
    mat = zero_matrix(R, r, s)
    for i in range(r):
        for j in range(s):
            mat[i, j] = gens[i].v[j]

    # Reduce matrix (hnf/rref) and remove zero rows
    mat = strip_zero_rows(R, reduced_form(R, mat))
    num = mat.shape[0]

    # Add old relations as rows
    old_rels = m.relations()
    if old_rels:
        mat_with_rels = np.vstack([mat, np.vstack(old_rels)])
    else:
        mat_with_rels = mat

    # Rewrite old relations in terms of generators of new submodule
    num_rels, K = left_kernel(R, mat_with_rels)
    new_rels = K[:, :num].copy()
    new_rels = reduced_form(R, new_rels)

    # Remove rows and columns corresponding to unit pivots
    gen_cols, culled, pivots = cull_matrix(R, new_rels)
    rels = []
    for i in culled:
        row = np.empty(len(gen_cols), dtype=object)
        for j, col in enumerate(gen_cols):
            row[j] = new_rels[i, col]
        rels.append(row)

    logger.debug(
        "[SUB] %d generators -> rank %d, %d kernel relations, %d culled generators, %d relations kept",
        r, num, num_rels, len(pivots), len(rels),
    )

    # Make submodule whose generators are the nonzero rows of mat
    nonzero_gens = [m(mat[i, :]) for i in range(num)]
    N = Submodule(m, nonzero_gens, rels, gen_cols, pivots)

    def image(x: FPModuleElem) -> FPModuleElem:
        result = m.zero()
        for i, col in enumerate(gen_cols):
            result = result + nonzero_gens[col] * x.v[i]
        return result

    f = ModuleHomomorphism(N, m, image)
    N.map = f
    return N, f
