#!/usr/bin/env python3

"""
Row normal forms and kernels for matrices over Euclidean rings and fields.

Matrices are numpy arrays with ``dtype=object`` holding ring elements; every
entry-level operation goes through the ``Ring`` passed alongside the matrix.

Algorithm (Hermite normal form, row style):
1. Walk the columns left to right, keeping a current pivot row r
2. Merge each lower entry of the column into row r with the unimodular
   2x2 transform built from the extended gcd, which zeroes the lower entry
3. Normalize the pivot by its canonical unit
4. Reduce the entries above the pivot modulo the pivot (Euclidean remainder)

Over a field steps 2-4 collapse to Gauss-Jordan elimination (``rref``).
The left kernel is read off the transform: rows of U whose image in U*A is
zero span {v : v*A = 0}.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)


def zero_matrix(R, nrows: int, ncols: int) -> np.ndarray:
    M = np.empty((nrows, ncols), dtype=object)
    for i in range(nrows):
        for j in range(ncols):
            M[i, j] = R.zero()
    return M


def identity_matrix(R, n: int) -> np.ndarray:
    M = zero_matrix(R, n, n)
    for i in range(n):
        M[i, i] = R.one()
    return M


def matrix_from_rows(R, rows: Iterable[Sequence[Any]], ncols: int) -> np.ndarray:
    """Stack ``rows`` into an object matrix, coercing every entry into ``R``."""
    rows = [list(row) for row in rows]
    M = zero_matrix(R, len(rows), ncols)
    for i, row in enumerate(rows):
        if len(row) != ncols:
            raise ValueError(f"Row {i} has length {len(row)}, expected {ncols}")
        for j, entry in enumerate(row):
            M[i, j] = R(entry)
    return M


def is_zero_row(R, M: np.ndarray, i: int) -> bool:
    return all(R.is_zero(M[i, j]) for j in range(M.shape[1]))


def strip_zero_rows(R, M: np.ndarray) -> np.ndarray:
    """Drop trailing zero rows of an echelon matrix."""
    num = M.shape[0]
    while num > 0 and is_zero_row(R, M, num - 1):
        num -= 1
    return M[:num, :].copy()


def _swap_rows(M: np.ndarray, i: int, j: int) -> None:
    if i != j:
        M[[i, j], :] = M[[j, i], :]


def _scale_row(M: np.ndarray, i: int, c: Any) -> None:
    for col in range(M.shape[1]):
        M[i, col] = c * M[i, col]


def _add_multiple(M: np.ndarray, dst: int, src: int, c: Any) -> None:
    """row[dst] += c * row[src]"""
    for col in range(M.shape[1]):
        M[dst, col] = M[dst, col] + c * M[src, col]


def _combine_rows(M: np.ndarray, r: int, i: int, s: Any, t: Any, u: Any, v: Any) -> None:
    """Replace (row[r], row[i]) by (s*row[r] + t*row[i], u*row[r] + v*row[i])."""
    for col in range(M.shape[1]):
        a, b = M[r, col], M[i, col]
        M[r, col] = s * a + t * b
        M[i, col] = u * a + v * b


def hnf_with_transform(R, A: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(H, U)`` with ``H = U*A`` in Hermite normal form and ``U`` unimodular.

    H is upper echelon, pivots are normalized by ``R.canonical_unit`` and the
    entries above each pivot are Euclidean remainders modulo the pivot. Zero
    rows end up at the bottom.
    """
    H = A.copy()
    nrows, ncols = H.shape
    U = identity_matrix(R, nrows)

    r = 0
    for k in range(ncols):
        if r >= nrows:
            break

        # Eliminate entries below row r in column k.
        for i in range(r + 1, nrows):
            b = H[i, k]
            if R.is_zero(b):
                continue
            a = H[r, k]
            if R.is_zero(a):
                _swap_rows(H, r, i)
                _swap_rows(U, r, i)
                continue
            g, s, t = R.gcdx(a, b)
            u = R.divexact(-b, g)
            v = R.divexact(a, g)
            _combine_rows(H, r, i, s, t, u, v)
            _combine_rows(U, r, i, s, t, u, v)

        pivot = H[r, k]
        if R.is_zero(pivot):
            continue

        unit = R.canonical_unit(pivot)
        if not R.is_one(unit):
            c = R.inv(unit)
            _scale_row(H, r, c)
            _scale_row(U, r, c)
            pivot = H[r, k]

        # Reduce the entries above the pivot.
        for i in range(r):
            q, _ = R.divrem(H[i, k], pivot)
            if not R.is_zero(q):
                _add_multiple(H, i, r, -q)
                _add_multiple(U, i, r, -q)

        r += 1

    logger.debug("[HNF] %dx%d matrix has rank %d", nrows, ncols, r)
    return H, U


def hnf(R, A: np.ndarray) -> np.ndarray:
    return hnf_with_transform(R, A)[0]


def rref(R, A: np.ndarray) -> Tuple[int, np.ndarray]:
    """Reduced row-echelon form over a field. Returns ``(rank, rref)``."""
    M = A.copy()
    nrows, ncols = M.shape

    row = 0
    for col in range(ncols):
        if row == nrows:
            break
        pivot = None
        for r in range(row, nrows):
            if not R.is_zero(M[r, col]):
                pivot = r
                break
        if pivot is None:
            continue
        _swap_rows(M, row, pivot)
        c = R.inv(M[row, col])
        if not R.is_one(c):
            _scale_row(M, row, c)
        for r in range(nrows):
            if r != row and not R.is_zero(M[r, col]):
                _add_multiple(M, r, row, -M[r, col])
        row += 1

    return row, M


def reduced_form(R, A: np.ndarray) -> np.ndarray:
    """RREF over a field, Hermite normal form over any other Euclidean ring."""
    if R.is_field:
        return rref(R, A)[1]
    return hnf(R, A)


def left_kernel(R, A: np.ndarray) -> Tuple[int, np.ndarray]:
    """Return ``(n, K)`` where the ``n`` rows of K form a basis of {v : v*A = 0}."""
    H, U = hnf_with_transform(R, A)
    rank = strip_zero_rows(R, H).shape[0]
    K = U[rank:, :].copy()
    return K.shape[0], K


def cull_matrix(R, M: np.ndarray) -> Tuple[List[int], List[int], List[int]]:
    """Split an echelon relation matrix at its unit pivots.

    A row whose pivot is a unit expresses that column's generator in terms of
    the later ones, so both the row and the column are dropped.

    Returns:
        gen_cols: columns (generators) that survive
        culled: rows (relations) that survive
        pivots: columns of the unit pivots that were eliminated
    """
    nrows, ncols = M.shape
    gen_cols: List[int] = []
    culled: List[int] = []
    pivots: List[int] = []

    i = 0
    for j in range(ncols):
        if i < nrows and not R.is_zero(M[i, j]):
            if R.is_unit(M[i, j]):
                pivots.append(j)
            else:
                gen_cols.append(j)
                culled.append(i)
            i += 1
        else:
            gen_cols.append(j)
    return gen_cols, culled, pivots


def reduce_mod_rels(R, v: np.ndarray, rels: Sequence[np.ndarray]) -> np.ndarray:
    """Reduce the coordinate vector ``v`` modulo echelon relation rows.

    Each relation's pivot entry of ``v`` is replaced by its Euclidean remainder
    and the quotient is carried into the later coordinates. The input is not
    modified.
    """
    v = v.copy()
    i = 0
    for rel in rels:
        while R.is_zero(rel[i]):
            i += 1
        q, v[i] = R.divrem(v[i], rel[i])
        if not R.is_zero(q):
            for j in range(i + 1, len(v)):
                v[j] = v[j] - q * rel[j]
        i += 1
    return v
