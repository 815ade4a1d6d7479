"""Unit tests for Hermite/row-echelon forms, kernels, culling and reduction."""

from __future__ import annotations

import unittest

import numpy as np
import pytest
import sympy as sp

from ldpc import mod2

from integer_ring import Integers
from normal_forms import (
    cull_matrix,
    hnf,
    hnf_with_transform,
    identity_matrix,
    is_zero_row,
    left_kernel,
    matrix_from_rows,
    reduce_mod_rels,
    reduced_form,
    rref,
    strip_zero_rows,
)
from ring_interface import FiniteField, PolynomialRing, RationalField

ZZ = Integers()
QQ = RationalField()


def _vec(values) -> np.ndarray:
    v = np.empty(len(values), dtype=object)
    for i, c in enumerate(values):
        v[i] = c
    return v


class TestHermiteNormalForm(unittest.TestCase):
    def test_two_by_two(self):
        A = matrix_from_rows(ZZ, [[2, 4], [3, 5]], 2)
        H, U = hnf_with_transform(ZZ, A)
        self.assertEqual(H.tolist(), [[1, 1], [0, 2]])
        self.assertEqual(U.dot(A).tolist(), H.tolist())
        self.assertEqual(abs(sp.Matrix(U.tolist()).det()), 1)

    def test_rank_deficient_rows_go_to_bottom(self):
        A = matrix_from_rows(ZZ, [[0, 2, 4], [0, 3, 6], [0, 0, 0], [1, 1, 1]], 3)
        H = hnf(ZZ, A)
        self.assertEqual(H.tolist(), [[1, 0, -1], [0, 1, 2], [0, 0, 0], [0, 0, 0]])
        self.assertEqual(strip_zero_rows(ZZ, H).shape, (2, 3))
        self.assertTrue(is_zero_row(ZZ, H, 3))

    def test_entries_above_pivots_are_reduced(self):
        A = matrix_from_rows(ZZ, [[1, 7], [0, 3]], 2)
        self.assertEqual(hnf(ZZ, A).tolist(), [[1, 1], [0, 3]])
        A = matrix_from_rows(ZZ, [[-1, 5], [0, -4]], 2)
        self.assertEqual(hnf(ZZ, A).tolist(), [[1, 3], [0, 4]])

    def test_idempotent(self):
        A = matrix_from_rows(ZZ, [[6, 4, 2], [9, 6, 3], [4, 0, 8]], 3)
        H = hnf(ZZ, A)
        self.assertEqual(hnf(ZZ, H).tolist(), H.tolist())

    def test_polynomial_entries(self):
        P = PolynomialRing(QQ, "x")
        x = P.gen()
        A = matrix_from_rows(P, [[x - 1], [x**2 - 1]], 1)
        H = hnf(P, A)
        self.assertEqual(H[0, 0], x - 1)
        self.assertTrue(P.is_zero(H[1, 0]))


def test_rref_matches_sympy() -> None:
    rows = [[1, 2, 3], [2, 4, 7], [3, 6, 10]]
    rank, R = rref(QQ, matrix_from_rows(QQ, rows, 3))
    expected, pivots = sp.Matrix(rows).rref()
    assert rank == len(pivots) == 2
    assert R.tolist() == expected.tolist()


def test_reduced_form_returns_the_reduced_matrix_over_a_field() -> None:
    A = matrix_from_rows(QQ, [[2, 4], [1, 3]], 2)
    R = reduced_form(QQ, A)
    assert R.tolist() == [[1, 0], [0, 1]]
    assert A.tolist() == [[2, 4], [1, 3]]


def test_reduced_form_is_hnf_over_integers() -> None:
    A = matrix_from_rows(ZZ, [[2, 4], [3, 5]], 2)
    assert reduced_form(ZZ, A).tolist() == [[1, 1], [0, 2]]


def test_rref_rank_matches_ldpc_over_gf2() -> None:
    F = FiniteField(2)
    rng = np.random.default_rng(1)
    for _ in range(5):
        bits = rng.integers(0, 2, size=(6, 8), dtype=np.uint8)
        rank, R = rref(F, matrix_from_rows(F, bits.tolist(), 8))
        assert rank == mod2.rank(bits)
        # rows past the rank are zero
        for i in range(rank, 6):
            assert is_zero_row(F, R, i)


@pytest.mark.parametrize(
    "rows, ncols",
    [
        ([[1, 2], [2, 4], [3, 6]], 2),
        ([[2, 0, 1], [0, 3, 1], [2, 3, 2], [4, 6, 4]], 3),
        ([[1, 0], [0, 1]], 2),
    ],
)
def test_left_kernel_annihilates(rows, ncols) -> None:
    A = matrix_from_rows(ZZ, rows, ncols)
    n, K = left_kernel(ZZ, A)
    rank = sp.Matrix(rows).rank()
    assert n == len(rows) - rank
    assert K.shape == (n, len(rows))
    if n:
        assert all(c == 0 for c in K.dot(A).flatten())
        assert sp.Matrix(K.tolist()).rank() == n


def test_left_kernel_over_a_field() -> None:
    F = FiniteField(5)
    A = matrix_from_rows(F, [[1, 2], [2, 4], [0, 1]], 2)
    n, K = left_kernel(F, A)
    assert n == 1
    for j in range(2):
        assert F.is_zero(sum((K[0, i] * A[i, j] for i in range(3)), F.zero()))


def test_cull_matrix_drops_unit_pivots() -> None:
    M = matrix_from_rows(ZZ, [[1, 2, 0], [0, 0, 3]], 3)
    assert cull_matrix(ZZ, M) == ([1, 2], [1], [0])


def test_cull_matrix_over_a_field_drops_every_relation() -> None:
    F = FiniteField(5)
    M = matrix_from_rows(F, [[1, 0, 2], [0, 1, 3]], 3)
    assert cull_matrix(F, M) == ([2], [], [0, 1])


def test_cull_matrix_stops_at_zero_rows() -> None:
    M = matrix_from_rows(ZZ, [[2, 1, 0], [0, 0, 0]], 3)
    assert cull_matrix(ZZ, M) == ([0, 1, 2], [0], [])


def test_reduce_mod_rels() -> None:
    rels = [_vec([2, 1])]
    v = reduce_mod_rels(ZZ, _vec([5, 0]), rels)
    assert v.tolist() == [1, -2]
    # reducing an already reduced vector changes nothing
    assert reduce_mod_rels(ZZ, v, rels).tolist() == [1, -2]

    rels = [_vec([3, 0]), _vec([0, 4])]
    assert reduce_mod_rels(ZZ, _vec([7, -1]), rels).tolist() == [1, 3]


def test_reduce_mod_rels_leaves_input_alone() -> None:
    v = _vec([5, 5])
    reduce_mod_rels(ZZ, v, [_vec([2, 0])])
    assert v.tolist() == [5, 5]


def test_identity_and_row_length_check() -> None:
    assert identity_matrix(ZZ, 2).tolist() == [[1, 0], [0, 1]]
    with pytest.raises(ValueError):
        matrix_from_rows(ZZ, [[1, 2], [3]], 2)


if __name__ == "__main__":
    unittest.main()
