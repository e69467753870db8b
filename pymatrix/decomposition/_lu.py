"""
LU factorization without and with partial pivoting.

Both run on nested-list grids in the working kind of the input.
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import zeros_grid
from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.decomposition._common import LUParams
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def lu_factor(A: Matrix) -> LUParams:
    """
    Doolittle LU: L unit lower triangular, U upper triangular, A = L·U.

    U[i][k] = A[i][k] - sum_{j<i} L[i][j]·U[j][k]
    L[k][i] = (A[k][i] - sum_{j<i} L[k][j]·U[j][i]) / U[i][i]

    Raises:
        SingularMatrixError: If a zero pivot U[i][i] must be divided by.
            A zero in the last pivot is never a divisor and is returned.
    """
    ops = working_ops(A.kind)
    a = A._grid_as(ops.kind)
    n = A.rows
    L = zeros_grid(n, n, ops)
    U = zeros_grid(n, n, ops)

    for i in range(n):
        for k in range(i, n):
            acc = ops.zero()
            for j in range(i):
                acc = ops.add(acc, ops.multiply(L[i][j], U[j][k]))
            U[i][k] = ops.subtract(a[i][k], acc)

        L[i][i] = ops.one()
        for k in range(i + 1, n):
            if ops.is_zero(U[i][i]):
                raise SingularMatrixError(
                    f"LU: zero pivot at position {i}; use LUP (partial pivoting) instead",
                    matrix_name="A",
                    pivot_index=i,
                )
            acc = ops.zero()
            for j in range(i):
                acc = ops.add(acc, ops.multiply(L[k][j], U[j][i]))
            L[k][i] = ops.divide(ops.subtract(a[k][i], acc), U[i][i])

    return LUParams(
        L=Matrix._from_grid(L, ops.kind),
        U=Matrix._from_grid(U, ops.kind),
        P=None,
        permutation=tuple(range(n)),
        sign=1,
        n_swaps=0,
        pivoted=False,
    )


def lup_factor(A: Matrix) -> LUParams:
    """
    LU with partial pivoting, A = P·L·U.

    At step k the row with the largest magnitude in column k (at or below
    row k) is swapped into place in U and in the computed columns of L.
    A column with no non-zero candidate is skipped, so the factorization
    exists for every square input; a singular A shows up as a zero on the
    diagonal of U.
    """
    ops = working_ops(A.kind)
    U = A._grid_as(ops.kind)
    n = A.rows
    L = zeros_grid(n, n, ops)
    perm = list(range(n))
    n_swaps = 0

    for k in range(n):
        pivot_row = k
        pivot_abs = ops.abs(U[k][k])
        for i in range(k + 1, n):
            candidate = ops.abs(U[i][k])
            if ops.compare(candidate, pivot_abs) > 0:
                pivot_row = i
                pivot_abs = candidate

        if pivot_row != k:
            U[k], U[pivot_row] = U[pivot_row], U[k]
            perm[k], perm[pivot_row] = perm[pivot_row], perm[k]
            for j in range(k):
                L[k][j], L[pivot_row][j] = L[pivot_row][j], L[k][j]
            n_swaps += 1

        L[k][k] = ops.one()
        if ops.is_zero(U[k][k]):
            continue

        for i in range(k + 1, n):
            factor = ops.divide(U[i][k], U[k][k])
            L[i][k] = factor
            U[i][k] = ops.zero()
            for j in range(k + 1, n):
                U[i][j] = ops.subtract(U[i][j], ops.multiply(factor, U[k][j]))

    # Row i of L·U is row perm[i] of A, so P has its one at (perm[i], i).
    P = zeros_grid(n, n, ops)
    for i, p in enumerate(perm):
        P[p][i] = ops.one()

    return LUParams(
        L=Matrix._from_grid(L, ops.kind),
        U=Matrix._from_grid(U, ops.kind),
        P=Matrix._from_grid(P, ops.kind),
        permutation=tuple(perm),
        sign=-1 if n_swaps % 2 else 1,
        n_swaps=n_swaps,
        pivoted=True,
    )
