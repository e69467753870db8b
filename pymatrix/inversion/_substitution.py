"""
Triangular solves on grids, one right-hand-side column at a time.
"""

from __future__ import annotations

from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.core.protocols import NumericOps


def forward_grid(L: list[list], B: list[list], ops: NumericOps, unit_diagonal: bool = False) -> list[list]:
    """
    Solve L·X = B for lower triangular L.

    Raises:
        SingularMatrixError: If a diagonal entry of L is zero
    """
    n = len(L)
    k = len(B[0])
    X = [[ops.zero()] * k for _ in range(n)]
    for c in range(k):
        for i in range(n):
            acc = B[i][c]
            for j in range(i):
                acc = ops.subtract(acc, ops.multiply(L[i][j], X[j][c]))
            if unit_diagonal:
                X[i][c] = acc
                continue
            if ops.is_zero(L[i][i]):
                raise SingularMatrixError(
                    f"forward substitution: zero diagonal at row {i}",
                    matrix_name="L",
                    pivot_index=i,
                )
            X[i][c] = ops.divide(acc, L[i][i])
    return X


def backward_grid(U: list[list], B: list[list], ops: NumericOps) -> list[list]:
    """
    Solve U·X = B for upper triangular U.

    Raises:
        SingularMatrixError: If a diagonal entry of U is zero
    """
    n = len(U)
    k = len(B[0])
    X = [[ops.zero()] * k for _ in range(n)]
    for c in range(k):
        for i in range(n - 1, -1, -1):
            acc = B[i][c]
            for j in range(i + 1, n):
                acc = ops.subtract(acc, ops.multiply(U[i][j], X[j][c]))
            if ops.is_zero(U[i][i]):
                raise SingularMatrixError(
                    f"backward substitution: zero diagonal at row {i}",
                    matrix_name="U",
                    pivot_index=i,
                )
            X[i][c] = ops.divide(acc, U[i][i])
    return X
