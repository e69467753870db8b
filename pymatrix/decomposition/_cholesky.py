"""
Cholesky factorization, A = L·Lᵀ.
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import zeros_grid
from pymatrix.core.exceptions import NotPositiveDefiniteError
from pymatrix.decomposition._common import CholeskyParams
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def cholesky_factor(A: Matrix) -> CholeskyParams:
    """
    Row-by-row Cholesky on a symmetric input.

    Raises:
        NotPositiveDefiniteError: If a diagonal entry of A is not positive,
            or a radicand becomes non-positive during elimination
    """
    ops = working_ops(A.kind)
    a = A._grid_as(ops.kind)
    n = A.rows

    for i in range(n):
        if ops.sign(a[i][i]) <= 0:
            raise NotPositiveDefiniteError(
                f"Cholesky: diagonal entry A[{i}][{i}] = {a[i][i]} is not positive",
                matrix_name="A",
                pivot_index=i,
            )

    L = zeros_grid(n, n, ops)
    for i in range(n):
        for j in range(i + 1):
            acc = ops.zero()
            for k in range(j):
                acc = ops.add(acc, ops.multiply(L[i][k], L[j][k]))
            if i == j:
                radicand = ops.subtract(a[i][i], acc)
                if ops.sign(radicand) <= 0:
                    raise NotPositiveDefiniteError(
                        f"Cholesky: non-positive pivot {radicand} at row {i}",
                        matrix_name="A",
                        pivot_index=i,
                    )
                L[i][i] = ops.sqrt(radicand)
            else:
                L[i][j] = ops.divide(ops.subtract(a[i][j], acc), L[j][j])

    return CholeskyParams(L=Matrix._from_grid(L, ops.kind))
