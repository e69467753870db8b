"""
Matrix inverse strategies.

    comatrix_inverse      adjugate / determinant
    gauss_jordan_inverse  elimination on [A | I] with partial pivoting
    lu_inverse            LU or LUP, then one forward/backward solve per
                          unit vector

All return a Matrix in the working kind of A.
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import identity_grid, transpose_grid
from pymatrix.core.exceptions import SingularMatrixError
from pymatrix.decomposition._lu import lu_factor, lup_factor
from pymatrix.inversion._cofactor import cofactor_determinant, cofactor_grid
from pymatrix.inversion._substitution import backward_grid, forward_grid
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def comatrix_inverse(A: Matrix) -> Matrix:
    """
    Inverse as adjugate(A) / det(A).

    The determinant, the adjugate and the division all run in the working
    kind, so integer inputs cannot wrap before dividing.

    Raises:
        SingularMatrixError: If the determinant is zero
    """
    ops = working_ops(A.kind)
    grid = A._grid_as(ops.kind)
    det = cofactor_determinant(grid, ops)
    if ops.is_zero(det):
        raise SingularMatrixError(
            "comatrix inverse: determinant is zero",
            matrix_name="A",
            rank=None,
            expected_rank=A.rows,
        )
    adjugate = transpose_grid(cofactor_grid(grid, ops))
    return Matrix._from_grid(
        [[ops.divide(v, det) for v in r] for r in adjugate], ops.kind
    )


def gauss_jordan_inverse(A: Matrix) -> Matrix:
    """
    Gauss-Jordan elimination on [A | I].

    Each step swaps the largest-magnitude entry of the column (at or below
    the diagonal) into the pivot position, normalizes the pivot row and
    clears the column in every other row.

    Raises:
        SingularMatrixError: If a pivot column has no non-zero entry
    """
    ops = working_ops(A.kind)
    n = A.rows
    a = A._grid_as(ops.kind)
    eye = identity_grid(n, ops)
    aug = [a[i] + eye[i] for i in range(n)]

    for k in range(n):
        pivot_row = k
        pivot_abs = ops.abs(aug[k][k])
        for i in range(k + 1, n):
            candidate = ops.abs(aug[i][k])
            if ops.compare(candidate, pivot_abs) > 0:
                pivot_row = i
                pivot_abs = candidate
        if ops.is_zero(pivot_abs):
            raise SingularMatrixError(
                f"Gauss-Jordan: no non-zero pivot in column {k}",
                matrix_name="A",
                pivot_index=k,
            )
        if pivot_row != k:
            aug[k], aug[pivot_row] = aug[pivot_row], aug[k]

        pivot = aug[k][k]
        aug[k] = [ops.divide(v, pivot) for v in aug[k]]
        for i in range(n):
            if i == k or ops.is_zero(aug[i][k]):
                continue
            factor = aug[i][k]
            aug[i] = [ops.subtract(v, ops.multiply(factor, p)) for v, p in zip(aug[i], aug[k])]

    return Matrix._from_grid([r[n:] for r in aug], ops.kind)


def lu_inverse(A: Matrix, pivoted: bool = False) -> Matrix:
    """
    Inverse column by column: solve L·U·x = e_j (or P·L·U·x = e_j).

    Raises:
        SingularMatrixError: If the factorization or a back substitution
            meets a zero pivot
    """
    params = lup_factor(A) if pivoted else lu_factor(A)
    ops = params.L.ops
    n = A.rows
    L = params.L._grid()
    U = params.U._grid()
    eye = identity_grid(n, ops)
    # P·L·U·x = b  <=>  L·U·x = Pᵀ·b, and (Pᵀ·b)[i] = b[permutation[i]]
    rhs = [eye[p] for p in params.permutation]
    Y = forward_grid(L, rhs, ops, unit_diagonal=True)
    X = backward_grid(U, Y, ops)
    return Matrix._from_grid(X, ops.kind)
