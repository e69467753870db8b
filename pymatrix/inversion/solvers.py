"""
Public API for determinants, inverses and linear solves.

    determinant(A, method='cofactor')          cofactor / lu / householder /
                                               givens / gram_schmidt
    minor(A, r, c), cofactor(A, r, c)
    cofactor_matrix(A) (alias comatrix), adjugate(A)
    inverse(A, method='gauss_jordan')          comatrix / gauss_jordan / lu / lup
    forward_substitution(L, b), backward_substitution(U, b)
    solve(A, b, method='lup')
    rank(A), condition_number(A), pseudoinverse(A)
    matrix_power(A, k), ridge_regression(X, b, lam)

Algorithms that divide return values in the working kind of the input
(Float64 for integer kinds); cofactor-based results stay in the source kind.
"""

from __future__ import annotations

import math

from pymatrix.core.compute.linalg import grid_product, identity_grid, transpose_grid
from pymatrix.core.compute.tolerances import RANK_TOLERANCE
from pymatrix.core.exceptions import DimensionError, SingularMatrixError, ValidationError
from pymatrix.core.protocols import NumericOps
from pymatrix.core.validation import (
    check_index,
    check_matrix,
    check_square,
    normalize_method,
)
from pymatrix.decomposition._lu import lu_factor, lup_factor
from pymatrix.decomposition._qr import QR_METHODS
from pymatrix.decomposition.solvers import QR_ALIASES, cholesky
from pymatrix.inversion._cofactor import (
    cofactor_determinant,
    cofactor_grid,
    cofactor_value,
    exact_ops,
    narrow,
)
from pymatrix.inversion._inverse import comatrix_inverse, gauss_jordan_inverse, lu_inverse
from pymatrix.inversion._substitution import backward_grid, forward_grid
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix

DETERMINANT_ALIASES = {
    **QR_ALIASES,
    'cofactor': 'cofactor',
    'recursive': 'cofactor',
    'lu': 'lu',
    'lup': 'lu',
}

INVERSE_ALIASES = {
    'comatrix': 'comatrix',
    'adjugate': 'comatrix',
    'cofactor': 'comatrix',
    'gauss_jordan': 'gauss_jordan',
    'gaussjordan': 'gauss_jordan',
    'lu': 'lu',
    'lup': 'lup',
}

SOLVE_ALIASES = {
    **QR_ALIASES,
    'lu': 'lu',
    'lup': 'lup',
    'cholesky': 'cholesky',
}


# ═══════════════════════════════════════════════════════════════════════
# Determinant and cofactors
# ═══════════════════════════════════════════════════════════════════════


def determinant(A: Matrix, method: str = 'cofactor'):
    """
    Determinant of a square matrix.

    Args:
        A: Square matrix
        method: 'cofactor' (recursive first-row expansion, exact in the
            source kind, factorial cost), 'lu' (sign(P)·prod diag(U)) or a
            QR name (det(Q)·prod diag(R))

    Returns:
        Scalar in the source kind for 'cofactor', in the working kind
        otherwise

    Raises:
        DimensionError: If A is not square
        NumericalError: If a cofactor determinant overflows an integer kind
        UnsupportedOperationError: If the method is unknown
    """
    check_matrix(A, "A")
    check_square(A, "A")
    method = normalize_method(method, DETERMINANT_ALIASES, "determinant")

    if method == 'cofactor':
        det = cofactor_determinant(A._grid(), exact_ops(A.ops))
        return narrow(det, A.ops, "determinant")

    ops = working_ops(A.kind)
    if method == 'lu':
        params = lup_factor(A)
        det = ops.one()
        for d in params.U.diagonal():
            det = ops.multiply(det, d)
        return ops.negate(det) if params.sign < 0 else det

    factors = QR_METHODS[method](A)
    det = ops.one()
    for d in factors.R.diagonal():
        det = ops.multiply(det, d)
    if _orthogonal_sign(factors.Q) < 0:
        det = ops.negate(det)
    return det


def _orthogonal_sign(Q: Matrix) -> int:
    """Sign of det(Q) for an orthogonal Q, read off its LUP factorization."""
    params = lup_factor(Q)
    ops = params.U.ops
    sign = params.sign
    for d in params.U.diagonal():
        s = ops.sign(d)
        if s == 0:
            return 1
        sign *= s
    return sign


def minor(A: Matrix, row: int, col: int) -> Matrix:
    """A with row `row` and column `col` removed."""
    check_matrix(A, "A")
    return A.minor(row, col)


def cofactor(A: Matrix, row: int, col: int):
    """(-1)^(row+col)·det(minor(A, row, col)), in the source kind."""
    check_matrix(A, "A")
    check_square(A, "A")
    check_index(row, A.rows, "row")
    check_index(col, A.cols, "col")
    value = cofactor_value(A._grid(), row, col, exact_ops(A.ops))
    return narrow(value, A.ops, "cofactor")


def cofactor_matrix(A: Matrix) -> Matrix:
    """Matrix of cofactors (comatrix). A 1x1 matrix gives [[1]]."""
    check_matrix(A, "A")
    check_square(A, "A")
    grid = cofactor_grid(A._grid(), exact_ops(A.ops))
    return Matrix._from_grid(
        [[narrow(v, A.ops, "cofactor_matrix") for v in r] for r in grid], A.kind
    )


comatrix = cofactor_matrix


def adjugate(A: Matrix) -> Matrix:
    """Transpose of the cofactor matrix."""
    return cofactor_matrix(A).transpose()


# ═══════════════════════════════════════════════════════════════════════
# Inverse
# ═══════════════════════════════════════════════════════════════════════


def inverse(A: Matrix, method: str = 'gauss_jordan') -> Matrix:
    """
    Inverse of a square matrix.

    Args:
        A: Square, non-singular matrix
        method: 'gauss_jordan' (partial pivoting), 'comatrix' (adjugate
            over determinant), 'lu' or 'lup' (factor, then solve against
            each unit vector)

    Returns:
        Inverse in the working kind of A

    Raises:
        DimensionError: If A is not square
        SingularMatrixError: If A is singular (or, for 'lu', needs pivoting)
        UnsupportedOperationError: If the method is unknown
    """
    check_matrix(A, "A")
    check_square(A, "A")
    method = normalize_method(method, INVERSE_ALIASES, "inverse")
    if method == 'comatrix':
        return comatrix_inverse(A)
    if method == 'gauss_jordan':
        return gauss_jordan_inverse(A)
    return lu_inverse(A, pivoted=(method == 'lup'))


# ═══════════════════════════════════════════════════════════════════════
# Triangular and general solves
# ═══════════════════════════════════════════════════════════════════════


def _rhs_grid(T: Matrix, b: Matrix, name: str, ops: NumericOps) -> list[list]:
    check_matrix(b, name)
    if b.rows != T.rows:
        raise DimensionError(
            f"{name}: expected {T.rows} rows to match the system, got {b.rows}"
        )
    return b._grid_as(ops.kind)


def forward_substitution(L: Matrix, b: Matrix) -> Matrix:
    """
    Solve L·x = b for lower triangular L.

    b may hold several right-hand sides as columns. Both operands are
    converted to the working kind of L.

    Raises:
        SingularMatrixError: If L has a zero on its diagonal
    """
    check_matrix(L, "L")
    check_square(L, "L")
    ops = working_ops(L.kind)
    X = forward_grid(L._grid_as(ops.kind), _rhs_grid(L, b, "b", ops), ops)
    return Matrix._from_grid(X, ops.kind)


def backward_substitution(U: Matrix, b: Matrix) -> Matrix:
    """
    Solve U·x = b for upper triangular U.

    Raises:
        SingularMatrixError: If U has a zero on its diagonal
    """
    check_matrix(U, "U")
    check_square(U, "U")
    ops = working_ops(U.kind)
    X = backward_grid(U._grid_as(ops.kind), _rhs_grid(U, b, "b", ops), ops)
    return Matrix._from_grid(X, ops.kind)


def solve(A: Matrix, b: Matrix, method: str = 'lup') -> Matrix:
    """
    Solve A·x = b for square A.

    Args:
        A: Square, non-singular matrix
        b: Right-hand side(s), A.rows x k
        method: 'lup', 'lu', 'cholesky' or a QR name

    Returns:
        Solution x (A.rows x k) in the working kind of A

    Raises:
        SingularMatrixError: If a zero pivot is met
        NotPositiveDefiniteError: For 'cholesky' on a non-SPD matrix
    """
    check_matrix(A, "A")
    check_square(A, "A")
    method = normalize_method(method, SOLVE_ALIASES, "solve")
    ops = working_ops(A.kind)
    B = _rhs_grid(A, b, "b", ops)

    if method in ('lu', 'lup'):
        params = lup_factor(A) if method == 'lup' else lu_factor(A)
        rhs = [B[p] for p in params.permutation]
        Y = forward_grid(params.L._grid(), rhs, ops, unit_diagonal=True)
        X = backward_grid(params.U._grid(), Y, ops)
    elif method == 'cholesky':
        L = cholesky(A).L._grid()
        Y = forward_grid(L, B, ops)
        X = backward_grid(transpose_grid(L), Y, ops)
    else:
        factors = QR_METHODS[method](A)
        QtB = grid_product(transpose_grid(factors.Q._grid()), B, ops)
        X = backward_grid(factors.R._grid(), QtB, ops)

    return Matrix._from_grid(X, ops.kind)


# ═══════════════════════════════════════════════════════════════════════
# Singular-value based quantities
# ═══════════════════════════════════════════════════════════════════════


def _square_padded(A: Matrix) -> Matrix:
    """A embedded in the top-left of a zero square matrix (same singular values plus zeros)."""
    if A.is_square():
        return A
    n = max(A.rows, A.cols)
    padded = A.copy()
    padded.resize(n, n)
    return padded


def rank(A: Matrix, tol: float = RANK_TOLERANCE, method: str = 'householder') -> int:
    """
    Numerical rank: the number of singular values above tol.

    Non-square inputs are zero-padded to square first, which adds only
    zero singular values.
    """
    from pymatrix.eigen.solvers import svd

    check_matrix(A, "A")
    values = svd(_square_padded(A), method=method).singular_values
    return sum(1 for s in values if float(s) > tol)


def condition_number(A: Matrix, tol: float = RANK_TOLERANCE, method: str = 'householder') -> float:
    """
    Ratio of the largest to the smallest of the min(rows, cols) singular
    values.

    Returns inf when the smallest is at or below tol, i.e. exactly when
    rank(A, tol) < min(rows, cols).
    """
    from pymatrix.eigen.solvers import svd

    check_matrix(A, "A")
    values = svd(_square_padded(A), method=method).singular_values
    k = min(A.rows, A.cols)
    largest = float(values[0])
    smallest = float(values[k - 1])
    if smallest <= tol:
        return math.inf
    return largest / smallest


def pseudoinverse(A: Matrix, tol: float = RANK_TOLERANCE, method: str = 'householder') -> Matrix:
    """
    Moore-Penrose pseudoinverse V·Σ⁺·Uᵀ.

    Singular values at or below tol are treated as zero. The result is
    cols x rows, in the working kind of A.
    """
    from pymatrix.eigen.solvers import svd

    check_matrix(A, "A")
    sol = svd(_square_padded(A), method=method)
    ops = sol.U.ops
    n = sol.U.rows
    U = sol.U._grid()
    V = sol.V._grid()
    inv_s = [
        ops.divide(ops.one(), s) if float(s) > tol else ops.zero()
        for s in sol.singular_values
    ]
    scaled_V = [[ops.multiply(V[i][k], inv_s[k]) for k in range(n)] for i in range(n)]
    full = grid_product(scaled_V, transpose_grid(U), ops)
    return Matrix._from_grid([r[:A.rows] for r in full[:A.cols]], ops.kind)


# ═══════════════════════════════════════════════════════════════════════
# Derived operations
# ═══════════════════════════════════════════════════════════════════════


def matrix_power(A: Matrix, k: int) -> Matrix:
    """
    A raised to an integer power by repeated squaring.

    k = 0 gives the identity in A's kind; k < 0 inverts A first (result in
    the working kind).

    Raises:
        DimensionError: If A is not square
        SingularMatrixError: If k < 0 and A is singular
    """
    check_matrix(A, "A")
    check_square(A, "A")
    if isinstance(k, bool) or not isinstance(k, int):
        raise ValidationError(f"k: must be an int, got {type(k).__name__}")
    base = inverse(A) if k < 0 else A
    e = -k if k < 0 else k
    result = Matrix._from_grid(identity_grid(A.rows, base.ops), base.kind)
    while e:
        if e & 1:
            result = result._matmul(base)
        e >>= 1
        if e:
            base = base._matmul(base)
    return result


def ridge_regression(X: Matrix, b: Matrix, lam: float) -> Matrix:
    """
    Ridge (Tikhonov) solution of (XᵀX + lam·I)·w = Xᵀb via LU.

    Args:
        X: Design matrix, n x p
        b: Response, n x k
        lam: Non-negative penalty

    Returns:
        Weights w, p x k, in the working kind of X

    Raises:
        DimensionError: If b.rows != X.rows
        SingularMatrixError: If XᵀX + lam·I is singular (lam = 0 with
            rank-deficient X)
    """
    check_matrix(X, "X")
    check_matrix(b, "b")
    if b.rows != X.rows:
        raise DimensionError(f"b: expected {X.rows} rows to match X, got {b.rows}")
    if lam < 0:
        raise ValidationError(f"lam: must be >= 0, got {lam}")

    ops = working_ops(X.kind)
    x = X._grid_as(ops.kind)
    xt = transpose_grid(x)
    gram = grid_product(xt, x, ops)
    penalty = ops.coerce(lam)
    for i in range(X.cols):
        gram[i][i] = ops.add(gram[i][i], penalty)
    rhs = grid_product(xt, b._grid_as(ops.kind), ops)

    try:
        params = lu_factor(Matrix._from_grid(gram, ops.kind))
    except SingularMatrixError as e:
        raise SingularMatrixError(
            f"ridge_regression: XᵀX + lam·I is singular ({e})",
            matrix_name="XᵀX + lam·I",
            pivot_index=e.pivot_index,
        ) from e
    Y = forward_grid(params.L._grid(), rhs, ops, unit_diagonal=True)
    W = backward_grid(params.U._grid(), Y, ops)
    return Matrix._from_grid(W, ops.kind)
