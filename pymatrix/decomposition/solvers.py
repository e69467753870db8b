"""
Public API for matrix decompositions.

    lu(A) → LUSolution                        A = L·U, no pivoting
    lup(A) → LUSolution                       A = P·L·U, partial pivoting
    cholesky(A) → CholeskySolution            A = L·Lᵀ
    qr(A, method='householder') → QRSolution  A = Q·R
    decompose(method, A)                      dispatch on a method name

Each function validates inputs, runs the kernel-level algorithm in the
working kind of A, and wraps the Result in a Solution.
"""

from __future__ import annotations

import warnings

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.result import Result
from pymatrix.core.validation import check_matrix, check_square, normalize_method
from pymatrix.decomposition._cholesky import cholesky_factor
from pymatrix.decomposition._lu import lu_factor, lup_factor
from pymatrix.decomposition._qr import QR_METHODS
from pymatrix.decomposition.solution import CholeskySolution, LUSolution, QRSolution
from pymatrix.kinds.ops import working_kind
from pymatrix.matrix.store import Matrix

QR_ALIASES = {
    'householder': 'householder',
    'givens': 'givens',
    'gram_schmidt': 'gram_schmidt',
    'gramschmidt': 'gram_schmidt',
}

DECOMPOSITION_ALIASES = {
    **QR_ALIASES,
    'lu': 'lu',
    'lup': 'lup',
    'cholesky': 'cholesky',
}


def lu(A: Matrix) -> LUSolution:
    """
    LU factorization without pivoting (Doolittle).

    Args:
        A: Square matrix of any kind

    Returns:
        LUSolution with unit lower triangular L and upper triangular U

    Raises:
        DimensionError: If A is not square
        SingularMatrixError: If a zero pivot has to be divided by; lup()
            succeeds on such inputs
    """
    check_matrix(A, "A")
    check_square(A, "A")

    with Timer() as timer, timer.phase('factorization'):
        params = lu_factor(A)

    result = Result(
        params=params,
        info={'method': 'lu', 'n': A.rows, 'working_kind': working_kind(A.kind).value},
        timing=timer.result(),
        backend_name='kernel_lu',
        warnings=(),
    )
    return LUSolution(_result=result)


def lup(A: Matrix) -> LUSolution:
    """
    LU factorization with partial pivoting, A = P·L·U.

    Succeeds on every square matrix; a singular A leaves a zero on the
    diagonal of U.

    Raises:
        DimensionError: If A is not square
    """
    check_matrix(A, "A")
    check_square(A, "A")

    with Timer() as timer, timer.phase('factorization'):
        params = lup_factor(A)

    result = Result(
        params=params,
        info={
            'method': 'lup',
            'n': A.rows,
            'n_swaps': params.n_swaps,
            'working_kind': working_kind(A.kind).value,
        },
        timing=timer.result(),
        backend_name='kernel_lup',
        warnings=(),
    )
    return LUSolution(_result=result)


def cholesky(A: Matrix) -> CholeskySolution:
    """
    Cholesky factorization of a symmetric positive definite matrix.

    Symmetry is checked within the tolerance tier of A's kind, scaled by
    the largest magnitude in A.

    Raises:
        DimensionError: If A is not square
        ValidationError: If A is not symmetric
        NotPositiveDefiniteError: If A is not positive definite
    """
    check_matrix(A, "A")
    check_square(A, "A")
    tier = select_tolerance(A.kind)
    largest = max(abs(float(v)) for v in A.to_flat())
    if not A.is_symmetric(tol=tier.atol + tier.rtol * largest):
        raise ValidationError("A: Cholesky requires a symmetric matrix")

    with Timer() as timer, timer.phase('factorization'):
        params = cholesky_factor(A)

    result = Result(
        params=params,
        info={'method': 'cholesky', 'n': A.rows, 'working_kind': working_kind(A.kind).value},
        timing=timer.result(),
        backend_name='kernel_cholesky',
        warnings=(),
    )
    return CholeskySolution(_result=result)


def qr(A: Matrix, method: str = 'householder') -> QRSolution:
    """
    QR factorization.

    Args:
        A: Matrix of any shape and kind
        method: 'householder', 'givens' or 'gram_schmidt' (case-insensitive;
            'Gram-Schmidt' and 'gramschmidt' also accepted)

    Returns:
        QRSolution. Householder and Givens give a square Q; Gram-Schmidt
        gives the reduced factorization.

    Raises:
        UnsupportedOperationError: If the method is unknown
    """
    check_matrix(A, "A")
    method = normalize_method(method, QR_ALIASES, "qr")

    with Timer() as timer, timer.phase('factorization'):
        params = QR_METHODS[method](A)

    warn_list = []
    if params.deficient_columns:
        msg = (
            f"Gram-Schmidt: columns {list(params.deficient_columns)} are linearly "
            f"dependent; their Q columns are zero"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
        warn_list.append(msg)

    result = Result(
        params=params,
        info={
            'method': method,
            'rows': A.rows,
            'cols': A.cols,
            'rank_deficient': bool(params.deficient_columns),
            'working_kind': working_kind(A.kind).value,
        },
        timing=timer.result(),
        backend_name=f'kernel_{method}',
        warnings=tuple(warn_list),
    )
    return QRSolution(_result=result)


def decompose(method: str, A: Matrix) -> LUSolution | QRSolution | CholeskySolution:
    """
    Run the decomposition named by method.

    QR names select a QR strategy; 'lu', 'lup' and 'cholesky' select the
    corresponding triangular factorization.

    Raises:
        UnsupportedOperationError: If the method is unknown
    """
    canonical = normalize_method(method, DECOMPOSITION_ALIASES, "decompose")
    if canonical == 'lu':
        return lu(A)
    if canonical == 'lup':
        return lup(A)
    if canonical == 'cholesky':
        return cholesky(A)
    return qr(A, method=canonical)
