"""
Public API for eigen-decomposition and SVD.

    jacobi_eigen(A) → EigenSolution           symmetric A, Jacobi rotations
    qr_eigen_estimate(A) → EigenSolution      one QR step, A' = R·Q
    qr_eigen(A) → EigenSolution               QR iteration to convergence
    eig(A, method='jacobi') → EigenSolution   dispatch on a method name
    svd(A, method='householder') → SVDSolution
    singular_values(A, method='householder') → tuple

Iterations that reach their cap do not raise: they emit a RuntimeWarning,
record it in Result.warnings and report converged=False.
"""

from __future__ import annotations

import warnings

from pymatrix.core.compute.precision import machine_epsilon
from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import (
    JACOBI_MAX_ITERATIONS,
    JACOBI_TOLERANCE,
    QR_EIGEN_MAX_ITERATIONS,
    QR_EIGEN_TOLERANCE,
    SVD_MAX_SWEEPS,
    SVD_TOLERANCE,
    select_tolerance,
)
from pymatrix.core.exceptions import ValidationError
from pymatrix.core.result import Result
from pymatrix.core.validation import check_matrix, check_positive, check_square, normalize_method
from pymatrix.decomposition.solvers import QR_ALIASES
from pymatrix.eigen._jacobi import jacobi_eigen_fit
from pymatrix.eigen._qr_iteration import qr_eigen_estimate_fit, qr_eigen_fit
from pymatrix.eigen._svd import svd_fit
from pymatrix.eigen.solution import EigenSolution, SVDSolution
from pymatrix.kinds.ops import working_kind
from pymatrix.matrix.store import Matrix

EIG_ALIASES = {
    'jacobi': 'jacobi',
    'qr': 'qr',
    'qr_iteration': 'qr',
    'qr_estimate': 'qr_estimate',
}


def _attainable(A: Matrix, tol: float) -> float:
    """
    Raise an absolute tolerance to what the kind can resolve.

    Rounding leaves off-diagonal residue of order n·eps·‖A‖_F, which
    single precision cannot push below 1e-10.
    """
    floor = A.rows * machine_epsilon(A.kind) * float(A.norm('fro'))
    return max(tol, floor)


def _check_symmetric(A: Matrix, name: str) -> None:
    tier = select_tolerance(A.kind)
    largest = max(abs(float(v)) for v in A.to_flat())
    if not A.is_symmetric(tol=tier.atol + tier.rtol * largest):
        raise ValidationError(f"{name}: Jacobi eigen-decomposition requires a symmetric matrix")


def _eigen_result(params, info: dict, timer: Timer, backend_name: str, what: str) -> EigenSolution:
    warn_list = []
    if not params.converged:
        msg = (
            f"{what} did not converge after {params.iterations} iterations "
            f"(off-diagonal norm {params.final_off_norm:.3g})"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=3)
        warn_list.append(msg)
    info = {**info, 'converged': params.converged, 'iterations': params.iterations}
    result = Result(
        params=params,
        info=info,
        timing=timer.result(),
        backend_name=backend_name,
        warnings=tuple(warn_list),
    )
    return EigenSolution(_result=result)


def jacobi_eigen(
    A: Matrix,
    *,
    tol: float = JACOBI_TOLERANCE,
    max_iterations: int = JACOBI_MAX_ITERATIONS,
) -> EigenSolution:
    """
    Eigen-decomposition of a symmetric matrix by Jacobi rotations.

    Args:
        A: Square symmetric matrix
        tol: Stop once the off-diagonal Frobenius norm is below this
            (raised to n·eps·‖A‖_F for kinds that cannot resolve it)
        max_iterations: Maximum number of rotations

    Returns:
        EigenSolution; values in diagonal order, unit eigenvector columns

    Raises:
        DimensionError: If A is not square
        ValidationError: If A is not symmetric
    """
    check_matrix(A, "A")
    check_square(A, "A")
    check_positive(max_iterations, "max_iterations")
    _check_symmetric(A, "A")
    effective_tol = _attainable(A, tol)

    with Timer() as timer, timer.phase('rotations'):
        params = jacobi_eigen_fit(A, effective_tol, max_iterations)

    return _eigen_result(
        params,
        {'method': 'jacobi', 'tolerance': effective_tol,
         'working_kind': working_kind(A.kind).value},
        timer,
        'kernel_jacobi',
        "Jacobi eigen-iteration",
    )


def qr_eigen_estimate(A: Matrix, method: str = 'householder') -> EigenSolution:
    """
    Single-step QR eigenvalue estimate.

    Factors A = Q·R once and returns diag(R·Q) with the columns of Q. The
    estimate is exact only when A is already (nearly) upper triangular;
    use qr_eigen() for converged eigenvalues.

    Raises:
        DimensionError: If A is not square
        UnsupportedOperationError: If the QR method is unknown
    """
    check_matrix(A, "A")
    check_square(A, "A")
    method = normalize_method(method, QR_ALIASES, "qr_eigen_estimate")

    with Timer() as timer, timer.phase('qr_step'):
        params = qr_eigen_estimate_fit(A, method)

    return _eigen_result(
        params,
        {'method': 'qr_estimate', 'qr_method': method,
         'working_kind': working_kind(A.kind).value},
        timer,
        f'kernel_{method}_estimate',
        "QR eigen estimate",
    )


def qr_eigen(
    A: Matrix,
    method: str = 'householder',
    *,
    tol: float = QR_EIGEN_TOLERANCE,
    max_iterations: int = QR_EIGEN_MAX_ITERATIONS,
) -> EigenSolution:
    """
    Eigenvalues by unshifted QR iteration.

    Repeats A_{k+1} = R_k·Q_k until the strictly lower triangle has norm
    below tol. Converges for matrices with real eigenvalues of distinct
    magnitude; for symmetric A the vectors are the eigenvectors.

    Raises:
        DimensionError: If A is not square
        UnsupportedOperationError: If the QR method is unknown
    """
    check_matrix(A, "A")
    check_square(A, "A")
    check_positive(max_iterations, "max_iterations")
    method = normalize_method(method, QR_ALIASES, "qr_eigen")
    effective_tol = _attainable(A, tol)

    with Timer() as timer, timer.phase('qr_iteration'):
        params = qr_eigen_fit(A, method, effective_tol, max_iterations)

    return _eigen_result(
        params,
        {'method': 'qr', 'qr_method': method, 'tolerance': effective_tol,
         'working_kind': working_kind(A.kind).value},
        timer,
        f'kernel_{method}_iteration',
        "QR eigen-iteration",
    )


def eig(
    A: Matrix,
    method: str = 'jacobi',
    *,
    qr_method: str = 'householder',
    **kwargs,
) -> EigenSolution:
    """
    Eigen-decomposition dispatch.

    Args:
        A: Square matrix
        method: 'jacobi', 'qr' or 'qr_estimate'
        qr_method: QR strategy for the 'qr' and 'qr_estimate' routines
        **kwargs: Tolerance / iteration settings forwarded to the routine

    Raises:
        UnsupportedOperationError: If the method is unknown
    """
    canonical = normalize_method(method, EIG_ALIASES, "eig")
    if canonical == 'jacobi':
        return jacobi_eigen(A, **kwargs)
    if canonical == 'qr':
        return qr_eigen(A, qr_method, **kwargs)
    return qr_eigen_estimate(A, qr_method)


def svd(
    A: Matrix,
    method: str = 'householder',
    *,
    tol: float = SVD_TOLERANCE,
    max_sweeps: int = SVD_MAX_SWEEPS,
) -> SVDSolution:
    """
    Singular value decomposition by repeated QR.

    Args:
        A: Square matrix of any kind
        method: QR strategy for the sweeps ('householder', 'givens',
            'gram_schmidt')
        tol: Relative tolerance for a block's border against max(|d|, ‖A‖_F)
        max_sweeps: Sweep cap per block

    Returns:
        SVDSolution with U, descending non-negative singular values and Vt

    Raises:
        DimensionError: If A is not square
        UnsupportedOperationError: If the QR method is unknown
    """
    check_matrix(A, "A")
    check_square(A, "A")
    check_positive(max_sweeps, "max_sweeps")
    method = normalize_method(method, QR_ALIASES, "svd")
    effective_tol = max(tol, A.rows * machine_epsilon(A.kind))

    with Timer() as timer, timer.phase('sweeps'):
        params = svd_fit(A, method, effective_tol, max_sweeps)

    warn_list = []
    if not params.converged:
        msg = (
            f"SVD did not converge for blocks {list(params.unconverged_blocks)} "
            f"within {max_sweeps} sweeps each"
        )
        warnings.warn(msg, RuntimeWarning, stacklevel=2)
        warn_list.append(msg)

    result = Result(
        params=params,
        info={
            'method': method,
            'converged': params.converged,
            'sweeps': params.sweeps,
            'tolerance': effective_tol,
            'working_kind': working_kind(A.kind).value,
        },
        timing=timer.result(),
        backend_name=f'kernel_{method}_svd',
        warnings=tuple(warn_list),
    )
    return SVDSolution(_result=result)


def singular_values(A: Matrix, method: str = 'householder') -> tuple:
    """Singular values of A in descending order."""
    return svd(A, method=method).singular_values
