"""
QR-based eigenvalue computation.

qr_eigen_estimate_fit performs a single step A' = R·Q and reads the
estimate off the diagonal of A'. It is exact only for inputs that are
already (nearly) triangular; qr_eigen_fit repeats the step until the
sub-diagonal vanishes.
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import grid_product, identity_grid
from pymatrix.core.protocols import NumericOps
from pymatrix.decomposition._qr import QR_METHODS
from pymatrix.eigen._common import EigenParams
from pymatrix.eigen._jacobi import normalized_columns
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def sub_diagonal_norm(a: list[list], ops: NumericOps):
    acc = ops.zero()
    for i in range(1, len(a)):
        for j in range(i):
            acc = ops.add(acc, ops.multiply(a[i][j], a[i][j]))
    return ops.sqrt(acc)


def qr_eigen_estimate_fit(A: Matrix, method: str) -> EigenParams:
    ops = working_ops(A.kind)
    factors = QR_METHODS[method](A.working_copy())
    Q = factors.Q._grid()
    RQ = grid_product(factors.R._grid(), Q, ops)
    n = A.rows
    return EigenParams(
        values=tuple(RQ[i][i] for i in range(n)),
        vectors=Matrix._from_grid(normalized_columns(Q, ops), ops.kind),
        iterations=1,
        converged=True,
        final_off_norm=ops.to_float(sub_diagonal_norm(RQ, ops)),
    )


def qr_eigen_fit(A: Matrix, method: str, tol: float, max_iterations: int) -> EigenParams:
    """
    Unshifted QR iteration A_{k+1} = R_k·Q_k with accumulated Q.

    For symmetric input the accumulated Q converges to the eigenvectors;
    for general input with real eigenvalues A_k converges to upper
    triangular (Schur) form.
    """
    ops = working_ops(A.kind)
    qr_fn = QR_METHODS[method]
    n = A.rows
    current = A.working_copy()
    a = current._grid()
    Q_acc = identity_grid(n, ops)
    limit = ops.coerce(tol)

    iterations = 0
    off = sub_diagonal_norm(a, ops)
    while ops.compare(off, limit) >= 0 and iterations < max_iterations:
        factors = qr_fn(current)
        Q = factors.Q._grid()
        a = grid_product(factors.R._grid(), Q, ops)
        Q_acc = grid_product(Q_acc, Q, ops)
        current = Matrix._from_grid(a, ops.kind)
        iterations += 1
        off = sub_diagonal_norm(a, ops)

    return EigenParams(
        values=tuple(a[i][i] for i in range(n)),
        vectors=Matrix._from_grid(normalized_columns(Q_acc, ops), ops.kind),
        iterations=iterations,
        converged=ops.is_zero(off) or ops.compare(off, limit) < 0,
        final_off_norm=ops.to_float(off),
    )
