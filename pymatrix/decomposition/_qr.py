"""
QR factorization: Householder reflections, Givens rotations and classical
Gram-Schmidt.

All three run on nested-list grids in the working kind of the input and
return A = Q·R with R upper triangular.
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import (
    column,
    dot,
    euclidean_norm,
    grid_product,
    identity_grid,
    zeros_grid,
)
from pymatrix.core.protocols import NumericOps
from pymatrix.decomposition._common import QRParams
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def _reflector(x: list, ops: NumericOps):
    """
    u = x + sign(x0)·‖x‖·e1 (sign(0) taken as +1), or None when x is zero.

    Adding the norm with the sign of x0 avoids cancellation in u[0].
    """
    norm = euclidean_norm(x, ops)
    if ops.is_zero(norm):
        return None
    u = list(x)
    if ops.sign(x[0]) < 0:
        u[0] = ops.subtract(x[0], norm)
    else:
        u[0] = ops.add(x[0], norm)
    return u


def householder_qr(A: Matrix) -> QRParams:
    """
    Householder QR. Q is rows x rows, R is rows x cols.

    Wide and square inputs (rows <= cols) accumulate explicit reflection
    matrices H = I - 2·v·vᵀ with v = u/‖u‖. Tall inputs (rows > cols) apply
    each reflector u directly with beta = 2/(uᵀu), which never forms the
    rows x rows matrices.
    """
    ops = working_ops(A.kind)
    R = A._grid_as(ops.kind)
    m, n = A.rows, A.cols
    Q = identity_grid(m, ops)
    two = ops.from_int(2)

    for k in range(min(m - 1, n)):
        u = _reflector(column(R, k, k), ops)
        if u is None:
            continue

        if m <= n:
            norm_u = euclidean_norm(u, ops)
            v = [ops.divide(x, norm_u) for x in u]
            H = identity_grid(m, ops)
            for i in range(k, m):
                for j in range(k, m):
                    H[i][j] = ops.subtract(
                        H[i][j], ops.multiply(two, ops.multiply(v[i - k], v[j - k]))
                    )
            R = grid_product(H, R, ops)
            Q = grid_product(Q, H, ops)
        else:
            beta = ops.divide(two, dot(u, u, ops))
            for j in range(k, n):
                s = ops.zero()
                for i in range(k, m):
                    s = ops.add(s, ops.multiply(u[i - k], R[i][j]))
                s = ops.multiply(beta, s)
                for i in range(k, m):
                    R[i][j] = ops.subtract(R[i][j], ops.multiply(s, u[i - k]))
            for i in range(m):
                s = ops.zero()
                for j in range(k, m):
                    s = ops.add(s, ops.multiply(Q[i][j], u[j - k]))
                s = ops.multiply(beta, s)
                for j in range(k, m):
                    Q[i][j] = ops.subtract(Q[i][j], ops.multiply(s, u[j - k]))

        for i in range(k + 1, m):
            R[i][k] = ops.zero()

    return QRParams(
        Q=Matrix._from_grid(Q, ops.kind),
        R=Matrix._from_grid(R, ops.kind),
        method='householder',
        deficient_columns=(),
    )


def givens_qr(A: Matrix) -> QRParams:
    """
    Givens QR. Q is rows x rows, R is rows x cols.

    Each column is cleared bottom-up: the rotation on rows (i-1, i) with
    c = a/r, s = b/r, r = sqrt(a² + b²) zeroes R[i][j]. Entries that are
    already zero are skipped.
    """
    ops = working_ops(A.kind)
    R = A._grid_as(ops.kind)
    m, n = A.rows, A.cols
    Q = identity_grid(m, ops)

    for j in range(min(n, m - 1)):
        for i in range(m - 1, j, -1):
            b = R[i][j]
            if ops.is_zero(b):
                continue
            a = R[i - 1][j]
            r = ops.sqrt(ops.add(ops.multiply(a, a), ops.multiply(b, b)))
            c = ops.divide(a, r)
            s = ops.divide(b, r)

            upper, lower = R[i - 1], R[i]
            for k in range(j, n):
                x, y = upper[k], lower[k]
                upper[k] = ops.add(ops.multiply(c, x), ops.multiply(s, y))
                lower[k] = ops.subtract(ops.multiply(c, y), ops.multiply(s, x))
            lower[j] = ops.zero()

            for row in Q:
                x, y = row[i - 1], row[i]
                row[i - 1] = ops.add(ops.multiply(c, x), ops.multiply(s, y))
                row[i] = ops.subtract(ops.multiply(c, y), ops.multiply(s, x))

    return QRParams(
        Q=Matrix._from_grid(Q, ops.kind),
        R=Matrix._from_grid(R, ops.kind),
        method='givens',
        deficient_columns=(),
    )


def gram_schmidt_qr(A: Matrix) -> QRParams:
    """
    Classical Gram-Schmidt. Q is rows x cols, R is cols x cols.

    A column whose residual norm is at most eps·max(rows, cols)·(largest
    column norm of A) is linearly dependent on the previous ones: its Q
    column and its R diagonal are set to zero instead of dividing.
    """
    ops = working_ops(A.kind)
    a = A._grid_as(ops.kind)
    m, n = A.rows, A.cols
    Q = zeros_grid(m, n, ops)
    R = zeros_grid(n, n, ops)

    scale = ops.zero()
    for j in range(n):
        norm = euclidean_norm(column(a, j), ops)
        if ops.compare(norm, scale) > 0:
            scale = norm
    threshold = ops.multiply(ops.multiply(ops.epsilon(), ops.from_int(max(m, n))), scale)

    deficient = []
    for j in range(n):
        aj = column(a, j)
        v = list(aj)
        for i in range(j):
            qi = column(Q, i)
            rij = dot(qi, aj, ops)
            R[i][j] = rij
            v = [ops.subtract(vk, ops.multiply(rij, qk)) for vk, qk in zip(v, qi)]

        norm = euclidean_norm(v, ops)
        if ops.compare(norm, threshold) <= 0:
            deficient.append(j)
            continue
        R[j][j] = norm
        for k in range(m):
            Q[k][j] = ops.divide(v[k], norm)

    return QRParams(
        Q=Matrix._from_grid(Q, ops.kind),
        R=Matrix._from_grid(R, ops.kind),
        method='gram_schmidt',
        deficient_columns=tuple(deficient),
    )


def complete_columns(Q: list[list], columns, ops: NumericOps) -> None:
    """
    Replace the listed zero columns of Q, in place, by unit vectors
    orthogonal to every other column.

    Each replacement is the standard basis vector with the largest residual
    after projecting out the other columns (two passes), then normalized.
    """
    m, n = len(Q), len(Q[0])
    for j in columns:
        basis = [column(Q, k) for k in range(n) if k != j]
        best, best_norm = None, ops.zero()
        for t in range(m):
            v = [ops.one() if r == t else ops.zero() for r in range(m)]
            for _ in range(2):
                for q in basis:
                    c = dot(q, v, ops)
                    v = [ops.subtract(a, ops.multiply(c, b)) for a, b in zip(v, q)]
            norm = euclidean_norm(v, ops)
            if ops.compare(norm, best_norm) > 0:
                best, best_norm = v, norm
        for r in range(m):
            Q[r][j] = ops.divide(best[r], best_norm)


QR_METHODS = {
    'householder': householder_qr,
    'givens': givens_qr,
    'gram_schmidt': gram_schmidt_qr,
}
