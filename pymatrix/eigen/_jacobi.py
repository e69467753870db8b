"""
Jacobi eigenvalue iteration for symmetric matrices.

Each step zeroes the largest off-diagonal entry a_pq with the rotation

    tau = (a_qq - a_pp) / (2·a_pq)
    t   = sign(tau) / (|tau| + sqrt(1 + tau²))
    c   = 1 / sqrt(1 + t²),  s = t·c

applied on both sides (A <- Jᵀ·A·J) and accumulated into V (V <- V·J).
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import identity_grid
from pymatrix.core.protocols import NumericOps
from pymatrix.eigen._common import EigenParams
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def off_diagonal_norm(a: list[list], ops: NumericOps):
    acc = ops.zero()
    n = len(a)
    for i in range(n):
        for j in range(n):
            if i != j:
                acc = ops.add(acc, ops.multiply(a[i][j], a[i][j]))
    return ops.sqrt(acc)


def normalized_columns(grid: list[list], ops: NumericOps) -> list[list]:
    """Scale each column to unit Euclidean norm (zero columns are kept)."""
    n_rows = len(grid)
    out = [list(r) for r in grid]
    for j in range(len(grid[0])):
        acc = ops.zero()
        for i in range(n_rows):
            acc = ops.add(acc, ops.multiply(grid[i][j], grid[i][j]))
        norm = ops.sqrt(acc)
        if ops.is_zero(norm):
            continue
        for i in range(n_rows):
            out[i][j] = ops.divide(grid[i][j], norm)
    return out


def jacobi_eigen_fit(A: Matrix, tol: float, max_iterations: int) -> EigenParams:
    """
    Run Jacobi rotations until the off-diagonal Frobenius norm drops
    below tol or max_iterations rotations have been applied.
    """
    ops = working_ops(A.kind)
    a = A._grid_as(ops.kind)
    n = A.rows
    V = identity_grid(n, ops)
    limit = ops.coerce(tol)
    one = ops.one()
    two = ops.from_int(2)

    iterations = 0
    off = off_diagonal_norm(a, ops)
    while ops.compare(off, limit) >= 0 and iterations < max_iterations:
        p, q = 0, 1
        largest = ops.zero()
        for i in range(n):
            for j in range(i + 1, n):
                mag = ops.abs(a[i][j])
                if ops.compare(mag, largest) > 0:
                    p, q, largest = i, j, mag
        if ops.is_zero(largest):
            break

        tau = ops.divide(ops.subtract(a[q][q], a[p][p]), ops.multiply(two, a[p][q]))
        root = ops.sqrt(ops.add(one, ops.multiply(tau, tau)))
        t = ops.divide(one, ops.add(ops.abs(tau), root))
        if ops.sign(tau) < 0:
            t = ops.negate(t)
        c = ops.divide(one, ops.sqrt(ops.add(one, ops.multiply(t, t))))
        s = ops.multiply(t, c)

        for k in range(n):
            akp, akq = a[k][p], a[k][q]
            a[k][p] = ops.subtract(ops.multiply(c, akp), ops.multiply(s, akq))
            a[k][q] = ops.add(ops.multiply(s, akp), ops.multiply(c, akq))
        for k in range(n):
            apk, aqk = a[p][k], a[q][k]
            a[p][k] = ops.subtract(ops.multiply(c, apk), ops.multiply(s, aqk))
            a[q][k] = ops.add(ops.multiply(s, apk), ops.multiply(c, aqk))
        a[p][q] = ops.zero()
        a[q][p] = ops.zero()
        for k in range(n):
            vkp, vkq = V[k][p], V[k][q]
            V[k][p] = ops.subtract(ops.multiply(c, vkp), ops.multiply(s, vkq))
            V[k][q] = ops.add(ops.multiply(s, vkp), ops.multiply(c, vkq))

        iterations += 1
        off = off_diagonal_norm(a, ops)

    return EigenParams(
        values=tuple(a[i][i] for i in range(n)),
        vectors=Matrix._from_grid(normalized_columns(V, ops), ops.kind),
        iterations=iterations,
        converged=ops.is_zero(off) or ops.compare(off, limit) < 0,
        final_off_norm=ops.to_float(off),
    )
