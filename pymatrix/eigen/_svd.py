"""
Singular value decomposition by repeated QR on shrinking trailing blocks.

For block i (rows/cols i..n-1 of the working matrix B) one sweep is

    block = Q1·R1,   R1ᵀ = Q2·R2,   block <- R2ᵀ = Q1ᵀ·block·Q2
    U[:, i:] <- U[:, i:]·Q1,   V[:, i:] <- V[:, i:]·Q2

so A = U·B·Vᵀ holds throughout. Sweeps on block i stop once its first row
and first column (off the diagonal) are negligible; those entries are
then cleared and the next, smaller block is processed.
"""

from __future__ import annotations

from functools import cmp_to_key

from pymatrix.core.compute.linalg import grid_product, transpose_grid
from pymatrix.core.protocols import NumericOps
from pymatrix.decomposition._qr import QR_METHODS, complete_columns
from pymatrix.eigen._common import SVDParams
from pymatrix.kinds.ops import working_ops
from pymatrix.matrix.store import Matrix


def _border_norm(B: list[list], i: int, ops: NumericOps):
    acc = ops.zero()
    for j in range(i + 1, len(B)):
        acc = ops.add(acc, ops.multiply(B[i][j], B[i][j]))
        acc = ops.add(acc, ops.multiply(B[j][i], B[j][i]))
    return ops.sqrt(acc)


def _block(grid: list[list], i: int) -> list[list]:
    return [r[i:] for r in grid[i:]]


def _right_update(M: list[list], i: int, Q: list[list], ops: NumericOps) -> None:
    """M[:, i:] <- M[:, i:]·Q in place."""
    tail = [r[i:] for r in M]
    updated = grid_product(tail, Q, ops)
    for r, new in zip(M, updated):
        r[i:] = new


def _orthogonal_qr(qr_fn, block: list[list], ops: NumericOps) -> tuple[list[list], list[list]]:
    """
    QR of a square block with an orthogonal Q even when the block is singular.

    Gram-Schmidt leaves zero columns in Q for dependent columns. Those are
    completed to an orthonormal basis and R is recomputed as Qᵀ·block,
    with the entries below the diagonal cleared.
    """
    factors = qr_fn(Matrix._from_grid(block, ops.kind))
    Q = factors.Q._grid()
    if not factors.deficient_columns:
        return Q, factors.R._grid()
    complete_columns(Q, factors.deficient_columns, ops)
    R = grid_product(transpose_grid(Q), block, ops)
    for j in range(1, len(R)):
        for k in range(j):
            R[j][k] = ops.zero()
    return Q, R


def svd_fit(A: Matrix, method: str, tol: float, max_sweeps: int) -> SVDParams:
    ops = working_ops(A.kind)
    qr_fn = QR_METHODS[method]
    n = A.rows
    B = A._grid_as(ops.kind)
    U = [[ops.one() if r == c else ops.zero() for c in range(n)] for r in range(n)]
    V = [list(r) for r in U]

    scale = ops.zero()
    for r in B:
        for v in r:
            scale = ops.add(scale, ops.multiply(v, v))
    scale = ops.sqrt(scale)
    rel = ops.coerce(tol)

    total_sweeps = 0
    unconverged = []
    for i in range(n - 1):
        done = False
        for _ in range(max_sweeps):
            d = ops.abs(B[i][i])
            reference = d if ops.compare(d, scale) > 0 else scale
            if ops.compare(_border_norm(B, i, ops), ops.multiply(rel, reference)) <= 0:
                done = True
                break
            Q1, R1 = _orthogonal_qr(qr_fn, _block(B, i), ops)
            Q2, R2 = _orthogonal_qr(qr_fn, transpose_grid(R1), ops)
            for r, new in zip(B[i:], transpose_grid(R2)):
                r[i:] = new
            _right_update(U, i, Q1, ops)
            _right_update(V, i, Q2, ops)
            total_sweeps += 1
        if not done:
            d = ops.abs(B[i][i])
            reference = d if ops.compare(d, scale) > 0 else scale
            done = ops.compare(_border_norm(B, i, ops), ops.multiply(rel, reference)) <= 0
        if not done:
            unconverged.append(i)
        for j in range(i + 1, n):
            B[i][j] = ops.zero()
            B[j][i] = ops.zero()

    # Non-negative values: fold each sign into the matching column of U.
    values = []
    for i in range(n):
        s = B[i][i]
        if ops.sign(s) < 0:
            s = ops.negate(s)
            for r in U:
                r[i] = ops.negate(r[i])
        values.append(s)

    order = sorted(range(n), key=cmp_to_key(lambda x, y: ops.compare(values[y], values[x])))
    U = [[r[k] for k in order] for r in U]
    V = [[r[k] for k in order] for r in V]

    return SVDParams(
        U=Matrix._from_grid(U, ops.kind),
        singular_values=tuple(values[k] for k in order),
        Vt=Matrix._from_grid(transpose_grid(V), ops.kind),
        sweeps=total_sweeps,
        converged=not unconverged,
        unconverged_blocks=tuple(unconverged),
    )
