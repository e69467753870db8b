"""
Grid primitives shared by the decomposition, inversion and eigen engines.

Every function takes the kernel explicitly so it stays kind-agnostic.
"""

from __future__ import annotations

from typing import Any, Sequence

from pymatrix.core.protocols import NumericOps


def zeros_grid(rows: int, cols: int, ops: NumericOps) -> list[list]:
    zero = ops.zero()
    return [[zero] * cols for _ in range(rows)]


def identity_grid(n: int, ops: NumericOps) -> list[list]:
    grid = zeros_grid(n, n, ops)
    one = ops.one()
    for i in range(n):
        grid[i][i] = one
    return grid


def transpose_grid(grid: list[list]) -> list[list]:
    return [list(c) for c in zip(*grid)]


def grid_product(a: list[list], b: list[list], ops: NumericOps) -> list[list]:
    """Direct triple-loop product a @ b."""
    cols_b = list(zip(*b))
    zero = ops.zero()
    out = []
    for row in a:
        out_row = []
        for col in cols_b:
            acc = zero
            for x, y in zip(row, col):
                acc = ops.add(acc, ops.multiply(x, y))
            out_row.append(acc)
        out.append(out_row)
    return out


def column(grid: list[list], j: int, start: int = 0) -> list:
    return [grid[i][j] for i in range(start, len(grid))]


def dot(u: Sequence[Any], v: Sequence[Any], ops: NumericOps):
    acc = ops.zero()
    for x, y in zip(u, v):
        acc = ops.add(acc, ops.multiply(x, y))
    return acc


def euclidean_norm(u: Sequence[Any], ops: NumericOps):
    return ops.sqrt(dot(u, u, ops))
