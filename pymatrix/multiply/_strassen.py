"""
Strassen recursive multiplication on grids.

Seven products per level:

    M1 = (A11 + A22)(B11 + B22)     M5 = (A11 + A12) B22
    M2 = (A21 + A22) B11            M6 = (A21 - A11)(B11 + B12)
    M3 = A11 (B12 - B22)            M7 = (A12 - A22)(B21 + B22)
    M4 = A22 (B21 - B11)

    C11 = M1 + M4 - M5 + M7         C12 = M3 + M5
    C21 = M2 + M4                   C22 = M1 - M2 + M3 + M6
"""

from __future__ import annotations

from pymatrix.core.compute.linalg import grid_product
from pymatrix.core.protocols import NumericOps


def partition_grid(grid: list[list]) -> tuple[list[list], list[list], list[list], list[list]]:
    """Split an even-sized square grid into quadrants (11, 12, 21, 22)."""
    h = len(grid) // 2
    return (
        [r[:h] for r in grid[:h]],
        [r[h:] for r in grid[:h]],
        [r[:h] for r in grid[h:]],
        [r[h:] for r in grid[h:]],
    )


def _add(a: list[list], b: list[list], ops: NumericOps) -> list[list]:
    return [[ops.add(x, y) for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]


def _sub(a: list[list], b: list[list], ops: NumericOps) -> list[list]:
    return [[ops.subtract(x, y) for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]


def strassen_grid(a: list[list], b: list[list], ops: NumericOps, threshold: int) -> list[list]:
    n = len(a)
    if n <= threshold or n == 1:
        return grid_product(a, b, ops)

    a11, a12, a21, a22 = partition_grid(a)
    b11, b12, b21, b22 = partition_grid(b)

    m1 = strassen_grid(_add(a11, a22, ops), _add(b11, b22, ops), ops, threshold)
    m2 = strassen_grid(_add(a21, a22, ops), b11, ops, threshold)
    m3 = strassen_grid(a11, _sub(b12, b22, ops), ops, threshold)
    m4 = strassen_grid(a22, _sub(b21, b11, ops), ops, threshold)
    m5 = strassen_grid(_add(a11, a12, ops), b22, ops, threshold)
    m6 = strassen_grid(_sub(a21, a11, ops), _add(b11, b12, ops), ops, threshold)
    m7 = strassen_grid(_sub(a12, a22, ops), _add(b21, b22, ops), ops, threshold)

    c11 = _add(_sub(_add(m1, m4, ops), m5, ops), m7, ops)
    c12 = _add(m3, m5, ops)
    c21 = _add(m2, m4, ops)
    c22 = _add(_add(_sub(m1, m2, ops), m3, ops), m6, ops)

    top = [r1 + r2 for r1, r2 in zip(c11, c12)]
    bottom = [r1 + r2 for r1, r2 in zip(c21, c22)]
    return top + bottom
