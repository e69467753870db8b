"""
Cofactor expansion: minors, cofactors, determinant and adjugate.

These never divide, so they run in the source kind of the matrix. Integer
kinds expand in unbounded Python ints and the results are range-checked
against the kind, so an overflowing determinant raises instead of wrapping.
"""

from __future__ import annotations

from pymatrix.core.exceptions import NumericalError
from pymatrix.core.protocols import NumericOps


def minor_grid(grid: list[list], row: int, col: int) -> list[list]:
    """Copy of grid with one row and one column removed."""
    return [[v for j, v in enumerate(r) if j != col] for i, r in enumerate(grid) if i != row]


def cofactor_determinant(grid: list[list], ops: NumericOps):
    """
    Determinant by recursive expansion along the first row.

    Base cases are 1x1 and 2x2. Cost grows factorially with n.
    """
    n = len(grid)
    if n == 1:
        return grid[0][0]
    if n == 2:
        return ops.subtract(
            ops.multiply(grid[0][0], grid[1][1]),
            ops.multiply(grid[0][1], grid[1][0]),
        )
    det = ops.zero()
    for j in range(n):
        if ops.is_zero(grid[0][j]):
            continue
        term = ops.multiply(grid[0][j], cofactor_determinant(minor_grid(grid, 0, j), ops))
        det = ops.subtract(det, term) if j % 2 else ops.add(det, term)
    return det


def cofactor_value(grid: list[list], row: int, col: int, ops: NumericOps):
    """(-1)^(row+col) times the determinant of the (row, col) minor."""
    if len(grid) == 1:
        return ops.one()
    det = cofactor_determinant(minor_grid(grid, row, col), ops)
    return ops.negate(det) if (row + col) % 2 else det


def cofactor_grid(grid: list[list], ops: NumericOps) -> list[list]:
    """Matrix of cofactors. A 1x1 matrix has cofactor matrix [[1]]."""
    n = len(grid)
    return [[cofactor_value(grid, i, j, ops) for j in range(n)] for i in range(n)]


def exact_ops(ops: NumericOps) -> NumericOps:
    """Kernel to expand with: unbounded for the integer kinds, ops otherwise."""
    if ops.kind.is_integer:
        return ops.unbounded()
    return ops


def narrow(value, ops: NumericOps, what: str):
    """
    Exact expansion result as a value of ops' kind.

    Raises:
        NumericalError: If an integer result overflows the kind
    """
    if ops.kind.is_integer and not ops.fits(value):
        raise NumericalError(
            f"{what}: exact result {value} overflows {ops.kind.value}; "
            f"use a wider kind or a factorization method"
        )
    return value
