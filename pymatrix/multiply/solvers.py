"""
Public API for Strassen multiplication.

    strassen(A, B, threshold=32) → Matrix
    partition(A) → (A11, A12, A21, A22)
"""

from __future__ import annotations

from pymatrix.core.compute.tolerances import STRASSEN_THRESHOLD
from pymatrix.core.exceptions import DimensionError, ValidationError
from pymatrix.core.validation import (
    check_matrix,
    check_power_of_two,
    check_same_kind,
    check_square,
)
from pymatrix.matrix.store import Matrix
from pymatrix.multiply._strassen import partition_grid, strassen_grid


def strassen(A: Matrix, B: Matrix, threshold: int = STRASSEN_THRESHOLD) -> Matrix:
    """
    Product A·B by Strassen's recursion.

    Blocks of order <= threshold are multiplied directly. Arithmetic stays
    in the source kind, so integer products are exact up to wraparound.

    Args:
        A, B: Square matrices of equal power-of-two order and equal kind
        threshold: Order at or below which the direct product is used

    Raises:
        DimensionError: If the operands are not square, differ in order or
            the order is not a power of two (no padding is done)
        UnsupportedKindError: If the kinds differ
    """
    check_matrix(A, "A")
    check_matrix(B, "B")
    check_square(A, "A")
    check_square(B, "B")
    if A.rows != B.rows:
        raise DimensionError(f"strassen: orders differ: A is {A.rows}, B is {B.rows}")
    check_power_of_two(A.rows, "A")
    check_same_kind(A, B, ("A", "B"))
    if isinstance(threshold, bool) or not isinstance(threshold, int) or threshold < 1:
        raise ValidationError(f"threshold: must be an int >= 1, got {threshold!r}")

    return Matrix._from_grid(strassen_grid(A._grid(), B._grid(), A.ops, threshold), A.kind)


def partition(A: Matrix) -> tuple[Matrix, Matrix, Matrix, Matrix]:
    """
    Quadrants (A11, A12, A21, A22) of a square matrix of even order.

    Raises:
        DimensionError: If A is not square or its order is odd
    """
    check_matrix(A, "A")
    check_square(A, "A")
    if A.rows % 2:
        raise DimensionError(f"partition: order must be even, got {A.rows}")
    return tuple(Matrix._from_grid(q, A.kind) for q in partition_grid(A._grid()))
