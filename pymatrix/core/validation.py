"""
Input validation utilities for PyMatrix.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent.

Design principles:
    - No silent type coercion between element kinds
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

from typing import Any

import numpy as np

from pymatrix.core.exceptions import (
    DimensionError,
    UnsupportedKindError,
    UnsupportedOperationError,
    ValidationError,
)


def check_matrix(value: Any, name: str) -> None:
    """
    Verify value is a Matrix.

    Args:
        value: Object to check
        name: Parameter name for error messages

    Raises:
        ValidationError: If value is not a Matrix
    """
    from pymatrix.matrix.store import Matrix

    if not isinstance(value, Matrix):
        raise ValidationError(
            f"{name}: expected Matrix, got {type(value).__name__}"
        )


def check_dimensions(rows: Any, cols: Any, name: str) -> None:
    """
    Verify a (rows, cols) pair describes a non-empty matrix.

    Raises:
        DimensionError: If either dimension is not a positive int
    """
    for label, value in (("rows", rows), ("cols", cols)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise DimensionError(
                f"{name}: {label} must be an int, got {type(value).__name__}"
            )
        if value <= 0:
            raise DimensionError(f"{name}: {label} must be > 0, got {value}")


def check_square(matrix: Any, name: str) -> None:
    """
    Verify matrix is square.

    Raises:
        DimensionError: If rows != cols
    """
    if matrix.rows != matrix.cols:
        raise DimensionError(
            f"{name}: expected square matrix, got {matrix.rows}x{matrix.cols}"
        )


def check_same_shape(a: Any, b: Any, names: tuple[str, str]) -> None:
    """
    Verify two matrices have identical shape.

    Raises:
        DimensionError: If shapes differ
    """
    if a.shape != b.shape:
        raise DimensionError(
            f"Shape mismatch: {names[0]}={a.rows}x{a.cols}, "
            f"{names[1]}={b.rows}x{b.cols}"
        )


def check_same_kind(a: Any, b: Any, names: tuple[str, str]) -> None:
    """
    Verify two matrices share one element kind.

    Raises:
        UnsupportedKindError: If kinds differ
    """
    if a.kind is not b.kind:
        raise UnsupportedKindError(
            f"Kind mismatch: {names[0]}={a.kind.value}, {names[1]}={b.kind.value}"
        )


def check_index(index: Any, bound: int, name: str) -> None:
    """
    Verify 0 <= index < bound.

    Raises:
        DimensionError: If index is not an int or is out of range
    """
    if isinstance(index, (bool, np.bool_)) or not isinstance(index, (int, np.integer)):
        raise DimensionError(
            f"{name}: index must be an int, got {type(index).__name__}"
        )
    if index < 0 or index >= bound:
        raise DimensionError(f"{name}: index {index} out of range [0, {bound})")


def check_power_of_two(n: int, name: str) -> None:
    """
    Verify n is a positive power of two.

    Raises:
        DimensionError: If n is not a power of two
    """
    if n <= 0 or n & (n - 1) != 0:
        raise DimensionError(f"{name}: dimension must be a power of two, got {n}")


def check_positive(value: float, name: str) -> None:
    """
    Verify a scalar parameter is strictly positive.

    Raises:
        ValidationError: If value <= 0
    """
    if value <= 0:
        raise ValidationError(f"{name}: must be > 0, got {value}")


def normalize_method(method: Any, allowed: dict[str, str], name: str) -> str:
    """
    Resolve a user-supplied method name to its canonical spelling.

    Matching is case-insensitive; '-' and spaces are treated as '_'.

    Args:
        method: Name supplied by the caller
        allowed: Mapping from accepted spellings to canonical names
        name: Parameter name for error messages

    Returns:
        Canonical method name

    Raises:
        UnsupportedOperationError: If the name is not recognized
    """
    if not isinstance(method, str):
        raise UnsupportedOperationError(
            f"{name}: method must be a string, got {type(method).__name__}"
        )
    key = method.strip().lower().replace('-', '_').replace(' ', '_')
    if key not in allowed:
        choices = ", ".join(sorted(set(allowed.values())))
        raise UnsupportedOperationError(
            f"{name}: unknown method '{method}', expected one of: {choices}"
        )
    return allowed[key]
