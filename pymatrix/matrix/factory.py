"""
Matrix factories.

    zeros, ones, full, identity     constant-filled matrices
    from_generator                  element-by-element construction
    permutation_matrix              0/1 row-reordering matrix
    random_matrix                   uniformly random elements

Randomness is always drawn from an explicit numpy Generator; a fresh
generator is created only when the caller passes none.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from pymatrix.core.exceptions import ValidationError
from pymatrix.core.validation import check_dimensions
from pymatrix.kinds.kind import ElementKind
from pymatrix.kinds.ops import ops_for
from pymatrix.matrix.store import Matrix


def zeros(rows: int, cols: int | None = None, kind: ElementKind | str = ElementKind.FLOAT64) -> Matrix:
    """rows x cols matrix of the additive identity (square if cols is None)."""
    return Matrix(rows, rows if cols is None else cols, kind)


def ones(rows: int, cols: int | None = None, kind: ElementKind | str = ElementKind.FLOAT64) -> Matrix:
    kind = ElementKind.parse(kind)
    return Matrix(rows, rows if cols is None else cols, kind, ops_for(kind).one())


def full(rows: int, cols: int, value: Any, kind: ElementKind | str = ElementKind.FLOAT64) -> Matrix:
    return Matrix(rows, cols, kind, value)


def identity(n: int, kind: ElementKind | str = ElementKind.FLOAT64) -> Matrix:
    """n x n identity matrix."""
    kind = ElementKind.parse(kind)
    eye = Matrix(n, n, kind)
    one = ops_for(kind).one()
    for i in range(n):
        eye.set(i, i, one)
    return eye


def from_generator(
    rows: int,
    cols: int,
    kind: ElementKind | str,
    generator: Callable[[int, int], Any],
) -> Matrix:
    """
    Build a matrix whose (i, j) element is generator(i, j).

    Example:
        >>> hilbert = from_generator(3, 3, 'float64', lambda i, j: 1.0 / (i + j + 1))
    """
    check_dimensions(rows, cols, "from_generator")
    kind = ElementKind.parse(kind)
    return Matrix.from_flat(
        rows, cols, [generator(i, j) for i in range(rows) for j in range(cols)], kind
    )


def permutation_matrix(
    permutation: Sequence[int] | None = None,
    *,
    size: int | None = None,
    kind: ElementKind | str = ElementKind.INT32,
    rng: np.random.Generator | None = None,
) -> Matrix:
    """
    Permutation matrix with a one at (i, permutation[i]) in every row.

    Args:
        permutation: Ordering of range(n); drawn from rng when None
        size: Matrix order, required when permutation is None
        kind: Element kind of the result
        rng: Random generator used when permutation is None

    Raises:
        ValidationError: If permutation is not a reordering of range(n),
            or neither permutation nor size is given
    """
    if permutation is None:
        if size is None:
            raise ValidationError("permutation_matrix: give a permutation or a size")
        rng = np.random.default_rng() if rng is None else rng
        permutation = rng.permutation(size).tolist()
    perm = [int(p) for p in permutation]
    n = len(perm)
    if size is not None and size != n:
        raise ValidationError(
            f"permutation_matrix: permutation has {n} entries, size is {size}"
        )
    if sorted(perm) != list(range(n)):
        raise ValidationError(
            f"permutation_matrix: {perm} is not a permutation of range({n})"
        )
    kind = ElementKind.parse(kind)
    result = Matrix(n, n, kind)
    one = ops_for(kind).one()
    for i, p in enumerate(perm):
        result.set(i, p, one)
    return result


def random_matrix(
    rows: int,
    cols: int,
    kind: ElementKind | str = ElementKind.FLOAT64,
    *,
    scale: float | None = None,
    rng: np.random.Generator | None = None,
) -> Matrix:
    """
    Matrix of uniformly random elements.

    Integer kinds draw from their full range; float and decimal kinds draw
    from [0, 1), multiplied by scale when given.
    """
    check_dimensions(rows, cols, "random_matrix")
    kind = ElementKind.parse(kind)
    rng = np.random.default_rng() if rng is None else rng
    n = rows * cols
    if kind.is_integer:
        info = np.iinfo(kind.dtype)
        values = rng.integers(info.min, info.max, size=n, endpoint=True, dtype=kind.dtype).tolist()
    else:
        values = rng.random(n)
        if scale is not None:
            values = values * scale
        values = values.tolist()
    return Matrix.from_flat(rows, cols, values, kind)
