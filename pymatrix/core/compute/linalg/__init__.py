"""
Kernel-level linear algebra on nested-list grids.

Algorithms unpack a Matrix into a grid of Python numbers once, work on the
grid through a NumericOps kernel, and pack the result back into a Matrix.
"""

from pymatrix.core.compute.linalg.grid import (
    column,
    dot,
    euclidean_norm,
    grid_product,
    identity_grid,
    transpose_grid,
    zeros_grid,
)

__all__ = [
    "zeros_grid",
    "identity_grid",
    "transpose_grid",
    "grid_product",
    "column",
    "dot",
    "euclidean_norm",
]
