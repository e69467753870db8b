"""
Parameter payloads for eigen-decomposition and SVD results.
"""

from __future__ import annotations

from dataclasses import dataclass

from pymatrix.matrix.store import Matrix


@dataclass(frozen=True)
class EigenParams:
    """Eigenvalues and eigenvectors.

    vectors[:, k] belongs to values[k]; columns have unit norm.
    """

    values: tuple                # eigenvalues, in diagonal order
    vectors: Matrix              # n x n, one eigenvector per column
    iterations: int
    converged: bool
    final_off_norm: float        # off-diagonal (or sub-diagonal) norm at exit


@dataclass(frozen=True)
class SVDParams:
    """Singular value decomposition, A = U·diag(s)·Vt.

    Singular values are non-negative and sorted in descending order.
    """

    U: Matrix
    singular_values: tuple
    Vt: Matrix
    sweeps: int                          # total QR sweeps over all blocks
    converged: bool
    unconverged_blocks: tuple[int, ...]
