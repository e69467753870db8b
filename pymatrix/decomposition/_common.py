"""
Parameter payloads for decomposition results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
Factor matrices are in the working kind of the input (Float64 for the
integer kinds).
"""

from __future__ import annotations

from dataclasses import dataclass

from pymatrix.matrix.store import Matrix


@dataclass(frozen=True)
class LUParams:
    """LU or LUP factors.

    For plain LU, A = L·U and P is None. For LUP, A = P·L·U.
    """

    L: Matrix                          # unit lower triangular
    U: Matrix                          # upper triangular
    P: Matrix | None                   # permutation matrix (LUP only)
    permutation: tuple[int, ...]       # row i of L·U is row permutation[i] of A
    sign: int                          # determinant of P (+1 / -1)
    n_swaps: int
    pivoted: bool


@dataclass(frozen=True)
class QRParams:
    """QR factors, A = Q·R.

    Householder and Givens give full Q (rows x rows) and R (rows x cols);
    Gram-Schmidt gives reduced Q (rows x cols) and R (cols x cols).
    """

    Q: Matrix
    R: Matrix
    method: str                            # 'householder', 'givens', 'gram_schmidt'
    deficient_columns: tuple[int, ...]     # Gram-Schmidt columns replaced by zero


@dataclass(frozen=True)
class CholeskyParams:
    """Cholesky factor, A = L·Lᵀ."""

    L: Matrix
