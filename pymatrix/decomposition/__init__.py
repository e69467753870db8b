"""
Matrix decompositions: LU, LUP, Cholesky and QR (Householder, Givens,
Gram-Schmidt).

    from pymatrix.decomposition import lup, qr
    sol = lup(A)
    sol.P, sol.L, sol.U
"""

from pymatrix.decomposition.solvers import cholesky, decompose, lu, lup, qr
from pymatrix.decomposition.solution import CholeskySolution, LUSolution, QRSolution

__all__ = [
    "lu",
    "lup",
    "cholesky",
    "qr",
    "decompose",
    "LUSolution",
    "QRSolution",
    "CholeskySolution",
]
