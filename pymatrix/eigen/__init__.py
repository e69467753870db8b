"""
Eigen-decomposition (Jacobi, QR) and singular value decomposition.
"""

from pymatrix.eigen.solvers import (
    eig,
    jacobi_eigen,
    qr_eigen,
    qr_eigen_estimate,
    singular_values,
    svd,
)
from pymatrix.eigen.solution import EigenSolution, SVDSolution

__all__ = [
    "jacobi_eigen",
    "qr_eigen_estimate",
    "qr_eigen",
    "eig",
    "svd",
    "singular_values",
    "EigenSolution",
    "SVDSolution",
]
