"""
PyMatrix: dense generic matrices and linear algebra over integer, float
and decimal elements.

Submodules:
    kinds: Element kinds and their arithmetic kernels
    matrix: Dense Matrix store and factories
    decomposition: LU, LUP, Cholesky, QR (Householder, Givens, Gram-Schmidt)
    inversion: Determinant, inverse, solve, rank, condition number
    eigen: Jacobi and QR eigen-decomposition, SVD by repeated QR
    multiply: Strassen multiplication
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from pymatrix.kinds import ElementKind
from pymatrix.matrix import (
    Matrix,
    from_generator,
    full,
    identity,
    ones,
    permutation_matrix,
    random_matrix,
    zeros,
)
from pymatrix import decomposition
from pymatrix import inversion
from pymatrix import eigen
from pymatrix import multiply

__all__ = [
    "__version__",
    "ElementKind",
    "Matrix",
    "zeros",
    "ones",
    "full",
    "identity",
    "from_generator",
    "permutation_matrix",
    "random_matrix",
    "decomposition",
    "inversion",
    "eigen",
    "multiply",
]
