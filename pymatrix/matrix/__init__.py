"""
Dense matrix store and factories.
"""

from pymatrix.matrix.store import Matrix
from pymatrix.matrix.factory import (
    from_generator,
    full,
    identity,
    ones,
    permutation_matrix,
    random_matrix,
    zeros,
)

__all__ = [
    "Matrix",
    "zeros",
    "ones",
    "full",
    "identity",
    "from_generator",
    "permutation_matrix",
    "random_matrix",
]
