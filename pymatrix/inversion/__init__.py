"""
Determinants, cofactors, inverses and linear solves.
"""

from pymatrix.inversion.solvers import (
    adjugate,
    backward_substitution,
    cofactor,
    cofactor_matrix,
    comatrix,
    condition_number,
    determinant,
    forward_substitution,
    inverse,
    matrix_power,
    minor,
    pseudoinverse,
    rank,
    ridge_regression,
    solve,
)

__all__ = [
    "determinant",
    "minor",
    "cofactor",
    "cofactor_matrix",
    "comatrix",
    "adjugate",
    "inverse",
    "forward_substitution",
    "backward_substitution",
    "solve",
    "rank",
    "condition_number",
    "pseudoinverse",
    "matrix_power",
    "ridge_regression",
]
