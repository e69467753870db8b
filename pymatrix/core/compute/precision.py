"""
Machine precision helpers per element kind.
"""

import numpy as np

from pymatrix.core.compute.tolerances import DECIMAL_PRECISION


def machine_epsilon(kind) -> float:
    """
    Unit roundoff of the kind's working arithmetic.

    Integer kinds report the Float64 epsilon because every algorithm that
    can round computes in Float64 for them.
    """
    key = getattr(kind, 'value', kind)
    if key == 'float32':
        return float(np.finfo(np.float32).eps)
    if key == 'decimal':
        return 10.0 ** (1 - DECIMAL_PRECISION)
    return float(np.finfo(np.float64).eps)
