"""
Core infrastructure for PyMatrix.

This module provides shared abstractions and utilities used by every
algorithm package (decomposition, inversion, eigen, multiply).

Key components:
    protocols: NumericOps kernel protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerance tiers, precision helpers
"""

from pymatrix.core.protocols import NumericOps
from pymatrix.core.result import Result
from pymatrix.core.exceptions import (
    PyMatrixError,
    ValidationError,
    DimensionError,
    UnsupportedKindError,
    UnsupportedOperationError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
)

__all__ = [
    # Protocols
    "NumericOps",
    # Result
    "Result",
    # Exceptions
    "PyMatrixError",
    "ValidationError",
    "DimensionError",
    "UnsupportedKindError",
    "UnsupportedOperationError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
]
