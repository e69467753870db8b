"""
Compute infrastructure: timing, tolerances and precision helpers.
"""

from pymatrix.core.compute.timing import Timer
from pymatrix.core.compute.tolerances import ToleranceTier, select_tolerance
from pymatrix.core.compute.precision import machine_epsilon

__all__ = [
    "Timer",
    "ToleranceTier",
    "select_tolerance",
    "machine_epsilon",
]
