"""
Strassen recursive matrix multiplication.
"""

from pymatrix.multiply.solvers import partition, strassen

__all__ = ["strassen", "partition"]
