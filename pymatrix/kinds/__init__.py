"""
Element kinds and their arithmetic kernels.

    ElementKind        runtime-selected numeric kind (Int8 ... Decimal)
    ops_for(kind)      shared NumericOps kernel for a kind
    working_kind(kind) kind that dividing algorithms compute in
"""

from pymatrix.kinds.kind import ElementKind, infer_kind
from pymatrix.kinds.ops import (
    DecimalOps,
    FloatOps,
    IntegerOps,
    UnboundedIntegerOps,
    ops_for,
    working_kind,
    working_ops,
)

__all__ = [
    "ElementKind",
    "infer_kind",
    "IntegerOps",
    "UnboundedIntegerOps",
    "FloatOps",
    "DecimalOps",
    "ops_for",
    "working_kind",
    "working_ops",
]
