"""
Element kinds supported by the matrix store.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

import numpy as np

from pymatrix.core.exceptions import UnsupportedKindError


class ElementKind(Enum):
    """
    Runtime-selected numeric element kind.

    Each member knows its numpy storage dtype and, for the integer kinds,
    its bit width. Decimal values are stored in an object array.
    """

    INT8 = 'int8'
    INT16 = 'int16'
    INT32 = 'int32'
    INT64 = 'int64'
    FLOAT32 = 'float32'
    FLOAT64 = 'float64'
    DECIMAL = 'decimal'

    @property
    def dtype(self) -> np.dtype:
        if self is ElementKind.DECIMAL:
            return np.dtype(object)
        return np.dtype(self.value)

    @property
    def bits(self) -> int | None:
        """Bit width of an integer kind, None otherwise."""
        if self.is_integer:
            return int(self.value[3:])
        return None

    @property
    def is_integer(self) -> bool:
        return self.value.startswith('int')

    @property
    def is_float(self) -> bool:
        return self.value.startswith('float')

    @property
    def is_exact(self) -> bool:
        """Integer arithmetic is exact (modulo wraparound)."""
        return self.is_integer

    @classmethod
    def parse(cls, value) -> ElementKind:
        """
        Resolve an ElementKind from a member, a name, a numpy dtype or a
        Python type.

        Examples:
            >>> ElementKind.parse('Float64')
            <ElementKind.FLOAT64: 'float64'>
            >>> ElementKind.parse(int)
            <ElementKind.INT32: 'int32'>

        Raises:
            UnsupportedKindError: If the value names no supported kind
        """
        if isinstance(value, cls):
            return value
        if value is Decimal:
            return cls.DECIMAL
        if value is int:
            return cls.INT32
        if value is float:
            return cls.FLOAT64
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
            raise UnsupportedKindError(f"Unknown element kind '{value}'")
        try:
            dtype = np.dtype(value)
        except TypeError as e:
            raise UnsupportedKindError(
                f"Cannot interpret {value!r} as an element kind"
            ) from e
        for member in cls:
            if member is not cls.DECIMAL and member.dtype == dtype:
                return member
        raise UnsupportedKindError(f"Unsupported dtype {dtype}")


def infer_kind(values) -> ElementKind:
    """
    Infer the kind of a flat sequence of Python numbers.

    Decimal wins over float, float wins over int; plain ints are Int32
    unless some value does not fit, in which case Int64.
    """
    has_float = False
    has_decimal = False
    fits_32 = True
    for v in values:
        if isinstance(v, Decimal):
            has_decimal = True
        elif isinstance(v, (bool, np.bool_)):
            raise UnsupportedKindError("Boolean elements are not supported")
        elif isinstance(v, (int, np.integer)):
            if not -(1 << 31) <= int(v) < (1 << 31):
                fits_32 = False
        elif isinstance(v, (float, np.floating)):
            has_float = True
        else:
            raise UnsupportedKindError(
                f"Unsupported element type {type(v).__name__}"
            )
    if has_decimal:
        return ElementKind.DECIMAL
    if has_float:
        return ElementKind.FLOAT64
    return ElementKind.INT32 if fits_32 else ElementKind.INT64
