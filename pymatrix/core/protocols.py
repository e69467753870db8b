"""
Core protocols for PyMatrix.

These define structural interfaces that the element-kind kernels and the
matrix store satisfy. We use Protocol (structural typing) rather than ABC
(nominal typing) so an algorithm only depends on the primitives it calls.

Design Principles:
    - Minimal contracts: prescribe only the primitives algorithms need
    - One kernel object per element kind, resolved once per matrix
    - Algorithms never touch Python operators on elements directly
"""

from typing import Protocol, Any, runtime_checkable


@runtime_checkable
class NumericOps(Protocol):
    """
    Arithmetic kernel for one element kind.

    Every decomposition, inversion and eigen algorithm is written against
    this protocol, so the same code runs on Int32, Float32 or Decimal
    elements. Values handed to a kernel must already belong to its kind;
    binary primitives reject foreign values with UnsupportedKindError.
    """

    @property
    def kind(self) -> Any:
        """The ElementKind this kernel computes in."""
        ...

    def zero(self) -> Any:
        """Additive identity."""
        ...

    def one(self) -> Any:
        """Multiplicative identity."""
        ...

    def from_int(self, value: int) -> Any:
        """Convert a Python int into this kind."""
        ...

    def coerce(self, value: Any) -> Any:
        """Convert any real number into this kind (rounding / wrapping)."""
        ...

    def to_float(self, value: Any) -> float:
        ...

    def add(self, a: Any, b: Any) -> Any:
        ...

    def subtract(self, a: Any, b: Any) -> Any:
        ...

    def multiply(self, a: Any, b: Any) -> Any:
        ...

    def divide(self, a: Any, b: Any) -> Any:
        """
        Quotient a / b.

        Division by zero is not checked here; callers test pivots with
        is_zero() first and raise SingularMatrixError themselves.
        """
        ...

    def negate(self, a: Any) -> Any:
        ...

    def abs(self, a: Any) -> Any:
        ...

    def compare(self, a: Any, b: Any) -> int:
        """Return -1, 0 or 1."""
        ...

    def is_zero(self, a: Any) -> bool:
        ...

    def sign(self, a: Any) -> int:
        ...

    def sqrt(self, a: Any) -> Any:
        """Square root by Newton refinement."""
        ...

    def power(self, a: Any, n: int) -> Any:
        """a raised to an integer power (square-and-multiply)."""
        ...

    def nth_root(self, a: Any, n: int) -> Any:
        """Principal n-th root by Newton refinement."""
        ...
