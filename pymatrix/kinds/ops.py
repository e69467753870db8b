"""
Element-kind arithmetic kernels.

One kernel object per ElementKind implements the NumericOps protocol.
Matrices resolve their kernel once (Matrix.ops) and every algorithm calls
its primitives instead of Python operators, so a decomposition written
once runs on Int8 through Decimal.

Semantics per family:
    IntegerOps: two's complement wraparound at the kind's bit width,
        division truncating toward zero, floor roots.
    FloatOps: IEEE arithmetic; Float32 rounds every result to single
        precision.
    DecimalOps: decimal.Context arithmetic at DECIMAL_PRECISION digits.

Roots use Newton refinement in every family. Iteration stops when the
next iterate equals the current one, or returns to the previous one
(a two-cycle caused by the last rounding step).
"""

from __future__ import annotations

import decimal
import math
from decimal import Decimal
from functools import lru_cache
from typing import Any

import numpy as np

from pymatrix.core.compute.precision import machine_epsilon
from pymatrix.core.compute.tolerances import DECIMAL_PRECISION, ROOT_MAX_ITERATIONS
from pymatrix.core.exceptions import (
    ConvergenceError,
    NumericalError,
    UnsupportedKindError,
    ValidationError,
)
from pymatrix.core.protocols import NumericOps
from pymatrix.kinds.kind import ElementKind


class _BaseOps:
    """Primitives shared by every family, expressed through the others."""

    __slots__ = ('_kind',)

    def __init__(self, kind: ElementKind) -> None:
        self._kind = kind

    @property
    def kind(self) -> ElementKind:
        return self._kind

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._kind.value})"

    def _reject(self, value: Any) -> None:
        raise UnsupportedKindError(
            f"{self._kind.value} kernel received {type(value).__name__} "
            f"value {value!r}"
        )

    def is_zero(self, a) -> bool:
        return self.compare(a, self.zero()) == 0

    def sign(self, a) -> int:
        return self.compare(a, self.zero())

    def abs(self, a):
        return self.negate(a) if self.sign(a) < 0 else self._check(a)

    def epsilon(self):
        """Machine epsilon of this kind, as a value of this kind."""
        return self.coerce(machine_epsilon(self._kind))

    def power(self, a, n: int):
        """
        a ** n by square-and-multiply.

        Negative exponents divide one by the positive power.

        Raises:
            NumericalError: If a is zero and n <= 0
        """
        a = self._check(a)
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ValidationError(f"power: exponent must be an int, got {n!r}")
        n = int(n)
        if n <= 0 and self.is_zero(a):
            raise NumericalError(f"power: zero base with exponent {n}")
        result = self.one()
        base = a
        e = -n if n < 0 else n
        while e:
            if e & 1:
                result = self.multiply(result, base)
            e >>= 1
            if e:
                base = self.multiply(base, base)
        if n < 0:
            return self.divide(self.one(), result)
        return result

    def sqrt(self, a):
        return self.nth_root(a, 2)

    def nth_root(self, a, n: int):
        """
        Principal n-th root.

        Odd roots of negative values follow the sign; even roots of
        negative values raise NumericalError.
        """
        a = self._check(a)
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 1:
            raise ValidationError(f"nth_root: degree must be an int >= 1, got {n!r}")
        n = int(n)
        if n == 1 or self.is_zero(a):
            return a
        if self.sign(a) < 0:
            if n % 2 == 0:
                raise NumericalError(
                    f"nth_root: even root (n={n}) of negative value {a}"
                )
            return self.negate(self._root(self.negate(a), n))
        return self._root(a, n)

    def _newton(self, step, x, what: str):
        previous = None
        for _ in range(ROOT_MAX_ITERATIONS):
            y = step(x)
            if y == x or y == previous:
                return y
            previous, x = x, y
        raise ConvergenceError(
            f"{what}: Newton refinement did not settle in "
            f"{ROOT_MAX_ITERATIONS} iterations",
            iterations=ROOT_MAX_ITERATIONS,
            reason='max_iterations',
        )


class IntegerOps(_BaseOps):
    """Fixed-width signed integers with wraparound."""

    __slots__ = ('_mod', '_half')

    def __init__(self, kind: ElementKind) -> None:
        super().__init__(kind)
        self._mod = 1 << kind.bits
        self._half = 1 << (kind.bits - 1)

    def _wrap(self, v: int) -> int:
        return (v + self._half) % self._mod - self._half

    def fits(self, v: int) -> bool:
        """True if v is representable at this kind's bit width."""
        return -self._half <= v < self._half

    def unbounded(self) -> UnboundedIntegerOps:
        """Kernel with the same checks but no wraparound."""
        return UnboundedIntegerOps(self._kind)

    def _check(self, v) -> int:
        if isinstance(v, (bool, np.bool_)) or not isinstance(v, (int, np.integer)):
            self._reject(v)
        return int(v)

    def zero(self) -> int:
        return 0

    def one(self) -> int:
        return 1

    def from_int(self, value: int) -> int:
        return self._wrap(int(value))

    def coerce(self, value) -> int:
        """Truncate toward zero, then wrap to the bit width."""
        if isinstance(value, (bool, np.bool_)):
            self._reject(value)
        if isinstance(value, (int, np.integer)):
            return self._wrap(int(value))
        if isinstance(value, (float, np.floating, Decimal)):
            try:
                return self._wrap(int(value))
            except (ValueError, OverflowError, decimal.InvalidOperation) as e:
                raise UnsupportedKindError(
                    f"{self._kind.value}: cannot represent {value!r}"
                ) from e
        self._reject(value)

    def to_float(self, value) -> float:
        return float(self._check(value))

    def add(self, a, b) -> int:
        return self._wrap(self._check(a) + self._check(b))

    def subtract(self, a, b) -> int:
        return self._wrap(self._check(a) - self._check(b))

    def multiply(self, a, b) -> int:
        return self._wrap(self._check(a) * self._check(b))

    def divide(self, a, b) -> int:
        a = self._check(a)
        b = self._check(b)
        q = abs(a) // abs(b)
        if (a < 0) != (b < 0):
            q = -q
        return self._wrap(q)

    def negate(self, a) -> int:
        return self._wrap(-self._check(a))

    def compare(self, a, b) -> int:
        a = self._check(a)
        b = self._check(b)
        return (a > b) - (a < b)

    def _root(self, a: int, n: int) -> int:
        # Integer Newton from above decreases monotonically to the floor root.
        x = 1 << -(-a.bit_length() // n)
        previous = None
        for _ in range(ROOT_MAX_ITERATIONS):
            y = ((n - 1) * x + a // x ** (n - 1)) // n
            if y >= x:
                return x
            previous, x = x, y
        raise ConvergenceError(
            f"nth_root: integer Newton did not settle in {ROOT_MAX_ITERATIONS} "
            f"iterations (last step {previous} -> {x})",
            iterations=ROOT_MAX_ITERATIONS,
            reason='max_iterations',
        )


class UnboundedIntegerOps(IntegerOps):
    """
    Python int arithmetic for an integer kind, without wraparound.

    Used to compute exact integer results that are range-checked against
    the kind afterwards.
    """

    __slots__ = ()

    def _wrap(self, v: int) -> int:
        return v


class FloatOps(_BaseOps):
    """IEEE binary floating point; Float32 rounds after every operation."""

    __slots__ = ('_single',)

    def __init__(self, kind: ElementKind) -> None:
        super().__init__(kind)
        self._single = kind is ElementKind.FLOAT32

    def _round(self, v: float) -> float:
        if self._single:
            return float(np.float32(v))
        return v

    def _check(self, v) -> float:
        if not isinstance(v, (float, np.floating)):
            self._reject(v)
        return float(v)

    def zero(self) -> float:
        return 0.0

    def one(self) -> float:
        return 1.0

    def from_int(self, value: int) -> float:
        return self._round(float(value))

    def coerce(self, value) -> float:
        if isinstance(value, (bool, np.bool_)):
            self._reject(value)
        if isinstance(value, (int, float, np.integer, np.floating, Decimal)):
            return self._round(float(value))
        self._reject(value)

    def to_float(self, value) -> float:
        return self._check(value)

    def add(self, a, b) -> float:
        return self._round(self._check(a) + self._check(b))

    def subtract(self, a, b) -> float:
        return self._round(self._check(a) - self._check(b))

    def multiply(self, a, b) -> float:
        return self._round(self._check(a) * self._check(b))

    def divide(self, a, b) -> float:
        return self._round(self._check(a) / self._check(b))

    def negate(self, a) -> float:
        return -self._check(a)

    def compare(self, a, b) -> int:
        a = self._check(a)
        b = self._check(b)
        return (a > b) - (a < b)

    def _root(self, a: float, n: int) -> float:
        if not math.isfinite(a):
            return a
        _, exponent = math.frexp(a)
        seed = self._round(math.ldexp(1.0, exponent // n))

        def step(x: float) -> float:
            return self._round(((n - 1) * x + a / x ** (n - 1)) / n)

        return self._newton(step, seed, f"{self._kind.value} nth_root")


class DecimalOps(_BaseOps):
    """decimal.Decimal arithmetic in a private context."""

    __slots__ = ('_ctx',)

    def __init__(self, kind: ElementKind, precision: int = DECIMAL_PRECISION) -> None:
        super().__init__(kind)
        self._ctx = decimal.Context(prec=precision)

    @property
    def context(self) -> decimal.Context:
        return self._ctx

    def _check(self, v) -> Decimal:
        if not isinstance(v, Decimal):
            self._reject(v)
        return v

    def zero(self) -> Decimal:
        return Decimal(0)

    def one(self) -> Decimal:
        return Decimal(1)

    def from_int(self, value: int) -> Decimal:
        return self._ctx.create_decimal(int(value))

    def coerce(self, value) -> Decimal:
        """Floats convert through their shortest repr, so 0.1 -> Decimal('0.1')."""
        if isinstance(value, (bool, np.bool_)):
            self._reject(value)
        if isinstance(value, Decimal):
            return self._ctx.plus(value)
        if isinstance(value, (int, np.integer)):
            return self._ctx.create_decimal(int(value))
        if isinstance(value, (float, np.floating)):
            return self._ctx.create_decimal(repr(float(value)))
        if isinstance(value, str):
            try:
                return self._ctx.create_decimal(value)
            except decimal.InvalidOperation as e:
                raise UnsupportedKindError(f"decimal: cannot parse {value!r}") from e
        self._reject(value)

    def to_float(self, value) -> float:
        return float(self._check(value))

    def add(self, a, b) -> Decimal:
        return self._ctx.add(self._check(a), self._check(b))

    def subtract(self, a, b) -> Decimal:
        return self._ctx.subtract(self._check(a), self._check(b))

    def multiply(self, a, b) -> Decimal:
        return self._ctx.multiply(self._check(a), self._check(b))

    def divide(self, a, b) -> Decimal:
        return self._ctx.divide(self._check(a), self._check(b))

    def negate(self, a) -> Decimal:
        return self._ctx.minus(self._check(a))

    def compare(self, a, b) -> int:
        return int(self._ctx.compare(self._check(a), self._check(b)))

    def _root(self, a: Decimal, n: int) -> Decimal:
        ctx = self._ctx
        seed = ctx.scaleb(Decimal(1), a.adjusted() // n)
        degree = Decimal(n)
        lower = Decimal(n - 1)

        def step(x: Decimal) -> Decimal:
            return ctx.divide(
                ctx.add(ctx.multiply(lower, x), ctx.divide(a, ctx.power(x, n - 1))),
                degree,
            )

        return self._newton(step, seed, "decimal nth_root")


@lru_cache(maxsize=None)
def ops_for(kind) -> NumericOps:
    """
    Return the shared arithmetic kernel for an element kind.

    Args:
        kind: ElementKind or anything ElementKind.parse accepts

    Returns:
        IntegerOps, FloatOps or DecimalOps instance (cached per kind)
    """
    kind = ElementKind.parse(kind)
    if kind.is_integer:
        return IntegerOps(kind)
    if kind.is_float:
        return FloatOps(kind)
    return DecimalOps(kind)


def working_kind(kind) -> ElementKind:
    """
    Kind that dividing algorithms compute in.

    Integer kinds promote to Float64; Float32, Float64 and Decimal keep
    their own kind.
    """
    kind = ElementKind.parse(kind)
    if kind.is_integer:
        return ElementKind.FLOAT64
    return kind


def working_ops(kind) -> NumericOps:
    return ops_for(working_kind(kind))
