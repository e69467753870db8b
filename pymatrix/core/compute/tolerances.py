"""
Tolerance tiers and engine constants.

Defines precision expectations for each element kind:
- Integer kinds: algorithms that divide run in Float64, so they share
  the Float64 tier
- Float64: double precision
- Float32: relaxed for single-precision arithmetic
- Decimal: 34 significant digits, far tighter than either float

Used by the test suite, the symmetry checks (Cholesky, Jacobi) and the
rank / rank-deficiency decisions.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance settings for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FLOAT64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='float64',
    description='Double precision (also used for integer kinds)',
)

FLOAT32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='float32',
    description='Single precision',
)

DECIMAL = ToleranceTier(
    rtol=1e-25,
    atol=1e-28,
    name='decimal',
    description='Decimal arithmetic at 34 significant digits',
)

# Decimal context precision (significant digits), IEEE 754 decimal128.
DECIMAL_PRECISION = 34

# Strassen falls back to the direct product at or below this dimension.
STRASSEN_THRESHOLD = 32

# Singular values above this count toward the rank.
RANK_TOLERANCE = 1e-10

JACOBI_TOLERANCE = 1e-10
JACOBI_MAX_ITERATIONS = 1000

QR_EIGEN_TOLERANCE = 1e-10
QR_EIGEN_MAX_ITERATIONS = 500

SVD_TOLERANCE = 1e-12
SVD_MAX_SWEEPS = 2000

# Newton refinement cap for sqrt / nth_root.
ROOT_MAX_ITERATIONS = 200


def select_tolerance(kind) -> ToleranceTier:
    """Select the tolerance tier for an element kind (ElementKind or name)."""
    key = getattr(kind, 'value', kind)
    if key == 'decimal':
        return DECIMAL
    if key == 'float32':
        return FLOAT32
    return FLOAT64
