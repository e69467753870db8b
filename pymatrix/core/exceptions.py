"""
Exception hierarchy for PyMatrix.

All exceptions inherit from PyMatrixError to allow catching any
library-specific error. Algorithm packages raise the classes defined here
rather than defining their own.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Numerical failures are also ArithmeticError, so callers that only
      know the builtin hierarchy can still catch them
"""


class PyMatrixError(Exception):
    """Base exception for all PyMatrix errors."""
    pass


class ValidationError(PyMatrixError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Matrix dimensions are incorrect or inconsistent.

    Raised for non-positive sizes, out-of-range indices, shape mismatches
    between operands, and non-square input to square-only algorithms.
    """
    pass


class UnsupportedKindError(ValidationError):
    """
    Element kind is not supported or does not match.

    Raised when a value or matrix of one element kind is combined with a
    different kind, or when an unknown kind is requested.
    """
    pass


class UnsupportedOperationError(PyMatrixError):
    """
    Requested operation or method is not available.

    Raised for unknown decomposition / inversion method names and for
    vector-by-vector products routed through the general multiply.
    """
    pass


class NumericalError(PyMatrixError, ArithmeticError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular.

    Raised when an algorithm needs to divide by a pivot or determinant that
    is exactly the additive identity of the element kind.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Diagonal index of the zero pivot, if known
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (typically n)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised by Cholesky when a diagonal entry is not positive, a radicand
    turns negative or a pivot is zero.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        pivot_index: Row at which the factorization broke down, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        pivot_index: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.pivot_index = pivot_index


class ConvergenceError(PyMatrixError):
    """
    Iterative algorithm failed to converge.

    Raised when an iteration (Newton root refinement) fails to settle within
    its iteration cap. Eigen and SVD iterations report non-convergence as a
    warning instead.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final change between iterates
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
