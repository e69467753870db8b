"""
Tests for the PyMatrix exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyMatrixError)
    - Numerical errors are also builtin ArithmeticError
    - Diagnostic attributes on SingularMatrixError, NotPositiveDefiniteError,
      ConvergenceError
    - Default attribute values (None for optional attributes)
"""

import pytest

from pymatrix.core.exceptions import (
    ConvergenceError,
    DimensionError,
    NotPositiveDefiniteError,
    NumericalError,
    PyMatrixError,
    SingularMatrixError,
    UnsupportedKindError,
    UnsupportedOperationError,
    ValidationError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyMatrixError."""

    def test_validation_error_is_pymatrix_error(self):
        with pytest.raises(PyMatrixError):
            raise ValidationError("bad input")

    def test_dimension_error_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise DimensionError("wrong shape")

    def test_unsupported_kind_is_validation_error(self):
        with pytest.raises(ValidationError):
            raise UnsupportedKindError("int32 vs decimal")

    def test_unsupported_operation_is_pymatrix_error(self):
        err = UnsupportedOperationError("unknown method")
        assert isinstance(err, PyMatrixError)
        assert not isinstance(err, ValidationError)

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_numerical_errors_are_arithmetic_errors(self):
        with pytest.raises(ArithmeticError):
            raise SingularMatrixError("singular")
        with pytest.raises(ArithmeticError):
            raise NotPositiveDefiniteError("not PD")

    def test_convergence_error_is_not_numerical_error(self):
        err = ConvergenceError("did not converge", iterations=100)
        assert isinstance(err, PyMatrixError)
        assert not isinstance(err, NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:

    def test_all_attributes(self):
        err = SingularMatrixError(
            "U is singular",
            matrix_name="U",
            pivot_index=2,
            condition_number=1e18,
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "U is singular"
        assert err.matrix_name == "U"
        assert err.pivot_index == 2
        assert err.condition_number == 1e18
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.pivot_index is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None


class TestNotPositiveDefiniteError:

    def test_attributes(self):
        err = NotPositiveDefiniteError("Cholesky failed", matrix_name="A", pivot_index=1)
        assert err.matrix_name == "A"
        assert err.pivot_index == 1

    def test_defaults_are_none(self):
        err = NotPositiveDefiniteError("not PD")
        assert err.matrix_name is None
        assert err.pivot_index is None


class TestConvergenceError:

    def test_all_attributes(self):
        err = ConvergenceError(
            "Newton did not settle",
            iterations=200,
            final_change=1e-4,
            reason="max_iterations",
            threshold=1e-8,
        )
        assert str(err) == "Newton did not settle"
        assert err.iterations == 200
        assert err.final_change == 1e-4
        assert err.reason == "max_iterations"
        assert err.threshold == 1e-8

    def test_iterations_required(self):
        with pytest.raises(TypeError):
            ConvergenceError("missing iterations")
