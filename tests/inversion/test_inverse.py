"""
Tests for matrix inversion and integer powers.
"""

from decimal import Decimal

import numpy as np
import pytest

from pymatrix import ElementKind, Matrix, identity
from pymatrix.core.exceptions import (
    DimensionError,
    SingularMatrixError,
    UnsupportedOperationError,
    ValidationError,
)
from pymatrix.inversion import inverse, matrix_power

METHODS = ['gauss_jordan', 'comatrix', 'lu', 'lup']


class TestInverse:

    @pytest.mark.parametrize("method", METHODS)
    def test_matches_numpy(self, random_square, method):
        inv = inverse(random_square, method=method)
        expected = np.linalg.inv(random_square.to_numpy())
        np.testing.assert_allclose(np.array(inv.to_list()), expected, rtol=1e-9, atol=1e-12)

    @pytest.mark.parametrize("method", METHODS)
    def test_product_is_identity(self, random_square, method):
        inv = inverse(random_square, method=method)
        assert (random_square @ inv).allclose(identity(4), rtol=1e-9, atol=1e-12)

    def test_comatrix_int_example(self, int_example):
        inv = inverse(int_example, method='comatrix')
        assert inv.kind is ElementKind.FLOAT64
        assert inv.to_list() == [[-0.5, 0.5], [1.0, -2.0 / 3.0]]

    @pytest.mark.parametrize("method", METHODS)
    def test_narrow_integer_kind(self, method):
        # det = 256 does not fit int8; every method works in float64
        A = Matrix.from_rows([[16, 0], [0, 16]], kind='int8')
        inv = inverse(A, method=method)
        assert inv.kind is ElementKind.FLOAT64
        assert inv.to_list() == [[0.0625, 0.0], [0.0, 0.0625]]

    def test_decimal(self):
        A = Matrix.from_rows([[Decimal(2), Decimal(0)], [Decimal(0), Decimal(4)]])
        inv = inverse(A)
        assert inv.kind is ElementKind.DECIMAL
        assert inv.to_list() == [[Decimal('0.5'), Decimal(0)], [Decimal(0), Decimal('0.25')]]

    @pytest.mark.parametrize("method", METHODS)
    def test_singular(self, method):
        with pytest.raises(SingularMatrixError):
            inverse(Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]]), method=method)

    def test_lu_needs_pivoting(self):
        A = Matrix.from_rows([[0.0, 1.0], [1.0, 0.0]])
        with pytest.raises(SingularMatrixError):
            inverse(A, method='lu')
        assert inverse(A, method='lup') == A

    @pytest.mark.parametrize("name", ['Gauss-Jordan', 'adjugate', 'cofactor', 'LUP'])
    def test_aliases(self, int_example, name):
        assert inverse(int_example, method=name).allclose(
            Matrix.from_rows([[-0.5, 0.5], [1.0, -2.0 / 3.0]])
        )

    def test_unknown_method(self, int_example):
        with pytest.raises(UnsupportedOperationError):
            inverse(int_example, method='newton')

    def test_non_square(self):
        with pytest.raises(DimensionError):
            inverse(Matrix(2, 3))


class TestMatrixPower:

    def test_fibonacci(self):
        F = Matrix.from_rows([[1, 1], [1, 0]])
        assert matrix_power(F, 10).to_list() == [[89, 55], [55, 34]]

    def test_zero_gives_identity(self, int_example):
        result = matrix_power(int_example, 0)
        assert result.kind is ElementKind.INT32
        assert result.is_identity()

    def test_negative(self):
        A = Matrix.from_rows([[2, 0], [0, 4]])
        assert matrix_power(A, -1).to_list() == [[0.5, 0.0], [0.0, 0.25]]
        assert matrix_power(A, -2).to_list() == [[0.25, 0.0], [0.0, 0.0625]]

    def test_rejects_non_int(self, int_example):
        with pytest.raises(ValidationError):
            matrix_power(int_example, 1.5)
