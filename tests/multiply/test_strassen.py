"""
Tests for Strassen multiplication.
"""

from decimal import Decimal

import numpy as np
import pytest

from pymatrix import ElementKind, Matrix, identity, random_matrix
from pymatrix.core.exceptions import DimensionError, UnsupportedKindError, ValidationError
from pymatrix.multiply import partition, strassen


class TestStrassen:

    @pytest.mark.parametrize("threshold", [1, 2, 4, 32])
    def test_integer_exact(self, rng, threshold):
        a = rng.integers(-9, 10, size=(8, 8))
        b = rng.integers(-9, 10, size=(8, 8))
        A = Matrix.from_rows(a.tolist())
        B = Matrix.from_rows(b.tolist())
        C = strassen(A, B, threshold=threshold)
        assert C.kind is ElementKind.INT32
        assert C.to_list() == (a @ b).tolist()
        assert C == A @ B

    def test_float(self, rng):
        A = random_matrix(16, 16, rng=rng)
        B = random_matrix(16, 16, rng=rng)
        C = strassen(A, B, threshold=2)
        expected = A.to_numpy() @ B.to_numpy()
        np.testing.assert_allclose(np.array(C.to_list()), expected, rtol=1e-12, atol=1e-12)

    def test_decimal(self):
        A = Matrix.from_rows([[Decimal('0.1'), Decimal('0.2')],
                              [Decimal('0.3'), Decimal('0.4')]])
        C = strassen(A, identity(2, 'decimal'), threshold=1)
        assert C == A

    def test_one_by_one(self):
        C = strassen(Matrix.from_rows([[3]]), Matrix.from_rows([[4]]))
        assert C.to_list() == [[12]]

    def test_rejects_non_power_of_two(self):
        with pytest.raises(DimensionError, match="power of two"):
            strassen(Matrix(3, 3), Matrix(3, 3))

    def test_rejects_non_square(self):
        with pytest.raises(DimensionError):
            strassen(Matrix(2, 4), Matrix(4, 2))

    def test_rejects_order_mismatch(self):
        with pytest.raises(DimensionError, match="orders differ"):
            strassen(Matrix(2, 2), Matrix(4, 4))

    def test_rejects_kind_mismatch(self):
        with pytest.raises(UnsupportedKindError):
            strassen(Matrix(2, 2, 'int32'), Matrix(2, 2, 'float64'))

    def test_rejects_bad_threshold(self):
        with pytest.raises(ValidationError, match="threshold"):
            strassen(Matrix(2, 2), Matrix(2, 2), threshold=0)


class TestPartition:

    def test_quadrants(self):
        A = Matrix.from_flat(4, 4, range(16))
        a11, a12, a21, a22 = partition(A)
        assert a11.to_list() == [[0, 1], [4, 5]]
        assert a12.to_list() == [[2, 3], [6, 7]]
        assert a21.to_list() == [[8, 9], [12, 13]]
        assert a22.to_list() == [[10, 11], [14, 15]]

    def test_odd_order(self):
        with pytest.raises(DimensionError, match="even"):
            partition(Matrix(3, 3))
