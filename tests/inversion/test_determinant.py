"""
Tests for determinants, minors and cofactors.

Validates:
    - Cofactor expansion is exact in the source kind and raises on overflow
    - LU and QR routes agree with numpy.linalg.det
    - The QR route recovers the sign of det(Q)
"""

from decimal import Decimal

import numpy as np
import pytest

from pymatrix import ElementKind, Matrix, identity, permutation_matrix
from pymatrix.core.exceptions import DimensionError, NumericalError, UnsupportedOperationError
from pymatrix.inversion import adjugate, cofactor, cofactor_matrix, comatrix, determinant, minor

ALL_METHODS = ['cofactor', 'lu', 'householder', 'givens', 'gram_schmidt']


@pytest.fixture
def classic():
    """3x3 Int32 with determinant -306."""
    return Matrix.from_rows([[6, 1, 1], [4, -2, 5], [2, 8, 7]])


class TestCofactorDeterminant:

    def test_int_example(self, int_example):
        det = determinant(int_example)
        assert det == -6
        assert isinstance(det, int)

    def test_classic(self, classic):
        assert determinant(classic) == -306

    def test_one_by_one(self):
        assert determinant(Matrix.from_rows([[7]])) == 7

    def test_decimal_exact(self):
        A = Matrix.from_rows([[Decimal('0.1'), Decimal('0.2')],
                              [Decimal('0.3'), Decimal('0.4')]])
        assert determinant(A) == Decimal('-0.02')

    def test_overflow_raises(self):
        A = Matrix.from_rows([[100, 0], [0, 2]], kind='int8')
        with pytest.raises(NumericalError, match="overflows int8"):
            determinant(A)

    def test_overflow_checked_on_result_only(self):
        # 100·3 and 100·2 overflow int8, the determinant 100 does not
        A = Matrix.from_rows([[100, 100], [2, 3]], kind='int8')
        det = determinant(A)
        assert det == 100
        assert isinstance(det, int)

    def test_agrees_with_lu_on_narrow_kind(self):
        A = Matrix.from_rows([[16, 0], [0, 15]], kind='int16')
        assert determinant(A) == 240
        assert determinant(A, method='lu') == pytest.approx(240.0)

    def test_overflow_without_wraparound_to_zero(self):
        A = Matrix.from_rows([[16, 0], [0, 16]], kind='int8')
        with pytest.raises(NumericalError):
            determinant(A)
        assert determinant(A, method='lu') == pytest.approx(256.0)

    def test_alias(self, classic):
        assert determinant(classic, method='recursive') == -306


class TestFactorizationDeterminant:

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_matches_numpy(self, random_square, method):
        expected = np.linalg.det(random_square.to_numpy())
        assert float(determinant(random_square, method=method)) == pytest.approx(expected, rel=1e-9)

    @pytest.mark.parametrize("method", ALL_METHODS)
    def test_classic(self, classic, method):
        assert float(determinant(classic, method=method)) == pytest.approx(-306.0, rel=1e-12)

    @pytest.mark.parametrize("method", ['lu', 'householder', 'givens', 'gram_schmidt'])
    def test_odd_permutation(self, method):
        P = permutation_matrix([1, 0, 2], kind='float64')
        assert determinant(P, method=method) == pytest.approx(-1.0)

    def test_lu_returns_working_kind(self, int_example):
        det = determinant(int_example, method='LUP')
        assert isinstance(det, float)
        assert det == pytest.approx(-6.0)

    def test_singular(self):
        assert determinant(Matrix.from_rows([[1.0, 2.0], [2.0, 4.0]]), method='lu') == 0.0

    def test_non_square(self):
        with pytest.raises(DimensionError):
            determinant(Matrix(2, 3))

    def test_unknown_method(self, int_example):
        with pytest.raises(UnsupportedOperationError):
            determinant(int_example, method='bareiss')


class TestCofactors:

    @pytest.fixture
    def nine(self):
        return Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])

    def test_minor(self, nine):
        assert minor(nine, 0, 0).to_list() == [[5, 6], [8, 9]]

    def test_cofactor_signs(self, nine):
        assert cofactor(nine, 0, 0) == -3
        assert cofactor(nine, 0, 1) == 6

    def test_cofactor_out_of_range(self, nine):
        with pytest.raises(DimensionError):
            cofactor(nine, 3, 0)

    def test_cofactor_overflow(self):
        A = Matrix.from_rows([[1, 0, 0], [0, 100, 0], [0, 0, 2]], kind='int8')
        assert cofactor(A, 1, 1) == 2
        with pytest.raises(NumericalError):
            cofactor(A, 0, 0)
        with pytest.raises(NumericalError):
            cofactor_matrix(A)

    def test_cofactor_matrix(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        C = cofactor_matrix(A)
        assert C.kind is ElementKind.INT32
        assert C.to_list() == [[4, -3], [-2, 1]]
        assert comatrix(A) == C

    def test_one_by_one_cofactor_matrix(self):
        assert cofactor_matrix(Matrix.from_rows([[5]])).to_list() == [[1]]

    def test_adjugate(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        assert adjugate(A).to_list() == [[4, -2], [-3, 1]]

    def test_adjugate_identity(self, classic):
        # A·adj(A) = det(A)·I
        product = classic @ adjugate(classic)
        assert product.to_list() == [[-306, 0, 0], [0, -306, 0], [0, 0, -306]]


class TestIdentity:

    @pytest.mark.parametrize("kind", ['int8', 'int32', 'float32', 'float64', 'decimal'])
    def test_identity_determinant_is_one(self, kind):
        eye = identity(3, kind)
        assert eye.is_identity()
        assert determinant(eye) == 1
        assert float(determinant(eye, method='lu')) == pytest.approx(1.0)
