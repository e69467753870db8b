"""
Tests for the dense Matrix store.

Validates:
    - Construction, kind inference and coercion
    - Element access, slicing and in-place mutators
    - Structural copies never alias the source buffer
    - Elementwise arithmetic through the kind kernel
    - Products, norms and predicates
"""

from decimal import Decimal

import numpy as np
import pytest

from pymatrix import ElementKind, Matrix, identity
from pymatrix.core.exceptions import (
    DimensionError,
    UnsupportedKindError,
    UnsupportedOperationError,
    ValidationError,
)


@pytest.fixture
def nine():
    return Matrix.from_rows([[1, 2, 3], [4, 5, 6], [7, 8, 9]])


# ═══════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════


class TestConstruction:

    def test_default_zeros(self):
        A = Matrix(2, 3)
        assert A.shape == (2, 3)
        assert A.size == 6
        assert A.kind is ElementKind.FLOAT64
        assert A.to_list() == [[0.0, 0.0, 0.0], [0.0, 0.0, 0.0]]

    def test_fill(self):
        A = Matrix(2, 2, 'int8', fill=300)
        assert A.to_list() == [[44, 44], [44, 44]]

    @pytest.mark.parametrize("rows, cols", [(0, 2), (2, 0), (-1, 1), (2.0, 2)])
    def test_invalid_dimensions(self, rows, cols):
        with pytest.raises(DimensionError):
            Matrix(rows, cols)

    def test_from_rows_infers_kind(self):
        assert Matrix.from_rows([[1, 2], [3, 4]]).kind is ElementKind.INT32
        assert Matrix.from_rows([[1, 2.0]]).kind is ElementKind.FLOAT64
        assert Matrix.from_rows([[Decimal(1), 2]]).kind is ElementKind.DECIMAL

    def test_from_rows_explicit_kind(self):
        A = Matrix.from_rows([[1.9, -1.9]], kind='int16')
        assert A.to_list() == [[1, -1]]

    def test_from_rows_ragged(self):
        with pytest.raises(DimensionError, match="row 1"):
            Matrix.from_rows([[1, 2], [3]])

    def test_from_rows_empty(self):
        with pytest.raises(DimensionError):
            Matrix.from_rows([])

    def test_from_flat(self):
        A = Matrix.from_flat(2, 3, range(6))
        assert A.to_list() == [[0, 1, 2], [3, 4, 5]]
        with pytest.raises(DimensionError, match="expected 6 values"):
            Matrix.from_flat(2, 3, range(5))

    def test_from_array_dtype(self):
        A = Matrix.from_array(np.arange(6, dtype=np.int16).reshape(2, 3))
        assert A.kind is ElementKind.INT16
        assert A.get(1, 2) == 5

    def test_from_array_rejects_1d(self):
        with pytest.raises(DimensionError, match="2D"):
            Matrix.from_array(np.zeros(3))

    def test_from_array_rejects_bool(self):
        with pytest.raises(UnsupportedKindError):
            Matrix.from_array(np.ones((2, 2), dtype=bool))

    def test_float32_values_are_rounded(self):
        A = Matrix.from_rows([[0.1]], kind='float32')
        assert A.get(0, 0) == float(np.float32(0.1))

    def test_decimal_storage(self):
        A = Matrix.from_rows([[Decimal('0.1')]])
        assert isinstance(A.get(0, 0), Decimal)
        assert A.to_numpy().dtype == np.dtype(object)


# ═══════════════════════════════════════════════════════════════════════
# Element access
# ═══════════════════════════════════════════════════════════════════════


class TestAccess:

    def test_get_and_linear_index(self, nine):
        assert nine.get(1, 2) == 6
        assert nine.get(5) == 6
        assert nine[2, 0] == 7
        assert nine[8] == 9

    def test_out_of_range(self, nine):
        with pytest.raises(DimensionError, match="out of range"):
            nine.get(3, 0)
        with pytest.raises(DimensionError, match="out of range"):
            nine.get(9)

    def test_negative_subscripts(self, nine):
        assert nine[-1, 0] == 7
        assert nine[0, -1] == 3
        assert nine[-1] == 9
        assert nine[-1, :].to_list() == [[7, 8, 9]]
        assert nine[-2, :].to_list() == [[4, 5, 6]]
        assert nine[:, -1].to_list() == [[3], [6], [9]]
        nine[-1, -1] = 0
        assert nine.get(2, 2) == 0

    def test_named_accessors_reject_negative(self, nine):
        with pytest.raises(DimensionError, match="out of range"):
            nine.get(-1, 0)
        with pytest.raises(DimensionError, match="out of range"):
            nine.row(-1)

    def test_numpy_integer_indices(self, nine):
        assert nine.get(np.int64(1), np.int32(2)) == 6
        assert nine[np.int64(2), np.int64(0)] == 7
        assert nine.row(np.int64(0)).to_list() == [[1, 2, 3]]
        with pytest.raises(DimensionError):
            nine.get(np.bool_(True), 0)

    def test_set_coerces(self, nine):
        nine.set(0, 0, 7.9)
        assert nine.get(0, 0) == 7
        nine.set(4, -2)
        assert nine.get(1, 1) == -2
        nine[2, 2] = 0
        assert nine.get(2, 2) == 0

    def test_set_bad_arity(self, nine):
        with pytest.raises(ValidationError):
            nine.set(1)

    def test_slicing(self, nine):
        assert nine[0:2, 1:3].to_list() == [[2, 3], [5, 6]]
        assert nine[1, :].to_list() == [[4, 5, 6]]
        assert nine[:, 2].to_list() == [[3], [6], [9]]

    def test_row_and_column(self, nine):
        assert nine.row(1).shape == (1, 3)
        assert nine.row(1).to_flat() == [4, 5, 6]
        assert nine.column(1).shape == (3, 1)
        assert nine.column(1).to_flat() == [2, 5, 8]

    def test_set_row_and_column(self, nine):
        nine.set_row(0, [7, 8, 9])
        nine.set_column(2, Matrix.from_rows([[0], [0], [0]]))
        assert nine.to_list() == [[7, 8, 0], [4, 5, 0], [7, 8, 0]]

    def test_set_column_wrong_length(self, nine):
        with pytest.raises(DimensionError, match="expected 3 values"):
            nine.set_column(0, [1, 2])

    def test_set_row_kind_mismatch(self, nine):
        with pytest.raises(UnsupportedKindError):
            nine.set_row(0, Matrix.from_rows([[1.0, 2.0, 3.0]]))


# ═══════════════════════════════════════════════════════════════════════
# Structure
# ═══════════════════════════════════════════════════════════════════════


class TestStructure:

    def test_transpose(self):
        A = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        assert A.T.shape == (3, 2)
        assert A.transpose().to_list() == [[1, 4], [2, 5], [3, 6]]

    def test_derived_values_do_not_alias(self, nine):
        T = nine.transpose()
        S = nine.submatrix(0, 2, 0, 2)
        C = nine.copy()
        T.set(0, 0, 100)
        S.set(0, 0, 100)
        C.set(0, 0, 100)
        assert nine.get(0, 0) == 1

    def test_submatrix_invalid(self, nine):
        with pytest.raises(DimensionError):
            nine.submatrix(1, 1, 0, 2)
        with pytest.raises(DimensionError):
            nine.submatrix(0, 4, 0, 2)

    def test_set_block(self, nine):
        nine.set_block(1, 1, Matrix.from_rows([[0, 0], [0, 0]]))
        assert nine.to_list() == [[1, 2, 3], [4, 0, 0], [7, 0, 0]]
        with pytest.raises(DimensionError):
            nine.set_block(2, 2, Matrix.from_rows([[0, 0], [0, 0]]))

    def test_minor(self, nine):
        assert nine.minor(1, 1).to_list() == [[1, 3], [7, 9]]
        with pytest.raises(DimensionError):
            Matrix.from_rows([[1, 2]]).minor(0, 0)

    def test_diagonal(self, nine):
        assert nine.diagonal() == [1, 5, 9]

    def test_swaps(self, nine):
        nine.swap_rows(0, 2)
        assert nine.row(0).to_flat() == [7, 8, 9]
        nine.swap_columns(0, 1)
        assert nine.row(0).to_flat() == [8, 7, 9]

    def test_shuffle_rows_is_permutation(self, nine, rng):
        nine.shuffle_rows(rng)
        assert sorted(nine.to_list()) == [[1, 2, 3], [4, 5, 6], [7, 8, 9]]

    def test_shuffle_columns_reproducible(self, nine):
        a = nine.copy()
        b = nine.copy()
        a.shuffle_columns(np.random.default_rng(7))
        b.shuffle_columns(np.random.default_rng(7))
        assert a == b
        assert sorted(a.row(0).to_flat()) == [1, 2, 3]

    def test_reshape(self):
        A = Matrix.from_rows([[1, 2, 3], [4, 5, 6]])
        A.reshape(3, 2)
        assert A.to_list() == [[1, 2], [3, 4], [5, 6]]
        with pytest.raises(DimensionError):
            A.reshape(4, 2)

    def test_resize(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        A.resize(3, 3)
        assert A.to_list() == [[1, 2, 0], [3, 4, 0], [0, 0, 0]]
        A.resize(1, 1)
        assert A.to_list() == [[1]]

    def test_concatenate(self):
        a = Matrix.from_rows([[1, 2]])
        b = Matrix.from_rows([[3, 4]])
        assert a.concatenate_vertically(b).to_list() == [[1, 2], [3, 4]]
        assert a.concatenate_horizontally(b).to_list() == [[1, 2, 3, 4]]
        with pytest.raises(DimensionError):
            a.concatenate_horizontally(Matrix.from_rows([[1], [2]]))
        with pytest.raises(UnsupportedKindError):
            a.concatenate_vertically(Matrix.from_rows([[1.0, 2.0]]))

    def test_delete(self, nine):
        assert nine.delete_rows(0, 2).to_list() == [[4, 5, 6]]
        assert nine.delete_columns(1).to_list() == [[1, 3], [4, 6], [7, 9]]
        with pytest.raises(DimensionError):
            nine.delete_rows(0, 1, 2)

    def test_astype(self):
        A = Matrix.from_rows([[1.7, -1.7]])
        B = A.astype('int32')
        assert B.kind is ElementKind.INT32
        assert B.to_list() == [[1, -1]]
        assert Matrix.from_rows([[1, 2]]).working_copy().kind is ElementKind.FLOAT64


# ═══════════════════════════════════════════════════════════════════════
# Elementwise arithmetic
# ═══════════════════════════════════════════════════════════════════════


class TestElementwise:

    def test_plus_minus(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        B = Matrix.from_rows([[4, 3], [2, 1]])
        assert (A + B).to_list() == [[5, 5], [5, 5]]
        assert (A - B).to_list() == [[-3, -1], [1, 3]]
        assert (A + 1).to_list() == [[2, 3], [4, 5]]
        assert (-A).to_list() == [[-1, -2], [-3, -4]]

    def test_integer_wraparound(self):
        A = Matrix.from_rows([[100]], kind='int8')
        assert (A + A).get(0, 0) == -56

    def test_kind_mismatch(self):
        with pytest.raises(UnsupportedKindError, match="Kind mismatch"):
            Matrix.from_rows([[1]]) + Matrix.from_rows([[1.0]])

    def test_shape_mismatch(self):
        with pytest.raises(DimensionError, match="Shape mismatch"):
            Matrix(2, 2) + Matrix(2, 3)

    def test_scale_and_hadamard(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        assert (2 * A).to_list() == [[2, 4], [6, 8]]
        assert (A * 3).to_list() == [[3, 6], [9, 12]]
        assert (A * A).to_list() == [[1, 4], [9, 16]]

    def test_divide_elements_truncates(self):
        A = Matrix.from_rows([[7, -7]])
        assert A.divide_elements(2).to_list() == [[3, -3]]

    def test_divide_by_zero(self):
        A = Matrix.from_rows([[1.0, 2.0]])
        with pytest.raises(ZeroDivisionError):
            A.divide_elements(Matrix.from_rows([[1.0, 0.0]]))

    def test_decimal_is_exact(self):
        A = Matrix.from_rows([[Decimal('0.1')]])
        assert (A + Decimal('0.2')).get(0, 0) == Decimal('0.3')


# ═══════════════════════════════════════════════════════════════════════
# Products and norms
# ═══════════════════════════════════════════════════════════════════════


class TestProducts:

    def test_multiply(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        B = Matrix.from_rows([[5, 6], [7, 8]])
        assert (A @ B).to_list() == [[19, 22], [43, 50]]
        assert A.multiply(B) == A @ B

    def test_matrix_times_vector(self):
        A = Matrix.from_rows([[1, 2], [3, 4]])
        x = Matrix.from_rows([[1], [1]])
        assert (A @ x).to_list() == [[3], [7]]

    def test_vector_times_vector_rejected(self):
        u = Matrix.from_rows([[1, 2, 3]])
        v = Matrix.from_rows([[4], [5], [6]])
        with pytest.raises(UnsupportedOperationError, match="dot"):
            u @ v

    def test_inner_dimension_mismatch(self):
        with pytest.raises(DimensionError, match="inner dimensions"):
            Matrix(2, 3) @ Matrix(2, 3)

    def test_dot_and_outer(self):
        u = Matrix.from_rows([[1, 2, 3]])
        v = Matrix.from_rows([[4], [5], [6]])
        assert u.dot(v) == 32
        col = Matrix.from_rows([[1], [2]])
        row = Matrix.from_rows([[3, 4]])
        assert col.outer(row).to_list() == [[3, 4], [6, 8]]

    def test_dot_length_mismatch(self):
        with pytest.raises(DimensionError):
            Matrix.from_rows([[1, 2]]).dot(Matrix.from_rows([[1, 2, 3]]))

    def test_kronecker(self):
        a = Matrix.from_rows([[1, 2]])
        b = Matrix.from_rows([[0, 1], [1, 0]])
        assert a.kronecker(b).to_list() == [[0, 1, 0, 2], [1, 0, 2, 0]]

    def test_trace(self, nine):
        assert nine.trace() == 15
        with pytest.raises(DimensionError):
            Matrix(2, 3).trace()

    def test_norms(self):
        A = Matrix.from_rows([[1, -2], [3, 4]])
        assert A.norm() == pytest.approx(np.sqrt(30.0))
        assert A.norm(1) == 6
        assert A.norm('inf') == 7
        with pytest.raises(UnsupportedOperationError):
            A.norm('max')


# ═══════════════════════════════════════════════════════════════════════
# Predicates and comparison
# ═══════════════════════════════════════════════════════════════════════


class TestPredicates:

    def test_identity_and_triangular(self):
        assert identity(3).is_identity()
        assert identity(3).is_diagonal()
        U = Matrix.from_rows([[1, 2], [0, 3]])
        assert U.is_upper_triangular()
        assert not U.is_lower_triangular()
        assert U.T.is_lower_triangular()
        assert not Matrix(2, 3).is_identity()

    def test_vectors(self):
        assert Matrix(1, 3).is_vector()
        assert Matrix(1, 3).is_row_vector()
        assert Matrix(3, 1).is_column_vector()
        assert not Matrix(1, 1).is_vector()
        assert not Matrix(2, 2).is_vector()

    def test_symmetric(self, symmetric_matrix):
        assert symmetric_matrix.is_symmetric()
        A = Matrix.from_rows([[1.0, 2.0], [2.0 + 1e-12, 1.0]])
        assert not A.is_symmetric()
        assert A.is_symmetric(tol=1e-9)
        assert not Matrix(2, 3).is_symmetric()

    def test_orthogonal(self):
        assert Matrix.from_rows([[0, -1], [1, 0]]).is_orthogonal()
        c = s = np.sqrt(0.5)
        assert Matrix.from_rows([[c, -s], [s, c]]).is_orthogonal()
        assert not Matrix.from_rows([[1.0, 1.0], [0.0, 1.0]]).is_orthogonal()

    def test_equality_requires_same_kind(self):
        assert Matrix.from_rows([[1, 2]]) == Matrix.from_rows([[1, 2]])
        assert Matrix.from_rows([[1, 2]]) != Matrix.from_rows([[1.0, 2.0]])
        assert Matrix.from_rows([[1, 2]]) != Matrix.from_rows([[1], [2]])

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Matrix(1, 1))

    def test_allclose(self):
        A = Matrix.from_rows([[1.0, 2.0]])
        assert A.allclose(Matrix.from_rows([[1.0 + 1e-13, 2.0]]))
        assert not A.allclose(Matrix.from_rows([[1.1, 2.0]]))
        assert A.allclose(Matrix.from_rows([[1, 2]]))
        assert not A.allclose(Matrix(2, 1))


class TestShortcutsAndFormatting:

    def test_determinant(self, int_example):
        assert int_example.determinant() == -6

    def test_inverse(self, int_example):
        inv = int_example.inverse()
        assert inv.kind is ElementKind.FLOAT64
        expected = Matrix.from_rows([[-0.5, 0.5], [1.0, -2.0 / 3.0]])
        assert inv.allclose(expected)

    def test_str(self):
        assert str(Matrix.from_rows([[1, 10], [100, 2]])) == "[  1  10]\n[100   2]"

    def test_repr(self):
        assert repr(Matrix.from_rows([[1, 2]])) == "Matrix(1x2 int32, [[1, 2]])"
