"""
Dense matrix store.

A Matrix owns a flat row-major numpy buffer of exactly rows * cols
elements of one ElementKind, plus the arithmetic kernel for that kind.
Elements read from the store are plain Python numbers (int, float,
decimal.Decimal); elements written are coerced to the kind.

Every derived value (transpose, sub-matrix, sums, products) is a new
Matrix with its own buffer. Only set, set_block, set_row, set_column,
swap_rows, swap_columns, reshape and resize mutate in place.

Element arithmetic always goes through the kernel (Matrix.ops), never
through numpy ufuncs, so Decimal keeps its context precision and the
integer kinds keep their wraparound semantics.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Iterable

import numpy as np

from pymatrix.core.compute.linalg import grid_product
from pymatrix.core.compute.tolerances import select_tolerance
from pymatrix.core.exceptions import (
    DimensionError,
    UnsupportedKindError,
    UnsupportedOperationError,
    ValidationError,
)
from pymatrix.core.protocols import NumericOps
from pymatrix.core.validation import (
    check_dimensions,
    check_index,
    check_matrix,
    check_same_kind,
    check_same_shape,
    check_square,
)
from pymatrix.kinds.kind import ElementKind, infer_kind
from pymatrix.kinds.ops import ops_for, working_ops


class Matrix:
    """
    Rectangular grid of numeric values of one element kind.

    Args:
        rows: Number of rows (> 0)
        cols: Number of columns (> 0)
        kind: ElementKind or name ('int32', 'float64', 'decimal', ...)
        fill: Initial value for every element (default: zero of the kind)

    Examples:
        >>> A = Matrix.from_rows([[4, 3], [6, 3]])
        >>> A.kind
        <ElementKind.INT32: 'int32'>
        >>> A.determinant()
        -6
    """

    __slots__ = ('_rows', '_cols', '_kind', '_ops', '_data')

    def __init__(
        self,
        rows: int,
        cols: int,
        kind: ElementKind | str = ElementKind.FLOAT64,
        fill: Any = None,
    ) -> None:
        check_dimensions(rows, cols, "Matrix")
        kind = ElementKind.parse(kind)
        ops = ops_for(kind)
        value = ops.zero() if fill is None else ops.coerce(fill)
        self._rows = rows
        self._cols = cols
        self._kind = kind
        self._ops = ops
        self._data = np.full(rows * cols, value, dtype=kind.dtype)

    # -- Internal constructors (values already belong to the kind) --

    @classmethod
    def _from_data(cls, rows: int, cols: int, kind: ElementKind, data: np.ndarray) -> Matrix:
        obj = cls.__new__(cls)
        obj._rows = rows
        obj._cols = cols
        obj._kind = kind
        obj._ops = ops_for(kind)
        obj._data = data
        return obj

    @classmethod
    def _from_flat(cls, rows: int, cols: int, kind: ElementKind, values: list) -> Matrix:
        data = np.empty(rows * cols, dtype=kind.dtype)
        data[:] = values
        return cls._from_data(rows, cols, kind, data)

    @classmethod
    def _from_grid(cls, grid: list[list], kind: ElementKind) -> Matrix:
        rows = len(grid)
        cols = len(grid[0])
        return cls._from_flat(rows, cols, kind, [v for row in grid for v in row])

    # -- Public constructors --

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Any]], kind: ElementKind | str | None = None) -> Matrix:
        """
        Build a matrix from nested row sequences.

        Without an explicit kind, Python ints give Int32 (Int64 if a value
        does not fit), any float gives Float64 and any Decimal gives Decimal.

        Raises:
            DimensionError: If the input is empty or ragged
        """
        grid = [list(r) for r in rows]
        if not grid or not grid[0]:
            raise DimensionError("from_rows: matrix must have at least one row and one column")
        width = len(grid[0])
        for i, r in enumerate(grid):
            if len(r) != width:
                raise DimensionError(
                    f"from_rows: row {i} has {len(r)} elements, expected {width}"
                )
        flat = [v for r in grid for v in r]
        return cls.from_flat(len(grid), width, flat, kind)

    @classmethod
    def from_flat(
        cls,
        rows: int,
        cols: int,
        values: Iterable[Any],
        kind: ElementKind | str | None = None,
    ) -> Matrix:
        """
        Build a matrix from a row-major flat sequence of rows * cols values.

        Raises:
            DimensionError: If the number of values is not rows * cols
        """
        check_dimensions(rows, cols, "from_flat")
        values = list(values)
        if len(values) != rows * cols:
            raise DimensionError(
                f"from_flat: expected {rows * cols} values for {rows}x{cols}, "
                f"got {len(values)}"
            )
        kind = infer_kind(values) if kind is None else ElementKind.parse(kind)
        ops = ops_for(kind)
        return cls._from_flat(rows, cols, kind, [ops.coerce(v) for v in values])

    @classmethod
    def from_array(cls, array: Any, kind: ElementKind | str | None = None) -> Matrix:
        """
        Build a matrix from a 2-D numpy array (or array-like).

        The kind is taken from the dtype when not given; object arrays are
        inspected element by element.

        Raises:
            DimensionError: If the array is not 2-D or is empty
            UnsupportedKindError: If the dtype maps to no element kind
        """
        arr = np.asarray(array)
        if arr.ndim != 2:
            raise DimensionError(
                f"from_array: expected 2D array, got {arr.ndim}D with shape {arr.shape}"
            )
        rows, cols = arr.shape
        check_dimensions(rows, cols, "from_array")
        values = arr.ravel().tolist()
        if kind is None:
            if arr.dtype == object:
                kind = infer_kind(values)
            elif arr.dtype == np.bool_:
                raise UnsupportedKindError("from_array: boolean arrays are not supported")
            else:
                kind = ElementKind.parse(arr.dtype)
        return cls.from_flat(rows, cols, values, kind)

    # -- Shape and kind --

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    @property
    def size(self) -> int:
        return self._rows * self._cols

    @property
    def kind(self) -> ElementKind:
        return self._kind

    @property
    def ops(self) -> NumericOps:
        """Arithmetic kernel of this matrix's kind."""
        return self._ops

    # -- Element access --

    def _read(self, k: int):
        v = self._data[k]
        if self._kind is ElementKind.DECIMAL:
            return v
        return v.item()

    def _linear(self, i: int, j: int | None) -> int:
        if j is None:
            check_index(i, self.size, "index")
            return i
        check_index(i, self._rows, "row")
        check_index(j, self._cols, "column")
        return i * self._cols + j

    def get(self, i: int, j: int | None = None):
        """Element at (i, j), or at row-major linear index i."""
        return self._read(self._linear(i, j))

    def set(self, *args) -> None:
        """
        Assign one element: set(i, j, value) or set(index, value).

        The value is coerced to the matrix kind.
        """
        if len(args) == 3:
            k = self._linear(args[0], args[1])
        elif len(args) == 2:
            k = self._linear(args[0], None)
        else:
            raise ValidationError(
                f"set: expected (i, j, value) or (index, value), got {len(args)} arguments"
            )
        self._data[k] = self._ops.coerce(args[-1])

    def __getitem__(self, key):
        """
        A[i, j], A[k] or a contiguous block A[r0:r1, c0:c1].

        Subscripts follow Python sequence rules: negative indices count
        from the end. The named accessors (get, set, row, column) accept
        only 0 <= index < bound.
        """
        if isinstance(key, tuple) and len(key) == 2:
            i = _from_end(key[0], self._rows)
            j = _from_end(key[1], self._cols)
            if isinstance(i, slice) or isinstance(j, slice):
                rs = range(*_as_slice(i).indices(self._rows))
                cs = range(*_as_slice(j).indices(self._cols))
                if rs.step != 1 or cs.step != 1:
                    raise ValidationError("Matrix slicing does not support steps")
                return self.submatrix(rs.start, rs.stop, cs.start, cs.stop)
            return self.get(i, j)
        return self.get(_from_end(key, self.size))

    def __setitem__(self, key, value) -> None:
        if isinstance(key, tuple) and len(key) == 2:
            self.set(_from_end(key[0], self._rows), _from_end(key[1], self._cols), value)
        else:
            self.set(_from_end(key, self.size), value)

    def row(self, i: int) -> Matrix:
        """Row i as a 1 x cols matrix."""
        check_index(i, self._rows, "row")
        start = i * self._cols
        return Matrix._from_data(1, self._cols, self._kind,
                                 self._data[start:start + self._cols].copy())

    def column(self, j: int) -> Matrix:
        """Column j as a rows x 1 matrix."""
        check_index(j, self._cols, "column")
        return Matrix._from_data(self._rows, 1, self._kind,
                                 self._data[j::self._cols].copy())

    def set_row(self, i: int, values: Matrix | Iterable[Any]) -> None:
        check_index(i, self._rows, "row")
        coerced = self._coerce_line(values, self._cols, "set_row")
        start = i * self._cols
        self._data[start:start + self._cols] = coerced

    def set_column(self, j: int, values: Matrix | Iterable[Any]) -> None:
        check_index(j, self._cols, "column")
        coerced = self._coerce_line(values, self._rows, "set_column")
        self._data[j::self._cols] = coerced

    def _coerce_line(self, values, length: int, name: str) -> list:
        if isinstance(values, Matrix):
            check_same_kind(self, values, ("self", "values"))
            values = values.to_flat()
        else:
            values = [self._ops.coerce(v) for v in values]
        if len(values) != length:
            raise DimensionError(f"{name}: expected {length} values, got {len(values)}")
        return values

    # -- Snapshots --

    def _grid(self) -> list[list]:
        """Rows as nested lists of Python numbers (independent copy)."""
        return self._data.reshape(self._rows, self._cols).tolist()

    def _grid_as(self, kind: ElementKind) -> list[list]:
        """Rows as nested lists, each value coerced into another kind."""
        grid = self._grid()
        if kind is self._kind:
            return grid
        ops = ops_for(kind)
        return [[ops.coerce(v) for v in r] for r in grid]

    def to_list(self) -> list[list]:
        """2-D snapshot of the elements as Python numbers."""
        return self._grid()

    def to_flat(self) -> list:
        """Row-major 1-D snapshot of the elements."""
        return self._data.tolist()

    def to_numpy(self) -> np.ndarray:
        """Copy as a 2-D numpy array (object dtype for Decimal)."""
        return self._data.reshape(self._rows, self._cols).copy()

    def copy(self) -> Matrix:
        return Matrix._from_data(self._rows, self._cols, self._kind, self._data.copy())

    def astype(self, kind: ElementKind | str) -> Matrix:
        """Copy with every element coerced to another kind."""
        kind = ElementKind.parse(kind)
        if kind is self._kind:
            return self.copy()
        ops = ops_for(kind)
        return Matrix._from_flat(self._rows, self._cols, kind,
                                 [ops.coerce(v) for v in self._data.tolist()])

    def working_copy(self) -> Matrix:
        """Copy in the kind dividing algorithms compute in."""
        return self.astype(working_ops(self._kind).kind)

    # -- Structure --

    def transpose(self) -> Matrix:
        data = np.ascontiguousarray(self._data.reshape(self._rows, self._cols).T).ravel()
        return Matrix._from_data(self._cols, self._rows, self._kind, data)

    @property
    def T(self) -> Matrix:
        return self.transpose()

    def submatrix(self, row_start: int, row_end: int, col_start: int, col_end: int) -> Matrix:
        """
        Copy of rows [row_start, row_end) and columns [col_start, col_end).

        Raises:
            DimensionError: If the ranges are empty or out of bounds
        """
        if not (0 <= row_start < row_end <= self._rows
                and 0 <= col_start < col_end <= self._cols):
            raise DimensionError(
                f"submatrix: invalid range rows [{row_start}, {row_end}) "
                f"cols [{col_start}, {col_end}) for {self._rows}x{self._cols}"
            )
        block = self._data.reshape(self._rows, self._cols)[row_start:row_end, col_start:col_end]
        return Matrix._from_data(row_end - row_start, col_end - col_start, self._kind,
                                 np.ascontiguousarray(block).ravel())

    def set_block(self, row: int, col: int, block: Matrix) -> None:
        """
        Overwrite the region starting at (row, col) with block.

        Raises:
            DimensionError: If the block does not fit
            UnsupportedKindError: If the block has another kind
        """
        check_matrix(block, "block")
        check_same_kind(self, block, ("self", "block"))
        if row < 0 or col < 0 or row + block.rows > self._rows or col + block.cols > self._cols:
            raise DimensionError(
                f"set_block: {block.rows}x{block.cols} block at ({row}, {col}) "
                f"does not fit {self._rows}x{self._cols}"
            )
        view = self._data.reshape(self._rows, self._cols)
        view[row:row + block.rows, col:col + block.cols] = block._data.reshape(block.shape)

    def minor(self, row: int, col: int) -> Matrix:
        """
        Copy with one row and one column removed.

        Raises:
            DimensionError: If the matrix has a single row or column
        """
        check_index(row, self._rows, "row")
        check_index(col, self._cols, "column")
        if self._rows < 2 or self._cols < 2:
            raise DimensionError(
                f"minor: cannot remove a row and column from {self._rows}x{self._cols}"
            )
        grid = self._grid()
        return Matrix._from_grid(
            [[v for c, v in enumerate(r) if c != col] for i, r in enumerate(grid) if i != row],
            self._kind,
        )

    def diagonal(self) -> list:
        """Main diagonal as a list of Python numbers."""
        n = min(self._rows, self._cols)
        return [self._read(i * self._cols + i) for i in range(n)]

    def swap_rows(self, r1: int, r2: int) -> None:
        check_index(r1, self._rows, "row")
        check_index(r2, self._rows, "row")
        if r1 == r2:
            return
        view = self._data.reshape(self._rows, self._cols)
        view[[r1, r2]] = view[[r2, r1]]

    def swap_columns(self, c1: int, c2: int) -> None:
        check_index(c1, self._cols, "column")
        check_index(c2, self._cols, "column")
        if c1 == c2:
            return
        view = self._data.reshape(self._rows, self._cols)
        view[:, [c1, c2]] = view[:, [c2, c1]]

    def shuffle_rows(self, rng: np.random.Generator | None = None) -> None:
        """Permute the rows in place using rng (a fresh generator if None)."""
        rng = np.random.default_rng() if rng is None else rng
        view = self._data.reshape(self._rows, self._cols)
        view[:] = view[rng.permutation(self._rows)]

    def shuffle_columns(self, rng: np.random.Generator | None = None) -> None:
        """Permute the columns in place using rng (a fresh generator if None)."""
        rng = np.random.default_rng() if rng is None else rng
        view = self._data.reshape(self._rows, self._cols)
        view[:] = view[:, rng.permutation(self._cols)]

    def reshape(self, rows: int, cols: int) -> None:
        """
        Reinterpret the row-major buffer with new dimensions, in place.

        Raises:
            DimensionError: If rows * cols differs from the current size
        """
        check_dimensions(rows, cols, "reshape")
        if rows * cols != self.size:
            raise DimensionError(
                f"reshape: element count must stay {self.size}, got {rows}x{cols}"
            )
        self._rows = rows
        self._cols = cols

    def resize(self, rows: int, cols: int) -> None:
        """Change dimensions in place, keeping the overlap and zero-filling the rest."""
        check_dimensions(rows, cols, "resize")
        data = np.full(rows * cols, self._ops.zero(), dtype=self._kind.dtype)
        keep_r = min(rows, self._rows)
        keep_c = min(cols, self._cols)
        data.reshape(rows, cols)[:keep_r, :keep_c] = \
            self._data.reshape(self._rows, self._cols)[:keep_r, :keep_c]
        self._data = data
        self._rows = rows
        self._cols = cols

    def concatenate_vertically(self, *others: Matrix) -> Matrix:
        """Stack self and others top to bottom (equal column counts)."""
        parts = [self]
        for k, other in enumerate(others):
            check_matrix(other, f"others[{k}]")
            check_same_kind(self, other, ("self", f"others[{k}]"))
            if other.cols != self._cols:
                raise DimensionError(
                    f"concatenate_vertically: others[{k}] has {other.cols} columns, "
                    f"expected {self._cols}"
                )
            parts.append(other)
        data = np.concatenate([p._data for p in parts])
        return Matrix._from_data(sum(p.rows for p in parts), self._cols, self._kind, data)

    def concatenate_horizontally(self, *others: Matrix) -> Matrix:
        """Join self and others left to right (equal row counts)."""
        parts = [self]
        for k, other in enumerate(others):
            check_matrix(other, f"others[{k}]")
            check_same_kind(self, other, ("self", f"others[{k}]"))
            if other.rows != self._rows:
                raise DimensionError(
                    f"concatenate_horizontally: others[{k}] has {other.rows} rows, "
                    f"expected {self._rows}"
                )
            parts.append(other)
        block = np.concatenate([p._data.reshape(p.shape) for p in parts], axis=1)
        return Matrix._from_data(self._rows, block.shape[1], self._kind, block.ravel())

    def delete_rows(self, *indices: int) -> Matrix:
        drop = set(indices)
        for i in drop:
            check_index(i, self._rows, "row")
        if len(drop) >= self._rows:
            raise DimensionError("delete_rows: cannot delete every row")
        return Matrix._from_grid([r for i, r in enumerate(self._grid()) if i not in drop],
                                 self._kind)

    def delete_columns(self, *indices: int) -> Matrix:
        drop = set(indices)
        for j in drop:
            check_index(j, self._cols, "column")
        if len(drop) >= self._cols:
            raise DimensionError("delete_columns: cannot delete every column")
        return Matrix._from_grid(
            [[v for j, v in enumerate(r) if j not in drop] for r in self._grid()],
            self._kind,
        )

    # -- Elementwise arithmetic --

    def _elementwise(self, other: Matrix, fn: Callable, name: str) -> Matrix:
        check_matrix(other, f"{name}: other")
        check_same_kind(self, other, (f"{name}: self", "other"))
        check_same_shape(self, other, (f"{name}: self", "other"))
        values = [fn(a, b) for a, b in zip(self._data.tolist(), other._data.tolist())]
        return Matrix._from_flat(self._rows, self._cols, self._kind, values)

    def _scalarwise(self, scalar: Any, fn: Callable) -> Matrix:
        s = self._ops.coerce(scalar)
        return Matrix._from_flat(self._rows, self._cols, self._kind,
                                 [fn(a, s) for a in self._data.tolist()])

    def plus(self, other: Matrix | Any) -> Matrix:
        """Elementwise sum with a matrix of equal shape, or add a scalar to every element."""
        if isinstance(other, Matrix):
            return self._elementwise(other, self._ops.add, "plus")
        return self._scalarwise(other, self._ops.add)

    def minus(self, other: Matrix | Any) -> Matrix:
        if isinstance(other, Matrix):
            return self._elementwise(other, self._ops.subtract, "minus")
        return self._scalarwise(other, self._ops.subtract)

    def negate(self) -> Matrix:
        ops = self._ops
        return Matrix._from_flat(self._rows, self._cols, self._kind,
                                 [ops.negate(a) for a in self._data.tolist()])

    def scale(self, scalar: Any) -> Matrix:
        return self._scalarwise(scalar, self._ops.multiply)

    def hadamard(self, other: Matrix) -> Matrix:
        """Elementwise product."""
        return self._elementwise(other, self._ops.multiply, "hadamard")

    def divide_elements(self, other: Matrix | Any) -> Matrix:
        """
        Elementwise quotient by a matrix or a scalar.

        Raises:
            ZeroDivisionError: If any divisor is zero
        """
        ops = self._ops

        def safe(a, b):
            if ops.is_zero(b):
                raise ZeroDivisionError("divide_elements: division by zero")
            return ops.divide(a, b)

        if isinstance(other, Matrix):
            return self._elementwise(other, safe, "divide_elements")
        return self._scalarwise(other, safe)

    # -- Products --

    def is_vector(self) -> bool:
        """Exactly one dimension is 1 and the other is larger."""
        return (self._rows == 1) != (self._cols == 1)

    def is_row_vector(self) -> bool:
        return self._rows == 1 and self._cols > 1

    def is_column_vector(self) -> bool:
        return self._cols == 1 and self._rows > 1

    def multiply(self, other: Matrix) -> Matrix:
        """
        Direct matrix product (triple loop through the kernel).

        Raises:
            UnsupportedOperationError: If both operands are vectors; use
                dot() or outer() instead
            DimensionError: If inner dimensions differ
        """
        check_matrix(other, "other")
        if self.is_vector() and other.is_vector():
            raise UnsupportedOperationError(
                "multiply: vector x vector product is ambiguous; "
                "use dot() for the inner product or outer() for the outer product"
            )
        return self._matmul(other)

    def _matmul(self, other: Matrix) -> Matrix:
        check_same_kind(self, other, ("self", "other"))
        if self._cols != other.rows:
            raise DimensionError(
                f"multiply: inner dimensions differ: {self._rows}x{self._cols} "
                f"times {other.rows}x{other.cols}"
            )
        return Matrix._from_grid(
            grid_product(self._grid(), other._grid(), self._ops), self._kind
        )

    def __matmul__(self, other: Matrix) -> Matrix:
        return self.multiply(other)

    def dot(self, other: Matrix):
        """
        Inner product of two vectors of equal length (any orientation).

        Raises:
            DimensionError: If either operand is not a vector or lengths differ
        """
        check_matrix(other, "other")
        check_same_kind(self, other, ("self", "other"))
        if min(self.shape) != 1 or min(other.shape) != 1:
            raise DimensionError(
                f"dot: operands must be vectors, got {self._rows}x{self._cols} "
                f"and {other.rows}x{other.cols}"
            )
        if self.size != other.size:
            raise DimensionError(f"dot: lengths differ: {self.size} and {other.size}")
        ops = self._ops
        acc = ops.zero()
        for a, b in zip(self._data.tolist(), other._data.tolist()):
            acc = ops.add(acc, ops.multiply(a, b))
        return acc

    def outer(self, other: Matrix) -> Matrix:
        """Outer product u vᵀ of two vectors (len(u) x len(v))."""
        check_matrix(other, "other")
        check_same_kind(self, other, ("self", "other"))
        if min(self.shape) != 1 or min(other.shape) != 1:
            raise DimensionError(
                f"outer: operands must be vectors, got {self._rows}x{self._cols} "
                f"and {other.rows}x{other.cols}"
            )
        ops = self._ops
        u = self._data.tolist()
        v = other._data.tolist()
        return Matrix._from_grid([[ops.multiply(a, b) for b in v] for a in u], self._kind)

    def kronecker(self, other: Matrix) -> Matrix:
        check_matrix(other, "other")
        check_same_kind(self, other, ("self", "other"))
        ops = self._ops
        a = self._grid()
        b = other._grid()
        grid = [
            [ops.multiply(a[i][j], b[k][l]) for j in range(self._cols) for l in range(other.cols)]
            for i in range(self._rows) for k in range(other.rows)
        ]
        return Matrix._from_grid(grid, self._kind)

    def trace(self):
        check_square(self, "trace")
        ops = self._ops
        acc = ops.zero()
        for v in self.diagonal():
            acc = ops.add(acc, v)
        return acc

    def norm(self, ord: Any = 'fro'):
        """
        Matrix norm.

        Args:
            ord: 'fro' (Frobenius, computed in the working kind), 1 (max
                absolute column sum) or 'inf' (max absolute row sum)
        """
        ops = self._ops
        if ord == 'fro':
            wops = working_ops(self._kind)
            acc = wops.zero()
            for v in self._data.tolist():
                w = wops.coerce(v)
                acc = wops.add(acc, wops.multiply(w, w))
            return wops.sqrt(acc)
        if ord in (1, '1'):
            lines = [list(c) for c in zip(*self._grid())]
        elif ord in ('inf', math.inf):
            lines = self._grid()
        else:
            raise UnsupportedOperationError(f"norm: unknown order {ord!r}, expected 'fro', 1 or 'inf'")
        best = None
        for line in lines:
            acc = ops.zero()
            for v in line:
                acc = ops.add(acc, ops.abs(v))
            if best is None or ops.compare(acc, best) > 0:
                best = acc
        return best

    # -- Operators --

    def __add__(self, other):
        return self.plus(other)

    def __sub__(self, other):
        return self.minus(other)

    def __neg__(self):
        return self.negate()

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return self.hadamard(other)
        return self.scale(other)

    def __rmul__(self, other):
        return self.scale(other)

    # -- Predicates --

    def is_square(self) -> bool:
        return self._rows == self._cols

    def is_identity(self) -> bool:
        if not self.is_square():
            return False
        ops = self._ops
        one = ops.one()
        for i, r in enumerate(self._grid()):
            for j, v in enumerate(r):
                if i == j:
                    if ops.compare(v, one) != 0:
                        return False
                elif not ops.is_zero(v):
                    return False
        return True

    def is_diagonal(self) -> bool:
        ops = self._ops
        return all(ops.is_zero(v) for i, r in enumerate(self._grid())
                   for j, v in enumerate(r) if i != j)

    def is_upper_triangular(self) -> bool:
        ops = self._ops
        return all(ops.is_zero(v) for i, r in enumerate(self._grid())
                   for j, v in enumerate(r) if i > j)

    def is_lower_triangular(self) -> bool:
        ops = self._ops
        return all(ops.is_zero(v) for i, r in enumerate(self._grid())
                   for j, v in enumerate(r) if i < j)

    def is_symmetric(self, tol: float | None = None) -> bool:
        """
        Aᵀ == A, exactly or within an absolute tolerance.

        Args:
            tol: Absolute tolerance; None compares exactly
        """
        if not self.is_square():
            return False
        ops = self._ops
        grid = self._grid()
        limit = None if tol is None else ops.coerce(tol)
        n = self._rows
        for i in range(n):
            for j in range(i + 1, n):
                if limit is None:
                    if ops.compare(grid[i][j], grid[j][i]) != 0:
                        return False
                elif ops.compare(ops.abs(ops.subtract(grid[i][j], grid[j][i])), limit) > 0:
                    return False
        return True

    def is_orthogonal(self, tol: float | None = None) -> bool:
        """
        AᵀA ≈ I, evaluated in the working kind.

        Args:
            tol: Absolute tolerance per entry (default from the kind's tier)
        """
        if not self.is_square():
            return False
        w = self.working_copy()
        gram = w.transpose()._matmul(w)
        if tol is None:
            tier = select_tolerance(self._kind)
            tol = max(tier.atol, tier.rtol)
        ops = gram.ops
        limit = ops.coerce(tol)
        one = ops.one()
        for i, r in enumerate(gram._grid()):
            for j, v in enumerate(r):
                target = one if i == j else ops.zero()
                if ops.compare(ops.abs(ops.subtract(v, target)), limit) > 0:
                    return False
        return True

    # -- Comparison --

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        if self._kind is not other._kind or self.shape != other.shape:
            return False
        ops = self._ops
        return all(ops.compare(a, b) == 0
                   for a, b in zip(self._data.tolist(), other._data.tolist()))

    __hash__ = None

    def allclose(self, other: Matrix, rtol: float | None = None, atol: float | None = None) -> bool:
        """
        |a - b| <= atol + rtol * |b| for every element pair.

        Same-kind operands compare in the kernel; mixed kinds compare as
        floats. Tolerances default to the tier of self's kind.
        """
        check_matrix(other, "other")
        if self.shape != other.shape:
            return False
        tier = select_tolerance(self._kind)
        rtol = tier.rtol if rtol is None else rtol
        atol = tier.atol if atol is None else atol
        a_vals = self._data.tolist()
        b_vals = other._data.tolist()
        if self._kind is other.kind:
            ops = working_ops(self._kind)
            r = ops.coerce(rtol)
            t = ops.coerce(atol)
            for a, b in zip(a_vals, b_vals):
                a = ops.coerce(a)
                b = ops.coerce(b)
                bound = ops.add(t, ops.multiply(r, ops.abs(b)))
                if ops.compare(ops.abs(ops.subtract(a, b)), bound) > 0:
                    return False
            return True
        return all(abs(float(a) - float(b)) <= atol + rtol * abs(float(b))
                   for a, b in zip(a_vals, b_vals))

    # -- Algorithm shortcuts --

    def determinant(self, method: str = 'cofactor'):
        from pymatrix.inversion.solvers import determinant
        return determinant(self, method=method)

    def inverse(self, method: str = 'gauss_jordan') -> Matrix:
        from pymatrix.inversion.solvers import inverse
        return inverse(self, method=method)

    # -- Formatting --

    def __str__(self) -> str:
        cells = [[str(v) for v in r] for r in self._grid()]
        width = max(len(c) for r in cells for c in r)
        return "\n".join("[" + " ".join(c.rjust(width) for c in r) + "]" for r in cells)

    def __repr__(self) -> str:
        return f"Matrix({self._rows}x{self._cols} {self._kind.value}, {self._grid()})"


def _from_end(key, bound: int):
    """Map a negative integer subscript to bound + key; anything else passes through."""
    if isinstance(key, (int, np.integer)) and not isinstance(key, (bool, np.bool_)) and key < 0:
        return int(key) + bound
    return key


def _as_slice(key) -> slice:
    if isinstance(key, slice):
        return key
    if isinstance(key, (bool, np.bool_)) or not isinstance(key, (int, np.integer)):
        raise ValidationError(f"Matrix index must be an int or slice, got {type(key).__name__}")
    return slice(key, key + 1)
