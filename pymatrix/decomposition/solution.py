"""
Solution wrappers for decomposition results.

Each Solution wraps a Result[Params], exposes the factors as properties
and can rebuild the original matrix from them.
"""

from __future__ import annotations

from pymatrix.core.result import Result
from pymatrix.decomposition._common import CholeskyParams, LUParams, QRParams
from pymatrix.matrix.store import Matrix


class _DecompositionSolution:
    """Shared plumbing: result envelope access and diagnostics."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result) -> None:
        self._result = _result

    @property
    def info(self) -> dict:
        return self._result.info

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={self.backend_name!r}, n={self.info.get('n')})"


class LUSolution(_DecompositionSolution):
    """LU (A = L·U) or LUP (A = P·L·U) factorization."""

    __slots__ = ()

    def __init__(self, _result: Result[LUParams]) -> None:
        super().__init__(_result)

    @property
    def L(self) -> Matrix:
        """Unit lower triangular factor."""
        return self._result.params.L

    @property
    def U(self) -> Matrix:
        """Upper triangular factor."""
        return self._result.params.U

    @property
    def P(self) -> Matrix | None:
        """Permutation matrix, None for unpivoted LU."""
        return self._result.params.P

    @property
    def permutation(self) -> tuple[int, ...]:
        return self._result.params.permutation

    @property
    def sign(self) -> int:
        """Determinant of P."""
        return self._result.params.sign

    @property
    def pivoted(self) -> bool:
        return self._result.params.pivoted

    def reconstruct(self) -> Matrix:
        """L·U, or P·L·U when pivoted."""
        product = self.L._matmul(self.U)
        if self.P is not None:
            product = self.P._matmul(product)
        return product

    def summary(self) -> str:
        lines = [
            f"{'LUP' if self.pivoted else 'LU'} factorization ({self.info['n']}x{self.info['n']}, "
            f"{self.L.kind.value})",
            "",
        ]
        if self.pivoted:
            lines.append(f"  permutation: {list(self.permutation)}  (sign {self.sign:+d})")
        lines.append(f"  diag(U): {self.U.diagonal()}")
        return "\n".join(lines + self._result.footer_lines())


class QRSolution(_DecompositionSolution):
    """QR factorization, A = Q·R."""

    __slots__ = ()

    def __init__(self, _result: Result[QRParams]) -> None:
        super().__init__(_result)

    @property
    def Q(self) -> Matrix:
        return self._result.params.Q

    @property
    def R(self) -> Matrix:
        return self._result.params.R

    @property
    def method(self) -> str:
        return self._result.params.method

    @property
    def deficient_columns(self) -> tuple[int, ...]:
        """Columns Gram-Schmidt found linearly dependent (always empty otherwise)."""
        return self._result.params.deficient_columns

    def reconstruct(self) -> Matrix:
        return self.Q._matmul(self.R)

    def summary(self) -> str:
        lines = [
            f"QR factorization via {self.method} ({self.info['rows']}x{self.info['cols']}, "
            f"{self.Q.kind.value})",
            "",
            f"  Q: {self.Q.rows}x{self.Q.cols}   R: {self.R.rows}x{self.R.cols}",
            f"  diag(R): {self.R.diagonal()}",
        ]
        if self.deficient_columns:
            lines.append(f"  linearly dependent columns: {list(self.deficient_columns)}")
        return "\n".join(lines + self._result.footer_lines())


class CholeskySolution(_DecompositionSolution):
    """Cholesky factorization, A = L·Lᵀ."""

    __slots__ = ()

    def __init__(self, _result: Result[CholeskyParams]) -> None:
        super().__init__(_result)

    @property
    def L(self) -> Matrix:
        return self._result.params.L

    def reconstruct(self) -> Matrix:
        return self.L._matmul(self.L.transpose())

    def summary(self) -> str:
        lines = [
            f"Cholesky factorization ({self.info['n']}x{self.info['n']}, {self.L.kind.value})",
            "",
            f"  diag(L): {self.L.diagonal()}",
        ]
        return "\n".join(lines + self._result.footer_lines())
