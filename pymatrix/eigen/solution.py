"""
Solution wrappers for eigen-decomposition and SVD results.
"""

from __future__ import annotations

from pymatrix.core.result import Result
from pymatrix.eigen._common import EigenParams, SVDParams
from pymatrix.matrix.store import Matrix


class EigenSolution:
    """Eigenvalues and eigenvectors.

    vectors.column(k) is the eigenvector for values[k].
    """

    __slots__ = ('_result',)

    def __init__(self, _result: Result[EigenParams]) -> None:
        self._result = _result

    @property
    def values(self) -> tuple:
        return self._result.params.values

    @property
    def vectors(self) -> Matrix:
        return self._result.params.vectors

    @property
    def method(self) -> str:
        return self._result.method

    @property
    def iterations(self) -> int:
        return self._result.params.iterations

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def final_off_norm(self) -> float:
        return self._result.params.final_off_norm

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

    def sorted_values(self) -> list:
        """Eigenvalues in ascending order."""
        return sorted(self.values, key=float)

    def summary(self) -> str:
        lines = [
            f"Eigen-decomposition via {self.method} ({self.vectors.rows}x{self.vectors.rows}, "
            f"{self.vectors.kind.value})",
            "",
            f"  iterations: {self.iterations}   converged: {self.converged}   "
            f"off-diagonal norm: {self.final_off_norm:.3g}",
            "",
        ]
        for k, v in enumerate(self.values):
            lines.append(f"  lambda[{k}] = {v}")
        return "\n".join(lines + self._result.footer_lines())

    def __repr__(self) -> str:
        return f"EigenSolution(method={self.method!r}, converged={self.converged})"


class SVDSolution:
    """Singular value decomposition, A = U·diag(s)·Vt."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result[SVDParams]) -> None:
        self._result = _result

    @property
    def U(self) -> Matrix:
        return self._result.params.U

    @property
    def singular_values(self) -> tuple:
        """Non-negative, in descending order."""
        return self._result.params.singular_values

    @property
    def Vt(self) -> Matrix:
        return self._result.params.Vt

    @property
    def V(self) -> Matrix:
        return self._result.params.Vt.transpose()

    @property
    def S(self) -> Matrix:
        """Singular values on the diagonal of a square matrix."""
        n = len(self.singular_values)
        S = Matrix(n, n, self.U.kind)
        for i, s in enumerate(self.singular_values):
            S.set(i, i, s)
        return S

    @property
    def converged(self) -> bool:
        return self._result.params.converged

    @property
    def sweeps(self) -> int:
        return self._result.params.sweeps

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

    def reconstruct(self) -> Matrix:
        return self.U._matmul(self.S)._matmul(self.Vt)

    def summary(self) -> str:
        lines = [
            f"SVD via repeated {self._result.method} QR ({self.U.rows}x{self.U.rows}, "
            f"{self.U.kind.value})",
            "",
            f"  sweeps: {self.sweeps}   converged: {self.converged}",
            "",
        ]
        for k, s in enumerate(self.singular_values):
            lines.append(f"  sigma[{k}] = {s}")
        return "\n".join(lines + self._result.footer_lines())

    def __repr__(self) -> str:
        return f"SVDSolution(method={self._result.method!r}, n={self.U.rows})"
