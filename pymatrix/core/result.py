"""
Result envelope shared by every solver.

A solver returns a Solution object wrapping a Result[P], where P is the
package's frozen payload (LUParams, QRParams, EigenParams, SVDParams, ...).
The envelope carries what is common to all of them: the method that ran,
the kernel backend name, the timing breakdown and any non-fatal warnings
(Gram-Schmidt rank deficiency, iteration caps).
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen output of one solver call.

    Attributes:
        params: Payload of factor matrices, eigenpairs or singular triples
        info: Metadata; always has 'method', plus per-solver keys such as
            'n', 'working_kind', 'converged' or 'tolerance'
        timing: Timer.result() of the call, or None when built by hand
        backend_name: 'kernel_<method>' name of the algorithm that ran
        warnings: Messages of the RuntimeWarnings issued during the call

    Example:
        >>> Result(
        ...     params=QRParams(Q=Q, R=R, method='gram_schmidt', deficient_columns=(1,)),
        ...     info={'method': 'gram_schmidt', 'rank_deficient': True},
        ...     timing={'total_seconds': 0.002, 'factorization': 0.002},
        ...     backend_name='kernel_gram_schmidt',
        ...     warnings=("Gram-Schmidt: columns [1] are linearly dependent; ...",),
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def method(self) -> str | None:
        return self.info.get('method')

    @property
    def total_seconds(self) -> float | None:
        if self.timing is None:
            return None
        return self.timing['total_seconds']

    def has_warning(self, substring: str) -> bool:
        return any(substring in w for w in self.warnings)

    def footer_lines(self) -> list[str]:
        """Closing lines of a Solution.summary(): backend, time, warnings."""
        head = f"  backend: {self.backend_name}"
        if self.total_seconds is not None:
            head += f"   time: {self.total_seconds:.4f}s"
        lines = ["", head]
        lines.extend(f"  warning: {w}" for w in self.warnings)
        return lines
