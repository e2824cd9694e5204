# qloop/state.py
import logging
import numpy as np
from dataclasses import dataclass

from .errors import (InvalidQubitCountError, NormalizationError,
                     QubitIndexError, RegisterAllocationError, SameQubitError)

log = logging.getLogger(__name__)

DEFAULT_DTYPE = np.complex128

# ||psi||^2 tolerance per precision
NORM_TOL = {np.dtype(np.complex128): 1e-9, np.dtype(np.complex64): 1e-5}


def check_qubit_count(n) -> int:
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
        raise InvalidQubitCountError(f"qubit count must be an integer, got {n!r}")
    if n < 1:
        raise InvalidQubitCountError(f"qubit count must be >= 1, got {n}")
    return int(n)


@dataclass
class State:
    n: int
    psi: np.ndarray  # shape (2**n,), dtype complex64/128

    @staticmethod
    def zero(n: int, dtype=DEFAULT_DTYPE) -> "State":
        n = check_qubit_count(n)
        N = 1 << n
        try:
            psi = np.zeros(N, dtype=dtype)
        except (MemoryError, ValueError, OverflowError) as e:
            raise RegisterAllocationError(
                f"cannot allocate 2**{n} amplitudes of {np.dtype(dtype).name}") from e
        psi[0] = 1.0 + 0.0j
        log.debug("allocated %d-qubit state (%d amplitudes, %s)", n, N, psi.dtype)
        return State(n=n, psi=psi)

    @property
    def dtype(self):
        return self.psi.dtype

    @property
    def size(self) -> int:
        return self.psi.shape[0]

    def norm2(self) -> float:
        return float(np.vdot(self.psi, self.psi).real)

    def check_normalized(self, tol=None):
        if tol is None:
            tol = NORM_TOL.get(self.dtype, 1e-9)
        n2 = self.norm2()
        if not (abs(1.0 - n2) <= tol):
            raise NormalizationError(f"Normalization failed: ||psi||^2={n2}")

    def check_qubit(self, k: int):
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
            raise QubitIndexError(f"qubit index must be an integer, got {k!r}")
        if not 0 <= k < self.n:
            raise QubitIndexError(f"qubit {k} out of range for {self.n}-qubit state")

    def check_pair(self, control: int, target: int):
        self.check_qubit(control)
        self.check_qubit(target)
        if control == target:
            raise SameQubitError("control and target must differ")

    def probabilities(self) -> np.ndarray:
        return np.abs(self.psi) ** 2

    def copy(self) -> "State":
        return State(self.n, self.psi.copy())

    def as_numpy(self) -> np.ndarray:
        return self.psi
