# qloop/register.py
import logging
import numpy as np

from . import apply_serial
from .measure import default_source, measure
from .state import DEFAULT_DTYPE, State

log = logging.getLogger(__name__)

BACKENDS = ("serial", "numba")


def load_backend(name: str):
    """Return the kernel module for ``name``."""
    if name == "serial":
        return apply_serial
    if name == "numba":
        try:
            from . import apply_numba
        except Exception as e:
            raise RuntimeError("Numba backend not available. Did you `pip install numba`?") from e
        return apply_numba
    raise NotImplementedError(f"Unknown backend: {name}")


class StateVector:
    """An n-qubit register starting in |0...0>, mutated in place.

    ``rng`` is the uniform [0, 1) source used by :meth:`measure`; pass a
    seeded generator's ``random`` (or any callable) for reproducible runs.
    """

    def __init__(self, qubit_count: int, backend: str = "serial",
                 dtype=DEFAULT_DTYPE, rng=None):
        self._kernels = load_backend(backend)
        self._state = State.zero(qubit_count, dtype=dtype)
        self.backend = backend
        self.rng = rng if rng is not None else default_source()
        log.debug("new %d-qubit register on %s backend", qubit_count, backend)

    @property
    def qubit_count(self) -> int:
        return self._state.n

    @property
    def state(self) -> State:
        """Detached copy of the current state."""
        return self._state.copy()

    @property
    def amplitudes(self) -> np.ndarray:
        """Snapshot of the amplitudes; writing to it leaves the register alone."""
        return self._state.psi.copy()

    def probabilities(self) -> np.ndarray:
        return self._state.probabilities()

    def apply_hadamard(self, qubit_index: int) -> "StateVector":
        self._kernels.apply_H(self._state, qubit_index)
        return self

    def apply_x(self, qubit_index: int) -> "StateVector":
        self._kernels.apply_X(self._state, qubit_index)
        return self

    def apply_cnot(self, control_qubit_index: int, target_qubit_index: int) -> "StateVector":
        self._kernels.apply_CNOT(self._state, control_qubit_index, target_qubit_index)
        return self

    def measure(self, qubit_index: int) -> int:
        return measure(self._state, qubit_index, draw=self.rng, backend=self._kernels)

    def check_normalized(self, tol=None):
        self._state.check_normalized(tol=tol)

    def __len__(self):
        return self._state.size

    def __repr__(self):
        return f"StateVector(qubit_count={self.qubit_count}, backend={self.backend!r})"
