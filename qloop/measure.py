# qloop/measure.py
"""Projective single-qubit measurement with collapse.

The random source is any zero-argument callable returning a uniform float in
[0, 1); it is called exactly once per measurement. ``backend`` is one of the
kernel modules (``apply_serial`` or ``apply_numba``) and supplies
``branch_probs`` and ``collapse``.
"""
import logging
import math
import numpy as np

from . import apply_serial
from .errors import DegenerateMeasurementError
from .state import State

log = logging.getLogger(__name__)

# smallest branch probability we are willing to renormalise by
MIN_BRANCH_PROBABILITY = 1e-24


def default_source(seed=None):
    return np.random.default_rng(seed).random


def _check_draw(r) -> float:
    r = float(r)
    if not (0.0 <= r < 1.0):
        raise ValueError(f"random source returned {r!r}, expected a value in [0, 1)")
    return r


def measure(state: State, k: int, draw=None, backend=apply_serial) -> int:
    """Measure qubit k, collapse ``state`` in place and return 0 or 1.

    The branch is picked by ``r < p0``. The survivor is divided by the square
    root of its own summed mass; a mass at or below MIN_BRANCH_PROBABILITY
    raises DegenerateMeasurementError and leaves ``state`` untouched.
    """
    state.check_qubit(k)
    if draw is None:
        draw = default_source()

    p0, p1 = backend.branch_probs(state, k)
    r = _check_draw(draw())

    if r < p0:
        outcome, p = 0, p0
    else:
        outcome, p = 1, p1

    if not math.isfinite(p) or p <= MIN_BRANCH_PROBABILITY:
        raise DegenerateMeasurementError(
            f"outcome {outcome} on qubit {k} selected with probability {p!r}; "
            "cannot renormalise")

    backend.collapse(state, k, outcome, math.sqrt(p))
    log.debug("measured qubit %d: p0=%.6g p1=%.6g r=%.6g -> %d", k, p0, p1, r, outcome)
    return outcome
