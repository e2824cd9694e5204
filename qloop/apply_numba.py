# qloop/apply_numba.py
import math
from numba import njit, prange, set_num_threads, get_num_threads
from .state import State

SQRT_HALF = 1.0 / math.sqrt(2.0)

# ---------- low-level kernels (Numba JIT) ----------

@njit(parallel=True)
def _hadamard_kernel(psi, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    nblocks = N // block
    for b in prange(nblocks):
        base = b * block
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = SQRT_HALF * (a0 + a1)
            psi[i1] = SQRT_HALF * (a0 - a1)

@njit(parallel=True)
def _x_kernel(psi, k):
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    nblocks = N // block
    for b in prange(nblocks):
        base = b * block
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            psi[i0] = psi[i1]
            psi[i1] = a0

@njit(parallel=True)
def _cnot_kernel(psi, control, target):
    N = psi.shape[0]
    mc = 1 << control
    mt = 1 << target
    # only the lower index of each pair swaps → iterations touch disjoint pairs
    for i in prange(N):
        if i & mc:
            j = i ^ mt
            if j > i:
                a = psi[i]
                psi[i] = psi[j]
                psi[j] = a

@njit(parallel=True)
def _branch_probs_kernel(psi, k):
    N = psi.shape[0]
    mk = 1 << k
    p0 = 0.0
    p1 = 0.0
    for i in prange(N):
        a = psi[i]
        m = a.real * a.real + a.imag * a.imag
        if i & mk:
            p1 += m
        else:
            p0 += m
    return p0, p1

@njit(parallel=True)
def _collapse_kernel(psi, k, outcome, norm):
    N = psi.shape[0]
    mk = 1 << k
    for i in prange(N):
        bit = 1 if (i & mk) != 0 else 0
        if bit == outcome:
            psi[i] = psi[i] / norm
        else:
            psi[i] = 0.0

# ---------- user-facing apply helpers ----------

def set_threads(n: int):
    set_num_threads(n)

def get_threads() -> int:
    return get_num_threads()

def apply_H(state: State, k: int):
    state.check_qubit(k)
    _hadamard_kernel(state.psi, k)

def apply_X(state: State, k: int):
    state.check_qubit(k)
    _x_kernel(state.psi, k)

def apply_CNOT(state: State, control: int, target: int):
    state.check_pair(control, target)
    _cnot_kernel(state.psi, control, target)

def branch_probs(state: State, k: int):
    p0, p1 = _branch_probs_kernel(state.psi, k)
    return float(p0), float(p1)

def collapse(state: State, k: int, outcome: int, norm: float):
    _collapse_kernel(state.psi, k, outcome, norm)
