# qloop/apply_serial.py
import math
from .state import State

SQRT_HALF = 1.0 / math.sqrt(2.0)


def apply_H(state: State, k: int):
    """Hadamard on qubit k (little-endian: bit k)."""
    state.check_qubit(k)
    psi = state.psi
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    # iterate blocks of size 2^(k+1), update pairs (i0, i1=i0+step)
    for base in range(0, N, block):
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            a1 = psi[i1]
            psi[i0] = SQRT_HALF * (a0 + a1)
            psi[i1] = SQRT_HALF * (a0 - a1)


def apply_X(state: State, k: int):
    """Pauli-X on qubit k: same pairing as H, amplitudes swapped."""
    state.check_qubit(k)
    psi = state.psi
    N = psi.shape[0]
    step = 1 << k
    block = step << 1
    for base in range(0, N, block):
        for off in range(step):
            i0 = base + off
            i1 = i0 + step
            a0 = psi[i0]
            psi[i0] = psi[i1]
            psi[i1] = a0


def apply_CNOT(state: State, control: int, target: int):
    state.check_pair(control, target)
    psi = state.psi
    N = psi.shape[0]
    mc = 1 << control
    mt = 1 << target
    for i in range(N):
        if i & mc:
            j = i ^ mt
            # each pair is visited from both ends; swap from the lower one only
            if j > i:
                a = psi[i]
                psi[i] = psi[j]
                psi[j] = a


# ---------- measurement kernels (driven by measure.measure) ----------

def branch_probs(state: State, k: int):
    """(mass with bit k clear, mass with bit k set), each summed directly."""
    psi = state.psi
    mk = 1 << k
    p0 = 0.0
    p1 = 0.0
    for i in range(psi.shape[0]):
        a = psi[i]
        m = float(a.real * a.real + a.imag * a.imag)
        if i & mk:
            p1 += m
        else:
            p0 += m
    return p0, p1


def collapse(state: State, k: int, outcome: int, norm: float):
    """Zero the branch that did not occur and divide the survivor by norm."""
    psi = state.psi
    mk = 1 << k
    for i in range(psi.shape[0]):
        bit = 1 if i & mk else 0
        if bit == outcome:
            psi[i] = psi[i] / norm
        else:
            psi[i] = 0.0
