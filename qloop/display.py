# qloop/display.py
"""Read-only text rendering of a state vector."""
from typing import List
import numpy as np


def basis_label(index: int, n: int) -> str:
    # most significant qubit first
    return format(index, f"0{n}b")


def format_amplitude(a: complex, precision: int = 3) -> str:
    return f"{a.real:.{precision}f} + {a.imag:.{precision}f}i"


def format_state(psi: np.ndarray, n: int, precision: int = 3) -> List[str]:
    lines = ["Quantum State:"]
    for i in range(1 << n):
        lines.append(f"|{basis_label(i, n)}⟩: {format_amplitude(psi[i], precision)}")
    return lines


def print_state(psi: np.ndarray, n: int, precision: int = 3):
    print("\n".join(format_state(psi, n, precision)))
