# qloop/circuit.py
from dataclasses import dataclass, field
from typing import List, Tuple
from .register import StateVector
from .state import DEFAULT_DTYPE, State

Op = Tuple[str, Tuple]  # e.g., ("H",(k,)) or ("CNOT",(c,t)) or ("MEASURE",(k,))

@dataclass
class RunResult:
    state: State
    outcomes: List[Tuple[int, int]] = field(default_factory=list)  # (qubit, bit) in program order

    def bits(self) -> List[int]:
        return [b for _, b in self.outcomes]

@dataclass
class Circuit:
    n: int
    ops: List[Op]

    @staticmethod
    def empty(n:int) -> "Circuit":
        return Circuit(n, [])

    def h(self, k:int): self.ops.append(("H",(k,))); return self
    def x(self, k:int): self.ops.append(("X",(k,))); return self
    def cnot(self, c:int, t:int): self.ops.append(("CNOT",(c,t))); return self
    def measure(self, k:int): self.ops.append(("MEASURE",(k,))); return self

    def run(self, backend:str="serial", dtype=DEFAULT_DTYPE, rng=None, check_norm=True,
            num_threads=None, check_norm_tol=None) -> RunResult:
        reg = StateVector(self.n, backend=backend, dtype=dtype, rng=rng)
        if backend == "numba" and num_threads is not None:
            from .apply_numba import set_threads
            set_threads(int(num_threads))

        outcomes = []
        for name, args in self.ops:
            if name == "H":
                (k,) = args; reg.apply_hadamard(k)
            elif name == "X":
                (k,) = args; reg.apply_x(k)
            elif name == "CNOT":
                c,t = args; reg.apply_cnot(c, t)
            elif name == "MEASURE":
                (k,) = args; outcomes.append((k, reg.measure(k)))
            else:
                raise ValueError(f"Unknown gate {name}")

        if check_norm:
            reg.check_normalized(tol=check_norm_tol)
        return RunResult(state=reg.state, outcomes=outcomes)

    def __len__(self):
        return len(self.ops)
