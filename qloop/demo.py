# qloop/demo.py
"""Bell-pair walkthrough: H, CNOT, then measure both qubits."""
import argparse, logging
import numpy as np
from .display import print_state
from .register import BACKENDS, StateVector


def run_demo(rng=None, backend="serial"):
    reg = StateVector(2, backend=backend, rng=rng)

    print("Initial state:")
    print_state(reg.amplitudes, reg.qubit_count)

    reg.apply_hadamard(0)
    print("\nAfter Hadamard on qubit 0:")
    print_state(reg.amplitudes, reg.qubit_count)

    reg.apply_cnot(0, 1)
    print("\nAfter CNOT (0->1):")
    print_state(reg.amplitudes, reg.qubit_count)

    result0 = reg.measure(0)
    result1 = reg.measure(1)
    print(f"\nMeasurement results: qubit0={result0}, qubit1={result1}")

    print("\nFinal state after measurement:")
    print_state(reg.amplitudes, reg.qubit_count)
    return result0, result1


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="qloop demo: prepare and measure a Bell pair")
    p.add_argument("--seed", type=int, default=None,
                   help="seed for the measurement RNG (default: OS entropy)")
    p.add_argument("--backend", type=str, default="serial", choices=list(BACKENDS))
    p.add_argument("-v", "--verbose", action="store_true", help="log kernel/measurement details")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    run_demo(rng=np.random.default_rng(args.seed).random, backend=args.backend)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
