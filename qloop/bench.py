# qloop/bench.py
"""Gate-application timings → data/<backend>/{qubits,threads,depth}.csv"""
import argparse, csv, os, socket, subprocess, time
from datetime import datetime
import numpy as np
from .circuit import Circuit

DATA_DIR = "data"
HEADER = ["qubits","depth","backend","threads","gates","wall_ms","hostname","commit","dtype","timestamp"]

def backend_dir(backend, data_dir=DATA_DIR):
    path = os.path.join(data_dir, backend)
    os.makedirs(path, exist_ok=True)
    return path

def warmup(circ, backend, threads=None):
    # first numba call pays for JIT compilation; keep it out of the timings
    circ.run(backend=backend, num_threads=threads, check_norm=False)

# ---------------------------------------------------------------------

def meta_row(dtype="complex128"):
    commit = ""
    try:
        commit = subprocess.check_output(["git", "rev-parse", "--short", "HEAD"],
                                         stderr=subprocess.DEVNULL).decode().strip()
    except (OSError, subprocess.CalledProcessError):
        pass
    return {
        "hostname": socket.gethostname(),
        "commit": commit,
        "dtype": dtype,
        "timestamp": datetime.now().isoformat(timespec="seconds"),
    }

def new_csv(path):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writeheader()

def write_row(path, circ, depth, backend, threads, wall):
    m = meta_row()
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=HEADER).writerow({
            "qubits": circ.n, "depth": depth, "backend": backend, "threads": threads,
            "gates": len(circ), "wall_ms": f"{wall:.3f}",
            "hostname": m["hostname"], "commit": m["commit"], "dtype": m["dtype"],
            "timestamp": m["timestamp"],
        })

# ---------------------------------------------------------------------

def random_circuit(n, depth, seed=0):
    """Alternating layers: H/X on every qubit, then CNOTs on neighbour pairs."""
    rng = np.random.default_rng(seed)
    c = Circuit.empty(n)
    for layer in range(depth):
        if layer % 2 == 0:
            for k in range(n):
                if rng.integers(0, 2) == 0:
                    c.h(k)
                else:
                    c.x(k)
        else:
            for k in range(0, n-1, 2):
                if rng.integers(0, 2) == 0:
                    c.cnot(k, k+1)
                else:
                    c.cnot(k+1, k)
    return c

def time_run(circ, backend, threads=None):
    t0 = time.perf_counter()
    circ.run(backend=backend, num_threads=threads, check_norm=False)
    return (time.perf_counter() - t0) * 1e3  # ms

def numba_max_threads():
    from numba import config
    return config.NUMBA_NUM_THREADS

def pool_size(backend):
    """Threads the numba kernels will actually use right now (0 for serial)."""
    if backend == "serial":
        return 0
    from .apply_numba import get_threads
    return get_threads()

# ---------------------------------------------------------------------
# individual experiments

def bench_qubits(ns, depth, backend, out_path):
    print(f"[run] Qubits scaling → {out_path}")
    new_csv(out_path)
    warmup(random_circuit(min(ns), depth, seed=42), backend)
    for n in ns:
        circ = random_circuit(n, depth, seed=42)
        wall = time_run(circ, backend)
        write_row(out_path, circ, depth, backend, pool_size(backend), wall)
        print(f"  n={n}  wall={wall:.2f} ms")
    print("✓ done.\n")

def bench_threads(n, depth, threads_list, out_path):
    print(f"[run] Thread scaling → {out_path}")
    new_csv(out_path)
    circ = random_circuit(n, depth, seed=123)
    warmup(circ, "numba", threads=1)
    t1 = time_run(circ, "numba", threads=1)
    pool = numba_max_threads()
    print(f"  pool={pool}  T1={t1:.1f} ms")

    for t in threads_list:
        tt = min(int(t), pool)
        if tt != t:
            print(f"  requested t={t} > pool={pool}; using t={tt}")
        wall = time_run(circ, "numba", threads=tt)
        speedup = t1 / wall if wall > 0 else float("nan")
        write_row(out_path, circ, depth, "numba", tt, wall)
        print(f"  t={tt}  wall={wall:.2f} ms  speedup={speedup:.2f}×")
    print("✓ done.\n")

def bench_depth(n, depths, backend, out_path):
    print(f"[run] Depth scaling → {out_path}")
    new_csv(out_path)
    warmup(random_circuit(n, min(depths), seed=7), backend)
    for d in depths:
        circ = random_circuit(n, d, seed=7)
        wall = time_run(circ, backend)
        write_row(out_path, circ, d, backend, pool_size(backend), wall)
        print(f"  depth={d}  wall={wall:.2f} ms")
    print("✓ done.\n")

# ---------------------------------------------------------------------

def _ints(s):
    return [int(x) for x in s.split(",")]

def build_parser():
    p = argparse.ArgumentParser(description="qloop benchmarks → <out>/<backend>/*.csv")
    p.add_argument("--out", type=str, default=DATA_DIR, help="output directory (default: ./data)")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_qubits = sub.add_parser("qubits")
    p_qubits.add_argument("--ns", type=_ints, required=True)
    p_qubits.add_argument("--depth", type=int, default=100)
    p_qubits.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])

    p_threads = sub.add_parser("threads")
    p_threads.add_argument("--n", type=int, default=16)
    p_threads.add_argument("--depth", type=int, default=200)
    p_threads.add_argument("--threads", type=_ints, default=[1, 2, 4, 8, 16])
    # thread scaling only makes sense for numba
    p_threads.set_defaults(backend="numba")

    p_depth = sub.add_parser("depth")
    p_depth.add_argument("--n", type=int, default=12)
    p_depth.add_argument("--depths", type=_ints, default=[10, 50, 100, 300, 600])
    p_depth.add_argument("--backend", type=str, default="numba", choices=["serial","numba"])
    return p

def main(argv=None):
    args = build_parser().parse_args(argv)
    base = backend_dir(args.backend, args.out)

    if args.cmd == "qubits":
        bench_qubits(args.ns, args.depth, args.backend, os.path.join(base, "qubits.csv"))
    elif args.cmd == "threads":
        bench_threads(args.n, args.depth, args.threads, os.path.join(base, "threads.csv"))
    elif args.cmd == "depth":
        bench_depth(args.n, args.depths, args.backend, os.path.join(base, "depth.csv"))
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
