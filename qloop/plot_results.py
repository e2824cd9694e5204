# qloop/plot_results.py
import argparse, csv, os
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from collections import defaultdict
from statistics import median

from .bench import DATA_DIR

def load_rows(path):
    rows = []
    with open(path, "r") as f:
        r = csv.DictReader(f)
        for row in r:
            row["qubits"]  = int(row["qubits"])
            row["depth"]   = int(row["depth"])
            row["threads"] = int(row["threads"])
            row["wall_ms"] = float(row["wall_ms"])
            rows.append(row)
    return rows

def median_by_key(rows, key_fields):
    buckets = defaultdict(list)
    for r in rows:
        key = tuple(r[k] for k in key_fields)
        buckets[key].append(r["wall_ms"])
    agg = []
    for key, vals in buckets.items():
        out = dict(zip(key_fields, key))
        out["wall_ms"] = float(median(vals))
        agg.append(out)
    return agg

def _save(out_dir, name):
    path = os.path.join(out_dir, name)
    plt.savefig(path, dpi=200)
    plt.close()
    return path

def plot_runtime_vs(rows, xkey, out_dir, tag):
    """Median runtime against qubits or depth, one line per backend."""
    pts = median_by_key(rows, ["backend", xkey])
    if not pts: return None
    by_backend = defaultdict(list)
    for r in pts:
        by_backend[r["backend"]].append((r[xkey], r["wall_ms"]))
    plt.figure()
    for be, p in by_backend.items():
        xs, ys = zip(*sorted(p))
        plt.plot(xs, ys, marker="o", label=be)
    plt.xlabel("Qubits (n)" if xkey == "qubits" else "Depth")
    plt.ylabel("Runtime (ms)")
    if xkey == "qubits":
        plt.yscale("log")  # 2^n growth
    plt.title(f"Runtime vs {xkey.capitalize()} [{tag}]")
    plt.grid(True, which="both", ls="--", lw=0.5)
    plt.legend()
    return _save(out_dir, f"runtime_vs_{xkey}_{tag}.png")

def plot_speedup_vs_threads(rows, out_dir, tag):
    pts = sorted(median_by_key(rows, ["threads"]), key=lambda r: r["threads"])
    t1 = next((r["wall_ms"] for r in pts if r["threads"] == 1), None)
    if not t1: return None
    xs = [r["threads"] for r in pts]
    ys = [t1 / r["wall_ms"] for r in pts]
    plt.figure()
    plt.plot(xs, ys, marker="o")
    plt.xlabel("Threads")
    plt.ylabel("Speedup (T1/Tt)")
    plt.title(f"Speedup vs Threads [{tag}]")
    plt.grid(True)
    return _save(out_dir, f"speedup_vs_threads_{tag}.png")

def plot_qubits_compare(data_dir):
    rows = []
    for be in ("serial", "numba"):
        p = os.path.join(data_dir, be, "qubits.csv")
        if os.path.exists(p):
            rows.extend(load_rows(p))
    if not rows:
        return None
    return plot_runtime_vs(rows, "qubits", data_dir, "compare")

def plot_all(data_dir=DATA_DIR):
    """Plot every CSV under data_dir next to it; returns the written paths."""
    csvs = []
    for root, _, files in os.walk(data_dir):
        for f in files:
            if f.endswith(".csv"):
                csvs.append(os.path.join(root, f))

    written = []
    for path in sorted(csvs):
        tag = os.path.splitext(os.path.basename(path))[0]
        backend = os.path.basename(os.path.dirname(path))  # 'serial' or 'numba'
        out_dir = os.path.dirname(path)
        try:
            rows = load_rows(path)
        except (OSError, KeyError, ValueError) as e:
            print(f"Skipping {path}: {e}")
            continue

        print(f"Plotting from {backend}/{tag}.csv ({len(rows)} rows)...")
        if tag.startswith("qubits"):
            written.append(plot_runtime_vs(rows, "qubits", out_dir, backend))
        elif tag.startswith("threads"):
            written.append(plot_speedup_vs_threads(rows, out_dir, backend))
        elif tag.startswith("depth"):
            written.append(plot_runtime_vs(rows, "depth", out_dir, backend))
    written.append(plot_qubits_compare(data_dir))
    return [p for p in written if p]

def main(argv=None):
    p = argparse.ArgumentParser(description="Plot qloop benchmark CSVs")
    p.add_argument("--data", type=str, default=DATA_DIR)
    args = p.parse_args(argv)
    written = plot_all(args.data)
    if not written:
        print(f"No CSV files found under {args.data}/")
        return 0
    print(f"\nSaved {len(written)} plot(s) under {args.data}/<backend>/")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
