"""
Time cache misses against cache hits for each solver.

    python -m cachematrix.benchmark          # print table
    python -m cachematrix.benchmark --plot   # also save plots/benchmark.png
"""

import logging
import os
import sys
import time

import numpy as np

from .config import SolverConfig
from .matrix import CacheableMatrix
from .solve import cache_solve

logger = logging.getLogger(__name__)

# Pure-Python Gauss-Jordan is O(n^3) in the interpreter, keep it small
SLOW_SOLVERS = {"gauss_jordan": 200}


def make_matrix(n, seed=0):
    rng = np.random.default_rng(seed)
    A = rng.random((n, n))
    A += n * np.eye(n)  # improve conditioning
    return A


def benchmark(n=100, method="numpy", trials=3):
    config = SolverConfig(default_method=method, quiet=True)
    A = make_matrix(n)

    # Cache miss: a fresh value every trial
    m = CacheableMatrix()
    t0 = time.perf_counter()
    for _ in range(trials):
        m.set(A)
        A_inv = cache_solve(m, config=config)
    t_miss = (time.perf_counter() - t0) / trials

    # Cache hit
    t0 = time.perf_counter()
    for _ in range(trials):
        cache_solve(m, config=config)
    t_hit = (time.perf_counter() - t0) / trials

    error = float(np.max(np.abs(A @ A_inv - np.eye(n))))

    return {
        "n": n,
        "method": method,
        "miss_s": t_miss,
        "hit_s": t_hit,
        "speedup": t_miss / t_hit if t_hit > 0 else float("inf"),
        "error": error,
    }


def run_benchmark(sizes=(50, 100, 200, 500), methods=("numpy", "lu", "gauss_jordan"), trials=3):
    rows = []
    for method in methods:
        for n in sizes:
            if n > SLOW_SOLVERS.get(method, n):
                logger.debug(f"Skipping {method} at n={n}")
                continue
            rows.append(benchmark(n, method=method, trials=trials))
    return rows


def print_table(rows):
    print(f"{'Method':>13} | {'N':>5} | {'Miss (s)':>10} | {'Hit (s)':>10} | {'Speedup':>10} | {'Error':>9}")
    print("-" * 72)
    for r in rows:
        print(f"{r['method']:>13} | {r['n']:5d} | {r['miss_s']:10.6f} | {r['hit_s']:10.2e} | "
              f"{r['speedup']:9.0f}x | {r['error']:9.2e}")


def save_plot(rows, path="plots/benchmark.png"):
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)

    plt.figure()
    for method in sorted({r["method"] for r in rows}):
        sizes = [r["n"] for r in rows if r["method"] == method]
        plt.plot(sizes, [r["miss_s"] * 1000 for r in rows if r["method"] == method],
                 marker="o", label=f"{method} (miss)")
        plt.plot(sizes, [r["hit_s"] * 1000 for r in rows if r["method"] == method],
                 linestyle="--", label=f"{method} (hit)")
    plt.xlabel("Matrix size (N x N)")
    plt.ylabel("Time per cache_solve (ms)")
    plt.yscale("log")
    plt.title("Cached vs uncached inverse")
    plt.legend()
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    rows = run_benchmark()
    print_table(rows)

    if "--plot" in argv:
        path = save_plot(rows)
        print(f"\nBenchmark plot saved to {path}")


if __name__ == "__main__":
    main()
