"""
Microbenchmark: time per step vs number of nodes.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from netforce import Simulation
from netforce.profiler import Profiler

TYPES = ("SUPPLIER", "WAREHOUSE", "RETAILER")


def run(n: int, steps: int = 300):
    prof = Profiler()
    sim = Simulation(width=1600, height=1200, seed=12345, profiler=prof)

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # spawn nodes in a grid with small random jitter, chained by springs
    side = int(np.ceil(np.sqrt(n)))
    for k in range(n):
        iy, ix = divmod(k, side)
        x = 100.0 + 60.0 * ix + 5.0 * float(rng.normal())
        y = 100.0 + 60.0 * iy + 5.0 * float(rng.normal())
        sim.add_node(k, TYPES[k % 3], x, y, stress=float(rng.random()))
        if k > 0:
            sim.add_edge(k - 1, k)
    sim.trigger_shockwave(800.0, 600.0, 5000.0)

    # warmup
    for _ in range(30):
        sim.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step()
    t1 = time.perf_counter()

    total = t1 - t0
    per_step = total / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for n in [10, 25, 50, 100, 200]:
        per_step, summary = run(n)
        print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
        # print top sections
        for k in ["repulsion", "springs", "shockwaves", "integrate", "stats"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
