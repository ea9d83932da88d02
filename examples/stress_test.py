# examples/stress_test.py
from netforce import supply_chain

sim = supply_chain(seed=2024, on_anomaly=print)

for round_ in range(5):
    sim.randomize_stress()
    sim.ambient_shock(100.0 + 200.0 * round_, 600.0)
    for _ in range(120):
        snap = sim.step()
    hot = [n.label for n in snap.nodes if n.stress > sim.config.stress_threshold]
    print(f"round {round_}: KE={snap.stats.kinetic_energy:.3f} "
          f"entropy={snap.stats.network_entropy:.3f} high stress: {hot}")

sim.reset()
print("after reset:", sim.step().stats)
