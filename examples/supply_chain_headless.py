# examples/supply_chain_headless.py
import logging

from netforce import supply_chain
from netforce.renderer import BufferedRenderer

logging.basicConfig(level=logging.DEBUG)

sim = supply_chain(seed=7)
history = BufferedRenderer()
sim.subscribe(history.render_snapshot)

sim.trigger_shockwave(500.0, 350.0)
while sim.time < 5.0:
    sim.step()

first, last = history.frames[0]["stats"], history.frames[-1]["stats"]
print("ticks:", sim.tick)
print("KE:", first["kinetic_energy"], "->", last["kinetic_energy"])
print("tension:", last["tension"], "entropy:", last["network_entropy"])
