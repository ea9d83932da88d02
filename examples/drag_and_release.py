# examples/drag_and_release.py
from netforce import FixedRateScheduler, supply_chain
from netforce.renderer import DebugRenderer

sim = supply_chain()
sched = FixedRateScheduler(sim)

# pointer drags the central distribution hub across the canvas
for x in range(500, 700, 20):
    sim.drag(5, float(x), 450.0)
    sched.run(max_steps=3)

sim.release(5)
sched.run(max_steps=120)

sim.subscribe(DebugRenderer(verbose=False).render_snapshot)
sched.run(max_steps=1)
