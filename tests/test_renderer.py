import io

from netforce import Edge, NodeState, NodeType, Snapshot, Stats, supply_chain
from netforce.renderer import DebugRenderer, NullRenderer, BufferedRenderer


class EdgeCounter(NullRenderer):
    def __init__(self):
        self.edges = []

    def draw_edge(self, edge, source, target):
        self.edges.append((source.id, target.id))


def test_debug_renderer_output():
    out = io.StringIO()
    sim = supply_chain()
    sim.subscribe(DebugRenderer(output=out).render_snapshot)
    sim.pin(0, 400.0, 100.0)
    sim.step()

    text = out.getvalue()
    assert text.startswith("=== Tick 1 t=0.0160 shockwaves=0 ===")
    assert '[0] SUPPLIER "Raw Materials S1" @ (400.00, 100.00) v=(0.00, 0.00) stress=0.20 pinned' in text
    assert "KE=" in text and "entropy=" in text


def test_debug_renderer_terse():
    out = io.StringIO()
    DebugRenderer(output=out, verbose=False).render_snapshot(supply_chain().snapshot())
    assert "v=(" not in out.getvalue()


def test_edges_drawn_between_existing_nodes():
    counter = EdgeCounter()
    counter.render_snapshot(supply_chain().snapshot())
    assert len(counter.edges) == 20
    assert counter.edges[-1] == (9, 10)

    node = NodeState(id="a", x=0.0, y=0.0, stress=0.0, type=NodeType.RETAILER, label="", vx=0.0, vy=0.0)
    snap = Snapshot(
        tick=0, time=0.0, nodes=(node,), edges=(Edge("a", "gone"),), stats=Stats()
    )
    counter = EdgeCounter()
    counter.render_snapshot(snap)
    assert counter.edges == []


def test_buffered_renderer_keeps_last_frames():
    sim = supply_chain()
    renderer = BufferedRenderer(max_frames=3)
    sim.subscribe(renderer.render_snapshot)
    for _ in range(5):
        sim.step()

    assert [f["tick"] for f in renderer.frames] == [3, 4, 5]
    frame = renderer.frames[-1]
    assert len(frame["nodes"]) == 11
    assert frame["stats"]["kinetic_energy"] == sim.stats.kinetic_energy

    renderer.clear()
    assert renderer.frames == []
