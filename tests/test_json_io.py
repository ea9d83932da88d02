import json

import numpy as np
import pytest
from netforce import SimulationConfig, ConfigurationError, TopologyError, Edge, supply_chain
from netforce.io import (
    load_graph,
    graph_from_json,
    graph_to_json,
    config_from_json,
    config_to_json,
    snapshot_to_json,
    save_snapshot,
)


def test_graph_document_survives_json(tmp_path):
    sim = supply_chain(width=1200, height=800, config=SimulationConfig(k_spring=0.1))
    path = tmp_path / "network.json"
    path.write_text(json.dumps(graph_to_json(sim)))

    loaded = load_graph(str(path), seed=1)
    assert [n.id for n in loaded.nodes] == list(range(11))
    assert loaded.edges == sim.edges
    assert Edge(source=6, target=7, id=16) in loaded.edges
    assert loaded.config.k_spring == 0.1
    assert loaded.config.rest_length == 120
    assert (loaded.viewport.width, loaded.viewport.height) == (1200, 800)
    assert loaded.node(5).stress == 0.8
    assert loaded.node(5).label == "Distribution D1"


def test_graph_to_json_current_positions():
    sim = supply_chain()
    sim.pin(2, 111.0, 222.0)
    data = graph_to_json(sim, home=False)
    n2 = next(n for n in data["nodes"] if n["id"] == 2)
    assert (n2["x"], n2["y"]) == (111.0, 222.0)
    assert "config" not in data

    home = graph_to_json(sim)
    n2 = next(n for n in home["nodes"] if n["id"] == 2)
    assert (n2["x"], n2["y"]) == (500.0, 200.0)


def test_graph_defaults():
    sim = graph_from_json({
        "nodes": [{"id": "a", "type": "warehouse", "x": 10, "y": 20}],
        "edges": [],
    })
    node = sim.node("a")
    assert node.stress == 0.0
    assert node.label == ""
    assert np.array_equal(node.position, [10.0, 20.0])
    assert (sim.viewport.width, sim.viewport.height) == (1000, 700)


def test_invalid_graph_documents():
    with pytest.raises(ConfigurationError):
        graph_from_json({"nodes": {"id": 1}})
    with pytest.raises(ConfigurationError):
        graph_from_json({"nodes": [{"id": 1, "type": "SUPPLIER", "x": 0}]})
    with pytest.raises(ConfigurationError):
        graph_from_json({"nodes": [], "config": {"gravity": 9.8}})
    with pytest.raises(TopologyError):
        graph_from_json({
            "nodes": [{"id": 1, "type": "SUPPLIER", "x": 0, "y": 0}],
            "edges": [{"source": 1, "target": 2}],
        })


def test_config_to_json_only_changed_fields():
    assert config_to_json(SimulationConfig()) == {}
    cfg = SimulationConfig(damping=0.8, shockwave_max_age=100)
    assert config_to_json(cfg) == {"damping": 0.8, "shockwave_max_age": 100}
    assert config_from_json(config_to_json(cfg)) == cfg


def test_snapshot_document(tmp_path):
    sim = supply_chain()
    sim.trigger_shockwave(500.0, 350.0)
    snap = sim.step()

    data = snapshot_to_json(snap)
    assert data["tick"] == 1
    assert len(data["nodes"]) == 11
    assert len(data["edges"]) == 20
    assert set(data["nodes"][0]) == {"id", "x", "y", "stress", "type", "label", "vx", "vy", "pinned"}
    assert data["nodes"][0]["type"] == "SUPPLIER"
    assert data["stats"]["kineticEnergy"] == snap.stats.kinetic_energy
    assert data["stats"]["networkEntropy"] == snap.stats.network_entropy
    assert data["shockwaves"] == [
        {"x": 500.0, "y": 350.0, "force": 1000.0, "age": 1, "strength": pytest.approx(950.0)}
    ]

    path = tmp_path / "snap.json"
    save_snapshot(snap, str(path))
    assert json.loads(path.read_text())["tick"] == 1
