# MIT License (see LICENSE)
"""
JSON conversion of simulation inputs and outputs.

Graph documents describe construction inputs; snapshot documents describe
one tick of output for a frontend or a diagnostic dump. No simulation
history is stored.

Graph document:
---------------
{
  "width": float,                  # Viewport width, default 1000
  "height": float,                 # Viewport height, default 700
  "config": {                      # Optional, any SimulationConfig field
    "k_repulsion": float,
    "rest_length": float,
    ...
  },
  "nodes": [
    {
      "id": int | str,             # Required, unique
      "type": "SUPPLIER" | "WAREHOUSE" | "RETAILER",
      "x": float, "y": float,      # Required
      "stress": float,             # [0, 1], default 0
      "label": string              # Default ""
    }
  ],
  "edges": [
    {"source": id, "target": id, "id": id}   # id optional
  ]
}

Snapshot document:
------------------
{
  "tick": int, "time": float,
  "nodes": [{"id", "x", "y", "stress", "type", "label", "vx", "vy", "pinned"}],
  "edges": [{"source", "target"}],
  "stats": {"kineticEnergy", "tension", "networkEntropy"},
  "shockwaves": [{"x", "y", "force", "age", "strength"}]
}
"""
from __future__ import annotations
import dataclasses
import json
from typing import TYPE_CHECKING, Any

from ..config import SimulationConfig
from ..errors import ConfigurationError
from ..types import Edge, Snapshot

if TYPE_CHECKING:
    from ..simulation import Simulation

_CONFIG_FIELDS = {f.name for f in dataclasses.fields(SimulationConfig)}


def load_graph_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a graph file without building a simulation.

    Args:
        path: Path to the JSON file.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def config_from_json(d: dict[str, Any]) -> SimulationConfig:
    """
    Build a SimulationConfig from a dictionary.

    Missing fields keep their defaults.

    Raises:
        ConfigurationError: On unknown fields or invalid values.
    """
    unknown = set(d) - _CONFIG_FIELDS
    if unknown:
        raise ConfigurationError(f"Unknown config fields: {sorted(unknown)}")
    return SimulationConfig(**d)


def config_to_json(config: SimulationConfig) -> dict[str, Any]:
    """Serialize only the fields that differ from the defaults."""
    default = SimulationConfig()
    return {
        f.name: getattr(config, f.name)
        for f in dataclasses.fields(config)
        if getattr(config, f.name) != getattr(default, f.name)
    }


def graph_from_json(data: dict[str, Any], **kwargs: Any) -> "Simulation":
    """
    Build a ready-to-run Simulation from a graph document.

    Args:
        data: Parsed graph document.
        **kwargs: Forwarded to Simulation (seed, profiler, on_anomaly).

    Raises:
        ConfigurationError: Invalid config, viewport or node fields.
        TopologyError: Duplicate ids or bad edges.
    """
    # Import locally to avoid a circular import
    from ..simulation import Simulation

    for key in ("nodes", "edges"):
        if not isinstance(data.get(key, []), list):
            raise ConfigurationError(f"'{key}' must be a list")
    for n in data.get("nodes", []):
        missing = {"id", "type", "x", "y"} - set(n)
        if missing:
            raise ConfigurationError(f"Node definition missing fields: {sorted(missing)}")

    return Simulation.from_graph(
        data.get("nodes", []),
        data.get("edges", []),
        width=data.get("width"),
        height=data.get("height"),
        config=config_from_json(data.get("config", {})),
        **kwargs,
    )


def load_graph(path: str, **kwargs: Any) -> "Simulation":
    """Load a graph file and build the simulation."""
    return graph_from_json(load_graph_raw(path), **kwargs)


def edge_to_json(edge: Edge) -> dict[str, Any]:
    result = {"source": edge.source, "target": edge.target}
    if edge.id is not None:
        result["id"] = edge.id
    return result


def graph_to_json(sim: "Simulation", home: bool = True) -> dict[str, Any]:
    """
    Serialize a simulation's graph as a graph document.

    Args:
        sim: The simulation.
        home: Write construction positions (True) or current positions.
    """
    nodes = []
    for n in sim.nodes:
        pos = n.home if home else n.position
        nodes.append({
            "id": n.id,
            "type": n.type.value,
            "x": float(pos[0]),
            "y": float(pos[1]),
            "stress": n.stress,
            "label": n.label,
        })
    result = {
        "width": sim.viewport.width,
        "height": sim.viewport.height,
        "nodes": nodes,
        "edges": [edge_to_json(e) for e in sim.edges],
    }
    config = config_to_json(sim.config)
    if config:
        result["config"] = config
    return result


def snapshot_to_json(snapshot: Snapshot) -> dict[str, Any]:
    """Serialize a snapshot to a JSON-compatible dictionary."""
    return {
        "tick": snapshot.tick,
        "time": snapshot.time,
        "nodes": [
            {
                "id": n.id,
                "x": n.x,
                "y": n.y,
                "stress": n.stress,
                "type": n.type.value,
                "label": n.label,
                "vx": n.vx,
                "vy": n.vy,
                "pinned": n.pinned,
            }
            for n in snapshot.nodes
        ],
        "edges": [edge_to_json(e) for e in snapshot.edges],
        "stats": {
            "kineticEnergy": snapshot.stats.kinetic_energy,
            "tension": snapshot.stats.tension,
            "networkEntropy": snapshot.stats.network_entropy,
        },
        "shockwaves": [dataclasses.asdict(sw) for sw in snapshot.shockwaves],
    }


def save_snapshot(snapshot: Snapshot, path: str, indent: int = 2) -> None:
    """Write a snapshot document to disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot_to_json(snapshot), f, indent=indent)
