# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - Graph documents: Build a simulation from JSON construction inputs.
    - Snapshot documents: Serialize per-tick output for a frontend.

Typical usage:
    from netforce.io import load_graph, snapshot_to_json

    sim = load_graph("network.json")
    data = snapshot_to_json(sim.step())
"""
from .json_io import (
    load_graph,
    load_graph_raw,
    graph_from_json,
    graph_to_json,
    config_from_json,
    config_to_json,
    snapshot_to_json,
    save_snapshot,
)

__all__ = [
    # Loading
    "load_graph",
    "load_graph_raw",
    "graph_from_json",
    "config_from_json",
    # Saving
    "graph_to_json",
    "config_to_json",
    "snapshot_to_json",
    "save_snapshot",
]
