# MIT License (see LICENSE)
"""
netforce - A real-time force-directed graph layout simulator.

Nodes (with a type and a stress level) repel each other, edges act as
springs, the viewport edges push back, and transient shockwaves perturb the
layout. A fixed-step integrator advances the state and aggregate statistics
(kinetic energy, spring tension, entropy) are published with every tick.

Main entry points:
    - Simulation: The state container, step and mutation operations.
    - FixedRateScheduler: Drives a Simulation at a fixed cadence.
    - SimulationConfig, Viewport: Immutable parameters.
    - Snapshot: The read-only per-tick output.

Submodules:
    - core: Force generators, integrator, shockwave lifecycle, statistics.
    - io: JSON conversion of graphs, configs and snapshots.
    - renderer: Snapshot consumer adapters.
    - topology: The built-in supply-chain network.

Example:
    from netforce import Simulation

    sim = Simulation(width=800, height=600)
    sim.add_node("a", "SUPPLIER", 300, 300, stress=0.2)
    sim.add_node("b", "RETAILER", 500, 300, stress=0.6)
    sim.add_edge("a", "b")
    snap = sim.step()
"""
import logging

from .config import SimulationConfig, Viewport
from .errors import (
    NetforceError,
    ConfigurationError,
    TopologyError,
    NodeNotFoundError,
    SimulationError,
)
from .types import NodeType, Node, Edge, Shockwave, Stats, NodeState, Snapshot, Anomaly
from .simulation import Simulation
from .scheduler import FixedRateScheduler
from .topology import supply_chain

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core simulation
    "Simulation",
    "FixedRateScheduler",
    "supply_chain",
    # Configuration
    "SimulationConfig",
    "Viewport",
    # Records
    "NodeType",
    "Node",
    "Edge",
    "Shockwave",
    "Stats",
    "NodeState",
    "Snapshot",
    "Anomaly",
    # Errors
    "NetforceError",
    "ConfigurationError",
    "TopologyError",
    "NodeNotFoundError",
    "SimulationError",
]
