# MIT License (see LICENSE)
"""
Core type definitions for the layout simulator.

Defines:
- NodeType: The closed set of node categories.
- Node: A mutable graph node with kinematic state, owned by the simulation.
- Edge: An immutable undirected connection between two node ids.
- Shockwave: A transient, decaying impulse source.
- Stats, NodeState, ShockwaveState, Snapshot: Frozen per-tick output records
  handed to consumers.
- Anomaly: A contained problem reported through diagnostics.

The motion model is deliberately simple (see core/integrators.py):
  dv/dt = a         (accumulated force contributions, per tick)
  dx/dt = v
with mass only entering the kinetic-energy statistics.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable

import numpy as np

from .constants import MASS_PER_STRESS
from .errors import ConfigurationError
from .util import f64, norm


# =============================================================================
# Nodes and edges
# =============================================================================

class NodeType(str, Enum):
    """Category of a supply-chain node."""
    SUPPLIER = "SUPPLIER"
    WAREHOUSE = "WAREHOUSE"
    RETAILER = "RETAILER"

    @classmethod
    def parse(cls, value: "NodeType | str") -> "NodeType":
        """Accept a member or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).upper()]
        except KeyError:
            raise ConfigurationError(f"Unknown node type: {value!r}") from None


def mass_for_stress(stress: float) -> float:
    """Mass derived from stress: 1 + stress * 0.5."""
    return 1.0 + stress * MASS_PER_STRESS


def check_stress(stress: float) -> float:
    """Validate a construction-time stress value."""
    stress = float(stress)
    if not 0.0 <= stress <= 1.0:
        raise ConfigurationError(f"stress must be in [0, 1], got {stress}")
    return stress


@dataclass
class Node:
    """
    A graph node with full kinematic state.

    Attributes:
        id: Unique, stable identifier.
        type: Node category.
        position: Current position [x, y] in pixels.
        velocity: Current velocity [vx, vy].
        stress: Load scalar in [0, 1]. Drives mass and repulsion strength.
        label: Display text, opaque to the simulation.
        acceleration: Accumulated force contributions [ax, ay]
                      (cleared at the start of every tick).
        home: Construction position, restored by reset().
        pinned: True while the node is held by an external drag.
        index: Slot in the simulation's node list, assigned by add_node().

    Note:
        Mass is a property computed from stress, so the mass/stress coupling
        cannot drift no matter how stress is changed.
    """
    id: Hashable
    type: NodeType
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    stress: float = 0.0
    label: str = ""

    # Runtime state (not user-specified)
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    home: np.ndarray | None = None
    pinned: bool = False
    index: int = -1

    def __post_init__(self) -> None:
        """Normalize vectors to float64 arrays and remember the home position."""
        self.type = NodeType.parse(self.type)
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.acceleration = f64(self.acceleration)
        self.home = self.position.copy() if self.home is None else f64(self.home)
        self.stress = float(self.stress)

    @property
    def mass(self) -> float:
        """Mass derived from stress (always >= 1 for stress >= 0)."""
        return mass_for_stress(self.stress)

    @property
    def speed(self) -> float:
        return norm(self.velocity)

    def clear_acceleration(self) -> None:
        """Reset accumulated acceleration to zero for the next tick."""
        self.acceleration[:] = 0.0

    def go_home(self) -> None:
        """Restore the construction position and stop the node."""
        self.position = self.home.copy()
        self.velocity = np.zeros(2, dtype=np.float64)
        self.acceleration[:] = 0.0
        self.pinned = False


@dataclass(frozen=True)
class Edge:
    """
    An undirected connection between two nodes.

    Attributes:
        source: Id of the first node.
        target: Id of the second node.
        id: Optional edge identifier, passed through untouched.
    """
    source: Hashable
    target: Hashable
    id: Hashable | None = None


# =============================================================================
# Shockwaves
# =============================================================================

@dataclass
class Shockwave:
    """
    A transient impulse source pushing nodes away from its origin.

    Attributes:
        origin: Center [x, y] of the impulse.
        force: Initial strength.
        age: Ticks elapsed since creation.
    """
    origin: np.ndarray | tuple[float, float]
    force: float
    age: int = 0

    def __post_init__(self) -> None:
        self.origin = f64(self.origin)
        self.force = float(self.force)

    def strength(self, decay: float) -> float:
        """Decayed strength: force * decay ** age."""
        return self.force * decay ** self.age


# =============================================================================
# Per-tick output
# =============================================================================

@dataclass(frozen=True)
class Stats:
    """
    Aggregate physical statistics of one tick.

    Attributes:
        kinetic_energy: Σ ½·m·|v|² over nodes.
        tension: Σ |length - rest_length| over edges.
        network_entropy: -ln(kinetic_energy / n + ε), a disorder proxy.
    """
    kinetic_energy: float = 0.0
    tension: float = 0.0
    network_entropy: float = 0.0


@dataclass(frozen=True)
class NodeState:
    """Read-only copy of a node for consumers."""
    id: Hashable
    x: float
    y: float
    stress: float
    type: NodeType
    label: str
    vx: float
    vy: float
    pinned: bool = False


@dataclass(frozen=True)
class ShockwaveState:
    """Read-only copy of an active shockwave, for diagnostic display."""
    x: float
    y: float
    force: float
    age: int
    strength: float


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable view of the simulation after a tick.

    Attributes:
        tick: Number of steps taken so far.
        time: Logical time (tick * dt).
        nodes: Node states in insertion order.
        edges: Edges, passed through.
        stats: Statistics of the latest tick.
        shockwaves: Active shockwaves.
    """
    tick: int
    time: float
    nodes: tuple[NodeState, ...]
    edges: tuple[Edge, ...]
    stats: Stats
    shockwaves: tuple[ShockwaveState, ...] = ()

    @property
    def shockwave_count(self) -> int:
        return len(self.shockwaves)

    def node(self, node_id: Hashable) -> NodeState | None:
        """Find a node state by id, or None."""
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None


# =============================================================================
# Diagnostics
# =============================================================================

@dataclass(frozen=True)
class Anomaly:
    """
    A problem the simulation contained instead of raising.

    Attributes:
        kind: "node_not_found", "non_finite_acceleration" or "non_finite_state".
        node_id: Node concerned, if any.
        message: Human-readable description.
    """
    kind: str
    node_id: Hashable | None
    message: str
