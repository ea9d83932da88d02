# MIT License (see LICENSE)
"""
The simulation state container and step.

The Simulation class is the single owner of the layout state. It manages:
- The node arena (insertion-ordered list + id -> index lookup) and the edges,
  resolved to index pairs.
- The active shockwaves.
- The running/paused flag read by the scheduler.
- The step, in this order:
    1. Apply mutations deferred during the previous step.
    2. Clear accelerations.
    3. Accumulate repulsion, springs, boundary and shockwaves.
    4. Contain non-finite accelerations.
    5. Integrate (semi-implicit Euler, damping, speed cap); pinned nodes hold.
    6. Contain non-finite positions/velocities.
    7. Age and prune shockwaves.
    8. Compute statistics and publish a snapshot to subscribers.
- The external mutation operations (trigger, pin, release, reset, ...).

Structure:
    - User creates a Simulation (or uses Simulation.from_graph()).
    - User adds nodes and edges via add_node()/add_edge().
    - A scheduler (or the user) calls step() repeatedly.
    - Consumers read the returned Snapshot, never the live nodes.

Problems met while running (unknown node ids, NaN/inf values) are logged,
reported to on_anomaly, and contained; they are never raised.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from typing import Any, Callable, Hashable, Iterable, Mapping

import numpy as np

from .config import SimulationConfig, Viewport
from .constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from .errors import NodeNotFoundError, SimulationError, TopologyError
from .profiler import Profiler
from .types import (
    Anomaly,
    Edge,
    Node,
    NodeState,
    NodeType,
    Shockwave,
    ShockwaveState,
    Snapshot,
    Stats,
    check_stress,
)
from .util import f64, is_finite_vec
from .core.forces import (
    apply_repulsion_pairwise,
    apply_springs,
    apply_boundary,
    apply_shockwaves,
)
from .core.integrators import semi_implicit_euler_step, hold_pinned
from .core.invariants import compute_stats, node_is_finite
from .core.shockwaves import age_and_prune

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Snapshot], None]
AnomalyCallback = Callable[[Anomaly], None]


class Simulation:
    """
    Force-directed layout world.

    Attributes:
        config: Immutable simulation parameters.
        viewport: Current drawing area (changed via resize()).
        nodes: Node arena in insertion order. Read-only for callers.
        edges: Edges in insertion order.
        shockwaves: Active shockwaves.
        running: False while paused; the scheduler only steps when True.
        tick: Number of completed steps.
        time: Logical time advanced (tick * dt).
        stats: Statistics of the latest step.
        profiler: Optional Profiler receiving per-phase timings.
        on_anomaly: Optional diagnostic callback for contained problems.
    """

    def __init__(
        self,
        config: SimulationConfig | None = None,
        width: float | None = None,
        height: float | None = None,
        seed: int | None = None,
        profiler: Profiler | None = None,
        on_anomaly: AnomalyCallback | None = None,
    ) -> None:
        self.config = config or SimulationConfig()
        self.viewport = Viewport(
            width=DEFAULT_WIDTH if width is None else width,
            height=DEFAULT_HEIGHT if height is None else height,
        )
        self.profiler = profiler
        self.on_anomaly = on_anomaly

        self.nodes: list[Node] = []
        self.edges: list[Edge] = []
        self.shockwaves: list[Shockwave] = []
        self.running = True
        self.tick = 0
        self.time = 0.0
        self.stats = Stats()

        self._index: dict[Hashable, int] = {}
        self._pairs: list[tuple[int, int]] = []
        self._subscribers: list[SnapshotCallback] = []
        self._pending: list[Callable[[], Any]] = []
        self._stepping = False
        self._rng = np.random.default_rng(seed)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_graph(
        cls,
        nodes: Iterable[Mapping[str, Any]],
        edges: Iterable[Mapping[str, Any]],
        width: float | None = None,
        height: float | None = None,
        config: SimulationConfig | None = None,
        **kwargs: Any,
    ) -> "Simulation":
        """
        Build a simulation from plain node and edge records.

        Args:
            nodes: Mappings with keys id, type, x, y and optional stress, label.
            edges: Mappings with keys source, target and optional id.
            width: Viewport width.
            height: Viewport height.
            config: Simulation parameters.
            **kwargs: Forwarded to the constructor (seed, profiler, on_anomaly).

        Raises:
            ConfigurationError: Invalid viewport, config, stress or node type.
            TopologyError: Duplicate ids, dangling edges or self-loops.
        """
        sim = cls(config=config, width=width, height=height, **kwargs)
        sim._load(nodes, edges)
        logger.debug(
            "Simulation built: %d nodes, %d edges, viewport %gx%g",
            len(sim.nodes), len(sim.edges), sim.viewport.width, sim.viewport.height,
        )
        return sim

    def add_node(
        self,
        node_id: Hashable,
        type: NodeType | str,
        x: float,
        y: float,
        stress: float = 0.0,
        label: str = "",
    ) -> Node:
        """
        Add a node at rest at (x, y).

        The position is remembered as the node's home for reset().

        Returns:
            The live node (owned by the simulation).

        Raises:
            TopologyError: If the id is already used.
            ConfigurationError: If stress is outside [0, 1] or the type is unknown.
        """
        if node_id in self._index:
            raise TopologyError(f"Duplicate node id: {node_id!r}")
        node = Node(
            id=node_id,
            type=NodeType.parse(type),
            position=(float(x), float(y)),
            stress=check_stress(stress),
            label=str(label),
        )
        node.index = len(self.nodes)
        self._index[node_id] = node.index
        self.nodes.append(node)
        return node

    def add_edge(self, source: Hashable, target: Hashable, edge_id: Hashable | None = None) -> Edge:
        """
        Connect two existing nodes with a spring.

        Raises:
            TopologyError: If either end is unknown or both ends are the same node.
        """
        for end in (source, target):
            if end not in self._index:
                raise TopologyError(f"Edge references unknown node: {end!r}")
        if source == target:
            raise TopologyError(f"Self-loop on node {source!r}")
        edge = Edge(source=source, target=target, id=edge_id)
        self.edges.append(edge)
        self._pairs.append((self._index[source], self._index[target]))
        return edge

    def replace_topology(
        self,
        nodes: Iterable[Mapping[str, Any]],
        edges: Iterable[Mapping[str, Any]],
    ) -> None:
        """
        Swap the whole graph for a new one.

        Clears shockwaves and the step counter. On a validation error the
        previous graph is kept.
        """
        staged = Simulation(config=self.config, width=self.viewport.width, height=self.viewport.height)
        staged._load(nodes, edges)
        self.nodes, self.edges = staged.nodes, staged.edges
        self._index, self._pairs = staged._index, staged._pairs
        self.shockwaves = []
        self.tick = 0
        self.time = 0.0
        self.stats = Stats()
        logger.debug("Topology replaced: %d nodes, %d edges", len(self.nodes), len(self.edges))

    def _load(self, nodes: Iterable[Mapping[str, Any]], edges: Iterable[Mapping[str, Any]]) -> None:
        for n in nodes:
            self.add_node(
                n["id"],
                n["type"],
                n["x"],
                n["y"],
                stress=n.get("stress", 0.0),
                label=n.get("label", ""),
            )
        for e in edges:
            self.add_edge(e["source"], e["target"], e.get("id"))

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def node(self, node_id: Hashable) -> Node:
        """
        Strict lookup of a live node.

        Raises:
            NodeNotFoundError: If no node has this id.
        """
        try:
            return self.nodes[self._index[node_id]]
        except KeyError:
            raise NodeNotFoundError(node_id) from None

    def find_node(self, node_id: Hashable) -> Node | None:
        """Lenient lookup: the live node, or None."""
        idx = self._index.get(node_id)
        return None if idx is None else self.nodes[idx]

    @property
    def edge_pairs(self) -> list[tuple[int, int]]:
        """Edges resolved to (source_index, target_index)."""
        return list(self._pairs)

    # -------------------------------------------------------------------------
    # Consumers
    # -------------------------------------------------------------------------

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """
        Register a callback receiving every published snapshot.

        Returns:
            A function that unsubscribes the callback.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> Snapshot:
        """Immutable copy of the current state."""
        decay = self.config.shockwave_decay
        return Snapshot(
            tick=self.tick,
            time=self.time,
            nodes=tuple(
                NodeState(
                    id=n.id,
                    x=float(n.position[0]),
                    y=float(n.position[1]),
                    stress=n.stress,
                    type=n.type,
                    label=n.label,
                    vx=float(n.velocity[0]),
                    vy=float(n.velocity[1]),
                    pinned=n.pinned,
                )
                for n in self.nodes
            ),
            edges=tuple(self.edges),
            stats=self.stats,
            shockwaves=tuple(
                ShockwaveState(
                    x=float(sw.origin[0]),
                    y=float(sw.origin[1]),
                    force=sw.force,
                    age=sw.age,
                    strength=sw.strength(decay),
                )
                for sw in self.shockwaves
            ),
        )

    # -------------------------------------------------------------------------
    # Step
    # -------------------------------------------------------------------------

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def _accumulate(self) -> None:
        """Clear accelerations and sum every force contribution into them."""
        cfg = self.config
        nodes = self.nodes
        for n in nodes:
            n.clear_acceleration()

        with self._section("repulsion"):
            apply_repulsion_pairwise(nodes, cfg.k_repulsion, cfg.stress_threshold)
        with self._section("springs"):
            apply_springs(nodes, self._pairs, cfg.k_spring, cfg.rest_length)
        with self._section("boundary"):
            apply_boundary(
                nodes,
                self.viewport.width,
                self.viewport.height,
                cfg.boundary_margin,
                cfg.boundary_k,
            )
        with self._section("shockwaves"):
            apply_shockwaves(nodes, self.shockwaves, cfg.shockwave_decay)

    def _integrate(self) -> None:
        cfg = self.config
        for n in self.nodes:
            if n.pinned:
                hold_pinned(n)
            else:
                if not is_finite_vec(n.acceleration):
                    self._report(
                        "non_finite_acceleration", n.id,
                        f"non-finite acceleration {n.acceleration.tolist()} discarded",
                    )
                    n.clear_acceleration()
                semi_implicit_euler_step(n, cfg.dt, cfg.damping, cfg.max_velocity)
            if not node_is_finite(n):
                self._report(
                    "non_finite_state", n.id,
                    "non-finite position/velocity, node reset to its home position",
                )
                n.go_home()

    def step(self) -> Snapshot:
        """
        Advance the simulation by one fixed timestep and publish a snapshot.

        Steps regardless of the running flag; pausing only stops the
        scheduler from calling this.

        Returns:
            Snapshot of the state after the step.

        Raises:
            SimulationError: If called from inside a running step.
        """
        if self._stepping:
            raise SimulationError("step() is not reentrant")
        self._stepping = True
        try:
            self._apply_pending()

            self._accumulate()
            with self._section("integrate"):
                self._integrate()

            cfg = self.config
            self.shockwaves = age_and_prune(
                self.shockwaves,
                cfg.shockwave_decay,
                cfg.shockwave_threshold,
                cfg.shockwave_max_age,
            )

            with self._section("stats"):
                self.stats = compute_stats(
                    self.nodes, self._pairs, cfg.rest_length, cfg.entropy_epsilon
                )
            self.tick += 1
            self.time = self.tick * cfg.dt
            snap = self.snapshot()

            for callback in list(self._subscribers):
                callback(snap)
        finally:
            self._stepping = False
        return snap

    # -------------------------------------------------------------------------
    # Mutation operations
    # -------------------------------------------------------------------------

    def _defer_or_run(
        self,
        op: Callable[[], Any],
        node_id: Hashable | None = None,
        operation: str = "",
    ) -> Any:
        """
        Run op now, or queue it for the next step if a step is running.

        A queued call returns True. When op targets node_id, the id is
        checked before queuing so an unknown node still returns False.
        """
        if self._stepping:
            if operation and self._lookup(node_id, operation) is None:
                return False
            self._pending.append(op)
            return True
        return op()

    def _apply_pending(self) -> None:
        pending, self._pending = self._pending, []
        for op in pending:
            op()

    def _report(self, kind: str, node_id: Hashable | None, message: str) -> None:
        anomaly = Anomaly(kind=kind, node_id=node_id, message=message)
        logger.warning("%s (node=%r): %s", kind, node_id, message)
        if self.on_anomaly is not None:
            self.on_anomaly(anomaly)

    def _lookup(self, node_id: Hashable, operation: str) -> Node | None:
        node = self.find_node(node_id)
        if node is None:
            self._report("node_not_found", node_id, f"{operation}: no node with this id")
        return node

    def trigger_shockwave(self, x: float, y: float, force: float | None = None) -> bool:
        """
        Add a shockwave at (x, y).

        It acts from the next step on, starting at age 0.

        Args:
            x: Origin x.
            y: Origin y.
            force: Initial strength (defaults to config.default_force).
        """
        f = self.config.default_force if force is None else force

        def op() -> bool:
            self.shockwaves.append(Shockwave(origin=(x, y), force=f))
            return True

        return self._defer_or_run(op)

    def ambient_shock(self, x: float, y: float) -> bool:
        """Shockwave for a click on empty space."""
        return self.trigger_shockwave(x, y, self.config.ambient_force)

    def pin(self, node_id: Hashable, x: float, y: float) -> bool:
        """
        Hold a node at (x, y) with zero velocity until release().

        Returns:
            False if the node does not exist.
        """
        def op() -> bool:
            node = self._lookup(node_id, "pin")
            if node is None:
                return False
            node.position = f64((x, y))
            node.velocity = np.zeros(2, dtype=np.float64)
            node.pinned = True
            return True

        return self._defer_or_run(op, node_id, "pin")

    def drag(self, node_id: Hashable, x: float, y: float) -> bool:
        """
        Move a node with the pointer: pin it at (x, y) and emit a drag shockwave.

        Returns:
            False if the node does not exist.
        """
        if self.find_node(node_id) is None:
            self._report("node_not_found", node_id, "drag: no node with this id")
            return False
        self.pin(node_id, x, y)
        return self.trigger_shockwave(x, y, self.config.drag_force)

    def release(self, node_id: Hashable) -> bool:
        """
        End pinning; the node resumes integration from rest.

        Emits one release shockwave at the node's position.

        Returns:
            False if the node does not exist or is not pinned. A release
            queued during a step returns True; the pinned check then happens
            when it is applied.
        """
        def op() -> bool:
            node = self._lookup(node_id, "release")
            if node is None or not node.pinned:
                return False
            node.pinned = False
            node.velocity = np.zeros(2, dtype=np.float64)
            self.shockwaves.append(
                Shockwave(origin=node.position.copy(), force=self.config.release_force)
            )
            return True

        return self._defer_or_run(op, node_id, "release")

    def reset(self) -> bool:
        """Restore construction positions, stop and unpin all nodes, clear shockwaves."""
        def op() -> bool:
            for n in self.nodes:
                n.go_home()
            self.shockwaves = []
            self.stats = Stats()
            logger.debug("Simulation reset at tick %d", self.tick)
            return True

        return self._defer_or_run(op)

    def randomize_stress(self) -> bool:
        """Draw a new uniform stress in [0, 1) for every node; mass follows."""
        def op() -> bool:
            for n in self.nodes:
                n.stress = float(self._rng.random())
            return True

        return self._defer_or_run(op)

    def set_stress(self, node_id: Hashable, stress: float) -> bool:
        """
        Set one node's stress, clamped to [0, 1]; mass follows.

        Returns:
            False if the node does not exist.
        """
        def op() -> bool:
            node = self._lookup(node_id, "set_stress")
            if node is None:
                return False
            node.stress = min(1.0, max(0.0, float(stress)))
            return True

        return self._defer_or_run(op, node_id, "set_stress")

    def pause(self) -> None:
        """Stop automatic stepping."""
        if self.running:
            logger.debug("Simulation paused at tick %d", self.tick)
        self.running = False

    def resume(self) -> None:
        """Allow automatic stepping again."""
        if not self.running:
            logger.debug("Simulation resumed at tick %d", self.tick)
        self.running = True

    def resize(self, width: float, height: float) -> None:
        """
        Change the viewport used by boundary containment.

        Raises:
            ConfigurationError: If a dimension is not positive.
        """
        self.viewport = Viewport(width=width, height=height)
