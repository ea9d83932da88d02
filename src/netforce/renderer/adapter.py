# MIT License (see LICENSE)
"""
Renderer adapters consuming simulation snapshots.

This module provides an abstract base class for rendering layers and a few
concrete implementations. The simulation has no rendering dependency: a
renderer only ever sees immutable Snapshot objects, so it cannot write back
into live nodes.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TextIO
import sys

from ..types import Edge, NodeState, Snapshot, Stats


class RendererAdapter(ABC):
    """
    Abstract base class for renderer implementations.

    Subclasses implement the drawing methods to integrate with a graphics
    backend (matplotlib, pygame, a web frontend, ...).

    Usage:
        renderer = MyRenderer()
        sim.subscribe(renderer.render_snapshot)
        sim.step()   # renderer draws the new frame
    """

    @abstractmethod
    def begin_frame(self, snapshot: Snapshot) -> None:
        """
        Begin a new frame.

        Args:
            snapshot: The snapshot about to be drawn.
        """
        ...

    def draw_edge(self, edge: Edge, source: NodeState, target: NodeState) -> None:
        """Draw one edge between its two end nodes. Default: nothing."""

    @abstractmethod
    def draw_node(self, node: NodeState) -> None:
        """
        Draw a single node.

        Args:
            node: The node state to draw.
        """
        ...

    @abstractmethod
    def end_frame(self, stats: Stats) -> None:
        """
        Finalize the current frame.

        Args:
            stats: Statistics of the drawn tick (for a stats panel).
        """
        ...

    def render_snapshot(self, snapshot: Snapshot) -> None:
        """
        Draw a full snapshot: edges first, then nodes.

        Edges whose ends are missing from the snapshot are skipped.
        """
        self.begin_frame(snapshot)
        by_id = {n.id: n for n in snapshot.nodes}
        for edge in snapshot.edges:
            source = by_id.get(edge.source)
            target = by_id.get(edge.target)
            if source is not None and target is not None:
                self.draw_edge(edge, source, target)
        for node in snapshot.nodes:
            self.draw_node(node)
        self.end_frame(snapshot.stats)


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development and testing.

    Writes a human-readable description of each snapshot to a stream
    (stdout by default).

    Output:
        === Tick 12 t=0.1920 shockwaves=1 ===
        [0] SUPPLIER "Raw Materials S1" @ (400.12, 99.87) v=(0.52, -0.31) stress=0.20
        KE=3.2140 tension=412.1100 entropy=-0.9300
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        """
        Args:
            output: Output stream (defaults to sys.stdout).
            verbose: If True, include velocity and stress.
        """
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, snapshot: Snapshot) -> None:
        self.output.write(
            f"=== Tick {snapshot.tick} t={snapshot.time:.4f} "
            f"shockwaves={snapshot.shockwave_count} ===\n"
        )

    def draw_node(self, node: NodeState) -> None:
        line = f"[{node.id}] {node.type.value} \"{node.label}\" @ ({node.x:.2f}, {node.y:.2f})"
        if self.verbose:
            line += f" v=({node.vx:.2f}, {node.vy:.2f}) stress={node.stress:.2f}"
        if node.pinned:
            line += " pinned"
        self.output.write(line + "\n")

    def end_frame(self, stats: Stats) -> None:
        self.output.write(
            f"KE={stats.kinetic_energy:.4f} tension={stats.tension:.4f} "
            f"entropy={stats.network_entropy:.4f}\n\n"
        )
        self.output.flush()


class NullRenderer(RendererAdapter):
    """
    No-op renderer.

    Useful as a placeholder or for benchmarking without rendering overhead.
    """

    def begin_frame(self, snapshot: Snapshot) -> None:
        pass

    def draw_node(self, node: NodeState) -> None:
        pass

    def end_frame(self, stats: Stats) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Renderer that records frames for later retrieval.

    The simulation keeps no history; subscribe a BufferedRenderer to record
    statistics or trajectories.

    Example:
        renderer = BufferedRenderer(max_frames=600)
        sim.subscribe(renderer.render_snapshot)
        for _ in range(100):
            sim.step()
        energies = [f["stats"]["kinetic_energy"] for f in renderer.frames]
    """

    def __init__(self, max_frames: int | None = None):
        self.max_frames = max_frames
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, snapshot: Snapshot) -> None:
        self._current_frame = {
            "tick": snapshot.tick,
            "time": snapshot.time,
            "shockwaves": snapshot.shockwave_count,
            "nodes": [],
        }

    def draw_node(self, node: NodeState) -> None:
        if self._current_frame is None:
            return
        self._current_frame["nodes"].append({
            "id": node.id,
            "position": [node.x, node.y],
            "velocity": [node.vx, node.vy],
            "stress": node.stress,
        })

    def end_frame(self, stats: Stats) -> None:
        if self._current_frame is None:
            return
        self._current_frame["stats"] = {
            "kinetic_energy": stats.kinetic_energy,
            "tension": stats.tension,
            "network_entropy": stats.network_entropy,
        }
        self.frames.append(self._current_frame)
        self._current_frame = None
        if self.max_frames is not None and len(self.frames) > self.max_frames:
            del self.frames[: len(self.frames) - self.max_frames]

    def clear(self) -> None:
        """Drop all recorded frames."""
        self.frames.clear()
