# MIT License (see LICENSE)
"""
Renderer adapters for snapshots.

This subpackage provides abstract and concrete renderer implementations:
    - RendererAdapter: Abstract base class defining the rendering interface.
    - DebugRenderer: Text output for debugging.
    - NullRenderer: No-op renderer for benchmarking.
    - BufferedRenderer: Records frames (statistics history, trajectories).

The simulation has no rendering dependency; these adapters are optional.

Typical usage:
    from netforce.renderer import DebugRenderer

    sim.subscribe(DebugRenderer().render_snapshot)
"""
from .adapter import (
    RendererAdapter,
    DebugRenderer,
    NullRenderer,
    BufferedRenderer,
)

__all__ = [
    "RendererAdapter",
    "DebugRenderer",
    "NullRenderer",
    "BufferedRenderer",
]
