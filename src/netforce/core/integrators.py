# MIT License (see LICENSE)
"""
Numerical integrator for node motion.

Nodes are advanced with semi-implicit (symplectic) Euler: velocity is
updated from the accumulated acceleration first, then position is updated
from the new velocity. Between the two, velocity is damped geometrically and
clamped to a speed cap, which bleeds energy out of the layout so it settles.

The timestep is a fixed logical dt, never the measured frame delta, so a
run is reproducible regardless of host frame timing.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

import numpy as np

from ..types import Node
from ..util import norm


def clamp_velocity(v: np.ndarray, max_velocity: float) -> np.ndarray:
    """
    Rescale v to max_velocity if it is faster, preserving direction.

    Returns v itself when it is within the cap.
    """
    speed = norm(v)
    if speed > max_velocity:
        return v * (max_velocity / speed)
    return v


def semi_implicit_euler_step(
    node: Node,
    dt: float,
    damping: float,
    max_velocity: float,
) -> None:
    """
    Advance a node by one tick.

        v ← (v + a·dt) · damping, clamped to max_velocity
        x ← x + v·dt

    Args:
        node: Node to integrate (modified in-place).
        dt: Fixed timestep.
        damping: Velocity multiplier in (0, 1).
        max_velocity: Speed cap.
    """
    v = (node.velocity + node.acceleration * dt) * damping
    node.velocity = clamp_velocity(v, max_velocity)
    node.position = node.position + node.velocity * dt


def hold_pinned(node: Node) -> None:
    """Pinned nodes skip integration: position held, velocity zero."""
    node.velocity = np.zeros(2, dtype=np.float64)
