# MIT License (see LICENSE)
"""
Force generators for the layout simulation.

This module provides the four contributions summed into every node's
acceleration each tick:
- Repulsion: inverse-square push between every ordered pair of nodes,
  stronger for high-stress nodes.
- Springs: Hookean pull/push along each edge toward the rest length.
- Boundary: linear restoring force near the viewport edges.
- Shockwaves: inverse-square, geometrically decaying push away from each
  active shockwave origin.

All functions modify node.acceleration in-place and are called during the
accumulation phase of Simulation.step(). Contributions are added directly to
acceleration; mass does not scale them.

Key concepts:
- Distances in the inverse-square terms are softened to (d + 1).
- Coincident points have no direction and contribute nothing (util.unit
  returns the zero vector), so degenerate geometry never produces NaN.
- Repulsion is O(N²); a quad-tree would be needed for large graphs.
"""
from __future__ import annotations

import numpy as np

from ..types import Node, Shockwave
from ..util import inverse_square, norm, unit


def repulsion(
    node: Node,
    other: Node,
    k_repulsion: float,
    stress_threshold: float,
) -> np.ndarray:
    """
    Repulsion felt by node from other.

    Magnitude k * (1 + stress * stress_threshold) / (d + 1)², directed from
    other to node. Only node's own stress enters, so the pair force is not
    symmetric: contended nodes push harder.
    """
    d = node.position - other.position
    stress_factor = 1.0 + node.stress * stress_threshold
    return unit(d) * inverse_square(k_repulsion * stress_factor, norm(d))


def apply_repulsion_pairwise(
    nodes: list[Node],
    k_repulsion: float,
    stress_threshold: float,
) -> None:
    """
    Apply repulsion for every ordered pair of distinct nodes.

    Complexity: O(N²).

    Args:
        nodes: All nodes of the simulation.
        k_repulsion: Repulsion strength.
        stress_threshold: Stress bonus scale.
    """
    if k_repulsion == 0.0:
        return
    for i, node in enumerate(nodes):
        for j, other in enumerate(nodes):
            if i == j:
                continue
            node.acceleration += repulsion(node, other, k_repulsion, stress_threshold)


def spring_force(
    source: np.ndarray,
    target: np.ndarray,
    k_spring: float,
    rest_length: float,
) -> tuple[np.ndarray, float]:
    """
    Hooke's law along the source→target axis.

    F = k * (d - rest) * unit(target - source), applied to the source; the
    target receives -F. A stretched spring pulls the ends together, a
    compressed one pushes them apart.

    Returns:
        Tuple (force_on_source, displacement) where displacement = d - rest.
        With zero distance the direction is undefined and the force is zero.
    """
    d = target - source
    dist = norm(d)
    displacement = dist - rest_length
    if dist == 0.0:
        return np.zeros(2, dtype=np.float64), displacement
    return (d / dist) * (k_spring * displacement), displacement


def apply_springs(
    nodes: list[Node],
    pairs: list[tuple[int, int]],
    k_spring: float,
    rest_length: float,
) -> None:
    """
    Apply spring forces for every edge, with equal and opposite reaction.

    Args:
        nodes: Node list (indexed by pairs).
        pairs: Edges as (source_index, target_index).
        k_spring: Spring stiffness.
        rest_length: Spring rest length.
    """
    for i, j in pairs:
        a, b = nodes[i], nodes[j]
        f, _ = spring_force(a.position, b.position, k_spring, rest_length)
        a.acceleration += f
        b.acceleration -= f


def boundary_force(
    position: np.ndarray,
    width: float,
    height: float,
    margin: float,
    k: float,
) -> np.ndarray:
    """
    Linear restoring force near the viewport edges.

    Each axis is handled independently: inside the margin band the force is
    k times the penetration depth, pointing back toward the interior.
    """
    x, y = position[0], position[1]
    fx = fy = 0.0
    if x < margin:
        fx += (margin - x) * k
    if x > width - margin:
        fx += (width - margin - x) * k
    if y < margin:
        fy += (margin - y) * k
    if y > height - margin:
        fy += (height - margin - y) * k
    return np.array([fx, fy], dtype=np.float64)


def apply_boundary(
    nodes: list[Node],
    width: float,
    height: float,
    margin: float,
    k: float,
) -> None:
    """Apply boundary containment to every node."""
    if k == 0.0:
        return
    for node in nodes:
        node.acceleration += boundary_force(node.position, width, height, margin, k)


def shockwave_force(position: np.ndarray, sw: Shockwave, decay: float) -> np.ndarray:
    """
    Push from a single shockwave on a point.

    Magnitude force * decay^age / (d + 1)², directed away from the origin.
    """
    d = position - sw.origin
    return unit(d) * inverse_square(sw.strength(decay), norm(d))


def apply_shockwaves(nodes: list[Node], shockwaves: list[Shockwave], decay: float) -> None:
    """
    Apply every active shockwave to every node.

    Shockwaves superimpose linearly.
    """
    if not shockwaves:
        return
    for node in nodes:
        for sw in shockwaves:
            node.acceleration += shockwave_force(node.position, sw, decay)
