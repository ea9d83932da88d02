# MIT License (see LICENSE)
"""
Aggregate statistics and state checks.

The statistics are pure reductions over the current node and edge sets and
never mutate simulation state:
    kinetic energy  T = Σ ½·m·|v|²
    tension           = Σ |length - rest_length| over edges
    entropy           = -ln(T / n + ε)

The finiteness checks detect numerical corruption (NaN/inf) so the
simulation can contain it before it spreads through the repulsion term.
"""
from __future__ import annotations
import math

import numpy as np

from ..types import Node, Stats
from ..util import distance, is_finite_vec


def kinetic_energy(nodes: list[Node]) -> float:
    """
    Total kinetic energy of the nodes.

    T = Σ 0.5 * m * v²
    """
    ke = 0.0
    for n in nodes:
        v_sq = float(np.dot(n.velocity, n.velocity))
        ke += 0.5 * n.mass * v_sq
    return ke


def spring_tension(nodes: list[Node], pairs: list[tuple[int, int]], rest_length: float) -> float:
    """Sum of absolute spring deviations from the rest length."""
    total = 0.0
    for i, j in pairs:
        total += abs(distance(nodes[i].position, nodes[j].position) - rest_length)
    return total


def network_entropy(total_kinetic_energy: float, n_nodes: int, eps: float) -> float:
    """
    Disorder proxy: -ln(average kinetic energy per node + eps).

    High when the layout is at rest, low when it is agitated. An empty
    graph counts as at rest.
    """
    avg = total_kinetic_energy / n_nodes if n_nodes else 0.0
    return -math.log(avg + eps)


def compute_stats(
    nodes: list[Node],
    pairs: list[tuple[int, int]],
    rest_length: float,
    eps: float,
) -> Stats:
    """Compute all statistics for the current state."""
    ke = kinetic_energy(nodes)
    return Stats(
        kinetic_energy=ke,
        tension=spring_tension(nodes, pairs, rest_length),
        network_entropy=network_entropy(ke, len(nodes), eps),
    )


def max_speed(nodes: list[Node]) -> float:
    """Largest node speed (0 for an empty graph)."""
    return max((n.speed for n in nodes), default=0.0)


def node_is_finite(node: Node) -> bool:
    """True if the node's position and velocity are finite."""
    return is_finite_vec(node.position) and is_finite_vec(node.velocity)
