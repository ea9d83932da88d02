# MIT License (see LICENSE)
"""
Core layout physics.

This subpackage provides:
    - Force generators: Repulsion, springs, boundary, shockwaves.
    - Integrator: Semi-implicit Euler with damping and a speed cap.
    - Shockwave lifecycle: Aging and pruning.
    - Statistics: Kinetic energy, tension, entropy.

Typical usage:
    from netforce.core import apply_springs, semi_implicit_euler_step

    apply_springs(nodes, pairs, k_spring=0.05, rest_length=120)
    semi_implicit_euler_step(node, dt=0.016, damping=0.92, max_velocity=15)
"""
from .forces import (
    apply_repulsion_pairwise,
    apply_springs,
    apply_boundary,
    apply_shockwaves,
)
from .integrators import semi_implicit_euler_step, clamp_velocity
from .shockwaves import age_and_prune
from .invariants import compute_stats, kinetic_energy, spring_tension, network_entropy

__all__ = [
    # Forces
    "apply_repulsion_pairwise",
    "apply_springs",
    "apply_boundary",
    "apply_shockwaves",
    # Integrator
    "semi_implicit_euler_step",
    "clamp_velocity",
    # Shockwaves
    "age_and_prune",
    # Statistics
    "compute_stats",
    "kinetic_energy",
    "spring_tension",
    "network_entropy",
]
