# MIT License (see LICENSE)
"""
Vector math helpers for the layout simulator.

Node positions, velocities and accelerations are 2D vectors stored as
float64 numpy arrays of shape (2,). These helpers provide the distance,
direction and finiteness primitives the force field is built from.
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Lets callers pass plain tuples/lists for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps: coincident points have no
    direction, so any force along it is dropped instead of becoming NaN.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64)
    return v / n


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return norm(b - a)


def inverse_square(magnitude: float, dist: float) -> float:
    """
    Softened inverse-square falloff: magnitude / (dist + 1)².

    The +1 keeps the force finite when two points coincide.
    """
    d = dist + 1.0
    return magnitude / (d * d)


def is_finite_vec(v: np.ndarray) -> bool:
    """True if every component of v is a finite number."""
    return bool(np.all(np.isfinite(v)))
