# MIT License (see LICENSE)
"""
Default physical constants of the layout simulator.

Units are screen pixels and logical seconds. The values are tuned for a
graph of tens of nodes laid out in a viewport around 1000x700 pixels,
stepped at roughly 60 ticks per second.
"""
from __future__ import annotations

# Pairwise repulsion strength (inverse-square, Coulomb-like).
K_REPULSION: float = 5000.0

# Spring stiffness and rest length of every edge (Hooke's law).
K_SPRING: float = 0.05
REST_LENGTH: float = 120.0

# Geometric velocity decay applied once per tick, in (0, 1).
DAMPING: float = 0.92

# Speed cap enforced after damping.
MAX_VELOCITY: float = 15.0

# Fixed logical timestep (~60 fps).
TIME_STEP: float = 0.016

# Shockwave strength multiplier per tick of age.
SHOCKWAVE_DECAY: float = 0.95

# Stress above this is "high"; also scales the stress repulsion bonus.
STRESS_THRESHOLD: float = 0.7

# Boundary containment: distance from each viewport edge and spring constant.
BOUNDARY_MARGIN: float = 50.0
BOUNDARY_K: float = 0.1

# A shockwave is dropped once its decayed strength falls below the threshold
# or its age reaches the ceiling.
SHOCKWAVE_THRESHOLD: float = 0.1
SHOCKWAVE_MAX_AGE: int = 300

# Offset inside the entropy logarithm, keeps ln() finite at rest.
ENTROPY_EPS: float = 1e-3

# Mass = 1 + stress * MASS_PER_STRESS.
MASS_PER_STRESS: float = 0.5

# Minimum wall-clock time between two scheduled steps (seconds).
FRAME_INTERVAL: float = 0.016

# Shockwave force presets for the interactive triggers.
DEFAULT_SHOCK_FORCE: float = 1000.0
DRAG_SHOCK_FORCE: float = 500.0
RELEASE_SHOCK_FORCE: float = 2000.0
AMBIENT_SHOCK_FORCE: float = 800.0

# Viewport used when the host does not supply one.
DEFAULT_WIDTH: float = 1000.0
DEFAULT_HEIGHT: float = 700.0
