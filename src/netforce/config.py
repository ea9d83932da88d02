# MIT License (see LICENSE)
"""
Immutable simulation parameters.

``SimulationConfig`` gathers every tunable constant of the force field,
integrator, shockwave subsystem and scheduler in one frozen dataclass that
is passed to the simulation at construction. Tests build variants with
``replace()`` instead of mutating module-level constants.

``Viewport`` holds the drawing area size supplied by the rendering layer.
Both validate on creation and raise ``ConfigurationError`` for values the
simulation cannot run with.
"""
from __future__ import annotations
import dataclasses
import math
from dataclasses import dataclass

from . import constants as C
from .errors import ConfigurationError


@dataclass(frozen=True)
class SimulationConfig:
    """
    Parameters of the layout simulation.

    Attributes:
        k_repulsion: Pairwise repulsion strength.
        k_spring: Spring stiffness of every edge.
        rest_length: Spring rest length in pixels. Must be > 0.
        damping: Velocity multiplier per tick, in (0, 1).
        max_velocity: Speed cap after damping. Must be > 0.
        dt: Fixed logical timestep. Must be > 0.
        shockwave_decay: Strength multiplier per tick of age, in (0, 1].
        stress_threshold: Scales the stress repulsion bonus
                          (stress factor = 1 + stress * stress_threshold)
                          and marks high-stress nodes.
        boundary_margin: Distance from each viewport edge where containment
                         starts to push back.
        boundary_k: Containment spring constant.
        shockwave_threshold: Decayed strength below which a shockwave is
                             dropped. Must be > 0.
        shockwave_max_age: Age (ticks) at which a shockwave is dropped
                           regardless of strength. Must be >= 1.
        entropy_epsilon: Offset inside the entropy logarithm. Must be > 0.
        frame_interval: Minimum wall-clock seconds between scheduled steps.
        default_force: Force of a plain ``trigger_shockwave``.
        drag_force: Force of the shockwave emitted on each drag move.
        release_force: Force of the shockwave emitted on release.
        ambient_force: Force of a background-click shockwave.
    """
    k_repulsion: float = C.K_REPULSION
    k_spring: float = C.K_SPRING
    rest_length: float = C.REST_LENGTH
    damping: float = C.DAMPING
    max_velocity: float = C.MAX_VELOCITY
    dt: float = C.TIME_STEP
    shockwave_decay: float = C.SHOCKWAVE_DECAY
    stress_threshold: float = C.STRESS_THRESHOLD
    boundary_margin: float = C.BOUNDARY_MARGIN
    boundary_k: float = C.BOUNDARY_K
    shockwave_threshold: float = C.SHOCKWAVE_THRESHOLD
    shockwave_max_age: int = C.SHOCKWAVE_MAX_AGE
    entropy_epsilon: float = C.ENTROPY_EPS
    frame_interval: float = C.FRAME_INTERVAL
    default_force: float = C.DEFAULT_SHOCK_FORCE
    drag_force: float = C.DRAG_SHOCK_FORCE
    release_force: float = C.RELEASE_SHOCK_FORCE
    ambient_force: float = C.AMBIENT_SHOCK_FORCE

    def __post_init__(self) -> None:
        """Reject parameters the integrator or force field cannot handle."""
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{f.name} must be finite, got {value}")

        _positive("rest_length", self.rest_length)
        _positive("max_velocity", self.max_velocity)
        _positive("dt", self.dt)
        _positive("shockwave_threshold", self.shockwave_threshold)
        _positive("entropy_epsilon", self.entropy_epsilon)
        _non_negative("k_repulsion", self.k_repulsion)
        _non_negative("k_spring", self.k_spring)
        _non_negative("stress_threshold", self.stress_threshold)
        _non_negative("boundary_margin", self.boundary_margin)
        _non_negative("boundary_k", self.boundary_k)
        _non_negative("frame_interval", self.frame_interval)

        if not 0.0 < self.damping < 1.0:
            raise ConfigurationError(f"damping must be in (0, 1), got {self.damping}")
        if not 0.0 < self.shockwave_decay <= 1.0:
            raise ConfigurationError(
                f"shockwave_decay must be in (0, 1], got {self.shockwave_decay}"
            )
        if int(self.shockwave_max_age) != self.shockwave_max_age or self.shockwave_max_age < 1:
            raise ConfigurationError(
                f"shockwave_max_age must be a positive integer, got {self.shockwave_max_age}"
            )

    def replace(self, **changes) -> "SimulationConfig":
        """Return a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Viewport:
    """
    Drawing area the boundary force keeps nodes inside.

    Attributes:
        width: Width in pixels. Must be > 0.
        height: Height in pixels. Must be > 0.
    """
    width: float = C.DEFAULT_WIDTH
    height: float = C.DEFAULT_HEIGHT

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"viewport {name} must be positive, got {value}")


def _positive(name: str, value: float) -> None:
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {value}")


def _non_negative(name: str, value: float) -> None:
    if value < 0:
        raise ConfigurationError(f"{name} must be >= 0, got {value}")
