# MIT License (see LICENSE)
"""
Shockwave lifecycle.

A shockwave is created by an external trigger with age 0, pushes nodes for
as long as it is active, and ages by one tick after every integration:

    created → aging (strength = force · decay^age) → removed

It is removed once its decayed strength falls below the threshold or its age
reaches the ceiling, whichever comes first. The force field itself lives in
core/forces.py.
"""
from __future__ import annotations
import math

from ..types import Shockwave


def is_alive(sw: Shockwave, decay: float, threshold: float, max_age: int) -> bool:
    """
    True while a shockwave should stay in the active set.

    The threshold applies to the magnitude, so a negative force (a pull
    toward the origin) decays the same way. A shockwave with a non-finite
    strength (NaN or inf force) is dropped on its first aging.
    """
    strength = sw.strength(decay)
    return sw.age < max_age and math.isfinite(strength) and abs(strength) >= threshold


def age_and_prune(
    shockwaves: list[Shockwave],
    decay: float,
    threshold: float,
    max_age: int,
) -> list[Shockwave]:
    """
    Age every shockwave by one tick and drop the expired ones.

    Args:
        shockwaves: Active set (aged in-place).
        decay: Strength multiplier per tick of age.
        threshold: Minimum decayed strength.
        max_age: Age ceiling in ticks.

    Returns:
        The surviving shockwaves, in creation order.
    """
    for sw in shockwaves:
        sw.age += 1
    return [sw for sw in shockwaves if is_alive(sw, decay, threshold, max_age)]


def lifetime(force: float, decay: float, threshold: float, max_age: int) -> int:
    """
    Number of ticks a shockwave of the given force stays active.

    Equal to the age at which age_and_prune() drops it.
    """
    sw = Shockwave(origin=(0.0, 0.0), force=force)
    while True:
        sw.age += 1
        if not is_alive(sw, decay, threshold, max_age):
            return sw.age
