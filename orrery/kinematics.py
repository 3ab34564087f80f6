#!/usr/bin/env python3
"""
Orbital kinematics for the Orrery Simulator.

Responsibilities
- Advance each body's orbital angle and derive its position on a circle around the
  parent's origin.
- Spin the central star about its own axis.

Conventions
- Orbits lie in the XZ plane of the parent's local frame:
      position = (distance * sin(angle), 0, distance * cos(angle))
  so a planet's position is in world space and a moon's is relative to its planet.
- Orbit stepping defaults to a fixed increment per tick: one tick adds `speed` to the
  angle regardless of how much time elapsed. The star instead spins by
  delta_time * spin_rate, so its motion does not depend on the frame rate. The
  "per_second" stepping mode scales orbital increments by delta_time as well,
  normalised so that both modes agree at REFERENCE_FRAME_RATE.

Threading
- Pure compute. The only state is the stepping mode; bodies are mutated in place by
  update() and must not be read concurrently, which the single-threaded render loop
  guarantees.
"""

import math
from typing import Tuple

from .constants import ORBIT_STEP_PER_SECOND, ORBIT_STEP_PER_TICK, ORBIT_STEPPING_MODES, REFERENCE_FRAME_RATE
from .data_models import OrbitalBody, Star
from .vector_utils import Vec3


def orbital_position(distance: float, angle: float) -> Vec3:
    """Position on a circle of the given radius at the given angle, in the parent's frame."""
    return (distance * math.sin(angle), 0.0, distance * math.cos(angle))


def spin_star(star: Star, delta_time: float) -> float:
    """
    Advance the star's self-rotation by delta_time * spin_rate.

    Args:
        star: Star to rotate in place
        delta_time: Seconds since the previous tick (must be >= 0)

    Returns:
        The new rotation angle in radians
    """
    if delta_time < 0:
        raise ValueError(f"delta_time must be non-negative, got {delta_time}")
    star.rotation_angle += delta_time * star.spin_rate
    return star.rotation_angle


class TransformUpdater:
    """
    Advances orbiting bodies one tick at a time.

    update() is a read-modify-write of body.rotation_angle followed by the position
    formula. Callers are responsible for visiting a planet before its moons; the
    updater itself treats every body independently since a moon's output is always
    relative to its parent.
    """

    def __init__(self, stepping: str = ORBIT_STEP_PER_TICK,
                 reference_frame_rate: float = REFERENCE_FRAME_RATE):
        """
        Initialize the updater.

        Args:
            stepping: "per_tick" (fixed increment per frame) or "per_second"
                (increment scaled by delta time)
            reference_frame_rate: Frames per second at which "per_second" stepping
                matches "per_tick" stepping
        """
        if stepping not in ORBIT_STEPPING_MODES:
            raise ValueError(f"Unknown orbit stepping {stepping!r}, expected one of {ORBIT_STEPPING_MODES}")
        if reference_frame_rate <= 0:
            raise ValueError("reference_frame_rate must be positive")
        self.stepping = stepping
        self.reference_frame_rate = float(reference_frame_rate)

    def angle_increment(self, body: OrbitalBody, delta_time: float) -> float:
        """Angle added to the body for a tick lasting delta_time seconds."""
        if self.stepping == ORBIT_STEP_PER_SECOND:
            return body.speed * delta_time * self.reference_frame_rate
        return body.speed

    def update(self, body: OrbitalBody, delta_time: float) -> Tuple[float, Vec3]:
        """
        Advance one body by one tick.

        Args:
            body: Planet or moon, mutated in place
            delta_time: Seconds since the previous tick (>= 0)

        Returns:
            (new rotation angle, new position in the parent's frame)
        """
        body.rotation_angle += self.angle_increment(body, delta_time)
        return body.rotation_angle, orbital_position(body.distance, body.rotation_angle)
