#!/usr/bin/env python3
"""
Data models for the Orrery Simulator.

This module defines the bodies shared between the kinematics, the render loop and the
viewer, and the two-level hierarchy that owns them.

Units and usage
- distance and radius are in scene units; speed is radians added per tick (or per
  reference frame, see kinematics); the star's spin_rate is radians per second.
- rotation_angle is the only field mutated after startup, once per frame, by the
  render loop. It accumulates without wrapping; only its sine and cosine are used.
- Moons keep an explicit reference to their planet. The hierarchy is a forest of
  depth two below the star and is never reparented after construction.
"""
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, STAR_COLOR, STAR_SPIN_RATE
from .errors import ConfigurationError

PATH_SEPARATOR = "/"


def _require_finite(owner: str, label: str, value: float) -> float:
    try:
        value = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{owner}: {label} must be a number, got {value!r}") from exc
    if not math.isfinite(value):
        raise ConfigurationError(f"{owner}: {label} must be finite, got {value!r}")
    return value


def _require_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ConfigurationError("Body name must be a non-empty string")
    if PATH_SEPARATOR in name:
        raise ConfigurationError(f"Body name '{name}' must not contain '{PATH_SEPARATOR}'")


@dataclass
class OrbitalBody:
    """
    A planet or moon following a circular orbit around its parent's origin.

    Fields:
    - name: Identifier, unique among its siblings; used for diagnostics only
    - radius: Visual scale, must be positive
    - distance: Orbital radius from the parent's origin, must be non-negative
    - speed: Angular step added to rotation_angle each tick; sign sets direction
    - color: RGB tuple used for rendering
    - rotation_angle: Accumulated orbital angle in radians
    - parent: Owning planet for a moon, None for a planet
    - moons: Ordered children of a planet
    """
    name: str
    radius: float
    distance: float
    speed: float
    color: Tuple[int, int, int] = DEFAULT_BODY_COLOR
    rotation_angle: float = 0.0
    parent: Optional["OrbitalBody"] = field(default=None, repr=False, compare=False)
    moons: List["OrbitalBody"] = field(default_factory=list, repr=False, compare=False)

    def __post_init__(self):
        _require_name(self.name)
        self.radius = _require_finite(self.name, "radius", self.radius)
        self.distance = _require_finite(self.name, "distance", self.distance)
        self.speed = _require_finite(self.name, "speed", self.speed)
        self.rotation_angle = _require_finite(self.name, "rotation_angle", self.rotation_angle)
        if self.radius <= 0:
            raise ConfigurationError(f"{self.name}: radius must be positive, got {self.radius}")
        if self.distance < 0:
            raise ConfigurationError(f"{self.name}: distance must be non-negative, got {self.distance}")

    @property
    def path(self) -> str:
        """Hierarchy-wide unique key: 'Earth' for a planet, 'Earth/Moon' for a moon."""
        if self.parent is None:
            return self.name
        return f"{self.parent.name}{PATH_SEPARATOR}{self.name}"

    @property
    def is_moon(self) -> bool:
        return self.parent is not None

    def add_moon(self, moon: "OrbitalBody") -> "OrbitalBody":
        """Attach a moon to this planet and return it."""
        if moon is self:
            raise ConfigurationError(f"{self.name}: a body cannot orbit itself")
        if self.parent is not None:
            raise ConfigurationError(
                f"{moon.name}: cannot orbit {self.path}, moons cannot have moons"
            )
        if moon.parent is not None:
            raise ConfigurationError(
                f"{moon.name}: already orbits {moon.parent.name}"
            )
        if moon.moons:
            raise ConfigurationError(
                f"{moon.name}: has moons of its own and cannot become a moon"
            )
        if any(m.name == moon.name for m in self.moons):
            raise ConfigurationError(f"{self.name}: duplicate moon name '{moon.name}'")
        moon.parent = self
        self.moons.append(moon)
        return moon


@dataclass
class Star:
    """The central body. It does not orbit, it only spins about its own axis."""
    name: str = "Sun"
    radius: float = 5.0
    spin_rate: float = STAR_SPIN_RATE
    color: Tuple[int, int, int] = STAR_COLOR
    rotation_angle: float = 0.0

    def __post_init__(self):
        _require_name(self.name)
        self.radius = _require_finite(self.name, "radius", self.radius)
        self.spin_rate = _require_finite(self.name, "spin_rate", self.spin_rate)
        if self.radius <= 0:
            raise ConfigurationError(f"{self.name}: radius must be positive, got {self.radius}")

    @property
    def path(self) -> str:
        return self.name


class OrbitalHierarchy:
    """
    The star and its planets, each planet owning an ordered list of moons.

    Insertion order is the update order. Instances are passed explicitly to whoever
    needs them; several independent hierarchies can coexist.
    """

    def __init__(self, star: Optional[Star] = None):
        self.star = star or Star()
        self.planets: List[OrbitalBody] = []

    def add_planet(self, planet: OrbitalBody) -> OrbitalBody:
        if planet.parent is not None:
            raise ConfigurationError(
                f"{planet.name}: is a moon of {planet.parent.name} and cannot be a planet"
            )
        if any(p is planet for p in self.planets):
            raise ConfigurationError(f"{planet.name}: already in the hierarchy")
        if any(p.name == planet.name for p in self.planets):
            raise ConfigurationError(f"Duplicate planet name '{planet.name}'")
        if planet.name == self.star.name:
            raise ConfigurationError(f"Planet name '{planet.name}' clashes with the star")
        self.planets.append(planet)
        return planet

    def bodies(self) -> Iterator[OrbitalBody]:
        """Yield every orbiting body, each planet immediately followed by its moons."""
        for planet in self.planets:
            yield planet
            for moon in planet.moons:
                yield moon

    @property
    def moon_count(self) -> int:
        return sum(len(p.moons) for p in self.planets)

    def find(self, path: str) -> Optional[OrbitalBody]:
        for body in self.bodies():
            if body.path == path:
                return body
        return None

    def reset(self) -> None:
        """Zero every accumulated angle, star included."""
        self.star.rotation_angle = 0.0
        for body in self.bodies():
            body.rotation_angle = 0.0

    def __len__(self) -> int:
        return len(self.planets) + self.moon_count

    def __repr__(self) -> str:
        return (f"OrbitalHierarchy(star={self.star.name!r}, "
                f"planets={len(self.planets)}, moons={self.moon_count})")
