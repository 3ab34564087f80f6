#!/usr/bin/env python3
"""
Body table and preset JSON loading utilities.

This module defines the configuration table the hierarchy is built from, the built-in
solar system table, and a loader for preset files (orrery/templates/*.json).

Schema
======
Preset JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "star": {                          # optional, defaults to a 5-unit Sun
    "name": "Sun",
    "radius": 5,
    "spin_deg_per_second": 20,
    "color": [255, 204, 0]
  },
  "planets": [
    {
      "name": "Earth",
      "radius": 1,
      "distance": 20,
      "speed": 0.005,                # radians per tick
      "color": [70, 120, 220],       # or 0x4678dc
      "moons": [
        {"name": "Moon", "radius": 0.3, "distance": 3, "speed": 0.015}
      ]
    }
  ]
}

Unlike colours, which fall back to a default, any malformed body record is a
ConfigurationError: the table is read once at startup and a bad table is fatal.
"""
import json
import logging
import math
import os
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .constants import DEFAULT_BODY_COLOR, STAR_COLOR, STAR_SPIN_DEG_PER_SECOND
from .data_models import OrbitalBody, OrbitalHierarchy, Star
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")

DEFAULT_CONFIGURATION: Dict[str, Any] = {
  "name": "Solar System",
  "star": {"name": "Sun", "radius": 5, "spin_deg_per_second": STAR_SPIN_DEG_PER_SECOND, "color": [255, 204, 0]},
  "planets": [
    {"name": "Mercury", "radius": 0.5, "distance": 10, "speed": 0.01, "color": [169, 160, 150], "moons": []},
    {"name": "Venus", "radius": 0.8, "distance": 15, "speed": 0.007, "color": [230, 190, 120], "moons": []},
    {
      "name": "Earth", "radius": 1, "distance": 20, "speed": 0.005, "color": [70, 120, 220],
      "moons": [
        {"name": "Moon", "radius": 0.3, "distance": 3, "speed": 0.015},
      ],
    },
    {
      "name": "Mars", "radius": 0.7, "distance": 25, "speed": 0.003, "color": [200, 90, 60],
      "moons": [
        {"name": "Phobos", "radius": 0.1, "distance": 2, "speed": 0.02},
        {"name": "Deimos", "radius": 0.2, "distance": 3, "speed": 0.015, "color": 0xffffff},
      ],
    },
  ],
}


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    raise ConfigurationError(f"Cannot read preset {path}: {exc}") from exc
  if not isinstance(data, dict):
    raise ConfigurationError(f"Preset {path} must contain a JSON object")
  return data


def _coerce_color(c: Any, default: Tuple[int, int, int] = DEFAULT_BODY_COLOR) -> Tuple[int, int, int]:
  """Accept [r, g, b] or a 0xRRGGBB integer; anything else falls back to the default."""
  if c is None:
    return default
  try:
    if isinstance(c, int) and not isinstance(c, bool):
      r, g, b = (c >> 16) & 0xFF, (c >> 8) & 0xFF, c & 0xFF
    else:
      r, g, b = int(c[0]), int(c[1]), int(c[2])
    r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
    return (r, g, b)
  except (TypeError, ValueError, IndexError):
    logger.warning("Ignoring invalid color %r", c)
    return default


def _number(record: Mapping[str, Any], key: str, where: str, default: Optional[float] = None) -> float:
  if key not in record:
    if default is not None:
      return default
    raise ConfigurationError(f"{where}: missing '{key}'")
  value = record[key]
  if isinstance(value, bool):
    raise ConfigurationError(f"{where}: '{key}' must be a number, got {value!r}")
  try:
    return float(value)
  except (TypeError, ValueError) as exc:
    raise ConfigurationError(f"{where}: '{key}' must be a number, got {value!r}") from exc


def _body_from_record(record: Any, where: str, color_default: Tuple[int, int, int]) -> OrbitalBody:
  if not isinstance(record, Mapping):
    raise ConfigurationError(f"{where}: expected an object, got {type(record).__name__}")
  name = record.get("name")
  if not isinstance(name, str) or not name.strip():
    raise ConfigurationError(f"{where}: missing 'name'")
  where = f"{where} '{name}'"
  return OrbitalBody(
    name=name.strip(),
    radius=_number(record, "radius", where),
    distance=_number(record, "distance", where),
    speed=_number(record, "speed", where),
    color=_coerce_color(record.get("color"), color_default),
  )


def _star_from_record(record: Any) -> Star:
  if record is None:
    return Star()
  if not isinstance(record, Mapping):
    raise ConfigurationError("star: expected an object")
  spin_deg = _number(record, "spin_deg_per_second", "star", STAR_SPIN_DEG_PER_SECOND)
  return Star(
    name=str(record.get("name") or "Sun"),
    radius=_number(record, "radius", "star", 5.0),
    spin_rate=math.radians(spin_deg),
    color=_coerce_color(record.get("color"), STAR_COLOR),
  )


def build_hierarchy(table: Mapping[str, Any]) -> OrbitalHierarchy:
  """
  Build an OrbitalHierarchy from a configuration table.
  Raises ConfigurationError for any malformed record or hierarchy violation.
  """
  if not isinstance(table, Mapping):
    raise ConfigurationError("Configuration must be an object")
  planets = table.get("planets")
  if not isinstance(planets, list):
    raise ConfigurationError("Configuration needs a 'planets' list")

  hierarchy = OrbitalHierarchy(_star_from_record(table.get("star")))
  for i, p in enumerate(planets):
    planet = hierarchy.add_planet(_body_from_record(p, f"planets[{i}]", DEFAULT_BODY_COLOR))
    moons = p.get("moons")
    if moons is None:
      moons = []
    if not isinstance(moons, list):
      raise ConfigurationError(f"{planet.name}: 'moons' must be a list")
    for j, m in enumerate(moons):
      moon = planet.add_moon(_body_from_record(m, f"{planet.name}.moons[{j}]", DEFAULT_BODY_COLOR))
      if m.get("moons"):
        raise ConfigurationError(f"{moon.path}: moons cannot have moons")

  logger.info("Built hierarchy '%s': %d planets, %d moons",
              table.get("name", "unnamed"), len(hierarchy.planets), hierarchy.moon_count)
  return hierarchy


def default_hierarchy() -> OrbitalHierarchy:
  """Fresh hierarchy from the built-in table."""
  return build_hierarchy(DEFAULT_CONFIGURATION)


def load_configuration(path: str) -> Tuple[OrbitalHierarchy, str]:
  """Load a preset from an arbitrary path. Returns (hierarchy, display_name)."""
  data = _read_json(path)
  display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]
  logger.info("Loading preset %s from %s", display_name, path)
  return build_hierarchy(data), display_name


def list_templates() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for bundled templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(TEMPLATES_DIR):
    return items
  for fn in sorted(os.listdir(TEMPLATES_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(TEMPLATES_DIR, fn))
    except ConfigurationError as exc:
      logger.warning("Skipping template %s: %s", fn, exc)
      continue
    items.append((fn, data.get("name") or os.path.splitext(fn)[0]))
  return items


def load_template(file_name: str) -> Tuple[OrbitalHierarchy, str]:
  """
  Load a bundled template JSON by file name.
  Returns (hierarchy, display_name)
  """
  return load_configuration(os.path.join(TEMPLATES_DIR, file_name))
