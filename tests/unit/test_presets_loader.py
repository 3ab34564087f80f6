import json
import math

import pytest

from orrery.errors import ConfigurationError
from orrery.presets_loader import (
    DEFAULT_CONFIGURATION,
    build_hierarchy,
    default_hierarchy,
    list_templates,
    load_configuration,
    load_template,
)


def test_default_table_has_four_planets_and_three_moons():
    system = default_hierarchy()

    assert [p.name for p in system.planets] == ["Mercury", "Venus", "Earth", "Mars"]
    assert system.moon_count == 3
    assert [m.name for m in system.planets[2].moons] == ["Moon"]
    assert [m.name for m in system.planets[3].moons] == ["Phobos", "Deimos"]

    moons = [m for p in system.planets for m in p.moons]
    assert len({id(m) for m in moons}) == 3
    for planet in system.planets:
        for moon in planet.moons:
            assert moon.parent is planet


def test_default_table_values():
    system = default_hierarchy()
    earth = system.find("Earth")
    deimos = system.find("Mars/Deimos")

    assert (earth.radius, earth.distance, earth.speed) == (1.0, 20.0, 0.005)
    assert deimos.color == (255, 255, 255)
    assert system.star.radius == 5.0
    assert system.star.spin_rate == pytest.approx(math.radians(20))


def test_default_hierarchy_is_fresh_each_call():
    a, b = default_hierarchy(), default_hierarchy()
    a.planets[0].rotation_angle = 1.0
    assert b.planets[0].rotation_angle == 0.0


def test_bundled_templates_are_listed_and_load():
    templates = dict(list_templates())
    assert templates["solar_system.json"] == "Solar System"

    system, name = load_template("solar_system.json")
    assert name == "Solar System"
    assert len(system.planets) == 4
    assert system.moon_count == 3


def test_bundled_solar_system_matches_builtin_table():
    bundled, _ = load_template("solar_system.json")
    builtin = build_hierarchy(DEFAULT_CONFIGURATION)

    def params(system):
        return [(b.path, b.radius, b.distance, b.speed, b.color) for b in system.bodies()]

    assert params(bundled) == params(builtin)


def test_load_configuration_from_file(tmp_path):
    path = tmp_path / "binary.json"
    path.write_text(json.dumps({
        "star": {"name": "Vega", "radius": 3, "spin_deg_per_second": 90, "color": 0xAABBCC},
        "planets": [
            {"name": "Rock", "radius": 1, "distance": 8, "speed": -0.02,
             "moons": [{"name": "Pebble", "radius": 0.1, "distance": 1.5, "speed": 0.05}]},
        ],
    }), encoding="utf-8")

    system, name = load_configuration(str(path))

    assert name == "binary"
    assert system.star.name == "Vega"
    assert system.star.spin_rate == pytest.approx(math.pi / 2)
    assert system.star.color == (0xAA, 0xBB, 0xCC)
    assert system.find("Rock/Pebble").speed == 0.05


@pytest.mark.parametrize("table", [
    [],
    {},
    {"planets": {}},
    {"planets": [{"radius": 1, "distance": 1, "speed": 1}]},
    {"planets": [{"name": "X", "distance": 1, "speed": 1}]},
    {"planets": [{"name": "X", "radius": "big", "distance": 1, "speed": 1}]},
    {"planets": [{"name": "X", "radius": True, "distance": 1, "speed": 1}]},
    {"planets": [{"name": "X", "radius": 1, "distance": -1, "speed": 1}]},
    {"planets": [{"name": "X", "radius": 1, "distance": 1, "speed": 1, "moons": {}}]},
    {"planets": [{"name": "X", "radius": 1, "distance": 1, "speed": 1},
                 {"name": "X", "radius": 1, "distance": 2, "speed": 1}]},
    {"planets": [{"name": "Earth", "radius": 1, "distance": 20, "speed": 0.005, "moons": [
        {"name": "Moon", "radius": 0.3, "distance": 3, "speed": 0.015,
         "moons": [{"name": "Moonlet", "radius": 0.05, "distance": 0.5, "speed": 0.1}]}]}]},
    {"planets": [{"name": "Earth", "radius": 1, "distance": 20, "speed": 0.005,
                  "moons": [{"name": "Moon", "radius": 0.3, "distance": 3, "speed": 0.015}]},
                 {"name": "Earth/Moon", "radius": 1, "distance": 30, "speed": 0.004}]},
])
def test_malformed_tables_are_configuration_errors(table):
    with pytest.raises(ConfigurationError):
        build_hierarchy(table)


def test_unreadable_preset_is_configuration_error(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_configuration(str(bad))
    with pytest.raises(ConfigurationError):
        load_configuration(str(tmp_path / "missing.json"))


def test_invalid_color_falls_back_to_default():
    system = build_hierarchy({"planets": [
        {"name": "X", "radius": 1, "distance": 1, "speed": 1, "color": "teal"},
    ]})
    assert system.planets[0].color == (200, 200, 210)
