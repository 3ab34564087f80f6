import math

import pytest

from orrery.data_models import OrbitalBody, OrbitalHierarchy, Star
from orrery.errors import ConfigurationError


def _planet(name="Earth", **kw):
    params = dict(radius=1, distance=20, speed=0.005)
    params.update(kw)
    return OrbitalBody(name, **params)


def _moon(name="Moon"):
    return OrbitalBody(name, radius=0.3, distance=3, speed=0.015)


def test_body_starts_at_zero_angle_with_no_parent():
    body = _planet()
    assert body.rotation_angle == 0.0
    assert body.parent is None
    assert body.path == "Earth"
    assert not body.is_moon


@pytest.mark.parametrize("kw", [
    {"radius": 0},
    {"radius": -1},
    {"distance": -0.1},
    {"speed": math.nan},
    {"distance": math.inf},
    {"radius": None},
    {"speed": "x"},
])
def test_invalid_parameters_rejected(kw):
    with pytest.raises(ConfigurationError):
        _planet(**kw)


def test_separator_in_name_is_rejected():
    with pytest.raises(ConfigurationError, match="must not contain"):
        _planet("Earth/Moon")
    with pytest.raises(ConfigurationError):
        Star(name="Sun/Core")


def test_zero_distance_and_zero_speed_are_valid():
    body = _planet(distance=0, speed=0)
    assert body.distance == 0.0
    assert body.speed == 0.0


def test_add_moon_links_parent_and_path():
    earth = _planet()
    moon = earth.add_moon(_moon())

    assert moon.parent is earth
    assert moon.is_moon
    assert moon.path == "Earth/Moon"
    assert earth.moons == [moon]


def test_moon_cannot_be_shared_between_planets():
    earth, mars = _planet("Earth"), _planet("Mars")
    moon = earth.add_moon(_moon())

    with pytest.raises(ConfigurationError, match="already orbits Earth"):
        mars.add_moon(moon)
    assert mars.moons == []


def test_moons_cannot_have_moons():
    earth = _planet()
    moon = earth.add_moon(_moon())

    with pytest.raises(ConfigurationError):
        moon.add_moon(_moon("Moonlet"))


def test_body_with_moons_cannot_become_a_moon():
    earth, mars = _planet("Earth"), _planet("Mars")
    mars.add_moon(_moon("Phobos"))

    with pytest.raises(ConfigurationError):
        earth.add_moon(mars)


def test_body_cannot_orbit_itself():
    earth = _planet()
    with pytest.raises(ConfigurationError):
        earth.add_moon(earth)


def test_duplicate_moon_names_rejected_per_planet_only():
    earth, mars = _planet("Earth"), _planet("Mars")
    earth.add_moon(_moon("Moon"))
    mars.add_moon(_moon("Moon"))

    with pytest.raises(ConfigurationError):
        earth.add_moon(_moon("Moon"))


def test_hierarchy_iterates_planet_then_its_moons():
    system = OrbitalHierarchy()
    earth = system.add_planet(_planet("Earth"))
    mars = system.add_planet(_planet("Mars", distance=25))
    moon = earth.add_moon(_moon("Moon"))
    phobos = mars.add_moon(_moon("Phobos"))
    deimos = mars.add_moon(_moon("Deimos"))

    assert list(system.bodies()) == [earth, moon, mars, phobos, deimos]
    assert system.moon_count == 3
    assert len(system) == 5
    assert system.find("Mars/Deimos") is deimos
    assert system.find("Deimos") is None


def test_hierarchy_rejects_duplicates_and_moons_as_planets():
    system = OrbitalHierarchy(Star(name="Sol"))
    earth = system.add_planet(_planet("Earth"))
    moon = earth.add_moon(_moon())

    with pytest.raises(ConfigurationError):
        system.add_planet(earth)
    with pytest.raises(ConfigurationError):
        system.add_planet(_planet("Earth"))
    with pytest.raises(ConfigurationError):
        system.add_planet(moon)
    with pytest.raises(ConfigurationError):
        system.add_planet(_planet("Sol"))


def test_reset_zeroes_every_angle():
    system = OrbitalHierarchy()
    earth = system.add_planet(_planet())
    moon = earth.add_moon(_moon())
    earth.rotation_angle, moon.rotation_angle, system.star.rotation_angle = 1.0, 2.0, 3.0

    system.reset()

    assert (earth.rotation_angle, moon.rotation_angle, system.star.rotation_angle) == (0.0, 0.0, 0.0)


def test_independent_hierarchies_do_not_share_state():
    a, b = OrbitalHierarchy(), OrbitalHierarchy()
    a.add_planet(_planet())

    assert len(a.planets) == 1
    assert b.planets == []
    assert a.star is not b.star
