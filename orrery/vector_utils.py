#!/usr/bin/env python3
"""
Vector helper functions for 3D operations.

These are small, fast functions for vector math used throughout the app.
Vectors are plain (x, y, z) tuples; Y is up.
"""
import math
from typing import Tuple

Vec3 = Tuple[float, float, float]

ORIGIN: Vec3 = (0.0, 0.0, 0.0)
UP: Vec3 = (0.0, 1.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def vec_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def vec_len(a: Vec3) -> float:
    return math.sqrt(vec_dot(a, a))


def vec_norm(a: Vec3) -> Vec3:
    l = vec_len(a)
    if l == 0:
        return ORIGIN
    return (a[0] / l, a[1] / l, a[2] / l)


def rotate_y(a: Vec3, angle: float) -> Vec3:
    """
    Rotate a vector about the +Y axis (right-handed).

    rotate_y((0, 0, d), angle) == (d*sin(angle), 0, d*cos(angle)), which is the
    orbital placement used throughout the simulator.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    return (a[0] * c + a[2] * s, a[1], -a[0] * s + a[2] * c)
