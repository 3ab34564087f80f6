#!/usr/bin/env python3
"""
Orbit camera: perspective view of a target point with damped orbit and zoom.
"""
import math
from typing import Optional, Tuple

from .constants import (
    CAMERA_DAMPING_FACTOR,
    CAMERA_DISTANCE,
    CAMERA_FAR,
    CAMERA_FOV_DEG,
    CAMERA_MAX_DISTANCE,
    CAMERA_MAX_PITCH,
    CAMERA_MIN_DISTANCE,
    CAMERA_NEAR,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import ORIGIN, UP, Vec3, clamp, vec_add, vec_cross, vec_dot, vec_norm, vec_sub


class OrbitCamera:
    """
    Camera that circles a target on a sphere of adjustable radius.

    yaw = 0 and pitch = 0 put the camera on the +Z axis looking at the target. orbit()
    and zoom() queue motion; update(), called once per frame, applies a fraction of the
    queued motion when damping is enabled (all of it otherwise).
    """

    def __init__(self, target: Vec3 = ORIGIN, distance: float = CAMERA_DISTANCE,
                 fov_deg: float = CAMERA_FOV_DEG, near: float = CAMERA_NEAR, far: float = CAMERA_FAR,
                 min_distance: float = CAMERA_MIN_DISTANCE, max_distance: float = CAMERA_MAX_DISTANCE,
                 enable_damping: bool = True, damping_factor: float = CAMERA_DAMPING_FACTOR):
        self.target = target
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.distance = distance
        self.yaw = 0.0
        self.pitch = 0.0
        self.fov_deg = fov_deg
        self.near = near
        self.far = far
        self.enable_damping = enable_damping
        self.damping_factor = clamp(damping_factor, 0.0, 1.0)
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

        self._pending_yaw = 0.0
        self._pending_pitch = 0.0
        self._pending_zoom = 1.0

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def orbit(self, d_yaw: float, d_pitch: float) -> None:
        self._pending_yaw += d_yaw
        self._pending_pitch += d_pitch

    def zoom(self, factor: float) -> None:
        """factor > 1 moves the camera closer."""
        if factor > 0:
            self._pending_zoom /= factor

    def update(self) -> None:
        k = self.damping_factor if self.enable_damping else 1.0
        self.yaw += self._pending_yaw * k
        self.pitch = clamp(self.pitch + self._pending_pitch * k, -CAMERA_MAX_PITCH, CAMERA_MAX_PITCH)
        # Apply the same fraction of the queued zoom, geometrically
        step = self._pending_zoom ** k
        self.distance = clamp(self.distance * step, self.min_distance, self.max_distance)

        self._pending_yaw *= 1.0 - k
        self._pending_pitch *= 1.0 - k
        self._pending_zoom /= step

    @property
    def position(self) -> Vec3:
        cp = math.cos(self.pitch)
        offset = (
            self.distance * cp * math.sin(self.yaw),
            self.distance * math.sin(self.pitch),
            self.distance * cp * math.cos(self.yaw),
        )
        return vec_add(self.target, offset)

    @property
    def focal_length(self) -> float:
        """Pixels per unit at depth 1 (vertical field of view)."""
        return (self.viewport_size[1] / 2) / math.tan(math.radians(self.fov_deg) / 2)

    def basis(self) -> Tuple[Vec3, Vec3, Vec3]:
        """(right, up, forward) unit vectors of the view."""
        forward = vec_norm(vec_sub(self.target, self.position))
        right = vec_norm(vec_cross(forward, UP))
        up = vec_cross(right, forward)
        return right, up, forward

    def world_to_view(self, pos: Vec3) -> Vec3:
        """Camera-space coordinates (x right, y up, z depth along the view direction)."""
        right, up, forward = self.basis()
        rel = vec_sub(pos, self.position)
        return (vec_dot(rel, right), vec_dot(rel, up), vec_dot(rel, forward))

    def world_to_screen(self, pos: Vec3) -> Optional[Tuple[float, float, float]]:
        """
        Project a world point to (screen_x, screen_y, depth).
        Returns None outside the near/far range.
        """
        x, y, depth = self.world_to_view(pos)
        if depth <= self.near or depth > self.far:
            return None
        f = self.focal_length
        w, h = self.viewport_size
        return (w / 2 + x * f / depth, h / 2 - y * f / depth, depth)

    def projected_radius(self, radius: float, depth: float) -> float:
        return radius * self.focal_length / depth if depth > 0 else 0.0
