#!/usr/bin/env python3
"""
Shared constants for the Orrery Simulator.

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. Angles are in radians unless the name says
otherwise; distances and radii are in scene units.
"""
import math

# Central star spin (frame-rate independent, scaled by delta time)
STAR_SPIN_DEG_PER_SECOND = 20.0
STAR_SPIN_RATE = math.radians(STAR_SPIN_DEG_PER_SECOND)  # rad/s

# Orbit stepping modes
ORBIT_STEP_PER_TICK = "per_tick"  # fixed increment per frame
ORBIT_STEP_PER_SECOND = "per_second"  # increment scaled by delta time
ORBIT_STEPPING_MODES = (ORBIT_STEP_PER_TICK, ORBIT_STEP_PER_SECOND)
REFERENCE_FRAME_RATE = 60.0  # frames per second at which both modes agree

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (6, 8, 14)
STAR_COLOR = (255, 204, 0)
DEFAULT_BODY_COLOR = (200, 200, 210)
HUD_COLOR = (200, 200, 200)
OUTLINE_COLOR = (0, 0, 0)
MAX_SCREEN_RADIUS = 400  # px; larger discs are clipped for performance

# Camera (perspective, orbiting the origin)
CAMERA_FOV_DEG = 75.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0
CAMERA_DISTANCE = 50.0
CAMERA_MIN_DISTANCE = 20.0
CAMERA_MAX_DISTANCE = 200.0
CAMERA_DAMPING_FACTOR = 0.05
CAMERA_MAX_PITCH = math.radians(89.0)

# Keyboard orbiting speed for the viewer
CAMERA_KEY_ORBIT_SPEED = math.radians(90.0)  # rad/s

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
