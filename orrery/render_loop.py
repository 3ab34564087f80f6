#!/usr/bin/env python3
"""
Frame-synchronous render loop.

What this module does
- Reads the clock once per tick and derives the delta since the previous tick.
- Spins the star by delta time, then advances every planet followed by its moons and
  writes each result into that body's transform node.
- Hands control to the camera controller's update() and the renderer's render(), in
  that order, once every body has been written.

Threading model
- Single-threaded. The host calls tick() (or run()) from the same thread that presents
  frames; nothing here blocks, and the hierarchy and nodes are owned by this loop.

Failure semantics
- Wiring is checked once at construction: every body needs a node with
  set_local_position and set_local_rotation_y, otherwise WiringError names the body.
  Ticks do not raise under a valid configuration.
"""
import enum
import logging
from typing import Callable, Mapping, Optional

from .data_models import OrbitalBody, OrbitalHierarchy
from .errors import WiringError
from .kinematics import TransformUpdater, spin_star
from .scene import REQUIRED_NODE_METHODS, is_transform_node

logger = logging.getLogger(__name__)


class LoopState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class RenderLoop:
    """
    Drives one hierarchy against one set of transform nodes.

    Collaborators:
    - clock: object with elapsed_time() -> seconds
    - nodes: mapping from body path ('Sun', 'Earth', 'Earth/Moon') to transform node
    - camera: optional object with update(), called after all bodies are written
    - renderer: optional object with render(), called last
    """

    def __init__(self, hierarchy: OrbitalHierarchy, nodes: Mapping[str, object], clock,
                 updater: Optional[TransformUpdater] = None, camera=None, renderer=None):
        self.hierarchy = hierarchy
        self.clock = clock
        self.updater = updater or TransformUpdater()
        self.camera = camera
        self.renderer = renderer

        self.state = LoopState.IDLE
        self.previous_time = 0.0
        self.tick_count = 0

        self._star_node = self._require_node(nodes, hierarchy.star.path)
        # (body, node) pairs in update order: each planet followed by its moons
        self._bindings = [(body, self._require_node(nodes, body.path)) for body in hierarchy.bodies()]

    @staticmethod
    def _require_node(nodes: Mapping[str, object], path: str):
        node = nodes.get(path)
        if node is None:
            raise WiringError(path)
        if not is_transform_node(node):
            raise WiringError(path, f"node {node!r} lacks {' / '.join(REQUIRED_NODE_METHODS)}")
        return node

    @property
    def elapsed(self) -> float:
        """Clock time seen by the most recent tick."""
        return self.previous_time

    def tick(self) -> float:
        """
        Run one frame.

        Returns:
            Delta time in seconds that was applied to the star's spin
        """
        current = self.clock.elapsed_time()
        delta = current - self.previous_time
        if delta < 0:
            logger.warning("Clock went backwards by %.6fs; treating frame as zero-length", -delta)
            delta = 0.0
        self.previous_time = max(self.previous_time, current)

        if self.state is LoopState.IDLE:
            logger.info("Render loop started with %d orbiting bodies", len(self._bindings))
            self.state = LoopState.RUNNING

        star = self.hierarchy.star
        self._star_node.set_local_rotation_y(spin_star(star, delta))

        for body, node in self._bindings:
            self._write(body, node, delta)

        if self.camera is not None:
            self.camera.update()
        if self.renderer is not None:
            self.renderer.render()

        self.tick_count += 1
        logger.debug("tick %d: delta=%.4fs star=%.4frad", self.tick_count, delta, star.rotation_angle)
        return delta

    def _write(self, body: OrbitalBody, node, delta: float) -> None:
        angle, (x, y, z) = self.updater.update(body, delta)
        node.set_local_position(x, y, z)
        node.set_local_rotation_y(angle)

    def run(self, keep_running: Callable[[], bool],
            frame_limiter: Optional[Callable[[], object]] = None,
            max_ticks: Optional[int] = None) -> int:
        """
        Poll tick() until keep_running() returns False or max_ticks frames ran.

        Args:
            keep_running: Checked before every frame
            frame_limiter: Called after every frame to pace presentation
                (e.g. pygame.time.Clock(...).tick bound to a frame rate)
            max_ticks: Optional cap on frames for this call

        Returns:
            Number of frames run by this call
        """
        frames = 0
        while keep_running():
            if max_ticks is not None and frames >= max_ticks:
                break
            self.tick()
            frames += 1
            if frame_limiter is not None:
                frame_limiter()
        return frames
