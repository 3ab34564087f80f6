#!/usr/bin/env python3
"""
Orrery Simulator application entry point and viewer wiring.

What this module does
- Builds the orbital hierarchy from the built-in table or a preset JSON, creates one
  scene node per body, and hands both to a RenderLoop.
- Provides the viewer collaborators the loop drives every frame: an OrbitCamera
  (camera controller) and a PygameRenderer that projects and draws the scene, plus an
  optional Dear PyGui panel listing each body's angle and world position.

Threading model
- Everything runs on the main thread. The pygame window paces the loop with
  pygame.time.Clock.tick(fps); the Dear PyGui panel, when enabled, is rendered
  frame-by-frame from the same loop with render_dearpygui_frame().

Units and conventions
- Scene units throughout; angles in radians. Y is up and orbits lie in the XZ plane.
- Colors are RGB tuples in 0..255.

Running
1) Install dependencies: `pip install -e .`
2) Run: `orrery-sim` or `python orrery_sim.py [--preset path.json] [--no-panel]`

Controls
- Arrow keys orbit the camera, mouse wheel zooms, Esc or closing either window quits.
"""

import argparse
import logging
import sys
from typing import List, Optional, Sequence

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from orrery.camera import OrbitCamera
from orrery.clock import ManualClock, MonotonicClock
from orrery.constants import (
    BACKGROUND_COLOR,
    CAMERA_KEY_ORBIT_SPEED,
    HUD_COLOR,
    MAX_SCREEN_RADIUS,
    ORBIT_STEP_PER_TICK,
    ORBIT_STEPPING_MODES,
    OUTLINE_COLOR,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.data_models import OrbitalHierarchy
from orrery.errors import OrreryError
from orrery.kinematics import TransformUpdater
from orrery.presets_loader import default_hierarchy, load_configuration
from orrery.render_loop import RenderLoop
from orrery.scene import Scene, build_scene
from orrery.vector_utils import rotate_y, vec_add

logger = logging.getLogger("orrery")

# ============================================================
# Pygame Renderer
# ============================================================


class PygameRenderer:
    """
    Draws the scene graph as shaded discs, far to near, seen through an OrbitCamera.
    Also owns the window: event polling and frame pacing.
    """

    def __init__(self, scene: Scene, camera: OrbitCamera, title: str = "Orrery Simulator",
                 fps: int = TARGET_FPS, star_name: Optional[str] = None):
        self.scene = scene
        self.camera = camera
        self.fps = fps
        self.star_name = star_name
        self.running = True

        pygame.init()
        pygame.display.set_caption(title)
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT))
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = _load_font()

    def keep_running(self) -> bool:
        self.handle_events()
        return self.running

    def limit_frame_rate(self) -> None:
        self.clock.tick(self.fps)

    def handle_events(self) -> None:
        real_dt = self.clock.get_time() / 1000.0
        keys = pygame.key.get_pressed()
        step = CAMERA_KEY_ORBIT_SPEED * real_dt
        if keys[pygame.K_LEFT]:
            self.camera.orbit(-step, 0.0)
        if keys[pygame.K_RIGHT]:
            self.camera.orbit(step, 0.0)
        if keys[pygame.K_UP]:
            self.camera.orbit(0.0, step)
        if keys[pygame.K_DOWN]:
            self.camera.orbit(0.0, -step)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom(1.1 if event.y > 0 else 1.0 / 1.1)

    def render(self) -> None:
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        # Painter's algorithm: project everything, then draw far to near
        discs = []
        for node in self.scene:
            projected = self.camera.world_to_screen(node.world_position())
            if projected is None:
                continue
            sx, sy, depth = projected
            r = self.camera.projected_radius(node.world_scale(), depth)
            discs.append((depth, sx, sy, r, node))
        discs.sort(key=lambda d: d[0], reverse=True)

        for depth, sx, sy, r, node in discs:
            center = _safe_point((sx, sy))
            if center is None:
                continue
            vis_r = int(min(max(r, 1), MAX_SCREEN_RADIUS))
            gfxdraw.filled_circle(surf, center[0], center[1], vis_r, node.color)
            gfxdraw.aacircle(surf, center[0], center[1], vis_r, OUTLINE_COLOR)
            if node.name == self.star_name:
                self._draw_spin_marker(node, depth)

        draw_text(surf, self.font, "Arrows: orbit | Wheel: zoom | Esc: quit", 10, 10, HUD_COLOR)
        draw_text(surf, self.font, f"FPS: {self.clock.get_fps():.0f}", 10, 30, HUD_COLOR)
        pygame.display.flip()

    def _draw_spin_marker(self, node, depth: float) -> None:
        # A dot on the star's equator makes its spin visible
        tip = vec_add(node.world_position(), rotate_y((node.world_scale(), 0.0, 0.0), node.world_rotation_y()))
        projected = self.camera.world_to_screen(tip)
        if projected is None or projected[2] > depth:
            return
        p = _safe_point(projected[:2])
        if p:
            gfxdraw.filled_circle(self.surface, p[0], p[1], 3, OUTLINE_COLOR)

    def close(self) -> None:
        pygame.quit()


def _load_font():
    pygame.font.init()
    try:
        return pygame.font.SysFont("consolas", 16)
    except (pygame.error, OSError):
        return pygame.font.Font(None, 16)


def draw_text(surface, font, text, x, y, color):
    img = font.render(text, True, color)
    surface.blit(img, (x, y))


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None

# ============================================================
# Dear PyGui diagnostics panel
# ============================================================


class DiagnosticsPanel:
    """
    Read-only table of every body: accumulated angle and world position.
    Rendered manually once per frame so it shares the loop's thread.
    """

    def __init__(self, hierarchy: OrbitalHierarchy, scene: Scene):
        self.hierarchy = hierarchy
        self.scene = scene
        self._rows = []  # (path, angle tag, position tag)
        self._build_ui()

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Orrery Simulator - Bodies", width=560, height=420)

        with dpg.window(label="Bodies", width=540, height=400, pos=(10, 10), tag="main_window"):
            dpg.add_text("", tag="loop_status")
            with dpg.table(header_row=True):
                dpg.add_table_column(label="Body")
                dpg.add_table_column(label="Angle (rad)")
                dpg.add_table_column(label="World position")
                paths = [self.hierarchy.star.path] + [b.path for b in self.hierarchy.bodies()]
                for path in paths:
                    with dpg.table_row():
                        dpg.add_text(path)
                        angle_tag = dpg.add_text("0.000")
                        pos_tag = dpg.add_text("")
                    self._rows.append((path, angle_tag, pos_tag))

        dpg.setup_dearpygui()
        dpg.show_viewport()

    @property
    def is_open(self) -> bool:
        return dpg.is_dearpygui_running()

    def render(self, loop: RenderLoop) -> None:
        dpg.set_value("loop_status", f"{loop.state.value}: tick {loop.tick_count}, t={loop.elapsed:.2f}s")
        star = self.hierarchy.star
        for path, angle_tag, pos_tag in self._rows:
            body = star if path == star.path else self.hierarchy.find(path)
            x, y, z = self.scene.nodes[path].world_position()
            dpg.set_value(angle_tag, f"{body.rotation_angle:.3f}")
            dpg.set_value(pos_tag, f"({x:7.2f}, {y:5.2f}, {z:7.2f})")
        dpg.render_dearpygui_frame()

    def close(self) -> None:
        dpg.destroy_context()


class ViewerRenderer:
    """Renderer handed to the loop: draws the viewport, then refreshes the panel."""

    def __init__(self, viewport: PygameRenderer, panel: Optional[DiagnosticsPanel] = None):
        self.viewport = viewport
        self.panel = panel
        self.loop: Optional[RenderLoop] = None

    def render(self) -> None:
        self.viewport.render()
        if self.panel is not None and self.loop is not None:
            self.panel.render(self.loop)

    def keep_running(self) -> bool:
        if self.panel is not None and not self.panel.is_open:
            return False
        return self.viewport.keep_running()

# ============================================================
# Application Entry
# ============================================================


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Animated star, planets and moons.")
    parser.add_argument("--preset", help="Preset JSON file (default: built-in solar system)")
    parser.add_argument("--fps", type=int, default=TARGET_FPS, help="Frame rate cap")
    parser.add_argument("--orbit-stepping", choices=ORBIT_STEPPING_MODES, default=ORBIT_STEP_PER_TICK,
                        help="per_tick: fixed angle per frame; per_second: scaled by frame time")
    parser.add_argument("--no-panel", action="store_true", help="Do not open the Dear PyGui body panel")
    parser.add_argument("--headless-ticks", type=int, metavar="N",
                        help="Run N ticks at the target frame rate without a window and print final positions")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def load_hierarchy(preset: Optional[str]) -> OrbitalHierarchy:
    if preset:
        hierarchy, name = load_configuration(preset)
        logger.info("Using preset '%s'", name)
        return hierarchy
    return default_hierarchy()


def run_headless(hierarchy: OrbitalHierarchy, updater: TransformUpdater, ticks: int, fps: int) -> List[str]:
    """Drive the loop with a manual clock; returns one summary line per body."""
    scene = build_scene(hierarchy)
    clock = ManualClock()
    loop = RenderLoop(hierarchy, scene.nodes, clock, updater=updater)
    for _ in range(ticks):
        clock.advance(1.0 / fps)
        loop.tick()
    lines = []
    for path, node in scene.nodes.items():
        x, y, z = node.world_position()
        lines.append(f"{path:<16} rot={node.rotation_y:9.4f}  world=({x:8.3f}, {y:6.3f}, {z:8.3f})")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    updater = TransformUpdater(stepping=args.orbit_stepping)
    fps = max(1, args.fps)

    try:
        hierarchy = load_hierarchy(args.preset)
        if args.headless_ticks is not None:
            for line in run_headless(hierarchy, updater, max(0, args.headless_ticks), fps):
                print(line)
            return 0

        scene = build_scene(hierarchy)
    except OrreryError as exc:
        logger.error("Startup failed: %s", exc)
        return 1

    camera = OrbitCamera()
    viewport = PygameRenderer(scene, camera, fps=fps, star_name=hierarchy.star.path)
    panel = None
    try:
        if not args.no_panel:
            panel = DiagnosticsPanel(hierarchy, scene)
        renderer = ViewerRenderer(viewport, panel)
        try:
            loop = RenderLoop(hierarchy, scene.nodes, MonotonicClock(),
                              updater=updater, camera=camera, renderer=renderer)
        except OrreryError as exc:
            logger.error("Startup failed: %s", exc)
            return 1
        renderer.loop = loop
        frames = loop.run(renderer.keep_running, frame_limiter=viewport.limit_frame_rate)
        logger.info("Stopped after %d frames (%.1fs)", frames, loop.elapsed)
    finally:
        viewport.close()
        if panel is not None:
            panel.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
