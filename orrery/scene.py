#!/usr/bin/env python3
"""
Scene graph: the transform nodes the render loop writes into.

A transform node is any object with
    set_local_position(x, y, z)
    set_local_rotation_y(angle)
The loop never reads nodes back. SceneNode is the concrete node used by the viewer:
it stores a local translation, a rotation about +Y and a uniform scale, and composes
them with its parent's world transform on demand, so a moon's world placement follows
its planet's position, spin and scale.
"""
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .data_models import OrbitalBody, OrbitalHierarchy
from .vector_utils import ORIGIN, Vec3, rotate_y, vec_add, vec_scale

logger = logging.getLogger(__name__)

REQUIRED_NODE_METHODS = ("set_local_position", "set_local_rotation_y")


class SceneNode:
    """A node with a local transform (translate, rotate about Y, uniform scale)."""

    def __init__(self, name: str, scale: float = 1.0,
                 color: Tuple[int, int, int] = (255, 255, 255), renderable: bool = True):
        self.name = name
        self.position: Vec3 = ORIGIN
        self.rotation_y = 0.0
        self.scale = float(scale)
        self.color = color
        self.renderable = renderable
        self.parent: Optional["SceneNode"] = None
        self.children: List["SceneNode"] = []

    def add(self, child: "SceneNode") -> "SceneNode":
        if child.parent is not None:
            child.parent.children.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def set_local_position(self, x: float, y: float, z: float) -> None:
        self.position = (float(x), float(y), float(z))

    def set_local_rotation_y(self, angle: float) -> None:
        self.rotation_y = float(angle)

    def world_rotation_y(self) -> float:
        if self.parent is None:
            return self.rotation_y
        return self.parent.world_rotation_y() + self.rotation_y

    def world_scale(self) -> float:
        if self.parent is None:
            return self.scale
        return self.parent.world_scale() * self.scale

    def world_position(self) -> Vec3:
        """Local position carried through every ancestor's transform."""
        if self.parent is None:
            return self.position
        p = self.parent
        offset = vec_scale(rotate_y(self.position, p.world_rotation_y()), p.world_scale())
        return vec_add(p.world_position(), offset)

    def traverse(self) -> Iterator["SceneNode"]:
        yield self
        for c in self.children:
            yield from c.traverse()

    def __repr__(self) -> str:
        return f"SceneNode({self.name!r}, position={self.position}, rotation_y={self.rotation_y:.4f})"


class Scene:
    """Root container plus a lookup of body nodes by body path."""

    def __init__(self):
        self.root = SceneNode("Scene", renderable=False)
        self.nodes: Dict[str, SceneNode] = {}

    def __iter__(self) -> Iterator[SceneNode]:
        return (n for n in self.root.traverse() if n.renderable)


def _create_body_node(body: OrbitalBody) -> SceneNode:
    node = SceneNode(body.path, scale=body.radius, color=body.color)
    # Initial placement before the first tick
    node.set_local_position(body.distance, 0.0, 0.0)
    return node


def build_scene(hierarchy: OrbitalHierarchy) -> Scene:
    """
    Create one node per body: the star and planets under the root, moons under their
    planet's node. Node keys are body paths ('Earth', 'Earth/Moon').
    """
    scene = Scene()
    star = hierarchy.star
    star_node = SceneNode(star.path, scale=star.radius, color=star.color)
    scene.root.add(star_node)
    scene.nodes[star.path] = star_node

    for planet in hierarchy.planets:
        planet_node = scene.root.add(_create_body_node(planet))
        scene.nodes[planet.path] = planet_node
        for moon in planet.moons:
            scene.nodes[moon.path] = planet_node.add(_create_body_node(moon))

    logger.info("Built scene with %d nodes", len(scene.nodes))
    return scene


def is_transform_node(node: object) -> bool:
    return node is not None and all(callable(getattr(node, m, None)) for m in REQUIRED_NODE_METHODS)
