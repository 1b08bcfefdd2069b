"""Cone meshes used to draw the branches and leaves of a plant."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

Vector = tuple[float, float, float]


class PrimitiveKind(Enum):
    """How the vertices of a primitive are assembled."""

    QUAD_STRIP = "quad_strip"
    POLYGON = "polygon"


@dataclass
class Primitive:
    """A list of vertices with one normal per vertex."""

    kind: PrimitiveKind
    vertices: list[Vector] = field(default_factory=list)
    normals: list[Vector] = field(default_factory=list)

    def add(self, normal: Vector, vertex: Vector) -> None:
        self.normals.append(normal)
        self.vertices.append(vertex)


def _side_vertex(angle: float, rad: float, height: float) -> tuple[Vector, Vector]:
    """Return (normal, vertex) for one point on the side of the cone."""
    vx = rad * math.cos(angle)
    vy = rad * math.sin(angle)
    length = math.hypot(vx, vy)
    if length == 0.0:
        normal = (math.cos(angle), math.sin(angle), 0.0)
    else:
        normal = (vx / length, vy / length, 0.0)
    return normal, (vx, vy, height)


def cone(
    rad: float, rad2: float, height: float, with_caps: bool, slices: int
) -> list[Primitive]:
    """Build a truncated cone along +z from radius ``rad`` to ``rad2``.

    The side normals are those of a cylinder, so they look wrong on
    strongly sloped cones.
    """
    if slices < 1:
        raise ValueError("a cone needs at least one slice")
    angles = [j * math.pi * 2 / slices for j in range(slices + 1)]

    side = Primitive(PrimitiveKind.QUAD_STRIP)
    for angle in angles:
        side.add(*_side_vertex(angle, rad, 0.0))
        side.add(*_side_vertex(angle, rad2, height))
    if not with_caps:
        return [side]

    bottom = Primitive(PrimitiveKind.POLYGON)
    top = Primitive(PrimitiveKind.POLYGON)
    for angle in angles:
        bottom.add((0.0, 0.0, -1.0), (rad * math.cos(angle), rad * math.sin(angle), 0.0))
        top.add((0.0, 0.0, 1.0), (rad2 * math.cos(angle), rad * math.sin(angle), height))
    return [side, bottom, top]