"""Simple closed solids as polygon lists.

Every builder returns outward-wound polygons with per-vertex normals, ready
to be passed to :mod:`bspcsg.csg` or :class:`bspcsg.node.Node`.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, List, Sequence, Union

from bspcsg.geom import add, cross, mag, scale, sub, unit
from bspcsg.polygon import Polygon
from bspcsg.vertex import Vertex

# corner indices and outward normal of each cube face; corner ``i`` sits at
# +x when bit 0 is set, +y for bit 1 and +z for bit 2
_CUBE_FACES = (
    ((0, 4, 6, 2), (-1.0, 0.0, 0.0)),
    ((1, 3, 7, 5), (1.0, 0.0, 0.0)),
    ((0, 1, 5, 4), (0.0, -1.0, 0.0)),
    ((2, 6, 7, 3), (0.0, 1.0, 0.0)),
    ((0, 2, 3, 1), (0.0, 0.0, -1.0)),
    ((4, 5, 7, 6), (0.0, 0.0, 1.0)),
)

_QUAD_UVS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


def cube(center: Sequence[float] = (0.0, 0.0, 0.0),
         size: Union[float, Sequence[float]] = 1.0,
         material: Any = None) -> List[Polygon]:
    """Axis-aligned box centred on ``center``.

    ``size`` is the edge length, either one number or an ``(x, y, z)``
    triple.
    """

    if isinstance(size, Real):
        size = (size, size, size)
    half = (size[0] / 2.0, size[1] / 2.0, size[2] / 2.0)
    if min(half) <= 0.0:
        raise ValueError(f'cube size must be positive, got {tuple(size)}')

    polygons = []
    for corners, normal in _CUBE_FACES:
        verts = []
        for i, uv in zip(corners, _QUAD_UVS):
            pos = (center[0] + half[0] * (1 if i & 1 else -1),
                   center[1] + half[1] * (1 if i & 2 else -1),
                   center[2] + half[2] * (1 if i & 4 else -1))
            verts.append(Vertex(position=pos, normal=normal, uv0=uv))
        polygons.append(Polygon(verts, material))
    return polygons


def sphere(center: Sequence[float] = (0.0, 0.0, 0.0), radius: float = 1.0,
           slices: int = 16, stacks: int = 8,
           material: Any = None) -> List[Polygon]:
    """Latitude/longitude sphere: triangles at the poles, quads elsewhere."""

    if radius <= 0.0:
        raise ValueError('radius must be positive')
    if slices < 3 or stacks < 2:
        raise ValueError('a sphere needs at least 3 slices and 2 stacks')

    def vertex(theta, phi):
        theta *= math.pi * 2.0
        phi *= math.pi
        direction = (math.cos(theta) * math.sin(phi),
                     math.cos(phi),
                     math.sin(theta) * math.sin(phi))
        return Vertex(position=add(center, scale(direction, radius)),
                      normal=direction)

    polygons = []
    for i in range(slices):
        for j in range(stacks):
            verts = [vertex(i / slices, j / stacks)]
            if j > 0:
                verts.append(vertex((i + 1) / slices, j / stacks))
            if j < stacks - 1:
                verts.append(vertex((i + 1) / slices, (j + 1) / stacks))
            verts.append(vertex(i / slices, (j + 1) / stacks))
            polygons.append(Polygon(verts, material))
    return polygons


def cylinder(start: Sequence[float] = (0.0, -1.0, 0.0),
             end: Sequence[float] = (0.0, 1.0, 0.0),
             radius: float = 1.0, slices: int = 16,
             material: Any = None) -> List[Polygon]:
    """Capped cylinder from ``start`` to ``end``."""

    ray = sub(end, start)
    if mag(ray) == 0.0:
        raise ValueError('cylinder start and end must differ')
    if radius <= 0.0:
        raise ValueError('radius must be positive')
    if slices < 3:
        raise ValueError('a cylinder needs at least 3 slices')

    axis_z = unit(ray)
    is_y = abs(axis_z[1]) > 0.5
    axis_x = unit(cross((1.0 if is_y else 0.0, 0.0 if is_y else 1.0, 0.0), axis_z))
    axis_y = unit(cross(axis_x, axis_z))

    def cap(p, normal):
        return Vertex(position=p, normal=normal)

    def point(stack, slice_, normal_blend):
        angle = slice_ * math.pi * 2.0
        out = add(scale(axis_x, math.cos(angle)), scale(axis_y, math.sin(angle)))
        pos = add(add(start, scale(ray, stack)), scale(out, radius))
        normal = add(scale(out, 1.0 - abs(normal_blend)), scale(axis_z, normal_blend))
        return Vertex(position=pos, normal=normal)

    bottom = scale(axis_z, -1.0)
    polygons = []
    for i in range(slices):
        t0 = i / slices
        t1 = (i + 1) / slices
        polygons.append(Polygon([cap(start, bottom), point(0, t0, -1), point(0, t1, -1)],
                                material))
        polygons.append(Polygon([point(0, t1, 0), point(0, t0, 0),
                                 point(1, t0, 0), point(1, t1, 0)], material))
        polygons.append(Polygon([cap(end, axis_z), point(1, t1, 1), point(1, t0, 1)],
                                material))
    return polygons


__all__ = ['cube', 'sphere', 'cylinder']
