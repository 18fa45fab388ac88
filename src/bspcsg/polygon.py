"""Planar polygons carried through the BSP engine."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from bspcsg.plane import Plane
from bspcsg.vertex import Vertex


class DegeneratePolygonError(ValueError):
    """Raised when input geometry cannot form a polygon."""


class Polygon:
    """An ordered loop of vertices sharing one plane and one material.

    The plane is derived from the first three vertices when the polygon is
    built and is not recomputed afterwards.  ``material`` is an opaque tag
    that the engine copies onto every fragment of the polygon.
    """

    __slots__ = ('vertices', 'plane', 'material')

    def __init__(self, vertices: Sequence[Vertex], material: Any = None,
                 plane: Optional[Plane] = None):
        if len(vertices) < 3:
            raise DegeneratePolygonError(
                f'a polygon needs at least 3 vertices, got {len(vertices)}')
        self.vertices: List[Vertex] = list(vertices)
        if plane is None:
            plane = Plane.from_points(self.vertices[0].position,
                                      self.vertices[1].position,
                                      self.vertices[2].position)
        self.plane = plane
        self.material = material

    def flip(self) -> None:
        """Reverse the winding and flip every vertex and the plane.

        The vertex list and the plane are replaced, never edited in place, so
        clones that share them are unaffected.
        """
        self.vertices = [v.flipped() for v in reversed(self.vertices)]
        plane = self.plane.copy()
        plane.flip()
        self.plane = plane

    def clone(self) -> "Polygon":
        return Polygon(self.vertices, self.material, self.plane.copy())

    @property
    def positions(self) -> List[tuple]:
        return [v.position for v in self.vertices]

    def __eq__(self, other):
        if not isinstance(other, Polygon):
            return NotImplemented
        return (self.material == other.material
                and self.plane == other.plane
                and self.vertices == other.vertices)

    __hash__ = None

    def __str__(self):
        return f"[{len(self.vertices)}] {self.plane.normal}"

    def __repr__(self):
        return f"Polygon({self.vertices!r}, material={self.material!r})"


__all__ = ['DegeneratePolygonError', 'Polygon']
