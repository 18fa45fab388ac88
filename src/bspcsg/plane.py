"""Infinite planes and the polygon splitting step of the BSP engine."""

from __future__ import annotations

from enum import IntFlag
from typing import List, Sequence

from bspcsg.geom import ZERO3, cross, dot, epsilon, mag, negate, sub, unit
from bspcsg.vertex import mix


def _polygon():
    from bspcsg import polygon as _p
    return _p


class PolygonType(IntFlag):
    """Classification of a point or polygon against a plane.

    Vertex classes are OR-ed together, so a polygon with vertices on both
    sides ends up ``SPANNING``.
    """
    COPLANAR = 0
    FRONT = 1
    BACK = 2
    SPANNING = 3


class Plane:
    """A plane ``dot(normal, p) == w`` with unit ``normal``.

    ``Plane()`` is the all-zero sentinel used by BSP nodes that have not
    received any geometry yet; it is not :meth:`valid`.
    """

    __slots__ = ('normal', 'w')

    def __init__(self, normal: Sequence[float] = ZERO3, w: float = 0.0):
        self.normal = (float(normal[0]), float(normal[1]), float(normal[2]))
        self.w = float(w)

    @classmethod
    def from_points(cls, a: Sequence[float], b: Sequence[float],
                    c: Sequence[float]) -> "Plane":
        """Plane through three points, oriented by the winding ``a, b, c``."""
        n = unit(cross(sub(b, a), sub(c, a)))
        return cls(n, dot(n, a))

    def valid(self) -> bool:
        return mag(self.normal) > 0.0

    def flip(self) -> None:
        self.normal = negate(self.normal)
        self.w = -self.w

    def copy(self) -> "Plane":
        return Plane(self.normal, self.w)

    def distance(self, p: Sequence[float]) -> float:
        """Signed distance of ``p`` from the plane."""
        return dot(self.normal, p) - self.w

    def classify(self, p: Sequence[float], tol: float = epsilon) -> PolygonType:
        t = self.distance(p)
        if t < -tol:
            return PolygonType.BACK
        if t > tol:
            return PolygonType.FRONT
        return PolygonType.COPLANAR

    def classify_polygon(self, polygon, tol: float = epsilon) -> PolygonType:
        ptype = PolygonType.COPLANAR
        for v in polygon.vertices:
            ptype |= self.classify(v.position, tol)
        return ptype

    def split_polygon(self, polygon, coplanar_front: List, coplanar_back: List,
                      front: List, back: List, tol: float = epsilon) -> None:
        """Split ``polygon`` by this plane and sort it (or its fragments) into
        the four output lists.

        Coplanar polygons go to ``coplanar_front`` or ``coplanar_back``
        depending on whether they face the same way as this plane.  Spanning
        polygons are cut along the plane; a vertex lying on the plane is
        shared by both fragments, and fragments left with fewer than three
        vertices are dropped.  The output lists may be the same list object.
        """

        types = [self.classify(v.position, tol) for v in polygon.vertices]
        ptype = PolygonType.COPLANAR
        for t in types:
            ptype |= t

        if ptype == PolygonType.COPLANAR:
            if dot(self.normal, polygon.plane.normal) > 0:
                coplanar_front.append(polygon)
            else:
                coplanar_back.append(polygon)
        elif ptype == PolygonType.FRONT:
            front.append(polygon)
        elif ptype == PolygonType.BACK:
            back.append(polygon)
        else:
            f = []
            b = []
            verts = polygon.vertices
            count = len(verts)
            for i in range(count):
                j = (i + 1) % count
                ti, tj = types[i], types[j]
                vi, vj = verts[i], verts[j]
                if ti != PolygonType.BACK:
                    f.append(vi)
                if ti != PolygonType.FRONT:
                    b.append(vi)
                if (ti | tj) == PolygonType.SPANNING:
                    t = ((self.w - dot(self.normal, vi.position))
                         / dot(self.normal, sub(vj.position, vi.position)))
                    v = mix(vi, vj, t)
                    f.append(v)
                    b.append(v)

            Polygon = _polygon().Polygon
            if len(f) >= 3:
                front.append(Polygon(f, polygon.material))
            if len(b) >= 3:
                back.append(Polygon(b, polygon.material))

    def __eq__(self, other):
        if not isinstance(other, Plane):
            return NotImplemented
        return self.normal == other.normal and self.w == other.w

    __hash__ = None

    def __str__(self):
        return f"{self.normal} {self.w}"

    def __repr__(self):
        return f"Plane({self.normal!r}, {self.w!r})"


__all__ = ['PolygonType', 'Plane']
