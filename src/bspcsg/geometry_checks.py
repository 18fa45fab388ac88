"""Validation helpers for polygon lists."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence

from bspcsg.geom import epsilon, weld_key
from bspcsg.polygon import Polygon


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


def polygon_is_planar(polygon: Polygon, tol: float = epsilon) -> bool:
    """Return ``True`` if every vertex lies within ``tol`` of the polygon's
    plane."""

    if not polygon.plane.valid():
        return False
    return all(abs(polygon.plane.distance(v.position)) <= tol
               for v in polygon.vertices)


def polygons_valid(polygons: Sequence[Polygon], tol: float = epsilon) -> CheckResult:
    """Report polygons with a degenerate plane or off-plane vertices."""

    degenerate = []
    nonplanar = []
    for idx, poly in enumerate(polygons):
        if not poly.plane.valid():
            degenerate.append(idx)
        elif not polygon_is_planar(poly, tol):
            nonplanar.append(idx)

    warnings: List[str] = []
    if degenerate:
        warnings.append(f'degenerate polygon indices: {degenerate}')
    if nonplanar:
        warnings.append(f'non-planar polygon indices: {nonplanar}')
    return CheckResult(not warnings, warnings)


def solid_closed(polygons: Sequence[Polygon], tol: float = 1e-9) -> CheckResult:
    """Check that every directed edge is matched by its reverse.

    Positions are welded to ``tol``.  Only meaningful for meshes without
    T-junctions, which boolean results generally have.
    """

    edges = Counter()
    for poly in polygons:
        keys = [weld_key(v.position, tol) for v in poly.vertices]
        for i, a in enumerate(keys):
            b = keys[(i + 1) % len(keys)]
            if a != b:
                edges[(a, b)] += 1

    open_edges = [edge for edge, count in edges.items()
                  if edges.get((edge[1], edge[0]), 0) != count]

    if not edges:
        return CheckResult(False, ['no edges found'])
    if open_edges:
        return CheckResult(False, [f'{len(open_edges)} unmatched edges detected'])
    return CheckResult(True, [])


__all__ = [
    'CheckResult',
    'polygon_is_planar',
    'polygons_valid',
    'solid_closed',
]
