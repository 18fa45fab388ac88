"""Conversion between indexed meshes and polygon lists.

The BSP engine works on :class:`~bspcsg.polygon.Polygon` lists.  Callers
usually hold geometry as a vertex array plus faces that index into it; the
helpers here move data between the two forms and measure the result.  Faces
are kept as arbitrary index loops: nothing here triangulates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from bspcsg.geom import cross, epsilon, mag, sub, weld_key
from bspcsg.polygon import DegeneratePolygonError, Polygon
from bspcsg.vertex import Vertex

logger = logging.getLogger(__name__)

_WELD_TOL = 1e-9  # Tolerance for vertex welding on export


@dataclass
class MeshData:
    """Indexed mesh produced by :func:`mesh_from_polygons`.

    ``positions`` is an ``(M, 3)`` float array, ``faces`` holds one index
    loop per polygon and ``materials`` one material tag per face.
    """

    positions: np.ndarray
    faces: List[List[int]] = field(default_factory=list)
    materials: List[Any] = field(default_factory=list)

    def submeshes(self) -> Dict[Any, List[List[int]]]:
        """Group faces by material tag, in first-seen order."""
        groups: Dict[Any, List[List[int]]] = {}
        for face, material in zip(self.faces, self.materials):
            groups.setdefault(material, []).append(face)
        return groups


def _attribute_array(values, count: int, width: int, name: str) -> Optional[np.ndarray]:
    if values is None:
        return None
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 2 or arr.shape[0] != count or arr.shape[1] < width:
        raise ValueError(f'{name} must have shape ({count}, {width}), got {arr.shape}')
    return arr[:, :width]


def polygons_from_mesh(positions, faces: Iterable[Sequence[int]], *,
                       normals=None, tangents=None, colors=None, uvs=None,
                       material: Any = None, tol: float = epsilon) -> List[Polygon]:
    """Build polygons from an indexed mesh.

    Parameters
    ----------
    positions : array-like, shape (N, 3)
        Vertex positions.
    faces : iterable of index sequences
        One loop of at least three vertex indices per polygon, wound so the
        outward side sees the loop counter-clockwise.
    normals, tangents, colors, uvs : array-like, optional
        Per-vertex attributes of shape (N, 3), (N, 4), (N, 4) and (N, 2).
        RGB colors are accepted and given an alpha of one.
    material : any
        Tag attached to every polygon.

    Raises
    ------
    DegeneratePolygonError
        If a face has fewer than three indices, an index is out of range, or
        its first three points are collinear, i.e. the sine of the angle
        they make is within ``tol`` of zero.
    """

    pos = np.asarray(positions, dtype=float)
    if pos.ndim != 2 or pos.shape[1] < 3:
        raise ValueError(f'positions must have shape (N, 3), got {pos.shape}')
    count = pos.shape[0]

    nrm = _attribute_array(normals, count, 3, 'normals')
    tan = _attribute_array(tangents, count, 4, 'tangents')
    uv = _attribute_array(uvs, count, 2, 'uvs')
    col = None
    if colors is not None:
        col = np.asarray(colors, dtype=float)
        if col.ndim == 2 and col.shape[0] == count and col.shape[1] == 3:
            col = np.hstack([col, np.ones((count, 1))])
        col = _attribute_array(col, count, 4, 'colors')

    def _vertex(i: int) -> Vertex:
        v = Vertex(position=pos[i, :3])
        if nrm is not None:
            v.normal = nrm[i]
        if tan is not None:
            v.tangent = tan[i]
        if col is not None:
            v.color = col[i]
        if uv is not None:
            v.uv0 = uv[i]
        return v

    polygons = []
    for idx, face in enumerate(faces):
        face = [int(i) for i in face]
        if len(face) < 3:
            raise DegeneratePolygonError(
                f'face {idx} has {len(face)} vertices; at least 3 are required')
        bad = [i for i in face if i < 0 or i >= count]
        if bad:
            raise DegeneratePolygonError(
                f'face {idx} references vertices {bad} outside 0..{count - 1}')
        a, b, c = (pos[i, :3] for i in face[:3])
        ab, ac = sub(b, a), sub(c, a)
        if mag(cross(ab, ac)) <= tol * mag(ab) * mag(ac):
            raise DegeneratePolygonError(
                f'face {idx} starts with collinear points {face[:3]}')
        polygons.append(Polygon([_vertex(i) for i in face], material))
    return polygons


def mesh_from_polygons(polygons: Iterable[Polygon], tol: float = _WELD_TOL) -> MeshData:
    """Flatten ``polygons`` into an indexed mesh with welded positions.

    Positions closer than ``tol`` share an index.  Faces whose loops collapse
    below three distinct indices after welding are skipped.
    """

    vertex_map: Dict[Tuple[int, int, int], int] = {}
    verts: List[Tuple[float, float, float]] = []
    faces: List[List[int]] = []
    materials: List[Any] = []
    dropped = 0

    for poly in polygons:
        loop: List[int] = []
        for v in poly.vertices:
            key = weld_key(v.position, tol)
            index = vertex_map.get(key)
            if index is None:
                index = len(verts)
                vertex_map[key] = index
                verts.append(v.position)
            if not loop or loop[-1] != index:
                loop.append(index)
        if len(loop) > 1 and loop[0] == loop[-1]:
            loop.pop()
        if len(loop) < 3:
            dropped += 1
            continue
        faces.append(loop)
        materials.append(poly.material)

    if dropped:
        logger.debug('mesh_from_polygons: dropped %d faces collapsed by welding', dropped)

    positions = np.asarray(verts, dtype=float).reshape(-1, 3)
    return MeshData(positions, faces, materials)


def _loop(poly: Polygon) -> np.ndarray:
    return np.asarray(poly.positions, dtype=float)


def solid_volume(polygons: Iterable[Polygon]) -> float:
    """Signed volume enclosed by a closed, outward-wound polygon set.

    Uses the divergence theorem over a fan of each polygon, so T-junctions
    left by splitting do not affect the result.
    """

    total = 0.0
    for poly in polygons:
        pts = _loop(poly)
        total += float(np.sum(np.cross(pts[1:-1], pts[2:]) @ pts[0]))
    return total / 6.0


def polygon_area(poly: Polygon) -> float:
    pts = _loop(poly)
    rel = pts - pts[0]
    return 0.5 * float(np.linalg.norm(np.sum(np.cross(rel[1:-1], rel[2:]), axis=0)))


def surface_area(polygons: Iterable[Polygon]) -> float:
    return sum(polygon_area(p) for p in polygons)


def bounding_box(polygons: Iterable[Polygon]):
    """Return ``(min, max)`` corners as tuples, or ``None`` for no polygons."""
    pts = [v.position for p in polygons for v in p.vertices]
    if not pts:
        return None
    arr = np.asarray(pts, dtype=float)
    return tuple(arr.min(axis=0).tolist()), tuple(arr.max(axis=0).tolist())


__all__ = [
    'MeshData',
    'polygons_from_mesh',
    'mesh_from_polygons',
    'solid_volume',
    'polygon_area',
    'surface_area',
    'bounding_box',
]
