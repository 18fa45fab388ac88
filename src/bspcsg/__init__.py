# -*- coding: utf-8 -*-
"""BSP-tree constructive solid geometry on polygon meshes."""

from importlib.metadata import PackageNotFoundError, version

from bspcsg.vertex import Vertex, VertexAttributes, mix
from bspcsg.plane import Plane, PolygonType
from bspcsg.polygon import DegeneratePolygonError, Polygon
from bspcsg.node import Node
from bspcsg.csg import intersect, solid_boolean, subtract, union

try:
    __version__ = version("bspcsg")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    'Vertex',
    'VertexAttributes',
    'mix',
    'Plane',
    'PolygonType',
    'Polygon',
    'DegeneratePolygonError',
    'Node',
    'union',
    'subtract',
    'intersect',
    'solid_boolean',
]
