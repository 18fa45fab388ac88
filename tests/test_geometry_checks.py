from bspcsg.geometry_checks import (
    CheckResult,
    polygon_is_planar,
    polygons_valid,
    solid_closed,
)
from bspcsg.plane import Plane
from bspcsg.polygon import Polygon
from bspcsg.primitives import cube
from bspcsg.vertex import Vertex


def _poly(points):
    return Polygon([Vertex(position=p) for p in points])


def test_planar_polygon():
    square = _poly([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
    assert polygon_is_planar(square)


def test_warped_polygon_detected():
    warped = _poly([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0.5)])
    assert not polygon_is_planar(warped)
    result = polygons_valid([_poly([(0, 0, 0), (1, 0, 0), (0, 1, 0)]), warped])
    assert isinstance(result, CheckResult)
    assert not result
    assert any('non-planar' in msg and '[1]' in msg for msg in result.warnings)


def test_degenerate_plane_detected():
    tri = Polygon([Vertex(position=(0, 0, 0)), Vertex(position=(1, 0, 0)),
                   Vertex(position=(2, 0, 0))])
    assert tri.plane == Plane()
    result = polygons_valid([tri])
    assert not result.ok
    assert any('degenerate' in msg for msg in result.warnings)


def test_closed_cube():
    result = solid_closed(cube())
    assert result.ok
    assert result.warnings == []


def test_open_cube():
    result = solid_closed(cube()[1:])
    assert not result
    assert any('unmatched' in msg for msg in result.warnings)


def test_nothing_is_not_closed():
    assert not solid_closed([])
