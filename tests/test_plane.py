import pytest

from bspcsg.geom import epsilon
from bspcsg.plane import Plane, PolygonType
from bspcsg.polygon import Polygon
from bspcsg.vertex import Vertex


def _poly(points, material=None, **attrs):
    return Polygon([Vertex(position=p, **attrs) for p in points], material)


def test_plane_from_points():
    plane = Plane.from_points((0, 0, 2), (1, 0, 2), (0, 1, 2))
    assert plane.normal == pytest.approx((0.0, 0.0, 1.0))
    assert plane.w == pytest.approx(2.0)
    assert plane.valid()


def test_default_plane_is_invalid_sentinel():
    assert not Plane().valid()


def test_flip_negates_normal_and_offset():
    plane = Plane.from_points((0, 0, 2), (1, 0, 2), (0, 1, 2))
    plane.flip()
    assert plane.normal == pytest.approx((0.0, 0.0, -1.0))
    assert plane.w == pytest.approx(-2.0)


def test_copy_is_independent():
    plane = Plane((0, 0, 1), 1.0)
    other = plane.copy()
    other.flip()
    assert plane == Plane((0, 0, 1), 1.0)


def test_classify_points():
    plane = Plane((0, 0, 1), 0.0)
    assert plane.classify((0, 0, 1)) == PolygonType.FRONT
    assert plane.classify((0, 0, -1)) == PolygonType.BACK
    assert plane.classify((5, 5, 0)) == PolygonType.COPLANAR


def test_points_within_tolerance_are_coplanar_every_time():
    plane = Plane((0, 0, 1), 0.0)
    tri = _poly([(0, 0, epsilon * 0.5), (1, 0, -epsilon * 0.5), (0, 1, epsilon * 0.9)])
    for _ in range(100):
        assert plane.classify_polygon(tri) == PolygonType.COPLANAR
        cf, cb, f, b = [], [], [], []
        plane.split_polygon(tri, cf, cb, f, b)
        assert len(cf) + len(cb) == 1
        assert not f and not b


def test_tolerance_override():
    plane = Plane((0, 0, 1), 0.0)
    tri = _poly([(0, 0, 5e-6), (1, 0, 5e-6), (0, 1, 5e-6)])
    assert plane.classify_polygon(tri) == PolygonType.COPLANAR
    assert plane.classify_polygon(tri, tol=1e-7) == PolygonType.FRONT


def test_coplanar_routing_by_orientation():
    plane = Plane((0, 0, 1), 0.0)
    up = _poly([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
    down = _poly([(0, 0, 0), (0, 1, 0), (1, 0, 0)])
    cf, cb, f, b = [], [], [], []
    plane.split_polygon(up, cf, cb, f, b)
    plane.split_polygon(down, cf, cb, f, b)
    assert cf == [up]
    assert cb == [down]
    assert not f and not b


def test_front_and_back_polygons_pass_through_unchanged():
    plane = Plane((0, 0, 1), 0.0)
    above = _poly([(0, 0, 1), (1, 0, 1), (0, 1, 2)])
    below = _poly([(0, 0, -1), (1, 0, -1), (0, 1, -2)])
    cf, cb, f, b = [], [], [], []
    plane.split_polygon(above, cf, cb, f, b)
    plane.split_polygon(below, cf, cb, f, b)
    assert f[0] is above
    assert b[0] is below
    assert not cf and not cb


def test_split_spanning_square():
    plane = Plane((0, 0, 1), 0.0)
    square = _poly([(-1, 0, -1), (1, 0, -1), (1, 0, 1), (-1, 0, 1)], material='steel')
    cf, cb, f, b = [], [], [], []
    plane.split_polygon(square, cf, cb, f, b)

    assert len(f) == 1 and len(b) == 1
    front, back = f[0], b[0]
    assert front.positions == [(1.0, 0.0, 0.0), (1.0, 0.0, 1.0),
                               (-1.0, 0.0, 1.0), (-1.0, 0.0, 0.0)]
    assert back.positions == [(-1.0, 0.0, -1.0), (1.0, 0.0, -1.0),
                              (1.0, 0.0, 0.0), (-1.0, 0.0, 0.0)]
    # the crossing vertex is shared by both fragments
    assert front.vertices[0] is back.vertices[2]
    assert front.material == 'steel' and back.material == 'steel'
    assert front.plane.normal == pytest.approx(square.plane.normal)
    assert back.plane.normal == pytest.approx(square.plane.normal)


def test_split_keeps_on_plane_vertex_in_both_fragments():
    plane = Plane((0, 0, 1), 0.0)
    a = Vertex(position=(0, 0, 0), uv0=(0, 0))
    bv = Vertex(position=(1, 0, 1), uv0=(0, 1))
    c = Vertex(position=(1, 0, -1), uv0=(1, 1))
    tri = Polygon([a, bv, c])
    cf, cb, f, b = [], [], [], []
    plane.split_polygon(tri, cf, cb, f, b)

    assert f[0].vertices[0] is a
    assert b[0].vertices[0] is a
    crossing = f[0].vertices[2]
    assert crossing.position == pytest.approx((1.0, 0.0, 0.0))
    assert crossing.uv0 == pytest.approx((0.5, 1.0))
    assert len(f[0].vertices) + len(b[0].vertices) >= len(tri.vertices)


def test_split_fragments_cover_every_vertex():
    plane = Plane((1, 0, 0), 0.25)
    hexagon = _poly([(1, 0, 0), (0.5, 0.866, 0), (-0.5, 0.866, 0),
                     (-1, 0, 0), (-0.5, -0.866, 0), (0.5, -0.866, 0)])
    cf, cb, f, b = [], [], [], []
    plane.split_polygon(hexagon, cf, cb, f, b)
    fragments = f + b
    assert len(fragments) == 2
    assert all(len(p.vertices) >= 3 for p in fragments)
    assert sum(len(p.vertices) for p in fragments) >= len(hexagon.vertices)
    assert all(v.position[0] >= 0.25 - epsilon for v in f[0].vertices)
    assert all(v.position[0] <= 0.25 + epsilon for v in b[0].vertices)
