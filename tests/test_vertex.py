import pytest

from bspcsg.vertex import Vertex, VertexAttributes, mix


def test_unset_attributes_read_as_zero():
    v = Vertex()
    assert v.attributes == VertexAttributes.NONE
    assert v.position == (0.0, 0.0, 0.0)
    assert v.normal == (0.0, 0.0, 0.0)
    assert v.tangent == (0.0, 0.0, 0.0, 0.0)
    assert v.color == (0.0, 0.0, 0.0, 0.0)
    assert v.uv0 == (0.0, 0.0)
    assert v.uv4 == (0.0, 0.0, 0.0, 0.0)
    assert not v.has_position
    assert not v.has_normal


def test_writing_an_attribute_sets_its_flag():
    v = Vertex()
    v.normal = [0, 0, 1]
    assert v.has_normal
    assert v.normal == (0.0, 0.0, 1.0)
    assert v.attributes == VertexAttributes.NORMAL
    assert not v.has_tangent


def test_constructor_sets_flags_for_given_attributes():
    v = Vertex(position=(1, 2, 3), uv0=(0.5, 0.25), color=(1, 0, 0, 1))
    assert v.has_arrays(VertexAttributes.POSITION | VertexAttributes.TEXTURE0
                        | VertexAttributes.COLOR)
    assert not v.has_arrays(VertexAttributes.POSITION | VertexAttributes.NORMAL)
    assert v.has_uv0 and not v.has_uv2 and not v.has_uv3


def test_short_attribute_rejected():
    with pytest.raises(ValueError):
        Vertex(position=(1.0, 2.0))


def test_flip_negates_normal_and_tangent_only():
    v = Vertex(position=(1, 2, 3), normal=(0, 1, 0), tangent=(1, 0, 0, -1),
               color=(0.2, 0.3, 0.4, 1.0))
    v.flip()
    assert v.position == (1.0, 2.0, 3.0)
    assert v.normal == (0.0, -1.0, 0.0)
    assert v.tangent == (-1.0, 0.0, 0.0, 1.0)
    assert v.color == (0.2, 0.3, 0.4, 1.0)


def test_flip_leaves_missing_attributes_unset():
    v = Vertex(position=(0, 0, 0))
    v.flip()
    assert not v.has_normal
    assert not v.has_tangent


def test_flipped_returns_copy():
    v = Vertex(position=(0, 0, 0), normal=(0, 0, 1))
    w = v.flipped()
    assert v.normal == (0.0, 0.0, 1.0)
    assert w.normal == (0.0, 0.0, -1.0)


def test_mix_interpolates_shared_attributes():
    a = Vertex(position=(0, 0, 0), normal=(0, 0, 1), uv0=(0, 0), color=(1, 0, 0, 1))
    b = Vertex(position=(2, 4, 6), normal=(0, 1, 0), uv0=(1, 1))
    v = mix(a, b, 0.25)
    assert v.position == pytest.approx((0.5, 1.0, 1.5))
    assert v.normal == pytest.approx((0.0, 0.25, 0.75))
    assert v.uv0 == pytest.approx((0.25, 0.25))
    # only one side carries a color, so it is copied as-is
    assert v.color == (1.0, 0.0, 0.0, 1.0)
    assert not v.has_tangent
    assert not v.has_uv2


def test_mix_method_matches_function():
    a = Vertex(position=(0, 0, 0))
    b = Vertex(position=(1, 0, 0))
    assert a.mix(b, 0.5) == mix(a, b, 0.5)


def test_equality_compares_values_and_flags():
    a = Vertex(position=(1, 2, 3))
    b = Vertex(position=(1, 2, 3))
    c = Vertex(position=(1, 2, 3), normal=(0, 0, 0))
    assert a == b
    assert a != c
