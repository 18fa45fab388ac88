"""Per-vertex attribute records.

A :class:`Vertex` carries a position plus any of normal, tangent, color and
four UV channels.  Every attribute is optional.  Writing an attribute sets
its bit in :attr:`Vertex.attributes`; reading an attribute that was never
written yields a zero tuple of the matching arity.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Optional, Sequence

from bspcsg.geom import ZERO2, ZERO3, ZERO4, lerp, negate, vec


class VertexAttributes(IntFlag):
    """Bitmask of vertex attributes that have been explicitly set."""
    NONE = 0
    POSITION = 1
    TEXTURE0 = 2
    TEXTURE1 = 4
    TEXTURE2 = 8
    TEXTURE3 = 16
    COLOR = 32
    NORMAL = 64
    TANGENT = 128
    ALL = 255


# attribute name -> (flag, arity, zero value)
_ATTRIBUTES = {
    'position': (VertexAttributes.POSITION, 3, ZERO3),
    'color': (VertexAttributes.COLOR, 4, ZERO4),
    'normal': (VertexAttributes.NORMAL, 3, ZERO3),
    'tangent': (VertexAttributes.TANGENT, 4, ZERO4),
    'uv0': (VertexAttributes.TEXTURE0, 2, ZERO2),
    'uv2': (VertexAttributes.TEXTURE1, 2, ZERO2),
    'uv3': (VertexAttributes.TEXTURE2, 4, ZERO4),
    'uv4': (VertexAttributes.TEXTURE3, 4, ZERO4),
}


def _attribute(name: str) -> property:
    flag, size, zero = _ATTRIBUTES[name]
    slot = '_' + name

    def getter(self):
        value = getattr(self, slot)
        return zero if value is None else value

    def setter(self, value):
        setattr(self, slot, vec(value, size))
        self._attributes |= flag

    return property(getter, setter)


class Vertex:
    """A mesh vertex with optional attributes.

    Attributes passed as ``None`` (the default) are left unset.  Values are
    stored as float tuples, so a vertex can only change through attribute
    assignment or :meth:`flip`.
    """

    __slots__ = ('_position', '_color', '_normal', '_tangent',
                 '_uv0', '_uv2', '_uv3', '_uv4', '_attributes')

    position = _attribute('position')
    color = _attribute('color')
    normal = _attribute('normal')
    tangent = _attribute('tangent')
    uv0 = _attribute('uv0')
    uv2 = _attribute('uv2')
    uv3 = _attribute('uv3')
    uv4 = _attribute('uv4')

    def __init__(self,
                 position: Optional[Sequence[float]] = None,
                 normal: Optional[Sequence[float]] = None,
                 tangent: Optional[Sequence[float]] = None,
                 color: Optional[Sequence[float]] = None,
                 uv0: Optional[Sequence[float]] = None,
                 uv2: Optional[Sequence[float]] = None,
                 uv3: Optional[Sequence[float]] = None,
                 uv4: Optional[Sequence[float]] = None):
        self._attributes = VertexAttributes.NONE
        for name in _ATTRIBUTES:
            setattr(self, '_' + name, None)
        values = dict(position=position, normal=normal, tangent=tangent,
                      color=color, uv0=uv0, uv2=uv2, uv3=uv3, uv4=uv4)
        for name, value in values.items():
            if value is not None:
                setattr(self, name, value)

    @property
    def attributes(self) -> VertexAttributes:
        return self._attributes

    def has_arrays(self, attributes: VertexAttributes) -> bool:
        """Return ``True`` if every attribute in ``attributes`` is set."""
        return (self._attributes & attributes) == attributes

    @property
    def has_position(self) -> bool:
        return self.has_arrays(VertexAttributes.POSITION)

    @property
    def has_color(self) -> bool:
        return self.has_arrays(VertexAttributes.COLOR)

    @property
    def has_normal(self) -> bool:
        return self.has_arrays(VertexAttributes.NORMAL)

    @property
    def has_tangent(self) -> bool:
        return self.has_arrays(VertexAttributes.TANGENT)

    @property
    def has_uv0(self) -> bool:
        return self.has_arrays(VertexAttributes.TEXTURE0)

    @property
    def has_uv2(self) -> bool:
        return self.has_arrays(VertexAttributes.TEXTURE1)

    @property
    def has_uv3(self) -> bool:
        return self.has_arrays(VertexAttributes.TEXTURE2)

    @property
    def has_uv4(self) -> bool:
        return self.has_arrays(VertexAttributes.TEXTURE3)

    def flip(self) -> None:
        """Negate the normal and tangent, where present."""
        if self.has_normal:
            self._normal = negate(self._normal)
        if self.has_tangent:
            self._tangent = negate(self._tangent)

    def copy(self) -> "Vertex":
        other = Vertex.__new__(Vertex)
        for name in _ATTRIBUTES:
            setattr(other, '_' + name, getattr(self, '_' + name))
        other._attributes = self._attributes
        return other

    def flipped(self) -> "Vertex":
        """Return a flipped copy, leaving this vertex untouched."""
        other = self.copy()
        other.flip()
        return other

    def mix(self, other: "Vertex", t: float) -> "Vertex":
        return mix(self, other, t)

    def __eq__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        if self._attributes != other._attributes:
            return False
        return all(getattr(self, '_' + name) == getattr(other, '_' + name)
                   for name in _ATTRIBUTES)

    __hash__ = None

    def __repr__(self):
        fields = [f"{name}={getattr(self, '_' + name)!r}"
                  for name, (flag, _, _) in _ATTRIBUTES.items()
                  if self._attributes & flag]
        return f"Vertex({', '.join(fields)})"


def mix(x: Vertex, y: Vertex, weight: float) -> Vertex:
    """Return the vertex at ``weight`` along the segment from ``x`` to ``y``.

    The position is always interpolated.  Other attributes are interpolated
    when both vertices carry them, copied when only one does, and left unset
    when neither does.
    """

    v = Vertex(position=lerp(x.position, y.position, weight))
    for name, (flag, _, _) in _ATTRIBUTES.items():
        if flag == VertexAttributes.POSITION:
            continue
        has_x = x.has_arrays(flag)
        has_y = y.has_arrays(flag)
        if has_x and has_y:
            setattr(v, name, lerp(getattr(x, name), getattr(y, name), weight))
        elif has_x:
            setattr(v, name, getattr(x, name))
        elif has_y:
            setattr(v, name, getattr(y, name))
    return v


__all__ = ['VertexAttributes', 'Vertex', 'mix']
