"""Small vector helpers and the default split tolerance for **bspcsg**.

Vectors are plain tuples of floats.  Positions and normals are 3-tuples,
tangents, colors and the upper UV channels are 4-tuples, and the lower UV
channels are 2-tuples.  Helpers that only make sense in R^3 (``cross``,
``dot``, ``mag``) ignore any trailing components; helpers that are
component-wise (``lerp``, ``negate``) preserve the arity of their inputs.
"""

from __future__ import annotations

from math import sqrt
from typing import Sequence

## constants
epsilon = 0.00001

ZERO2 = (0.0, 0.0)
ZERO3 = (0.0, 0.0, 0.0)
ZERO4 = (0.0, 0.0, 0.0, 0.0)


def vec(values: Sequence[float], size: int) -> tuple:
    """Coerce ``values`` into a float tuple of exactly ``size`` components.

    Raises ``ValueError`` when too few components are supplied; extra
    components are ignored.
    """

    if len(values) < size:
        raise ValueError(f"expected at least {size} components, got {len(values)}")
    return tuple(float(values[i]) for i in range(size))


## R^3 -> R^3 functions
def add(a: Sequence[float], b: Sequence[float]) -> tuple:
    """ 3 vector, `a + b`"""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Sequence[float], b: Sequence[float]) -> tuple:
    """ 3 vector, `a - b`"""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale(a: Sequence[float], c: float) -> tuple:
    """ 3 vector ``a`` times scalar ``c``"""
    return (a[0] * c, a[1] * c, a[2] * c)


def cross(a: Sequence[float], b: Sequence[float]) -> tuple:
    """ 3 vector ``a`` cross ``b``"""
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def unit(a: Sequence[float]) -> tuple:
    """Return ``a`` scaled to unit length, or the zero vector if ``a`` has
    no length."""
    length = mag(a)
    if length == 0.0:
        return ZERO3
    return (a[0] / length, a[1] / length, a[2] / length)


## R^3 -> R functions
def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """ 3 vector ``a`` dot ``b`` """
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def mag(a: Sequence[float]) -> float:
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


## component-wise functions, any arity
def lerp(a: Sequence[float], b: Sequence[float], t: float) -> tuple:
    """Linear interpolation ``a + (b - a) * t`` over every component."""
    return tuple(x + (y - x) * t for x, y in zip(a, b))


def negate(a: Sequence[float]) -> tuple:
    """Negate every component of ``a``."""
    return tuple(-x for x in a)


def weld_key(p: Sequence[float], tol: float) -> tuple:
    """Integer grid key of point ``p``; points closer than ``tol`` usually
    share a key."""
    scale = 1.0 / tol
    return (int(round(p[0] * scale)), int(round(p[1] * scale)), int(round(p[2] * scale)))


__all__ = [
    'epsilon',
    'ZERO2',
    'ZERO3',
    'ZERO4',
    'vec',
    'add',
    'sub',
    'scale',
    'cross',
    'unit',
    'dot',
    'mag',
    'lerp',
    'negate',
    'weld_key',
]
