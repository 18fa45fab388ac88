"""Boolean operations on polygon lists.

These wrappers build a BSP tree for each operand, run the matching
:class:`~bspcsg.node.Node` operation and hand back a flat polygon list.
The input sequences and their polygons are left unmodified.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from bspcsg.geom import epsilon
from bspcsg.node import Node
from bspcsg.polygon import Polygon

logger = logging.getLogger(__name__)


def _run(operation: str, combine: Callable[[Node, Node], Node],
         a: Sequence[Polygon], b: Sequence[Polygon],
         tol: Optional[float]) -> List[Polygon]:
    if tol is None:
        tol = epsilon
    result = combine(Node(a, tol=tol), Node(b, tol=tol)).all_polygons()
    logger.debug('%s: %d + %d polygons -> %d polygons',
                 operation, len(a), len(b), len(result))
    return result


def _copy(polygons: Sequence[Polygon]) -> List[Polygon]:
    return [p.clone() for p in polygons]


# An empty operand builds a tree without a partition plane, which clips
# nothing and cannot be inverted into all of space, so those cases are
# answered directly.

def union(a: Sequence[Polygon], b: Sequence[Polygon],
          tol: Optional[float] = None) -> List[Polygon]:
    """Return the polygons bounding the space in ``a`` or ``b``."""
    if not a or not b:
        return _copy(a or b)
    return _run('union', Node.union, a, b, tol)


def subtract(a: Sequence[Polygon], b: Sequence[Polygon],
             tol: Optional[float] = None) -> List[Polygon]:
    """Return the polygons bounding the space in ``a`` but not in ``b``."""
    if not a or not b:
        return _copy(a)
    return _run('difference', Node.subtract, a, b, tol)


def intersect(a: Sequence[Polygon], b: Sequence[Polygon],
              tol: Optional[float] = None) -> List[Polygon]:
    """Return the polygons bounding the space in both ``a`` and ``b``."""
    if not a or not b:
        return []
    return _run('intersection', Node.intersect, a, b, tol)


OPERATIONS: Dict[str, Callable] = {
    'union': union,
    'difference': subtract,
    'subtract': subtract,
    'intersection': intersect,
    'intersect': intersect,
}


def solid_boolean(a: Sequence[Polygon], b: Sequence[Polygon], operation: str,
                  tol: Optional[float] = None) -> List[Polygon]:
    """Dispatch a boolean by name: ``'union'``, ``'difference'`` or
    ``'intersection'``."""
    func = OPERATIONS.get(operation)
    if func is None:
        raise ValueError(f'unsupported solid boolean operation {operation!r}')
    return func(a, b, tol)


__all__ = ['OPERATIONS', 'union', 'subtract', 'intersect', 'solid_boolean']
