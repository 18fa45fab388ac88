"""Binary space partitioning trees and the CSG boolean operations.

Each :class:`Node` stores the polygons that lie in its partition plane and
two optional subtrees for the half-spaces in front of and behind that plane.
A tree built from a closed solid treats the back side of every leaf plane as
solid and the front side as empty.  The boolean operations combine two such
trees with the classic clip/invert sequence:

* ``clip_to`` removes the parts of one tree's polygons that are inside the
  other solid,
* ``invert`` swaps solid and empty space,
* ``build`` merges the survivors into a single tree.

Partition planes are taken from the first polygon of each list; no attempt
is made to pick a balanced split.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from bspcsg.geom import epsilon
from bspcsg.plane import Plane
from bspcsg.polygon import Polygon

logger = logging.getLogger(__name__)


class Node:
    """A BSP tree node.

    ``Node(polygons)`` builds a tree from a polygon list.  ``tol`` is the
    coplanarity tolerance used by every split in this tree; child nodes
    inherit it.
    """

    def __init__(self, polygons: Optional[Sequence[Polygon]] = None, *,
                 tol: float = epsilon):
        self.polygons: List[Polygon] = []
        self.plane: Optional[Plane] = None
        self.front: Optional[Node] = None
        self.back: Optional[Node] = None
        self.tol = tol
        if polygons:
            self.build(polygons)

    def _has_plane(self) -> bool:
        return self.plane is not None and self.plane.valid()

    def clone(self) -> "Node":
        """Return a copy that can be clipped, inverted and rebuilt without
        touching this tree."""
        node = Node(tol=self.tol)
        node.polygons = [p.clone() for p in self.polygons]
        node.plane = self.plane.copy() if self.plane is not None else None
        if self.front is not None:
            node.front = self.front.clone()
        if self.back is not None:
            node.back = self.back.clone()
        return node

    def invert(self) -> None:
        """Convert solid space to empty space and empty space to solid."""
        for polygon in self.polygons:
            polygon.flip()
        if self.plane is not None:
            self.plane.flip()
        if self.front is not None:
            self.front.invert()
        if self.back is not None:
            self.back.invert()
        self.front, self.back = self.back, self.front

    def clip_polygons(self, polygons: Sequence[Polygon]) -> List[Polygon]:
        """Return the parts of ``polygons`` that are outside this tree's
        solid."""
        if not self._has_plane():
            return list(polygons)

        front: List[Polygon] = []
        back: List[Polygon] = []
        for polygon in polygons:
            self.plane.split_polygon(polygon, front, back, front, back, self.tol)

        if self.front is not None:
            front = self.front.clip_polygons(front)
        if self.back is not None:
            back = self.back.clip_polygons(back)
        else:
            back = []

        return front + back

    def clip_to(self, other: "Node") -> None:
        """Remove every polygon of this tree that is inside ``other``.

        Each node of this tree is clipped against the whole of ``other``.
        """
        self.polygons = other.clip_polygons(self.polygons)
        if self.front is not None:
            self.front.clip_to(other)
        if self.back is not None:
            self.back.clip_to(other)

    def all_polygons(self) -> List[Polygon]:
        """Flatten the tree into a new list: this node, then front, then
        back."""
        polygons = list(self.polygons)
        if self.front is not None:
            polygons.extend(self.front.all_polygons())
        if self.back is not None:
            polygons.extend(self.back.all_polygons())
        return polygons

    def build(self, polygons: Sequence[Polygon]) -> None:
        """Insert ``polygons`` into the tree.

        On an existing tree the new polygons are filtered down through the
        existing planes and become new nodes at the bottom.
        """
        if not polygons:
            return

        new_node = not self._has_plane()
        if new_node:
            self.plane = polygons[0].plane.copy()

        coplanar = list(self.polygons)
        front: List[Polygon] = []
        back: List[Polygon] = []
        for polygon in polygons:
            self.plane.split_polygon(polygon, coplanar, coplanar, front, back, self.tol)

        # A tolerance too coarse for the input can leave the polygon that
        # supplied the plane on one side of it; keep such a list here instead
        # of recursing on the same list forever.
        if front:
            if new_node and _same_polygons(polygons, front):
                logger.debug('keeping %d unsplittable polygons at their own plane',
                             len(front))
                coplanar.extend(front)
            else:
                if self.front is None:
                    self.front = Node(tol=self.tol)
                self.front.build(front)

        if back:
            if new_node and _same_polygons(polygons, back):
                logger.debug('keeping %d unsplittable polygons at their own plane',
                             len(back))
                coplanar.extend(back)
            else:
                if self.back is None:
                    self.back = Node(tol=self.tol)
                self.back.build(back)

        self.polygons = coplanar

    # Boolean operations.  Neither operand is modified.

    @staticmethod
    def union(a1: "Node", b1: "Node") -> "Node":
        """Space in either ``a1`` or ``b1``."""
        a = a1.clone()
        b = b1.clone()

        a.clip_to(b)
        b.clip_to(a)
        b.invert()
        b.clip_to(a)
        b.invert()
        a.build(b.all_polygons())

        return Node(a.all_polygons(), tol=a.tol)

    @staticmethod
    def subtract(a1: "Node", b1: "Node") -> "Node":
        """Space in ``a1`` but not in ``b1``."""
        a = a1.clone()
        b = b1.clone()

        a.invert()
        a.clip_to(b)
        b.clip_to(a)
        b.invert()
        b.clip_to(a)
        b.invert()
        a.build(b.all_polygons())
        a.invert()

        return Node(a.all_polygons(), tol=a.tol)

    @staticmethod
    def intersect(a1: "Node", b1: "Node") -> "Node":
        """Space in both ``a1`` and ``b1``."""
        a = a1.clone()
        b = b1.clone()

        a.invert()
        b.clip_to(a)
        b.invert()
        a.clip_to(b)
        a.build(b.all_polygons())
        a.invert()

        return Node(a.all_polygons(), tol=a.tol)

    def __repr__(self):
        return (f"Node(polygons={len(self.polygons)}, plane={self.plane!r}, "
                f"front={self.front is not None}, back={self.back is not None})")


def _same_polygons(a: Sequence[Polygon], b: Sequence[Polygon]) -> bool:
    return len(a) == len(b) and all(p == q for p, q in zip(a, b))


__all__ = ['Node']
