"""Convex polytopes as ranked cell complexes, built by half-space slicing.

=====================
OVERVIEW
=====================

A ``PolytopeArena`` owns every element of one convex polytope: its
vertices (rank 0), edges (rank 1), faces (rank 2) and so on up to the
single full-dimensional ``root`` element.  Elements refer to each other
only by integer handles into the arena's slot table.  Each element
lists its children (the elements one rank below that bound it) and its
parents (the elements one rank above that it bounds).

Handles are never reused.  When slicing removes an element its slot is
set to ``None`` at the end of the pass, so no handle is invalidated
while another element might still be visiting it.

slicing
=======

``slice_by_plane(pole)`` intersects the polytope with the half-space
``{x : (pole - x) . pole >= 0}``: the side of the hyperplane through
``pole``, perpendicular to ``pole``, that contains the origin.  Every
reachable element is classified exactly once per pass, children before
parents:

- a vertex is ``KEPT`` unless it lies more than ``epsilon`` outside the
  hyperplane, in which case it is ``REMOVED``.  Kept vertices within
  ``epsilon`` of the hyperplane are also noted as lying *on* it.
- an element with no removed and no cut children is ``KEPT``;
- an element with nothing strictly inside is ``REMOVED`` (it may touch
  the hyperplane, but only from outside);
- anything else is cut: it becomes ``MODIFIED``, its removed children
  are dropped and a new *section* element, one rank lower, is added as
  a child.  The section of an edge is the point where the edge crosses
  the hyperplane; the section of a higher-rank element is bounded by
  the sections of its cut children together with those of its
  sub-elements that already lie on the hyperplane.

Sections are built once and shared, so the section of a face is the
same edge for every cell that contains the face.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Set, Union

import numpy as np

from polysym.errors import InvariantError
from polysym.vector import epsilon, pad

logger = logging.getLogger(__name__)

PolytopeId = int


class SliceState(Enum):
    """Per-element classification during one slicing pass."""
    UNKNOWN = "unknown"
    KEPT = "kept"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass
class Point:
    """A vertex."""
    coords: np.ndarray
    parents: List[PolytopeId] = field(default_factory=list)

    @property
    def rank(self) -> int:
        return 0


@dataclass
class Branch:
    """An element of rank 1 or more, bounded by its children."""
    rank: int
    children: List[PolytopeId]
    parents: List[PolytopeId] = field(default_factory=list)


Node = Union[Point, Branch]


@dataclass
class SliceResult:
    """What one slicing pass did to the arena."""
    kept: int = 0
    removed: int = 0
    modified: int = 0
    created: int = 0

    @property
    def unchanged(self) -> bool:
        return self.removed == 0 and self.modified == 0 and self.created == 0


@dataclass
class Polygon:
    """Ordered vertex loop of a rank-2 element."""
    verts: List[np.ndarray]
    id: Optional[PolytopeId] = None

    def __len__(self) -> int:
        return len(self.verts)

    @property
    def ndim(self) -> int:
        return len(self.verts[0]) if self.verts else 0


def _base_3_expansion(n: int, digit_count: int) -> List[int]:
    digits = []
    for _ in range(digit_count):
        digits.append(n % 3)
        n //= 3
    return digits


class PolytopeArena:
    """Indexed cell complex of a single convex polytope."""

    def __init__(self, ndim: int = 0):
        self.ndim = ndim
        self.root: Optional[PolytopeId] = None
        self._slots: List[Optional[Node]] = []

        # scratch state of the slicing pass in progress; empty otherwise
        self._slice_state: Dict[PolytopeId, SliceState] = {}
        self._sections: Dict[PolytopeId, PolytopeId] = {}
        self._on_plane: Set[PolytopeId] = set()

    def __repr__(self) -> str:
        return f"PolytopeArena(ndim={self.ndim}, counts={self.counts()})"

    def __len__(self) -> int:
        return sum(1 for node in self._slots if node is not None)

    @classmethod
    def new_cube(cls, ndim: int, radius: float) -> "PolytopeArena":
        """Axis-aligned hypercube centered on the origin.

        Every element of the cube is one cell of a 3^ndim grid.  In base
        3, digit ``k`` of a cell's index says where the cell sits along
        axis ``k``: 0 and 2 pin it to ``-radius`` and ``+radius``, 1
        means it spans the axis.  The cell's rank is its number of 1
        digits; its children replace one 1 digit by 0 or 2, its parents
        replace one 0 or 2 digit by 1.

        ::

            • - •
            | # |
            • - •
        """

        if ndim < 0:
            raise ValueError(f'bad dimension for cube: {ndim}')
        if radius <= 0:
            raise ValueError(f'cube radius must be positive, not {radius}')

        ret = cls(ndim)
        powers_of_3 = [3 ** k for k in range(ndim)]
        for i in range(3 ** ndim):
            digits = _base_3_expansion(i, ndim)
            rank = digits.count(1)
            parents = [i - power * digit + power
                       for power, digit in zip(powers_of_3, digits)
                       if digit != 1]
            if rank == 0:
                coords = np.array([(digit - 1.0) * radius for digit in digits])
                ret._push(Point(coords, parents))
            else:
                children = []
                for power, digit in zip(powers_of_3, digits):
                    if digit == 1:
                        children.extend((i - power, i + power))
                ret._push(Branch(rank, children, parents))
        ret.root = (3 ** ndim - 1) // 2
        logger.debug('built %d-cube of radius %g: %s', ndim, radius, ret.counts())
        return ret

    ## arena access
    ## ------------

    def _node(self, id: PolytopeId) -> Node:
        node = self._slots[id]
        if node is None:
            raise InvariantError(f'polytope {id} referenced after deletion')
        return node

    def is_empty(self) -> bool:
        return self.root is None or self._slots[self.root] is None

    def is_live(self, id: PolytopeId) -> bool:
        return 0 <= id < len(self._slots) and self._slots[id] is not None

    def rank(self, id: PolytopeId) -> int:
        return self._node(id).rank

    def children(self, id: PolytopeId) -> List[PolytopeId]:
        node = self._node(id)
        if isinstance(node, Point):
            return []
        return list(node.children)

    def parents(self, id: PolytopeId) -> List[PolytopeId]:
        return list(self._node(id).parents)

    def point(self, id: PolytopeId) -> np.ndarray:
        node = self._node(id)
        if not isinstance(node, Point):
            raise ValueError(f'polytope {id} is not a point')
        return node.coords.copy()

    def ids(self, rank: Optional[int] = None) -> Iterator[PolytopeId]:
        for i, node in enumerate(self._slots):
            if node is not None and (rank is None or node.rank == rank):
                yield i

    def counts(self) -> List[int]:
        """number of live elements of each rank, ``0..ndim``"""
        ret = [0] * (self.ndim + 1)
        for node in self._slots:
            if node is not None:
                ret[node.rank] += 1
        return ret

    def points(self) -> List[np.ndarray]:
        return [node.coords.copy() for node in self._slots if isinstance(node, Point)]

    def extent(self) -> float:
        """largest absolute coordinate of any vertex"""
        pts = self.points()
        if not pts:
            return 0.0
        return float(max(np.max(np.abs(p)) if len(p) else 0.0 for p in pts))

    ## construction
    ## ------------

    def _push(self, node: Node) -> PolytopeId:
        self._slots.append(node)
        return len(self._slots) - 1

    def push_point(self, coords: Sequence[float]) -> PolytopeId:
        return self._push(Point(np.asarray(coords, dtype=float).copy()))

    def push_polytope(self, children: Sequence[PolytopeId]) -> PolytopeId:
        children = list(children)
        if not children:
            raise InvariantError('cannot construct non-point polytope with no children')
        rank = self.rank(children[0]) + 1
        for child in children:
            if self.rank(child) + 1 != rank:
                raise InvariantError('cannot construct polytope with mismatched ranks')
        ret = self._push(Branch(rank, children))
        for child in children:
            self._node(child).parents.append(ret)
        return ret

    def add_child(self, parent: PolytopeId, child: PolytopeId) -> None:
        node = self._node(parent)
        if isinstance(node, Point):
            raise InvariantError('cannot add child to point')
        if node.rank != self.rank(child) + 1:
            raise InvariantError(f'cannot add rank {self.rank(child)} child '
                                 f'to rank {node.rank} polytope')
        node.children.append(child)
        self._node(child).parents.append(parent)

    ## slicing
    ## -------

    def slice_by_plane(self, pole: Sequence[float]) -> SliceResult:
        """Intersect with the half-space bounded by the hyperplane through
        ``pole`` perpendicular to ``pole``, keeping the origin's side."""

        result = SliceResult()
        if self.is_empty():
            logger.debug('slice of empty polytope ignored')
            return result

        pole = pad(pole, self.ndim)
        self._slice_state = {}
        self._sections = {}
        self._on_plane = set()
        try:
            self._classify(self.root, pole, float(np.dot(pole, pole)), result)
            self._finish_slice(result)
        finally:
            self._slice_state = {}
            self._sections = {}
            self._on_plane = set()
        return result

    def _classify(self, id: PolytopeId, pole: np.ndarray, pole_sq: float,
                  result: SliceResult) -> SliceState:
        state = self._slice_state.get(id, SliceState.UNKNOWN)
        if state is not SliceState.UNKNOWN:
            return state

        node = self._node(id)
        if isinstance(node, Point):
            distance = pole_sq - float(np.dot(node.coords, pole))
            if distance < -epsilon:
                state = SliceState.REMOVED
            else:
                state = SliceState.KEPT
                if distance <= epsilon:
                    self._on_plane.add(id)
            self._slice_state[id] = state
            return state

        child_states = [self._classify(child, pole, pole_sq, result)
                        for child in node.children]

        has_inside = False
        has_outside = False
        for child, child_state in zip(node.children, child_states):
            if child_state is SliceState.MODIFIED:
                has_inside = has_outside = True
            elif child_state is SliceState.REMOVED:
                has_outside = True
            elif child not in self._on_plane:
                has_inside = True

        if not has_outside:
            state = SliceState.KEPT
            if not has_inside:
                self._on_plane.add(id)
        elif not has_inside:
            state = SliceState.REMOVED
        else:
            self._cut(id, node, child_states, pole, pole_sq, result)
            state = SliceState.MODIFIED
        self._slice_state[id] = state
        return state

    def _cut(self, id: PolytopeId, node: Branch, child_states: List[SliceState],
             pole: np.ndarray, pole_sq: float, result: SliceResult) -> None:
        if node.rank == 1:
            if len(node.children) != 2:
                raise InvariantError(f'edge {id} has {len(node.children)} endpoints')
            a, b = (self._node(c).coords for c in node.children)
            # both endpoints are strictly on opposite sides here
            da = abs(pole_sq - float(np.dot(a, pole)))
            db = abs(pole_sq - float(np.dot(b, pole)))
            section = self.push_point((b * da + a * db) / (da + db))
        else:
            section_children: List[PolytopeId] = []
            for child, child_state in zip(node.children, child_states):
                if child_state is SliceState.MODIFIED:
                    candidates = [self._sections[child]]
                else:
                    candidates = [g for g in self.children(child) if g in self._on_plane]
                for g in candidates:
                    if g not in section_children:
                        section_children.append(g)
            section = self.push_polytope(section_children)

        self._slice_state[section] = SliceState.KEPT
        self._on_plane.add(section)
        self._sections[id] = section

        node.children = [child for child, child_state in zip(node.children, child_states)
                         if child_state is not SliceState.REMOVED]
        self.add_child(id, section)
        result.modified += 1
        result.created += 1

    def _finish_slice(self, result: SliceResult) -> None:
        if self._slice_state.get(self.root) is SliceState.REMOVED:
            result.removed = len(self)
            self._slots = [None] * len(self._slots)
            logger.debug('slice removed the entire polytope')
            return

        for i, node in enumerate(self._slots):
            if node is None:
                continue
            state = self._slice_state.get(i, SliceState.UNKNOWN)
            if state is SliceState.UNKNOWN:
                raise InvariantError(f'orphaned rank {node.rank} polytope {i} after slice')

        for i, node in enumerate(self._slots):
            if node is None:
                continue
            state = self._slice_state[i]
            if state is SliceState.REMOVED:
                self._slots[i] = None
                result.removed += 1
            elif state is SliceState.KEPT:
                result.kept += 1

        for node in self._slots:
            if node is not None:
                node.parents = [p for p in node.parents if self._slots[p] is not None]

    ## output
    ## ------

    def polygons(self) -> List[Polygon]:
        """ordered vertex loop of every rank-2 element"""
        return [Polygon(self._face_loop(face), face) for face in self.ids(2)]

    def _face_loop(self, face: PolytopeId) -> List[np.ndarray]:
        edges = self.children(face)
        if not edges:
            raise InvariantError(f'face {face} has no edges')

        adjacency: Dict[PolytopeId, List[PolytopeId]] = {}
        for edge in edges:
            ends = self.children(edge)
            if len(ends) != 2:
                raise InvariantError(f'edge {edge} of face {face} has {len(ends)} endpoints')
            a, b = ends
            adjacency.setdefault(a, []).append(b)
            adjacency.setdefault(b, []).append(a)
        for v, neighbors in adjacency.items():
            if len(neighbors) != 2:
                raise InvariantError(f'vertex {v} of face {face} has {len(neighbors)} edges')

        start, current = self.children(edges[0])
        previous = start
        loop = [start]
        while current != start:
            loop.append(current)
            if len(loop) > len(adjacency):
                raise InvariantError(f'edges of face {face} do not close')
            a, b = adjacency[current]
            previous, current = current, (b if a == previous else a)
        if len(loop) != len(adjacency):
            raise InvariantError(f'edges of face {face} form more than one cycle')
        return [self.point(v) for v in loop]


__all__ = [
    'Branch',
    'Point',
    'Polygon',
    'PolytopeArena',
    'PolytopeId',
    'SliceResult',
    'SliceState',
]
