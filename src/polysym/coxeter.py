"""Linear Coxeter diagrams and the mirrors that generate their groups."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from polysym.errors import CoxeterDiagramError
from polysym.group import DEFAULT_MAX_ORDER, Group
from polysym.matrix import Matrix, Reflection
from polysym.vector import epsilon, unit


def parse_diagram(text: str) -> List[int]:
    """Parse a comma separated list of edge labels such as ``"4,3,3"``."""

    labels: List[int] = []
    for i, part in enumerate(text.split(',')):
        part = part.strip()
        try:
            labels.append(int(part))
        except ValueError:
            raise CoxeterDiagramError(f'bad edge label {part!r} at position {i}',
                                      field='edges') from None
    return labels


@dataclass(frozen=True)
class Mirror:
    """A reflection hyperplane, represented by its unit normal."""

    normal: np.ndarray

    @property
    def ndim(self) -> int:
        return len(self.normal)

    def matrix(self) -> Matrix:
        return Reflection(self.normal)


@dataclass(frozen=True)
class MirrorGenerator:
    """A group generator made by composing one or more mirrors."""

    mirrors: Sequence[Mirror] = field(default_factory=tuple)

    def matrix(self) -> Matrix:
        if not self.mirrors:
            raise ValueError('empty mirror generator not allowed')
        result = self.mirrors[0].matrix()
        for mirror in self.mirrors[1:]:
            result = result.mul(mirror.matrix())
        return result


class CoxeterDiagram:
    """Linear Coxeter diagram with unlabeled vertices.

    ``edges[i]`` is the label between mirror ``i`` and mirror ``i+1``;
    neighbouring mirrors meet at a dihedral angle of ``pi/label`` and
    non-neighbouring mirrors are perpendicular.  A label of 2 means the
    neighbours are perpendicular too.
    """

    def __init__(self, edges: Sequence[int]):
        edges = list(edges)
        for i, edge in enumerate(edges):
            if isinstance(edge, bool) or not isinstance(edge, (int, np.integer)):
                raise CoxeterDiagramError(f'edge label {edge!r} at position {i} is not an integer',
                                          field='edges')
            if edge <= 1:
                raise CoxeterDiagramError(f'edge label {edge} at position {i} must be greater than 1',
                                          field='edges')
        self.edges = [int(e) for e in edges]

    @classmethod
    def parse(cls, text: str) -> "CoxeterDiagram":
        return cls(parse_diagram(text))

    def __repr__(self) -> str:
        return f"CoxeterDiagram({self.edges})"

    @property
    def ndim(self) -> int:
        """Number of dimensions described by the diagram's group."""
        return len(self.edges) + 1

    def mirrors(self) -> List[Mirror]:
        ndim = self.ndim
        ret = []
        last = unit(0, ndim)
        for i, edge in enumerate(self.edges):
            ret.append(Mirror(last))
            # Every mirror is perpendicular to all the others except its
            # neighbours, so mirror i+1 only needs axes i and i+1:
            #
            #   [ ? 0 0 0 ]
            #   [ ? ? 0 0 ]
            #   [ 0 ? ? 0 ]
            #   [ 0 0 ? ? ]
            #
            # Only axis i is shared with the previous mirror, so it alone
            # fixes the dot product; axis i+1 then normalises the vector.
            q = last[i]
            y = math.cos(math.pi / edge) / q
            if 1.0 - y * y < epsilon * epsilon:
                raise CoxeterDiagramError(
                    f'diagram {self.edges} does not describe a finite reflection group',
                    field='edges')
            z = math.sqrt(1.0 - y * y)
            last = np.zeros(ndim)
            last[i] = y
            last[i + 1] = z
        ret.append(Mirror(last))
        return ret

    def generators(self) -> List[Matrix]:
        return [m.matrix() for m in self.mirrors()]

    def group(self, max_order: int = DEFAULT_MAX_ORDER) -> Group:
        return Group.from_generators(self.generators(), max_order=max_order)

    def mirror_basis(self) -> Matrix:
        """Matrix taking mirror coordinates to plain coordinates.

        A vector ``x`` whose dot product with mirror ``j`` is ``c[j]`` is
        ``mirror_basis().transform(c)``.
        """
        return Matrix.from_cols([m.normal for m in self.mirrors()]).inverse().transpose()


__all__ = [
    'CoxeterDiagram',
    'Mirror',
    'MirrorGenerator',
    'parse_diagram',
]
