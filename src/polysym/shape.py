"""Symmetric convex polytopes from a symmetry group and seed facets.

The facet normals ("poles") of the polytope are the orbit of the seed
facets under the group.  The polytope itself is what remains of an
oversized hypercube after slicing it once by every pole.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

import numpy as np

from polysym.config import ShapeConfig
from polysym.coxeter import CoxeterDiagram
from polysym.errors import ConfigurationError
from polysym.group import Group, GroupElement
from polysym.polytope import Polygon, PolytopeArena
from polysym.vector import VectorTable, epsilon, mag, pad

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShapeElement:
    """Handle to one boundary vector of a given rank."""
    rank: int
    id: int


class Shape:
    """Orbits of boundary vectors under a symmetry group.

    Vectors are stored per rank; rank ``ndim - 1`` holds the facet
    normals.  For each generator the shape also records where each
    facet goes when that generator is applied to it.
    """

    def __init__(self, symmetry: Group, ndim: Optional[int] = None):
        ndim = symmetry.ndim if ndim is None else ndim
        if ndim < 1:
            raise ValueError(f'shapes need at least one dimension, not {ndim}')
        if ndim < symmetry.ndim:
            raise ValueError(f'{ndim} dimensions cannot hold a {symmetry.ndim}-dimensional group')
        self.group = symmetry
        self._ndim = ndim
        self._vectors = [VectorTable(ndim) for _ in range(ndim)]
        # successors[gen - 1][rank][id]
        self._successors: List[List[List[int]]] = [
            [[] for _ in range(ndim)] for _ in symmetry.generators()
        ]

    @classmethod
    def new(cls, symmetry: Group, base_facets: Sequence[Sequence[float]],
            ndim: Optional[int] = None) -> "Shape":
        if not base_facets:
            raise ConfigurationError('at least one facet is required', field='base_facets')
        ret = cls(symmetry, ndim)
        rank = ret.ndim - 1

        generator_matrices = [symmetry.matrix(gen) for gen in symmetry.generators()]
        next_unprocessed = 0
        for facet_generator in base_facets:
            facet_generator = pad(facet_generator, ret.ndim)
            if mag(facet_generator) < epsilon:
                raise ConfigurationError('facet normal must not be zero', field='base_facets')
            existing = ret.element_at_vector(rank, facet_generator)
            if existing is not None:
                raise ConfigurationError(
                    f'duplicate facet generator {facet_generator.tolist()} '
                    f'(already facet {existing.id})', field='base_facets')
            ret._push(rank, facet_generator)

            while next_unprocessed < len(ret._vectors[rank]):
                e = ShapeElement(rank, next_unprocessed)
                for i, generator_matrix in enumerate(generator_matrices):
                    new_vector = generator_matrix.transform(ret.vector(e))
                    successor = ret.element_at_vector(rank, new_vector)
                    if successor is None:
                        successor = ret._push(rank, new_vector)
                    ret._successors[i][rank].append(successor.id)
                next_unprocessed += 1

        logger.debug('%d facets from %d seed facets', len(ret._vectors[rank]), len(base_facets))
        return ret

    def _push(self, rank: int, v: np.ndarray) -> ShapeElement:
        return ShapeElement(rank, self._vectors[rank].append(v))

    @property
    def ndim(self) -> int:
        return self._ndim

    def elements(self, rank: int) -> Iterator[ShapeElement]:
        return (ShapeElement(rank, i) for i in range(len(self._vectors[rank])))

    def facets(self) -> Iterator[ShapeElement]:
        return self.elements(self.ndim - 1)

    def vector(self, elem: ShapeElement) -> np.ndarray:
        return self._vectors[elem.rank][elem.id].copy()

    def element_at_vector(self, rank: int, v: Sequence[float]) -> Optional[ShapeElement]:
        i = self._vectors[rank].find(v)
        if i is None:
            return None
        return ShapeElement(rank, i)

    def apply_group_element(self, shape_element: ShapeElement,
                            group_element: GroupElement) -> ShapeElement:
        """The element whose vector is ``matrix(group_element)`` applied
        to ``shape_element``'s vector.

        The rightmost generator of the decomposition acts first.
        """
        e = shape_element
        for gen in reversed(self.group.decompose(group_element)):
            e = ShapeElement(e.rank, self._successors[gen - 1][e.rank][e.id])
        return e


@dataclass
class ShapeGeometry:
    """Everything produced by building one shape."""
    ndim: int
    poles: List[np.ndarray]
    arena: PolytopeArena
    polygons: List[Polygon]
    radius: float
    name: str = field(default='polysym')

    def counts(self) -> List[int]:
        return self.arena.counts()


def build_shape(symmetry: Group, base_facets: Sequence[Sequence[float]], *,
                ndim: Optional[int] = None,
                radius_factor: float = 2.0,
                name: str = 'polysym') -> ShapeGeometry:
    """Slice a hypercube by every facet in the orbit of ``base_facets``."""

    shape = Shape.new(symmetry, base_facets, ndim)
    ndim = shape.ndim
    poles = [shape.vector(e) for e in shape.facets()]

    # a circumradius can exceed the inradius by a factor of ndim (simplex)
    radius = max(radius_factor * ndim * max(mag(p) for p in poles), 1.0)
    arena = PolytopeArena.new_cube(ndim, radius)
    for pole in poles:
        arena.slice_by_plane(pole)
    if arena.extent() >= radius - epsilon:
        logger.warning('shape still touches its initial cube of radius %g; '
                       'facets %s do not bound it', radius, [p.tolist() for p in poles])

    polygons = arena.polygons()
    logger.info('built %s: %d poles, element counts %s', name, len(poles), arena.counts())
    return ShapeGeometry(ndim, poles, arena, polygons, radius, name)


def shape_geom(ndim: int, symmetry: Group,
               base_facets: Sequence[Sequence[float]]) -> List[Polygon]:
    return build_shape(symmetry, base_facets, ndim=ndim).polygons


def generate(config: ShapeConfig) -> ShapeGeometry:
    """Run the whole pipeline for a configuration: diagram, group,
    facet orbit, slicing, polygons."""

    config.validate()
    diagram = CoxeterDiagram(config.edges)
    symmetry = diagram.group(max_order=config.max_group_order)
    facets = [pad(f, diagram.ndim) for f in config.base_facets]
    if config.mirror_basis:
        basis = diagram.mirror_basis()
        facets = [basis.transform(f) for f in facets]
    return build_shape(symmetry, facets,
                       radius_factor=config.radius_factor,
                       name=config.name)


__all__ = [
    'Shape',
    'ShapeElement',
    'ShapeGeometry',
    'build_shape',
    'generate',
    'shape_geom',
]
