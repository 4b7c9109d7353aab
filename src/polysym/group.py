"""Finite matrix groups enumerated as Cayley graphs.

A ``Group`` is built once, by closure over a set of generator matrices,
and is immutable afterwards.  Elements are plain integer handles into
the group's tables:

- handle ``0`` (``IDENT``) is always the identity;
- handles ``1..g`` are the ``g`` generators, in the order given;
- every other handle is an element discovered during closure.

For each element the group stores its matrix, the sequence of
generators used to discover it (its *decomposition*, not necessarily a
shortest word), its inverse, and for each generator the element reached
by composing with that generator.  ``compose()`` multiplies two handles
by walking the successor tables, without touching any matrix.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from polysym.errors import GroupOrderError, InvariantError
from polysym.matrix import Matrix
from polysym.vector import VectorTable

logger = logging.getLogger(__name__)

GroupElement = int

IDENT: GroupElement = 0

# [5,3,3] has order 14400, [4,3,3,3,3] has order 46080
DEFAULT_MAX_ORDER = 100_000


class Group:
    """Finite group of ``ndim`` x ``ndim`` matrices."""

    def __init__(self, ndim: int,
                 generator_count: int,
                 matrices: List[Matrix],
                 decompositions: List[Tuple[GroupElement, ...]],
                 successors: List[List[GroupElement]],
                 inverses: List[GroupElement]):
        self._ndim = ndim
        self._generator_count = generator_count
        self._matrices = matrices
        self._decompositions = decompositions
        self._successors = successors
        self._inverses = inverses

    def __repr__(self) -> str:
        return f"Group(ndim={self._ndim}, order={self.order}, generators={self._generator_count})"

    @classmethod
    def trivial(cls, ndim: int = 0) -> "Group":
        return cls(ndim, 0, [Matrix.ident(ndim)], [()], [], [IDENT])

    @classmethod
    def from_generators(cls, generators: Sequence[Matrix],
                        max_order: int = DEFAULT_MAX_ORDER) -> "Group":
        """Enumerate the group generated by ``generators``.

        Raises ``GroupOrderError`` once more than ``max_order`` elements
        have been found, which is how an infinite generator set shows up.
        """

        if not generators:
            raise ValueError('cannot enumerate a group with no generators')
        ndim = max(g.ndim for g in generators)
        gens = [Matrix(g, ndim) for g in generators]
        ident = Matrix.ident(ndim)
        for i, g in enumerate(gens):
            if g.approx_eq(ident):
                raise ValueError(f'generator {i} is the identity')
            for j in range(i):
                if g.approx_eq(gens[j]):
                    raise ValueError(f'generators {j} and {i} are equal')

        table = VectorTable(ndim * ndim)
        table.append(ident.flat())
        matrices = [ident]
        decompositions: List[Tuple[GroupElement, ...]] = [()]
        successors: List[List[GroupElement]] = [[] for _ in gens]
        found_inverses = {IDENT: IDENT}

        # breadth-first: every element is processed exactly once, in
        # the order it was discovered
        next_unprocessed = 0
        while next_unprocessed < len(matrices):
            e = next_unprocessed
            for i, generator_matrix in enumerate(gens):
                gen = i + 1
                m = matrices[e].mul(generator_matrix)
                existing = table.find(m.flat())
                if existing == IDENT:
                    # e * gen = I
                    found_inverses[gen] = e
                    found_inverses[e] = gen
                    successor = IDENT
                elif existing is not None:
                    successor = existing
                else:
                    if len(matrices) >= max_order:
                        raise GroupOrderError(
                            f'group order exceeds {max_order}; the generators '
                            'do not describe a finite group of tractable order',
                            field='max_group_order')
                    matrices.append(m)
                    table.append(m.flat())
                    decompositions.append(decompositions[e] + (gen,))
                    successor = len(matrices) - 1
                successors[i].append(successor)
            next_unprocessed += 1

        inverses: List[Optional[GroupElement]] = [None] * len(matrices)
        for elem, inv in found_inverses.items():
            inverses[elem] = inv

        ret = cls(ndim, len(gens), matrices, decompositions, successors, inverses)
        for gen in ret.generators():
            if inverses[gen] is None:
                raise InvariantError(f'no inverse found for generator {gen}')

        for elem in ret.elements():
            if elem <= ret.generator_count or inverses[elem] is not None:
                continue
            inv_elem = IDENT
            for gen in reversed(decompositions[elem]):
                inv_elem = ret.compose(inv_elem, inverses[gen])
            if inv_elem == IDENT:
                raise InvariantError(f'inverse of element {elem} resolved to the identity')
            inverses[elem] = inv_elem
            inverses[inv_elem] = elem

        logger.debug('enumerated group of order %d from %d generators in %d dimensions',
                     ret.order, ret.generator_count, ndim)
        return ret

    @property
    def ndim(self) -> int:
        return self._ndim

    @property
    def order(self) -> int:
        return len(self._matrices)

    @property
    def generator_count(self) -> int:
        return self._generator_count

    def __len__(self) -> int:
        return self.order

    def elements(self) -> Iterator[GroupElement]:
        return iter(range(self.order))

    def generators(self) -> Iterator[GroupElement]:
        return iter(range(1, self._generator_count + 1))

    def matrix(self, e: GroupElement) -> Matrix:
        return Matrix(self._matrices[e])

    def matrices(self) -> List[Matrix]:
        return [Matrix(m) for m in self._matrices]

    def decompose(self, e: GroupElement) -> Tuple[GroupElement, ...]:
        return self._decompositions[e]

    def successor(self, e: GroupElement, gen: GroupElement) -> GroupElement:
        """``e * gen`` for a generator handle ``gen``"""
        if gen < 1 or gen > self._generator_count:
            raise ValueError(f'{gen} is not a generator of this group')
        return self._successors[gen - 1][e]

    def compose(self, e1: GroupElement, e2: GroupElement) -> GroupElement:
        """``e1 * e2``, by applying each generator of ``e2``'s
        decomposition to ``e1`` in turn."""
        e = e1
        for gen in self._decompositions[e2]:
            e = self._successors[gen - 1][e]
        return e

    def inverse(self, e: GroupElement) -> GroupElement:
        return self._inverses[e]


__all__ = [
    'DEFAULT_MAX_ORDER',
    'Group',
    'GroupElement',
    'IDENT',
]
