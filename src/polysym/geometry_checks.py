"""Validation helpers for polysym geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from polysym.polytope import Polygon, PolytopeArena
from polysym.vector import epsilon


def is_closed_loop(polygon: Polygon, tol: float = epsilon) -> bool:
    """Return ``True`` if a polygon has at least three distinct,
    consecutive-distinct vertices."""

    verts = polygon.verts
    if len(verts) < 3:
        return False
    for i, v in enumerate(verts):
        if np.linalg.norm(np.subtract(v, verts[i - 1])) <= tol:
            return False
    return True


def polygon_planar(polygon: Polygon, tol: float = epsilon) -> bool:
    verts = np.asarray(polygon.verts, dtype=float)
    if len(verts) <= 3:
        return True
    centered = verts - verts.mean(axis=0)
    singular = np.linalg.svd(centered, compute_uv=False)
    # a planar loop spans at most two directions
    return bool(len(singular) < 3 or singular[2] <= tol)


def check_arena(arena: PolytopeArena) -> "CheckResult":
    """Check ranks and parent/child links of every live element."""

    warnings: List[str] = []
    for id in arena.ids():
        rank = arena.rank(id)
        for child in arena.children(id):
            if not arena.is_live(child):
                warnings.append(f'polytope {id} has deleted child {child}')
                continue
            if arena.rank(child) != rank - 1:
                warnings.append(f'rank {rank} polytope {id} has rank '
                                f'{arena.rank(child)} child {child}')
            if id not in arena.parents(child):
                warnings.append(f'child {child} does not list parent {id}')
        for parent in arena.parents(id):
            if not arena.is_live(parent):
                warnings.append(f'polytope {id} has deleted parent {parent}')
            elif id not in arena.children(parent):
                warnings.append(f'parent {parent} does not list child {id}')
        if rank == 1 and len(arena.children(id)) != 2:
            warnings.append(f'edge {id} has {len(arena.children(id))} endpoints')
    return CheckResult(not warnings, warnings)


def euler_characteristic(counts: Sequence[int]) -> int:
    """Alternating sum of the element counts below the top rank."""

    return sum((-1) ** r * f for r, f in enumerate(counts[:-1]))


def check_euler(arena: PolytopeArena) -> "CheckResult":
    if arena.is_empty():
        return CheckResult(True, ['empty polytope'])
    ndim = arena.ndim
    expected = 1 - (-1) ** ndim
    actual = euler_characteristic(arena.counts())
    if actual != expected:
        return CheckResult(False, [f'euler characteristic {actual}, expected {expected}'])
    return CheckResult(True, [])


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str]

    def __bool__(self) -> bool:
        return self.ok


__all__ = [
    'CheckResult',
    'check_arena',
    'check_euler',
    'euler_characteristic',
    'is_closed_loop',
    'polygon_planar',
]
