"""Projection of polysym polygons to 3D and triangulated views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Tuple

import numpy as np

from polysym.polytope import Polygon
from polysym.triangulator import triangulate_polygon
from polysym.vector import epsilon, pad

Vec3 = Tuple[float, float, float]
TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]

DEFAULT_W_OFFSET = 4.0


@dataclass(frozen=True)
class Triangle:
    """Immutable triangle representation in XYZ space."""

    normal: Vec3
    v0: Vec3
    v1: Vec3
    v2: Vec3


def project(v: Sequence[float], w_offset: float = DEFAULT_W_OFFSET) -> np.ndarray:
    """Project a point of any dimension to 3D.

    Points with at most three coordinates are zero-extended.  Beyond
    three, the point is seen in perspective along the fourth axis from
    ``w = -w_offset``; axes past the fourth are dropped.
    """

    v = np.asarray(v, dtype=float)
    if len(v) <= 3:
        return pad(v, 3)
    w = v[3] + w_offset
    if abs(w) < epsilon:
        raise ValueError(f'point {v.tolist()} lies on the projection plane')
    return v[:3] / w


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = np.cross(np.subtract(v1, v0), np.subtract(v2, v0))
    length = float(np.linalg.norm(n))
    if length <= epsilon * epsilon:
        return None
    return tuple(float(c) for c in n / length)


def mesh_view(polygons: Iterable[Polygon],
              w_offset: float = DEFAULT_W_OFFSET) -> Iterator[TriTuple]:
    """Yield triangles for a set of polygons as ``(normal, v0, v1, v2)``.

    Each triangle is wound so that its normal points away from the
    origin, which lies inside every shape polysym builds.  Degenerate
    triangles are skipped silently.
    """

    for poly in polygons:
        pts = [project(v, w_offset) for v in poly.verts]
        if len(pts) < 3:
            continue
        centroid = np.mean(pts, axis=0)
        for i, j, k in triangulate_polygon(pts):
            v0 = tuple(float(c) for c in pts[i])
            v1 = tuple(float(c) for c in pts[j])
            v2 = tuple(float(c) for c in pts[k])
            normal = triangle_normal(v0, v1, v2)
            if normal is None:
                continue
            if np.dot(normal, centroid) < 0:
                v1, v2 = v2, v1
                normal = (-normal[0], -normal[1], -normal[2])
            yield normal, v0, v1, v2


def triangles_from_mesh(mesh: Iterable[TriTuple]) -> Iterable[Triangle]:
    """Convert ``mesh_view`` output into ``Triangle`` instances."""

    for normal, v0, v1, v2 in mesh:
        yield Triangle(normal=normal, v0=v0, v1=v1, v2=v2)


__all__ = [
    "DEFAULT_W_OFFSET",
    "Triangle",
    "Vec3",
    "mesh_view",
    "project",
    "triangle_normal",
    "triangles_from_mesh",
]
