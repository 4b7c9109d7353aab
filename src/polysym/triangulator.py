"""Triangulation helpers for polysym polygons.

We delegate to ``mapbox-earcut`` (the fast ear clipping implementation
used by Mapbox GL) to keep the logic compact and reliable.  A polygon
of any dimension is first expressed in coordinates of its own plane;
the resulting indices refer back to the polygon's vertex list.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate polygons"
    ) from exc

from polysym.vector import epsilon

IndexTriangle = Tuple[int, int, int]


def plane_coordinates(verts: Sequence[Sequence[float]]) -> np.ndarray | None:
    """Return ``verts`` as 2D coordinates in their own plane.

    The plane is spanned by the two principal directions of the
    vertices about their centroid.  ``None`` is returned for loops that
    collapse to a line or a point.
    """

    pts = np.asarray(verts, dtype=float)
    if pts.ndim != 2 or len(pts) < 3 or pts.shape[1] < 2:
        return None
    centered = pts - pts.mean(axis=0)
    _, s, vt = np.linalg.svd(centered, full_matrices=False)
    if len(s) < 2 or s[1] <= epsilon:
        return None
    return centered @ vt[:2].T


def triangulate_polygon(verts: Sequence[Sequence[float]]) -> List[IndexTriangle]:
    """Return index triangles covering the planar loop ``verts``.

    The loop is given without repeating its first vertex.  Degenerate
    loops (fewer than three vertices, or no area) yield no triangles.
    """

    coords = plane_coordinates(verts)
    if coords is None:
        return []

    vertices = np.asarray(coords, dtype=np.float32)
    ring_array = np.asarray([len(vertices)], dtype=np.uint32)
    indices = _earcut.triangulate_float32(vertices, ring_array)
    triangles: List[IndexTriangle] = []
    for i in range(0, len(indices), 3):
        triangles.append((int(indices[i]),
                          int(indices[i + 1]),
                          int(indices[i + 2])))
    return triangles


__all__ = ['plane_coordinates', 'triangulate_polygon']
