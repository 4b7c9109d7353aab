import numpy as np
import pytest

from polysym.coxeter import CoxeterDiagram
from polysym.mesh import Triangle, mesh_view, project, triangle_normal, triangles_from_mesh
from polysym.polytope import Polygon
from polysym.shape import build_shape
from polysym.vector import unit, vclose


def test_project():
    assert vclose(project([1, 2]), [1, 2, 0])
    assert vclose(project([1, 2, 3]), [1, 2, 3])
    assert vclose(project([1, 2, 3, 0], w_offset=4.0), [0.25, 0.5, 0.75])
    assert vclose(project([2, 2, 2, 1, 9], w_offset=1.0), [1, 1, 1])
    with pytest.raises(ValueError):
        project([1, 1, 1, -4], w_offset=4.0)


def test_triangle_normal():
    assert triangle_normal((0, 0, 0), (1, 0, 0), (0, 1, 0)) == (0.0, 0.0, 1.0)
    assert triangle_normal((0, 0, 0), (1, 0, 0), (2, 0, 0)) is None


def test_mesh_view_orients_outward():
    square = Polygon([np.array(v, dtype=float) for v in
                      ([0, 0, 1], [0, 1, 1], [1, 1, 1], [1, 0, 1])])
    tris = list(mesh_view([square]))
    assert len(tris) == 2
    for normal, v0, v1, v2 in tris:
        assert vclose(normal, [0, 0, 1])
        assert triangle_normal(v0, v1, v2) == normal


def test_cube_mesh():
    geometry = build_shape(CoxeterDiagram([4, 3]).group(), [unit(0)])
    tris = list(triangles_from_mesh(mesh_view(geometry.polygons)))
    assert len(tris) == 12
    for tri in tris:
        assert isinstance(tri, Triangle)
        assert np.dot(tri.normal, tri.v0) > 0
        assert abs(np.max(np.abs(tri.normal)) - 1.0) < 1e-9


def test_tesseract_mesh_is_projected():
    geometry = build_shape(CoxeterDiagram([4, 3, 3]).group(), [unit(0)])
    tris = list(mesh_view(geometry.polygons, w_offset=3.0))
    assert len(tris) == 48
    for _, v0, v1, v2 in tris:
        for v in (v0, v1, v2):
            assert len(v) == 3
            assert max(abs(c) for c in v) <= 0.5 + 1e-9
