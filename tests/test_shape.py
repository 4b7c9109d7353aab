import logging

import numpy as np
import pytest

from polysym.config import ShapeConfig
from polysym.coxeter import CoxeterDiagram
from polysym.errors import ConfigurationError
from polysym.geometry_checks import check_arena, check_euler, polygon_planar
from polysym.group import IDENT, Group
from polysym.shape import Shape, ShapeElement, build_shape, generate, shape_geom
from polysym.vector import unit, vclose


@pytest.fixture(scope='module')
def b3():
    return CoxeterDiagram([4, 3]).group()


class TestShape:

    def test_facet_orbit(self, b3):
        shape = Shape.new(b3, [unit(0)])
        assert shape.ndim == 3
        facets = [shape.vector(e) for e in shape.facets()]
        assert len(facets) == 6
        for axis in range(3):
            for sign in (1, -1):
                assert shape.element_at_vector(2, sign * unit(axis, 3)) is not None
        assert shape.element_at_vector(2, [1, 1, 0]) is None
        assert list(shape.elements(0)) == []

    def test_short_facets_are_padded(self, b3):
        shape = Shape.new(b3, [[1, 1]])
        assert len(list(shape.facets())) == 12
        assert vclose(shape.vector(ShapeElement(2, 0)), [1, 1, 0])

    def test_apply_group_element(self, b3):
        shape = Shape.new(b3, [[3, 2, 1]])
        assert len(list(shape.facets())) == 48
        for facet in list(shape.facets())[:6]:
            assert shape.apply_group_element(facet, IDENT) == facet
            for e in b3.elements():
                moved = shape.apply_group_element(facet, e)
                expected = b3.matrix(e).transform(shape.vector(facet))
                assert vclose(shape.vector(moved), expected)

    def test_duplicate_facet(self, b3):
        with pytest.raises(ConfigurationError):
            Shape.new(b3, [unit(0), unit(1)])
        with pytest.raises(ConfigurationError):
            Shape.new(b3, [[0, 0, 0]])

    def test_ndim_must_hold_the_group(self, b3):
        with pytest.raises(ValueError):
            Shape.new(b3, [[1, 0]], ndim=2)
        with pytest.raises(ValueError):
            shape_geom(2, b3, [[1, 0]])
        # extra dimensions are fine
        shape = Shape.new(b3, [unit(0)], ndim=4)
        assert shape.ndim == 4
        assert len(list(shape.facets())) == 6

    def test_vector_is_a_copy(self, b3):
        shape = Shape.new(b3, [unit(0)])
        v = shape.vector(ShapeElement(2, 0))
        v[0] = 42.0
        assert vclose(shape.vector(ShapeElement(2, 0)), unit(0))


def _assert_good_polytope(geometry):
    assert check_arena(geometry.arena)
    assert check_euler(geometry.arena)
    for poly in geometry.polygons:
        assert polygon_planar(poly)


def test_cube(b3):
    geometry = build_shape(b3, [unit(0)], name='cube')
    assert geometry.counts() == [8, 12, 6, 1]
    assert len(geometry.poles) == 6
    assert len(geometry.polygons) == 6
    for poly in geometry.polygons:
        assert len(poly) == 4
        for v in poly.verts:
            assert vclose(np.abs(v), [1, 1, 1])
    _assert_good_polytope(geometry)


def test_octahedron(b3):
    geometry = build_shape(b3, [[1, 1, 1]])
    assert geometry.counts() == [6, 12, 8, 1]
    assert all(len(poly) == 3 for poly in geometry.polygons)
    for p in geometry.arena.points():
        assert abs(np.sum(np.abs(p)) - 3.0) < 1e-6
    _assert_good_polytope(geometry)


def test_truncated_cube_from_two_orbits(b3):
    geometry = build_shape(b3, [[1, 0, 0], [0.75, 0.75, 0.75]])
    assert geometry.counts() == [24, 36, 14, 1]
    _assert_good_polytope(geometry)


def test_shape_geom(b3):
    polygons = shape_geom(3, b3, [unit(0)])
    assert len(polygons) == 6


def test_tetrahedron_with_trivial_group():
    facets = [[1, 1, 1], [1, -1, -1], [-1, 1, -1], [-1, -1, 1]]
    geometry = build_shape(Group.trivial(3), facets)
    assert geometry.counts() == [4, 6, 4, 1]
    for p in geometry.arena.points():
        assert vclose(np.abs(p), [3, 3, 3])
    _assert_good_polytope(geometry)


def test_tesseract():
    symmetry = CoxeterDiagram([4, 3, 3]).group()
    geometry = build_shape(symmetry, [unit(0)])
    assert geometry.ndim == 4
    assert geometry.counts() == [16, 32, 24, 8, 1]
    assert len(geometry.polygons) == 24
    _assert_good_polytope(geometry)


def test_unbounded_shape_warns(caplog):
    with caplog.at_level(logging.WARNING, logger='polysym'):
        geometry = build_shape(Group.trivial(2), [[1, 0]])
    assert geometry.counts() == [4, 4, 1]
    assert 'still touches' in caplog.text


@pytest.mark.parametrize('edges, facet, mirror_basis, counts', [
    ([4, 3], [1, 0, 0], False, [8, 12, 6, 1]),
    ([4, 3], [1, 0, 0], True, [6, 12, 8, 1]),
    ([4, 3], [0, 0, 1], True, [8, 12, 6, 1]),
    ([5, 3], [0, 0, 1], False, [20, 30, 12, 1]),
    ([5, 3], [1, 0, 0], True, [12, 30, 20, 1]),
    ([3, 3], [1, 0, 0], True, [4, 6, 4, 1]),
])
def test_generate(edges, facet, mirror_basis, counts):
    config = ShapeConfig(edges=edges, base_facets=[facet], mirror_basis=mirror_basis)
    geometry = generate(config)
    assert geometry.counts() == counts
    _assert_good_polytope(geometry)


def test_generate_rejects_bad_config():
    with pytest.raises(ConfigurationError):
        generate(ShapeConfig(edges=[4, 1], base_facets=[[1, 0, 0]]))
    with pytest.raises(ConfigurationError):
        generate(ShapeConfig(edges=[5, 3], base_facets=[[1, 0, 0]], max_group_order=50))
