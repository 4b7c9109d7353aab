import numpy as np

from polysym.geometry_checks import (
    CheckResult,
    check_arena,
    check_euler,
    euler_characteristic,
    is_closed_loop,
    polygon_planar,
)
from polysym.polytope import Polygon, PolytopeArena


def _polygon(*pts):
    return Polygon([np.array(p, dtype=float) for p in pts])


def test_is_closed_loop():
    assert is_closed_loop(_polygon([0, 0], [1, 0], [1, 1]))
    assert not is_closed_loop(_polygon([0, 0], [1, 0]))
    # repeated first vertex
    assert not is_closed_loop(_polygon([0, 0], [1, 0], [1, 1], [0, 0]))


def test_polygon_planar():
    assert polygon_planar(_polygon([0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1]))
    assert polygon_planar(_polygon([0, 0, 0, 2], [1, 0, 0, 2], [1, 1, 0, 2], [0, 1, 0, 2]))
    assert not polygon_planar(_polygon([0, 0, 0], [1, 0, 0], [1, 1, 0], [0, 1, 1]))


def test_check_arena():
    cube = PolytopeArena.new_cube(3, 1.0)
    result = check_arena(cube)
    assert isinstance(result, CheckResult)
    assert result.ok
    assert result.warnings == []

    arena = PolytopeArena(1)
    a = arena.push_point([0])
    b = arena.push_point([1])
    edge = arena.push_polytope([a, b])
    arena.root = edge
    # break the link from b back to the edge
    arena._node(b).parents.clear()
    result = check_arena(arena)
    assert not result
    assert any('does not list parent' in w for w in result.warnings)


def test_euler():
    assert euler_characteristic([8, 12, 6, 1]) == 2
    assert euler_characteristic([16, 32, 24, 8, 1]) == 0
    for ndim in range(5):
        assert check_euler(PolytopeArena.new_cube(ndim, 1.0))

    arena = PolytopeArena(2)
    pts = [arena.push_point(p) for p in ([0, 0], [1, 0], [1, 1])]
    edges = [arena.push_polytope([pts[0], pts[1]]), arena.push_polytope([pts[1], pts[2]])]
    arena.root = arena.push_polytope(edges)
    result = check_euler(arena)
    assert not result
    assert 'euler characteristic 1' in result.warnings[0]


def test_check_euler_empty():
    result = check_euler(PolytopeArena(3))
    assert result.ok
    assert result.warnings == ['empty polytope']
