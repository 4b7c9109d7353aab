import numpy as np

from polysym.triangulator import plane_coordinates, triangulate_polygon


def _area(verts, tris):
    total = 0.0
    for i, j, k in tris:
        a, b, c = (np.asarray(verts[n], dtype=float) for n in (i, j, k))
        u, v = b - a, c - a
        # area of a triangle in any dimension
        total += 0.5 * np.sqrt(max(np.dot(u, u) * np.dot(v, v) - np.dot(u, v) ** 2, 0.0))
    return total


def test_square_in_space():
    square = [[0, 0, 1], [1, 0, 1], [1, 1, 1], [0, 1, 1]]
    tris = triangulate_polygon(square)
    assert len(tris) == 2
    assert abs(_area(square, tris) - 1.0) < 1e-6


def test_tilted_hexagon_in_4d():
    angles = np.linspace(0, 2 * np.pi, 7)[:-1]
    hexagon = [[np.cos(t), np.sin(t) / 2, np.sin(t) / 2, 3.0] for t in angles]
    tris = triangulate_polygon(hexagon)
    assert len(tris) == 4
    for tri in tris:
        assert all(0 <= i < 6 for i in tri)


def test_degenerate_loops():
    assert triangulate_polygon([]) == []
    assert triangulate_polygon([[0, 0, 0], [1, 0, 0]]) == []
    assert triangulate_polygon([[0, 0, 0], [1, 0, 0], [2, 0, 0]]) == []
    assert plane_coordinates([[0, 0], [1, 1], [2, 2]]) is None


def test_plane_coordinates_preserve_distances():
    verts = [[1, 0, 0], [0, 1, 0], [0, 0, 1]]
    coords = plane_coordinates(verts)
    assert coords.shape == (3, 2)
    for i in range(3):
        for j in range(3):
            d3 = np.linalg.norm(np.subtract(verts[i], verts[j]))
            d2 = np.linalg.norm(coords[i] - coords[j])
            assert abs(d3 - d2) < 1e-9
