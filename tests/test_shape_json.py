import json

import pytest

from polysym.coxeter import CoxeterDiagram
from polysym.io.shape_json import SCHEMA_ID, polygons_from_json, shape_to_json, write_json
from polysym.shape import build_shape
from polysym.vector import unit, vclose


@pytest.fixture(scope='module')
def cube():
    return build_shape(CoxeterDiagram([4, 3]).group(), [unit(0)], name='cube')


def test_shape_to_json(cube):
    doc = shape_to_json(cube)
    assert doc['schema'] == SCHEMA_ID
    assert doc['name'] == 'cube'
    assert doc['ndim'] == 3
    assert doc['counts'] == [8, 12, 6, 1]
    assert len(doc['poles']) == 6
    assert len(doc['polygons']) == 6
    assert doc['generator']['name'] == 'polysym'
    # plain JSON types only
    json.dumps(doc)


def test_polygons_from_json(tmp_path, cube):
    path = tmp_path / 'nested' / 'cube.json'
    write_json(cube, path)
    doc = json.loads(path.read_text())
    polygons = polygons_from_json(doc)
    assert len(polygons) == 6
    for poly, original in zip(polygons, cube.polygons):
        assert poly.id == original.id
        assert all(vclose(a, b) for a, b in zip(poly.verts, original.verts))


def test_bad_schema():
    with pytest.raises(ValueError):
        polygons_from_json({'schema': 'something-else', 'polygons': []})
