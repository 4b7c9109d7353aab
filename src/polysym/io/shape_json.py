"""Shape JSON serialization/deserialization helpers.

A document holds the polygons of one generated shape, and the facet
poles they were cut from for diagnostic display::

    {
      "schema": "polysym-shape-json-v0.1",
      "name": "cube",
      "ndim": 3,
      "counts": [8, 12, 6, 1],
      "poles": [[1.0, 0.0, 0.0], ...],
      "polygons": [{"id": 40, "verts": [[1.0, 1.0, 1.0], ...]}, ...]
    }
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List

import numpy as np

from polysym import __version__
from polysym.polytope import Polygon
from polysym.shape import ShapeGeometry

SCHEMA_ID = "polysym-shape-json-v0.1"


def _float_vec(vec: Iterable[float]) -> List[float]:
    return [float(c) for c in vec]


def shape_to_json(geometry: ShapeGeometry) -> Dict[str, Any]:
    return {
        "schema": SCHEMA_ID,
        "generator": {"name": "polysym", "version": __version__},
        "name": geometry.name,
        "ndim": geometry.ndim,
        "radius": float(geometry.radius),
        "counts": [int(c) for c in geometry.counts()],
        "poles": [_float_vec(p) for p in geometry.poles],
        "polygons": [
            {"id": poly.id, "verts": [_float_vec(v) for v in poly.verts]}
            for poly in geometry.polygons
        ],
    }


def polygons_from_json(doc: Dict[str, Any]) -> List[Polygon]:
    schema = doc.get("schema")
    if schema != SCHEMA_ID:
        raise ValueError(f"unsupported shape schema: {schema!r}")
    polygons = []
    for entry in doc.get("polygons", []):
        verts = [np.asarray(v, dtype=float) for v in entry.get("verts", [])]
        polygons.append(Polygon(verts, entry.get("id")))
    return polygons


def write_json(geometry: ShapeGeometry, path: Path | str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as fp:
        json.dump(shape_to_json(geometry), fp, indent=2)
        fp.write("\n")


__all__ = ['SCHEMA_ID', 'polygons_from_json', 'shape_to_json', 'write_json']
