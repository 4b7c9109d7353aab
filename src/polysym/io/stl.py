"""STL export of generated shapes."""

from __future__ import annotations

import struct
from contextlib import contextmanager
from typing import List, Sequence, Union

from polysym.mesh import DEFAULT_W_OFFSET, Triangle, mesh_view, triangles_from_mesh
from polysym.polytope import Polygon
from polysym.shape import ShapeGeometry

_HEADER_SIZE = 80
_STRUCT_TRIANGLE = struct.Struct('<12fH')


def write_stl(obj: Union[ShapeGeometry, Sequence[Polygon]], path_or_file, *,
              binary: bool = True, name: str = 'polysym',
              w_offset: float = DEFAULT_W_OFFSET) -> int:
    """Write the polygons of ``obj`` to STL and return the triangle count.

    ``obj`` is a ``ShapeGeometry`` or a list of polygons; shapes of more
    than three dimensions are projected first (see ``mesh.project``).
    ``path_or_file`` can be a filesystem path or an open binary/text
    stream, which is left open.
    """

    polygons = obj.polygons if isinstance(obj, ShapeGeometry) else obj
    triangles = list(triangles_from_mesh(mesh_view(polygons, w_offset)))

    if binary:
        with _stream(path_or_file, 'wb') as stream:
            stream.write(_binary_stl(triangles, name))
    else:
        with _stream(path_or_file, 'w') as stream:
            stream.write(_ascii_stl(triangles, name))
    return len(triangles)


@contextmanager
def _stream(path_or_file, mode: str):
    if hasattr(path_or_file, 'write'):
        yield path_or_file
        return
    encoding = None if 'b' in mode else 'ascii'
    with open(path_or_file, mode, encoding=encoding) as stream:
        yield stream


def _binary_stl(triangles: List[Triangle], name: str) -> bytes:
    header = name[:_HEADER_SIZE].encode('ascii', errors='replace')
    chunks = [header.ljust(_HEADER_SIZE, b' '), struct.pack('<I', len(triangles))]
    for tri in triangles:
        chunks.append(_STRUCT_TRIANGLE.pack(*tri.normal, *tri.v0, *tri.v1, *tri.v2, 0))
    return b''.join(chunks)


def _ascii_stl(triangles: List[Triangle], name: str) -> str:
    lines = [f"solid {name}"]
    for tri in triangles:
        nx, ny, nz = tri.normal
        lines.append(f"  facet normal {nx:.6e} {ny:.6e} {nz:.6e}")
        lines.append("    outer loop")
        for x, y, z in (tri.v0, tri.v1, tri.v2):
            lines.append(f"      vertex {x:.6e} {y:.6e} {z:.6e}")
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return '\n'.join(lines) + '\n'


__all__ = ['write_stl']
