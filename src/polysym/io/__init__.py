"""I/O utilities for polysym."""

from .shape_json import polygons_from_json, shape_to_json, write_json
from .stl import write_stl

__all__ = ['polygons_from_json', 'shape_to_json', 'write_json', 'write_stl']
