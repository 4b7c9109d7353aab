# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("polysym")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from polysym.config import ShapeConfig
from polysym.coxeter import CoxeterDiagram
from polysym.errors import ConfigurationError, InvariantError, PolytopeError
from polysym.group import Group
from polysym.polytope import Polygon, PolytopeArena
from polysym.shape import Shape, ShapeGeometry, build_shape, generate, shape_geom

__all__ = [
    '__version__',
    'ConfigurationError',
    'CoxeterDiagram',
    'Group',
    'InvariantError',
    'Polygon',
    'PolytopeArena',
    'PolytopeError',
    'Shape',
    'ShapeConfig',
    'ShapeGeometry',
    'build_shape',
    'generate',
    'shape_geom',
]
