"""Shape configuration files.

A configuration names a Coxeter diagram and the seed facets of one
shape, e.g. ``cube.yaml``::

    name: cube
    edges: [4, 3]
    base_facets:
      - [1, 0, 0]

JSON is accepted too, for files with a ``.json`` suffix.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from polysym.errors import ConfigurationError
from polysym.group import DEFAULT_MAX_ORDER
from polysym.vector import isgoodnum


@dataclass
class ShapeConfig:
    """Inputs of the shape pipeline."""

    edges: List[int]
    base_facets: List[List[float]]
    name: str = "polysym"
    # base facets given as dot products with each mirror
    mirror_basis: bool = False
    max_group_order: int = DEFAULT_MAX_ORDER
    radius_factor: float = 2.0
    extra: Dict[str, Any] = field(default_factory=dict)

    _KEYS = ('edges', 'base_facets', 'name', 'mirror_basis', 'max_group_order', 'radius_factor')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ShapeConfig":
        if not isinstance(data, dict):
            raise ConfigurationError('configuration must be a mapping')
        for key in ('edges', 'base_facets'):
            if key not in data:
                raise ConfigurationError('missing required key', field=key)
        kwargs = {key: data[key] for key in cls._KEYS if key in data}
        extra = {key: value for key, value in data.items() if key not in cls._KEYS}
        config = cls(extra=extra, **kwargs)
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'name': self.name,
            'edges': list(self.edges),
            'base_facets': [list(f) for f in self.base_facets],
            'mirror_basis': self.mirror_basis,
            'max_group_order': self.max_group_order,
            'radius_factor': self.radius_factor,
        }
        data.update(self.extra)
        return data

    @classmethod
    def load(cls, path: Path | str) -> "ShapeConfig":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"configuration not found: {path}")
        with path.open("r", encoding="utf-8") as fp:
            if path.suffix == ".json":
                data = json.load(fp)
            else:
                import yaml
                data = yaml.safe_load(fp) or {}
        return cls.from_dict(data)

    def save(self, path: Path | str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            if path.suffix == ".json":
                json.dump(self.to_dict(), fp, indent=2)
                fp.write("\n")
            else:
                import yaml
                yaml.safe_dump(self.to_dict(), fp, sort_keys=False)

    def validate(self) -> None:
        if not isinstance(self.edges, (list, tuple)):
            raise ConfigurationError('must be a list of integers', field='edges')
        for i, edge in enumerate(self.edges):
            if isinstance(edge, bool) or not isinstance(edge, int):
                raise ConfigurationError(f'label {edge!r} at position {i} is not an integer',
                                         field='edges')
            if edge <= 1:
                raise ConfigurationError(f'label {edge} at position {i} must be greater than 1',
                                         field='edges')
        if not self.base_facets:
            raise ConfigurationError('at least one facet is required', field='base_facets')
        for i, facet in enumerate(self.base_facets):
            if not isinstance(facet, (list, tuple)) or not facet:
                raise ConfigurationError(f'facet {i} must be a non-empty list of numbers',
                                         field='base_facets')
            if not all(isgoodnum(x) for x in facet):
                raise ConfigurationError(f'facet {i} has non-numeric entries: {facet}',
                                         field='base_facets')
        if not isinstance(self.max_group_order, int) or self.max_group_order < 1:
            raise ConfigurationError('must be a positive integer', field='max_group_order')
        if not isgoodnum(self.radius_factor) or self.radius_factor <= 0:
            raise ConfigurationError('must be a positive number', field='radius_factor')


__all__ = ['ShapeConfig']
