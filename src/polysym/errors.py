"""
Exceptions raised by polysym.

Two kinds of failure are distinguished:

- ``ConfigurationError``: the caller supplied something we reject
  (bad Coxeter labels, duplicate facets, an infinite generator set).
  These derive from ``ValueError`` and are reported, not crashed on.
- ``InvariantError``: an internal consistency check failed (orphaned
  arena nodes, a face whose edges are not a single cycle, an inverse
  that resolves to the identity).  These derive from ``RuntimeError``
  and indicate a defect; there is no partial result to recover.
"""

from typing import Optional


class PolytopeError(Exception):
    """Base exception for polysym errors."""
    pass


class ConfigurationError(PolytopeError, ValueError):
    """Rejected user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        if self.field:
            return f"{self.field}: {message}"
        return message


class CoxeterDiagramError(ConfigurationError):
    """A Coxeter diagram that does not describe a finite reflection group."""
    pass


class GroupOrderError(ConfigurationError):
    """Group closure exceeded the configured maximum order."""
    pass


class InvariantError(PolytopeError, RuntimeError):
    """Internal consistency failure."""
    pass


__all__ = [
    'PolytopeError',
    'ConfigurationError',
    'CoxeterDiagramError',
    'GroupOrderError',
    'InvariantError',
]
