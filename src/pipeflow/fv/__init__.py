"""Finite volume solver package.

This package contains the collocated 1D finite volume solver implementation
with SIMPLEC/PISO algorithms for pressure-velocity coupling.
"""

from .solver import PISOSolver, CouplingState

__all__ = ["PISOSolver", "CouplingState"]
