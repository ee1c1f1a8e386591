"""Transient porous pipe-flow solver framework.

Segregated pressure-velocity-temperature solver on a collocated 1D finite
volume mesh with Rhie-Chow face interpolation.

Solver Hierarchy:
-----------------
TransientPipeSolver (abstract base - time loop, metrics, persistence)
└── PISOSolver (SIMPLEC / PISO coupling + implicit energy equation)
"""

from .datastructures import (
    BoundaryKind,
    TransientBasis,
    Parameters,
    PISOParameters,
    Metrics,
    Fields,
    TimeSeries,
    PISOSolverFields,
)
from .properties import (
    MaterialPropertyModel,
    MaterialState,
    SodiumCoefficients,
    SodiumProperties,
    ConstantProperties,
)
from .meshing import MeshData1D
from .sources import SourceZones, alternating_zones
from .base import TransientPipeSolver
from .fv.solver import PISOSolver, CouplingState

__all__ = [
    # Base solver
    "TransientPipeSolver",
    # Configuration
    "BoundaryKind",
    "TransientBasis",
    "Parameters",
    "PISOParameters",
    # Data structures
    "Metrics",
    "Fields",
    "TimeSeries",
    "PISOSolverFields",
    "MeshData1D",
    "SourceZones",
    "alternating_zones",
    # Material properties
    "MaterialPropertyModel",
    "MaterialState",
    "SodiumCoefficients",
    "SodiumProperties",
    "ConstantProperties",
    # Concrete solver
    "PISOSolver",
    "CouplingState",
]
