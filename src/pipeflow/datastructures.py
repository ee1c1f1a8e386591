"""Data structures for solver configuration and results.

Structure:
- Parameters: Input configuration (logged to MLflow at start)
- Metrics: Output results (logged to MLflow at end)
- Fields: Final node snapshot of u, p, T
- TimeSeries: Per-timestep diagnostics
- PISOSolverFields: Internal solver state, mutated in place every timestep
"""

from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import List

import numpy as np
import pandas as pd


class BoundaryKind(str, Enum):
    """Boundary condition type of a field at one end of the pipe."""

    DIRICHLET = "dirichlet"
    ZERO_GRADIENT = "zero_gradient"


class TransientBasis(str, Enum):
    """Which field the implicit transient term is evaluated against.

    PREVIOUS uses the backup taken at the start of the timestep (backward
    Euler). CURRENT uses the latest iterate.
    """

    PREVIOUS = "previous"
    CURRENT = "current"


def _coerce_enum(enum_cls, value, name):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        options = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Invalid {name} '{value}'. Options: {options}") from None


# ========================================================
# Parameters (Input Configuration)
# ========================================================


@dataclass
class Parameters:
    """Base solver parameters - geometry, physics, time and boundary values."""

    # Geometry
    length: float = 0.01
    n_nodes: int = 500

    # Porous medium
    permeability: float = 1e-6  # K [m^2]
    forchheimer: float = 0.0  # C_F [-]

    # Time stepping
    dt: float = 1e-4
    n_timesteps: int = 5000

    # Initial and boundary values
    initial_temperature: float = 400.0
    u_inlet: float = 0.01
    u_outlet: float = 0.0  # only used with a Dirichlet velocity outlet
    p_outlet: float = 0.0
    T_inlet: float = 1000.0
    T_outlet: float = 500.0
    velocity_outlet_bc: BoundaryKind = BoundaryKind.ZERO_GRADIENT
    temperature_inlet_bc: BoundaryKind = BoundaryKind.DIRICHLET
    temperature_outlet_bc: BoundaryKind = BoundaryKind.DIRICHLET

    # Source zones: lists of [start_fraction, end_fraction, value]
    mass_sources: List = field(default_factory=list)
    momentum_sources: List = field(default_factory=list)
    energy_sources: List = field(default_factory=list)

    # Alternating source/sink zones: increasing length fractions, +magnitude first
    mass_source_breakpoints: List = field(default_factory=list)
    mass_source_magnitude: float = 0.0
    momentum_source_breakpoints: List = field(default_factory=list)
    momentum_source_magnitude: float = 0.0
    energy_source_breakpoints: List = field(default_factory=list)
    energy_source_magnitude: float = 0.0

    log_interval: int = 100
    method: str = ""

    def __post_init__(self):
        self.velocity_outlet_bc = _coerce_enum(BoundaryKind, self.velocity_outlet_bc, "velocity_outlet_bc")
        self.temperature_inlet_bc = _coerce_enum(BoundaryKind, self.temperature_inlet_bc, "temperature_inlet_bc")
        self.temperature_outlet_bc = _coerce_enum(BoundaryKind, self.temperature_outlet_bc, "temperature_outlet_bc")
        if self.dt <= 0.0:
            raise ValueError(f"Timestep must be positive, got {self.dt}")
        if self.n_timesteps < 1:
            raise ValueError(f"n_timesteps must be >= 1, got {self.n_timesteps}")
        if self.permeability <= 0.0:
            raise ValueError(f"Permeability must be positive, got {self.permeability}")

    def to_dataframe(self):
        return pd.DataFrame([self.to_mlflow()])

    def to_mlflow(self) -> dict:
        """Flat dict of loggable values (enums as strings, zone lists as text)."""
        flat = {}
        for key, value in asdict(self).items():
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, (list, tuple)):
                value = str([list(v) if isinstance(v, (list, tuple)) else v for v in value])
            flat[key] = value
        return flat


@dataclass
class PISOParameters(Parameters):
    """Parameters for the segregated PISO/SIMPLEC solver."""

    max_inner_iterations: int = 1000
    tolerance: float = 1e-8  # on max |du| per inner iteration
    continuity_tolerance: float = 0.0  # on max |mass imbalance|, 0 disables the check
    corrector_count: int = 1  # 1 -> SIMPLEC, >1 -> PISO
    alpha_p: float = 0.5  # pressure-correction relaxation
    alpha_u: float = 1.0  # velocity-correction relaxation
    alpha_u_momentum: float = 1.0  # Patankar relaxation of the momentum equation
    rhie_chow: bool = True
    rhie_chow_coeff: float = 1.0
    transient_basis: TransientBasis = TransientBasis.PREVIOUS
    linear_solver: str = "thomas"
    method: str = "FV-PISO"

    def __post_init__(self):
        super().__post_init__()
        self.transient_basis = _coerce_enum(TransientBasis, self.transient_basis, "transient_basis")
        if self.continuity_tolerance < 0.0:
            raise ValueError(f"continuity_tolerance must be >= 0, got {self.continuity_tolerance}")
        if self.corrector_count < 1:
            raise ValueError(f"corrector_count must be >= 1, got {self.corrector_count}")
        for name in ("alpha_p", "alpha_u", "alpha_u_momentum"):
            alpha = getattr(self, name)
            if not 0.0 < alpha <= 1.0:
                raise ValueError(f"{name} must be in (0, 1], got {alpha}")


# ========================================================
# Metrics (Output Results)
# ========================================================


@dataclass
class Metrics:
    """Solver metrics - output results computed during/after solving."""

    timesteps: int = 0
    total_inner_iterations: int = 0
    nonconverged_steps: int = 0
    converged: bool = False  # final timestep reached tolerance
    final_max_du: float = float("inf")
    continuity_residual: float = float("inf")
    max_courant: float = 0.0
    max_reynolds: float = 0.0
    wall_time_seconds: float = 0.0

    def to_dataframe(self):
        return pd.DataFrame([asdict(self)])

    def to_mlflow(self) -> dict:
        return {k: float(v) for k, v in asdict(self).items()}


# ========================================================
# Fields (Final Snapshot)
# ========================================================


@dataclass
class Fields:
    """Final node values of u, p, T at coordinates z."""

    u: np.ndarray
    p: np.ndarray
    T: np.ndarray
    z: np.ndarray

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per node."""
        return pd.DataFrame(asdict(self))


# ========================================================
# Time Series (Per-timestep Diagnostics)
# ========================================================


@dataclass
class TimeSeries:
    """Diagnostics history (one value per timestep)."""

    time: List[float] = field(default_factory=list)
    courant: List[float] = field(default_factory=list)
    reynolds: List[float] = field(default_factory=list)
    inner_iterations: List[int] = field(default_factory=list)
    max_du: List[float] = field(default_factory=list)
    continuity_residual: List[float] = field(default_factory=list)

    def append(self, **values):
        for key, value in values.items():
            getattr(self, key).append(value)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to DataFrame with one row per timestep."""
        return pd.DataFrame(asdict(self))


# =============================================================
# Solver State
# ============================================================


@dataclass
class PISOSolverFields:
    """Internal solver arrays - current state, timestep backups and work buffers."""

    # Current solution state
    u: np.ndarray
    p: np.ndarray
    T: np.ndarray

    # Pressure with one ghost value at each end (length n + 2)
    p_pad: np.ndarray

    # Previous timestep backups
    u_old: np.ndarray
    T_old: np.ndarray

    # Momentum diagonal and its reciprocal (Rhie-Chow / correction weights)
    a_p: np.ndarray
    d_u: np.ndarray

    # Face buffers (n - 1 faces)
    u_face: np.ndarray
    mdot: np.ndarray

    # Pressure correction and mass imbalance
    p_prime: np.ndarray
    imbalance: np.ndarray

    # Material properties, frozen for the current timestep
    rho: np.ndarray
    mu: np.ndarray
    k: np.ndarray
    cp: np.ndarray

    # Convergence counters
    inner_iteration: int = 0
    max_du: float = float("inf")

    @classmethod
    def allocate(cls, n_nodes: int):
        """Allocate all arrays with proper sizes."""
        n_faces = n_nodes - 1
        return cls(
            u=np.zeros(n_nodes),
            p=np.zeros(n_nodes),
            T=np.zeros(n_nodes),
            p_pad=np.zeros(n_nodes + 2),
            u_old=np.zeros(n_nodes),
            T_old=np.zeros(n_nodes),
            a_p=np.ones(n_nodes),
            d_u=np.ones(n_nodes),
            u_face=np.zeros(n_faces),
            mdot=np.zeros(n_faces),
            p_prime=np.zeros(n_nodes),
            imbalance=np.zeros(n_nodes),
            rho=np.zeros(n_nodes),
            mu=np.zeros(n_nodes),
            k=np.zeros(n_nodes),
            cp=np.zeros(n_nodes),
        )

    def backup(self):
        """Copy the current u and T into the previous-timestep buffers."""
        self.u_old[:] = self.u
        self.T_old[:] = self.T
