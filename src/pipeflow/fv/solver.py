"""Finite volume solver for transient porous pipe flow.

This module implements a collocated 1D finite volume solver using the
SIMPLEC (one corrector) or PISO (several correctors) algorithm for
pressure-velocity coupling, followed by one implicit energy solve per
timestep.

Per timestep:
    properties(T) -> backup u, p, T -> [momentum -> (p' -> correct) x n_corr]
    until max |du| < tol or budget exhausted -> energy -> advance time
"""

import logging
from enum import Enum

import numpy as np

from ..base import TransientPipeSolver
from ..datastructures import BoundaryKind, PISOParameters, PISOSolverFields, TransientBasis
from ..meshing import MeshData1D
from ..metrics import continuity_residual, courant_number, reynolds_number
from ..sources import SourceZones

from .assembly.energy_eq_assembly import assemble_energy_equation
from .assembly.momentum_eq_assembly import assemble_momentum_equation, momentum_boundary_diagonal
from .assembly.pressure_correction_eq_assembly import assemble_pressure_correction_equation
from .assembly.rhie_chow import rhie_chow_velocity, upwind_face_flux
from .core.corrections import pressure_correction, velocity_correction
from .core.helpers import extrapolate_inlet, relax_momentum_equation, update_padded_pressure
from .linear_solvers import get_linear_solver

log = logging.getLogger(__name__)


class CouplingState(Enum):
    """State of the pressure-velocity coupling loop within one timestep."""

    PREDICTING = "predicting"
    CORRECTING = "correcting"
    CONVERGED = "converged"
    BUDGET_EXHAUSTED = "iteration_budget_exhausted"


class PISOSolver(TransientPipeSolver):
    """Segregated PISO/SIMPLEC solver for 1D flow through a porous pipe.

    Collocated grid with Rhie-Chow face velocities. Velocity is Dirichlet
    at the inlet, pressure is fixed at the outlet.

    Parameters
    ----------
    params : PISOParameters
        Geometry, physics, boundary values and coupling settings.
    material : MaterialPropertyModel
        Temperature -> (rho, mu, k, cp) model.
    """

    Parameters = PISOParameters

    def __init__(self, **kwargs):
        """Initialize PISO solver."""
        super().__init__(**kwargs)
        prm = self.params

        self.mesh = MeshData1D(length=float(prm.length), n_nodes=int(prm.n_nodes))
        self.sources = SourceZones.from_parameters(self.mesh, prm)
        self.linear_solver = get_linear_solver(prm.linear_solver)

        # Cache commonly used values
        self.n_nodes = self.mesh.n_nodes
        self.dz = float(self.mesh.dz)
        self.dt = float(prm.dt)
        self.K = float(prm.permeability)
        self.cf = float(prm.forchheimer)
        self.rc_coeff = float(prm.rhie_chow_coeff) if prm.rhie_chow else 0.0

        self.arrays = PISOSolverFields.allocate(self.n_nodes)
        self.coupling_state = CouplingState.PREDICTING
        self.corrector_pass = 0

        self._init_fields(self.mesh.z)
        self._initialize_state()

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _initialize_state(self):
        """Initial and boundary values, properties and starting momentum weights."""
        prm = self.params
        a = self.arrays

        a.u[:] = 0.0
        a.u[0] = prm.u_inlet
        if prm.velocity_outlet_bc == BoundaryKind.DIRICHLET:
            a.u[-1] = prm.u_outlet

        a.p[:] = prm.p_outlet
        update_padded_pressure(a.p, prm.p_outlet, out=a.p_pad)

        a.T[:] = prm.initial_temperature
        if prm.temperature_inlet_bc == BoundaryKind.DIRICHLET:
            a.T[0] = prm.T_inlet
        if prm.temperature_outlet_bc == BoundaryKind.DIRICHLET:
            a.T[-1] = prm.T_outlet

        self._update_material_properties()
        a.a_p[:] = momentum_boundary_diagonal(a.u, a.rho, a.mu, self.dz, self.dt, self.K, self.cf)
        a.d_u[:] = 1.0 / a.a_p
        self._update_face_fluxes()
        a.backup()

    def _update_material_properties(self):
        """Evaluate rho, mu, k, cp from the current temperature (frozen for the step)."""
        a = self.arrays
        state = self.material.evaluate(a.T)
        a.rho[:] = state.rho
        a.mu[:] = state.mu
        a.k[:] = state.k
        a.cp[:] = state.cp

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def _update_face_fluxes(self):
        """Refresh the padded pressure, Rhie-Chow face velocities and mass fluxes."""
        a = self.arrays
        update_padded_pressure(a.p, self.params.p_outlet, out=a.p_pad)
        a.u_face[:] = rhie_chow_velocity(a.u, a.p_pad, a.d_u, self.dz, self.rc_coeff)
        # Inlet face is a boundary face carrying the prescribed velocity
        a.u_face[0] = a.u[0]
        a.mdot[:] = upwind_face_flux(a.rho, a.u_face)

    def _solve_momentum_equation(self):
        """Momentum predictor: solve for u* with the pressure frozen.

        Overwrites u, the momentum diagonal a_p and the weights d_u = 1/a_p.
        """
        prm = self.params
        a = self.arrays

        u_basis = a.u_old if prm.transient_basis == TransientBasis.PREVIOUS else a.u
        A, B, C, D, a_p = assemble_momentum_equation(
            a.u,
            u_basis,
            a.p,
            a.mdot,
            a.rho,
            a.mu,
            self.sources.Su,
            self.dz,
            self.dt,
            self.K,
            self.cf,
            prm.u_inlet,
            prm.velocity_outlet_bc,
            prm.u_outlet,
        )

        # Apply under-relaxation
        B, D = relax_momentum_equation(D, B, a.u, prm.alpha_u_momentum)

        a.u[:] = self.linear_solver(A, B, C, D)
        a.a_p[:] = a_p
        a.d_u[:] = 1.0 / a_p

    def _solve_pressure_correction(self):
        """Pressure corrector: solve for p' from the current mass imbalance."""
        a = self.arrays
        A, B, C, D, imbalance = assemble_pressure_correction_equation(
            a.mdot, a.rho, a.d_u, self.sources.Sm, self.dz
        )
        a.imbalance[:] = imbalance
        a.p_prime[:] = self.linear_solver(A, B, C, D)
        extrapolate_inlet(a.p_prime)
        return a.p_prime

    def _correct_fields(self, p_prime):
        """Field update: apply p' to p and u. Returns max |du| over interior nodes."""
        prm = self.params
        a = self.arrays

        pressure_correction(a.p, p_prime, prm.alpha_p, a.p_pad, prm.p_outlet)
        max_du = velocity_correction(a.u, p_prime, a.d_u, self.dz, prm.alpha_u)

        if prm.velocity_outlet_bc == BoundaryKind.ZERO_GRADIENT:
            a.u[-1] = a.u[-2]

        return max_du

    def _solve_energy_equation(self):
        """Advance temperature once with the converged flow field."""
        prm = self.params
        a = self.arrays

        G = upwind_face_flux(a.rho * a.cp, a.u_face)
        # T is not touched during coupling, so the transient basis is always the
        # start-of-step temperature whatever transient_basis says
        A, B, C, D = assemble_energy_equation(
            a.T_old,
            G,
            a.rho,
            a.cp,
            a.k,
            self.sources.St,
            self.dz,
            self.dt,
            prm.temperature_inlet_bc,
            prm.T_inlet,
            prm.temperature_outlet_bc,
            prm.T_outlet,
        )
        a.T[:] = self.linear_solver(A, B, C, D)

    # ------------------------------------------------------------------
    # Coupling controller
    # ------------------------------------------------------------------

    def piso_iteration(self) -> float:
        """One inner iteration: a momentum solve followed by corrector_count corrections.

        Returns
        -------
        max_du : float
            Largest velocity change over all correction passes.
        """
        self.coupling_state = CouplingState.PREDICTING
        self._update_face_fluxes()
        self._solve_momentum_equation()

        self.coupling_state = CouplingState.CORRECTING
        max_du = 0.0
        for k in range(self.params.corrector_count):
            self.corrector_pass = k + 1
            self._update_face_fluxes()
            p_prime = self._solve_pressure_correction()
            max_du = max(max_du, self._correct_fields(p_prime))

        return max_du

    def couple(self) -> CouplingState:
        """Iterate until max |du| < tolerance or the inner-iteration budget is spent.

        With a positive continuity_tolerance the largest mass imbalance of the
        corrected face fluxes must also drop below it. Running out of
        iterations is not an error: the last state is kept.
        """
        prm = self.params
        a = self.arrays
        a.inner_iteration = 0
        a.max_du = float("inf")

        while a.inner_iteration < prm.max_inner_iterations:
            a.max_du = self.piso_iteration()
            a.inner_iteration += 1
            if a.max_du < prm.tolerance and self._continuity_satisfied():
                self.coupling_state = CouplingState.CONVERGED
                return self.coupling_state

        log.debug(
            f"Coupling stopped after {a.inner_iteration} iterations at t = {self.time:.6f}, "
            f"max |du| = {a.max_du:.3e}"
        )
        self.coupling_state = CouplingState.BUDGET_EXHAUSTED
        return self.coupling_state

    def _continuity_satisfied(self) -> bool:
        prm = self.params
        if prm.continuity_tolerance <= 0.0:
            return True
        self._update_face_fluxes()
        residual = continuity_residual(self.arrays.mdot, self.sources.Sm, self.dz)
        return residual < prm.continuity_tolerance

    # ------------------------------------------------------------------
    # Time stepping
    # ------------------------------------------------------------------

    def step(self):
        """Advance one timestep.

        Returns
        -------
        dict
            Courant and Reynolds numbers at the start of the step, inner
            iteration count, final max |du|, continuity residual and whether
            the coupling converged.
        """
        a = self.arrays

        self._update_material_properties()
        courant = courant_number(a.u, self.dt, self.dz)
        reynolds = reynolds_number(a.u, a.T, a.rho, a.mu, np.sqrt(self.K))

        a.backup()
        state = self.couple()

        self._update_face_fluxes()
        residual = continuity_residual(a.mdot, self.sources.Sm, self.dz)
        self._solve_energy_equation()

        self.time += self.dt

        return {
            "courant": courant,
            "reynolds": reynolds,
            "inner_iterations": a.inner_iteration,
            "max_du": a.max_du,
            "continuity_residual": residual,
            "converged": state == CouplingState.CONVERGED,
        }
