"""Momentum predictor assembly for porous pipe flow.

Per unit volume, interior node i:

    rho/dt (u - u_basis) + conv(mdot, u) - d/dz(mu du/dz) + mu/K u + C_F rho/sqrt(K) |u| u
        = -dp/dz + Su

Convection is first-order upwind on the face mass fluxes, diffusion uses the
arithmetic face mean of viscosity, and the Darcy/Forchheimer drag uses the
node viscosity and density.
"""

import numpy as np
from numba import njit, prange

from ...datastructures import BoundaryKind


@njit(parallel=True, cache=True, fastmath=True, nogil=True)
def assemble_momentum_interior(u, u_basis, p, mdot, rho, mu, Su, dz, dt, K, cf):
    """
    Assemble the interior rows of the momentum tridiagonal system.

    Returns
    -------
    a, b, c, d : ndarray
        Sub-diagonal, diagonal, super-diagonal and right-hand side. Rows 0 and
        n - 1 are left at zero for the boundary conditions.
    """
    n = u.shape[0]
    a = np.zeros(n, dtype=np.float64)
    b = np.zeros(n, dtype=np.float64)
    c = np.zeros(n, dtype=np.float64)
    d = np.zeros(n, dtype=np.float64)

    inv_dz2 = 1.0 / (dz * dz)
    sqrt_K = np.sqrt(K)

    for i in prange(1, n - 1):
        F_w = mdot[i - 1]
        F_e = mdot[i]

        # Diffusive conductances
        D_w = 0.5 * (mu[i - 1] + mu[i]) * inv_dz2
        D_e = 0.5 * (mu[i] + mu[i + 1]) * inv_dz2

        # Upwind convective coefficients
        inflow_w = max(F_w, 0.0) / dz
        inflow_e = max(-F_e, 0.0) / dz
        outflow = (max(F_e, 0.0) + max(-F_w, 0.0)) / dz

        drag = mu[i] / K + cf * rho[i] / sqrt_K * abs(u[i])
        transient = rho[i] / dt

        a[i] = -(inflow_w + D_w)
        c[i] = -(inflow_e + D_e)
        b[i] = transient + outflow + D_w + D_e + drag
        d[i] = transient * u_basis[i] - (p[i + 1] - p[i - 1]) / (2.0 * dz) + Su[i]

    return a, b, c, d


def momentum_boundary_diagonal(u, rho, mu, dz, dt, K, cf):
    """Physical momentum diagonal at every node, without convection.

    Used for the Rhie-Chow weights at the two boundary nodes, whose matrix
    rows are replaced by boundary conditions.
    """
    return rho / dt + 2.0 * mu / (dz * dz) + mu / K + cf * rho / np.sqrt(K) * np.abs(u)


def apply_velocity_boundary_conditions(a, b, c, d, u_inlet, outlet_bc, u_outlet=0.0):
    """Overwrite the boundary rows: Dirichlet inlet, Dirichlet or zero-gradient outlet."""
    a[0] = 0.0
    b[0] = 1.0
    c[0] = 0.0
    d[0] = u_inlet

    c[-1] = 0.0
    b[-1] = 1.0
    if outlet_bc == BoundaryKind.ZERO_GRADIENT:
        a[-1] = -1.0
        d[-1] = 0.0
    else:
        a[-1] = 0.0
        d[-1] = u_outlet
    return a, b, c, d


def assemble_momentum_equation(
    u,
    u_basis,
    p,
    mdot,
    rho,
    mu,
    Su,
    dz,
    dt,
    K,
    cf,
    u_inlet,
    outlet_bc,
    u_outlet=0.0,
):
    """Assemble the full momentum system.

    Returns
    -------
    a, b, c, d : ndarray
        Tridiagonal system with boundary rows applied.
    a_p : ndarray
        Momentum diagonal at every node (interior rows before boundary
        overwrite, physical estimate at the two boundary nodes).
    """
    a, b, c, d = assemble_momentum_interior(u, u_basis, p, mdot, rho, mu, Su, dz, dt, K, cf)

    a_p = b.copy()
    boundary_diag = momentum_boundary_diagonal(u, rho, mu, dz, dt, K, cf)
    a_p[0] = boundary_diag[0]
    a_p[-1] = boundary_diag[-1]

    apply_velocity_boundary_conditions(a, b, c, d, u_inlet, outlet_bc, u_outlet)
    return a, b, c, d, a_p
