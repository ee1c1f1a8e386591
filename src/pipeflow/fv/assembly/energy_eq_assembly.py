"""Energy equation assembly (fully implicit, upwind convection).

Integrated over the control volume of node i:

    rho cp dz/dt (T - T_basis) + G_e T_e - G_w T_w - k_e (T_E - T_P)/dz + k_w (T_P - T_W)/dz = St dz

where G_f is the upwind heat capacity flux ``(rho cp)_up u_f``.
"""

import numpy as np
from numba import njit, prange

from ...datastructures import BoundaryKind


@njit(parallel=True, cache=True, fastmath=True, nogil=True)
def assemble_energy_interior(T_basis, G, rho, cp, k, St, dz, dt):
    """Assemble interior rows of the energy system; boundary rows stay zero."""
    n = T_basis.shape[0]
    a = np.zeros(n, dtype=np.float64)
    b = np.zeros(n, dtype=np.float64)
    c = np.zeros(n, dtype=np.float64)
    d = np.zeros(n, dtype=np.float64)

    for i in prange(1, n - 1):
        G_w = G[i - 1]
        G_e = G[i]

        k_w = 0.5 * (k[i - 1] + k[i]) / dz
        k_e = 0.5 * (k[i] + k[i + 1]) / dz

        transient = rho[i] * cp[i] * dz / dt

        a[i] = -(max(G_w, 0.0) + k_w)
        c[i] = -(max(-G_e, 0.0) + k_e)
        b[i] = transient + max(G_e, 0.0) + max(-G_w, 0.0) + k_w + k_e
        d[i] = transient * T_basis[i] + St[i] * dz

    return a, b, c, d


def apply_temperature_boundary_conditions(a, b, c, d, inlet_bc, T_inlet, outlet_bc, T_outlet):
    """Overwrite boundary rows with Dirichlet or zero-gradient conditions."""
    a[0] = 0.0
    b[0] = 1.0
    if inlet_bc == BoundaryKind.ZERO_GRADIENT:
        c[0] = -1.0
        d[0] = 0.0
    else:
        c[0] = 0.0
        d[0] = T_inlet

    c[-1] = 0.0
    b[-1] = 1.0
    if outlet_bc == BoundaryKind.ZERO_GRADIENT:
        a[-1] = -1.0
        d[-1] = 0.0
    else:
        a[-1] = 0.0
        d[-1] = T_outlet
    return a, b, c, d


def assemble_energy_equation(
    T_basis, G, rho, cp, k, St, dz, dt, inlet_bc, T_inlet, outlet_bc, T_outlet
):
    """Assemble the full energy system (interior rows + boundary rows)."""
    a, b, c, d = assemble_energy_interior(T_basis, G, rho, cp, k, St, dz, dt)
    return apply_temperature_boundary_conditions(
        a, b, c, d, inlet_bc, T_inlet, outlet_bc, T_outlet
    )
