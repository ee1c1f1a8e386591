import numpy as np
from numba import njit, prange


@njit(parallel=True, cache=True, fastmath=True, nogil=True)
def assemble_pressure_correction_interior(mdot, rho, d_u, Sm, dz):
    """
    Assemble the interior rows of the pressure-correction equation.

    The face velocity correction is ``-D_f (p'_E - p'_P) / dz``; substituting
    it into the discrete continuity equation of node i gives

        c_i p'_{i+1} + a_i p'_{i-1} - (a_i + c_i) p'_i = (F_e - F_w)/dz - Sm_i

    with conductances ``rho_f D_f / dz^2`` built from the face-averaged
    density and the face-averaged reciprocal momentum diagonal.
    """
    n = rho.shape[0]
    a = np.zeros(n, dtype=np.float64)
    b = np.zeros(n, dtype=np.float64)
    c = np.zeros(n, dtype=np.float64)
    d = np.zeros(n, dtype=np.float64)
    imbalance = np.zeros(n, dtype=np.float64)

    inv_dz2 = 1.0 / (dz * dz)

    for i in prange(1, n - 1):
        rho_w = 0.5 * (rho[i - 1] + rho[i])
        rho_e = 0.5 * (rho[i] + rho[i + 1])
        D_w = 0.5 * (d_u[i - 1] + d_u[i])
        D_e = 0.5 * (d_u[i] + d_u[i + 1])

        imbalance[i] = (mdot[i] - mdot[i - 1]) / dz - Sm[i]

        a[i] = rho_w * D_w * inv_dz2
        c[i] = rho_e * D_e * inv_dz2
        b[i] = -(a[i] + c[i])
        d[i] = imbalance[i]

    return a, b, c, d, imbalance


def assemble_pressure_correction_equation(mdot, rho, d_u, Sm, dz):
    """Assemble the pressure-correction system with boundary rows.

    Inlet: the inlet face carries the prescribed velocity and does not respond
    to p', so node 1 has no west conductance. The inlet row is decoupled
    (p'_0 = 0); callers extrapolate p'_0 from p'_1 and p'_2 after the solve.
    Outlet: fixed pressure, p'_{n-1} = 0.

    Returns
    -------
    a, b, c, d : ndarray
        Tridiagonal system.
    imbalance : ndarray
        Node mass imbalance (zero at the boundary nodes).
    """
    a, b, c, d, imbalance = assemble_pressure_correction_interior(mdot, rho, d_u, Sm, dz)

    a[1] = 0.0
    b[1] = -c[1]

    b[0] = 1.0
    c[0] = 0.0
    d[0] = 0.0

    a[-1] = 0.0
    b[-1] = 1.0
    d[-1] = 0.0

    return a, b, c, d, imbalance
