import numpy as np


def extrapolate_inlet(phi):
    """Set the inlet node value by linear extrapolation of the first two interior nodes, in place."""
    phi[0] = 2.0 * phi[1] - phi[2]
    return phi


def update_padded_pressure(p, p_outlet, out=None):
    """
    Copy pressure into the ghost-padded buffer (length n + 2).

    Left ghost is the linear extrapolation of the first two nodes, so a linear
    pressure profile stays linear across the inlet. Right ghost holds the fixed
    outlet pressure.
    """
    n = p.shape[0]
    if out is None:
        out = np.zeros(n + 2, dtype=np.float64)
    out[1:-1] = p
    out[0] = 2.0 * p[0] - p[1]
    out[-1] = p_outlet
    return out


def relax_momentum_equation(rhs, A_diag, phi, alpha):
    """
    Patankar-style under-relaxation of the interior rows of a tridiagonal system.

    Returns the relaxed diagonal and right-hand side as new arrays; the first
    and last rows (boundary conditions) are left untouched.
    """
    relaxed_diagonal = A_diag.copy()
    relaxed_rhs = rhs.copy()
    if alpha == 1.0:
        return relaxed_diagonal, relaxed_rhs

    scale = (1.0 - alpha) / alpha
    relaxed_diagonal[1:-1] = A_diag[1:-1] / alpha
    relaxed_rhs[1:-1] = rhs[1:-1] + scale * A_diag[1:-1] * phi[1:-1]
    return relaxed_diagonal, relaxed_rhs
