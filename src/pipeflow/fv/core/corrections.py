"""Pressure and velocity corrections (SIMPLE-family field update)."""

import numpy as np

from .helpers import update_padded_pressure


def pressure_correction(p, p_prime, alpha_p, p_pad, p_outlet):
    """Add the relaxed pressure correction to p and refresh the padded buffer in place."""
    p += alpha_p * p_prime
    update_padded_pressure(p, p_outlet, out=p_pad)
    return p


def velocity_correction(u, p_prime, d_u, dz, alpha_u):
    """
    Correct interior velocities with the central gradient of p'.

    ``u_i -= alpha_u * d_u[i] * (p'_{i+1} - p'_{i-1}) / (2 dz)``

    Returns
    -------
    max_du : float
        Largest absolute velocity change over the interior nodes.
    """
    du = -alpha_u * d_u[1:-1] * (p_prime[2:] - p_prime[:-2]) / (2.0 * dz)
    u[1:-1] += du
    return float(np.max(np.abs(du)))
