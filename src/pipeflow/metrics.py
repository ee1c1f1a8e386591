"""Scalar diagnostics for the pipe-flow solver."""

import numpy as np


def continuity_residual(mdot: np.ndarray, Sm: np.ndarray, dz: float) -> float:
    """Largest absolute discrete mass imbalance over the interior nodes [kg/(m^3 s)]."""
    imbalance = (mdot[1:] - mdot[:-1]) / dz - Sm[1:-1]
    return float(np.max(np.abs(imbalance)))


def courant_number(u: np.ndarray, dt: float, dz: float) -> float:
    """Courant number based on the largest node speed."""
    return float(np.max(np.abs(u)) * dt / dz)


def reynolds_number(u: np.ndarray, T: np.ndarray, rho: np.ndarray, mu: np.ndarray,
                    length_scale: float) -> float:
    """Reynolds number from the largest node speed.

    Density and viscosity are taken at the node of maximum temperature.
    """
    j = int(np.argmax(T))
    return float(rho[j] * np.max(np.abs(u)) * length_scale / mu[j])


def discrete_linf_error(f_exact: np.ndarray, f_num: np.ndarray) -> float:
    """Compute discrete L-infinity (maximum) error."""
    return np.max(np.abs(f_num - f_exact))
