"""Scipy-based tridiagonal solver using LAPACK banded storage."""

import numpy as np
from scipy.linalg import solve_banded


def banded_solver(a, b, c, d):
    """Solve the tridiagonal system (a, b, c | d) with ``scipy.linalg.solve_banded``.

    Parameters
    ----------
    a : np.ndarray
        Sub-diagonal, ``a[i]`` multiplies ``x[i-1]`` (``a[0]`` ignored).
    b : np.ndarray
        Main diagonal.
    c : np.ndarray
        Super-diagonal, ``c[i]`` multiplies ``x[i+1]`` (``c[-1]`` ignored).
    d : np.ndarray
        Right-hand side vector.

    Returns
    -------
    x : np.ndarray
        Solution vector.
    """
    n = b.shape[0]
    ab = np.zeros((3, n), dtype=np.float64)
    ab[0, 1:] = c[:-1]
    ab[1, :] = b
    ab[2, :-1] = a[1:]
    return solve_banded((1, 1), ab, d, check_finite=False)
