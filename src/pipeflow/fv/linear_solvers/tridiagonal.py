import numpy as np
from numba import njit


@njit(cache=True, fastmath=True, nogil=True)
def solve_tridiagonal(a, b, c, d):
    """
    Thomas algorithm for a tridiagonal system.

    Row i reads ``a[i] x[i-1] + b[i] x[i] + c[i] x[i+1] = d[i]``; ``a[0]`` and
    ``c[n-1]`` are ignored. There is no pivoting and no check on the pivots:
    a zero pivot produces inf/NaN in the result.
    """
    n = b.shape[0]
    c_star = np.zeros(n, dtype=np.float64)
    d_star = np.zeros(n, dtype=np.float64)
    x = np.zeros(n, dtype=np.float64)

    # ––– forward elimination –––––––––––––––––––––––––––––––––––––––––––––––
    c_star[0] = c[0] / b[0]
    d_star[0] = d[0] / b[0]
    for i in range(1, n):
        m = b[i] - a[i] * c_star[i - 1]
        c_star[i] = c[i] / m
        d_star[i] = (d[i] - a[i] * d_star[i - 1]) / m

    # ––– back substitution –––––––––––––––––––––––––––––––––––––––––––––––––
    x[n - 1] = d_star[n - 1]
    for i in range(n - 2, -1, -1):
        x[i] = d_star[i] - c_star[i] * x[i + 1]

    return x
