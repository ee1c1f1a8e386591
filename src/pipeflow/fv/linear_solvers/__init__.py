"""Tridiagonal linear solvers for the segregated pipe-flow equations."""

from .tridiagonal import solve_tridiagonal
from .scipy_solver import banded_solver

LINEAR_SOLVERS = {
    "thomas": solve_tridiagonal,
    "banded": banded_solver,
}


def get_linear_solver(name: str):
    """Look up a tridiagonal solver by name ("thomas" or "banded")."""
    try:
        return LINEAR_SOLVERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown linear solver '{name}'. Options: {', '.join(LINEAR_SOLVERS)}"
        ) from None


__all__ = ["solve_tridiagonal", "banded_solver", "get_linear_solver", "LINEAR_SOLVERS"]
