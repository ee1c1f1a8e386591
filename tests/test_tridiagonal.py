"""Tests for the tridiagonal linear solvers."""

import numpy as np
import pytest

from pipeflow.fv.linear_solvers import banded_solver, get_linear_solver, solve_tridiagonal


def _random_dominant_system(n, seed=0):
    rng = np.random.default_rng(seed)
    a = rng.uniform(-1.0, 1.0, n)
    c = rng.uniform(-1.0, 1.0, n)
    b = np.abs(a) + np.abs(c) + rng.uniform(1.0, 2.0, n)
    d = rng.uniform(-5.0, 5.0, n)
    a[0] = 0.0
    c[-1] = 0.0
    return a, b, c, d


def _apply(a, b, c, x):
    y = b * x
    y[1:] += a[1:] * x[:-1]
    y[:-1] += c[:-1] * x[1:]
    return y


class TestThomas:
    """Thomas algorithm."""

    @pytest.mark.parametrize("n", [3, 10, 257])
    def test_residual(self, n):
        """Solution satisfies the system to round-off on diagonally dominant matrices."""
        a, b, c, d = _random_dominant_system(n, seed=n)
        x = solve_tridiagonal(a, b, c, d)
        assert np.max(np.abs(_apply(a, b, c, x) - d)) < 1e-10

    def test_identity(self):
        """Identity matrix returns the right-hand side."""
        n = 6
        d = np.arange(n, dtype=np.float64)
        x = solve_tridiagonal(np.zeros(n), np.ones(n), np.zeros(n), d)
        assert np.allclose(x, d)

    def test_ignores_corner_coefficients(self):
        """a[0] and c[-1] lie outside the matrix and do not affect the result."""
        a, b, c, d = _random_dominant_system(8)
        x_ref = solve_tridiagonal(a, b, c, d)
        a2, c2 = a.copy(), c.copy()
        a2[0] = 123.0
        c2[-1] = -77.0
        assert np.allclose(solve_tridiagonal(a2, b, c2, d), x_ref)

    def test_inputs_not_modified(self):
        a, b, c, d = _random_dominant_system(8)
        copies = [v.copy() for v in (a, b, c, d)]
        solve_tridiagonal(a, b, c, d)
        for original, copy in zip((a, b, c, d), copies):
            assert np.array_equal(original, copy)


class TestBanded:
    """scipy banded backend."""

    def test_matches_thomas(self):
        """Both backends agree on the same system."""
        a, b, c, d = _random_dominant_system(50, seed=3)
        assert np.allclose(banded_solver(a, b, c, d), solve_tridiagonal(a, b, c, d), atol=1e-12)

    def test_lookup(self):
        assert get_linear_solver("thomas") is solve_tridiagonal
        assert get_linear_solver("Banded") is banded_solver

    def test_unknown_solver(self):
        with pytest.raises(ValueError, match="Unknown linear solver"):
            get_linear_solver("gmres")
