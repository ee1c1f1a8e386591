"""Tests for the pressure and velocity field update."""

import numpy as np
import pytest

from pipeflow.fv.core.corrections import pressure_correction, velocity_correction
from pipeflow.fv.core.helpers import extrapolate_inlet, relax_momentum_equation, update_padded_pressure


class TestPressureCorrection:
    def test_relaxed_update_refreshes_ghosts(self):
        p = np.array([5.0, 4.0, 3.0, 2.0, 0.0])
        p_prime = np.array([1.0, 1.0, 0.5, 0.25, 0.0])
        p_pad = update_padded_pressure(p, 0.0)

        pressure_correction(p, p_prime, 0.5, p_pad, 0.0)

        assert np.allclose(p, [5.5, 4.5, 3.25, 2.125, 0.0])
        assert p_pad[0] == 2.0 * p[0] - p[1]
        assert np.array_equal(p_pad[1:-1], p)
        assert p_pad[-1] == 0.0


class TestVelocityCorrection:
    def test_linear_correction(self):
        """A linear p' shifts every interior velocity by the same amount."""
        dz = 0.1
        u = np.full(6, 2.0)
        p_prime = 3.0 * dz * np.arange(6)
        d_u = np.full(6, 0.01)

        max_du = velocity_correction(u, p_prime, d_u, dz, 0.8)

        assert max_du == pytest.approx(0.8 * 0.01 * 3.0)
        assert np.allclose(u[1:-1], 2.0 - 0.024)
        assert u[0] == 2.0 and u[-1] == 2.0

    def test_zero_correction(self):
        u = np.linspace(0.0, 1.0, 5)
        u_ref = u.copy()
        assert velocity_correction(u, np.zeros(5), np.ones(5), 0.25, 1.0) == 0.0
        assert np.array_equal(u, u_ref)


class TestMomentumRelaxation:
    def test_no_relaxation_is_copy(self):
        diag = np.array([1.0, 4.0, 4.0, 1.0])
        rhs = np.array([0.1, 2.0, 2.0, 0.0])
        new_diag, new_rhs = relax_momentum_equation(rhs, diag, np.ones(4), 1.0)
        assert np.array_equal(new_diag, diag) and new_diag is not diag
        assert np.array_equal(new_rhs, rhs)

    def test_relaxation_keeps_boundary_rows(self):
        diag = np.array([1.0, 4.0, 4.0, 1.0])
        rhs = np.array([0.1, 2.0, 2.0, 0.0])
        phi = np.array([0.1, 0.3, 0.4, 0.4])
        new_diag, new_rhs = relax_momentum_equation(rhs, diag, phi, 0.5)

        assert new_diag[0] == 1.0 and new_diag[-1] == 1.0
        assert new_rhs[0] == 0.1 and new_rhs[-1] == 0.0
        assert np.allclose(new_diag[1:-1], 8.0)
        assert np.allclose(new_rhs[1:-1], 2.0 + 4.0 * phi[1:-1])


class TestInletExtrapolation:
    def test_linear_extrapolation(self):
        phi = np.array([0.0, 3.0, 5.0, 6.0])
        extrapolate_inlet(phi)
        assert phi[0] == 1.0
        assert np.array_equal(phi[1:], [3.0, 5.0, 6.0])
