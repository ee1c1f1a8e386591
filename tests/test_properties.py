"""Tests for material property models."""

import logging

import numpy as np
import pytest

from pipeflow.properties import ConstantProperties, SodiumProperties


@pytest.fixture
def sodium():
    return SodiumProperties()


class TestSodiumProperties:
    """Liquid sodium correlations."""

    def test_reference_values(self, sodium):
        """Values at 400 K and 1000 K are in the tabulated range for liquid sodium."""
        assert 900.0 < sodium.density(400.0) < 940.0
        assert 760.0 < sodium.density(1000.0) < 800.0
        assert 1.0e-4 < sodium.viscosity(1000.0) < 3.0e-4
        assert 80.0 < sodium.conductivity(400.0) < 90.0
        assert 1250.0 < sodium.specific_heat(1000.0) < 1300.0

    def test_density_decreases(self, sodium):
        T = np.linspace(400.0, 2400.0, 50)
        assert np.all(np.diff(sodium.density(T)) < 0.0)

    def test_viscosity_decreases(self, sodium):
        T = np.linspace(400.0, 2400.0, 50)
        assert np.all(np.diff(sodium.viscosity(T)) < 0.0)

    def test_viscosity_formula(self, sodium):
        T = 800.0
        expected = np.exp(-6.4406 - 0.3958 * np.log(T) + 556.835 / T)
        assert sodium.viscosity(T) == pytest.approx(expected, rel=1e-12)

    def test_array_evaluation(self, sodium):
        """Element-wise evaluation agrees with scalar evaluation."""
        T = np.array([400.0, 600.0, 900.0])
        state = sodium.evaluate(T)
        for i, Ti in enumerate(T):
            assert state.rho[i] == pytest.approx(sodium.density(Ti))
            assert state.mu[i] == pytest.approx(sodium.viscosity(Ti))
            assert state.k[i] == pytest.approx(sodium.conductivity(Ti))
            assert state.cp[i] == pytest.approx(sodium.specific_heat(Ti))

    def test_warning_below_solidification(self, sodium, caplog):
        """One warning per call below the melting point, and a finite value."""
        with caplog.at_level(logging.WARNING, logger="pipeflow.properties"):
            rho = sodium.density(300.0)
        assert np.isfinite(rho)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "solidification" in warnings[0].getMessage()

    def test_evaluate_warns_once(self, sodium, caplog):
        with caplog.at_level(logging.WARNING, logger="pipeflow.properties"):
            sodium.evaluate(np.array([300.0, 320.0, 500.0]))
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 1

    def test_no_warning_in_range(self, sodium, caplog):
        with caplog.at_level(logging.WARNING, logger="pipeflow.properties"):
            sodium.evaluate(np.array([400.0, 1000.0]))
        assert not caplog.records


class TestConstantProperties:
    def test_shapes_and_values(self):
        model = ConstantProperties(rho=2.0, mu=3.0, k=4.0, cp=5.0)
        T = np.linspace(100.0, 200.0, 7)
        state = model.evaluate(T)
        assert state.rho.shape == T.shape
        assert np.all(state.rho == 2.0)
        assert np.all(state.mu == 3.0)
        assert np.all(state.k == 4.0)
        assert np.all(state.cp == 5.0)
