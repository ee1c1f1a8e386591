"""Pytest configuration and fixtures for pipe-flow solver tests."""

import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def constant_material():
    """Water-like constant properties."""
    from pipeflow.properties import ConstantProperties

    return ConstantProperties(rho=1000.0, mu=1.0e-3, k=0.6, cp=4180.0)


@pytest.fixture
def small_params():
    """Small 21-node pipe with moderate inflow, cheap enough for every test."""
    return {
        "length": 1.0,
        "n_nodes": 21,
        "permeability": 1.0e-4,
        "dt": 1.0e-2,
        "n_timesteps": 5,
        "initial_temperature": 400.0,
        "u_inlet": 0.01,
        "p_outlet": 0.0,
        "T_inlet": 450.0,
        "T_outlet": 400.0,
        "max_inner_iterations": 500,
        "tolerance": 1.0e-10,
        "alpha_p": 0.5,
        "log_interval": 1,
    }


@pytest.fixture
def zero_flow_params():
    """Five nodes, no inflow, uniform temperature."""
    return {
        "length": 1.0,
        "n_nodes": 5,
        "dt": 1.0e-2,
        "n_timesteps": 1,
        "initial_temperature": 400.0,
        "u_inlet": 0.0,
        "p_outlet": 0.0,
        "T_inlet": 400.0,
        "T_outlet": 400.0,
    }
