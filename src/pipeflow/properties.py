"""Temperature-dependent material properties.

Every model maps temperature [K] to density [kg/m^3], dynamic viscosity
[Pa s], thermal conductivity [W/(m K)] and specific heat [J/(kg K)].
Models are pure: no state is kept between calls, and arrays are evaluated
element-wise.

Liquid sodium correlations (valid 371 K < T < 2500 K):
- density: critical-temperature scaled power law
- conductivity: cubic polynomial in T
- specific heat: quadratic polynomial in (T - 273.15)
- viscosity: Shpil'rain et al. (1985), exp(A + B ln T + C / T)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaterialState:
    """Material properties at one temperature (scalars) or per node (arrays)."""

    rho: np.ndarray
    mu: np.ndarray
    k: np.ndarray
    cp: np.ndarray


class MaterialPropertyModel(ABC):
    """Abstract temperature -> properties model.

    Subclasses implement the four ``_density``-style correlations.
    The public methods wrap them with :meth:`_check_range`, which subclasses
    may use to emit diagnostics.
    """

    @abstractmethod
    def _density(self, T):
        pass

    @abstractmethod
    def _viscosity(self, T):
        pass

    @abstractmethod
    def _conductivity(self, T):
        pass

    @abstractmethod
    def _specific_heat(self, T):
        pass

    def _check_range(self, T, quantity: str):
        """Hook for range diagnostics. Default: no check."""

    def density(self, T):
        self._check_range(T, "density")
        return self._density(T)

    def viscosity(self, T):
        self._check_range(T, "viscosity")
        return self._viscosity(T)

    def conductivity(self, T):
        self._check_range(T, "conductivity")
        return self._conductivity(T)

    def specific_heat(self, T):
        self._check_range(T, "specific heat")
        return self._specific_heat(T)

    def evaluate(self, T) -> MaterialState:
        """Evaluate all four properties, with a single range check."""
        self._check_range(T, "material state")
        return MaterialState(
            rho=self._density(T),
            mu=self._viscosity(T),
            k=self._conductivity(T),
            cp=self._specific_heat(T),
        )


@dataclass(frozen=True)
class SodiumCoefficients:
    """Correlation constants for liquid sodium."""

    T_crit: float = 2509.46  # Critical temperature [K]
    T_solidification: float = 370.87  # Melting point [K]
    T_max: float = 2500.0  # Upper validity limit [K]

    # rho = r0 + r1 (1 - T/Tc) + r2 (1 - T/Tc)^0.5
    rho_coeffs: tuple = (219.0, 275.32, 511.58)
    # k = k0 + k1 T + k2 T^2 + k3 T^3
    k_coeffs: tuple = (124.67, -0.11381, 5.5226e-5, -1.1842e-8)
    # cp = c0 + c1 dT + c2 dT^2, dT = T - 273.15
    cp_coeffs: tuple = (1436.72, -0.58, 4.627e-4)
    # mu = exp(m0 + m1 ln T + m2 / T)
    mu_coeffs: tuple = (-6.4406, -0.3958, 556.835)


class SodiumProperties(MaterialPropertyModel):
    """Liquid sodium properties.

    Below the solidification temperature the correlations are extrapolated
    and one warning is logged per call; no exception is raised.
    """

    def __init__(self, coefficients: SodiumCoefficients = None):
        self.coefficients = coefficients if coefficients is not None else SodiumCoefficients()

    def _check_range(self, T, quantity: str):
        T_min = np.min(T)
        if T_min < self.coefficients.T_solidification:
            log.warning(
                f"Sodium {quantity} evaluated at T = {T_min:.2f} K, below solidification "
                f"({self.coefficients.T_solidification} K); value is extrapolated"
            )

    def _density(self, T):
        r0, r1, r2 = self.coefficients.rho_coeffs
        theta = 1.0 - np.asarray(T, dtype=np.float64) / self.coefficients.T_crit
        return r0 + r1 * theta + r2 * np.sqrt(theta)

    def _conductivity(self, T):
        k0, k1, k2, k3 = self.coefficients.k_coeffs
        T = np.asarray(T, dtype=np.float64)
        return k0 + T * (k1 + T * (k2 + T * k3))

    def _specific_heat(self, T):
        c0, c1, c2 = self.coefficients.cp_coeffs
        dT = np.asarray(T, dtype=np.float64) - 273.15
        return c0 + c1 * dT + c2 * dT * dT

    def _viscosity(self, T):
        m0, m1, m2 = self.coefficients.mu_coeffs
        T = np.asarray(T, dtype=np.float64)
        return np.exp(m0 + m1 * np.log(T) + m2 / T)


class ConstantProperties(MaterialPropertyModel):
    """Temperature-independent properties (verification runs)."""

    def __init__(self, rho: float = 1000.0, mu: float = 1.0e-3, k: float = 0.6, cp: float = 4180.0):
        self.rho = float(rho)
        self.mu = float(mu)
        self.k = float(k)
        self.cp = float(cp)

    def _density(self, T):
        return np.full_like(np.asarray(T, dtype=np.float64), self.rho)

    def _viscosity(self, T):
        return np.full_like(np.asarray(T, dtype=np.float64), self.mu)

    def _conductivity(self, T):
        return np.full_like(np.asarray(T, dtype=np.float64), self.k)

    def _specific_heat(self, T):
        return np.full_like(np.asarray(T, dtype=np.float64), self.cp)
