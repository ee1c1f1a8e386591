"""Abstract base solver for transient pipe flow."""

from abc import ABC, abstractmethod
import logging
import time

import mlflow
import numpy as np

from .datastructures import Fields, Metrics, TimeSeries
from .properties import SodiumProperties

log = logging.getLogger(__name__)


class TransientPipeSolver(ABC):
    """Abstract base solver for 1D transient pipe flow.

    Handles:
    - Parameter management (input configuration)
    - Material property model injection
    - Time loop with per-step diagnostics
    - Metrics tracking (output results)
    - MLflow logging when a run is active

    Subclasses must:
    - Set Parameters class attribute (e.g., PISOParameters)
    - Implement step() - advance one timestep and return diagnostics
    - Call _init_fields(z) after setting up the mesh
    """

    Parameters = None  # Subclasses set this to PISOParameters

    def __init__(self, params=None, material=None, **kwargs):
        """Initialize solver with parameters.

        Parameters
        ----------
        params : Parameters, optional
            Parameters object. If not provided, kwargs are used to create params.
        material : MaterialPropertyModel, optional
            Temperature -> properties model. Defaults to liquid sodium.
        **kwargs
            Configuration parameters passed to Parameters class if params is None.
        """
        if params is None:
            if self.Parameters is None:
                raise ValueError("Subclass must define Parameters class attribute")
            params = self.Parameters(**kwargs)

        self.params = params
        self.material = material if material is not None else SodiumProperties()
        self.metrics = Metrics()
        self.fields = None  # Initialized by subclass via _init_fields()
        self.time_series = TimeSeries()
        self.time = 0.0

    def _init_fields(self, z: np.ndarray):
        """Pre-allocate the output Fields snapshot on node coordinates z."""
        n_points = len(z)
        self.fields = Fields(
            u=np.zeros(n_points),
            p=np.zeros(n_points),
            T=np.zeros(n_points),
            z=z.copy(),
        )

    @abstractmethod
    def step(self) -> dict:
        """Advance the solution by one timestep.

        Returns
        -------
        dict
            Diagnostics with keys 'courant', 'reynolds', 'inner_iterations',
            'max_du', 'continuity_residual' and 'converged'.
        """
        pass

    def _finalize_fields(self):
        """Copy final solution from internal arrays to output fields."""
        self.fields.u[:] = self.arrays.u
        self.fields.p[:] = self.arrays.p
        self.fields.T[:] = self.arrays.T

    def solve(self, n_timesteps: int = None):
        """Run the time loop.

        Stores results in solver attributes:
        - self.fields : Fields dataclass with the final u, p, T snapshot
        - self.time_series : TimeSeries dataclass with per-step diagnostics
        - self.metrics : Metrics dataclass with solver metrics

        Parameters
        ----------
        n_timesteps : int, optional
            Number of timesteps. If None, uses params.n_timesteps.
        """
        if n_timesteps is None:
            n_timesteps = self.params.n_timesteps
        log_interval = max(int(self.params.log_interval), 1)

        time_start = time.time()
        mlflow_time = 0.0  # Track time spent on MLflow logging
        total_inner = 0
        nonconverged = 0
        diagnostics = {}

        for it in range(n_timesteps):
            diagnostics = self.step()
            total_inner += diagnostics["inner_iterations"]
            if not diagnostics["converged"]:
                nonconverged += 1

            self.time_series.append(
                time=self.time,
                courant=diagnostics["courant"],
                reynolds=diagnostics["reynolds"],
                inner_iterations=diagnostics["inner_iterations"],
                max_du=diagnostics["max_du"],
                continuity_residual=diagnostics["continuity_residual"],
            )

            if it % log_interval == 0 or it == n_timesteps - 1:
                log.info(
                    f"Time: {self.time:.6f}, Courant number: {diagnostics['courant']:.4f}, "
                    f"Reynolds number: {diagnostics['reynolds']:.4e}, "
                    f"inner iterations: {diagnostics['inner_iterations']}"
                )

                # Live MLflow logging (timed separately)
                if mlflow.active_run():
                    t_log_start = time.time()
                    mlflow.log_metrics(
                        {
                            "courant": diagnostics["courant"],
                            "reynolds": diagnostics["reynolds"],
                            "inner_iterations": diagnostics["inner_iterations"],
                            "max_du": diagnostics["max_du"],
                            "continuity_residual": diagnostics["continuity_residual"],
                        },
                        step=it,
                    )
                    mlflow_time += time.time() - t_log_start

        wall_time = time.time() - time_start - mlflow_time
        log.info(f"Solver finished in {wall_time:.2f} seconds (excl. {mlflow_time:.2f}s logging).")

        self._store_results(n_timesteps, total_inner, nonconverged, diagnostics, wall_time)

    def _store_results(self, n_timesteps, total_inner, nonconverged, diagnostics, wall_time):
        """Store final fields and metrics."""
        self._finalize_fields()

        ts = self.time_series
        self.metrics = Metrics(
            timesteps=n_timesteps,
            total_inner_iterations=total_inner,
            nonconverged_steps=nonconverged,
            converged=bool(diagnostics.get("converged", False)),
            final_max_du=diagnostics.get("max_du", float("inf")),
            continuity_residual=diagnostics.get("continuity_residual", float("inf")),
            max_courant=max(ts.courant) if ts.courant else 0.0,
            max_reynolds=max(ts.reynolds) if ts.reynolds else 0.0,
            wall_time_seconds=wall_time,
        )

    def save(self, filepath):
        """Save complete solver state to HDF5 file.

        Saves params, metrics, time_series, and fields for later analysis.

        Parameters
        ----------
        filepath : str or Path
            Output file path (use .h5 extension).
        """
        from pathlib import Path

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        import pandas as pd
        with pd.HDFStore(filepath, mode='w', complevel=5) as store:
            store['params'] = self.params.to_dataframe()
            store['metrics'] = self.metrics.to_dataframe()
            store['time_series'] = self.time_series.to_dataframe()
            store['fields'] = self.fields.to_dataframe()
