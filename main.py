"""
Pipe flow solver - hydra entry point.

Usage:
    python main.py
    python main.py solver.n_nodes=200 solver.n_timesteps=1000
    python main.py -m solver.corrector_count=1,2,3
"""

import logging
import os
import sys
import tempfile
from pathlib import Path

import hydra
import mlflow
from dotenv import load_dotenv
from hydra.utils import instantiate
from omegaconf import DictConfig, OmegaConf

load_dotenv()
sys.path.insert(0, str(Path(__file__).parent / "src"))

from pipeflow.io import write_snapshot  # noqa: E402
from pipeflow.plotting import plot_profiles  # noqa: E402

log = logging.getLogger(__name__)


def get_experiment_name(cfg: DictConfig) -> str:
    """Build full experiment name with optional prefix."""
    name = cfg.experiment_name
    prefix = cfg.mlflow.get("project_prefix", "")
    if prefix and not name.startswith("/"):
        return f"{prefix}/{name}"
    return name


def setup_mlflow(cfg: DictConfig) -> str:
    """Setup MLflow tracking and return experiment name."""
    tracking_uri = cfg.mlflow.get("tracking_uri", "./mlruns")
    if str(cfg.mlflow.get("mode", "")).lower() in ("files", "local"):
        os.environ.pop("MLFLOW_TRACKING_URI", None)
    os.environ["MLFLOW_TRACKING_URI"] = str(tracking_uri)
    mlflow.set_tracking_uri(tracking_uri)

    experiment_name = get_experiment_name(cfg)
    mlflow.set_experiment(experiment_name)
    return experiment_name


def run_solver(cfg: DictConfig, output_dir: Path) -> str:
    """Run solver, write outputs and log to MLflow. Returns run_id."""
    solver = instantiate(cfg.solver, _convert_="partial")
    prm = solver.params
    run_name = f"{prm.method}_N{prm.n_nodes}_corr{prm.corrector_count}"

    # Parent run tagging for sweeps
    parent_run_id = os.environ.get("MLFLOW_PARENT_RUN_ID")
    tags = {"solver": prm.method, "material": type(solver.material).__name__}
    if parent_run_id:
        tags.update({"mlflow.parentRunId": parent_run_id, "parent_run_id": parent_run_id, "sweep": "child"})

    with mlflow.start_run(run_name=run_name, tags=tags, nested=bool(parent_run_id)) as run:
        mlflow.log_params(prm.to_mlflow())
        mlflow.log_dict(OmegaConf.to_container(cfg), "config.yaml")

        log.info(f"Solving: {prm.method} N={prm.n_nodes} dt={prm.dt} steps={prm.n_timesteps}")
        solver.solve()
        mlflow.log_metrics(solver.metrics.to_mlflow())

        # The snapshot is the primary output and lives in the hydra run directory
        snapshot_path = write_snapshot(solver.fields, output_dir / cfg.output.snapshot)
        mlflow.log_artifact(str(snapshot_path))
        log.info(f"Wrote final snapshot to {snapshot_path}")

        with tempfile.TemporaryDirectory() as tmpdir:
            h5_path = Path(tmpdir) / cfg.output.results
            solver.save(h5_path)
            mlflow.log_artifact(str(h5_path))

        if cfg.output.get("plot", True):
            plot_path = plot_profiles(solver.fields.to_dataframe(), output_dir, title=run_name)
            mlflow.log_artifact(str(plot_path))

        m = solver.metrics
        log.info(
            f"Done: {m.timesteps} steps, {m.total_inner_iterations} inner iterations, "
            f"{m.nonconverged_steps} non-converged, time={m.wall_time_seconds:.2f}s"
        )
        return run.info.run_id


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig) -> None:
    """Main entry point."""
    log.info(f"MLflow experiment: {setup_mlflow(cfg)}")
    output_dir = Path(hydra.core.hydra_config.HydraConfig.get().runtime.output_dir)
    run_solver(cfg, output_dir)


if __name__ == "__main__":
    main()
