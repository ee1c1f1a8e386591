"""Profile plots of the final u, p, T fields."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

log = logging.getLogger(__name__)


def plot_profiles(fields_df: pd.DataFrame, output_dir: Path, title: str = "") -> Path:
    """Plot velocity, pressure and temperature along the pipe."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, axes = plt.subplots(1, 3, figsize=(15, 4.5))
    z = fields_df["z"].values * 1e3  # mm

    axes[0].plot(z, fields_df["u"].values, "r-", linewidth=2)
    axes[0].set_ylabel("Velocity [m/s]")
    axes[0].set_title("Velocity")

    axes[1].plot(z, fields_df["p"].values, "g-", linewidth=2)
    axes[1].set_ylabel("Pressure [Pa]")
    axes[1].set_title("Pressure")

    axes[2].plot(z, fields_df["T"].values, "m-", linewidth=2)
    axes[2].set_ylabel("Temperature [K]")
    axes[2].set_title("Temperature")

    for ax in axes:
        ax.set_xlabel("z [mm]")
        ax.grid(True)

    if title:
        fig.suptitle(title)
    plt.tight_layout()

    output_path = output_dir / "profiles.png"
    fig.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    log.info(f"Saved profile plot to {output_path}")
    return output_path
