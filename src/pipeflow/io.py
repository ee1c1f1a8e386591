"""Final snapshot I/O.

Snapshot text format: one line group per field, in the order u, p, T.
Each group is a ``# name`` header followed by the node values in node order,
comma-separated on a single line.
"""

from pathlib import Path

import numpy as np

from .datastructures import Fields

SNAPSHOT_FIELDS = ("u", "p", "T")


def write_snapshot(fields: Fields, filepath) -> Path:
    """Write the final u, p, T snapshot as comma-separated text."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w") as f:
        for name in SNAPSHOT_FIELDS:
            values = getattr(fields, name)
            f.write(f"# {name}\n")
            f.write(", ".join(repr(float(v)) for v in values))
            f.write("\n")
    return filepath


def read_snapshot(filepath) -> dict:
    """Read a snapshot written by :func:`write_snapshot` into ``{name: ndarray}``."""
    data = {}
    name = None
    with open(filepath) as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            if line.startswith("#"):
                name = line[1:].strip()
            elif name is not None:
                data[name] = np.array([float(v) for v in line.split(",")])
    return data
