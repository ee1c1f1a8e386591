"""
MeshData1D: Core data layout for the 1D collocated finite volume pipe.

Indexing Conventions:
- Node-based arrays (u, p, T, sources) use node indexing (0 to n_nodes-1).
  Node i is the centre of control volume i, located at z[i] = i * dz.
- Face-based arrays (face velocities, mass fluxes) use face indexing
  (0 to n_nodes-2). Face f sits between node f and node f+1.
- The padded pressure buffer has length n_nodes+2: entry j holds node j-1,
  entries 0 and n_nodes+1 are ghost values.
"""

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True)
class MeshData1D:
    """Uniform 1D mesh of ``n_nodes`` collocated nodes over ``[0, length]``."""

    length: float
    n_nodes: int
    z: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        if self.n_nodes < 3:
            raise ValueError(f"Mesh needs at least 3 nodes, got {self.n_nodes}")
        if self.length <= 0.0:
            raise ValueError(f"Mesh length must be positive, got {self.length}")
        z = np.linspace(0.0, self.length, self.n_nodes)
        z.flags.writeable = False
        object.__setattr__(self, "z", z)

    @property
    def dz(self) -> float:
        """Distance between neighbouring nodes."""
        return self.length / (self.n_nodes - 1)

    @property
    def n_faces(self) -> int:
        return self.n_nodes - 1

    @property
    def z_faces(self) -> np.ndarray:
        """Face coordinates (midpoints between nodes)."""
        return 0.5 * (self.z[:-1] + self.z[1:])
