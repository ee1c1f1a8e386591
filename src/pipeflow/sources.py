"""Distributed mass, momentum and energy source zones.

Zones are given as ``[start_fraction, end_fraction, value]`` triples over the
pipe length. A node at position z belongs to a zone when
``start_fraction * L <= z < end_fraction * L`` (the last node is included
when ``end_fraction == 1``). Overlapping zones add up.

Notation:
    Sm - mass source [kg/(m^3 s)]
    Su - momentum source [N/m^3]
    St - energy source [W/m^3]
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .meshing import MeshData1D


def zone_field(mesh: MeshData1D, zones: Sequence[Sequence[float]]) -> np.ndarray:
    """Build a node field from ``[start_fraction, end_fraction, value]`` zones."""
    field = np.zeros(mesh.n_nodes, dtype=np.float64)
    z = mesh.z
    for zone in zones or ():
        start, end, value = (float(v) for v in zone)
        if not 0.0 <= start <= end <= 1.0:
            raise ValueError(f"Invalid source zone fractions [{start}, {end}]")
        mask = (z >= start * mesh.length) & (z < end * mesh.length)
        if end == 1.0:
            mask[-1] = True
        field[mask] += value
    return field


def alternating_zones(breakpoints: Sequence[float], magnitude: float) -> list:
    """Alternate source (+magnitude) and sink (-magnitude) zones.

    ``breakpoints`` are increasing length fractions; consecutive pairs bound
    one zone, starting with a source.

    Example:
        alternating_zones([0.2, 0.4, 0.6, 0.8], 5.0)
        -> [[0.2, 0.4, 5.0], [0.4, 0.6, -5.0], [0.6, 0.8, 5.0]]
    """
    zones = []
    sign = 1.0
    for start, end in zip(breakpoints[:-1], breakpoints[1:]):
        zones.append([float(start), float(end), sign * magnitude])
        sign = -sign
    return zones


@dataclass
class SourceZones:
    """Mass (Sm), momentum (Su) and energy (St) source fields, fixed for the run."""

    Sm: np.ndarray
    Su: np.ndarray
    St: np.ndarray

    @classmethod
    def from_zones(cls, mesh: MeshData1D, mass=(), momentum=(), energy=()):
        return cls(
            Sm=zone_field(mesh, mass),
            Su=zone_field(mesh, momentum),
            St=zone_field(mesh, energy),
        )

    @classmethod
    def zeros(cls, mesh: MeshData1D):
        return cls.from_zones(mesh)

    @classmethod
    def from_parameters(cls, mesh: MeshData1D, params):
        """Explicit zones plus alternating source/sink zones from solver parameters."""
        zones = {}
        for kind in ("mass", "momentum", "energy"):
            explicit = list(getattr(params, f"{kind}_sources") or [])
            alternating = alternating_zones(
                list(getattr(params, f"{kind}_source_breakpoints") or []),
                float(getattr(params, f"{kind}_source_magnitude")),
            )
            zones[kind] = explicit + alternating
        return cls.from_zones(mesh, **zones)
