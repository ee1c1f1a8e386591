"""Tests for the mesh and the source zones."""

import numpy as np
import pytest

from pipeflow.datastructures import PISOParameters
from pipeflow.meshing import MeshData1D
from pipeflow.sources import SourceZones, alternating_zones, zone_field


class TestMesh:
    def test_spacing(self):
        mesh = MeshData1D(length=1.0, n_nodes=5)
        assert mesh.dz == 0.25
        assert np.allclose(mesh.z, [0.0, 0.25, 0.5, 0.75, 1.0])
        assert mesh.n_faces == 4
        assert np.allclose(mesh.z_faces, [0.125, 0.375, 0.625, 0.875])

    def test_coordinates_read_only(self):
        mesh = MeshData1D(length=1.0, n_nodes=5)
        with pytest.raises(ValueError):
            mesh.z[0] = 1.0

    @pytest.mark.parametrize("n_nodes", [0, 1, 2])
    def test_too_few_nodes(self, n_nodes):
        with pytest.raises(ValueError, match="at least 3"):
            MeshData1D(length=1.0, n_nodes=n_nodes)

    def test_non_positive_length(self):
        with pytest.raises(ValueError):
            MeshData1D(length=0.0, n_nodes=5)


class TestZones:
    @pytest.fixture
    def mesh(self):
        return MeshData1D(length=1.0, n_nodes=11)

    def test_half_open_interval(self, mesh):
        """Start is inclusive and end is exclusive."""
        field = zone_field(mesh, [[0.2, 0.5, 3.0]])
        assert np.allclose(field, [0, 0, 3, 3, 3, 0, 0, 0, 0, 0, 0])

    def test_last_node_included_at_full_length(self, mesh):
        field = zone_field(mesh, [[0.8, 1.0, 2.0]])
        assert np.allclose(field[-3:], 2.0)
        assert np.allclose(field[:-3], 0.0)

    def test_overlapping_zones_add(self, mesh):
        field = zone_field(mesh, [[0.0, 0.5, 1.0], [0.3, 0.7, 2.0]])
        assert field[4] == pytest.approx(3.0)
        assert field[6] == pytest.approx(2.0)

    def test_invalid_fractions(self, mesh):
        with pytest.raises(ValueError, match="Invalid source zone"):
            zone_field(mesh, [[0.6, 0.4, 1.0]])
        with pytest.raises(ValueError):
            zone_field(mesh, [[0.0, 1.5, 1.0]])

    def test_alternating_zones(self):
        zones = alternating_zones([0.2, 0.4, 0.6, 0.8], 5.0)
        assert zones == [[0.2, 0.4, 5.0], [0.4, 0.6, -5.0], [0.6, 0.8, 5.0]]

    def test_source_zones(self, mesh):
        sources = SourceZones.from_zones(mesh, mass=[[0.0, 0.5, 1.0]], energy=[[0.5, 1.0, 1e5]])
        assert sources.Sm.sum() == pytest.approx(5.0)
        assert np.all(sources.Su == 0.0)
        assert sources.St[-1] == 1e5

        zeros = SourceZones.zeros(mesh)
        for values in (zeros.Sm, zeros.Su, zeros.St):
            assert values.shape == (11,) and not values.any()

    def test_from_parameters_merges_alternating_zones(self, mesh):
        params = PISOParameters(
            energy_sources=[[0.0, 0.2, 1.0]],
            mass_source_breakpoints=[0.2, 0.4, 0.6],
            mass_source_magnitude=2.0,
        )
        sources = SourceZones.from_parameters(mesh, params)

        assert np.allclose(sources.Sm, zone_field(mesh, [[0.2, 0.4, 2.0], [0.4, 0.6, -2.0]]))
        assert np.allclose(sources.St, zone_field(mesh, [[0.0, 0.2, 1.0]]))
        assert not sources.Su.any()
