"""Tests for trimesh hand-off and file export."""
import json

import numpy as np
import pytest
import trimesh

from dna_export import dna_manifest, dna_to_trimesh, export_dna, mesh_to_trimesh
from mesh_primitives import Mesh, MissingMeshAttributeError, make_cylinder


class TestMeshToTrimesh:
    """Test conversion of a single mesh."""

    def test_preserves_vertex_order(self):
        mesh = make_cylinder(1.0, 10.0, 20, 20)
        tm = mesh_to_trimesh(mesh)
        assert len(tm.vertices) == mesh.vertex_count
        assert len(tm.faces) == mesh.triangle_count
        np.testing.assert_allclose(tm.vertices, mesh.positions)
        assert np.array_equal(tm.faces, mesh.faces)

    def test_missing_buffers(self):
        with pytest.raises(MissingMeshAttributeError):
            mesh_to_trimesh(Mesh(positions=None, normals=None, indices=None))


class TestDnaExport:
    """Test combined export of a helix."""

    def test_concatenate(self, small_dna):
        combined = dna_to_trimesh(small_dna)
        assert len(combined.vertices) == sum(m.vertex_count for _, m in small_dna)
        assert len(combined.faces) == sum(m.triangle_count for _, m in small_dna)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            dna_to_trimesh([])

    @pytest.mark.parametrize("suffix", [".stl", ".ply", ".glb"])
    def test_export_file(self, small_dna, tmp_path, suffix):
        out = export_dna(small_dna, str(tmp_path / "nested" / f"dna{suffix}"))
        assert out.endswith(suffix)
        loaded = trimesh.load(out, force="mesh")
        combined = dna_to_trimesh(small_dna)
        np.testing.assert_allclose(loaded.bounds, combined.bounds, atol=1e-3)

    def test_manifest(self, small_dna):
        manifest = dna_manifest(small_dna)
        assert manifest["gene_count"] == len(small_dna)
        assert manifest["vertex_count"] == sum(m.vertex_count for _, m in small_dna)
        assert manifest["genes"][1]["rotate_y_degree"] == 180.0
        assert manifest["genes"][1]["index"] == 1
        json.dumps(manifest)
