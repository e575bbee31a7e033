"""
Hand-off of assembled helix meshes to trimesh for viewing and file export.
"""
import logging
import os
from typing import Any, Dict, Sequence, Tuple

import trimesh

from gene import Gene
from mesh_primitives import Mesh, MissingMeshAttributeError

logger = logging.getLogger(__name__)


def mesh_to_trimesh(mesh: Mesh) -> trimesh.Trimesh:
    """Wrap a Mesh as a trimesh.Trimesh without reordering or merging vertices."""
    if mesh.positions is None or mesh.indices is None:
        raise MissingMeshAttributeError("Mesh needs positions and indices to export")
    return trimesh.Trimesh(
        vertices=mesh.positions,
        faces=mesh.faces,
        vertex_normals=mesh.normals,
        process=False,
    )


def dna_to_trimesh(entries: Sequence[Tuple[Gene, Mesh]]) -> trimesh.Trimesh:
    """Concatenate every gene mesh into a single trimesh."""
    if not entries:
        raise ValueError("No genes to export")
    return trimesh.util.concatenate([mesh_to_trimesh(mesh) for _, mesh in entries])


def export_dna(entries: Sequence[Tuple[Gene, Mesh]], path: str) -> str:
    """Write the helix to *path*; the format follows the file extension.

    Returns the absolute path written.
    """
    combined = dna_to_trimesh(entries)
    out_path = os.path.abspath(path)
    parent = os.path.dirname(out_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    combined.export(out_path)
    logger.info(
        "Exported %d genes (%d vertices, %d faces) to %s",
        len(entries), len(combined.vertices), len(combined.faces), out_path,
    )
    return out_path


def dna_manifest(entries: Sequence[Tuple[Gene, Mesh]]) -> Dict[str, Any]:
    """JSON-ready summary of the assembled genes."""
    genes = []
    for i, (gene, mesh) in enumerate(entries):
        record = gene.to_dict()
        record["index"] = i
        record["vertex_count"] = mesh.vertex_count
        record["triangle_count"] = mesh.triangle_count
        genes.append(record)
    return {
        "gene_count": len(genes),
        "vertex_count": sum(g["vertex_count"] for g in genes),
        "triangle_count": sum(g["triangle_count"] for g in genes),
        "genes": genes,
    }
