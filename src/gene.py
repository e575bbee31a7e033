"""
Gene descriptors and the composite gene mesh builder.

A gene is one half-rung of the helix: a vertical backbone cylinder sitting
``base_height`` away from the helix axis, plus a horizontal base cylinder
bridging the axis and the backbone. ``build_gene_mesh`` merges both
primitives into a single mesh under their placement transforms.
"""
import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

import numpy as np

from mesh_primitives import (
    Mesh,
    MeshGenerationError,
    MissingMeshAttributeError,
    check_cylinder_shape,
    cylinder_vertex_count,
    make_cylinder,
)

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Gene:
    """
    Shape, twist and placement parameters for one half-rung.

    Attributes:
        backbone_radius, backbone_height, backbone_resolution, backbone_segments:
            cylinder parameters of the strand
        base_radius, base_height, base_resolution, base_segments:
            cylinder parameters of the rung; base_height is also the
            backbone's distance from the helix axis
        twist_degree: total rotation across the full backbone height
        transform: placement offset (x, y, z)
        rotate_y_degree: strand angle around the helix axis (0 or 180 for
            the two strands of a rung)

    Raises InvalidShapeError on construction if either cylinder is degenerate.
    """
    backbone_radius: float
    backbone_height: float
    backbone_resolution: int
    backbone_segments: int
    base_radius: float
    base_height: float
    base_resolution: int
    base_segments: int
    twist_degree: float
    transform: Vec3 = (0.0, 0.0, 0.0)
    rotate_y_degree: float = 0.0

    def __post_init__(self):
        check_cylinder_shape(
            self.backbone_radius,
            self.backbone_height,
            self.backbone_resolution,
            self.backbone_segments,
        )
        check_cylinder_shape(
            self.base_radius,
            self.base_height,
            self.base_resolution,
            self.base_segments,
        )

    @property
    def backbone_position_len(self) -> int:
        """Backbone vertex count; base indices are offset by this when merged."""
        return cylinder_vertex_count(self.backbone_resolution, self.backbone_segments)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["transform"] = [float(v) for v in self.transform]
        data["backbone_position_len"] = self.backbone_position_len
        return data


def build_gene_mesh(gene: Gene, transform_normals: bool = False) -> Mesh:
    """Merge the backbone and base cylinders of *gene* into one mesh.

    Backbone positions come first, base positions second; every base index
    is shifted by the backbone vertex count.

    Normals are copied through unrotated unless *transform_normals* is set,
    in which case they get the rotation part of each placement transform.

    Raises:
        MissingMeshAttributeError: if a primitive lacks a required buffer.
    """
    backbone = make_cylinder(
        gene.backbone_radius,
        gene.backbone_height,
        gene.backbone_resolution,
        gene.backbone_segments,
    )
    base = make_cylinder(
        gene.base_radius,
        gene.base_height,
        gene.base_resolution,
        gene.base_segments,
    )
    _require_buffers(backbone, "backbone")
    _require_buffers(base, "base")

    backbone_mat = backbone_placement_matrix(gene)
    base_mat = base_placement_matrix(gene)

    # Push the strand out to the end of the rung before placing it
    backbone_local = backbone.positions.astype(np.float64)
    backbone_local[:, 0] += gene.base_height

    backbone_positions = _transform_points(backbone_mat, backbone_local)
    base_positions = _transform_points(base_mat, base.positions.astype(np.float64))

    backbone_normals = backbone.normals
    base_normals = base.normals
    if transform_normals:
        backbone_normals = backbone_normals @ backbone_mat[:3, :3].T
        base_normals = base_normals @ base_mat[:3, :3].T

    offset = len(backbone.positions)
    if offset != gene.backbone_position_len:
        raise MeshGenerationError(
            f"Backbone produced {offset} vertices, expected {gene.backbone_position_len}"
        )

    mesh = Mesh(
        positions=np.concatenate([backbone_positions, base_positions]).astype(np.float32),
        normals=np.concatenate([backbone_normals, base_normals]).astype(np.float32),
        indices=np.concatenate(
            [backbone.indices, base.indices + np.uint32(offset)]
        ).astype(np.uint32),
    )
    logger.debug(
        "Gene mesh at %s rot=%.1f: %d vertices, %d triangles",
        gene.transform, gene.rotate_y_degree, mesh.vertex_count, mesh.triangle_count,
    )
    return mesh


def backbone_placement_matrix(gene: Gene) -> np.ndarray:
    """4x4 placement of the backbone: Ry(rotate_y_degree) @ T(transform)."""
    tx, ty, tz = gene.transform
    return rotation_y(math.radians(gene.rotate_y_degree)) @ translation(tx, ty, tz)


def base_placement_matrix(gene: Gene) -> np.ndarray:
    """4x4 placement of the base rung.

    The vertical base cylinder is laid on its side by Rz(-90), flipped to
    the strand's side by Rx(-rotate_y_degree), and shifted so it starts on
    the helix axis.
    """
    tx, ty, tz = gene.transform
    return (
        rotation_z(-math.pi / 2.0)
        @ rotation_x(-math.radians(gene.rotate_y_degree))
        @ translation(-ty, gene.base_height / 2.0 + tx, tz)
    )


def translation(x: float, y: float, z: float) -> np.ndarray:
    mat = np.eye(4)
    mat[:3, 3] = (x, y, z)
    return mat


def rotation_x(theta: float) -> np.ndarray:
    c, s = math.cos(theta), math.sin(theta)
    mat = np.eye(4)
    mat[1:3, 1:3] = [[c, -s], [s, c]]
    return mat


def rotation_y(theta: float) -> np.ndarray:
    c, s = math.cos(theta), math.sin(theta)
    mat = np.eye(4)
    mat[0, 0], mat[0, 2] = c, s
    mat[2, 0], mat[2, 2] = -s, c
    return mat


def rotation_z(theta: float) -> np.ndarray:
    c, s = math.cos(theta), math.sin(theta)
    mat = np.eye(4)
    mat[0:2, 0:2] = [[c, -s], [s, c]]
    return mat


# ─── Internal helpers ────────────────────────────────────────────────────────

def _transform_points(mat: np.ndarray, points: np.ndarray) -> np.ndarray:
    return points @ mat[:3, :3].T + mat[:3, 3]


def _require_buffers(mesh: Mesh, label: str) -> None:
    if mesh.positions is None:
        raise MissingMeshAttributeError(f"Do not have {label} positions")
    if mesh.normals is None:
        raise MissingMeshAttributeError(f"Do not have {label} normals")
    if mesh.indices is None:
        raise MissingMeshAttributeError(f"Do not have {label} indices")
