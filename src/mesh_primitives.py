"""
Core mesh types and primitive solids for the DNA helix model.

Provides the Mesh container (positions, normals, triangle indices) and the
canonical capped cylinder used for both the backbone strand and the base
rung of every gene.
"""
import logging
import math
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

logger = logging.getLogger(__name__)


class MeshGenerationError(Exception):
    """Base exception for mesh generation errors."""
    pass


class InvalidShapeError(MeshGenerationError, ValueError):
    """Shape parameters describe a degenerate primitive."""
    pass


class MissingMeshAttributeError(MeshGenerationError):
    """A primitive mesh is missing a required vertex or index buffer."""
    pass


@dataclass
class Mesh:
    """Triangle-list mesh with per-vertex normals.

    Positions may be rewritten in place (twisting); normals and indices
    stay as created.
    """
    positions: Optional[np.ndarray]     # (N, 3) float32
    normals: Optional[np.ndarray]       # (N, 3) float32
    indices: Optional[np.ndarray]       # (3M,) uint32
    uvs: Optional[np.ndarray] = None    # (N, 2) float32

    @property
    def vertex_count(self) -> int:
        if self.positions is None:
            return 0
        return int(len(self.positions))

    @property
    def triangle_count(self) -> int:
        if self.indices is None:
            return 0
        return int(len(self.indices)) // 3

    @property
    def faces(self) -> np.ndarray:
        """Indices grouped per triangle, shape (M, 3)."""
        if self.indices is None:
            raise MissingMeshAttributeError("Mesh has no indices")
        return self.indices.reshape(-1, 3)

    def validate(self) -> List[str]:
        """Check buffer consistency.

        Returns list of issue strings (empty = ok).
        """
        issues = []
        if self.positions is None:
            issues.append("Mesh has no positions")
        if self.normals is None:
            issues.append("Mesh has no normals")
        if self.indices is None:
            issues.append("Mesh has no indices")
        if issues:
            return issues

        n = len(self.positions)
        if len(self.normals) != n:
            issues.append(
                f"Normal count {len(self.normals)} does not match position count {n}"
            )
        if self.uvs is not None and len(self.uvs) != n:
            issues.append(f"UV count {len(self.uvs)} does not match position count {n}")
        if len(self.indices) % 3 != 0:
            issues.append(f"Index count {len(self.indices)} is not a multiple of 3")
        if len(self.indices) and int(self.indices.max()) >= n:
            issues.append(
                f"Index {int(self.indices.max())} out of range for {n} positions"
            )
        return issues


def cylinder_vertex_count(resolution: int, segments: int) -> int:
    """Vertices produced by make_cylinder: side rings plus two cap rims."""
    return (resolution + 1) * (segments + 1) + resolution * 2


def cylinder_index_count(resolution: int, segments: int) -> int:
    """Indices produced by make_cylinder: side quads plus two cap fans."""
    return 6 * resolution * segments + 6 * (resolution - 2)


def make_cylinder(
    radius: float,
    height: float,
    resolution: int,
    segments: int,
) -> Mesh:
    """Build a closed cylinder centred on the origin with its axis along +Y.

    Args:
        radius: cylinder radius, > 0
        height: full height along Y, > 0
        resolution: vertices around each ring, >= 3
        segments: axial subdivisions of the side wall, >= 1

    Vertex layout: ``segments + 1`` rings of ``resolution + 1`` vertices
    (the seam vertex is duplicated), then the top cap rim, then the bottom
    cap rim (``resolution`` vertices each).

    Raises:
        InvalidShapeError: if any shape parameter is out of range.
    """
    check_cylinder_shape(radius, height, resolution, segments)
    resolution = int(resolution)
    segments = int(segments)

    num_rings = segments + 1
    step_theta = 2.0 * math.pi / resolution
    step_y = height / segments

    # Side wall rings
    ring_theta = np.arange(resolution + 1, dtype=np.float64) * step_theta
    ring_cos = np.cos(ring_theta)
    ring_sin = np.sin(ring_theta)
    ring_y = -height / 2.0 + np.arange(num_rings, dtype=np.float64) * step_y

    side_positions = np.empty((num_rings, resolution + 1, 3), dtype=np.float64)
    side_positions[:, :, 0] = radius * ring_cos
    side_positions[:, :, 1] = ring_y[:, None]
    side_positions[:, :, 2] = radius * ring_sin

    side_normals = np.zeros_like(side_positions)
    side_normals[:, :, 0] = ring_cos
    side_normals[:, :, 2] = ring_sin

    side_uvs = np.empty((num_rings, resolution + 1, 2), dtype=np.float64)
    side_uvs[:, :, 0] = np.arange(resolution + 1) / resolution
    side_uvs[:, :, 1] = (np.arange(num_rings) / segments)[:, None]

    # Barrel skin: two triangles per quad between ring i and ring i + 1
    ring = np.arange(segments)[:, None] * (resolution + 1)
    j = np.arange(resolution)[None, :]
    a = ring + j
    b = ring + (resolution + 1) + j
    side_indices = np.stack([a, b, a + 1, b, b + 1, a + 1], axis=-1).reshape(-1)

    positions = [side_positions.reshape(-1, 3)]
    normals = [side_normals.reshape(-1, 3)]
    uvs = [side_uvs.reshape(-1, 2)]
    indices = [side_indices]
    offset = num_rings * (resolution + 1)

    cap_theta = np.arange(resolution, dtype=np.float64) * step_theta
    cap_cos = np.cos(cap_theta)
    cap_sin = np.sin(cap_theta)
    fan = np.arange(1, resolution - 1)

    for top in (True, False):
        if top:
            y, normal_y, winding = height / 2.0, 1.0, (1, 0)
        else:
            y, normal_y, winding = -height / 2.0, -1.0, (0, 1)

        cap_positions = np.column_stack(
            [cap_cos * radius, np.full(resolution, y), cap_sin * radius]
        )
        cap_normals = np.zeros((resolution, 3), dtype=np.float64)
        cap_normals[:, 1] = normal_y
        cap_uvs = np.column_stack([0.5 * (cap_cos + 1.0), 1.0 - 0.5 * (cap_sin + 1.0)])
        cap_indices = np.column_stack(
            [
                np.full(len(fan), offset),
                offset + fan + winding[0],
                offset + fan + winding[1],
            ]
        ).reshape(-1)

        positions.append(cap_positions)
        normals.append(cap_normals)
        uvs.append(cap_uvs)
        indices.append(cap_indices)
        offset += resolution

    mesh = Mesh(
        positions=np.concatenate(positions).astype(np.float32),
        normals=np.concatenate(normals).astype(np.float32),
        indices=np.concatenate(indices).astype(np.uint32),
        uvs=np.concatenate(uvs).astype(np.float32),
    )
    logger.debug(
        "Cylinder r=%.3f h=%.3f res=%d seg=%d: %d vertices, %d triangles",
        radius, height, resolution, segments, mesh.vertex_count, mesh.triangle_count,
    )
    return mesh


def check_cylinder_shape(radius: float, height: float, resolution: int, segments: int) -> None:
    """Raise InvalidShapeError unless the parameters describe a real cylinder."""
    if not (math.isfinite(radius) and radius > 0):
        raise InvalidShapeError(f"Cylinder radius must be > 0, got {radius}")
    if not (math.isfinite(height) and height > 0):
        raise InvalidShapeError(f"Cylinder height must be > 0, got {height}")
    if not _is_whole(resolution) or resolution < 3:
        raise InvalidShapeError(f"Cylinder resolution must be an integer >= 3, got {resolution}")
    if not _is_whole(segments) or segments < 1:
        raise InvalidShapeError(f"Cylinder segments must be an integer >= 1, got {segments}")


# ─── Internal helpers ────────────────────────────────────────────────────────

def _is_whole(value) -> bool:
    return math.isfinite(value) and int(value) == value
