"""
Stepped helical twist around the Y axis.

Each vertex is rotated about Y by an angle proportional to its axial band
``ceil(y / backbone_height * backbone_segments)``, so every vertex in a band
turns by the same amount. The rotation never changes Y, so the band is the
same before and after twisting and the reverse twist undoes the forward one.
"""
import logging
import math
from enum import Enum
from typing import Sequence

import numpy as np

from gene import Gene
from mesh_primitives import Mesh, MissingMeshAttributeError

logger = logging.getLogger(__name__)


class TwistDirection(Enum):
    """Direction of a twist trigger."""
    FORWARD = "forward"
    REVERSE = "reverse"

    @classmethod
    def from_key(cls, key: str) -> "TwistDirection":
        """Map a key press to a direction: A twists, S untwists."""
        k = key.strip().lower()
        if k == "a":
            return cls.FORWARD
        if k == "s":
            return cls.REVERSE
        raise ValueError(f"No twist bound to key {key!r} (use 'a' or 's')")


def step_degree(gene: Gene, direction: TwistDirection = TwistDirection.FORWARD) -> float:
    """Rotation per axial band, in degrees."""
    step = gene.twist_degree / gene.backbone_segments
    return step if direction is TwistDirection.FORWARD else -step


def band_index(gene: Gene, y: float) -> int:
    return math.ceil(y / gene.backbone_height * gene.backbone_segments)


def twist_forward(gene: Gene, position: Sequence[float]) -> np.ndarray:
    """Twist a single point by its band's share of ``gene.twist_degree``."""
    return _twist_point(gene, position, TwistDirection.FORWARD)


def twist_reverse(gene: Gene, position: Sequence[float]) -> np.ndarray:
    """Inverse of twist_forward for the same gene."""
    return _twist_point(gene, position, TwistDirection.REVERSE)


def twist_positions(
    gene: Gene,
    positions: np.ndarray,
    direction: TwistDirection = TwistDirection.FORWARD,
) -> np.ndarray:
    """Twist an (N, 3) array of points. Returns a new float64 array."""
    pts = np.asarray(positions, dtype=np.float64)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError(f"Expected (N, 3) positions, got shape {pts.shape}")

    bands = np.ceil(pts[:, 1] / gene.backbone_height * gene.backbone_segments)
    theta = np.radians(step_degree(gene, direction)) * bands
    cos = np.cos(theta)
    sin = np.sin(theta)

    out = np.empty_like(pts)
    out[:, 0] = pts[:, 0] * cos + pts[:, 2] * sin
    out[:, 1] = pts[:, 1]
    out[:, 2] = -pts[:, 0] * sin + pts[:, 2] * cos
    return out


def apply_twist(
    mesh: Mesh,
    gene: Gene,
    direction: TwistDirection = TwistDirection.FORWARD,
) -> Mesh:
    """Twist *mesh* positions in place and return the same mesh.

    Twists compound: applying FORWARD twice rotates each band by twice the
    step. Normals and indices are left as they are.
    """
    if mesh.positions is None:
        raise MissingMeshAttributeError("Cannot twist a mesh without positions")
    twisted = twist_positions(gene, mesh.positions, direction)
    mesh.positions[:] = twisted.astype(mesh.positions.dtype, copy=False)
    return mesh


# ─── Internal helpers ────────────────────────────────────────────────────────

def _twist_point(gene: Gene, position: Sequence[float], direction: TwistDirection) -> np.ndarray:
    x, y, z = (float(v) for v in position)
    theta = math.radians(step_degree(gene, direction)) * band_index(gene, y)
    s, c = math.sin(theta), math.cos(theta)
    return np.array([x * c + z * s, y, -x * s + z * c])
