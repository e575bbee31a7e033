"""
Double-helix assembly.

Stacks rungs of paired genes (one per strand, 180 degrees apart) up the Y
axis and builds a mesh for each gene. Twist triggers are applied across the
whole assembly at once.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, List, NamedTuple, Optional, Tuple

from gene import Gene, build_gene_mesh
from mesh_primitives import Mesh
from twist import TwistDirection, apply_twist

logger = logging.getLogger(__name__)


@dataclass
class DnaConfig:
    """Layout and shape parameters for the helix."""

    rung_count: int = 25
    start_y: float = -120.0
    rung_spacing: float = 10.0
    strand_angles: Tuple[float, ...] = (0.0, 180.0)

    backbone_radius: float = 1.0
    backbone_height: float = 10.0
    backbone_resolution: int = 20
    backbone_segments: int = 20

    base_radius: float = 0.6
    base_height: float = 10.0
    base_resolution: int = 10
    base_segments: int = 4

    # Rotate normals with the placement transforms (changes shading)
    transform_normals: bool = False

    def rung_y(self, rung_index: int) -> float:
        return self.start_y + self.rung_spacing * rung_index

    def make_gene(self, twist_degree: float, rung_index: int, strand_angle: float) -> Gene:
        return Gene(
            backbone_radius=self.backbone_radius,
            backbone_height=self.backbone_height,
            backbone_resolution=self.backbone_resolution,
            backbone_segments=self.backbone_segments,
            base_radius=self.base_radius,
            base_height=self.base_height,
            base_resolution=self.base_resolution,
            base_segments=self.base_segments,
            twist_degree=float(twist_degree),
            transform=(0.0, self.rung_y(rung_index), 0.0),
            rotate_y_degree=float(strand_angle),
        )


class DnaEntry(NamedTuple):
    """A gene and the mesh built from it."""
    gene: Gene
    mesh: Mesh


def generate_dna(twist_degree: float, config: Optional[DnaConfig] = None) -> List[DnaEntry]:
    """Build every gene of the helix with its mesh.

    Ordering is rung-major, strand-minor: with the default config the result
    holds 50 entries alternating 0 and 180 degree strands, rung ``i`` at
    ``y = -120 + 10 * i``.
    """
    if config is None:
        config = DnaConfig()

    entries: List[DnaEntry] = []
    for rung in range(config.rung_count):
        for angle in config.strand_angles:
            gene = config.make_gene(twist_degree, rung, angle)
            mesh = build_gene_mesh(gene, transform_normals=config.transform_normals)
            entries.append(DnaEntry(gene, mesh))
        logger.debug("Rung %d built at y=%.1f", rung, config.rung_y(rung))

    logger.info(
        "Generated %d genes (%d rungs, twist %.1f deg)",
        len(entries), config.rung_count, twist_degree,
    )
    return entries


def apply_twist_trigger(
    entries: Iterable[Tuple[Gene, Mesh]],
    direction: TwistDirection,
) -> int:
    """Apply one twist trigger to every entry's mesh in place.

    The mesh is never reset to its untwisted shape, so repeated triggers
    accumulate. Returns the number of meshes twisted.
    """
    count = 0
    for gene, mesh in entries:
        apply_twist(mesh, gene, direction)
        count += 1
    logger.debug("Applied %s twist to %d meshes", direction.value, count)
    return count
