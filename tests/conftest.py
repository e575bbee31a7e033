"""
Shared test fixtures for the DNA helix mesh tests.
"""
import sys
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dna import DnaConfig, generate_dna
from gene import Gene


@pytest.fixture
def small_gene():
    """A gene with 4 backbone segments and 40 degrees of twist (10 deg/band)."""
    return Gene(
        backbone_radius=1.0,
        backbone_height=10.0,
        backbone_resolution=8,
        backbone_segments=4,
        base_radius=0.5,
        base_height=10.0,
        base_resolution=6,
        base_segments=2,
        twist_degree=40.0,
    )


@pytest.fixture
def dna_gene():
    """A gene with the default helix shape, strand 180, on rung 3."""
    return DnaConfig().make_gene(30.0, 3, 180.0)


@pytest.fixture
def small_dna():
    """A 3-rung helix with coarse primitives for quick tests."""
    config = DnaConfig(
        rung_count=3,
        backbone_resolution=6,
        backbone_segments=4,
        base_resolution=4,
        base_segments=1,
    )
    return generate_dna(30.0, config)
