#!/usr/bin/env python3
"""
Build the DNA double-helix model and export it as a mesh file.

Twist triggers are replayed from a key string: each 'a' twists every gene
forward, each 's' twists it back. Twists accumulate.

Usage:
    python scripts/generate_dna.py --output dna.glb
    python scripts/generate_dna.py --twist-degree 45 --keys aa --output dna.stl
    python scripts/generate_dna.py --keys as --manifest dna.json --fix-normals -v
"""
import sys
import json
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dna import DnaConfig, apply_twist_trigger, generate_dna
from dna_export import dna_manifest, export_dna
from twist import TwistDirection


def main():
    parser = argparse.ArgumentParser(
        description="Build a twisted DNA double-helix mesh.",
    )
    parser.add_argument(
        "--twist-degree", type=float, default=30.0,
        help="Total twist across one backbone height, in degrees (default: 30)",
    )
    parser.add_argument(
        "--keys", default="",
        help="Twist triggers to replay in order: 'a' = forward, 's' = reverse",
    )
    parser.add_argument(
        "--output", default=None,
        help="Mesh file to write (.glb, .stl, .obj, .ply)",
    )
    parser.add_argument(
        "--manifest", default=None,
        help="Write a JSON summary of the genes to this path",
    )
    parser.add_argument(
        "--fix-normals", action="store_true",
        help="Rotate vertex normals with the placement transforms",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        directions = [TwistDirection.from_key(k) for k in args.keys if not k.isspace()]
    except ValueError as exc:
        parser.error(str(exc))

    config = DnaConfig(transform_normals=args.fix_normals)
    entries = generate_dna(args.twist_degree, config)

    for direction in directions:
        apply_twist_trigger(entries, direction)

    manifest = dna_manifest(entries)
    print(f"Result: {manifest['gene_count']} genes, "
          f"{manifest['vertex_count']} vertices, "
          f"{manifest['triangle_count']} triangles, "
          f"{len(directions)} twist triggers")

    if args.output:
        path = export_dna(entries, args.output)
        print(f"Mesh written to {path}")

    if args.manifest:
        manifest_path = Path(args.manifest)
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        with manifest_path.open("w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2)
        print(f"Manifest written to {manifest_path}")


if __name__ == "__main__":
    main()
