#!/usr/bin/env python3
"""
junction_mesher - command-line entry point.

Builds one intersection from command-line parameters (optionally starting
from a saved geometry configuration) and writes it as Wavefront OBJ.

Example:
    python main.py out/x.obj --connect north east south west
    python main.py out/plaza.obj --size 20 24 --config "Wide Curbs"
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from junction_mesher.conversion.obj_writer import ObjWriter
from junction_mesher.generators.intersection.generator import ProceduralIntersection
from junction_mesher.generators.intersection.topology import Side
from junction_mesher.generators.profiles.config_storage import load_config, save_config
from junction_mesher.validation.core import ValidationError
from junction_mesher.validation.unified_validator import UnifiedValidator

logger = logging.getLogger("junction_mesher")


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Generate road intersection geometry as Wavefront OBJ.")
    parser.add_argument("output", help="Path of the .obj file to write")
    parser.add_argument("--size", nargs=2, type=float, metavar=("X", "Z"),
                        help="Site extent along X and Z")
    parser.add_argument("--road-height", type=float, help="Absolute road surface height")
    parser.add_argument("--connect", nargs="*", default=[],
                        choices=[side.value for side in Side],
                        help="Sides that connect to a road")
    parser.add_argument("--corner-size", type=float, help="Uniform corner pad size")
    parser.add_argument("--footpath-depth", type=float, help="Uniform footpath depth")
    parser.add_argument("--skirt-out", type=float)
    parser.add_argument("--skirt-down", type=float)
    parser.add_argument("--gutter-depth", type=float)
    parser.add_argument("--gutter-width", type=float)
    parser.add_argument("--config", help="Name of a saved geometry configuration to start from")
    parser.add_argument("--save-config", metavar="NAME",
                        help="Save the resulting geometry configuration under NAME")
    parser.add_argument("--no-mtl", action="store_true", help="Skip writing the .mtl file")
    parser.add_argument("--strict", action="store_true",
                        help="Fail on any validation issue, warnings included")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    """Main application entry point."""
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    intersection = ProceduralIntersection()

    if args.config:
        config = load_config(args.config)
        if config is None:
            logger.error("No saved geometry configuration named '%s'", args.config)
            return 2
        intersection.set_geometry(config)

    params = {f"connect_{side}": True for side in args.connect}
    if args.size:
        params["size_x"], params["size_z"] = args.size
    optional = {
        "road_height": args.road_height,
        "corner_size": args.corner_size,
        "footpath_depth": args.footpath_depth,
        "skirt_out": args.skirt_out,
        "skirt_down": args.skirt_down,
        "gutter_depth": args.gutter_depth,
        "gutter_width": args.gutter_width,
    }
    params.update({k: v for k, v in optional.items() if v is not None})
    intersection.apply_params(params)

    if args.save_config:
        path = save_config(replace(intersection.params.geometry, name=args.save_config))
        logger.info("Saved geometry configuration to %s", path)

    writer = ObjWriter(object_name=Path(args.output).stem)
    try:
        result = intersection.build(
            sink=writer,
            fail_fast=args.strict,
            validator=UnifiedValidator(strict_mode=args.strict),
        )
    except ValidationError as e:
        logger.error("Build failed:\n%s", e.result.report())
        return 1

    if result.model is None or result.validation.failed:
        logger.error("Build failed:\n%s", result.validation.report())
        return 1

    Path(args.output).parent.mkdir(parents=True, exist_ok=True)
    writer.write(args.output, write_mtl=not args.no_mtl)

    logger.info(
        "%s intersection: %d faces, %d vertices -> %s",
        result.model.topology.name, writer.face_count, writer.vertex_count, args.output,
    )
    for issue in result.validation.warnings:
        logger.info("  %s", issue)
    return 0


if __name__ == "__main__":
    sys.exit(main())
