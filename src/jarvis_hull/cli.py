from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from jarvis_hull.errors import HullError
from jarvis_hull.jarvis_march import WINDINGS
from jarvis_hull.jarvis_march import JarvisMarch
from jarvis_hull.jarvis_march import JarvisMarchConfig

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_points(path: Path) -> list[tuple[float, float]]:
    """Read [x, y] pairs from a YAML or JSON file."""
    logger.info("Loading points from: %s", path)

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get("points")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of [x, y] pairs in {path}.")

    pairs = []
    for entry in data:
        if not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ValueError(f"Expected [x, y] pairs in {path}, got {entry!r}.")
        pairs.append((float(entry[0]), float(entry[1])))
    return pairs


def dump_hull(hull, stream) -> None:
    payload = {"hull": None if hull is None else [list(p.as_tuple()) for p in hull]}
    yaml.safe_dump(payload, stream, default_flow_style=None, sort_keys=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jarvis_hull",
        description="Compute the convex hull of a 2D point file.",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "points_path",
        type=Path,
        help="YAML or JSON file holding a list of [x, y] pairs\n"
             "(or a mapping with a 'points' key).",
    )
    parser.add_argument("--epsilon", type=float, default=None,
                        help="Colinearity tolerance.")
    parser.add_argument("--winding", choices=WINDINGS, default=None,
                        help="Force the output winding.")
    parser.add_argument("--validate-triangle", action="store_true", default=None,
                        help="Check 3-point input for colinearity.")
    parser.add_argument("--output", type=Path, default=None,
                        help="Write the hull here instead of stdout.")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every walk iteration.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        points = load_points(args.points_path)
        config = JarvisMarchConfig.from_config(
            epsilon=args.epsilon,
            winding=args.winding,
            validate_triangle=args.validate_triangle,
        )
        hull = JarvisMarch(config)(points)
    except (HullError, OSError, TypeError, ValueError, yaml.YAMLError) as e:
        logger.exception("An error occurred: %s", e)
        return 1

    if hull is None:
        logger.info("Fewer than 3 points, no hull.")
    else:
        logger.info("Hull has %d vertices.", len(hull))

    if args.output is None:
        dump_hull(hull, sys.stdout)
    else:
        logger.info("Saving to %s...", args.output)
        with open(args.output, "w") as f:
            dump_hull(hull, f)
    return 0
