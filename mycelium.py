#!/usr/bin/env python3
"""
mycelium.py — synthesize walking routes around GeoJSON points and lines.

For every input feature a buffer is drawn, candidate origin/destination pairs
are sampled in and around it, and each pair is resolved into a walking route
through the Mapbox Directions API.  Routes are simplified and written as a
GeoJSON FeatureCollection; every route keeps its source feature's properties
plus ``routeOrigin``, ready for segmentize.py.

Usage:
    MAPBOX_DIRECTIONS=<token> python3 mycelium.py points.geojson > routes.geojson
    python3 mycelium.py -o routes.geojson points.geojson
    cat points.geojson | python3 mycelium.py --seed 42
"""

import argparse
import logging
import random
import sys

from candidates import candidates_for_collection
from config import (
    BUFFER_SIZE, BUFFER_STEPS, LOG_FILE, LOG_FORMAT, NUM_RANDOM_LINES, NUM_RANDOM_POINTS,
    SLEEP_MS, TOKEN_ENV_VAR,
)
from directions import MapboxDirections
from geojson_io import InputError, read_feature_collection, write_feature_collection
from route_pipeline import RouteFetcher

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Generate walking routes around GeoJSON features with the Mapbox Directions API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
The Mapbox Directions access token is read from ${TOKEN_ENV_VAR}.

Examples:
  python mycelium.py points.geojson > routes.geojson
  python mycelium.py -o routes.geojson --seed 7 points.geojson
  python mycelium.py --buffer 800 --random-points 4 --random-lines 4 lines.geojson
        """
    )
    parser.add_argument('file', nargs='?', help='GeoJSON FeatureCollection (stdin when omitted)')
    parser.add_argument('-o', '--output', help='Path to output file, stdout when not given')
    parser.add_argument('--buffer', type=float, default=BUFFER_SIZE, help='Buffer size in meters')
    parser.add_argument('--steps', type=int, default=BUFFER_STEPS, help='Vertices kept on the buffer ring')
    parser.add_argument('--random-points', type=int, default=NUM_RANDOM_POINTS,
                        help='Routes from the feature to random points, per feature')
    parser.add_argument('--random-lines', type=int, default=NUM_RANDOM_LINES,
                        help='Routes between random points, per feature')
    parser.add_argument('--sleep-ms', type=int, default=SLEEP_MS, help='Pause after every API response')
    parser.add_argument('--seed', type=int, help='Random seed for repeatable candidates')
    return parser


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler()
        ]
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.file is None and sys.stdin.isatty():
        parser.print_usage(sys.stderr)
        return False

    try:
        collection = read_feature_collection(args.file)
    except InputError as e:
        logger.error(str(e))
        return False

    try:
        directions = MapboxDirections.from_env(TOKEN_ENV_VAR)
    except ValueError as e:
        logger.error(str(e))
        return False

    lines = candidates_for_collection(
        collection,
        buffer_size=args.buffer,
        steps=args.steps,
        num_random_lines=args.random_lines,
        num_random_points=args.random_points,
        rng=random.Random(args.seed),
    )

    routes = RouteFetcher(directions, sleep_ms=args.sleep_ms).fetch_all(lines)
    write_feature_collection(routes, args.output)

    logger.info(f"Done! Output {len(routes)} routes")
    return True


if __name__ == '__main__':
    success = main()
    sys.exit(0 if success else 1)
