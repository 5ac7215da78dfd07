#!/usr/bin/env python3
"""
segmentize.py — split routes into single segments annotated with distance.

Reads the output of mycelium.py and emits one 2-point LineString feature per
route segment, with properties ``{distance, title}`` where distance is the
rounded planar distance in meters from the route's ``routeOrigin``.  Every
input feature must carry ``routeOrigin``.

Usage:
    python3 segmentize.py routes.geojson > segments.geojson
    python3 segmentize.py -o segments.geojson routes.geojson
"""

import argparse
import logging
import math
import sys

from shapely.geometry import LineString, shape

from config import LOG_FILE, LOG_FORMAT
from geo import LocalFrame, planar_distance_m
from geojson_io import InputError, feature_collection, read_feature_collection, write_feature_collection

logger = logging.getLogger(__name__)


def round_half_up(value):
    return int(math.floor(value + 0.5))


def iter_segments(geometry):
    """Yield (start, end) coordinate pairs for every segment of a geometry."""
    coords = geometry["coordinates"]
    geom_type = geometry["type"]
    if geom_type == "LineString":
        parts = [coords]
    elif geom_type in ("MultiLineString", "Polygon"):
        parts = coords
    elif geom_type == "MultiPolygon":
        parts = [ring for polygon in coords for ring in polygon]
    else:
        parts = []

    for part in parts:
        for start, end in zip(part, part[1:]):
            yield start, end


def annotate_segments(collection):
    """Explode every feature's line into distance-annotated segment features."""
    features = []
    for feature in collection["features"]:
        properties = feature["properties"]
        origin = shape(properties["routeOrigin"])
        frame = LocalFrame.around(origin)

        for start, end in iter_segments(feature["geometry"]):
            segment = LineString([start[:2], end[:2]])
            features.append({
                "type": "Feature",
                "properties": {
                    "distance": round_half_up(planar_distance_m(origin, segment, frame)),
                    "title": properties.get("title"),
                },
                "geometry": {"type": "LineString", "coordinates": [list(start), list(end)]},
            })

    logger.info(f"Split {len(collection['features'])} routes into {len(features)} segments")
    return feature_collection(features)


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(LOG_FILE),
            logging.StreamHandler()
        ]
    )

    parser = argparse.ArgumentParser(
        description='Split routes into segments annotated with their distance to the route origin'
    )
    parser.add_argument('file', nargs='?', help='Routes FeatureCollection (stdin when omitted)')
    parser.add_argument('-o', '--output', help='Path to output file, stdout when not given')
    args = parser.parse_args(argv)

    if args.file is None and sys.stdin.isatty():
        parser.print_usage(sys.stderr)
        return False

    try:
        collection = read_feature_collection(args.file)
    except InputError as e:
        logger.error(str(e))
        return False

    segments = annotate_segments(collection)
    write_feature_collection(segments["features"], args.output)
    return True


if __name__ == '__main__':
    success = main()
    sys.exit(0 if success else 1)
