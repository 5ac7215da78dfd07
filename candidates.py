"""
candidates.py — origin/destination pairs to be resolved into walking routes.

Three families are generated per feature, always in this order:

  1. point-on-buffer   reference point → a random distance toward each ring vertex
  2. random lines      random point → random point, both inside the buffer bbox
  3. random points     reference point → random point inside the buffer bbox

Each candidate carries the feature's properties plus ``routeOrigin`` (the
feature's geometry), which the segmentize stage needs later.
"""

import copy
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from shapely.geometry import shape

from buffer_sampler import BufferSample, sample_buffer
from config import (
    BUFFER_SIZE, BUFFER_STEPS, MIN_WALK_DISTANCE, NUM_RANDOM_LINES, NUM_RANDOM_POINTS,
)
from geo import SUPPORTED_GEOMETRIES, LocalFrame, reference_point, walk_toward

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateLine:
    origin: List[float]
    destination: List[float]
    properties: Dict

    def to_feature(self):
        return {
            "type": "Feature",
            "properties": dict(self.properties),
            "geometry": {
                "type": "LineString",
                "coordinates": [list(self.origin), list(self.destination)],
            },
        }


def with_route_origin(feature: dict) -> dict:
    """Copy of the feature's properties with ``routeOrigin`` set to its geometry."""
    properties = copy.deepcopy(feature.get("properties") or {})
    properties["routeOrigin"] = copy.deepcopy(feature["geometry"])
    return properties


def random_points_in_bbox(bbox, count: int, rng: random.Random) -> List[List[float]]:
    min_lon, min_lat, max_lon, max_lat = bbox
    return [
        [
            rng.random() * (max_lon - min_lon) + min_lon,
            rng.random() * (max_lat - min_lat) + min_lat,
        ]
        for _ in range(count)
    ]


def routes_to_point_on_buffer(geometry, sample: BufferSample, frame: LocalFrame,
                              buffer_size: float, rng: random.Random):
    pairs = []
    for vertex in sample.ring:
        point = reference_point(geometry, vertex, frame)
        distance = max(MIN_WALK_DISTANCE, rng.random() * buffer_size)
        pairs.append((point, walk_toward(point, vertex, distance, frame)))
    return pairs


def routes_between_random_points(sample: BufferSample, count: int, rng: random.Random):
    points = random_points_in_bbox(sample.bbox, count * 2, rng)
    return [(points[i], points[i + 1]) for i in range(0, len(points), 2)]


def routes_to_random_points(geometry, sample: BufferSample, frame: LocalFrame,
                            count: int, rng: random.Random):
    return [
        (reference_point(geometry, point, frame), point)
        for point in random_points_in_bbox(sample.bbox, count, rng)
    ]


def generate_candidates(
    feature: dict,
    sample: Optional[BufferSample] = None,
    *,
    buffer_size: float = BUFFER_SIZE,
    steps: int = BUFFER_STEPS,
    num_random_lines: int = NUM_RANDOM_LINES,
    num_random_points: int = NUM_RANDOM_POINTS,
    rng: Optional[random.Random] = None,
) -> List[CandidateLine]:
    """Build every candidate line for one feature.

    Args:
        feature: GeoJSON Feature with a Point or LineString geometry.
        sample: precomputed buffer sample; computed from ``buffer_size`` and
            ``steps`` when omitted.
        rng: random source, pass a seeded ``random.Random`` for repeatable output.

    Returns:
        List of CandidateLine: point-on-buffer lines, then random lines, then
        random-point lines.
    """
    rng = rng or random.Random()
    if sample is None:
        sample = sample_buffer(feature, buffer_size, steps)

    geometry = shape(feature["geometry"])
    frame = LocalFrame.around(geometry)
    pairs = (
        routes_to_point_on_buffer(geometry, sample, frame, buffer_size, rng)
        + routes_between_random_points(sample, num_random_lines, rng)
        + routes_to_random_points(geometry, sample, frame, num_random_points, rng)
    )
    return [CandidateLine(origin, destination, with_route_origin(feature)) for origin, destination in pairs]


def candidates_for_collection(collection: dict, **options) -> List[CandidateLine]:
    """Flatten candidate lines for every supported feature, in input order.

    Features with other geometry types are skipped with a warning.
    """
    lines = []
    for index, feature in enumerate(collection["features"]):
        geometry = feature.get("geometry") or {}
        geom_type = geometry.get("type")
        if geom_type not in SUPPORTED_GEOMETRIES:
            logger.warning(f"Skipping feature {index}: unsupported geometry type {geom_type}")
            continue
        feature_lines = generate_candidates(feature, **options)
        logger.info(f"Feature {index} ({geom_type}): {len(feature_lines)} candidate routes")
        lines.extend(feature_lines)

    logger.info(f"Generated {len(lines)} candidate routes for {len(collection['features'])} features")
    return lines
