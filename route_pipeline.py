"""
route_pipeline.py — resolve candidate lines into simplified walking routes.

Requests are strictly sequential: the next request starts only after the
previous response arrived and the pacing sleep elapsed.  A failing candidate
is logged and dropped, the rest of the queue still runs.
"""

import logging
import time
from typing import List

import requests
from shapely.geometry import LineString

from candidates import CandidateLine
from config import SIMPLIFY_HIGH_QUALITY, SIMPLIFY_TOLERANCE, SLEEP_MS
from directions import DirectionsError

logger = logging.getLogger(__name__)


def _radial_distance(coordinates, tolerance):
    """Drop vertices closer than ``tolerance`` to the previously kept one."""
    sq_tolerance = tolerance * tolerance
    previous = coordinates[0]
    kept = [previous]
    for point in coordinates[1:]:
        if (point[0] - previous[0]) ** 2 + (point[1] - previous[1]) ** 2 > sq_tolerance:
            kept.append(point)
            previous = point
    if previous is not coordinates[-1]:
        kept.append(coordinates[-1])
    return kept


def simplify_line(coordinates, tolerance=SIMPLIFY_TOLERANCE, high_quality=SIMPLIFY_HIGH_QUALITY):
    """Douglas-Peucker simplification of a coordinate list.

    Without ``high_quality`` a cheaper radial-distance pass runs first.
    """
    if len(coordinates) < 2:
        raise ValueError(f"Cannot simplify a line with {len(coordinates)} coordinates")

    points = coordinates if high_quality else _radial_distance(coordinates, tolerance)
    if len(points) < 2:
        points = [coordinates[0], coordinates[-1]]

    simplified = LineString(points).simplify(tolerance, preserve_topology=False)
    if simplified.is_empty:
        raise ValueError("Simplification collapsed the route to an empty geometry")
    return [list(c) for c in simplified.coords]


class RouteFetcher:
    """Sequential, rate-limited fetch-and-simplify over candidate lines."""

    def __init__(self, directions, sleep_ms=SLEEP_MS, tolerance=SIMPLIFY_TOLERANCE,
                 high_quality=SIMPLIFY_HIGH_QUALITY):
        self.directions = directions
        self.sleep_ms = sleep_ms
        self.tolerance = tolerance
        self.high_quality = high_quality

    def _pause(self):
        if self.sleep_ms > 0:
            time.sleep(self.sleep_ms / 1000)

    def fetch_one(self, line: CandidateLine) -> dict:
        """Resolve one candidate into a route feature; raises on failure."""
        geometry = self.directions.route(line.origin, line.destination)
        return {
            "type": "Feature",
            "properties": dict(line.properties),
            "geometry": {
                "type": "LineString",
                "coordinates": simplify_line(geometry["coordinates"], self.tolerance, self.high_quality),
            },
        }

    def fetch_all(self, lines: List[CandidateLine]) -> List[dict]:
        """Resolve every candidate in order, skipping the ones that fail."""
        routes = []
        total = len(lines)
        for index, line in enumerate(lines, start=1):
            logger.info(f"Computing route {index}/{total} (sleeping {self.sleep_ms}ms)")
            try:
                routes.append(self.fetch_one(line))
            except (requests.exceptions.RequestException, DirectionsError, ValueError, TypeError) as e:
                logger.error(f"Route {index}/{total} failed: {e}")
            finally:
                # failed requests count against the rate limit too
                self._pause()

        logger.info(f"Resolved {len(routes)} of {total} candidate routes")
        return routes
