"""
buffer_sampler.py — search region around an input feature.

The feature is buffered in a local metric frame and the outer ring of the
result is thinned to roughly ``steps`` vertices.  Those vertices later act as
bearings for the point-on-buffer candidate routes, and the ring's bounding box
bounds all random sampling.
"""

import logging
from dataclasses import dataclass
from typing import List

from shapely.geometry import shape

from config import BUFFER_SIZE, BUFFER_STEPS
from geo import SUPPORTED_GEOMETRIES, LocalFrame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BufferSample:
    """Resampled outer ring of a buffered feature."""

    ring: List[List[float]]
    full_vertex_count: int
    ratio: int

    @property
    def bbox(self):
        """(min_lon, min_lat, max_lon, max_lat) of the resampled ring."""
        lons = [c[0] for c in self.ring]
        lats = [c[1] for c in self.ring]
        return (min(lons), min(lats), max(lons), max(lats))

    def to_feature(self, properties=None):
        ring = [list(c) for c in self.ring]
        if ring and ring[0] != ring[-1]:
            ring.append(list(ring[0]))
        return {
            "type": "Feature",
            "properties": dict(properties or {}),
            "geometry": {"type": "Polygon", "coordinates": [ring]},
        }


def resample_ratio(vertex_count: int, steps: int) -> int:
    """Index stride used to thin a ring of ``vertex_count`` down to ~``steps``.

    Clamped to 1 so rings shorter than ``steps`` are kept whole.
    """
    return max(1, vertex_count // steps)


def sample_buffer(feature: dict, distance_m: float = BUFFER_SIZE, steps: int = BUFFER_STEPS) -> BufferSample:
    """Buffer ``feature`` by ``distance_m`` meters and thin its outer ring."""
    if distance_m <= 0:
        raise ValueError(f"Buffer distance must be positive, got {distance_m} meters")
    if steps < 1:
        raise ValueError(f"Buffer steps must be at least 1, got {steps}")

    geometry = shape(feature["geometry"])
    if geometry.geom_type not in SUPPORTED_GEOMETRIES:
        raise ValueError(f"Cannot buffer geometry of type {geometry.geom_type}")

    frame = LocalFrame.around(geometry)
    buffered = frame.to_lonlat(frame.to_meters(geometry).buffer(distance_m, quad_segs=steps))
    full_ring = [[x, y] for x, y in buffered.exterior.coords]

    ratio = resample_ratio(len(full_ring), steps)
    ring = full_ring[::ratio]

    logger.debug(
        f"Buffered {geometry.geom_type} by {distance_m}m: "
        f"{len(full_ring)} vertices, kept {len(ring)} (every {ratio})"
    )
    return BufferSample(ring=ring, full_vertex_count=len(full_ring), ratio=ratio)
