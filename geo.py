"""
geo.py — planar helpers for working in meters around lon/lat geometries.

Every feature gets its own azimuthal-equidistant frame centred on the
feature, so shapely's planar buffer / distance / interpolation operate in
meters with little distortion inside a walking-distance radius.
"""

import math

from pyproj import CRS, Transformer
from shapely.geometry import Point, shape
from shapely.ops import transform

WGS84 = "EPSG:4326"

SUPPORTED_GEOMETRIES = ("Point", "LineString")


class LocalFrame:
    """Projects shapely geometries between lon/lat and a local metric frame."""

    def __init__(self, lon, lat):
        self.lon = lon
        self.lat = lat
        local = CRS.from_proj4(
            f"+proj=aeqd +lat_0={lat} +lon_0={lon} +datum=WGS84 +units=m +no_defs"
        )
        self._forward = Transformer.from_crs(WGS84, local, always_xy=True)
        self._inverse = Transformer.from_crs(local, WGS84, always_xy=True)

    @classmethod
    def around(cls, geometry):
        """Build a frame centred on a shapely geometry (or a GeoJSON dict)."""
        if isinstance(geometry, dict):
            geometry = shape(geometry)
        centre = geometry.centroid
        return cls(centre.x, centre.y)

    def to_meters(self, geometry):
        return transform(self._forward.transform, geometry)

    def to_lonlat(self, geometry):
        return transform(self._inverse.transform, geometry)

    def __repr__(self):
        return f"LocalFrame(lon={self.lon}, lat={self.lat})"


def reference_point(geometry, toward, frame):
    """Return the [lon, lat] a candidate route starts from.

    For a Point that is the point itself; for a LineString it is the point on
    the line nearest to ``toward``.
    """
    if geometry.geom_type == "Point":
        return [geometry.x, geometry.y]
    if geometry.geom_type == "LineString":
        line = frame.to_meters(geometry)
        target = frame.to_meters(Point(toward[0], toward[1]))
        nearest = frame.to_lonlat(line.interpolate(line.project(target)))
        return [nearest.x, nearest.y]
    raise ValueError(f"Unsupported geometry type: {geometry.geom_type}")


def walk_toward(origin, toward, distance_m, frame):
    """Return the [lon, lat] reached by walking ``distance_m`` from origin toward ``toward``.

    ``toward`` only supplies the bearing; the walk may stop short of it or
    overshoot it.
    """
    start = frame.to_meters(Point(origin[0], origin[1]))
    target = frame.to_meters(Point(toward[0], toward[1]))
    dx = target.x - start.x
    dy = target.y - start.y
    length = math.hypot(dx, dy)
    if length == 0:
        return list(origin[:2])
    scale = distance_m / length
    reached = frame.to_lonlat(Point(start.x + dx * scale, start.y + dy * scale))
    return [reached.x, reached.y]


def planar_distance_m(a, b, frame):
    """Planar distance in meters between two shapely geometries."""
    return frame.to_meters(a).distance(frame.to_meters(b))
