"""
directions.py — Mapbox Directions API client.

Only the first route geometry of a response is used, even though
alternatives are requested.
"""

import logging
import os

import requests

from config import DIRECTIONS_PROFILE, DIRECTIONS_TIMEOUT, DIRECTIONS_URL, TOKEN_ENV_VAR
from geojson_io import is_line_coordinates

logger = logging.getLogger(__name__)


class DirectionsError(Exception):
    """The directions API answered, but without a usable route."""
    pass


class MapboxDirections:
    """Resolves an origin/destination pair into a route geometry."""

    def __init__(self, access_token, profile=DIRECTIONS_PROFILE,
                 base_url=DIRECTIONS_URL, timeout=DIRECTIONS_TIMEOUT):
        if not access_token:
            raise ValueError("A Mapbox Directions access token is required")
        self.access_token = access_token
        self.profile = profile
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_env(cls, env_var=TOKEN_ENV_VAR, **kwargs):
        """Build a client from the token stored in ``env_var``."""
        token = os.environ.get(env_var)
        if not token:
            raise ValueError(
                f"Environment variable {env_var} not set. "
                f"This variable should contain your Mapbox Directions API token!"
            )
        return cls(token, **kwargs)

    @staticmethod
    def format_coordinates(origin, destination):
        """'lon,lat;lon,lat' path component."""
        return ";".join(f"{point[0]},{point[1]}" for point in (origin, destination))

    def build_url(self, origin, destination):
        return f"{self.base_url}/{self.profile}/{self.format_coordinates(origin, destination)}"

    def build_params(self):
        return {
            "steps": "false",
            "alternatives": "true",
            "access_token": self.access_token,
            "geometries": "geojson",
        }

    def _redact(self, text):
        return text.replace(self.access_token, "***")

    def route(self, origin, destination):
        """Return the GeoJSON LineString geometry of the first route.

        Raises:
            requests.exceptions.RequestException: transport or HTTP error.
            DirectionsError: no route, or a body that is not a directions response.
        """
        try:
            response = requests.get(
                self.build_url(origin, destination),
                params=self.build_params(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            # request URLs carry the access token
            raise type(e)(self._redact(str(e)), response=e.response) from None

        try:
            data = response.json()
        except ValueError as e:
            raise DirectionsError(f"Malformed directions response: {e}") from e

        if not isinstance(data, dict):
            raise DirectionsError("Malformed directions response: expected a JSON object")

        routes = data.get("routes")
        if not isinstance(routes, list) or not routes:
            reason = data.get("message") or data.get("code") or "no routes returned"
            raise DirectionsError(f"No route from {origin} to {destination}: {reason}")

        geometry = routes[0].get("geometry") if isinstance(routes[0], dict) else None
        if (
            not isinstance(geometry, dict)
            or geometry.get("type") != "LineString"
            or not is_line_coordinates(geometry.get("coordinates"))
        ):
            raise DirectionsError("Malformed directions response: first route has no LineString geometry")

        logger.debug(f"Route {origin} -> {destination}: {len(geometry['coordinates'])} vertices")
        return geometry
