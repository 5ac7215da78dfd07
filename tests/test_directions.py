import os
import unittest
from unittest.mock import MagicMock, patch

import requests

from directions import DirectionsError, MapboxDirections


ROUTE_GEOMETRY = {"type": "LineString", "coordinates": [[0.0, 0.0], [0.0005, 0.0004], [0.001, 0.001]]}


def _response(payload=None, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    return response


class TestMapboxDirections(unittest.TestCase):
    def setUp(self):
        self.client = MapboxDirections("secret-token")

    def test_requires_token(self):
        with self.assertRaises(ValueError):
            MapboxDirections("")

    def test_format_coordinates(self):
        self.assertEqual(
            MapboxDirections.format_coordinates([4.9, 52.37], [4.91, 52.38]),
            "4.9,52.37;4.91,52.38",
        )

    def test_url_uses_walking_profile(self):
        url = self.client.build_url([4.9, 52.37], [4.91, 52.38])
        self.assertEqual(url, "https://api.mapbox.com/directions/v5/mapbox/walking/4.9,52.37;4.91,52.38")

    @patch("directions.requests.get")
    def test_returns_first_route_geometry(self, mock_get):
        other = {"type": "LineString", "coordinates": [[1, 1], [2, 2]]}
        mock_get.return_value = _response({
            "code": "Ok",
            "routes": [{"geometry": ROUTE_GEOMETRY}, {"geometry": other}],
        })

        geometry = self.client.route([0.0, 0.0], [0.001, 0.001])
        self.assertEqual(geometry, ROUTE_GEOMETRY)

        _, kwargs = mock_get.call_args
        self.assertEqual(kwargs["params"], {
            "steps": "false",
            "alternatives": "true",
            "access_token": "secret-token",
            "geometries": "geojson",
        })
        self.assertEqual(kwargs["timeout"], self.client.timeout)

    @patch("directions.requests.get")
    def test_no_routes(self, mock_get):
        mock_get.return_value = _response({"code": "NoRoute", "message": "No route found", "routes": []})
        with self.assertRaises(DirectionsError) as ctx:
            self.client.route([0.0, 0.0], [0.001, 0.001])
        self.assertIn("No route found", str(ctx.exception))

    @patch("directions.requests.get")
    def test_malformed_json(self, mock_get):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = response
        with self.assertRaises(DirectionsError):
            self.client.route([0.0, 0.0], [0.001, 0.001])

    @patch("directions.requests.get")
    def test_route_without_line_geometry(self, mock_get):
        mock_get.return_value = _response({"routes": [{"geometry": "encodedpolyline"}]})
        with self.assertRaises(DirectionsError):
            self.client.route([0.0, 0.0], [0.001, 0.001])

    @patch("directions.requests.get")
    def test_coordinates_must_be_positions(self, mock_get):
        for coordinates in (5, [[0.0, 0.0], None], [[0.0, 0.0], ["a", "b"]], [[0.0, 0.0]]):
            mock_get.return_value = _response({"routes": [{"geometry": {"type": "LineString", "coordinates": coordinates}}]})
            with self.assertRaises(DirectionsError):
                self.client.route([0.0, 0.0], [0.001, 0.001])

    @patch("directions.requests.get")
    def test_http_error_hides_token(self, mock_get):
        response = _response(status=401)
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            "401 Client Error: Unauthorized for url: https://api.mapbox.com/...?access_token=secret-token"
        )
        mock_get.return_value = response

        with self.assertRaises(requests.exceptions.HTTPError) as ctx:
            self.client.route([0.0, 0.0], [0.001, 0.001])
        self.assertNotIn("secret-token", str(ctx.exception))
        self.assertIn("401", str(ctx.exception))

    @patch("directions.requests.get")
    def test_network_error_propagates(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("connection refused")
        with self.assertRaises(requests.exceptions.ConnectionError):
            self.client.route([0.0, 0.0], [0.001, 0.001])


class TestFromEnv(unittest.TestCase):
    def test_reads_token(self):
        with patch.dict(os.environ, {"MAPBOX_DIRECTIONS": "abc"}):
            client = MapboxDirections.from_env()
        self.assertEqual(client.access_token, "abc")

    def test_missing_token(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ValueError) as ctx:
                MapboxDirections.from_env()
        self.assertIn("MAPBOX_DIRECTIONS", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
