import io
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from geojson_io import (
    InputError, feature_collection, read_feature_collection, validate_feature_collection,
    write_feature_collection,
)


POINT = {"type": "Feature", "properties": {"title": "x"}, "geometry": {"type": "Point", "coordinates": [1.0, 2.0]}}


class TestValidateFeatureCollection(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(validate_feature_collection(feature_collection([POINT])), [])

    def test_wrong_root_type(self):
        errors = validate_feature_collection({"type": "Feature", "features": [POINT]})
        self.assertTrue(any("FeatureCollection" in e for e in errors))

    def test_missing_features(self):
        errors = validate_feature_collection({"type": "FeatureCollection"})
        self.assertTrue(any("features" in e for e in errors))

    def test_empty_features(self):
        errors = validate_feature_collection(feature_collection([]))
        self.assertTrue(any("empty" in e for e in errors))

    def test_feature_without_geometry(self):
        errors = validate_feature_collection(feature_collection([{"type": "Feature", "properties": {}}]))
        self.assertTrue(any("geometry" in e for e in errors))

    def test_single_vertex_line(self):
        line = {"type": "Feature", "properties": {}, "geometry": {"type": "LineString", "coordinates": [[4.9, 52.3]]}}
        errors = validate_feature_collection(feature_collection([line]))
        self.assertTrue(any("LineString" in e for e in errors))

    def test_point_without_position(self):
        for coordinates in (None, [4.9], ["4.9", "52.3"], 5):
            point = {"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": coordinates}}
            errors = validate_feature_collection(feature_collection([point]))
            self.assertTrue(any("Point" in e for e in errors), coordinates)

    def test_not_an_object(self):
        self.assertEqual(validate_feature_collection([POINT]), ["Root must be a JSON object"])


class TestReadFeatureCollection(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "input.geojson")

    def tearDown(self):
        if os.path.exists(self.path):
            os.remove(self.path)
        os.rmdir(self.tmpdir)

    def _write(self, text):
        with open(self.path, "w") as f:
            f.write(text)

    def test_reads_file(self):
        self._write(json.dumps(feature_collection([POINT])))
        data = read_feature_collection(self.path)
        self.assertEqual(data["features"], [POINT])

    def test_reads_stdin(self):
        with patch("sys.stdin", io.StringIO(json.dumps(feature_collection([POINT])))):
            data = read_feature_collection("-")
        self.assertEqual(len(data["features"]), 1)

    def test_missing_file(self):
        with self.assertRaises(InputError):
            read_feature_collection(os.path.join(self.tmpdir, "missing.geojson"))

    def test_invalid_json(self):
        self._write("{not json")
        with self.assertRaises(InputError):
            read_feature_collection(self.path)

    def test_empty_collection(self):
        self._write(json.dumps(feature_collection([])))
        with self.assertRaises(InputError) as ctx:
            read_feature_collection(self.path)
        self.assertIn("FeatureCollection", str(ctx.exception))


class TestWriteFeatureCollection(unittest.TestCase):
    def test_writes_stdout(self):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            write_feature_collection([POINT])
        text = stdout.getvalue()
        self.assertEqual(json.loads(text), feature_collection([POINT]))
        # pretty printed
        self.assertIn('\n  "features"', text)

    def test_writes_file(self):
        fd, path = tempfile.mkstemp(suffix=".geojson")
        os.close(fd)
        try:
            write_feature_collection([POINT, POINT], path)
            with open(path) as f:
                data = json.load(f)
            self.assertEqual(len(data["features"]), 2)
        finally:
            os.remove(path)


if __name__ == "__main__":
    unittest.main()
