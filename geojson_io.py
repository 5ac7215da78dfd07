"""
geojson_io.py — reading and writing FeatureCollections for the CLIs.
"""

import json
import logging
import sys

logger = logging.getLogger(__name__)


class InputError(ValueError):
    """Input is missing, unreadable, or not a non-empty FeatureCollection."""
    pass


def is_position(value):
    """A GeoJSON position: at least two numbers."""
    return (
        isinstance(value, (list, tuple))
        and len(value) >= 2
        and all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in value)
    )


def is_line_coordinates(coordinates):
    """At least two positions."""
    return (
        isinstance(coordinates, list)
        and len(coordinates) >= 2
        and all(is_position(p) for p in coordinates)
    )


def feature_collection(features):
    return {"type": "FeatureCollection", "features": list(features)}


def validate_feature_collection(data):
    """Return a list of problems with ``data``; empty when it is usable."""
    errors = []
    if not isinstance(data, dict):
        return ["Root must be a JSON object"]
    if data.get("type") != "FeatureCollection":
        errors.append(f"Root type must be FeatureCollection, got {data.get('type')!r}")

    features = data.get("features")
    if not isinstance(features, list):
        errors.append("Missing 'features' array")
        return errors
    if not features:
        errors.append("'features' array is empty")

    for i, feature in enumerate(features):
        if not isinstance(feature, dict) or feature.get("type") != "Feature":
            errors.append(f"Feature {i}: not a GeoJSON Feature")
        elif not isinstance(feature.get("geometry"), dict):
            errors.append(f"Feature {i}: missing geometry")
        else:
            geometry = feature["geometry"]
            coordinates = geometry.get("coordinates")
            if geometry.get("type") == "Point" and not is_position(coordinates):
                errors.append(f"Feature {i}: Point needs a [lon, lat] position")
            elif geometry.get("type") == "LineString" and not is_line_coordinates(coordinates):
                errors.append(f"Feature {i}: LineString needs at least 2 [lon, lat] positions")
    return errors


def read_feature_collection(path=None):
    """Load a FeatureCollection from ``path``, or stdin when path is None or '-'."""
    source = "stdin" if path in (None, "-") else path
    try:
        if source == "stdin":
            data = json.load(sys.stdin)
        else:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
    except OSError as e:
        raise InputError(f"Cannot read {source}: {e}") from e
    except ValueError as e:
        raise InputError(f"{source} is not valid JSON: {e}") from e

    errors = validate_feature_collection(data)
    if errors:
        raise InputError(
            f"Input file should be a non-empty GeoJSON FeatureCollection ({source}): "
            + "; ".join(errors)
        )

    logger.info(f"Read {len(data['features'])} features from {source}")
    return data


def write_feature_collection(features, output=None):
    """Write features as pretty-printed JSON to ``output``, or stdout when None."""
    text = json.dumps(feature_collection(features), indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info(f"Wrote {len(features)} features to {output}")
    else:
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
