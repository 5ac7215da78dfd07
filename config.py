# config.py — mycelium route synthesis configuration
# Edit this file to change buffer size, sampling counts, pacing, etc.

# ── Buffer sampling ──────────────────────────────────────────────────
# Distance (meters) of the search region drawn around every input feature.
BUFFER_SIZE = 1200

# Segments per quarter circle used when buffering, and the target number of
# ring vertices kept after resampling.
BUFFER_STEPS = 10

# ── Candidate generation ─────────────────────────────────────────────
# Number of origin→random-point lines generated per feature.
NUM_RANDOM_POINTS = 8

# Number of random-point→random-point lines generated per feature.
NUM_RANDOM_LINES = 10

# Shortest walk (meters) from the reference point toward a buffer vertex.
MIN_WALK_DISTANCE = 10

# ── Directions API ───────────────────────────────────────────────────
DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox"
DIRECTIONS_PROFILE = "walking"
DIRECTIONS_TIMEOUT = 30

# Environment variable holding the Mapbox Directions access token.
TOKEN_ENV_VAR = "MAPBOX_DIRECTIONS"

# Pause (ms) after every response.  Mapbox enforces a per-minute request
# limit, so requests are never sent back to back.
SLEEP_MS = 700

# ── Simplification ───────────────────────────────────────────────────
# Tolerance is in degrees (~11m at the equator).
SIMPLIFY_TOLERANCE = 0.0001

# High quality skips the radial-distance pre-pass and runs Douglas-Peucker only.
SIMPLIFY_HIGH_QUALITY = True

# ── Logging ──────────────────────────────────────────────────────────
LOG_FILE = "mycelium.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
