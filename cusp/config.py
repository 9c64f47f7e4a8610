"""
Configuration & Editor Constants
================================
Central registry for the editor defaults, solver limits and the curve file
format. Nothing in here is read from disk; callers override per call where a
parameter exists.
"""

# curve model
MAX_POINTS: int = 100
DEFAULT_CONTROL_POINT_DISTANCE: float = 50.0
NORMALIZE_EPSILON: float = 1e-3
MIN_SCALE_FACTOR: float = 0.1

# Jacobi solver
MAX_JACOBI_ITERATIONS: int = 50
JACOBI_EPSILON: float = 0.01

# sampling
DEFAULT_SEGMENT_STEPSIZE: float = 0.02
DEFAULT_EXPORT_SUBDIVISIONS: int = 100

# editor canvas
HIT_RADIUS: float = 4.0
DEFAULT_WIDTH: int = 480
DEFAULT_HEIGHT: int = 640

# files
SPLINE_EXTENSION: str = "csp"
HEADER_MARKER: str = "# Cusp"

# logging
LOG_LEVEL_ENV: str = "CUSP_LOG_LEVEL"
DEFAULT_LOG_LEVEL: str = "INFO"
