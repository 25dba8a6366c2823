"""
Physical, mathematical and guidance constants.

Sources:
    - IERS conventions for the Earth gravitational parameter
    - Guidance limits tuned for LEO proximity operations at the
      hundreds-of-meters scale
"""

import numpy as np

# ---------------------------------------------------------------------------
# Mathematical constants
# ---------------------------------------------------------------------------
TWO_PI = 2.0 * np.pi

# ---------------------------------------------------------------------------
# Earth parameters
# ---------------------------------------------------------------------------
MU_EARTH = 3.986004418e14               # Gravitational parameter [m³/s²]

# ---------------------------------------------------------------------------
# LEO reference chief (~400 km altitude, near-circular)
# ---------------------------------------------------------------------------
LEO_ECCENTRICITY = 0.001
LEO_ANGULAR_MOMENTUM = 5.194e10         # h = sqrt(mu * p) [m²/s]

# ---------------------------------------------------------------------------
# Guidance defaults
# ---------------------------------------------------------------------------
MIN_TRANSFER_TIME_S = 60.0              # Floor on leg transfer time [s]
MIN_WAYPOINT_SEPARATION_M = 10.0        # Minimum waypoint spacing [m]
MAX_LEG_DELTA_V_M_S = 5.0               # Per-leg departure + arrival ceiling [m/s]
NOMINAL_CLOSING_RATE_M_S = 0.5          # Straight-line closing rate [m/s]
MAX_WAYPOINTS = 3
MATRIX_SINGULARITY_TOLERANCE = 1e-10    # |det(Phi_rv)| floor [s³]
FMC_STATIONARY_THRESHOLD_M = 1e-3       # Below this radius FMC holds station [m]
DEFAULT_WAYPOINT_SPACING_M = 500.0      # In-track spacing for new waypoints [m]

# ---------------------------------------------------------------------------
# Sampling / display
# ---------------------------------------------------------------------------
TRAJECTORY_POINTS_PER_ORBIT = 2000
POINTS_PER_LEG = 50
DISPLAY_SCALE = 0.01                    # Scene units per meter
