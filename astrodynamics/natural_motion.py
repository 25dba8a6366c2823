"""
Natural (drift-free) relative motion initial conditions.
"""

from __future__ import annotations

import numpy as np

from ..core.types import OrbitalElements


def natural_motion_in_track_velocity(elements: OrbitalElements,
                                     radial_offset_m: float) -> float:
    """In-track velocity giving zero secular drift at a radial offset.

    Matches the deputy's orbital energy (and so its period) to the chief's
    via vis-viva, evaluated with the chief at perigee (θ = 0).

    Args:
        elements: Chief orbit.
        radial_offset_m: Radial separation from the chief [m], positive up.

    Returns:
        Relative in-track velocity [m/s].
    """
    mu = elements.gravitational_parameter
    h = elements.angular_momentum
    e = elements.eccentricity

    r_c = h * h / (mu * (1.0 + e))          # perigee radius
    v_c = h / r_c                           # purely tangential at perigee
    r_d = r_c + radial_offset_m

    # Vis-viva with the chief's semi-major axis
    v_d = np.sqrt(mu * (2.0 / r_d - 1.0 / elements.semi_major_axis))

    # Remove the frame rotation rate (v_c / r_c) at the deputy radius
    return float(v_d - v_c * (r_d / r_c))
