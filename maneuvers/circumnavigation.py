"""
Forced-motion circumnavigation (FMC).

Closed-form uniform circular motion in the radial/in-track plane about
the chief, passing through a target point, with the cross-track offset
held fixed. Independent of the linear propagator and stateless: the same
``time_since_entry`` always yields the same state.
"""

from __future__ import annotations

import numpy as np

from ..core.types import RelativeState, as_vector3
from ..core.constants import FMC_STATIONARY_THRESHOLD_M


def fmc_state(target_position: np.ndarray,
              time_since_entry: float,
              mean_motion: float,
              stationary_threshold_m: float = FMC_STATIONARY_THRESHOLD_M
              ) -> RelativeState:
    """Deputy state on the circumnavigation circle.

    The circle has radius R = sqrt(r² + i²) of the target in the R-I
    plane and starts at the target's phase alpha = atan2(i, r):

        phi      = n·t + alpha
        position = (R cos phi, R sin phi, c)
        velocity = (−R n sin phi, R n cos phi, 0)

    Args:
        target_position: Target point [R, I, C] [m].
        time_since_entry: Time since FMC began [s].
        mean_motion: Angular rate of the circle [rad/s].
        stationary_threshold_m: Radius below which the target is treated
            as the chief itself and the deputy holds station there.

    Returns:
        RelativeState on the circle.
    """
    target = as_vector3(target_position)
    r, i, c = target
    radius = np.hypot(r, i)

    if radius < stationary_threshold_m:
        return RelativeState.stationary(target)

    alpha = np.arctan2(i, r)
    phi = mean_motion * time_since_entry + alpha
    cos_p, sin_p = np.cos(phi), np.sin(phi)

    return RelativeState(
        position=[radius * cos_p, radius * sin_p, c],
        velocity=[-radius * mean_motion * sin_p, radius * mean_motion * cos_p, 0.0],
    )
