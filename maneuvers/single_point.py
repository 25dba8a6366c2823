"""
Single-point maneuvers.

One-shot transfer to a commanded position with a user-chosen transfer
time, optionally followed by forced-motion circumnavigation once the
transfer completes. Mutually exclusive with the multi-leg queue.
"""

from __future__ import annotations

import logging

from typing import Optional

from ..core.types import RelativeState, ManeuverParams
from ..core.config import GuidanceConfig
from ..astrodynamics.propagator import RelativePropagator
from .targeting import RendezvousTargeter
from .circumnavigation import fmc_state

logger = logging.getLogger(__name__)


def execute_single_point(targeter: RendezvousTargeter,
                         state: RelativeState,
                         params: ManeuverParams,
                         theta: float
                         ) -> RelativeState:
    """Apply the departure burn for a single-point maneuver.

    Args:
        targeter: Rendezvous targeter.
        state: Live deputy state.
        params: Target position, transfer time and FMC flag.
        theta: Chief true anomaly now [rad].

    Returns:
        Post-burn deputy state.

    Raises:
        SingularTargetingError: The transfer time is not targetable.
    """
    delta_v = targeter.solve(state, params.target_position,
                             params.transfer_time, theta)
    logger.info(
        "Single-point burn to %s over %.1f s (fmc=%s)",
        params.target_position.tolist(), params.transfer_time, params.circumnavigate,
    )
    return state.with_burn(delta_v)


def propagate_to_time(propagator: RelativePropagator,
                      initial_state: RelativeState,
                      elapsed_time: float,
                      base_theta: float,
                      maneuver: Optional[ManeuverParams] = None,
                      config: Optional[GuidanceConfig] = None
                      ) -> RelativeState:
    """Deputy state ``elapsed_time`` after ``initial_state``.

    When ``maneuver`` requested circumnavigation and its transfer time has
    elapsed, the FMC solution takes over; otherwise the state is propagated
    from ``base_theta``.

    Args:
        propagator: Relative-motion propagator.
        initial_state: State at elapsed_time = 0 (post-burn if maneuvering).
        elapsed_time: Time since ``initial_state`` [s].
        base_theta: Chief true anomaly at elapsed_time = 0 [rad].
        maneuver: Active single-point maneuver, if any.
        config: Guidance configuration (FMC stationary threshold).

    Returns:
        Deputy state at ``elapsed_time``.
    """
    if (maneuver is not None and maneuver.circumnavigate
            and elapsed_time >= maneuver.transfer_time):
        cfg = config if config is not None else GuidanceConfig()
        return fmc_state(
            maneuver.target_position,
            elapsed_time - maneuver.transfer_time,
            propagator.mean_motion,
            cfg.fmc_stationary_threshold_m,
        )

    theta_f = propagator.phase_after(base_theta, elapsed_time)
    return propagator.propagate(initial_state, base_theta, theta_f, elapsed_time)
