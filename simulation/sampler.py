"""
Trajectory sampling for previews and display.

Read-only views built from the propagator and planned legs; nothing here
mutates a queue or a state. All functions return RIC positions [m] as
arrays of shape (N, 3); use core.frames.to_scene for display axes.
"""

from __future__ import annotations

import numpy as np
from typing import Optional, Sequence

from ..core.types import RelativeState, ManeuverLeg, ManeuverQueue, ManeuverParams
from ..core.config import GuidanceConfig
from ..core.constants import TRAJECTORY_POINTS_PER_ORBIT, POINTS_PER_LEG
from ..astrodynamics.propagator import RelativePropagator
from ..maneuvers.circumnavigation import fmc_state


def sample_free_flight(propagator: RelativePropagator,
                       state: RelativeState,
                       base_theta: float,
                       num_orbits: float,
                       points_per_orbit: int = TRAJECTORY_POINTS_PER_ORBIT,
                       maneuver: Optional[ManeuverParams] = None,
                       config: Optional[GuidanceConfig] = None
                       ) -> np.ndarray:
    """Sample a coasting trajectory for ``num_orbits`` chief periods.

    If ``maneuver`` requested circumnavigation, samples past its transfer
    time come from the FMC solution instead of the propagator.

    Args:
        propagator: Relative-motion propagator.
        state: State at the start of the span.
        base_theta: Chief true anomaly at the start [rad].
        num_orbits: Span in chief orbital periods.
        points_per_orbit: Sample density.
        maneuver: Active single-point maneuver, if any.
        config: Guidance configuration (FMC stationary threshold).

    Returns:
        Positions, shape (floor(num_orbits * points_per_orbit) + 1, 3).
    """
    cfg = config if config is not None else GuidanceConfig()
    period = propagator.period
    n_points = int(num_orbits * points_per_orbit)
    points = np.zeros((n_points + 1, 3))

    for k in range(n_points + 1):
        dt = k / points_per_orbit * period

        if (maneuver is not None and maneuver.circumnavigate
                and dt >= maneuver.transfer_time):
            points[k] = fmc_state(
                maneuver.target_position, dt - maneuver.transfer_time,
                propagator.mean_motion, cfg.fmc_stationary_threshold_m,
            ).position
            continue

        theta_f = propagator.phase_after(base_theta, dt)
        points[k] = propagator.propagate(state, base_theta, theta_f, dt).position

    return points


def sample_leg(propagator: RelativePropagator,
               state: RelativeState,
               start_theta: float,
               transfer_time: float,
               num_points: int = POINTS_PER_LEG
               ) -> tuple[np.ndarray, float]:
    """Sample one coast arc at ``num_points + 1`` evenly spaced times.

    Args:
        propagator: Relative-motion propagator.
        state: Post-burn state at the start of the arc.
        start_theta: Chief true anomaly at the start [rad].
        transfer_time: Arc duration [s].
        num_points: Number of intervals.

    Returns:
        points: Positions including both end points, shape (num_points + 1, 3).
        end_theta: Chief true anomaly at the end of the arc [rad].
    """
    points = np.zeros((num_points + 1, 3))
    for j, t in enumerate(np.linspace(0.0, transfer_time, num_points + 1)):
        theta_t = propagator.phase_after(start_theta, t)
        points[j] = propagator.propagate(state, start_theta, theta_t, t).position

    return points, propagator.phase_after(start_theta, transfer_time)


def sample_plan(propagator: RelativePropagator,
                state: RelativeState,
                theta: float,
                legs: Sequence[ManeuverLeg],
                points_per_leg: int = POINTS_PER_LEG
                ) -> np.ndarray:
    """Preview a planned (not yet executing) leg sequence.

    Applies each departure burn, samples the arc, then restarts the next
    leg at rest on the previous waypoint.

    Returns:
        Positions, shape (len(legs) * (points_per_leg + 1), 3); empty
        (0, 3) when there are no legs.
    """
    chunks = []
    for leg in legs:
        arc, theta = sample_leg(propagator, state.with_burn(leg.delta_v), theta,
                                leg.transfer_time, points_per_leg)
        chunks.append(arc)
        state = RelativeState.stationary(leg.target_position)

    if not chunks:
        return np.zeros((0, 3))
    return np.vstack(chunks)


def sample_queue(propagator: RelativePropagator,
                 queue: ManeuverQueue,
                 leg_start_state: RelativeState,
                 duration: float,
                 points_per_leg: int = POINTS_PER_LEG,
                 points_per_orbit: int = TRAJECTORY_POINTS_PER_ORBIT
                 ) -> np.ndarray:
    """Sample the executing path: remaining legs, then free flight.

    Completed legs are skipped. The active leg is sampled from
    ``leg_start_state``, which already carries its departure burn; later
    legs start at rest on the previous waypoint with their planned burn.
    Whatever remains of ``duration`` after the last arrival is sampled as
    free flight from rest at the final waypoint.

    Args:
        propagator: Relative-motion propagator.
        queue: Active maneuver queue.
        leg_start_state: Live state at the start of the active leg
            (post departure burn).
        duration: Total display span from the start of the active leg [s].
        points_per_leg: Samples per leg arc.
        points_per_orbit: Free-flight sample density.

    Returns:
        Positions, shape (N, 3).
    """
    chunks = []
    theta = queue.current_theta
    state = leg_start_state
    elapsed = 0.0

    for k, leg in enumerate(queue.remaining_legs):
        if k > 0:
            state = state.with_burn(leg.delta_v)
        arc, theta = sample_leg(propagator, state, theta,
                                leg.transfer_time, points_per_leg)
        chunks.append(arc)
        elapsed += leg.transfer_time
        state = RelativeState.stationary(leg.target_position)

    remaining = duration - elapsed
    if remaining > 0.0:
        tail = sample_free_flight(propagator, state, theta,
                                  remaining / propagator.period, points_per_orbit)
        # First tail point duplicates the final arrival
        chunks.append(tail[1:])

    return np.vstack(chunks)
