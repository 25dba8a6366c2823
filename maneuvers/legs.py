"""
Leg planning for waypoint sequences.

A leg is one complete transfer to a waypoint:
    1. Departure burn from the targeting solver
    2. Coast for the transfer time
    3. Arrival burn that nulls the arrival velocity (stationary hold)

Transfer time is a deterministic function of straight-line distance and
a nominal closing rate, floored at a minimum so that short hops never
drive Phi_rv toward the dt -> 0 singularity.
"""

from __future__ import annotations

import logging

import numpy as np
from typing import Iterable, Optional, Sequence

from ..core.types import (
    RelativeState, Waypoint, ManeuverLeg, LegPlan, as_vector3
)
from ..core.config import GuidanceConfig
from ..astrodynamics.propagator import RelativePropagator
from .targeting import RendezvousTargeter

logger = logging.getLogger(__name__)


class LegPlanner:
    """Plans single legs and chained multi-waypoint sequences.

    Attributes:
        propagator: Linear relative-motion propagator.
        config: Guidance configuration.
        targeter: Rendezvous targeter sharing the same propagator.
    """

    def __init__(self, propagator: RelativePropagator,
                 config: Optional[GuidanceConfig] = None):
        """Initialize the leg planner.

        Args:
            propagator: Configured propagator instance.
            config: Guidance configuration. Defaults to GuidanceConfig().
        """
        self.propagator = propagator
        self.config = config if config is not None else GuidanceConfig()
        self.targeter = RendezvousTargeter(propagator, self.config)

    def transfer_time(self, from_position: np.ndarray,
                      to_position: np.ndarray) -> float:
        """Transfer time for a hop [s].

        distance / closing_rate, floored at min_transfer_time_s.
        """
        dist = float(np.linalg.norm(as_vector3(to_position) - as_vector3(from_position)))
        return max(dist / self.config.closing_rate_m_s,
                   self.config.min_transfer_time_s)

    def plan_leg(self,
                 state: RelativeState,
                 target_position: np.ndarray,
                 theta0: float
                 ) -> LegPlan:
        """Plan one leg from ``state`` to ``target_position``.

        Args:
            state: Deputy state at departure (pre-burn).
            target_position: Waypoint position [m].
            theta0: Chief true anomaly at departure [rad].

        Returns:
            LegPlan with the leg, the stationary arrival state and the
            arrival phase.

        Raises:
            SingularTargetingError: Propagated from the targeter.
        """
        target = as_vector3(target_position)
        transfer_time = self.transfer_time(state.position, target)

        delta_v = self.targeter.solve(state, target, transfer_time, theta0)

        # Impulsive burn: velocity jumps, position unchanged
        post_burn = state.with_burn(delta_v)
        arrival_theta = self.propagator.phase_after(theta0, transfer_time)
        arrival = self.propagator.propagate(
            post_burn, theta0, arrival_theta, transfer_time
        )

        leg = ManeuverLeg(
            target_position=target,
            transfer_time=transfer_time,
            delta_v=delta_v,
            arrival_delta_v=-arrival.velocity,
        )

        logger.debug(
            "Leg to %s: %.1f s, departure %.4f m/s, arrival %.4f m/s",
            target.tolist(), transfer_time,
            leg.departure_magnitude, leg.arrival_magnitude,
        )

        return LegPlan(
            leg=leg,
            arrival_state=RelativeState.stationary(arrival.position),
            arrival_theta=arrival_theta,
        )

    def plan_sequence(self,
                      state: RelativeState,
                      waypoints: Sequence[Waypoint],
                      theta0: float
                      ) -> list[ManeuverLeg]:
        """Plan legs through every waypoint in order.

        Each leg departs from the previous leg's stationary arrival state
        (the arrival burn is assumed to have nulled the velocity).

        Args:
            state: Deputy state before the first departure burn.
            waypoints: Ordered waypoints.
            theta0: Chief true anomaly at the first departure [rad].

        Returns:
            One ManeuverLeg per waypoint.
        """
        legs = []
        theta = theta0

        for waypoint in waypoints:
            plan = self.plan_leg(state, waypoint.position, theta)
            legs.append(plan.leg)
            state = plan.arrival_state
            theta = plan.arrival_theta

        return legs


def leg_delta_v(leg: ManeuverLeg) -> float:
    """Departure plus arrival Δv magnitude for one leg [m/s]."""
    return leg.total_magnitude


def total_delta_v(legs: Iterable[ManeuverLeg]) -> float:
    """Sum of departure and arrival Δv magnitudes over all legs [m/s]."""
    return sum(leg.total_magnitude for leg in legs)
