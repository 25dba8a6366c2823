"""
Multi-leg maneuver queue.

State machine driving a deputy through a waypoint sequence:

    Idle (queue is None) --start_execution--> Executing (leg k)
    Executing (leg k)    --check_leg_transition--> Executing (leg k+1)
    Executing (last leg) --check_leg_transition--> Idle
    any                  --cancel_execution-->     Idle

The plan is chained from approximate stationary arrival states. Each
leg's departure burn is therefore re-solved against the live state at
the moment the leg begins, which removes accumulated propagation and
round-off error and keeps every leg an exact two-point solve.
"""

from __future__ import annotations

import dataclasses
import logging

import numpy as np
from typing import Optional, Sequence

from ..core.types import (
    RelativeState, Waypoint, ManeuverLeg, ManeuverQueue,
    LegTransition, TransitionKind
)
from ..core.config import GuidanceConfig
from ..core.errors import InvalidQueueStateError
from ..astrodynamics.propagator import RelativePropagator
from .legs import LegPlanner, total_delta_v

logger = logging.getLogger(__name__)


class ManeuverQueueController:
    """Owns the maneuver queue and drives leg transitions.

    The live deputy state and the simulation clock stay with the caller;
    every operation receives them explicitly and returns the state the
    caller should adopt.

    Attributes:
        planner: Leg planner.
        queue: Active queue, or None when idle.
        executing_waypoints: Waypoint snapshot taken at execution start.
        preview_legs: Most recent preview plan (not executing).
    """

    def __init__(self, propagator: RelativePropagator,
                 config: Optional[GuidanceConfig] = None):
        """Initialize an idle controller.

        Args:
            propagator: Configured propagator instance.
            config: Guidance configuration. Defaults to GuidanceConfig().
        """
        self.planner = LegPlanner(propagator, config)
        self.queue: Optional[ManeuverQueue] = None
        self.executing_waypoints: tuple[Waypoint, ...] = ()
        self.preview_legs: list[ManeuverLeg] = []

    @property
    def propagator(self) -> RelativePropagator:
        return self.planner.propagator

    @property
    def is_executing(self) -> bool:
        return self.queue is not None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start_execution(self,
                        state: RelativeState,
                        waypoints: Sequence[Waypoint],
                        elapsed_time: float,
                        base_theta: float = 0.0
                        ) -> Optional[RelativeState]:
        """Commit a waypoint plan and begin the first leg.

        Args:
            state: Live deputy state.
            waypoints: Ordered waypoints; snapshotted for the whole run.
            elapsed_time: Simulation time since ``base_theta`` [s].
            base_theta: Chief true anomaly at elapsed_time = 0 [rad].

        Returns:
            Live state with the first departure burn applied, or None
            when there are no waypoints.

        Raises:
            SingularTargetingError: A leg cannot be targeted.
        """
        if len(waypoints) == 0:
            return None

        start_theta = self.propagator.phase_after(base_theta, elapsed_time)

        # Leg 0 departs from the live state; later legs chain from its arrival
        first = self.planner.plan_leg(state, waypoints[0].position, start_theta)
        legs = [first.leg] + self.planner.plan_sequence(
            first.arrival_state, waypoints[1:], first.arrival_theta
        )

        self.executing_waypoints = tuple(waypoints)
        self.queue = ManeuverQueue(
            legs=tuple(legs),
            current_leg_index=0,
            start_theta=start_theta,
            current_theta=start_theta,
        )

        logger.info(
            "Maneuver queue started: %d leg(s), total dv %.4f m/s, theta=%.4f",
            len(legs), total_delta_v(legs), start_theta,
        )
        return state.with_burn(legs[0].delta_v)

    def check_leg_transition(self,
                             elapsed_in_leg: float,
                             live_state: RelativeState
                             ) -> Optional[LegTransition]:
        """Advance the queue once the active leg's transfer time has passed.

        Args:
            elapsed_in_leg: Time since the active leg began [s].
            live_state: Live deputy state at that time.

        Returns:
            None while idle or mid-leg. Otherwise a CONTINUE transition
            carrying the next leg's fresh departure velocity, or a COMPLETE
            transition holding station at the final waypoint. The caller
            restarts its leg clock at zero after either.

        Raises:
            InvalidQueueStateError: The waypoint snapshot does not cover the
                next leg. The queue is destroyed before raising.
            SingularTargetingError: The next leg cannot be targeted.
        """
        queue = self.queue
        if queue is None:
            return None

        leg = queue.current_leg
        if elapsed_in_leg < leg.transfer_time:
            return None

        next_index = queue.current_leg_index + 1
        next_theta = self.propagator.phase_after(queue.current_theta, leg.transfer_time)

        if next_index >= queue.n_legs:
            self._clear()
            logger.info("Maneuver queue complete at theta=%.4f", next_theta)
            return LegTransition(
                kind=TransitionKind.COMPLETE,
                state=RelativeState.stationary(live_state.position),
                theta=next_theta,
            )

        if next_index >= len(self.executing_waypoints):
            self._clear()
            logger.warning(
                "Leg %d has no waypoint in the execution snapshot (%d waypoints); "
                "execution aborted", next_index + 1, len(self.executing_waypoints),
            )
            raise InvalidQueueStateError(
                f"leg {next_index} references a waypoint outside the "
                f"{len(self.executing_waypoints)}-waypoint execution snapshot"
            )

        # Arrival burn nulls the velocity at the waypoint
        holding = RelativeState.stationary(live_state.position)
        fresh = self.planner.plan_leg(
            holding, self.executing_waypoints[next_index].position, next_theta
        ).leg

        legs = list(queue.legs)
        legs[next_index] = fresh
        self.queue = dataclasses.replace(
            queue,
            legs=tuple(legs),
            current_leg_index=next_index,
            current_theta=next_theta,
        )

        logger.info(
            "Leg %d/%d started: dv %.4f m/s, transfer %.1f s",
            next_index + 1, queue.n_legs, fresh.departure_magnitude, fresh.transfer_time,
        )
        return LegTransition(
            kind=TransitionKind.CONTINUE,
            state=holding.with_velocity(fresh.delta_v),
            theta=next_theta,
        )

    def cancel_execution(self) -> None:
        """Abort execution and drop any preview. Safe to call at any time."""
        if self.queue is not None:
            logger.info("Maneuver queue cancelled at leg %d",
                        self.queue.current_leg_index + 1)
        self._clear()
        self.preview_legs = []

    def _clear(self) -> None:
        self.queue = None
        self.executing_waypoints = ()

    # ------------------------------------------------------------------
    # Preview / read-only queries
    # ------------------------------------------------------------------

    def calculate_preview(self,
                          state: RelativeState,
                          waypoints: Sequence[Waypoint],
                          elapsed_time: float,
                          base_theta: float = 0.0
                          ) -> list[ManeuverLeg]:
        """Plan (without executing) the legs through ``waypoints``.

        The result is kept in ``preview_legs`` for the read-only queries.
        """
        if len(waypoints) == 0:
            self.preview_legs = []
        else:
            theta = self.propagator.phase_after(base_theta, elapsed_time)
            self.preview_legs = self.planner.plan_sequence(state, waypoints, theta)
        return self.preview_legs

    @property
    def total_delta_v(self) -> float:
        """Total Δv of the previewed plan [m/s]."""
        return total_delta_v(self.preview_legs)

    @property
    def leg_delta_vs(self) -> np.ndarray:
        """Per-leg departure + arrival Δv of the previewed plan [m/s]."""
        return np.array([leg.total_magnitude for leg in self.preview_legs])
