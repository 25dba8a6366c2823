"""
Simulation executive.

Thin driver that owns what the guidance core does not: the
live deputy state, the simulation clock, the waypoint set and the active
single-point maneuver. Each tick advances time, asks the queue controller
for a leg transition, and adopts whatever state it returns.

Clock model: ``initial_state`` is the deputy state at ``elapsed_time = 0``
and ``base_theta`` the chief phase at that instant. Burns, leg transitions
and completions re-anchor both and restart the clock at zero.
"""

from __future__ import annotations

import logging

import numpy as np
from typing import Optional

from ..core.types import (
    RelativeState, ManeuverParams, ManeuverLeg, ValidationIssue, TransitionKind
)
from ..core.config import ScenarioConfig
from ..astrodynamics.propagator import RelativePropagator, YamanakaAnkersenPropagator
from ..maneuvers.targeting import RendezvousTargeter
from ..maneuvers.queue import ManeuverQueueController
from ..maneuvers.validation import validate_waypoints, can_execute
from ..maneuvers.waypoints import WaypointSet
from ..maneuvers.single_point import execute_single_point, propagate_to_time
from .clock import advance_simulation_time
from .sampler import sample_free_flight, sample_plan, sample_queue

logger = logging.getLogger(__name__)


class SimulationExecutive:
    """Top-level proximity-operations driver.

    Attributes:
        config: Scenario configuration.
        propagator: Relative-motion propagator for the scenario's chief.
        controller: Multi-leg maneuver queue controller.
        waypoints: Editable waypoint set.
        initial_state: Deputy state at elapsed_time = 0.
        base_theta: Chief true anomaly at elapsed_time = 0 [rad].
        elapsed_time: Simulation time since the last re-anchor [s].
        maneuver: Active single-point maneuver, if any.
    """

    def __init__(self, initial_state: RelativeState,
                 config: Optional[ScenarioConfig] = None,
                 propagator: Optional[RelativePropagator] = None,
                 base_theta: float = 0.0):
        """Initialize the executive.

        Args:
            initial_state: Deputy state at t = 0.
            config: Scenario configuration. Defaults to ScenarioConfig().
            propagator: Propagator; defaults to Yamanaka-Ankersen for the
                configured chief.
            base_theta: Chief true anomaly at t = 0 [rad].
        """
        self.config = config if config is not None else ScenarioConfig()
        self.propagator = (propagator if propagator is not None
                           else YamanakaAnkersenPropagator(self.config.elements))
        self.targeter = RendezvousTargeter(self.propagator, self.config.guidance)
        self.controller = ManeuverQueueController(self.propagator, self.config.guidance)
        self.waypoints = WaypointSet(self.config.guidance.max_waypoints)

        self.initial_state = initial_state
        self.base_theta = base_theta
        self.elapsed_time = 0.0
        self.maneuver: Optional[ManeuverParams] = None

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    @property
    def theta(self) -> float:
        """Chief true anomaly now [rad]."""
        return self.propagator.phase_after(self.base_theta, self.elapsed_time)

    @property
    def current_state(self) -> RelativeState:
        """Deputy state now."""
        return propagate_to_time(
            self.propagator, self.initial_state, self.elapsed_time,
            self.base_theta, self.maneuver, self.config.guidance,
        )

    def tick(self, delta_seconds: float, acceleration: float = 1.0,
             duration: float = np.inf) -> RelativeState:
        """Advance the clock and process any leg transition.

        Args:
            delta_seconds: Wall-clock step [s].
            acceleration: Time acceleration factor.
            duration: Clamp for the elapsed time [s].

        Returns:
            Deputy state after the step.
        """
        advance = advance_simulation_time(
            self.elapsed_time, delta_seconds, acceleration, duration
        )
        self.elapsed_time = advance.time

        transition = self.controller.check_leg_transition(
            self.elapsed_time, self.current_state
        )
        if transition is not None:
            self._reanchor(transition.state, transition.theta)
            if transition.kind is TransitionKind.COMPLETE:
                logger.info("Waypoint sequence complete; holding at %s",
                            transition.state.position.tolist())

        return self.current_state

    def _reanchor(self, state: RelativeState, theta: float) -> None:
        self.initial_state = state
        self.base_theta = theta
        self.elapsed_time = 0.0

    # ------------------------------------------------------------------
    # Waypoint plan
    # ------------------------------------------------------------------

    def preview(self) -> list[ManeuverLeg]:
        """Recompute the preview plan for the current waypoints."""
        return self.controller.calculate_preview(
            self.current_state, self.waypoints.snapshot(),
            self.elapsed_time, self.base_theta,
        )

    def validation_issues(self) -> list[ValidationIssue]:
        """Validate the current waypoints against the preview plan."""
        if len(self.waypoints) == 0:
            return []
        legs = self.preview()
        return validate_waypoints(
            self.current_state.position, self.waypoints.snapshot(),
            legs, self.config.guidance,
        )

    def execute_waypoints(self) -> bool:
        """Start the waypoint queue if the plan validates.

        Returns:
            True if execution started.
        """
        if len(self.waypoints) == 0:
            return False
        issues = self.validation_issues()
        if not can_execute(issues):
            logger.info("Waypoint execution refused: %d validation issue(s)", len(issues))
            return False

        state = self.current_state
        theta = self.theta
        new_state = self.controller.start_execution(
            state, self.waypoints.snapshot(), self.elapsed_time, self.base_theta
        )
        if new_state is None:
            return False

        self.maneuver = None
        self.waypoints.clear()
        self._reanchor(new_state, theta)
        return True

    # ------------------------------------------------------------------
    # Single-point maneuver
    # ------------------------------------------------------------------

    def execute_burn(self, params: ManeuverParams) -> RelativeState:
        """Execute a single-point maneuver, cancelling any queue.

        Returns:
            Post-burn deputy state.
        """
        state = self.current_state
        theta = self.theta
        post_burn = execute_single_point(self.targeter, state, params, theta)

        self.controller.cancel_execution()
        self.maneuver = params
        self._reanchor(post_burn, theta)
        return post_burn

    def cancel(self) -> None:
        """Cancel any execution and hold the current free-flight state."""
        state = self.current_state
        theta = self.theta
        self.controller.cancel_execution()
        self.maneuver = None
        self._reanchor(state, theta)

    def reset(self, initial_state: RelativeState, base_theta: float = 0.0) -> None:
        """Load a new initial state, clearing waypoints and maneuvers."""
        self.controller.cancel_execution()
        self.waypoints.clear()
        self.maneuver = None
        self.initial_state = initial_state
        self.base_theta = base_theta
        self.elapsed_time = 0.0

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def trajectory_points(self, num_orbits: float) -> np.ndarray:
        """Trajectory for display: the executing path or free flight."""
        sampling = self.config.sampling
        queue = self.controller.queue
        if queue is not None:
            return sample_queue(
                self.propagator, queue, self.initial_state,
                num_orbits * self.propagator.period,
                sampling.points_per_leg, sampling.trajectory_points_per_orbit,
            )
        return sample_free_flight(
            self.propagator, self.initial_state, self.base_theta, num_orbits,
            sampling.trajectory_points_per_orbit, self.maneuver, self.config.guidance,
        )

    def preview_points(self) -> np.ndarray:
        """Dashed-preview points for the current (unexecuted) waypoints."""
        legs = self.preview()
        return sample_plan(self.propagator, self.current_state, self.theta,
                           legs, self.config.sampling.points_per_leg)
