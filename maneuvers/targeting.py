"""
Rendezvous targeting.

Solves the two-point boundary value problem for a single impulsive burn:
find Δv such that the deputy, starting from its current state, is at a
commanded relative position after a given transfer time.

The 3x3 system is:
    Free variables:  Δv = [Δv_R, Δv_I, Δv_C] at departure
    Constraint:      r(t_f) − r_target = 0

With the transition blocks extracted from the propagator,

    v_required = Phi_rv⁻¹ · (r_target − Phi_rr · r_0)
    Δv         = v_required − v_0

Because the propagator is linear the solution is exact in one step; no
Newton iteration is needed.
"""

from __future__ import annotations

import logging

import numpy as np
from typing import Optional

from ..core.types import RelativeState, as_vector3
from ..core.config import GuidanceConfig
from ..core.errors import SingularTargetingError
from ..astrodynamics.propagator import RelativePropagator
from .transition import extract_transition_blocks

logger = logging.getLogger(__name__)


class RendezvousTargeter:
    """Single-burn position targeter.

    Attributes:
        propagator: Linear relative-motion propagator.
        config: Guidance configuration (singularity tolerance).
    """

    def __init__(self, propagator: RelativePropagator,
                 config: Optional[GuidanceConfig] = None):
        """Initialize the targeter.

        Args:
            propagator: Configured propagator instance.
            config: Guidance configuration. Defaults to GuidanceConfig().
        """
        self.propagator = propagator
        self.config = config if config is not None else GuidanceConfig()

    def solve(self,
              initial_state: RelativeState,
              target_position: np.ndarray,
              transfer_time: float,
              theta0: float
              ) -> np.ndarray:
        """Departure Δv that lands on ``target_position`` after ``transfer_time``.

        Args:
            initial_state: Deputy state at departure (pre-burn).
            target_position: Desired relative position at arrival [m].
            transfer_time: Time of flight [s].
            theta0: Chief true anomaly at departure [rad].

        Returns:
            Required Δv [m/s], shape (3,).

        Raises:
            SingularTargetingError: Phi_rv is not invertible for this
                transfer time and geometry.
        """
        target = as_vector3(target_position)
        theta_f = self.propagator.phase_after(theta0, transfer_time)

        phi_rr, phi_rv = extract_transition_blocks(
            self.propagator, theta0, theta_f, transfer_time
        )

        det = float(np.linalg.det(phi_rv))
        if abs(det) < self.config.matrix_singularity_tolerance:
            logger.warning(
                "Singular targeting: det(Phi_rv)=%.3e for transfer_time=%.1f s",
                det, transfer_time,
            )
            raise SingularTargetingError(det, transfer_time)

        residual = target - phi_rr @ initial_state.position
        v_required = np.linalg.solve(phi_rv, residual)
        delta_v = v_required - initial_state.velocity

        logger.debug(
            "Targeted %s in %.1f s from theta=%.4f: |dv|=%.4f m/s",
            target.tolist(), transfer_time, theta0, np.linalg.norm(delta_v),
        )
        return delta_v


def solve_rendezvous_burn(propagator: RelativePropagator,
                          initial_state: RelativeState,
                          target_position: np.ndarray,
                          transfer_time: float,
                          theta0: float,
                          config: Optional[GuidanceConfig] = None
                          ) -> np.ndarray:
    """One-off convenience wrapper around :meth:`RendezvousTargeter.solve`."""
    return RendezvousTargeter(propagator, config).solve(
        initial_state, target_position, transfer_time, theta0
    )
