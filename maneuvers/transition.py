"""
Transition matrix extraction by finite differencing.

Recovers the position rows of the state transition matrix,

    r_f = Phi_rr · r_0 + Phi_rv · v_0,

by probing the propagator with unit perturbations. Only forward
propagation is used, so the targeting layer never depends on how a
particular propagator is formulated. Because the propagators are exactly
linear, unit probes give the blocks exactly (to round-off), not
approximately.
"""

from __future__ import annotations

import numpy as np

from ..core.types import RelativeState
from ..astrodynamics.propagator import RelativePropagator


def extract_transition_blocks(propagator: RelativePropagator,
                              theta0: float,
                              theta_f: float,
                              dt: float
                              ) -> tuple[np.ndarray, np.ndarray]:
    """Extract Phi_rr and Phi_rv with six propagator calls.

    Column j of Phi_rr is the final position reached from a unit
    position along axis j at rest; column j of Phi_rv is the final
    position reached from the origin with unit velocity along axis j.

    Args:
        propagator: Linear relative-motion propagator.
        theta0: Initial chief true anomaly [rad].
        theta_f: Final chief true anomaly [rad].
        dt: Propagation span [s], strictly positive.

    Returns:
        phi_rr: 3x3 position-to-position block [-].
        phi_rv: 3x3 velocity-to-position block [s].
    """
    if dt <= 0.0:
        raise ValueError(f"propagation span must be positive, got dt={dt}")

    phi_rr = np.zeros((3, 3))
    phi_rv = np.zeros((3, 3))
    zero = np.zeros(3)

    for j, unit in enumerate(np.eye(3)):
        probe = propagator.propagate(RelativeState(unit, zero), theta0, theta_f, dt)
        phi_rr[:, j] = probe.position

        probe = propagator.propagate(RelativeState(zero, unit), theta0, theta_f, dt)
        phi_rv[:, j] = probe.position

    return phi_rr, phi_rv
