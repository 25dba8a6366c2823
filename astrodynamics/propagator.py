"""
Linear relative-motion propagators.

The guidance layer treats propagation as a black box behind
:class:`RelativePropagator`:
    - propagate(): advance a relative state between two chief phases
    - phase_after(): Kepler-consistent phase advance for an elapsed time
    - period / mean_motion of the chief orbit

Every implementation must be exactly linear in the relative state; the
finite-difference transition-matrix extraction relies on it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

from ..core.types import RelativeState, OrbitalElements, FrameType
from ..core.frames import ric_to_ya
from .kepler import phase_after, orbital_period, mean_motion
from .hcw import hcw_stm
from .yamanaka_ankersen import ya_stm


class RelativePropagator(ABC):
    """Propagator adapter for relative states about a chief orbit.

    Attributes:
        elements: Chief orbit elements, fixed for the propagator's lifetime.
    """

    def __init__(self, elements: OrbitalElements):
        """Initialize the propagator.

        Args:
            elements: Chief orbit. Owned by the caller; never modified.
        """
        self.elements = elements

    @property
    def period(self) -> float:
        """Chief orbital period [s]."""
        return orbital_period(self.elements)

    @property
    def mean_motion(self) -> float:
        """Chief mean motion [rad/s]."""
        return mean_motion(self.elements)

    def phase_after(self, theta0: float, dt: float) -> float:
        """Chief true anomaly ``dt`` seconds after ``theta0`` [rad]."""
        return phase_after(self.elements, theta0, dt)

    def propagate(self,
                  state: RelativeState,
                  theta0: float,
                  theta_f: float,
                  dt: float,
                  frame: FrameType = FrameType.RIC
                  ) -> RelativeState:
        """Advance a relative state from ``theta0`` to ``theta_f``.

        Args:
            state: Initial relative state in RIC.
            theta0: Initial chief true anomaly [rad].
            theta_f: Final chief true anomaly [rad].
            dt: Elapsed time between the two phases [s].
            frame: Frame of the returned state.

        Returns:
            Propagated relative state.
        """
        rv_f = self._transition(theta0, theta_f, dt) @ state.state_vector
        if frame is FrameType.YA:
            rv_f = ric_to_ya(rv_f)
        return RelativeState.from_vector(rv_f)

    @abstractmethod
    def _transition(self, theta0: float, theta_f: float, dt: float) -> np.ndarray:
        """6x6 RIC transition matrix for the given span."""


class YamanakaAnkersenPropagator(RelativePropagator):
    """Eccentric-chief propagator using the Yamanaka-Ankersen solution."""

    def _transition(self, theta0, theta_f, dt):
        return ya_stm(self.elements, theta0, theta_f, dt)


class HCWPropagator(RelativePropagator):
    """Circular-chief propagator using the HCW solution.

    Eccentricity is ignored; the phase advances uniformly at the mean
    motion so that ``theta_f - theta0 = n * dt``.
    """

    def phase_after(self, theta0: float, dt: float) -> float:
        return float(theta0 + self.mean_motion * dt)

    def _transition(self, theta0, theta_f, dt):
        return hcw_stm(self.mean_motion, dt)
