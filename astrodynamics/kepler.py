"""
Kepler's equation and chief phase advance.

The relative-motion models are indexed by the chief true anomaly rather
than time. These helpers convert an elapsed time into a phase advance.

Phases are kept continuous (never wrapped to [0, 2π)): advancing by one
orbital period adds exactly 2π, so differences such as θ_f − θ_0 stay
meaningful across revolutions. The anomaly conversions use the
branch-free half-angle forms

    E = θ − 2·atan(β·sin θ / (1 + β·cos θ))
    θ = E + 2·atan(β·sin E / (1 − β·cos E))

with β = e / (1 + sqrt(1 − e²)), which are continuous in their argument.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import newton

from ..core.types import OrbitalElements


def _beta(e: float) -> float:
    return e / (1.0 + np.sqrt(1.0 - e * e))


def eccentric_from_true(theta: float, e: float) -> float:
    """Eccentric anomaly [rad], continuous in the true anomaly."""
    b = _beta(e)
    return float(theta - 2.0 * np.arctan(b * np.sin(theta) / (1.0 + b * np.cos(theta))))


def true_from_eccentric(E: float, e: float) -> float:
    """True anomaly [rad], continuous in the eccentric anomaly."""
    b = _beta(e)
    return float(E + 2.0 * np.arctan(b * np.sin(E) / (1.0 - b * np.cos(E))))


def mean_from_true(theta: float, e: float) -> float:
    """Mean anomaly [rad] for a (continuous) true anomaly."""
    E = eccentric_from_true(theta, e)
    return float(E - e * np.sin(E))


def solve_kepler(M: float, e: float, tol: float = 1e-14,
                 max_iter: int = 50) -> float:
    """Solve Kepler's equation M = E − e·sin(E) for E.

    Args:
        M: Mean anomaly [rad], any value.
        e: Eccentricity.

    Returns:
        Eccentric anomaly [rad] on the same revolution as M.
    """
    if e == 0.0:
        return float(M)
    x0 = M + e * np.sin(M) if e < 0.8 else M + np.pi - M % (2.0 * np.pi)
    return float(newton(
        lambda E: E - e * np.sin(E) - M,
        x0,
        fprime=lambda E: 1.0 - e * np.cos(E),
        tol=tol,
        rtol=1e-14,
        maxiter=max_iter,
    ))


def true_from_mean(M: float, e: float) -> float:
    """True anomaly [rad] for a (continuous) mean anomaly."""
    return true_from_eccentric(solve_kepler(M, e), e)


def phase_after(elements: OrbitalElements, theta0: float, dt: float) -> float:
    """Chief true anomaly after ``dt`` seconds starting from ``theta0``.

    Args:
        elements: Chief orbit.
        theta0: Initial true anomaly [rad].
        dt: Elapsed time [s]; may be zero or negative.

    Returns:
        Final true anomaly [rad], continuous with ``theta0``.
    """
    e = elements.eccentricity
    if e == 0.0:
        return float(theta0 + elements.mean_motion * dt)
    M0 = mean_from_true(theta0, e)
    return true_from_mean(M0 + elements.mean_motion * dt, e)


def orbital_period(elements: OrbitalElements) -> float:
    """Chief orbital period [s]."""
    return elements.period


def mean_motion(elements: OrbitalElements) -> float:
    """Chief mean motion [rad/s]."""
    return elements.mean_motion
