"""
Yamanaka-Ankersen (YA) relative motion model.

Closed-form linear relative motion about a Keplerian chief orbit of
arbitrary eccentricity (Yamanaka & Ankersen, JGCD 25(1), 2002).

The solution is written in transformed coordinates
    r̃ = ρ·r,   r̃' = dr̃/dθ,   ρ = 1 + e·cos θ
with the chief true anomaly θ as independent variable. The in-plane
motion uses the pseudo-initial-value inverse evaluated at θ0 and the
fundamental matrix evaluated at θ_f (with J = k²·Δt); out-of-plane
motion is a pure rotation through Δθ in transformed coordinates.

Internally the YA frame is used (x = in-track, y = −cross-track,
z = −radial). The public STM is re-expressed in RIC.
"""

from __future__ import annotations

import numpy as np

from ..core.types import OrbitalElements
from ..core.frames import stm_ya_to_ric

# YA-frame indices
_IN_PLANE = [0, 2, 3, 5]    # x, z, x', z'
_OUT_OF_PLANE = [1, 4]      # y, y'


def ya_auxiliary(e: float, theta: float) -> tuple[float, float, float, float, float]:
    """Auxiliary functions of the YA solution.

    Returns:
        (ρ, s, c, s', c') where s = ρ·sin θ, c = ρ·cos θ and primes are
        derivatives with respect to θ.
    """
    sin_t = np.sin(theta)
    cos_t = np.cos(theta)
    rho = 1.0 + e * cos_t
    s = rho * sin_t
    c = rho * cos_t
    s_prime = cos_t + e * np.cos(2.0 * theta)
    c_prime = -(sin_t + e * np.sin(2.0 * theta))
    return rho, s, c, s_prime, c_prime


def _true_to_transformed(e: float, k2: float, theta: float) -> np.ndarray:
    """6x6 map from true to transformed coordinates at θ."""
    rho = 1.0 + e * np.cos(theta)
    T = np.zeros((6, 6))
    for j in range(3):
        T[j, j] = rho
        T[j + 3, j] = -e * np.sin(theta)
        T[j + 3, j + 3] = 1.0 / (k2 * rho)
    return T


def _transformed_to_true(e: float, k2: float, theta: float) -> np.ndarray:
    """6x6 map from transformed back to true coordinates at θ."""
    rho = 1.0 + e * np.cos(theta)
    T = np.zeros((6, 6))
    for j in range(3):
        T[j, j] = 1.0 / rho
        T[j + 3, j] = k2 * e * np.sin(theta)
        T[j + 3, j + 3] = k2 * rho
    return T


def _in_plane_pseudo_inverse(e: float, theta0: float) -> np.ndarray:
    """Map [x̃, z̃, x̃', z̃'](θ0) to the in-plane integration constants."""
    rho, s, c, _, _ = ya_auxiliary(e, theta0)
    inv_rho = 1.0 / rho
    m = np.array([
        [1.0 - e*e, 3*e*s*(inv_rho + inv_rho**2), -e*s*(1.0 + inv_rho), -e*c + 2.0],
        [0.0, -3*s*(inv_rho + e*e*inv_rho**2), s*(1.0 + inv_rho), c - 2.0*e],
        [0.0, -3*(c*inv_rho + e), c*(1.0 + inv_rho) + e, -s],
        [0.0, 3*rho + e*e - 1.0, -rho*rho, e*s],
    ])
    return m / (1.0 - e*e)


def _in_plane_fundamental(e: float, theta: float, J: float) -> np.ndarray:
    """In-plane fundamental matrix at θ, with J = k²·(t − t0)."""
    rho, s, c, s_p, c_p = ya_auxiliary(e, theta)
    inv_rho = 1.0 / rho
    return np.array([
        [1.0, -c*(1.0 + inv_rho), s*(1.0 + inv_rho), 3*rho*rho*J],
        [0.0, s, c, 2.0 - 3*e*s*J],
        [0.0, 2*s, 2*c - e, 3*(1.0 - 2*e*s*J)],
        [0.0, s_p, c_p, -3*e*(s_p*J + s*inv_rho**2)],
    ])


def ya_stm_ya_frame(elements: OrbitalElements, theta0: float,
                    theta_f: float, dt: float) -> np.ndarray:
    """YA state transition matrix in the YA frame.

    Args:
        elements: Chief orbit.
        theta0: Chief true anomaly at the initial time [rad].
        theta_f: Chief true anomaly at the final time [rad]; must be
            consistent with ``dt`` (see kepler.phase_after).
        dt: Elapsed time [s].

    Returns:
        Phi: 6x6 STM acting on [x, y, z, x', y', z'] (m, m/s).
    """
    e = elements.eccentricity
    k2 = elements.k_squared
    J = k2 * dt

    phi_t = np.zeros((6, 6))
    phi_t[np.ix_(_IN_PLANE, _IN_PLANE)] = (
        _in_plane_fundamental(e, theta_f, J) @ _in_plane_pseudo_inverse(e, theta0)
    )

    d_theta = theta_f - theta0
    c_d, s_d = np.cos(d_theta), np.sin(d_theta)
    phi_t[np.ix_(_OUT_OF_PLANE, _OUT_OF_PLANE)] = np.array([
        [c_d, s_d],
        [-s_d, c_d]
    ])

    return (_transformed_to_true(e, k2, theta_f)
            @ phi_t
            @ _true_to_transformed(e, k2, theta0))


def ya_stm(elements: OrbitalElements, theta0: float,
           theta_f: float, dt: float) -> np.ndarray:
    """YA state transition matrix in the RIC frame.

    Args:
        elements: Chief orbit.
        theta0: Initial chief true anomaly [rad].
        theta_f: Final chief true anomaly [rad].
        dt: Elapsed time [s].

    Returns:
        Phi: 6x6 STM acting on [R, I, C, vR, vI, vC] (m, m/s).
    """
    return stm_ya_to_ric(ya_stm_ya_frame(elements, theta0, theta_f, dt))
