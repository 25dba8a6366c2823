"""
Hill-Clohessy-Wiltshire (HCW) relative motion model.

Closed-form relative motion about a circular chief. Drives the
circular-chief propagator and is the limit the eccentric
Yamanaka-Ankersen model reduces to at e = 0.

RIC axes, meters and seconds:
    x = radial, y = in-track, z = cross-track
"""

from __future__ import annotations

import numpy as np

from ..core.types import RelativeState, as_vector3


def hcw_blocks(n: float, dt: float
               ) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """The four 3x3 partitions of the HCW transition matrix.

    Args:
        n: Chief mean motion [rad/s].
        dt: Elapsed time [s].

    Returns:
        (phi_rr, phi_rv, phi_vr, phi_vv) so that
        r_f = phi_rr·r_0 + phi_rv·v_0 and v_f = phi_vr·r_0 + phi_vv·v_0.
    """
    nt = n * dt
    s, c = np.sin(nt), np.cos(nt)
    one_c = 1.0 - c

    phi_rr = np.array([
        [4.0 - 3.0*c,    0.0, 0.0],
        [6.0*(s - nt),   1.0, 0.0],
        [0.0,            0.0, c],
    ])
    phi_rv = np.array([
        [s/n,            2.0*one_c/n,          0.0],
        [-2.0*one_c/n,   (4.0*s - 3.0*nt)/n,   0.0],
        [0.0,            0.0,                  s/n],
    ])
    phi_vr = np.array([
        [3.0*n*s,        0.0, 0.0],
        [-6.0*n*one_c,   0.0, 0.0],
        [0.0,            0.0, -n*s],
    ])
    phi_vv = np.array([
        [c,              2.0*s,        0.0],
        [-2.0*s,         4.0*c - 3.0,  0.0],
        [0.0,            0.0,          c],
    ])
    return phi_rr, phi_rv, phi_vr, phi_vv


def hcw_stm(n: float, dt: float) -> np.ndarray:
    """6x6 HCW state transition matrix acting on [r, v]."""
    phi_rr, phi_rv, phi_vr, phi_vv = hcw_blocks(n, dt)
    return np.block([
        [phi_rr, phi_rv],
        [phi_vr, phi_vv],
    ])


def hcw_trajectory(state: RelativeState, n: float,
                   times: np.ndarray) -> np.ndarray:
    """Positions along an HCW coast.

    Args:
        state: Relative state at t = 0.
        n: Chief mean motion [rad/s].
        times: Sample times [s], shape (N,).

    Returns:
        Positions [m], shape (N, 3).
    """
    rv0 = state.state_vector
    return np.array([(hcw_stm(n, t) @ rv0)[0:3] for t in np.asarray(times, dtype=float)])


def hcw_rendezvous(state: RelativeState, target_position: np.ndarray,
                   n: float, dt: float) -> tuple[np.ndarray, np.ndarray]:
    """Two-impulse HCW transfer ending at rest on the target.

    Independent analytical counterpart of the finite-difference targeting
    path for a circular chief.

    Args:
        state: Deputy state before the departure burn.
        target_position: Arrival position [m].
        n: Chief mean motion [rad/s].
        dt: Transfer time [s].

    Returns:
        dv_depart: Departure burn [m/s], shape (3,).
        dv_arrive: Arrival burn nulling the arrival velocity [m/s], shape (3,).
    """
    phi_rr, phi_rv, phi_vr, phi_vv = hcw_blocks(n, dt)
    r0 = state.position

    v_depart = np.linalg.solve(phi_rv, as_vector3(target_position) - phi_rr @ r0)
    v_arrive = phi_vr @ r0 + phi_vv @ v_depart

    return v_depart - state.velocity, -v_arrive
