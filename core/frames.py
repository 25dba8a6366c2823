"""
Relative-motion frame transformations.

Provides conversions between:
    - RIC: radial (outward), in-track (velocity direction), cross-track
      (orbit normal). The frame every public interface uses.
    - YA: Yamanaka-Ankersen LVLH, x = in-track, y = -cross-track,
      z = -radial (toward the central body).
    - Scene: display axes, X = in-track, Y = radial, Z = cross-track.

RIC and YA differ only by a signed permutation, so the 6x6 mapping is
orthogonal and its inverse is its transpose.
"""

from __future__ import annotations

import numpy as np
from .constants import DISPLAY_SCALE


# ya = P3 · ric
_RIC_TO_YA_3 = np.array([
    [0., 1., 0.],
    [0., 0., -1.],
    [-1., 0., 0.]
])

RIC_TO_YA = np.block([
    [_RIC_TO_YA_3, np.zeros((3, 3))],
    [np.zeros((3, 3)), _RIC_TO_YA_3]
])
YA_TO_RIC = RIC_TO_YA.T


def ric_to_ya(rv_ric: np.ndarray) -> np.ndarray:
    """Convert a 6-element RIC state vector to the YA frame."""
    return RIC_TO_YA @ rv_ric


def ya_to_ric(rv_ya: np.ndarray) -> np.ndarray:
    """Convert a 6-element YA state vector to the RIC frame."""
    return YA_TO_RIC @ rv_ya


def stm_ya_to_ric(phi_ya: np.ndarray) -> np.ndarray:
    """Re-express a 6x6 YA-frame transition matrix in RIC.

    Phi_ric = P^T · Phi_ya · P with P = RIC_TO_YA.
    """
    return YA_TO_RIC @ phi_ya @ RIC_TO_YA


def to_scene(points_ric: np.ndarray, scale: float = DISPLAY_SCALE) -> np.ndarray:
    """Map RIC positions to scaled display coordinates.

    Args:
        points_ric: Positions [m], shape (3,) or (N, 3).
        scale: Scene units per meter.

    Returns:
        Scene positions [X=I, Y=R, Z=C], same shape as the input.
    """
    pts = np.asarray(points_ric, dtype=float)
    return pts[..., [1, 0, 2]] * scale


def from_scene(points_scene: np.ndarray, scale: float = DISPLAY_SCALE) -> np.ndarray:
    """Inverse of :func:`to_scene`."""
    pts = np.asarray(points_scene, dtype=float)
    return pts[..., [1, 0, 2]] / scale
