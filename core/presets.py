"""
Named initial-condition presets.

Each preset is a deputy RIC state plus display settings. Velocities that
depend on the chief orbit are computed from the supplied elements.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .types import RelativeState, OrbitalElements
from .config import DEFAULT_ORBITAL_ELEMENTS
from ..astrodynamics.natural_motion import natural_motion_in_track_velocity


class PresetName(Enum):
    RBAR_APPROACH = "R-bar Approach"
    VBAR_APPROACH = "V-bar Approach"
    NMC_ELLIPSE = "NMC (2:1 Ellipse)"


@dataclass(frozen=True)
class Preset:
    """Initial deputy state and display settings.

    Attributes:
        state: Initial relative state [m, m/s].
        num_orbits: Display span in chief periods.
        time_acceleration: Simulation speed-up factor.
    """
    state: RelativeState
    num_orbits: float
    time_acceleration: float


DEFAULT_PRESET = PresetName.NMC_ELLIPSE


def get_preset(name: PresetName,
               elements: OrbitalElements = DEFAULT_ORBITAL_ELEMENTS) -> Preset:
    """Build a preset for the given chief orbit."""
    if name is PresetName.RBAR_APPROACH:
        return Preset(
            state=RelativeState(
                position=[1500.0, 0.0, 0.0],
                velocity=[-0.05, natural_motion_in_track_velocity(elements, 1500.0), 0.0],
            ),
            num_orbits=2,
            time_acceleration=40,
        )
    if name is PresetName.VBAR_APPROACH:
        return Preset(
            state=RelativeState(
                position=[0.0, -1500.0, 0.0],
                velocity=[0.0, natural_motion_in_track_velocity(elements, 0.0) + 0.14, 0.0],
            ),
            num_orbits=2,
            time_acceleration=40,
        )
    if name is PresetName.NMC_ELLIPSE:
        return Preset(
            state=RelativeState(
                position=[1000.0, -2000.0, 0.0],
                velocity=[0.0, natural_motion_in_track_velocity(elements, 1000.0), 0.0],
            ),
            num_orbits=10,
            time_acceleration=50,
        )
    raise ValueError(f"unknown preset {name!r}")
