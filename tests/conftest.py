"""Shared fixtures for the guidance test suite."""

import numpy as np
import pytest

from rpo_guidance.core.types import OrbitalElements, RelativeState, Waypoint
from rpo_guidance.core.config import DEFAULT_ORBITAL_ELEMENTS, GuidanceConfig
from rpo_guidance.core.constants import MU_EARTH
from rpo_guidance.astrodynamics.propagator import (
    YamanakaAnkersenPropagator, HCWPropagator
)


@pytest.fixture
def elements():
    """400 km LEO chief, e = 0.001."""
    return DEFAULT_ORBITAL_ELEMENTS


@pytest.fixture
def circular_elements():
    """Same chief with the eccentricity removed."""
    return OrbitalElements(
        eccentricity=0.0,
        gravitational_parameter=MU_EARTH,
        angular_momentum=DEFAULT_ORBITAL_ELEMENTS.angular_momentum,
    )


@pytest.fixture
def eccentric_elements():
    """Strongly eccentric chief to exercise the YA eccentric terms."""
    return OrbitalElements(
        eccentricity=0.1,
        gravitational_parameter=MU_EARTH,
        angular_momentum=5.4e10,
    )


@pytest.fixture
def ya(elements):
    return YamanakaAnkersenPropagator(elements)


@pytest.fixture
def hcw(circular_elements):
    return HCWPropagator(circular_elements)


@pytest.fixture
def config():
    return GuidanceConfig()


@pytest.fixture
def rng():
    """Seeded generator for deterministic property sweeps."""
    return np.random.default_rng(20240611)


@pytest.fixture
def vbar_waypoints():
    """Three waypoints 600 m apart on the V-bar behind the chief."""
    return [
        Waypoint(id="wp1", position=[0.0, -600.0, 0.0]),
        Waypoint(id="wp2", position=[0.0, -1200.0, 0.0]),
        Waypoint(id="wp3", position=[0.0, -1800.0, 0.0]),
    ]


@pytest.fixture
def origin_state():
    return RelativeState.stationary([0.0, 0.0, 0.0])
