"""
Foundational data types for the waypoint guidance core.

All state and configuration data flows through these dataclasses.
Convention:
    - Frame: RIC (radial, in-track, cross-track) unless stated otherwise
    - Distances: m
    - Time: seconds
    - Velocity: m/s
    - Angles: radians (phase = chief true anomaly)

Vectors are numpy arrays of shape (3,). Value types copy their input
arrays and mark them read-only, so a state can be shared freely without
being mutated behind its owner's back.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import TWO_PI


def as_vector3(v) -> np.ndarray:
    """Copy ``v`` into a read-only float array of shape (3,)."""
    arr = np.array(v, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class FrameType(Enum):
    """Relative-motion frame identifiers."""
    RIC = auto()        # Radial / In-track / Cross-track
    YA = auto()         # Yamanaka-Ankersen LVLH: x = I, y = -C, z = -R


class TransitionKind(Enum):
    """Outcome of a leg transition check."""
    CONTINUE = auto()
    COMPLETE = auto()


class ValidationIssueType(Enum):
    """Advisory waypoint problems. Values match the UI-facing labels."""
    TOO_CLOSE = "too_close"
    OVERLAPPING = "overlapping"
    HIGH_DELTA_V = "high_delta_v"


# ---------------------------------------------------------------------------
# Relative state and orbit
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class RelativeState:
    """Deputy state relative to the chief.

    Attributes:
        position: Relative position [m], shape (3,) [R, I, C].
        velocity: Relative velocity [m/s], shape (3,).
    """
    position: np.ndarray        # (3,) m
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))  # (3,) m/s

    def __post_init__(self):
        object.__setattr__(self, "position", as_vector3(self.position))
        object.__setattr__(self, "velocity", as_vector3(self.velocity))

    @property
    def radial(self) -> float:
        return float(self.position[0])

    @property
    def in_track(self) -> float:
        return float(self.position[1])

    @property
    def cross_track(self) -> float:
        return float(self.position[2])

    @property
    def state_vector(self) -> np.ndarray:
        """Combined [r, v] state vector, shape (6,)."""
        return np.concatenate([self.position, self.velocity])

    @classmethod
    def from_vector(cls, rv: np.ndarray) -> RelativeState:
        """Unpack a 6-element [r, v] vector."""
        rv = np.asarray(rv, dtype=float)
        return cls(position=rv[0:3], velocity=rv[3:6])

    @classmethod
    def stationary(cls, position) -> RelativeState:
        """Zero-velocity state at ``position``."""
        return cls(position=position, velocity=np.zeros(3))

    def with_burn(self, delta_v) -> RelativeState:
        """Apply an impulsive burn. Position is unchanged."""
        return RelativeState(position=self.position,
                             velocity=self.velocity + as_vector3(delta_v))

    def with_velocity(self, velocity) -> RelativeState:
        return RelativeState(position=self.position, velocity=velocity)

    def __repr__(self) -> str:
        return (f"RelativeState(position={self.position.tolist()}, "
                f"velocity={self.velocity.tolist()})")


@dataclass(frozen=True)
class OrbitalElements:
    """Chief orbit elements needed by the relative-motion models.

    Attributes:
        eccentricity: Orbit eccentricity, 0 <= e < 1.
        gravitational_parameter: Central body mu [m³/s²].
        angular_momentum: Specific angular momentum h [m²/s].
    """
    eccentricity: float
    gravitational_parameter: float
    angular_momentum: float

    def __post_init__(self):
        if not 0.0 <= self.eccentricity < 1.0:
            raise ValueError(f"eccentricity must be in [0, 1), got {self.eccentricity}")
        if self.gravitational_parameter <= 0.0 or self.angular_momentum <= 0.0:
            raise ValueError("gravitational_parameter and angular_momentum must be positive")

    @property
    def semi_latus_rectum(self) -> float:
        """p = h² / mu [m]."""
        return self.angular_momentum**2 / self.gravitational_parameter

    @property
    def semi_major_axis(self) -> float:
        """a = p / (1 - e²) [m]."""
        return self.semi_latus_rectum / (1.0 - self.eccentricity**2)

    @property
    def mean_motion(self) -> float:
        """n = sqrt(mu / a³) [rad/s]."""
        return float(np.sqrt(self.gravitational_parameter / self.semi_major_axis**3))

    @property
    def period(self) -> float:
        """Orbital period [s]."""
        return TWO_PI / self.mean_motion

    @property
    def k_squared(self) -> float:
        """Yamanaka-Ankersen constant k² = mu² / h³ [rad/s]."""
        return self.gravitational_parameter**2 / self.angular_momentum**3


# ---------------------------------------------------------------------------
# Waypoints and maneuvers
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class Waypoint:
    """User-authored target point.

    Attributes:
        id: Unique identifier (uuid4 hex).
        position: Target relative position [m], shape (3,).
    """
    id: str
    position: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "position", as_vector3(self.position))


@dataclass(frozen=True, eq=False)
class ManeuverLeg:
    """One planned transfer: departure burn, coast, arrival burn.

    Attributes:
        target_position: Waypoint position [m], shape (3,).
        transfer_time: Coast duration [s].
        delta_v: Departure burn [m/s], shape (3,).
        arrival_delta_v: Arrival burn nulling the arrival velocity [m/s].
    """
    target_position: np.ndarray
    transfer_time: float
    delta_v: np.ndarray
    arrival_delta_v: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "target_position", as_vector3(self.target_position))
        object.__setattr__(self, "delta_v", as_vector3(self.delta_v))
        object.__setattr__(self, "arrival_delta_v", as_vector3(self.arrival_delta_v))

    @property
    def departure_magnitude(self) -> float:
        return float(np.linalg.norm(self.delta_v))

    @property
    def arrival_magnitude(self) -> float:
        return float(np.linalg.norm(self.arrival_delta_v))

    @property
    def total_magnitude(self) -> float:
        """Departure plus arrival delta-v magnitude [m/s]."""
        return self.departure_magnitude + self.arrival_magnitude


@dataclass(frozen=True)
class LegPlan:
    """A planned leg together with where and when it ends.

    Attributes:
        leg: The maneuver leg.
        arrival_state: Stationary state at the propagated arrival position.
        arrival_theta: Chief phase at arrival [rad].
    """
    leg: ManeuverLeg
    arrival_state: RelativeState
    arrival_theta: float


@dataclass(frozen=True)
class ManeuverQueue:
    """Multi-leg execution state.

    Exists only while executing; the controller holds ``None`` when idle.

    Attributes:
        legs: Planned legs, in waypoint order.
        current_leg_index: Index of the active leg.
        start_theta: Phase at which execution began [rad].
        current_theta: Phase at the start of the active leg [rad].
    """
    legs: tuple[ManeuverLeg, ...]
    current_leg_index: int
    start_theta: float
    current_theta: float

    def __post_init__(self):
        if not 0 <= self.current_leg_index < len(self.legs):
            raise ValueError(
                f"current_leg_index {self.current_leg_index} out of range "
                f"for {len(self.legs)} legs"
            )

    @property
    def current_leg(self) -> ManeuverLeg:
        return self.legs[self.current_leg_index]

    @property
    def n_legs(self) -> int:
        return len(self.legs)

    @property
    def remaining_legs(self) -> tuple[ManeuverLeg, ...]:
        """Active leg and every leg after it."""
        return self.legs[self.current_leg_index:]


@dataclass(frozen=True, eq=False)
class ManeuverParams:
    """Single-point maneuver configuration.

    Mutually exclusive with an active maneuver queue.

    Attributes:
        target_position: Target relative position [m], shape (3,).
        transfer_time: Transfer duration [s].
        circumnavigate: Enter FMC once the transfer time has elapsed.
    """
    target_position: np.ndarray
    transfer_time: float
    circumnavigate: bool = False

    def __post_init__(self):
        object.__setattr__(self, "target_position", as_vector3(self.target_position))


@dataclass(frozen=True)
class LegTransition:
    """Result of a leg transition.

    Attributes:
        kind: CONTINUE (next leg started) or COMPLETE (queue finished).
        state: New live state for the caller to adopt; its elapsed-time
            clock restarts at zero.
        theta: Phase at the transition [rad].
    """
    kind: TransitionKind
    state: RelativeState
    theta: float


@dataclass(frozen=True)
class ValidationIssue:
    """Advisory waypoint problem.

    Attributes:
        kind: Issue type.
        waypoint_index: 0-based index of the offending waypoint.
        message: Human-readable description (1-based numbering).
    """
    kind: ValidationIssueType
    waypoint_index: int
    message: str


@dataclass(frozen=True)
class TimeAdvance:
    """Result of advancing the simulation clock.

    Attributes:
        time: New elapsed time [s], clamped to the display duration.
        completed: True when the clamp was hit.
    """
    time: float
    completed: bool
