"""
Guidance configuration.

Central configuration objects passed into every component constructor.
Nothing in the package reads process-wide orbital state, so scenarios
with different chief orbits can run side by side.
"""

from dataclasses import dataclass, field

from .types import OrbitalElements
from .constants import (
    MU_EARTH, LEO_ECCENTRICITY, LEO_ANGULAR_MOMENTUM,
    MIN_TRANSFER_TIME_S, MIN_WAYPOINT_SEPARATION_M, MAX_LEG_DELTA_V_M_S,
    NOMINAL_CLOSING_RATE_M_S, MAX_WAYPOINTS, MATRIX_SINGULARITY_TOLERANCE,
    FMC_STATIONARY_THRESHOLD_M, TRAJECTORY_POINTS_PER_ORBIT, POINTS_PER_LEG,
    DISPLAY_SCALE,
)


# Chief in a ~400 km LEO (a ≈ 6771 km)
DEFAULT_ORBITAL_ELEMENTS = OrbitalElements(
    eccentricity=LEO_ECCENTRICITY,
    gravitational_parameter=MU_EARTH,
    angular_momentum=LEO_ANGULAR_MOMENTUM,
)


@dataclass(frozen=True)
class GuidanceConfig:
    """Targeting, leg planning and validation limits.

    Attributes:
        min_transfer_time_s: Floor on the distance-derived transfer time.
            Keeps Phi_rv away from the dt -> 0 singularity.
        min_waypoint_separation_m: Minimum spacing between consecutive
            waypoints (and between any pair of waypoints).
        max_leg_delta_v_m_s: Ceiling on departure + arrival delta-v per leg.
        closing_rate_m_s: Nominal straight-line closing rate used to pick
            transfer times.
        max_waypoints: Maximum number of live waypoints.
        matrix_singularity_tolerance: Minimum |det(Phi_rv)| accepted by
            the targeting solver [s³].
        fmc_stationary_threshold_m: FMC radius below which the deputy
            simply holds station at the target.
    """
    min_transfer_time_s: float = MIN_TRANSFER_TIME_S
    min_waypoint_separation_m: float = MIN_WAYPOINT_SEPARATION_M
    max_leg_delta_v_m_s: float = MAX_LEG_DELTA_V_M_S
    closing_rate_m_s: float = NOMINAL_CLOSING_RATE_M_S
    max_waypoints: int = MAX_WAYPOINTS
    matrix_singularity_tolerance: float = MATRIX_SINGULARITY_TOLERANCE
    fmc_stationary_threshold_m: float = FMC_STATIONARY_THRESHOLD_M

    def __post_init__(self):
        if self.min_transfer_time_s <= 0.0:
            raise ValueError("min_transfer_time_s must be positive")
        if self.closing_rate_m_s <= 0.0:
            raise ValueError("closing_rate_m_s must be positive")
        if self.max_waypoints < 1:
            raise ValueError("max_waypoints must be at least 1")
        if self.matrix_singularity_tolerance < 0.0:
            raise ValueError("matrix_singularity_tolerance must be non-negative")


@dataclass(frozen=True)
class SamplingConfig:
    """Trajectory sampling density for previews and display."""
    trajectory_points_per_orbit: int = TRAJECTORY_POINTS_PER_ORBIT
    points_per_leg: int = POINTS_PER_LEG
    display_scale: float = DISPLAY_SCALE    # Scene units per meter


@dataclass(frozen=True)
class ScenarioConfig:
    """Top-level scenario configuration."""
    elements: OrbitalElements = DEFAULT_ORBITAL_ELEMENTS
    guidance: GuidanceConfig = field(default_factory=GuidanceConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
