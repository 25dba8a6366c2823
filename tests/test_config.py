"""
Tests for configuration, value types, presets and natural motion.
"""

import numpy as np
import pytest

from rpo_guidance.core.types import RelativeState, OrbitalElements, ManeuverQueue, as_vector3
from rpo_guidance.core.config import GuidanceConfig, ScenarioConfig, DEFAULT_ORBITAL_ELEMENTS
from rpo_guidance.core.constants import MU_EARTH
from rpo_guidance.core.presets import PresetName, DEFAULT_PRESET, get_preset
from rpo_guidance.astrodynamics.natural_motion import natural_motion_in_track_velocity
from rpo_guidance.astrodynamics.propagator import HCWPropagator


# =============================================================================
# CONFIGURATION
# =============================================================================

class TestConfig:

    def test_defaults(self):
        cfg = GuidanceConfig()
        assert cfg.min_transfer_time_s == 60.0
        assert cfg.min_waypoint_separation_m == 10.0
        assert cfg.max_leg_delta_v_m_s == 5.0
        assert cfg.max_waypoints == 3
        assert cfg.matrix_singularity_tolerance == 1e-10

    @pytest.mark.parametrize("kwargs", [
        {"min_transfer_time_s": 0.0},
        {"closing_rate_m_s": -1.0},
        {"max_waypoints": 0},
        {"matrix_singularity_tolerance": -1e-3},
    ])
    def test_rejects_bad_limits(self, kwargs):
        with pytest.raises(ValueError):
            GuidanceConfig(**kwargs)

    def test_scenario_defaults_to_leo(self):
        assert ScenarioConfig().elements is DEFAULT_ORBITAL_ELEMENTS
        assert DEFAULT_ORBITAL_ELEMENTS.semi_major_axis == pytest.approx(6.771e6, rel=2e-3)

    @pytest.mark.parametrize("e", [-0.1, 1.0, 1.5])
    def test_rejects_non_elliptic_orbit(self, e):
        with pytest.raises(ValueError):
            OrbitalElements(eccentricity=e, gravitational_parameter=MU_EARTH,
                            angular_momentum=5.2e10)


# =============================================================================
# VALUE TYPES
# =============================================================================

class TestValueTypes:

    def test_as_vector3_rejects_wrong_shape(self):
        with pytest.raises(ValueError):
            as_vector3([1.0, 2.0])

    def test_burn_changes_velocity_only(self):
        state = RelativeState(position=[1.0, 2.0, 3.0], velocity=[0.1, 0.0, 0.0])
        burned = state.with_burn([0.0, 0.5, 0.0])
        np.testing.assert_array_equal(burned.position, state.position)
        np.testing.assert_allclose(burned.velocity, [0.1, 0.5, 0.0])
        np.testing.assert_allclose(state.velocity, [0.1, 0.0, 0.0])

    def test_state_vector_round_trip(self):
        rv = np.arange(6.0)
        np.testing.assert_array_equal(RelativeState.from_vector(rv).state_vector, rv)

    def test_queue_rejects_bad_index(self):
        with pytest.raises(ValueError):
            ManeuverQueue(legs=(), current_leg_index=0, start_theta=0.0, current_theta=0.0)


# =============================================================================
# PRESETS AND NATURAL MOTION
# =============================================================================

class TestPresets:

    def test_default_is_nmc(self):
        assert DEFAULT_PRESET is PresetName.NMC_ELLIPSE

    @pytest.mark.parametrize("name", list(PresetName))
    def test_every_preset_builds(self, name):
        preset = get_preset(name)
        assert preset.num_orbits > 0
        assert preset.time_acceleration > 0
        assert preset.state.position.shape == (3,)

    def test_nmc_velocity_is_twice_mean_motion(self, elements):
        vi = natural_motion_in_track_velocity(elements, 1000.0)
        assert vi == pytest.approx(-2.0 * elements.mean_motion * 1000.0, rel=0.01)

    def test_no_offset_no_velocity(self, circular_elements):
        assert natural_motion_in_track_velocity(circular_elements, 0.0) == \
            pytest.approx(0.0, abs=1e-9)

    def test_natural_motion_does_not_drift(self, circular_elements):
        hcw = HCWPropagator(circular_elements)
        state = RelativeState(
            position=[1000.0, 0.0, 0.0],
            velocity=[0.0, natural_motion_in_track_velocity(circular_elements, 1000.0), 0.0],
        )
        final = hcw.propagate(state, 0.0, 2 * np.pi, hcw.period)
        # Linear drift from the second-order vis-viva term only
        assert abs(final.in_track - state.in_track) < 5.0
