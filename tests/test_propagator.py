"""
Tests for the linear relative-motion propagators.
"""

import numpy as np
import pytest

from rpo_guidance.core.types import RelativeState, FrameType
from rpo_guidance.core.frames import ric_to_ya, ya_to_ric, to_scene, from_scene
from rpo_guidance.astrodynamics.hcw import hcw_stm, hcw_trajectory
from rpo_guidance.astrodynamics.yamanaka_ankersen import ya_stm
from rpo_guidance.astrodynamics.kepler import orbital_period, mean_motion
from rpo_guidance.astrodynamics.propagator import (
    YamanakaAnkersenPropagator, HCWPropagator
)


def _random_state(rng):
    return RelativeState(
        position=rng.uniform(-2000.0, 2000.0, 3),
        velocity=rng.uniform(-1.0, 1.0, 3),
    )


# =============================================================================
# HCW
# =============================================================================

class TestHCW:

    def test_stm_is_identity_at_zero(self):
        np.testing.assert_allclose(hcw_stm(1.1e-3, 0.0), np.eye(6), atol=1e-15)

    def test_vbar_point_is_equilibrium(self, circular_elements):
        n = circular_elements.mean_motion
        state = RelativeState.stationary([0.0, -1000.0, 0.0])
        points = hcw_trajectory(state, n, np.linspace(0.0, 6000.0, 7))
        np.testing.assert_allclose(points, np.tile(state.position, (7, 1)), atol=1e-9)

    def test_zero_drift_ellipse_is_periodic(self, circular_elements):
        n = circular_elements.mean_motion
        rel = np.array([500.0, 0.0, 0.0, 0.0, -2.0 * n * 500.0, 0.0])
        final = hcw_stm(n, 2 * np.pi / n) @ rel
        np.testing.assert_allclose(final, rel, atol=1e-6)


# =============================================================================
# YAMANAKA-ANKERSEN
# =============================================================================

class TestYamanakaAnkersen:

    @pytest.mark.parametrize("theta0", [0.0, 1.0, 2.5, 4.0])
    def test_zero_span_is_identity(self, eccentric_elements, theta0):
        phi = ya_stm(eccentric_elements, theta0, theta0, 0.0)
        np.testing.assert_allclose(phi, np.eye(6), atol=1e-9)

    def test_reduces_to_hcw_for_circular_chief(self, circular_elements, rng):
        ya = YamanakaAnkersenPropagator(circular_elements)
        hcw = HCWPropagator(circular_elements)

        for _ in range(10):
            state = _random_state(rng)
            theta0 = rng.uniform(0.0, 2 * np.pi)
            dt = rng.uniform(100.0, 8000.0)
            theta_f = ya.phase_after(theta0, dt)

            a = ya.propagate(state, theta0, theta_f, dt)
            b = hcw.propagate(state, theta0, hcw.phase_after(theta0, dt), dt)

            np.testing.assert_allclose(a.position, b.position, atol=1e-6)
            np.testing.assert_allclose(a.velocity, b.velocity, atol=1e-9)

    def test_chained_spans_compose(self, eccentric_elements, rng):
        prop = YamanakaAnkersenPropagator(eccentric_elements)
        state = _random_state(rng)
        theta0 = 0.3

        theta1 = prop.phase_after(theta0, 1500.0)
        theta2 = prop.phase_after(theta1, 2500.0)
        mid = prop.propagate(state, theta0, theta1, 1500.0)
        two_step = prop.propagate(mid, theta1, theta2, 2500.0)

        one_step = prop.propagate(state, theta0, prop.phase_after(theta0, 4000.0), 4000.0)

        np.testing.assert_allclose(two_step.position, one_step.position, atol=1e-6)
        np.testing.assert_allclose(two_step.velocity, one_step.velocity, atol=1e-9)

    def test_cross_track_motion_decouples(self, elements):
        prop = YamanakaAnkersenPropagator(elements)
        state = RelativeState(position=[0.0, 0.0, 100.0], velocity=[0.0, 0.0, 0.0])
        theta_f = prop.phase_after(0.0, 1000.0)
        out = prop.propagate(state, 0.0, theta_f, 1000.0)
        assert out.radial == pytest.approx(0.0, abs=1e-9)
        assert out.in_track == pytest.approx(0.0, abs=1e-9)
        assert abs(out.cross_track) <= 100.0 * (1.0 + 2.5 * elements.eccentricity)


# =============================================================================
# ADAPTER
# =============================================================================

class TestPropagatorAdapter:

    def test_linearity(self, ya, rng):
        a = _random_state(rng)
        b = _random_state(rng)
        theta_f = ya.phase_after(0.5, 1800.0)

        combined = RelativeState.from_vector(2.0 * a.state_vector - 3.0 * b.state_vector)
        lhs = ya.propagate(combined, 0.5, theta_f, 1800.0).state_vector
        rhs = (2.0 * ya.propagate(a, 0.5, theta_f, 1800.0).state_vector
               - 3.0 * ya.propagate(b, 0.5, theta_f, 1800.0).state_vector)
        np.testing.assert_allclose(lhs, rhs, atol=1e-8)

    def test_ya_frame_output(self, ya, rng):
        state = _random_state(rng)
        theta_f = ya.phase_after(0.0, 900.0)
        ric = ya.propagate(state, 0.0, theta_f, 900.0)
        in_ya = ya.propagate(state, 0.0, theta_f, 900.0, frame=FrameType.YA)
        np.testing.assert_allclose(in_ya.state_vector, ric_to_ya(ric.state_vector))

    def test_hcw_phase_is_uniform(self, hcw):
        assert hcw.phase_after(1.0, 100.0) == pytest.approx(1.0 + hcw.mean_motion * 100.0)

    def test_orbit_constants_come_from_elements(self, ya, hcw, elements, circular_elements):
        assert ya.period == orbital_period(elements)
        assert ya.mean_motion == mean_motion(elements)
        assert hcw.period == orbital_period(circular_elements)
        assert hcw.mean_motion == mean_motion(circular_elements)

    def test_input_state_is_not_modified(self, ya):
        state = RelativeState(position=[100.0, 200.0, 300.0], velocity=[0.1, 0.2, 0.3])
        ya.propagate(state, 0.0, ya.phase_after(0.0, 600.0), 600.0)
        np.testing.assert_array_equal(state.position, [100.0, 200.0, 300.0])
        with pytest.raises(ValueError):
            state.position[0] = 1.0


# =============================================================================
# FRAMES
# =============================================================================

class TestFrames:

    def test_ric_to_ya_axes(self):
        rv = np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0])
        np.testing.assert_array_equal(ric_to_ya(rv), [2.0, -3.0, -1.0, 5.0, -6.0, -4.0])

    def test_ya_round_trip(self, rng):
        rv = rng.normal(size=6)
        np.testing.assert_allclose(ya_to_ric(ric_to_ya(rv)), rv)

    def test_scene_axes(self):
        scene = to_scene(np.array([[100.0, 200.0, 300.0]]), scale=0.01)
        np.testing.assert_allclose(scene, [[2.0, 1.0, 3.0]])
        np.testing.assert_allclose(from_scene(scene, scale=0.01), [[100.0, 200.0, 300.0]])
