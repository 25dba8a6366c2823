"""
Tests for leg planning and waypoint validation.
"""

import numpy as np
import pytest

from rpo_guidance.core.types import (
    RelativeState, Waypoint, ManeuverLeg, ValidationIssueType
)
from rpo_guidance.core.config import GuidanceConfig
from rpo_guidance.maneuvers.legs import LegPlanner, leg_delta_v, total_delta_v
from rpo_guidance.maneuvers.validation import validate_waypoints, can_execute


def _leg(dv, arrival_dv, target=(0.0, 0.0, 0.0), transfer_time=600.0):
    return ManeuverLeg(target_position=target, transfer_time=transfer_time,
                       delta_v=dv, arrival_delta_v=arrival_dv)


# =============================================================================
# LEG PLANNER
# =============================================================================

class TestLegPlanner:

    def test_transfer_time_scales_with_distance(self, ya, config):
        planner = LegPlanner(ya, config)
        t = planner.transfer_time([0.0, 0.0, 0.0], [0.0, -600.0, 0.0])
        assert t == pytest.approx(600.0 / config.closing_rate_m_s)

    def test_transfer_time_floor(self, ya, config):
        planner = LegPlanner(ya, config)
        assert planner.transfer_time([0.0, 0.0, 0.0], [1.0, 0.0, 0.0]) == \
            config.min_transfer_time_s
        assert planner.transfer_time([5.0, 5.0, 5.0], [5.0, 5.0, 5.0]) == \
            config.min_transfer_time_s

    def test_arrival_burn_nulls_velocity(self, ya, origin_state):
        planner = LegPlanner(ya)
        plan = planner.plan_leg(origin_state, [0.0, -600.0, 0.0], 0.0)
        leg = plan.leg

        arrival_theta = ya.phase_after(0.0, leg.transfer_time)
        arrival = ya.propagate(origin_state.with_burn(leg.delta_v),
                               0.0, arrival_theta, leg.transfer_time)

        np.testing.assert_allclose(arrival.position, [0.0, -600.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(arrival.velocity + leg.arrival_delta_v,
                                   np.zeros(3), atol=1e-12)
        np.testing.assert_array_equal(plan.arrival_state.velocity, np.zeros(3))
        assert plan.arrival_theta == pytest.approx(arrival_theta)

    def test_sequence_chains_from_stationary_arrivals(self, ya, origin_state, vbar_waypoints):
        planner = LegPlanner(ya)
        legs = planner.plan_sequence(origin_state, vbar_waypoints, 0.0)
        assert len(legs) == 3

        state, theta = origin_state, 0.0
        for leg, wp in zip(legs, vbar_waypoints):
            np.testing.assert_array_equal(leg.target_position, wp.position)
            theta_f = ya.phase_after(theta, leg.transfer_time)
            arrival = ya.propagate(state.with_burn(leg.delta_v), theta,
                                   theta_f, leg.transfer_time)
            np.testing.assert_allclose(arrival.position, wp.position, atol=1e-6)
            state, theta = RelativeState.stationary(arrival.position), theta_f

    def test_empty_sequence(self, ya, origin_state):
        assert LegPlanner(ya).plan_sequence(origin_state, [], 0.0) == []

    def test_delta_v_totals(self):
        legs = [
            _leg([3.0, 4.0, 0.0], [0.0, 0.0, 1.0]),
            _leg([0.0, 0.0, 0.5], [0.0, 0.5, 0.0]),
        ]
        assert leg_delta_v(legs[0]) == pytest.approx(6.0)
        assert total_delta_v(legs) == pytest.approx(7.0)
        assert total_delta_v([]) == 0.0


# =============================================================================
# VALIDATION
# =============================================================================

class TestValidation:

    def test_well_spaced_plan_is_clean(self, ya, origin_state, vbar_waypoints):
        legs = LegPlanner(ya).plan_sequence(origin_state, vbar_waypoints, 0.0)
        issues = validate_waypoints(origin_state.position, vbar_waypoints, legs)
        assert issues == []
        assert can_execute(issues)

    def test_waypoint_moved_onto_previous_is_too_close(self, ya, origin_state, vbar_waypoints):
        waypoints = list(vbar_waypoints)
        waypoints[2] = Waypoint(id="wp3", position=[0.0, -1197.0, 0.0])
        legs = LegPlanner(ya).plan_sequence(origin_state, waypoints, 0.0)

        issues = validate_waypoints(origin_state.position, waypoints, legs)

        assert len(issues) == 1
        assert issues[0].kind is ValidationIssueType.TOO_CLOSE
        assert issues[0].waypoint_index == 2
        assert issues[0].message == "Waypoint 3 is too close (3.0m < 10m minimum)"
        assert not can_execute(issues)

    def test_first_waypoint_checked_against_current_position(self):
        waypoints = [Waypoint(id="a", position=[0.0, -4.0, 0.0])]
        issues = validate_waypoints([0.0, 0.0, 0.0], waypoints, [])
        assert [(i.kind, i.waypoint_index) for i in issues] == \
            [(ValidationIssueType.TOO_CLOSE, 0)]

    def test_non_adjacent_overlap(self):
        waypoints = [
            Waypoint(id="a", position=[0.0, -500.0, 0.0]),
            Waypoint(id="b", position=[0.0, -1000.0, 0.0]),
            Waypoint(id="c", position=[0.0, -505.0, 0.0]),
        ]
        issues = validate_waypoints([0.0, 0.0, 0.0], waypoints, [])

        assert len(issues) == 1
        assert issues[0].kind is ValidationIssueType.OVERLAPPING
        assert issues[0].waypoint_index == 2
        assert issues[0].message == "Waypoints 1 and 3 are too close (5.0m apart)"

    def test_adjacent_pair_reported_once_as_too_close(self):
        waypoints = [
            Waypoint(id="a", position=[0.0, -500.0, 0.0]),
            Waypoint(id="b", position=[0.0, -503.0, 0.0]),
        ]
        issues = validate_waypoints([0.0, 0.0, 0.0], waypoints, [])

        assert [(i.kind, i.waypoint_index) for i in issues] == \
            [(ValidationIssueType.TOO_CLOSE, 1)]

    def test_high_delta_v(self):
        waypoints = [
            Waypoint(id="a", position=[0.0, -500.0, 0.0]),
            Waypoint(id="b", position=[0.0, -1000.0, 0.0]),
        ]
        legs = [
            _leg([0.1, 0.0, 0.0], [0.1, 0.0, 0.0]),
            _leg([4.0, 0.0, 0.0], [0.0, 1.5, 0.0]),
        ]
        issues = validate_waypoints([0.0, 0.0, 0.0], waypoints, legs)

        assert len(issues) == 1
        assert issues[0].kind is ValidationIssueType.HIGH_DELTA_V
        assert issues[0].waypoint_index == 1
        assert issues[0].message == "Leg 2 requires high Δv (5.50 m/s > 5 m/s limit)"

    def test_missing_legs_skip_delta_v_check(self, vbar_waypoints):
        assert validate_waypoints([0.0, 0.0, 0.0], vbar_waypoints, []) == []

    def test_limits_come_from_config(self, vbar_waypoints):
        cfg = GuidanceConfig(min_waypoint_separation_m=700.0)
        issues = validate_waypoints([0.0, 0.0, 0.0], vbar_waypoints, [], cfg)
        assert [i.waypoint_index for i in issues] == [0, 1, 2]
        assert all(i.kind is ValidationIssueType.TOO_CLOSE for i in issues)

    def test_issue_labels(self):
        assert ValidationIssueType.TOO_CLOSE.value == "too_close"
        assert ValidationIssueType.OVERLAPPING.value == "overlapping"
        assert ValidationIssueType.HIGH_DELTA_V.value == "high_delta_v"
