"""
Waypoint plan validation.

Checks a candidate waypoint sequence against separation and Δv limits.
Findings are advisory data; nothing is raised and planning is never
blocked. Callers gate execution on an empty issue list.
"""

from __future__ import annotations

import logging

import numpy as np
from typing import Optional, Sequence

from ..core.types import (
    Waypoint, ManeuverLeg, ValidationIssue, ValidationIssueType, as_vector3
)
from ..core.config import GuidanceConfig

logger = logging.getLogger(__name__)


def _distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(b - a))


def validate_waypoints(current_position: np.ndarray,
                       waypoints: Sequence[Waypoint],
                       legs: Sequence[ManeuverLeg],
                       config: Optional[GuidanceConfig] = None
                       ) -> list[ValidationIssue]:
    """Collect every separation and Δv issue in a waypoint plan.

    For waypoint i, ``prev`` is the current position when i == 0 and
    waypoint i-1 otherwise.
        too_close:     |prev − wp_i| below the minimum separation (index i)
        overlapping:   |wp_i − wp_j| below the minimum for a later,
                       non-adjacent waypoint j (index j)
        high_delta_v:  leg i departure + arrival Δv above the ceiling

    Adjacent pairs are left to too_close. Checking them for overlap as
    well would report one close pair twice, once under each kind.

    Args:
        current_position: Deputy position [m].
        waypoints: Ordered waypoints.
        legs: Planned legs; may be shorter than ``waypoints`` (or empty)
            when no plan is available yet.
        config: Guidance configuration. Defaults to GuidanceConfig().

    Returns:
        All issues found, in waypoint order.
    """
    cfg = config if config is not None else GuidanceConfig()
    min_sep = cfg.min_waypoint_separation_m
    issues = []

    positions = [wp.position for wp in waypoints]
    current = as_vector3(current_position)

    for i, position in enumerate(positions):
        prev = current if i == 0 else positions[i - 1]

        dist = _distance(prev, position)
        if dist < min_sep:
            issues.append(ValidationIssue(
                kind=ValidationIssueType.TOO_CLOSE,
                waypoint_index=i,
                message=(f"Waypoint {i + 1} is too close "
                         f"({dist:.1f}m < {min_sep:g}m minimum)"),
            ))

        for j in range(i + 2, len(positions)):
            other = _distance(position, positions[j])
            if other < min_sep:
                issues.append(ValidationIssue(
                    kind=ValidationIssueType.OVERLAPPING,
                    waypoint_index=j,
                    message=(f"Waypoints {i + 1} and {j + 1} are too close "
                             f"({other:.1f}m apart)"),
                ))

        if i < len(legs):
            dv = legs[i].total_magnitude
            if dv > cfg.max_leg_delta_v_m_s:
                issues.append(ValidationIssue(
                    kind=ValidationIssueType.HIGH_DELTA_V,
                    waypoint_index=i,
                    message=(f"Leg {i + 1} requires high Δv "
                             f"({dv:.2f} m/s > {cfg.max_leg_delta_v_m_s:g} m/s limit)"),
                ))

    if issues:
        logger.debug("Waypoint validation found %d issue(s)", len(issues))
    return issues


def can_execute(issues: Sequence[ValidationIssue]) -> bool:
    """Execution policy: a plan may start only with no outstanding issues."""
    return len(issues) == 0
