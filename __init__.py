"""
RPO Waypoint Guidance
=====================
Impulsive maneuver planning and execution for moving a deputy spacecraft
through a sequence of relative waypoints around a chief spacecraft.

Architecture:
    - Linear relative-motion propagators (Yamanaka-Ankersen, HCW) behind
      a common adapter
    - Transition matrix extraction by finite differencing of the propagator
    - Single-burn rendezvous targeting (exact two-point solve)
    - Leg planning with arrival burns that null velocity at each waypoint
    - Waypoint validation against separation and delta-v limits
    - Multi-leg queue state machine that re-solves each leg as it begins
    - Closed-form forced-motion circumnavigation
    - Trajectory sampling for previews and display
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
