"""
Waypoint set management.

Bounded, ordered collection of user-authored waypoints. Order defines
the leg sequence.
"""

from __future__ import annotations

import logging
import uuid

import numpy as np
from typing import Optional

from ..core.types import Waypoint, as_vector3
from ..core.constants import MAX_WAYPOINTS, DEFAULT_WAYPOINT_SPACING_M

logger = logging.getLogger(__name__)


def default_waypoint_position(current_position: Optional[np.ndarray],
                              index: int,
                              spacing_m: float = DEFAULT_WAYPOINT_SPACING_M
                              ) -> np.ndarray:
    """Placement for a new waypoint when none is given.

    Waypoint ``index`` (0-based) goes ``spacing_m * (index + 1)`` behind
    the deputy along -I, on the V-bar.
    """
    in_track = 0.0 if current_position is None else float(current_position[1])
    return np.array([0.0, in_track - spacing_m * (index + 1), 0.0])


class WaypointSet:
    """Ordered waypoints, bounded to ``max_waypoints``.

    Attributes:
        max_waypoints: Capacity.
    """

    def __init__(self, max_waypoints: int = MAX_WAYPOINTS):
        self.max_waypoints = max_waypoints
        self._waypoints: list[Waypoint] = []

    def __len__(self) -> int:
        return len(self._waypoints)

    def __iter__(self):
        return iter(self._waypoints)

    def __getitem__(self, index: int) -> Waypoint:
        return self._waypoints[index]

    @property
    def is_full(self) -> bool:
        return len(self._waypoints) >= self.max_waypoints

    def add(self, position: Optional[np.ndarray] = None,
            current_position: Optional[np.ndarray] = None
            ) -> Optional[Waypoint]:
        """Append a waypoint.

        Args:
            position: Waypoint position [m]. Defaults to
                :func:`default_waypoint_position`.
            current_position: Deputy position, used for default placement.

        Returns:
            The new waypoint, or None if the set is already full.
        """
        if self.is_full:
            logger.debug("Waypoint limit (%d) reached; add ignored", self.max_waypoints)
            return None
        if position is None:
            position = default_waypoint_position(current_position, len(self._waypoints))
        waypoint = Waypoint(id=uuid.uuid4().hex, position=position)
        self._waypoints.append(waypoint)
        return waypoint

    def update(self, waypoint_id: str, position: np.ndarray) -> Waypoint:
        """Move an existing waypoint.

        Raises:
            KeyError: No waypoint has this id.
        """
        for i, wp in enumerate(self._waypoints):
            if wp.id == waypoint_id:
                moved = Waypoint(id=wp.id, position=as_vector3(position))
                self._waypoints[i] = moved
                return moved
        raise KeyError(waypoint_id)

    def remove(self, waypoint_id: str) -> None:
        """Delete a waypoint.

        Raises:
            KeyError: No waypoint has this id.
        """
        for i, wp in enumerate(self._waypoints):
            if wp.id == waypoint_id:
                del self._waypoints[i]
                return
        raise KeyError(waypoint_id)

    def clear(self) -> None:
        self._waypoints.clear()

    def snapshot(self) -> tuple[Waypoint, ...]:
        """Immutable copy of the current ordering."""
        return tuple(self._waypoints)
