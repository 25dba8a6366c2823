"""
Simulation time advance.
"""

from __future__ import annotations

from ..core.types import TimeAdvance


def advance_simulation_time(current: float,
                            delta_seconds: float,
                            acceleration: float,
                            duration: float) -> TimeAdvance:
    """Advance elapsed time by a wall-clock step scaled by ``acceleration``.

    Args:
        current: Elapsed simulation time [s].
        delta_seconds: Wall-clock step [s].
        acceleration: Time acceleration factor.
        duration: Display duration; time is clamped here [s].

    Returns:
        TimeAdvance with the new time and whether the clamp was hit.
    """
    next_time = current + delta_seconds * acceleration
    if next_time >= duration:
        return TimeAdvance(time=duration, completed=True)
    return TimeAdvance(time=next_time, completed=False)
