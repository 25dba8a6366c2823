"""
Exceptions raised by the guidance core.

Validation findings are never raised; they are returned as
:class:`~rpo_guidance.core.types.ValidationIssue` records.
"""

from __future__ import annotations


class SingularTargetingError(RuntimeError):
    """The velocity-to-position transition block cannot be inverted.

    Raised when the requested transfer time does not give three-axis
    controllability at the current geometry (e.g. a transfer of exactly
    one orbital period). The caller must choose a different transfer time.

    Attributes:
        determinant: det(Phi_rv) that failed the tolerance check [s³].
        transfer_time_s: Requested transfer time [s].
    """

    def __init__(self, determinant: float, transfer_time_s: float):
        self.determinant = determinant
        self.transfer_time_s = transfer_time_s
        super().__init__(
            f"Phi_rv is singular or near-singular "
            f"(det={determinant:.3e}, transfer_time={transfer_time_s:.1f} s)"
        )


class InvalidQueueStateError(RuntimeError):
    """A leg transition referenced a waypoint missing from the execution snapshot.

    By the time this is raised the maneuver queue has already been
    destroyed; no burn is issued.
    """
