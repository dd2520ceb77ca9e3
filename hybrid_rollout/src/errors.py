"""
Exception types raised by the rollout layer.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .rollout_trajectory import RolloutTrajectory


class RolloutError(Exception):
    """Base class for all rollout failures."""


class InvalidHorizon(RolloutError, ValueError):
    """Raised when the initial time is larger than the final time."""

    def __init__(self, init_time: float, final_time: float):
        self.init_time = init_time
        self.final_time = final_time
        super().__init__(
            f"Initial time should be less-equal to final time "
            f"(init_time={init_time}, final_time={final_time})",
        )


class NumericalInstability(RolloutError, RuntimeError):
    """Raised when a rollout produced a non-finite state or input.

    Attributes:
        time: Time stamp of the first offending sample
        index: Index of the first offending sample
        quantity: Either "state" or "input"
        trajectory: Trajectory truncated to samples 0..index inclusive
    """

    def __init__(
        self,
        time: float,
        index: int,
        quantity: str,
        trajectory: Optional["RolloutTrajectory"] = None,
    ):
        self.time = time
        self.index = index
        self.quantity = quantity
        self.trajectory = trajectory
        super().__init__(f"Rollout: {quantity} is not finite at time {time} [sec].")


class IntegrationError(RolloutError, RuntimeError):
    """Raised by an integration routine that could not cover its intervals.

    Attributes:
        trajectory: Samples integrated before the failure
    """

    def __init__(self, message: str, trajectory: Optional["RolloutTrajectory"] = None):
        self.trajectory = trajectory
        super().__init__(message)
