"""
Feedback controllers queried during a rollout.

A controller maps (t, x) to a control input and can print a self-report
when a rollout fails numerically.
"""

import sys
from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence, TextIO

import numpy as np

from .display import format_vector


class ControllerBase(ABC):
    """Interface of a feedback controller u = pi(t, x)."""

    @abstractmethod
    def compute_input(self, t: float, state: np.ndarray) -> np.ndarray:
        """Compute the control input at time t and state x."""

    def display(self, stream: Optional[TextIO] = None) -> None:
        """Print a diagnostic self-report."""
        if stream is None:
            stream = sys.stderr
        stream.write(f"{self}\n")
        stream.flush()

    def __call__(self, t: float, state: np.ndarray) -> np.ndarray:
        return self.compute_input(t, state)


class LinearController(ControllerBase):
    """Time-varying affine controller u(t, x) = uff(t) + K(t) x.

    The feedforward and gain stocks are linearly interpolated between time
    stamps and held constant outside of them.
    """

    def __init__(
        self,
        time_stamps: Sequence[float],
        feedforward: Sequence[np.ndarray],
        gains: Sequence[np.ndarray],
    ):
        """Initialize linear controller.

        Args:
            time_stamps: Ascending time stamps of the stock, length K
            feedforward: Feedforward inputs, shape (K, input_dim)
            gains: Feedback gains, shape (K, input_dim, state_dim)
        """
        self.time_stamps = np.asarray(time_stamps, dtype=np.float64).reshape(-1)
        self.feedforward = np.asarray(feedforward, dtype=np.float64)
        self.gains = np.asarray(gains, dtype=np.float64)

        if len(self.time_stamps) == 0:
            raise ValueError("Controller needs at least one time stamp")
        if np.any(np.diff(self.time_stamps) < 0):
            raise ValueError("Controller time stamps must be ascending")
        if self.feedforward.ndim == 1:
            self.feedforward = self.feedforward.reshape(len(self.time_stamps), -1)
        if len(self.feedforward) != len(self.time_stamps):
            raise ValueError("Feedforward stock must match time stamps")
        if self.gains.ndim != 3 or len(self.gains) != len(self.time_stamps):
            raise ValueError("Gain stock must have shape (K, input_dim, state_dim)")
        if self.gains.shape[1] != self.feedforward.shape[1]:
            raise ValueError("Gain and feedforward input dimensions differ")

    @property
    def state_dim(self) -> int:
        return self.gains.shape[2]

    @property
    def input_dim(self) -> int:
        return self.gains.shape[1]

    def _interpolate(self, t: float, stock: np.ndarray) -> np.ndarray:
        if len(self.time_stamps) == 1:
            return stock[0]
        flat = stock.reshape(len(self.time_stamps), -1)
        values = [np.interp(t, self.time_stamps, flat[:, j]) for j in range(flat.shape[1])]
        return np.array(values).reshape(stock.shape[1:])

    def compute_input(self, t: float, state: np.ndarray) -> np.ndarray:
        uff = self._interpolate(t, self.feedforward)
        k = self._interpolate(t, self.gains)
        return uff + k @ np.asarray(state, dtype=np.float64)

    def display(self, stream: Optional[TextIO] = None) -> None:
        """Print the controller stock."""
        if stream is None:
            stream = sys.stderr
        lines = [f"{self}"]
        for t, uff, k in zip(self.time_stamps, self.feedforward, self.gains):
            lines.append(f"Time: {t:.6g}")
            lines.append(f"  uff: {format_vector(uff)}")
            lines.append(f"  K:   {format_vector(k)}")
        stream.write("\n".join(lines) + "\n")
        stream.flush()

    def __str__(self) -> str:
        return (
            f"LinearController (state_dim={self.state_dim}, input_dim={self.input_dim}, "
            f"{len(self.time_stamps)} time stamps)"
        )


class FunctionController(ControllerBase):
    """Controller backed by a plain callable fn(t, x) -> u."""

    def __init__(self, fn: Callable[[float, np.ndarray], np.ndarray], name: str = "function"):
        self.fn = fn
        self.name = name

    def compute_input(self, t: float, state: np.ndarray) -> np.ndarray:
        return np.atleast_1d(np.asarray(self.fn(t, state), dtype=np.float64))

    def __str__(self) -> str:
        return f"FunctionController ({self.name})"
