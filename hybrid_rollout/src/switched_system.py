"""
Controlled switched system with caller-supplied dynamics and jump map.

This module provides the SwitchedSystem class consumed by the time-triggered
integrator: a flow map f(t, x, u) and a jump map applied at every event time.
"""

from typing import Callable, Optional

import numpy as np


class SwitchedSystem:
    """Represents a controlled switched system with time-triggered jumps.

    A switched system consists of:
    - Continuous dynamics: dx/dt = f(t, x, u)
    - Jump map: x_new = g(t, x_old), applied at each event time
    """

    def __init__(
        self,
        ode: Callable[[float, np.ndarray, np.ndarray], np.ndarray],
        jump_map: Optional[Callable[[float, np.ndarray], np.ndarray]] = None,
        state_dim: Optional[int] = None,
        input_dim: Optional[int] = None,
    ):
        """Initialize switched system.

        Args:
            ode: Continuous dynamics function f(t, x, u) -> dx/dt
            jump_map: Map g(t, x) -> x_new applied at events; identity if None
            state_dim: Expected state dimension, checked when given
            input_dim: Expected input dimension, checked when given
        """
        self.ode = ode
        self.jump_map = jump_map
        self.state_dim = state_dim
        self.input_dim = input_dim

    def check_dimensions(self, state: np.ndarray, u: Optional[np.ndarray] = None):
        """Raise ValueError if state or input dimensions do not match."""
        if self.state_dim is not None and len(state) != self.state_dim:
            raise ValueError(
                f"State dimension must be {self.state_dim}, got {len(state)}",
            )
        if u is not None and self.input_dim is not None and len(u) != self.input_dim:
            raise ValueError(
                f"Input dimension must be {self.input_dim}, got {len(u)}",
            )

    def evaluate_ode(self, t: float, state: np.ndarray, u: np.ndarray) -> np.ndarray:
        """Evaluate the flow map at given time, state and input.

        Args:
            t: Time point
            state: State vector
            u: Input vector

        Returns:
            Time derivative of state
        """
        return np.asarray(self.ode(t, state, u), dtype=np.float64)

    def apply_jump_map(self, t: float, state: np.ndarray) -> np.ndarray:
        """Apply jump map to state at an event time.

        Args:
            t: Event time
            state: State before jump

        Returns:
            State after jump
        """
        if self.jump_map is None:
            return np.array(state, dtype=np.float64)
        return np.asarray(self.jump_map(t, state), dtype=np.float64)

    def __str__(self) -> str:
        dims = "unknown dims" if self.state_dim is None else f"state_dim={self.state_dim}"
        return f"SwitchedSystem ({dims})"
