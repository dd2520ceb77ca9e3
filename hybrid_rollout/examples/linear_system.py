"""
Linear System Example

A time-invariant linear system dx/dt = A x + B u whose dynamics do not change
at events, used to exercise the rollout machinery with a known closed form.
"""

import numpy as np

from ..src.controllers import LinearController
from ..src.switched_system import SwitchedSystem


class LinearSystem:
    """Linear system dx/dt = A x + B u with identity jump map."""

    def __init__(self, A: np.ndarray, B: np.ndarray):
        self.A = np.asarray(A, dtype=np.float64)
        self.B = np.asarray(B, dtype=np.float64).reshape(len(self.A), -1)

        if self.A.shape != (len(self.A), len(self.A)):
            raise ValueError("A must be square")

        self.system = SwitchedSystem(
            ode=self.flow_map,
            state_dim=self.state_dim,
            input_dim=self.input_dim,
        )

    @property
    def state_dim(self) -> int:
        return self.A.shape[0]

    @property
    def input_dim(self) -> int:
        return self.B.shape[1]

    def flow_map(self, t: float, state: np.ndarray, u: np.ndarray) -> np.ndarray:
        return self.A @ state + self.B @ u

    def constant_input_controller(
        self, init_time: float, final_time: float, value: float = 1.0,
    ) -> LinearController:
        """Open-loop controller applying a constant input over the horizon."""
        feedforward = np.full((2, self.input_dim), value)
        gains = np.zeros((2, self.input_dim, self.state_dim))
        return LinearController([init_time, final_time], feedforward, gains)
