"""
Scheduled Thermostat Example

A room heated by a heater that is switched on and off at scheduled times,
with a feedback controller modulating the heater power.

System:
- State: [z, q] (temperature, heater mode)
- Continuous dynamics: z' = -z + z₀ + Δz·q·u, q' = 0
- Events: scheduled switching times
- Jump map: [z, q] → [z, 1-q] (toggle heater mode)
"""

import numpy as np

from ..src.controllers import LinearController
from ..src.switched_system import SwitchedSystem


def ode_fun(t: float, state: np.ndarray, u: np.ndarray, thermostat) -> np.ndarray:
    """
    Continuous dynamics for the thermostat.

    Args:
        t: Time (unused, autonomous system)
        state: [temperature, heater_mode]
        u: [heater_power] in [0, 1] nominally
        thermostat: ScheduledThermostat instance with parameters

    Returns:
        Time derivatives [dz/dt, dq/dt] = [-z + z₀ + Δz·q·u, 0]
    """
    z, q = state
    dzdt = -z + thermostat.z0 + thermostat.zdelta * q * u[0]
    return np.array([dzdt, 0.0])


def jump_map(t: float, state: np.ndarray) -> np.ndarray:
    """
    Toggle the heater mode at a scheduled event.

    Args:
        t: Event time (unused)
        state: [temperature, heater_mode] before the event

    Returns:
        Post-event state [z, 1-q]
    """
    z, q = state
    q_new = 1.0 if 1.0 - q > 0.5 else 0.0
    return np.array([z, q_new])


class ScheduledThermostat:
    """Thermostat whose heater mode toggles at scheduled event times."""

    def __init__(
        self,
        z0: float = 60.0,  # Base temperature
        zdelta: float = 30.0,  # Temperature increment with the heater at full power
        z_ref: float = 75.0,  # Temperature the controller regulates towards
        gain: float = 0.2,  # Proportional gain on temperature error
    ):
        self.z0 = z0
        self.zdelta = zdelta
        self.z_ref = z_ref
        self.gain = gain

        self.system = self._create_system()

    def _create_system(self) -> SwitchedSystem:
        """Create the switched system with closures capturing self."""

        def ode(t: float, state: np.ndarray, u: np.ndarray) -> np.ndarray:
            return ode_fun(t, state, u, self)

        return SwitchedSystem(ode=ode, jump_map=jump_map, state_dim=2, input_dim=1)

    def create_controller(self, init_time: float, final_time: float) -> LinearController:
        """Proportional controller u = 0.5 + gain * (z_ref - z), constant over time."""
        feedforward = np.full((2, 1), 0.5 + self.gain * self.z_ref)
        gains = np.zeros((2, 1, 2))
        gains[:, 0, 0] = -self.gain
        return LinearController([init_time, final_time], feedforward, gains)
