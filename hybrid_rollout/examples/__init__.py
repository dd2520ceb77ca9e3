"""Example switched systems."""

from .linear_system import LinearSystem
from .thermostat import ScheduledThermostat

__all__ = [
    "LinearSystem",
    "ScheduledThermostat",
]
