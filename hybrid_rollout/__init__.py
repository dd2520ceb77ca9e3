"""
Hybrid Rollout - time segmentation and stability supervision for rollouts
of switched dynamical systems.

This library provides tools for:
- Splitting a rollout horizon into per-mode sub-intervals at event times
- Rolling out a controlled switched system without integrating across events
- Detecting non-finite states and inputs, with truncation and diagnostics
- Visualization of rollout trajectories
"""

# Global configuration
from .src.config import RolloutSettings, config

# Controllers
from .src.controllers import ControllerBase, FunctionController, LinearController

# Diagnostics and supervision
from .src.display import display_trajectory
from .src.errors import IntegrationError, InvalidHorizon, NumericalInstability, RolloutError
from .src.integrators import ScipyIntegrator

# Visualization
from .src.plot_utils import RolloutPlotter

# Core
from .src.rollout import Rollout
from .src.rollout_time import TimeInterval, build_time_intervals, weak_epsilon
from .src.rollout_trajectory import ModelData, RolloutTrajectory, TrajectorySegment
from .src.stability import check_numerical_stability, find_first_non_finite
from .src.switched_system import SwitchedSystem

__version__ = "0.1.0"

__all__ = [
    # Core
    "Rollout",
    "RolloutTrajectory",
    "TrajectorySegment",
    "ModelData",
    "TimeInterval",
    "SwitchedSystem",
    "ScipyIntegrator",
    "build_time_intervals",
    "weak_epsilon",
    # Supervision
    "check_numerical_stability",
    "find_first_non_finite",
    "display_trajectory",
    # Controllers
    "ControllerBase",
    "LinearController",
    "FunctionController",
    # Errors
    "RolloutError",
    "InvalidHorizon",
    "NumericalInstability",
    "IntegrationError",
    # Plotting
    "RolloutPlotter",
    # Config
    "RolloutSettings",
    "config",
]
