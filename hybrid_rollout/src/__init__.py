"""
Core modules for hybrid rollouts.

This module provides the interval builder, the rollout orchestrator, the
stability supervisor and the diagnostic dump, together with reference
controllers, a scipy integration routine and plotting.
"""

from .config import RolloutSettings, config
from .controllers import ControllerBase, FunctionController, LinearController
from .display import display_trajectory
from .errors import IntegrationError, InvalidHorizon, NumericalInstability, RolloutError
from .integrators import ScipyIntegrator
from .plot_utils import RolloutPlotter
from .rollout import Rollout
from .rollout_time import TimeInterval, build_time_intervals, weak_epsilon
from .rollout_trajectory import ModelData, RolloutTrajectory, TrajectorySegment
from .stability import check_numerical_stability, find_first_non_finite
from .switched_system import SwitchedSystem

__all__ = [
    # Core classes
    "Rollout",
    "RolloutTrajectory",
    "TrajectorySegment",
    "ModelData",
    "TimeInterval",
    "SwitchedSystem",
    "ScipyIntegrator",
    # Interval building and supervision
    "build_time_intervals",
    "weak_epsilon",
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
    # Visualization
    "RolloutPlotter",
    # Config
    "RolloutSettings",
    "config",
]
