"""
Rollout orchestration for switched systems under a feedback controller.

This module provides the Rollout class that splits the horizon at the event
times, hands the sub-intervals to an integration routine and validates the
assembled trajectory.
"""

from typing import TYPE_CHECKING, Callable, Optional, Sequence, TextIO

import numpy as np

from .config import RolloutSettings, get_default_rollout_settings
from .display import display_trajectory
from .errors import IntegrationError
from .integrators import ScipyIntegrator
from .rollout_time import TimeInterval, build_time_intervals
from .rollout_trajectory import RolloutTrajectory
from .stability import check_numerical_stability

if TYPE_CHECKING:
    from .controllers import ControllerBase
    from .switched_system import SwitchedSystem

IntegrationRoutine = Callable[..., RolloutTrajectory]


class Rollout:
    """Forward simulation of a controlled switched system over a horizon.

    The integration strategy is injected: any callable
    ``integrate(intervals, initial_state, controller, settings, model_data)``
    returning a RolloutTrajectory can be used.
    """

    def __init__(
        self,
        integrate: IntegrationRoutine,
        settings: Optional[RolloutSettings] = None,
        stream: Optional[TextIO] = None,
    ):
        """Initialize rollout.

        Args:
            integrate: Integration routine called with the sub-intervals
            settings: Rollout settings; a copy of config.rollout if None
            stream: Diagnostic stream for failure dumps, defaults to sys.stderr
        """
        self.integrate = integrate
        self.settings = settings if settings is not None else get_default_rollout_settings()
        self.stream = stream

    @classmethod
    def time_triggered(
        cls,
        system: "SwitchedSystem",
        settings: Optional[RolloutSettings] = None,
        stream: Optional[TextIO] = None,
    ) -> "Rollout":
        """Create a rollout that integrates the system with a scipy OdeSolver."""
        return cls(ScipyIntegrator(system), settings=settings, stream=stream)

    def run(
        self,
        init_time: float,
        initial_state: np.ndarray,
        final_time: float,
        controller: "ControllerBase",
        event_times: Sequence[float] = (),
        model_data: bool = False,
    ) -> RolloutTrajectory:
        """Roll out the controlled system from init_time to final_time.

        Args:
            init_time: Start of the horizon
            initial_state: State at init_time
            final_time: End of the horizon
            controller: Feedback controller
            event_times: Ascending event times, duplicates allowed
            model_data: Whether the integrator should record ModelData

        Returns:
            RolloutTrajectory for the full horizon

        Raises:
            InvalidHorizon: if init_time > final_time
            NumericalInstability: if a non-finite state or input was produced
            IntegrationError: if the integration routine failed otherwise
        """
        intervals = build_time_intervals(init_time, final_time, event_times)
        return self.run_intervals(intervals, initial_state, controller, model_data)

    def run_intervals(
        self,
        intervals: Sequence[TimeInterval],
        initial_state: np.ndarray,
        controller: "ControllerBase",
        model_data: bool = False,
    ) -> RolloutTrajectory:
        """Integrate precomputed intervals and validate the result."""
        try:
            trajectory = self.integrate(
                intervals, initial_state, controller, self.settings, model_data=model_data,
            )
        except IntegrationError as error:
            # a blow-up is reported as an instability, with diagnostics
            if error.trajectory is not None:
                self.check_numerical_stability(controller, error.trajectory)
            raise

        self.check_numerical_stability(controller, trajectory)
        return trajectory

    def check_numerical_stability(
        self, controller: "ControllerBase", trajectory: RolloutTrajectory,
    ) -> None:
        """Validate a trajectory with this rollout's settings."""
        check_numerical_stability(trajectory, controller, self.settings, stream=self.stream)

    def display(self, trajectory: RolloutTrajectory, stream: Optional[TextIO] = None) -> None:
        """Write a diagnostic dump of a trajectory."""
        display_trajectory(
            trajectory.time,
            trajectory.post_event_indices,
            trajectory.states,
            trajectory.inputs,
            stream=stream if stream is not None else self.stream,
        )

    def __str__(self) -> str:
        return f"Rollout (integrator={type(self.integrate).__name__}, settings={self.settings})"
